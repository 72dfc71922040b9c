"""End-to-end profile resolution: locate, parse, render, write."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from plangate.errors import ConfigurationError
from plangate.paths import under_root
from plangate.profile.locator import locate_profile
from plangate.profile.parser import read_profile
from plangate.profile.report import render_report

logger = logging.getLogger(__name__)

DEFAULT_OUT = "docs/planning-behavior-resolution.md"


@dataclass
class Resolution:
    """Outcome of one resolution run."""

    root: Path
    profile_path: Path
    out_path: Path
    values: dict[str, str] = field(default_factory=dict)
    report: str = ""


def resolve(
    root: Path | str | None,
    profile_file: str | None = None,
    out: str | None = DEFAULT_OUT,
    now: datetime | None = None,
) -> Resolution:
    """Resolve the planning behavior profile and write the report.

    Args:
        root: Target repository root.
        profile_file: Optional explicit profile path.
        out: Report path, absolute or relative to ``root``.
        now: Timestamp override for reproducible reports.

    Returns:
        Resolution describing what was read and written.

    Raises:
        ConfigurationError: If ``root`` or ``out`` is blank.
        ProfileNotFoundError: If no profile source exists.
        OSError: If the profile cannot be read or the report written.
    """
    if root is None or not str(root).strip():
        raise ConfigurationError("--target-root is required")
    root = Path(root).expanduser().absolute()

    profile_path = locate_profile(root, profile_file)

    out = (out or "").strip()
    if not out:
        raise ConfigurationError("--out cannot be empty")
    out_path = under_root(root, out)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    values = read_profile(profile_path)
    logger.debug("parsed %d scalar(s) from %s", len(values), profile_path)

    report = render_report(root, profile_path, values, now=now)
    out_path.write_text(report, encoding="utf-8")

    return Resolution(
        root=root,
        profile_path=profile_path,
        out_path=out_path,
        values=values,
        report=report,
    )
