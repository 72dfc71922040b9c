"""Target-root path resolution.

Resolves the directory every checker works against. Uses environment
variables when available, falls back to the working directory.

Environment variables:
    PLANGATE_TARGET_ROOT — default target root for gate checks (default: cwd)
    PLANGATE_PHASE_RULES — alternative phase rules YAML file
"""

from __future__ import annotations

import os
from pathlib import Path

_BUNDLED_PHASE_RULES = Path(__file__).parent / "checks" / "phase-rules.yaml"


def target_root(raw: str | os.PathLike | None = None) -> Path:
    """Return the absolute target root.

    An explicit value wins, then ``PLANGATE_TARGET_ROOT``, then the
    current working directory.
    """
    value = str(raw).strip() if raw is not None else ""
    if not value:
        value = os.environ.get("PLANGATE_TARGET_ROOT", "").strip()
    if not value:
        return Path.cwd()
    return Path(value).expanduser().absolute()


def phase_rules_path() -> Path:
    """Return the path to the phase rules file."""
    env = os.environ.get("PLANGATE_PHASE_RULES")
    if env:
        return Path(env)
    return _BUNDLED_PHASE_RULES


def under_root(root: Path, rel: str | os.PathLike) -> Path:
    """Join a slash-separated relative path onto ``root``; absolute paths pass through."""
    candidate = Path(rel)
    if candidate.is_absolute():
        return candidate
    return root.joinpath(*str(rel).replace("\\", "/").split("/"))


def is_file(path: Path) -> bool:
    """True for existing regular files (directories do not count)."""
    try:
        return path.is_file()
    except OSError:
        return False


def rel_posix(root: Path, target: Path) -> str:
    """Render ``target`` relative to ``root`` with forward slashes.

    Targets outside ``root`` render as ``../`` paths; the absolute target is
    used only when no relative path exists (different drives).
    """
    try:
        return Path(os.path.relpath(target, root)).as_posix()
    except ValueError:
        return target.as_posix()
