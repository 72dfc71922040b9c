"""Find the planning behavior profile under a target root."""

from __future__ import annotations

import logging
from pathlib import Path

from plangate.errors import ProfileNotFoundError
from plangate.paths import is_file, under_root

logger = logging.getLogger(__name__)

# Probed in order when no explicit profile is given or found
FALLBACK_CANDIDATES: tuple[str, ...] = (
    "docs/source/02-architecture/planning-behavior-profile.yaml",
    "docs/source/DemoArchitectureDocs/planning-behavior-profile.yaml",
    ".github/skills/local-mcp-setup/corporate-docs/planning-behavior-profile.yaml",
)


def candidate_paths(root: Path | str, explicit: str | None = None) -> list[Path]:
    """List every path probed for a profile, in precedence order."""
    root = Path(root)
    candidates: list[Path] = []
    explicit = (explicit or "").strip()
    if explicit:
        candidates.append(Path(explicit))
        candidates.append(root / explicit)
    candidates.extend(under_root(root, rel) for rel in FALLBACK_CANDIDATES)
    return candidates


def locate_profile(root: Path | str, explicit: str | None = None) -> Path:
    """Return the first existing profile file.

    Args:
        root: Target repository root.
        explicit: Optional caller-supplied path, tried as given and then
            joined to ``root`` before the fallback candidates.

    Returns:
        Path to the selected profile.

    Raises:
        ProfileNotFoundError: If no candidate is a regular file.
    """
    for candidate in candidate_paths(root, explicit):
        if is_file(candidate):
            logger.debug("profile source selected: %s", candidate)
            return candidate
        logger.debug("profile candidate missing: %s", candidate)
    raise ProfileNotFoundError()
