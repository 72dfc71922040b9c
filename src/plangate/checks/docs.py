"""Small helpers for reading workflow documents."""

from __future__ import annotations

from pathlib import Path


def read_text(path: Path) -> str | None:
    """Return file contents, or None when the file is missing or unreadable."""
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return None


def read_head(path: Path, max_lines: int) -> str:
    """First ``max_lines`` lines of a file; empty when unreadable."""
    text = read_text(path)
    if text is None:
        return ""
    return "\n".join(text.replace("\r\n", "\n").split("\n")[:max_lines])


def contains_all(text: str, *markers: str) -> bool:
    return all(m in text for m in markers)


def contains_any(text: str, *markers: str) -> bool:
    return any(m in text for m in markers)


def repo_dirs(root: Path) -> list[Path]:
    """Service repositories under ``<root>/repos``, sorted by name."""
    repos_root = root / "repos"
    if not repos_root.is_dir():
        return []
    return sorted(p for p in repos_root.iterdir() if p.is_dir())
