"""Parse the restricted key/value notation of planning behavior profiles.

Only scalar mappings are understood, nested by indentation:

    storage:
      cache_policy_required: "true"

becomes ``{"storage.cache_policy_required": "true"}``. Lists, multi-line
scalars, anchors and flow mappings are not modeled. Lines that cannot be
read as ``key: value`` are skipped without complaint.

A key without an inline value opens a nesting level. A later line whose
indentation is at or below that key's indentation closes it, so a file
with only top-level keys parses exactly like a flat ``key: value`` list.
"""

from __future__ import annotations

from pathlib import Path

_QUOTES = "\"'"


def _indent_width(line: str) -> int:
    return len(line) - len(line.lstrip(" \t"))


def parse_scalars(text: str) -> dict[str, str]:
    """Flatten profile text into a ``dotted.path -> scalar`` mapping."""
    values: dict[str, str] = {}
    parents: list[tuple[str, int]] = []

    for line in text.splitlines():
        trimmed = line.strip()
        if not trimmed or trimmed.startswith(("#", "-")):
            continue

        indent = _indent_width(line)
        while parents and parents[-1][1] >= indent:
            parents.pop()

        key, sep, value = trimmed.partition(":")
        key = key.strip()
        if not sep or not key:
            continue

        path = ".".join([segment for segment, _ in parents] + [key])
        value = value.strip().strip(_QUOTES)
        if not value:
            parents.append((key, indent))
            continue
        values[path] = value

    return values


def read_profile(path: Path | str) -> dict[str, str]:
    """Read and parse a profile file.

    Raises:
        OSError: If the file cannot be read.
    """
    return parse_scalars(Path(path).read_text(encoding="utf-8", errors="replace"))
