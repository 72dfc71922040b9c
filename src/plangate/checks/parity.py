"""Implementation parity check.

Adapters declared in the technology constraints (``adapter_id: x``) must
each have an implementation directory in one of the conventional
adapter roots.
"""

from __future__ import annotations

import re
from pathlib import Path

from plangate.checks.docs import repo_dirs
from plangate.checks.result import GateResult
from plangate.paths import under_root

DEFAULT_TC_FILE = "docs/technology-constraints.md"

ADAPTER_ROOTS: tuple[str, ...] = ("adapters", "src/adapters", "internal/adapters", "pkg/adapters")

_ADAPTER_LINE_RE = re.compile(r"(adapter_id|adaptor_id)\s*:\s*([a-zA-Z0-9._-]+)", re.IGNORECASE)


def parse_declared_adapters(text: str) -> list[str]:
    """Adapter ids declared in a document, lower-cased and sorted."""
    declared = set()
    for line in text.splitlines():
        m = _ADAPTER_LINE_RE.search(line)
        if m:
            declared.add(m.group(2).strip().lower())
    return sorted(declared)


def discover_implemented_adapters(root: Path) -> list[str]:
    """Adapter directory names found at the root and inside each service repo."""
    bases = [root] + repo_dirs(root)
    found = set()
    for base in bases:
        for rel in ADAPTER_ROOTS:
            adapter_root = under_root(base, rel)
            if not adapter_root.is_dir():
                continue
            for entry in adapter_root.iterdir():
                name = entry.name.strip().lower()
                if entry.is_dir() and name:
                    found.add(name)
    return sorted(found)


def check_adapter_parity(root: Path | str, tc_file: str | None = DEFAULT_TC_FILE) -> GateResult:
    """Compare declared adapters against implemented adapter directories."""
    root = Path(root)
    tc_file = (tc_file or "").strip()
    if not tc_file:
        return _blocked(["--tc-file cannot be empty"])

    tc_path = under_root(root, tc_file)
    try:
        expected = parse_declared_adapters(tc_path.read_text(encoding="utf-8", errors="replace"))
    except OSError as e:
        return _blocked([f"failed to parse expected adapters: {e}"])
    if not expected:
        return _blocked(["no adapter_id/adaptor_id entries found in technology constraints"])

    implemented = discover_implemented_adapters(root)
    missing = [a for a in expected if a not in implemented]
    undeclared = [a for a in implemented if a not in expected]

    if missing:
        return _blocked(["declared adapters missing implementation"], missing, undeclared)
    return GateResult.passed(
        expected_adapters=expected,
        implemented_adapters=implemented,
        undeclared_adapters=undeclared,
    )


def _blocked(issues: list[str], missing: list[str] | None = None, undeclared: list[str] | None = None) -> GateResult:
    return GateResult.blocked(
        issues=issues,
        missing_adapters=missing or [],
        undeclared_adapters=undeclared or [],
    )
