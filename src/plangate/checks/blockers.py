"""Release blocker ownership lint.

Every blocker referenced by a severe finding in the severity
classification must have a complete ownership row.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from plangate.checks.result import GateResult
from plangate.paths import is_file, under_root

DEFAULT_SEVERITY_FILES: tuple[str, ...] = (
    "docs/handoffs/release/severity-classification.md",
    "docs/release/severity-classification.md",
    "docs/severity-classification.md",
)

_FINDINGS_HEADING = "## findings"
_OWNERSHIP_HEADING = "## blocker ownership"
_INCOMPLETE_MARKERS = ("<", ">", "todo")


@dataclass
class Finding:
    severity: str
    blocker_id: str

    @property
    def requires_owner(self) -> bool:
        sev = self.severity.strip().lower()
        if self.blocker_id in ("", "-"):
            return False
        return sev in ("sev-1", "sev-2") or "blocked" in sev


@dataclass
class SeverityClassification:
    """Parsed findings and blocker ownership tables."""

    findings: list[Finding] = field(default_factory=list)
    ownership: dict[str, list[str]] = field(default_factory=dict)

    def required_blockers(self) -> list[str]:
        return sorted({f.blocker_id for f in self.findings if f.requires_owner})


def locate_severity_file(root: Path, explicit: str | None = None) -> Path:
    """Find the severity classification file.

    Raises:
        FileNotFoundError: If no candidate exists.
    """
    explicit = (explicit or "").strip()
    if explicit:
        path = under_root(root, explicit)
        if is_file(path):
            return path
        raise FileNotFoundError(f"severity file not found: {path.as_posix()}")

    for rel in DEFAULT_SEVERITY_FILES:
        candidate = under_root(root, rel)
        if is_file(candidate):
            return candidate
    raise FileNotFoundError("severity classification file not found in default locations")


def parse_table_row(line: str) -> list[str]:
    """Split a Markdown table row into trimmed cells."""
    trimmed = line.strip()
    if trimmed.startswith("|"):
        trimmed = trimmed[1:]
    if trimmed.endswith("|"):
        trimmed = trimmed[:-1]
    return [cell.strip() for cell in trimmed.split("|")]


def parse_severity_classification(text: str) -> SeverityClassification:
    """Read the ``## Findings`` and ``## Blocker Ownership`` tables."""
    result = SeverityClassification()
    section = ""
    for raw in text.splitlines():
        line = raw.strip()
        lower = line.lower()
        if lower == _FINDINGS_HEADING:
            section = "findings"
            continue
        if lower == _OWNERSHIP_HEADING:
            section = "ownership"
            continue
        if not line.startswith("|") or "---" in line:
            continue

        cells = parse_table_row(line)
        if len(cells) < 5:
            continue
        if section == "findings" and cells[0].lower() != "finding id":
            result.findings.append(Finding(severity=cells[2], blocker_id=cells[4]))
        elif section == "ownership" and cells[0].lower() != "blocker_id":
            result.ownership[cells[0]] = cells[1:5]
    return result


def row_complete(values: list[str]) -> bool:
    if len(values) < 4:
        return False
    for value in values:
        v = value.strip().lower()
        if v in ("", "-") or any(m in v for m in _INCOMPLETE_MARKERS):
            return False
    return True


def lint_blocker_ownership(root: Path | str, file: str | None = None) -> GateResult:
    """Check that every release blocker has a complete ownership row."""
    root = Path(root)
    try:
        path = locate_severity_file(root, file)
    except FileNotFoundError as e:
        return GateResult.blocked(issues=[str(e)])

    severity_file = path.as_posix()
    try:
        parsed = parse_severity_classification(path.read_text(encoding="utf-8", errors="replace"))
    except OSError as e:
        return GateResult.blocked(
            issues=[f"failed to parse severity file: {e}"],
            severity_file=severity_file,
        )

    required = parsed.required_blockers()
    issues: list[str] = []
    missing: list[str] = []
    for blocker_id in required:
        row = parsed.ownership.get(blocker_id)
        if row is None:
            missing.append(blocker_id)
        elif not row_complete(row):
            issues.append(f"blocker ownership incomplete for {blocker_id}")
    if missing:
        issues.append("missing blocker ownership rows")

    if issues:
        return GateResult.blocked(
            issues=issues,
            severity_file=severity_file,
            required_blockers=required,
            missing_blockers=sorted(missing),
        )
    return GateResult.passed(severity_file=severity_file, required_blockers=required)
