"""Feedback tree policy lint.

``docs/feedback`` holds review feedback only. Draft deliverables
(plans, constraints, gates, ADRs, ...) placed there are violations.
"""

from __future__ import annotations

from pathlib import Path

from plangate.checks.docs import read_head
from plangate.checks.result import GateResult

BLOCKED_PATH_TOKENS: tuple[str, ...] = (
    "phase-gate",
    "implementation-plan",
    "technology-constraints",
    "traceability-matrix",
    "repo-topology-decision",
    "openapi-contract-plan",
    "product-intent",
    "requirements",
    "backlog",
    "severity-classification",
    "adr",
)

BLOCKED_TITLES: tuple[str, ...] = (
    "# implementation plan",
    "# technology constraints",
    "# traceability matrix",
    "# repo topology decision",
    "# openapi contract plan",
    "# product intent",
    "# requirements",
    "# backlog",
    "# phase gate",
    "# severity classification",
    "# architecture decision record",
)

FEEDBACK_NAME_TOKENS: tuple[str, ...] = ("feedback", "issue", "finding", "report")

HEAD_LINES = 40


def is_markdown(path: Path) -> bool:
    return path.name.lower().endswith((".md", ".markdown"))


def looks_like_feedback(path: Path) -> bool:
    name = path.name.lower()
    return name == "readme.md" or any(t in name for t in FEEDBACK_NAME_TOKENS)


def is_violation(root: Path, path: Path) -> bool:
    rel = path.relative_to(root).as_posix().lower()
    if any(token in rel for token in BLOCKED_PATH_TOKENS):
        return True
    head = read_head(path, HEAD_LINES).lower()
    return any(title in head for title in BLOCKED_TITLES)


def lint_feedback_tree(root: Path | str) -> GateResult:
    """Flag non-feedback deliverables stored under ``docs/feedback``."""
    root = Path(root)
    feedback_root = root / "docs" / "feedback"
    if not feedback_root.is_dir():
        return GateResult.passed(feedback_root=feedback_root.as_posix())

    violations = []
    for path in sorted(feedback_root.rglob("*")):
        if not path.is_file() or not is_markdown(path) or looks_like_feedback(path):
            continue
        if is_violation(root, path):
            violations.append(path.relative_to(root).as_posix())

    if violations:
        return GateResult.blocked(
            issues=["docs/feedback contains non-feedback draft deliverables"],
            violations=sorted(violations),
        )
    return GateResult.passed(feedback_root=feedback_root.as_posix())
