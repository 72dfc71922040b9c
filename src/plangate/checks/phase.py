"""Phase precondition gate.

Verifies that the documents a workflow phase depends on exist and carry
the approval markers the phase requires. Required files and the content
checks to run per phase come from phase-rules.yaml; the content checks
themselves are the functions registered in ``PHASE_CHECKS``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from plangate.checks.docs import contains_all, contains_any, read_text, repo_dirs
from plangate.checks.result import GateResult
from plangate.checks.rules import (
    get_checks,
    get_phase,
    get_prior_gate,
    get_repo_documentation_rules,
    get_repo_traceability_rules,
    get_required_files,
    load_phase_rules,
)
from plangate.paths import is_file, under_root

logger = logging.getLogger(__name__)

PhaseCheck = Callable[[Path, dict], list[str]]

SIGNOFF = "docs/plans/planning-signoff.md"
CONTROL_MATRIX = "docs/plans/control-applicability-matrix.md"
CONTRACT_PLAN = "docs/openapi-contract-plan.md"
MODEL_BOUNDARY = "docs/plans/model-boundary-classification.md"
CONTRACT_OWNERSHIP = "docs/openapi-contract-ownership.md"
INTENT_ACCOUNTABILITY = "docs/plans/intent-control-accountability.md"


def _upper(root: Path, rel: str) -> str | None:
    text = read_text(under_root(root, rel))
    return text.upper() if text is not None else None


def _approved(text: str) -> bool:
    return contains_all(text, "APPROVAL STATUS", "APPROVED")


# ── Content checks ────────────────────────────────────────────────


def check_openapi_spec(root: Path, rules: dict) -> list[str]:
    plan = read_text(under_root(root, CONTRACT_PLAN))
    if plan is None or not contains_any(plan.lower(), "openapi", "http"):
        return []
    openapi_dir = root / "docs" / "openapi"
    if openapi_dir.is_dir():
        for entry in openapi_dir.iterdir():
            if entry.is_file() and entry.suffix.lower() in (".yaml", ".yml"):
                return []
    return ["docs/openapi/*.yaml"]


def check_planning_signoff(root: Path, rules: dict) -> list[str]:
    text = _upper(root, SIGNOFF)
    if text is not None and "APPROVAL STATUS: APPROVED" in text:
        return []
    return [f"{SIGNOFF} (must include Approval Status: APPROVED)"]


def check_control_applicability_matrix(root: Path, rules: dict) -> list[str]:
    text = _upper(root, CONTROL_MATRIX)
    if text is not None and (
        contains_all(text, "APPLICABLE", "NOT-APPLICABLE", "OWNER", "RATIONALE")
        and _approved(text)
    ):
        return []
    return [
        f"{CONTROL_MATRIX} (must include APPLICABLE/NOT-APPLICABLE rows "
        "with Approval Status: APPROVED)"
    ]


def check_model_boundary_classification(root: Path, rules: dict) -> list[str]:
    required = False
    for rel in ("docs/plans/repo-change-plan.md", "docs/implementation-plan.md"):
        text = read_text(under_root(root, rel))
        if text and contains_any(text.lower(), "shared module", "shared-module", "shared contract dto"):
            required = True
            break
    if not required:
        return []

    text = _upper(root, MODEL_BOUNDARY)
    if text is not None and (
        contains_any(text, "DOMAIN_MODEL_INTERNAL", "SHARED_CONTRACT_DTO_DAO")
        and _approved(text)
    ):
        return []
    return [
        f"{MODEL_BOUNDARY} (required and must include Approval Status: APPROVED "
        "when shared-module stream exists)"
    ]


def check_shared_contract_ownership(root: Path, rules: dict) -> list[str]:
    plan = read_text(under_root(root, CONTRACT_PLAN))
    if plan is None:
        return []
    plan = plan.lower()
    if not (
        contains_all(plan, "client", "server")
        and contains_any(plan, "shared", "same contract")
    ):
        return []

    text = _upper(root, CONTRACT_OWNERSHIP)
    if text is not None and (
        contains_all(text, "CONTRACT BOUNDARY TYPE", "SOURCE OF TRUTH") and _approved(text)
    ):
        return []
    return [
        f"{CONTRACT_OWNERSHIP} (required and must include Approval Status: APPROVED "
        "for shared client/server contract dependency)"
    ]


def check_intent_control_accountability(root: Path, rules: dict) -> list[str]:
    matrix = _upper(root, CONTROL_MATRIX)
    if matrix is None or not contains_any(matrix, "PARTIAL", "SKIPPED"):
        return []

    text = _upper(root, INTENT_ACCOUNTABILITY)
    if text is not None and (
        contains_all(text, "OWNER", "REMEDIATION", "TARGET CLOSURE PHASE") and _approved(text)
    ):
        return []
    return [
        f"{INTENT_ACCOUNTABILITY} (required for PARTIAL/SKIPPED controls with "
        "owner/remediation/closure and Approval Status: APPROVED)"
    ]


def check_repo_documentation(root: Path, rules: dict) -> list[str]:
    """Per-repo README, CHANGELOG and implementation summary maturity."""
    doc_rules = get_repo_documentation_rules(rules)
    headings = doc_rules.get("readme_headings", []) or []
    changelog_section = doc_rules.get("changelog_section", "### Plan Reference")
    summary_sections = doc_rules.get("summary_sections", []) or []

    missing: list[str] = []
    for repo in repo_dirs(root):
        prefix = f"repos/{repo.name}"

        readme = read_text(repo / "README.md")
        if readme is None:
            missing.append(f"{prefix}/README.md")
        else:
            if "Starter scaffold repository generated by project bootstrap" in readme:
                missing.append(f"{prefix}/README.md (replace scaffold-only content)")
            if "<repo-name>" in readme:
                missing.append(f"{prefix}/README.md (replace template placeholders)")
            for heading in headings:
                if heading not in readme:
                    missing.append(f"{prefix}/README.md missing section {heading}")

        changelog = read_text(repo / "CHANGELOG.md")
        if changelog is None:
            missing.append(f"{prefix}/CHANGELOG.md")
        else:
            if "Initial scaffold" in changelog:
                missing.append(f"{prefix}/CHANGELOG.md (replace scaffold-only content)")
            if contains_any(changelog, "<version/tag>", "<change summary>"):
                missing.append(f"{prefix}/CHANGELOG.md (replace template placeholders)")
            if changelog_section not in changelog:
                missing.append(f"{prefix}/CHANGELOG.md missing section {changelog_section}")

        summary_rel = f"{prefix}/docs/current-state/implementation-summary.md"
        summary = read_text(repo / "docs" / "current-state" / "implementation-summary.md")
        if summary is None:
            missing.append(summary_rel)
        else:
            if not contains_all(summary, *summary_sections):
                missing.append(f"{summary_rel} missing required sections")
            if any(f"## {section}\n-" in summary for section in summary_sections):
                missing.append(f"{summary_rel} (replace placeholder bullets)")
    return missing


def check_repo_traceability(root: Path, rules: dict) -> list[str]:
    """Per-repo traceability pack and high-level diagram."""
    trace_rules = get_repo_traceability_rules(rules)
    required = trace_rules.get("required", []) or []
    sections = trace_rules.get("pack_sections", []) or []

    missing: list[str] = []
    for repo in repo_dirs(root):
        prefix = f"repos/{repo.name}"
        for rel in required:
            if not is_file(under_root(repo, rel)):
                missing.append(f"{prefix}/{rel}")
        pack = read_text(repo / "docs" / "handoffs" / "traceability-pack.md")
        if pack is None:
            continue
        for section in sections:
            if section not in pack:
                missing.append(f"{prefix}/docs/handoffs/traceability-pack.md missing section {section}")
    return missing


PHASE_CHECKS: dict[str, PhaseCheck] = {
    "openapi_spec": check_openapi_spec,
    "planning_signoff": check_planning_signoff,
    "control_applicability_matrix": check_control_applicability_matrix,
    "model_boundary_classification": check_model_boundary_classification,
    "shared_contract_ownership": check_shared_contract_ownership,
    "intent_control_accountability": check_intent_control_accountability,
    "repo_documentation": check_repo_documentation,
    "repo_traceability": check_repo_traceability,
}


def prior_gate_issue(root: Path, gate_rel: str) -> str:
    """Describe why the prior phase gate does not read PASS, or ''."""
    if not gate_rel:
        return ""
    text = read_text(under_root(root, gate_rel))
    if text is None:
        return gate_rel
    if "PASS" not in text.upper():
        return f"{gate_rel} (must indicate PASS when --enforce-sequence=true)"
    return ""


def check_phase(
    root: Path | str,
    phase: str = "01",
    rules: dict | None = None,
    enforce_sequence: bool = False,
) -> GateResult:
    """Evaluate the preconditions for one workflow phase.

    Args:
        root: Target repository root.
        phase: Phase identifier (``01``–``05`` with the bundled rules).
        rules: Phase rules dict. Loaded from default if None.
        enforce_sequence: Also require the prior phase gate to read PASS.

    Returns:
        GateResult listing every missing file or failed check.
    """
    if rules is None:
        rules = load_phase_rules()

    root = Path(root)
    phase = (phase or "").strip()
    phase_rules = get_phase(rules, phase)
    if phase_rules is None:
        return GateResult.blocked(phase=phase, missing=["unsupported phase value"])

    missing: list[str] = []
    for rel in get_required_files(phase_rules):
        if not is_file(under_root(root, rel)):
            missing.append(rel)

    for name in get_checks(phase_rules):
        check = PHASE_CHECKS.get(name)
        if check is None:
            raise ValueError(f"Unknown phase check: {name}")
        found = check(root, rules)
        logger.debug("phase %s check %s: %d issue(s)", phase, name, len(found))
        missing.extend(found)

    if enforce_sequence:
        issue = prior_gate_issue(root, get_prior_gate(phase_rules))
        if issue:
            missing.append(issue)

    if missing:
        return GateResult.blocked(phase=phase, missing=missing)
    return GateResult.passed(phase=phase)
