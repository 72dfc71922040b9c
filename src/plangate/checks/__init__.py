"""Checks module — phase preconditions and document policy gates."""

from plangate.checks.result import GateResult
from plangate.checks.rules import load_phase_rules
from plangate.checks.phase import check_phase
from plangate.checks.blockers import lint_blocker_ownership
from plangate.checks.feedback import lint_feedback_tree
from plangate.checks.parity import check_adapter_parity

__all__ = [
    "GateResult",
    "load_phase_rules",
    "check_phase",
    "lint_blocker_ownership",
    "lint_feedback_tree",
    "check_adapter_parity",
]
