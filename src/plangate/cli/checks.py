"""Gate check CLI commands.

Each command prints exactly one JSON status line and returns 0 on PASS,
1 on BLOCKED.
"""

import argparse

from plangate.checks.result import GateResult
from plangate.paths import target_root


def _emit(result: GateResult) -> int:
    print(result.to_json())
    return result.exit_code


def cmd_check_phase(args: argparse.Namespace) -> int:
    import yaml

    from plangate.checks.phase import check_phase
    from plangate.checks.rules import load_phase_rules

    phase = (args.phase or "").strip()
    try:
        rules = load_phase_rules(args.rules)
    except (OSError, ValueError, yaml.YAMLError) as e:
        return _emit(GateResult.blocked(phase=phase, missing=[f"failed to load phase rules: {e}"]))

    result = check_phase(
        target_root(args.target_root),
        phase,
        rules=rules,
        enforce_sequence=args.enforce_sequence,
    )
    return _emit(result)


def cmd_check_blockers(args: argparse.Namespace) -> int:
    from plangate.checks.blockers import lint_blocker_ownership

    return _emit(lint_blocker_ownership(target_root(args.target_root), args.file))


def cmd_check_feedback(args: argparse.Namespace) -> int:
    from plangate.checks.feedback import lint_feedback_tree

    return _emit(lint_feedback_tree(target_root(args.target_root)))


def cmd_check_parity(args: argparse.Namespace) -> int:
    from plangate.checks.parity import check_adapter_parity

    return _emit(check_adapter_parity(target_root(args.target_root), args.tc_file))
