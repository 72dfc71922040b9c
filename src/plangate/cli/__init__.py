"""Unified CLI for plangate.

Usage:
    plangate profile resolve --target-root <path> [--profile-file <path>] [--out <path>]
    plangate check phase [--target-root <path>] [--phase 01..05] [--enforce-sequence] [--rules <path>]
    plangate check blockers [--target-root <path>] [--file <path>]
    plangate check feedback [--target-root <path>]
    plangate check parity [--target-root <path>] [--tc-file <path>]
"""

import argparse
import logging
import sys

from plangate.cli.checks import (
    cmd_check_blockers,
    cmd_check_feedback,
    cmd_check_parity,
    cmd_check_phase,
)
from plangate.cli.profile import cmd_profile_resolve
from plangate.checks.parity import DEFAULT_TC_FILE
from plangate.profile.resolver import DEFAULT_OUT


def _add_target_root(parser: argparse.ArgumentParser, required_help: str = "") -> None:
    parser.add_argument(
        "--target-root", default=None,
        help=required_help or "Target repository root (default: $PLANGATE_TARGET_ROOT or cwd)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="plangate",
        description="Planning workflow document gates and profile resolution",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging on stderr",
    )
    sub = parser.add_subparsers(dest="command")

    # profile
    prof = sub.add_parser("profile", help="Planning behavior profile operations")
    prof_sub = prof.add_subparsers(dest="subcommand")
    res = prof_sub.add_parser(
        "resolve", help="Resolve profile controls into a Markdown report",
    )
    _add_target_root(res, "Absolute path to the target repository root (required)")
    res.add_argument(
        "--profile-file", default=None,
        help="Optional explicit profile file path",
    )
    res.add_argument(
        "--out", default=DEFAULT_OUT,
        help="Output file path (absolute or relative to target root)",
    )

    # check
    chk = sub.add_parser("check", help="Workflow gate checks")
    chk_sub = chk.add_subparsers(dest="subcommand")

    phase = chk_sub.add_parser("phase", help="Validate phase preconditions")
    _add_target_root(phase)
    phase.add_argument(
        "--phase", default="01",
        help="Workflow phase to validate (01-05)",
    )
    phase.add_argument(
        "--enforce-sequence", action="store_true",
        help="Require the prior phase gate to read PASS",
    )
    phase.add_argument(
        "--rules", default=None,
        help="Path to phase rules YAML (default: $PLANGATE_PHASE_RULES or bundled)",
    )

    blk = chk_sub.add_parser(
        "blockers", help="Lint release blocker ownership rows",
    )
    _add_target_root(blk)
    blk.add_argument(
        "--file", default=None,
        help="Severity classification markdown file",
    )

    fb = chk_sub.add_parser(
        "feedback", help="Lint docs/feedback for misplaced deliverables",
    )
    _add_target_root(fb)

    par = chk_sub.add_parser(
        "parity", help="Check declared adapters have implementations",
    )
    _add_target_root(par)
    par.add_argument(
        "--tc-file", default=DEFAULT_TC_FILE,
        help="Technology constraints file path",
    )

    return parser


def main() -> int:
    parser = build_parser()
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if not args.command:
        parser.print_help()
        return 0

    dispatch = {
        ("profile", "resolve"): cmd_profile_resolve,
        ("check", "phase"): cmd_check_phase,
        ("check", "blockers"): cmd_check_blockers,
        ("check", "feedback"): cmd_check_feedback,
        ("check", "parity"): cmd_check_parity,
    }

    subcommand: str | None = getattr(args, "subcommand", None)
    handler = dispatch.get((args.command, subcommand or ""))
    if handler:
        return handler(args)

    parser.parse_args([args.command, "--help"])
    return 0


if __name__ == "__main__":
    sys.exit(main())
