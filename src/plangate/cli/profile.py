"""Profile CLI commands."""

import argparse
import sys

from plangate.errors import PlangateError


def cmd_profile_resolve(args: argparse.Namespace) -> int:
    from plangate.profile.resolver import resolve

    try:
        result = resolve(args.target_root, profile_file=args.profile_file, out=args.out)
    except (PlangateError, OSError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    print(result.out_path)
    return 0
