#!/usr/bin/env python3
"""
migval - SVN to Git Migration Validator

Confirms that SVN repositories were migrated to Git correctly by comparing
revision and commit counts, working copy contents, branches, server
configuration and ownership, then reports PASS/FAIL/WARN per check.

Usage:
    python migval.py [--config FILE] [--no-color] <command> [options]

Commands:
    validate, list, config

Exit status is 0 when every check passed (warnings included) and 1 otherwise.
"""

import argparse
import sys
from pathlib import Path

from registry import CommandRegistry
import commands  # noqa: F401 - triggers registration


# =============================================================================
# Main
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="migval",
        description="migval - SVN to Git Migration Validator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  migval validate
  migval validate --source-root /srv/svn --target-root /srv/git
  migval validate project-a --report report.yaml --log-file runs.jsonl
  migval list
  migval config

Config file:
  migval.config.json is looked up from the current directory upwards.
  Command-line flags override values from the file.
""",
    )
    parser.add_argument("--config", type=Path, help="Path to a migval.config.json file")
    parser.add_argument("--no-color", action="store_true", help="Disable coloured output")

    CommandRegistry.build_subparsers(parser)
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    return CommandRegistry.execute(args)


if __name__ == "__main__":
    sys.exit(main())
