"""
Migration Validator Validate Command

Runs the full checklist against every SVN repository and its Git counterpart.
"""
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from registry import CommandRegistry
from mig_config import ConfigError, config_from_args
from mig_report import Console
from mig_runner import run_validation


@CommandRegistry.register(
    name="validate",
    help="Validate migrated repositories",
    arguments=[
        {"flags": ["repos"], "help": "Only validate these repositories", "nargs": "*", "metavar": "REPO"},
        {"flags": ["--source-root"], "help": "Directory holding the SVN repositories"},
        {"flags": ["--target-root"], "help": "Directory holding the Git repositories"},
        {"flags": ["--target-suffix"], "help": "Suffix appended to the Git repository name"},
        {"flags": ["--owner"], "help": "Account expected to own both repositories"},
        {"flags": ["--report"], "help": "Write a YAML report to this file", "type": Path},
        {"flags": ["--log-file"], "help": "Append JSONL run events to this file", "type": Path},
    ],
)
def cmd_validate(args) -> int:
    """Validate migrated repositories."""
    console = Console(color=False if getattr(args, "no_color", False) else None)

    try:
        config, _ = config_from_args(args)
    except ConfigError as e:
        console.error(str(e))
        return 1

    return run_validation(
        config,
        console=console,
        only=args.repos or None,
        report_path=args.report,
        log_path=args.log_file,
    )
