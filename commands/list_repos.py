"""
Migration Validator List Command

Shows the repository pairs a validate run would check, without running checks.
"""
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from registry import CommandRegistry
from mig_config import ConfigError, config_from_args
from mig_paths import RepositoryPair, discover_repositories


@CommandRegistry.register(
    name="list",
    help="List discovered repository pairs",
    arguments=[
        {"flags": ["--source-root"], "help": "Directory holding the SVN repositories"},
        {"flags": ["--target-root"], "help": "Directory holding the Git repositories"},
        {"flags": ["--target-suffix"], "help": "Suffix appended to the Git repository name"},
    ],
)
def cmd_list(args) -> int:
    """List discovered repository pairs."""
    try:
        config, _ = config_from_args(args)
    except ConfigError as e:
        print(f"Error: {e}")
        return 1

    repos = discover_repositories(Path(config.source_root))
    if not repos:
        print(f"Error: No SVN repositories found in {config.source_root}")
        return 1

    print(f"{'REPOSITORY':<24} {'SVN PATH':<40} GIT PATH")
    print("-" * 90)
    for name in repos:
        pair = RepositoryPair.from_name(name, config)
        print(f"{name:<24} {str(pair.source_path):<40} {pair.target_path}")

    print()
    print(f"{len(repos)} repositories")
    return 0
