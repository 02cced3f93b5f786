"""
Migration Validator Config Command

Prints the effective configuration after defaults, config file and flags
have been merged.
"""
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from registry import CommandRegistry
from mig_config import ConfigError, config_from_args
from mig_report import dump_config


@CommandRegistry.register(
    name="config",
    help="Show the effective configuration",
)
def cmd_config(args) -> int:
    """Show the effective configuration."""
    try:
        config, config_path = config_from_args(args)
    except ConfigError as e:
        print(f"Error: {e}")
        return 1

    print(f"# Config file: {config_path if config_path else '(none, using defaults)'}")
    print(dump_config(config.to_dict()), end="")
    return 0
