"""
Migration Validator Configuration Module

Contains constants, enums, and configuration loading for the migration
validator CLI.
"""
import json
from dataclasses import dataclass, asdict, fields
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional


# =============================================================================
# Defaults
# =============================================================================

DEFAULT_SOURCE_ROOT = "/var/svn"
DEFAULT_TARGET_ROOT = "/var/git"
DEFAULT_TARGET_SUFFIX = ".git"
DEFAULT_TRUNK = "trunk"
DEFAULT_SAMPLE_FILE = "README.md"
DEFAULT_EXPECTED_OWNER = "www-data"
DEFAULT_SERVER_FLAG = "http.receivepack"


# =============================================================================
# Config File Discovery
# =============================================================================

CONFIG_FILE = "migval.config.json"


class ConfigError(ValueError):
    """Raised when a configuration file or override is invalid."""


def find_config_file(start_path: Path = None) -> Path | None:
    """
    Find migval.config.json by walking up from start_path.

    Args:
        start_path: Starting directory (defaults to cwd)

    Returns:
        Path to migval.config.json if found, None otherwise
    """
    current = start_path or Path.cwd()
    current = current.resolve()

    while current != current.parent:
        config_path = current / CONFIG_FILE
        if config_path.is_file():
            return config_path
        current = current.parent

    # Check root
    config_path = current / CONFIG_FILE
    if config_path.is_file():
        return config_path

    return None


def load_config(config_path: Path) -> dict:
    """
    Load and parse a migval.config.json file.

    Raises ConfigError if the file is unreadable, is not valid JSON,
    or does not hold a JSON object.
    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Cannot read config file {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a JSON object")
    return data


# =============================================================================
# Check Status Enum
# =============================================================================

class CheckStatus(Enum):
    """Outcome of a single validation check."""
    PASS = "PASS"
    FAIL = "FAIL"
    # Counted as passed, flagged for human attention
    WARN = "WARN"


# =============================================================================
# Validator Configuration
# =============================================================================

@dataclass
class ValidatorConfig:
    """
    Effective settings for one validator run.

    Attributes:
        source_root: Directory holding one SVN repository per subdirectory
        target_root: Directory holding the migrated Git repositories
        target_suffix: Appended to the repository name to form the Git path
        trunk: Primary line checked out from SVN for content comparison
        sample_file: Marker file expected in both working copies
        expected_owner: Account that must own both repositories
        server_flag: Git config key that enables pushes over HTTP
    """
    source_root: str = DEFAULT_SOURCE_ROOT
    target_root: str = DEFAULT_TARGET_ROOT
    target_suffix: str = DEFAULT_TARGET_SUFFIX
    trunk: str = DEFAULT_TRUNK
    sample_file: str = DEFAULT_SAMPLE_FILE
    expected_owner: str = DEFAULT_EXPECTED_OWNER
    server_flag: str = DEFAULT_SERVER_FLAG

    @classmethod
    def field_names(cls) -> set:
        return {f.name for f in fields(cls)}

    def merged(self, overrides: Dict[str, Any]) -> "ValidatorConfig":
        """
        Return a copy with overrides applied.

        None values are ignored so unset command-line flags leave the
        current value in place.
        """
        known = self.field_names()
        values = asdict(self)
        for key, value in overrides.items():
            if value is None:
                continue
            if key not in known:
                raise ConfigError(f"Unknown config key: {key}")
            if not isinstance(value, str):
                raise ConfigError(
                    f"Config key '{key}' must be a string, got {type(value).__name__}"
                )
            values[key] = value
        return ValidatorConfig(**values)

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


def resolve_config(
    config_path: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
    start_path: Optional[Path] = None,
) -> tuple[ValidatorConfig, Path | None]:
    """
    Build the effective configuration.

    Precedence: built-in defaults < config file < overrides.

    Args:
        config_path: Explicit config file (skips discovery)
        overrides: Values from command-line flags
        start_path: Where discovery starts (defaults to cwd)

    Returns:
        Tuple of (config, path of the config file used or None)
    """
    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.is_file():
            raise ConfigError(f"Config file not found: {config_path}")
    else:
        config_path = find_config_file(start_path)

    config = ValidatorConfig()
    if config_path:
        config = config.merged(load_config(config_path))
    if overrides:
        config = config.merged(overrides)

    return config, config_path


def config_from_args(args) -> tuple[ValidatorConfig, Path | None]:
    """
    Resolve configuration from parsed command-line arguments.

    Flags a command does not define are simply absent from args.
    """
    overrides = {
        "source_root": getattr(args, "source_root", None),
        "target_root": getattr(args, "target_root", None),
        "target_suffix": getattr(args, "target_suffix", None),
        "expected_owner": getattr(args, "owner", None),
    }
    return resolve_config(config_path=getattr(args, "config", None), overrides=overrides)
