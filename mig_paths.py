"""
Migration Validator Path Resolution Module

Contains repository discovery and the naming conventions that map a
repository name to its SVN path, Git path, and scratch directories.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import List

from mig_config import DEFAULT_TRUNK, ValidatorConfig


# =============================================================================
# Repository Discovery
# =============================================================================

def discover_repositories(source_root: Path) -> List[str]:
    """
    List repository names under the source root.

    Every visible entry counts as a repository. Returns an empty list if
    the root is missing or cannot be read.
    """
    root = Path(source_root)
    if not root.is_dir():
        return []

    try:
        names = [entry.name for entry in root.iterdir() if not entry.name.startswith(".")]
    except OSError:
        return []

    return sorted(names)


# =============================================================================
# Repository Pair
# =============================================================================

@dataclass(frozen=True)
class RepositoryPair:
    """An SVN repository and the Git repository it was migrated to."""
    name: str
    source_path: Path
    target_path: Path
    trunk: str = DEFAULT_TRUNK

    @classmethod
    def from_name(cls, name: str, config: ValidatorConfig) -> "RepositoryPair":
        """Derive both paths from the repository name."""
        return cls(
            name=name,
            source_path=Path(config.source_root) / name,
            target_path=Path(config.target_root) / f"{name}{config.target_suffix}",
            trunk=config.trunk,
        )

    @property
    def source_url(self) -> str:
        """URL of the primary line, as svn checkout expects it."""
        return f"file://{self.source_path.resolve().as_posix()}/{self.trunk}"

    def clone_dir(self, workspace: Path) -> Path:
        """Scratch location for the Git clone."""
        return Path(workspace) / f"git-clone-{self.name}"

    def checkout_dir(self, workspace: Path) -> Path:
        """Scratch location for the SVN checkout."""
        return Path(workspace) / f"svn-checkout-{self.name}"
