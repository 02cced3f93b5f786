"""
Migration Validator VCS Module

Narrow interfaces to the external tools the validator delegates to:
the SVN command line (source), the Git command line (target), and the
host filesystem's ownership metadata.

The validator only talks to SourceVcs/TargetVcs, so tests can swap in
fakes without real repositories.
"""
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence


# =============================================================================
# Process Helpers
# =============================================================================

def run_command(cmd: Sequence[str], cwd: Optional[Path] = None) -> subprocess.CompletedProcess | None:
    """
    Run a command with output captured.

    Returns None if the executable cannot be started.
    """
    try:
        return subprocess.run(
            list(cmd),
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            cwd=str(cwd) if cwd else None,
        )
    except OSError:
        return None


def command_succeeds(cmd: Sequence[str], cwd: Optional[Path] = None) -> bool:
    result = run_command(cmd, cwd)
    return result is not None and result.returncode == 0


def command_output(cmd: Sequence[str], cwd: Optional[Path] = None) -> str | None:
    """Return stdout of a successful command, None on any failure."""
    result = run_command(cmd, cwd)
    if result is None or result.returncode != 0:
        return None
    return result.stdout


def parse_count(text: str | None) -> int | None:
    """Parse a single non-negative integer printed by a tool."""
    if text is None:
        return None
    text = text.strip()
    if not text.isdigit():
        return None
    return int(text)


# =============================================================================
# Capability Interfaces
# =============================================================================

class SourceVcs:
    """Operations required of the source version-control system."""
    label = "Source"
    metadata_dir = ""

    def verify(self, path: Path) -> bool:
        raise NotImplementedError

    def latest_revision(self, path: Path) -> int | None:
        raise NotImplementedError

    def checkout(self, url: str, destination: Path) -> bool:
        raise NotImplementedError


class TargetVcs:
    """Operations required of the target version-control system."""
    label = "Target"
    metadata_dir = ""

    def is_repository(self, path: Path) -> bool:
        raise NotImplementedError

    def count_commits(self, path: Path) -> int | None:
        raise NotImplementedError

    def clone(self, path: Path, destination: Path) -> bool:
        raise NotImplementedError

    def list_branches(self, path: Path) -> List[str]:
        raise NotImplementedError

    def get_config(self, path: Path, key: str) -> str | None:
        raise NotImplementedError


# =============================================================================
# Subprocess-backed Implementations
# =============================================================================

class SvnTool(SourceVcs):
    """Source VCS backed by svnadmin, svnlook and svn."""
    label = "SVN"
    metadata_dir = ".svn"

    def verify(self, path: Path) -> bool:
        return command_succeeds(["svnadmin", "verify", str(path)])

    def latest_revision(self, path: Path) -> int | None:
        return parse_count(command_output(["svnlook", "youngest", str(path)]))

    def checkout(self, url: str, destination: Path) -> bool:
        return command_succeeds(["svn", "checkout", "--non-interactive", url, str(destination)])


class GitTool(TargetVcs):
    """Target VCS backed by git."""
    label = "Git"
    metadata_dir = ".git"

    def is_repository(self, path: Path) -> bool:
        if not Path(path).is_dir():
            return False
        return command_succeeds(["git", "rev-parse", "--git-dir"], cwd=path)

    def count_commits(self, path: Path) -> int | None:
        if not Path(path).is_dir():
            return None
        return parse_count(command_output(["git", "rev-list", "--all", "--count"], cwd=path))

    def clone(self, path: Path, destination: Path) -> bool:
        return command_succeeds(["git", "clone", "--quiet", str(path), str(destination)])

    def list_branches(self, path: Path) -> List[str]:
        if not Path(path).is_dir():
            return []
        output = command_output(
            ["git", "for-each-ref", "--format=%(refname:short)", "refs/heads/"],
            cwd=path,
        )
        if not output:
            return []
        return [line.strip() for line in output.splitlines() if line.strip()]

    def get_config(self, path: Path, key: str) -> str | None:
        if not Path(path).is_dir():
            return None
        output = command_output(["git", "config", "--type=bool", "--get", key], cwd=path)
        return output.strip() if output is not None else None


# =============================================================================
# Filesystem Metadata
# =============================================================================

def get_owner(path: Path) -> str | None:
    """Name of the account owning path, or None if it cannot be resolved."""
    try:
        return Path(path).owner()
    except (OSError, KeyError, NotImplementedError):
        return None


def count_files(root: Path, metadata_dir: str = "") -> int:
    """
    Count regular files under root.

    Symlinks are not counted, and the VCS metadata directory at the top
    of the working copy is skipped.
    """
    root = Path(root)
    if not root.is_dir():
        return 0

    count = 0
    for path in root.rglob("*"):
        rel = path.relative_to(root)
        if metadata_dir and rel.parts and rel.parts[0] == metadata_dir:
            continue
        if path.is_symlink() or not path.is_file():
            continue
        count += 1
    return count


# =============================================================================
# Toolchain
# =============================================================================

@dataclass
class Toolchain:
    """Bundle of the external collaborators used by one run."""
    source: SourceVcs = field(default_factory=SvnTool)
    target: TargetVcs = field(default_factory=GitTool)
    owner_of: Callable[[Path], Optional[str]] = get_owner
