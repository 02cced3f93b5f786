"""
Pytest fixtures for migration validator tests.

These fixtures provide fake SVN/Git toolchains and temporary repository
layouts so the check sequence can be tested without real repositories.
"""
import sys
from pathlib import Path

import pytest

# Add project root to path for imports
PROJECT_DIR = Path(__file__).parent.parent
if str(PROJECT_DIR) not in sys.path:
    sys.path.insert(0, str(PROJECT_DIR))

from mig_config import ValidatorConfig
from mig_report import Console
from mig_vcs import SourceVcs, TargetVcs, Toolchain


DEFAULT_FILES = ["README.md", "src/main.c", "src/util.c", "docs/guide.txt", "Makefile"]


def populate(destination: Path, files, metadata_dir: str) -> None:
    """Create a fake working copy with the given files."""
    destination.mkdir(parents=True, exist_ok=True)
    (destination / metadata_dir).mkdir(exist_ok=True)
    (destination / metadata_dir / "entries").write_text("metadata\n")
    for rel in files:
        path = destination / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"{rel}\n")


class FakeSvn(SourceVcs):
    """In-memory stand-in for svnadmin/svnlook/svn."""
    label = "SVN"
    metadata_dir = ".svn"

    def __init__(self, revisions=10, verify_ok=True, checkout_ok=True, files=None):
        self.revisions = revisions
        self.verify_ok = verify_ok
        self.checkout_ok = checkout_ok
        self.files = list(DEFAULT_FILES if files is None else files)
        self.checkouts = []

    def verify(self, path):
        return self.verify_ok

    def latest_revision(self, path):
        return self.revisions

    def checkout(self, url, destination):
        self.checkouts.append((url, destination))
        if not self.checkout_ok:
            return False
        populate(Path(destination), self.files, self.metadata_dir)
        return True


class FakeGit(TargetVcs):
    """In-memory stand-in for git."""
    label = "Git"
    metadata_dir = ".git"

    def __init__(self, commits=12, valid=True, clone_ok=True, files=None,
                 branches=None, config=None):
        self.commits = commits
        self.valid = valid
        self.clone_ok = clone_ok
        self.files = list(DEFAULT_FILES if files is None else files)
        self.branches = ["master"] if branches is None else list(branches)
        self.config = {"http.receivepack": "true"} if config is None else dict(config)
        self.clones = []

    def is_repository(self, path):
        return self.valid

    def count_commits(self, path):
        return self.commits

    def clone(self, path, destination):
        self.clones.append((path, destination))
        if not self.clone_ok:
            return False
        populate(Path(destination), self.files, self.metadata_dir)
        return True

    def list_branches(self, path):
        return list(self.branches)

    def get_config(self, path, key):
        return self.config.get(key)


def owned_by(owner):
    """Ownership lookup that reports the same owner for every path."""
    return lambda path: owner


@pytest.fixture
def repo_layout(tmp_path):
    """
    Create SVN and Git roots with one repository pair named 'alpha'.
    Returns the config pointing at them.
    """
    source_root = tmp_path / "svn"
    target_root = tmp_path / "git"
    (source_root / "alpha").mkdir(parents=True)
    (target_root / "alpha.git").mkdir(parents=True)

    return ValidatorConfig(source_root=str(source_root), target_root=str(target_root))


@pytest.fixture
def console():
    """Console that never emits colour codes."""
    return Console(color=False)


@pytest.fixture
def make_tools():
    """Factory for a fake toolchain."""
    def _make(svn=None, git=None, owner="www-data"):
        return Toolchain(
            source=svn or FakeSvn(),
            target=git or FakeGit(),
            owner_of=owned_by(owner),
        )
    return _make
