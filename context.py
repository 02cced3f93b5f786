"""
Migration Validator Run Context

Provides the state owned by a single validator run: the configuration,
the external toolchain, the run totals, the scratch workspace, and the
collected check results.
"""
import shutil
import signal
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from mig_config import CheckStatus, ValidatorConfig
from mig_report import Console
from mig_vcs import Toolchain


# =============================================================================
# Check Results and Totals
# =============================================================================

@dataclass(frozen=True)
class CheckResult:
    """Outcome of one named check."""
    name: str
    status: CheckStatus
    detail: str = ""

    @property
    def passed(self) -> bool:
        return self.status is not CheckStatus.FAIL

    def to_dict(self) -> Dict[str, str]:
        d = {"name": self.name, "status": self.status.value}
        if self.detail:
            d["detail"] = self.detail
        return d


@dataclass
class RunTotals:
    """
    Counters for one run.

    WARN counts as passed. total == passed + failed after every record().
    """
    total: int = 0
    passed: int = 0
    failed: int = 0
    warned: int = 0

    def record(self, status: CheckStatus) -> None:
        self.total += 1
        if status is CheckStatus.FAIL:
            self.failed += 1
        else:
            self.passed += 1
            if status is CheckStatus.WARN:
                self.warned += 1

    @property
    def exit_code(self) -> int:
        return 0 if self.failed == 0 else 1

    def to_dict(self) -> Dict[str, int]:
        return {
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "warned": self.warned,
        }


# =============================================================================
# Scratch Workspace
# =============================================================================

def _raise_system_exit(signum, frame):
    raise SystemExit(128 + signum)


@contextmanager
def scratch_workspace(prefix: str = "migval-") -> Iterator[Path]:
    """
    Create a temporary directory for clones and checkouts.

    The directory is removed when the block exits for any reason,
    including KeyboardInterrupt and SIGTERM (converted to SystemExit
    while the block is active).
    """
    workspace = Path(tempfile.mkdtemp(prefix=prefix))

    previous = None
    try:
        previous = signal.signal(signal.SIGTERM, _raise_system_exit)
    except ValueError:
        # Not the main thread; SIGTERM cannot be intercepted here
        previous = None

    try:
        yield workspace
    finally:
        if previous is not None:
            signal.signal(signal.SIGTERM, previous)
        shutil.rmtree(workspace, ignore_errors=True)


# =============================================================================
# Run Context
# =============================================================================

@dataclass
class RunContext:
    """
    Shared context for one validator run.

    Usage:
        with scratch_workspace() as workspace:
            ctx = RunContext(config=config, workspace=workspace)
            validate_repository(ctx, pair)
            return ctx.totals.exit_code
    """
    config: ValidatorConfig = field(default_factory=ValidatorConfig)
    tools: Toolchain = field(default_factory=Toolchain)
    console: Console = field(default_factory=Console)
    workspace: Optional[Path] = None
    log_path: Optional[Path] = None

    totals: RunTotals = field(default_factory=RunTotals)
    results: Dict[str, List[CheckResult]] = field(default_factory=dict)
    current_repo: str = ""

    def begin_repository(self, name: str) -> None:
        self.current_repo = name
        self.results.setdefault(name, [])

    def record(self, result: CheckResult) -> CheckResult:
        """Fold a result into the totals and keep it for reporting."""
        self.totals.record(result.status)
        self.results.setdefault(self.current_repo, []).append(result)
        return result

    def results_as_dicts(self) -> Dict[str, List[Dict[str, str]]]:
        return {
            name: [r.to_dict() for r in checks]
            for name, checks in self.results.items()
        }
