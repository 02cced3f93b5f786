"""
Migration Validator Checks

The check primitive and the fixed per-repository validation sequence.

Each repository pair is run through, in order:
    existence and integrity of both repositories,
    revision/commit count comparison,
    working copy file count comparison,
    sample file spot-checks,
    branch listing,
    HTTP push readiness,
    ownership of both repositories.
"""
from pathlib import Path
from typing import Callable, List, Optional

from context import CheckResult, RunContext
from mig_audit import log_check, log_repo_end
from mig_config import CheckStatus
from mig_paths import RepositoryPair
from mig_vcs import count_files


# =============================================================================
# Check Primitive
# =============================================================================

def run_check(ctx: RunContext, name: str, action: Callable[[], bool]) -> CheckResult:
    """
    Evaluate a predicate as a PASS/FAIL check.

    The predicate's own output is never shown. An OSError raised by the
    predicate counts as a failure.
    """
    ctx.console.check_start(name)
    try:
        ok = bool(action())
    except OSError:
        ok = False

    status = CheckStatus.PASS if ok else CheckStatus.FAIL
    ctx.console.check_status(status)
    return _record(ctx, CheckResult(name, status))


def _record(ctx: RunContext, result: CheckResult) -> CheckResult:
    ctx.record(result)
    log_check(ctx.log_path, ctx.current_repo, result.name, result.status.value, result.detail)
    return result


# =============================================================================
# Comparisons
# =============================================================================

def compare_counts(target_commits: int, source_revisions: int) -> CheckStatus:
    """Every source revision needs at least one target commit."""
    return CheckStatus.PASS if target_commits >= source_revisions else CheckStatus.FAIL


def compare_file_counts(clone_ok: bool, checkout_ok: bool,
                        target_files: int, source_files: int) -> CheckStatus:
    """
    Content parity outcome.

    FAIL only when a working copy could not be produced; a count
    mismatch is a WARN because branches and tags can legitimately
    change the Git side.
    """
    if not (clone_ok and checkout_ok):
        return CheckStatus.FAIL
    if target_files == source_files:
        return CheckStatus.PASS
    return CheckStatus.WARN


def classify_branches(branches: List[str]) -> CheckStatus:
    return CheckStatus.PASS if branches else CheckStatus.WARN


GIT_TRUE_VALUES = {"true", "yes", "on", "1"}


def is_enabled(value: Optional[str]) -> bool:
    """True only for a value git reads as boolean true."""
    return value is not None and value.strip().lower() in GIT_TRUE_VALUES


# =============================================================================
# Individual Checks
# =============================================================================

def check_commit_migration(ctx: RunContext, pair: RepositoryPair) -> CheckResult:
    source, target = ctx.tools.source, ctx.tools.target

    revisions = source.latest_revision(pair.source_path)
    commits = target.count_commits(pair.target_path)

    ctx.console.value(f"{source.label} revisions", revisions or 0,
                      "query failed" if revisions is None else "")
    ctx.console.value(f"{target.label} commits", commits or 0,
                      "query failed" if commits is None else "")

    revisions = revisions or 0
    commits = commits or 0
    status = compare_counts(commits, revisions)
    op = ">=" if status is CheckStatus.PASS else "<"
    detail = f"{target.label}: {commits} {op} {source.label}: {revisions}"

    ctx.console.inline_result("Commit migration", status, detail)
    return _record(ctx, CheckResult("Commit migration", status, detail))


def check_content(ctx: RunContext, pair: RepositoryPair) -> CheckResult:
    """Clone and check out both sides, then compare their file counts."""
    source, target = ctx.tools.source, ctx.tools.target
    clone_dir = pair.clone_dir(ctx.workspace)
    checkout_dir = pair.checkout_dir(ctx.workspace)

    ctx.console.check_start("File content verification")
    clone_ok = target.clone(pair.target_path, clone_dir)
    checkout_ok = source.checkout(pair.source_url, checkout_dir)

    if not (clone_ok and checkout_ok):
        failed = [label for label, ok in ((f"{target.label} clone", clone_ok),
                                          (f"{source.label} checkout", checkout_ok)) if not ok]
        detail = f"{' and '.join(failed)} failed"
        ctx.console.check_status(CheckStatus.FAIL)
        ctx.console.detail(detail)
        return _record(ctx, CheckResult("File content verification", CheckStatus.FAIL, detail))

    target_files = count_files(clone_dir, target.metadata_dir)
    source_files = count_files(checkout_dir, source.metadata_dir)
    status = compare_file_counts(clone_ok, checkout_ok, target_files, source_files)

    detail = f"Files in {target.label}: {target_files}, Files in {source.label} {pair.trunk}: {source_files}"
    ctx.console.check_status(status)
    if status is CheckStatus.WARN:
        ctx.console.detail(f"{detail} (may differ due to branches/tags)")
    else:
        ctx.console.detail(detail)
    return _record(ctx, CheckResult("File content verification", status, detail))


def check_branches(ctx: RunContext, pair: RepositoryPair) -> CheckResult:
    target = ctx.tools.target
    name = f"{target.label} branches"

    ctx.console.check_start(name)
    branches = target.list_branches(pair.target_path)
    status = classify_branches(branches)

    if branches:
        detail = ", ".join(branches)
        ctx.console.check_status(status)
        ctx.console.detail(f"Branches: {detail}")
    else:
        detail = "no branches found"
        ctx.console.check_status(status, detail)
    return _record(ctx, CheckResult(name, status, detail))


# =============================================================================
# Validation Sequence
# =============================================================================

def validate_repository(ctx: RunContext, pair: RepositoryPair) -> List[CheckResult]:
    """
    Run every check for one repository pair, in order.

    No check aborts the sequence; all results are returned.
    """
    config = ctx.config
    source, target = ctx.tools.source, ctx.tools.target
    owner_of = ctx.tools.owner_of
    failed_before = ctx.totals.failed
    passed_before = ctx.totals.passed

    ctx.begin_repository(pair.name)
    ctx.console.repo_header(pair.name)

    results = [
        run_check(ctx, f"{source.label} repo exists", lambda: pair.source_path.is_dir()),
        run_check(ctx, f"{source.label} repo is valid", lambda: source.verify(pair.source_path)),
        run_check(ctx, f"{target.label} repo exists", lambda: pair.target_path.is_dir()),
        run_check(ctx, f"{target.label} repo is valid", lambda: target.is_repository(pair.target_path)),
        check_commit_migration(ctx, pair),
        check_content(ctx, pair),
    ]

    sample = config.sample_file
    clone_dir: Path = pair.clone_dir(ctx.workspace)
    checkout_dir: Path = pair.checkout_dir(ctx.workspace)
    results.append(run_check(ctx, f"Sample {Path(sample).stem} exists in {target.label}",
                             lambda: (clone_dir / sample).is_file()))
    results.append(run_check(ctx, f"Sample {Path(sample).stem} exists in {source.label}",
                             lambda: (checkout_dir / sample).is_file()))

    results.append(check_branches(ctx, pair))

    results.append(run_check(
        ctx,
        f"{target.label} {config.server_flag} enabled",
        lambda: is_enabled(target.get_config(pair.target_path, config.server_flag)),
    ))

    owner = config.expected_owner
    results.append(run_check(ctx, f"{source.label} owned by {owner}",
                             lambda: owner_of(pair.source_path) == owner))
    results.append(run_check(ctx, f"{target.label} owned by {owner}",
                             lambda: owner_of(pair.target_path) == owner))

    ctx.console.write()
    log_repo_end(ctx.log_path, pair.name,
                 ctx.totals.passed - passed_before, ctx.totals.failed - failed_before)
    return results
