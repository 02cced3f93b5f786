"""
Migration Validator Runner

Drives a full validation run: discover repositories, validate each pair
inside a scratch workspace, print the summary, and produce the exit code.
"""
from pathlib import Path
from typing import List, Optional

from context import RunContext, scratch_workspace
from mig_audit import log_run_end, log_run_start
from mig_checks import validate_repository
from mig_config import ValidatorConfig
from mig_paths import RepositoryPair, discover_repositories
from mig_report import Console, build_report, write_report
from mig_vcs import Toolchain


TITLE = "SVN to Git Migration Validator"


def select_repositories(
    console: Console,
    config: ValidatorConfig,
    only: Optional[List[str]] = None,
) -> List[str] | None:
    """
    Discover repositories and apply an optional name filter.

    Prints the error and returns None on a setup failure.
    """
    repos = discover_repositories(Path(config.source_root))
    if not repos:
        console.error(f"No SVN repositories found in {config.source_root}")
        return None

    if only:
        unknown = [name for name in only if name not in repos]
        if unknown:
            console.error(f"Repository not found in {config.source_root}: {', '.join(unknown)}")
            return None
        repos = [name for name in repos if name in only]

    return repos


def run_validation(
    config: ValidatorConfig,
    tools: Optional[Toolchain] = None,
    console: Optional[Console] = None,
    only: Optional[List[str]] = None,
    report_path: Optional[Path] = None,
    log_path: Optional[Path] = None,
) -> int:
    """
    Validate every discovered repository pair.

    Returns:
        0 if no check failed, 1 on any failure or setup error
    """
    tools = tools or Toolchain()
    console = console or Console()

    console.banner(TITLE)

    repos = select_repositories(console, config, only)
    if repos is None:
        return 1

    console.repositories(repos)
    log_run_start(log_path, config.source_root, config.target_root, repos)

    with scratch_workspace() as workspace:
        ctx = RunContext(
            config=config,
            tools=tools,
            console=console,
            workspace=workspace,
            log_path=log_path,
        )
        for name in repos:
            validate_repository(ctx, RepositoryPair.from_name(name, config))

    totals = ctx.totals
    console.summary(totals.total, totals.passed, totals.failed, totals.warned)

    exit_code = totals.exit_code
    log_run_end(log_path, totals.total, totals.passed, totals.failed, exit_code)

    if report_path is not None:
        report = build_report(config.to_dict(), ctx.results_as_dicts(), totals.to_dict(), exit_code)
        write_report(report_path, report)

    return exit_code
