"""
Migration Validator Qualification Tests: Command Line

Runs migval.py as a subprocess against temporary repository roots. Stub
svnadmin/svnlook/svn/git executables are placed first on PATH so the
real process-backed toolchain is exercised without real repositories.
"""
import json
import os
import stat
import subprocess
import sys
from pathlib import Path

import pytest
import yaml


# ============================================================================
# Helper Functions
# ============================================================================

STUBS = {
    "svnadmin": """#!/bin/sh
exit 0
""",
    "svnlook": """#!/bin/sh
echo "${STUB_REVISIONS:-10}"
""",
    "svn": """#!/bin/sh
for dest; do :; done
[ -n "$STUB_CHECKOUT_FAIL" ] && exit 1
mkdir -p "$dest/.svn" "$dest/src"
echo readme > "$dest/README.md"
echo code > "$dest/src/main.c"
echo meta > "$dest/.svn/wc.db"
""",
    "git": """#!/bin/sh
case "$1" in
  rev-parse) echo ".git" ;;
  rev-list) echo "${STUB_COMMITS:-12}" ;;
  clone)
    for dest; do :; done
    mkdir -p "$dest/.git" "$dest/src"
    echo readme > "$dest/README.md"
    echo code > "$dest/src/main.c"
    echo ref > "$dest/.git/HEAD"
    ;;
  for-each-ref) echo "master" ;;
  config) echo "${STUB_RECEIVEPACK:-true}" ;;
  *) exit 1 ;;
esac
""",
}


def run_migval(cwd, *args, env_overrides=None, stub_dir=None):
    """Execute a migval command and return the result."""
    migval_cli = Path(__file__).parent.parent.parent / "migval.py"
    env = dict(os.environ)
    if stub_dir is not None:
        env["PATH"] = f"{stub_dir}{os.pathsep}{env.get('PATH', '')}"
    env.update(env_overrides or {})
    cmd = [sys.executable, str(migval_cli), "--no-color"] + list(args)
    return subprocess.run(cmd, capture_output=True, text=True, cwd=cwd, env=env)


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def stub_dir(tmp_path):
    """Directory of fake VCS executables."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    for name, script in STUBS.items():
        path = bin_dir / name
        path.write_text(script, encoding="utf-8")
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return bin_dir


@pytest.fixture
def server(tmp_path):
    """SVN and Git roots with a single migrated repository."""
    svn_root = tmp_path / "svn"
    git_root = tmp_path / "git"
    (svn_root / "widgets").mkdir(parents=True)
    (git_root / "widgets.git").mkdir(parents=True)
    return {
        "svn": svn_root,
        "git": git_root,
        "owner": svn_root.owner(),
        "cwd": tmp_path,
    }


def validate_args(server, *extra):
    return ["validate",
            "--source-root", str(server["svn"]),
            "--target-root", str(server["git"]),
            "--owner", server["owner"]] + list(extra)


# ============================================================================
# Tests: validate
# ============================================================================

def test_validate_all_pass(server, stub_dir):
    result = run_migval(server["cwd"], *validate_args(server), stub_dir=stub_dir)

    assert result.returncode == 0, result.stdout + result.stderr
    assert "Found repositories:" in result.stdout
    assert "  - widgets" in result.stdout
    assert "Testing: SVN repo is valid ... PASS" in result.stdout
    assert "Files in Git: 2, Files in SVN trunk: 2" in result.stdout
    assert "Branches: master" in result.stdout
    assert "Total tests: 12" in result.stdout
    assert "Failed:      0" in result.stdout


def test_validate_too_few_commits(server, stub_dir):
    result = run_migval(server["cwd"], *validate_args(server), stub_dir=stub_dir,
                        env_overrides={"STUB_COMMITS": "8"})

    assert result.returncode == 1
    assert "Commit migration: FAIL (Git: 8 < SVN: 10)" in result.stdout
    assert "Failed:      1" in result.stdout


def test_validate_checkout_failure(server, stub_dir):
    result = run_migval(server["cwd"], *validate_args(server), stub_dir=stub_dir,
                        env_overrides={"STUB_CHECKOUT_FAIL": "1"})

    assert result.returncode == 1
    assert "Testing: File content verification ... FAIL" in result.stdout
    assert "Testing: Sample README exists in SVN ... FAIL" in result.stdout


def test_validate_receivepack_disabled(server, stub_dir):
    result = run_migval(server["cwd"], *validate_args(server), stub_dir=stub_dir,
                        env_overrides={"STUB_RECEIVEPACK": "false"})

    assert result.returncode == 1
    assert "Testing: Git http.receivepack enabled ... FAIL" in result.stdout


def test_validate_empty_root(tmp_path, stub_dir):
    (tmp_path / "svn").mkdir()
    result = run_migval(tmp_path, "validate", "--source-root", str(tmp_path / "svn"),
                        stub_dir=stub_dir)

    assert result.returncode == 1
    assert "No SVN repositories found" in result.stdout
    assert "Testing:" not in result.stdout


def test_validate_writes_report_and_log(server, stub_dir):
    report = server["cwd"] / "report.yaml"
    log = server["cwd"] / "runs.jsonl"
    result = run_migval(server["cwd"],
                        *validate_args(server, "--report", str(report), "--log-file", str(log)),
                        stub_dir=stub_dir)

    assert result.returncode == 0
    data = yaml.safe_load(report.read_text(encoding="utf-8"))
    assert data["summary"]["total"] == 12
    assert data["repositories"][0]["name"] == "widgets"

    events = [json.loads(line) for line in log.read_text(encoding="utf-8").splitlines()]
    assert events[0]["event"] == "RUN_START"
    assert events[-1]["event"] == "RUN_END"


def test_validate_uses_config_file(server, stub_dir):
    config = {
        "source_root": str(server["svn"]),
        "target_root": str(server["git"]),
        "expected_owner": server["owner"],
    }
    (server["cwd"] / "migval.config.json").write_text(json.dumps(config), encoding="utf-8")

    result = run_migval(server["cwd"], "validate", stub_dir=stub_dir)

    assert result.returncode == 0, result.stdout
    assert "Validating: widgets" in result.stdout


def test_validate_bad_config_file(tmp_path):
    (tmp_path / "migval.config.json").write_text('{"colour": "blue"}', encoding="utf-8")

    result = run_migval(tmp_path, "validate")

    assert result.returncode == 1
    assert "Unknown config key: colour" in result.stdout


# ============================================================================
# Tests: list and config
# ============================================================================

def test_list_shows_pairs(server):
    result = run_migval(server["cwd"], "list",
                        "--source-root", str(server["svn"]),
                        "--target-root", str(server["git"]))

    assert result.returncode == 0
    assert "widgets" in result.stdout
    assert str(server["git"] / "widgets.git") in result.stdout
    assert "1 repositories" in result.stdout


def test_list_empty_root(tmp_path):
    result = run_migval(tmp_path, "list", "--source-root", str(tmp_path / "missing"))

    assert result.returncode == 1
    assert "No SVN repositories found" in result.stdout


def test_config_shows_effective_values(tmp_path):
    (tmp_path / "migval.config.json").write_text('{"expected_owner": "apache"}', encoding="utf-8")

    result = run_migval(tmp_path, "config")

    assert result.returncode == 0
    assert "migval.config.json" in result.stdout
    values = yaml.safe_load(result.stdout)
    assert values["expected_owner"] == "apache"
    assert values["source_root"] == "/var/svn"
