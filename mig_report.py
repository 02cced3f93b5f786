"""
Migration Validator Reporting Module

Console output for validator runs, plus the optional YAML report file.
"""
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from mig_config import CheckStatus


# =============================================================================
# Console Output
# =============================================================================

class Colors:
    """ANSI escape codes used when writing to a terminal."""
    RED = "\033[0;31m"
    GREEN = "\033[0;32m"
    YELLOW = "\033[1;33m"
    BLUE = "\033[0;34m"
    RESET = "\033[0m"


STATUS_COLORS = {
    CheckStatus.PASS: Colors.GREEN,
    CheckStatus.FAIL: Colors.RED,
    CheckStatus.WARN: Colors.YELLOW,
}

RULE_HEAVY = "=" * 41
RULE_LIGHT = "-" * 43


class Console:
    """
    Writes the human-readable validator report.

    Colour is only emitted when enabled; by default that means stdout
    is a terminal.
    """

    def __init__(self, color: Optional[bool] = None, stream=None):
        self.stream = stream
        if color is None:
            out = stream or sys.stdout
            color = hasattr(out, "isatty") and out.isatty()
        self.color = color

    def _paint(self, text: str, code: str) -> str:
        if not self.color:
            return text
        return f"{code}{text}{Colors.RESET}"

    def write(self, text: str = "", end: str = "\n") -> None:
        print(text, end=end, file=self.stream or sys.stdout, flush=True)

    def banner(self, title: str) -> None:
        self.write(self._paint(RULE_HEAVY, Colors.BLUE))
        self.write(self._paint(f"{title:^41}".rstrip(), Colors.BLUE))
        self.write(self._paint(RULE_HEAVY, Colors.BLUE))
        self.write()

    def error(self, message: str) -> None:
        self.write(self._paint(f"Error: {message}", Colors.RED))

    def repositories(self, names: List[str]) -> None:
        self.write(self._paint("Found repositories:", Colors.GREEN))
        for name in names:
            self.write(f"  - {name}")
        self.write()

    def repo_header(self, name: str) -> None:
        self.write(self._paint(f"Validating: {name}", Colors.YELLOW))
        self.write(RULE_LIGHT)

    def check_start(self, name: str) -> None:
        self.write(f"Testing: {name} ... ", end="")

    def check_status(self, status: CheckStatus, note: str = "") -> None:
        text = self._paint(status.value, STATUS_COLORS[status])
        if note:
            text = f"{text} ({note})"
        self.write(text)

    def inline_result(self, label: str, status: CheckStatus, note: str = "") -> None:
        """Result line for a check that is computed rather than run."""
        text = f"  {label}: {self._paint(status.value, STATUS_COLORS[status])}"
        if note:
            text = f"{text} ({note})"
        self.write(text)

    def value(self, label: str, value: Any, note: str = "") -> None:
        text = f"  {label}: {self._paint(str(value), Colors.BLUE)}"
        if note:
            text = f"{text} ({note})"
        self.write(text)

    def detail(self, text: str) -> None:
        self.write(f"  {text}")

    def summary(self, total: int, passed: int, failed: int, warned: int = 0) -> None:
        self.banner("Validation Summary")
        self.write(f"Total tests: {self._paint(str(total), Colors.BLUE)}")
        self.write(f"Passed:      {self._paint(str(passed), Colors.GREEN)}")
        self.write(f"Failed:      {self._paint(str(failed), Colors.RED)}")
        if warned:
            self.write(f"Warnings:    {self._paint(str(warned), Colors.YELLOW)}")
        self.write()

        if failed == 0:
            self.write(self._paint("✓ All validations passed!", Colors.GREEN))
            self.write(self._paint("Migration appears to be successful.", Colors.GREEN))
        else:
            self.write(self._paint("⚠ Some validations failed.", Colors.YELLOW))
            self.write(self._paint("Please review the output above.", Colors.YELLOW))


# =============================================================================
# YAML Report
# =============================================================================

def build_report(
    config: Dict[str, Any],
    results: Dict[str, List[Dict[str, str]]],
    totals: Dict[str, int],
    exit_code: int,
) -> Dict[str, Any]:
    """Assemble the report document written by --report."""
    return {
        "generated": datetime.now(timezone.utc).isoformat(timespec="seconds"),
        "source_root": config.get("source_root"),
        "target_root": config.get("target_root"),
        "repositories": [
            {"name": name, "checks": checks} for name, checks in results.items()
        ],
        "summary": dict(totals),
        "exit_code": exit_code,
    }


def write_report(path: Path, report: Dict[str, Any]) -> bool:
    """Write the report as YAML. Returns False if the file cannot be written."""
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(report, f, default_flow_style=False, sort_keys=False, allow_unicode=True)
        return True
    except OSError as e:
        print(f"Error: Failed to write report to {path}: {e}")
        return False


def dump_config(config: Dict[str, Any]) -> str:
    """Render configuration values as YAML."""
    return yaml.safe_dump(config, default_flow_style=False, sort_keys=False)
