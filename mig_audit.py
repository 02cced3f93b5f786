"""
Migration Validator Run Log - Append-Only JSONL Event Log

Records each run and every check outcome to a JSONL file so repeated
validations of the same server leave a trail that can be compared later.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional


# Event types
EVENT_RUN_START = "RUN_START"
EVENT_CHECK = "CHECK"
EVENT_REPO_END = "REPO_END"
EVENT_RUN_END = "RUN_END"


def get_timestamp() -> str:
    """Get current UTC timestamp in ISO format."""
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def append_event(log_path: Optional[Path], event: Dict[str, Any]) -> bool:
    """
    Append an event to the run log.

    A None log_path disables logging. Returns True on success (or when
    disabled), False if the write failed.
    """
    if log_path is None:
        return True

    log_path = Path(log_path)
    if "ts" not in event:
        event["ts"] = get_timestamp()

    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        with open(log_path, "a", encoding="utf-8") as f:
            f.write(json.dumps(event, ensure_ascii=False) + "\n")
        return True
    except OSError as e:
        print(f"Error: Failed to append event to {log_path}: {e}")
        return False


def read_events(log_path: Path) -> List[Dict[str, Any]]:
    """
    Read all events from a run log.

    Returns empty list if file doesn't exist.
    """
    log_path = Path(log_path)
    if not log_path.exists():
        return []

    events = []
    with open(log_path, "r", encoding="utf-8") as f:
        for line_num, line in enumerate(f, 1):
            line = line.strip()
            if not line:
                continue
            try:
                events.append(json.loads(line))
            except json.JSONDecodeError as e:
                print(f"Warning: Invalid JSON on line {line_num} in {log_path}: {e}")

    return events


# =============================================================================
# Event Helpers
# =============================================================================

def log_run_start(log_path: Optional[Path], source_root: str, target_root: str,
                  repositories: List[str]) -> bool:
    return append_event(log_path, {
        "event": EVENT_RUN_START,
        "source_root": source_root,
        "target_root": target_root,
        "repositories": repositories,
    })


def log_check(log_path: Optional[Path], repo: str, check: str, status: str,
              detail: str = "") -> bool:
    event = {
        "event": EVENT_CHECK,
        "repo": repo,
        "check": check,
        "status": status,
    }
    if detail:
        event["detail"] = detail
    return append_event(log_path, event)


def log_repo_end(log_path: Optional[Path], repo: str, passed: int, failed: int) -> bool:
    return append_event(log_path, {
        "event": EVENT_REPO_END,
        "repo": repo,
        "passed": passed,
        "failed": failed,
    })


def log_run_end(log_path: Optional[Path], total: int, passed: int, failed: int,
                exit_code: int) -> bool:
    return append_event(log_path, {
        "event": EVENT_RUN_END,
        "total": total,
        "passed": passed,
        "failed": failed,
        "exit_code": exit_code,
    })
