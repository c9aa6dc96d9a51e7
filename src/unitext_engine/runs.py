"""Run management — run ids, run logs and run records.

Every CLI operation is a run. Each run gets a UUID; when a log directory is
configured it writes runs/<run_id>/run.log and runs/<run_id>/run.json
(kind, params, stats).
"""

from __future__ import annotations

import json
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path


def new_run_id() -> str:
    return str(uuid.uuid4())


def utcnow_iso() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def run_dir(log_dir: str | Path, run_id: str) -> Path:
    path = Path(log_dir) / "runs" / run_id
    path.mkdir(parents=True, exist_ok=True)
    return path


def write_run_record(
    log_dir: str | Path,
    run_id: str,
    kind: str,
    params: dict,
    stats: dict | None = None,
) -> Path:
    """Write run.json for this run and return its path."""
    record_path = run_dir(log_dir, run_id) / "run.json"
    record = {
        "run_id": run_id,
        "kind": kind,
        "params": params,
        "stats": stats,
        "created_at": utcnow_iso(),
    }
    record_path.write_text(json.dumps(record, ensure_ascii=False, indent=2), encoding="utf-8")
    return record_path


def setup_run_logger(log_dir: str | Path, run_id: str) -> tuple[logging.Logger, Path]:
    """Create a file logger for this run and return (logger, log_path)."""
    log_path = run_dir(log_dir, run_id) / "run.log"

    logger = logging.getLogger(f"unitext.run.{run_id}")
    logger.setLevel(logging.DEBUG)

    if not logger.handlers:
        fh = logging.FileHandler(log_path, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fmt = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    return logger, log_path


def close_run_logger(logger: logging.Logger) -> None:
    """Detach and close the file handlers of a run logger."""
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
