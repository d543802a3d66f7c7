# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

#src/winnode/logging/log.py

from __future__ import annotations

import logging
from pathlib import Path
from datetime import datetime, timezone
import os
import uuid

LOG_DIR_ENV = "WINNODE_LOG_DIR"

def init_logging(
    *,
    base_dir: Path | None = None,
    name: str = "winnode",
    verbose: bool = False,
) -> tuple[logging.Logger, str, Path]:
    """
    Initializes:
      - per-run log file with the full DEBUG trace
      - console output at INFO (DEBUG with --verbose)
      - log directory: base_dir, else $WINNODE_LOG_DIR, else ~/.winnode/logs
      - returns run_id so callers can correlate runs against one node
    """
    run_id = str(uuid.uuid4())

    if base_dir is None:
        env = os.environ.get(LOG_DIR_ENV)
        base_dir = Path(env) if env else Path.home() / ".winnode" / "logs"
    base_dir.mkdir(parents=True, exist_ok=True)

    ts = datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S")
    log_path = base_dir / f"{name}-{ts}-{run_id}.log"

    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.propagate = False

    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)-7s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # File = FULL TRACE
    fh = logging.FileHandler(log_path)
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(formatter)

    # Console goes to stderr so command output on stdout stays clean
    ch = logging.StreamHandler()
    ch.setLevel(logging.DEBUG if verbose else logging.INFO)
    ch.setFormatter(formatter)

    logger.addHandler(fh)
    logger.addHandler(ch)

    logger.debug("=== winnode run started ===")
    logger.debug(f"run_id={run_id}")
    logger.debug(f"log_file={log_path}")

    return logger, run_id, log_path
