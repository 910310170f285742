"""Logging for the matching engine.

Every module logs through ``get_logger(__name__)``, so all records land under
the ``jobmatch`` package logger. That logger is set up once: its level comes
from ``LOG_LEVEL``, a stdout handler is attached unless the host application
already configured the root logger, and a daily file is written only when
``JOBMATCH_LOG_DIR`` names a directory.
"""
from __future__ import annotations

import logging
import os
import sys
from datetime import datetime
from pathlib import Path

PACKAGE_LOGGER = "jobmatch"

_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"
_DATE_FMT = "%Y-%m-%d %H:%M:%S"
_configured = False


def get_logger(name: str) -> logging.Logger:
    global _configured
    if not _configured:
        _configure(logging.getLogger(PACKAGE_LOGGER))
        _configured = True
    return logging.getLogger(name)


def _level() -> int:
    name = os.environ.get("LOG_LEVEL", "INFO").strip().upper()
    return getattr(logging, name, logging.INFO)


def _daily_file_handler(log_dir: Path) -> logging.Handler | None:
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        path = log_dir / f"jobmatch_{datetime.now().strftime('%Y-%m-%d')}.log"
        return logging.FileHandler(path, encoding="utf-8")
    except OSError:
        return None


def _configure(logger: logging.Logger) -> None:
    level = _level()
    logger.setLevel(level)
    formatter = logging.Formatter(_FORMAT, datefmt=_DATE_FMT)

    # Records still propagate; only add output when nobody else does.
    if not logging.getLogger().handlers:
        console = logging.StreamHandler(sys.stdout)
        console.setLevel(level)
        console.setFormatter(formatter)
        logger.addHandler(console)

    log_dir = os.environ.get("JOBMATCH_LOG_DIR", "").strip()
    if log_dir:
        fh = _daily_file_handler(Path(log_dir))
        if fh is not None:
            fh.setLevel(logging.DEBUG)
            fh.setFormatter(formatter)
            logger.addHandler(fh)
