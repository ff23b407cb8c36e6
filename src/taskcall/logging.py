from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
import os
import sys


_configured = False
_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"


def _ensure_base_logger() -> None:
    global _configured
    if _configured:
        return
    # stdout belongs to the tasks; diagnostics go to stderr, quiet by default
    level = os.getenv("TASKCALL_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format=_FORMAT,
        stream=sys.stderr,
    )
    _configured = True


def get_logger(name: str, log_file: Path | None = None) -> logging.Logger:
    """Logger under the shared stderr config, optionally mirrored to `log_file`.

    A logger keeps at most one log file: asking for a different path swaps
    the old file handler out.
    """
    _ensure_base_logger()
    logger = logging.getLogger(name)
    if log_file is None:
        return logger
    target = os.path.abspath(log_file)
    for h in list(logger.handlers):
        if isinstance(h, RotatingFileHandler):
            if h.baseFilename == target:
                return logger
            logger.removeHandler(h)
            h.close()
    Path(target).parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(target, maxBytes=1_000_000, backupCount=3)
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    return logger
