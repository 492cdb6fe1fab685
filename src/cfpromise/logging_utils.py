"""Runtime logging helpers."""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<7} | {name}:{function}:{line} | {message}"
_CONFIGURED: tuple[str, Path | None] | None = None


def configure_logging(level: str = "INFO", log_file: Path | None = None) -> None:
    """Configure process-level logging once.

    Standard output carries the protocol, so logs go to stderr or to ``log_file``.
    """

    global _CONFIGURED
    key = (level.upper(), log_file)
    if key == _CONFIGURED:
        return

    logger.remove()
    logger.add(
        log_file if log_file is not None else sys.stderr,
        level=key[0],
        format=LOG_FORMAT,
        backtrace=False,
        diagnose=False,
    )
    _CONFIGURED = key
