# gguf_probe/logging.py
"""
Logging setup using Loguru, friendly for concurrent environments.

The library only emits through ``loguru.logger``; sinks are configured here
by the CLI (or by an embedding application).
"""
from __future__ import annotations

import sys
from typing import Any

from loguru import logger


def configure_logging(*, debug: bool = False, sink: Any = None) -> None:
    """Configure loguru logging sinks.

    Args:
        debug: Enable verbose debug logging, including per-key scan traces.
        sink: Where to write; defaults to stderr.
    """
    logger.remove()
    level = "DEBUG" if debug else "INFO"
    fmt = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> "
        "| <level>{level: <8}</level> "
        "| pid={process} tid={thread} "
        "<cyan>{module}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> "
        "- <level>{message}</level>"
    )
    logger.add(
        sink if sink is not None else sys.stderr,
        level=level,
        format=fmt,
        enqueue=True,
        backtrace=debug,
        diagnose=debug,
    )
