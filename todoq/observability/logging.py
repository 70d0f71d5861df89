"""
Logging setup for todoq.

Every module logger lives under the "todoq" namespace. A single stream
handler is attached to that namespace on first use, so uvicorn and SDK
loggers keep whatever configuration they already have.
"""

from __future__ import annotations

import logging
import os
from typing import Final

NAMESPACE: Final[str] = "todoq"
_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_handler: logging.Handler | None = None


def _resolve_level(level: str | None) -> int:
    name = (level or os.getenv("TODOQ_LOG_LEVEL") or "INFO").upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: str | None = None) -> logging.Logger:
    """
    Attach the todoq handler (once) and set the namespace level.

    Args:
        level: Level name; defaults to TODOQ_LOG_LEVEL, then INFO

    Returns:
        The "todoq" namespace logger
    """
    global _handler

    base = logging.getLogger(NAMESPACE)
    if _handler is None:
        _handler = logging.StreamHandler()
        _handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        base.addHandler(_handler)
    base.setLevel(_resolve_level(level))
    return base


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the todoq namespace, configuring it on first use."""
    if _handler is None:
        configure_logging()
    if name != NAMESPACE and not name.startswith(f"{NAMESPACE}."):
        name = f"{NAMESPACE}.{name}"
    return logging.getLogger(name)
