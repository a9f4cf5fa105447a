"""
Logging configuration.
"""

from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _resolve_level(level_name: str) -> int:
    return getattr(logging, level_name.upper(), logging.INFO)


def configure_logging() -> None:
    """Configure root logging from LOG_LEVEL (default INFO)."""
    level = _resolve_level(os.environ.get("LOG_LEVEL", "INFO").strip() or "INFO")
    root_logger = logging.getLogger()

    # uvicorn may have installed handlers already; reuse them.
    if root_logger.handlers:
        root_logger.setLevel(level)
        for handler in root_logger.handlers:
            handler.setLevel(level)
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
        return

    logging.basicConfig(level=level, format=LOG_FORMAT)
