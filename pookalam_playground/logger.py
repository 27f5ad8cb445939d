"""Logging utilities for the Pookalam Playground."""
from __future__ import annotations

import logging
import sys
from typing import Optional

ROOT_LOGGER = "pookalam"

_configured = False


def setup_logger(level: Optional[str] = None) -> logging.Logger:
    """Attach a console handler to the package logger and return it."""
    global _configured

    logger = logging.getLogger(ROOT_LOGGER)
    if level is None:
        from .config import get_config

        level = get_config().log_level
    log_level = getattr(logging, str(level).upper(), logging.INFO)
    logger.setLevel(log_level)

    if _configured:
        return logger

    # Avoid duplicate handlers
    if not logger.handlers:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%H:%M:%S",
            )
        )
        logger.addHandler(console_handler)

    _configured = True
    return logger


def get_logger(name: str = "") -> logging.Logger:
    """Return ``pookalam`` or one of its children (``pookalam.store``)."""
    if not name:
        return logging.getLogger(ROOT_LOGGER)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
