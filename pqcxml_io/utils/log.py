"""Logging helpers for the pqcxml_io package."""

# Module responsibilities:
# - Centralize logging configuration with file + stream handlers.
# - Provide get_logger() that ensures directories exist and configuration occurs once.

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path
from typing import Optional

DEFAULT_LOG_BASE = Path.home() / ".pqcxml" / "logs"
_LOG_CONFIGURED = False


def _resolve_log_dir(log_dir: Optional[Path] = None) -> Path:
    """Resolve the log directory, ensuring existence."""
    env_dir = os.getenv("PQCXML_LOG_DIR")
    target = log_dir or (Path(env_dir).expanduser() if env_dir else DEFAULT_LOG_BASE)
    target.mkdir(parents=True, exist_ok=True)
    return target


def _configure_logging(log_dir: Optional[Path] = None) -> None:
    """Configure package logging once with rotating file + console handlers."""
    global _LOG_CONFIGURED
    if _LOG_CONFIGURED:
        return

    directory = _resolve_log_dir(log_dir)
    log_path = directory / "pqcxml_io.log"

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    file_handler = logging.handlers.RotatingFileHandler(
        log_path, maxBytes=2_000_000, backupCount=3, encoding="utf-8"
    )
    file_handler.setFormatter(formatter)
    file_handler.setLevel(logging.INFO)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(logging.WARNING)

    root_logger = logging.getLogger("pqcxml_io")
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()
    root_logger.setLevel(logging.INFO)
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)
    root_logger.propagate = False

    _LOG_CONFIGURED = True


def get_logger(name: str, log_dir: Optional[Path] = None) -> logging.Logger:
    """Return a package-scoped logger.

    Args:
        name: Logger name suffix appended to the package root logger namespace.
        log_dir: Optional override for the logging directory.

    Returns:
        Configured logger scoped under ``pqcxml_io``.
    """

    _configure_logging(log_dir)
    return logging.getLogger(f"pqcxml_io.{name}")
