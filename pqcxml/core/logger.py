from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path


_LOGGER: logging.Logger | None = None


def _work_dir() -> Path:
    override = os.getenv("PQCXML_WORK_DIR")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".pqcxml" / "work"


def get_logger(log_dir: Path | None = None) -> logging.Logger:
    """Return a configured application logger writing to <work dir>/logs/app.log.

    Creates the directory if needed. Uses rotating file handler.
    """
    global _LOGGER
    if _LOGGER is not None:
        return _LOGGER

    if log_dir is None:
        base = _work_dir() / "logs"
    else:
        base = Path(log_dir)
    base.mkdir(parents=True, exist_ok=True)
    log_path = base / "app.log"

    logger = logging.getLogger("pqcxml")
    logger.setLevel(logging.INFO)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    fmt = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    file_handler = RotatingFileHandler(log_path, maxBytes=2 * 1024 * 1024, backupCount=3, encoding="utf-8")
    file_handler.setFormatter(fmt)
    logger.addHandler(file_handler)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(fmt)
    logger.addHandler(console)

    _LOGGER = logger
    return logger
