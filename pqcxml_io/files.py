"""Package directory listing helpers."""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Pattern, Union

from .utils.log import get_logger

logger = get_logger("files")

DEFAULT_MEDIA_PATTERN = r"\.tiff?$"


def compile_pattern(pattern: Union[str, Pattern[str], None]) -> Pattern[str]:
    """Compile a media name pattern; plain strings match case-insensitively."""

    if pattern is None:
        pattern = DEFAULT_MEDIA_PATTERN
    if isinstance(pattern, str):
        return re.compile(pattern, re.IGNORECASE)
    return pattern


def list_media_files(directory: Path, pattern: Union[str, Pattern[str], None] = None) -> List[str]:
    """Return sorted basenames of files in *directory* whose names match *pattern*.

    Raises:
        FileNotFoundError: When the directory does not exist.
    """

    directory = Path(directory)
    if not directory.is_dir():
        raise FileNotFoundError(f"Package directory not found: {directory}")

    regex = compile_pattern(pattern)
    names = sorted(
        entry.name for entry in directory.iterdir() if entry.is_file() and regex.search(entry.name)
    )
    logger.info(
        "Listed media files",
        extra={"directory": str(directory), "pattern": regex.pattern, "count": len(names)},
    )
    return names
