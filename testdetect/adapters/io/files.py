"""
Blocking filesystem helpers.

Every helper treats an unreadable target (missing, permission denied,
deleted mid-read) as absent and never raises.
"""

import json
import logging
import os
from typing import Any

logger = logging.getLogger(__name__)


def exists(path: str) -> bool:
    return os.path.exists(path)


def is_file(path: str) -> bool:
    return os.path.isfile(path)


def read_text(path: str) -> str | None:
    """Read a UTF-8 text file, or None if it cannot be read."""
    try:
        with open(path, encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Could not read {path}: {e}")
        return None


def load_json(path: str) -> Any | None:
    """Parse a JSON file, or None if it is unreadable or malformed."""
    content = read_text(path)
    if content is None:
        return None
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        logger.debug(f"Invalid JSON in {path}: {e}")
        return None


def file_signature(path: str) -> tuple[int, int] | None:
    """(mtime_ns, size) of a file, used to notice content changes."""
    try:
        stat = os.stat(path)
    except OSError:
        return None
    return stat.st_mtime_ns, stat.st_size
