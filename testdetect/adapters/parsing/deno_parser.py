"""Deno config extractor (``deno.json`` / ``deno.jsonc``)."""

import json
import logging
import os
import re
from typing import Any

from ...domain.models import TestPatterns
from .scanner import strip_comments

logger = logging.getLogger(__name__)

_TRAILING_COMMA = re.compile(r",(\s*[\]}])")


def _load_jsonc(content: str) -> Any:
    try:
        return json.loads(content)
    except json.JSONDecodeError:
        relaxed = _TRAILING_COMMA.sub(r"\1", strip_comments(content))
        return json.loads(relaxed)


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def parse_deno_config(content: str, config_path: str) -> TestPatterns | None:
    """
    Read ``test.include`` and ``test.exclude``.

    A top-level ``exclude`` applies to every Deno subcommand and is not
    merged into the test exclusions.
    """
    try:
        data = _load_jsonc(content)
    except json.JSONDecodeError as e:
        logger.debug(f"Failed to parse Deno config as JSON/JSONC {config_path}: {e}")
        return None

    if not isinstance(data, dict) or not isinstance(data.get("test"), dict):
        return None

    test = data["test"]
    include = [p for p in _as_list(test.get("include")) if isinstance(p, str)]
    exclude = [p for p in _as_list(test.get("exclude")) if isinstance(p, str)]
    if not include and not exclude:
        return None

    logger.debug(f"Parsed Deno config {config_path}: include={include}, exclude={exclude}")
    return TestPatterns(
        patterns=include,
        exclude_patterns=exclude or None,
        root_dir=os.path.dirname(config_path),
    )
