"""Playwright config extractor: ``testMatch``, ``testIgnore`` and ``testDir``."""

import json
import logging
from typing import Any

from ...domain.models import TestPatterns
from .scanner import extract_value, strip_comments

logger = logging.getLogger(__name__)


def _string_list(value: Any) -> list[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [item for item in value if isinstance(item, str)]
    return []


def parse_playwright_config(content: str, config_path: str) -> TestPatterns | None:
    """
    Extract the test selection of a Playwright config.

    ``testMatch`` may be a glob, a list of globs or a regex literal; a regex
    literal yields a regex record. ``testIgnore`` globs become exclusions and
    ``testDir`` restricts discovery. Empty ``patterns`` means the Playwright
    default ``testMatch`` applies.
    """
    if config_path.endswith(".json"):
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            logger.debug(f"Invalid JSON in Playwright config {config_path}: {e}")
            return None
        if not isinstance(data, dict):
            return None
        return TestPatterns(
            patterns=_string_list(data.get("testMatch")),
            exclude_patterns=_string_list(data.get("testIgnore")) or None,
            dir=data.get("testDir") if isinstance(data.get("testDir"), str) else None,
        )

    text = strip_comments(content)

    patterns: list[str] = []
    is_regex = False
    value = extract_value(text, "testMatch")
    if value is not None:
        patterns = value.as_list()
        is_regex = value.kind == "regex"

    exclude = None
    value = extract_value(text, "testIgnore")
    if value is not None and value.kind != "regex":
        exclude = value.as_list() or None

    test_dir = None
    value = extract_value(text, "testDir")
    if value is not None and value.kind == "string":
        test_dir = value.value

    result = TestPatterns(
        patterns=patterns,
        is_regex=is_regex and bool(patterns),
        exclude_patterns=exclude,
        dir=test_dir,  # type: ignore[arg-type]
    )
    logger.debug(f"Parsed Playwright config {config_path}: {result.to_dict()}")
    return result
