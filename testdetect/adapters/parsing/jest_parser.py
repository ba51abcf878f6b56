"""
Jest config extractor.

JSON configs (``jest.config.json``, ``test/jest-e2e.json`` and the ``jest``
block of ``package.json``) are parsed as JSON. JavaScript/TypeScript configs
are scanned for literal values of ``testMatch``, ``testRegex``, ``roots``,
``testPathIgnorePatterns`` and ``rootDir``.
"""

import json
import logging
import os
import re
from typing import Any

from ...domain.models import TestPatterns
from .scanner import extract_value, strip_comments

logger = logging.getLogger(__name__)

_ROOT_DIR_DIRNAME = re.compile(r"(?<![\w$.])['\"]?rootDir['\"]?\s*:\s*__dirname\b")


def parse_jest_config(content: str, config_path: str) -> TestPatterns | None:
    """
    Extract test patterns from the text of a Jest config.

    Returns None when the config carries none of the recognized keys or
    cannot be parsed.
    """
    if config_path.endswith(".json"):
        result = _parse_json_config(content, config_path)
    else:
        result = _parse_js_config(content, config_path)

    if result is not None:
        logger.debug(f"Parsed Jest config {config_path}: {result.to_dict()}")
    return result


def _string_list(value: Any) -> list[str] | None:
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [item for item in value if isinstance(item, str)]
    return None


def _parse_json_config(content: str, config_path: str) -> TestPatterns | None:
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        logger.debug(f"Invalid JSON in Jest config {config_path}: {e}")
        return None

    if os.path.basename(config_path) == "package.json":
        data = data.get("jest") if isinstance(data, dict) else None
    if not isinstance(data, dict):
        return None

    root_dir = data.get("rootDir") if isinstance(data.get("rootDir"), str) else None
    roots = data.get("roots") if isinstance(data.get("roots"), list) else None
    ignore = _string_list(data.get("testPathIgnorePatterns")) or None
    if roots is not None:
        roots = [root for root in roots if isinstance(root, str)]

    return _build(
        test_match=_string_list(data.get("testMatch")),
        test_regex=_string_list(data.get("testRegex")) or None,
        root_dir=root_dir,
        roots=roots,
        ignore_patterns=ignore,
    )


def _parse_js_config(content: str, config_path: str) -> TestPatterns | None:
    text = strip_comments(content)

    root_dir: str | None = None
    value = extract_value(text, "rootDir")
    if value is not None and value.kind == "string":
        root_dir = value.value  # type: ignore[assignment]
    elif _ROOT_DIR_DIRNAME.search(text):
        root_dir = os.path.dirname(config_path)

    # roots must be an array literal; an identifier is not followed elsewhere
    roots: list[str] | None = None
    value = extract_value(text, "roots")
    if value is not None and value.kind == "array":
        roots = value.as_list() or None

    ignore: list[str] | None = None
    value = extract_value(text, "testPathIgnorePatterns")
    if value is not None and value.kind != "regex":
        ignore = value.as_list() or None

    test_match: list[str] | None = None
    value = extract_value(text, "testMatch")
    if value is not None and value.kind != "regex":
        test_match = value.as_list()

    test_regex: list[str] | None = None
    value = extract_value(text, "testRegex")
    if value is not None:
        test_regex = value.as_list() or None

    return _build(test_match, test_regex, root_dir, roots, ignore)


def _build(
    test_match: list[str] | None,
    test_regex: list[str] | None,
    root_dir: str | None,
    roots: list[str] | None,
    ignore_patterns: list[str] | None,
) -> TestPatterns | None:
    # a present testMatch wins over testRegex even when empty
    if test_match is not None:
        patterns, is_regex = test_match, False
    elif test_regex:
        patterns, is_regex = test_regex, True
    else:
        patterns, is_regex = [], False

    if test_match is None and not patterns and not (root_dir or roots or ignore_patterns):
        return None

    return TestPatterns(
        patterns=patterns,
        is_regex=is_regex,
        root_dir=root_dir,
        roots=roots,
        ignore_patterns=ignore_patterns,
    )
