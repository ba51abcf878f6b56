"""
Vitest / Vite config extractor.

Reads ``include``, ``exclude`` and ``dir`` from the ``test`` block and the
project ``root`` from outside of it.
"""

import json
import logging
import os
import re

from ...domain.models import TestPatterns
from .scanner import extract_value, find_object_block, mask_range, strip_comments

logger = logging.getLogger(__name__)

# `test:` or `test =`, but not `test ==` or `test =>`
TEST_ATTRIBUTE = re.compile(r"(?<![\w$])['\"]?test['\"]?\s*(?::|=(?![=>]))")
_TEST_BLOCK = re.compile(r"(?<![\w$])['\"]?test['\"]?\s*(?::|=(?![=>]))\s*\{")
_ROOT_DIRNAME = re.compile(r"(?<![\w$.])['\"]?root['\"]?\s*:\s*__dirname\b")


def has_test_attribute(content: str, config_path: str) -> bool:
    """Whether a vite config declares the Vitest ``test`` attribute."""
    if config_path.endswith(".json"):
        try:
            data = json.loads(content)
        except json.JSONDecodeError:
            return False
        return isinstance(data, dict) and "test" in data
    return TEST_ATTRIBUTE.search(strip_comments(content)) is not None


def parse_vitest_config(content: str, config_path: str) -> TestPatterns | None:
    """Extract test patterns from the text of a Vitest or Vite config."""
    if config_path.endswith(".json"):
        result = _parse_json_config(content)
    else:
        result = _parse_js_config(content, config_path)

    if result is not None:
        logger.debug(f"Parsed Vitest config {config_path}: {result.to_dict()}")
    return result


def _parse_json_config(content: str) -> TestPatterns | None:
    try:
        data = json.loads(content)
    except json.JSONDecodeError:
        return None
    if not isinstance(data, dict) or not isinstance(data.get("test"), dict):
        return None

    test = data["test"]
    include = test.get("include") if isinstance(test.get("include"), list) else None
    exclude = test.get("exclude") if isinstance(test.get("exclude"), list) else None
    test_dir = test.get("dir") if isinstance(test.get("dir"), str) else None
    root = data.get("root") if isinstance(data.get("root"), str) else None

    return _build(include, exclude, test_dir, root)


def _parse_js_config(content: str, config_path: str) -> TestPatterns | None:
    text = strip_comments(content)
    bounds = find_object_block(text, _TEST_BLOCK)
    if bounds is None:
        return None

    start, end = bounds
    block = text[start:end]

    # Only keys directly inside the test block count; coverage.include is not a test pattern
    include = exclude = None
    value = extract_value(block, "include", top_level_only=True)
    if value is not None and value.kind == "array":
        include = value.as_list()
    value = extract_value(block, "exclude", top_level_only=True)
    if value is not None and value.kind == "array":
        exclude = value.as_list()

    test_dir = None
    value = extract_value(block, "dir", top_level_only=True)
    if value is not None and value.kind == "string":
        test_dir = value.value

    outside = mask_range(text, start, end)
    root = None
    value = extract_value(outside, "root")
    if value is not None and value.kind == "string":
        root = value.value
    elif _ROOT_DIRNAME.search(outside):
        root = os.path.dirname(config_path)

    return _build(include, exclude, test_dir, root)  # type: ignore[arg-type]


def _build(
    include: list[str] | None,
    exclude: list[str] | None,
    test_dir: str | None,
    root: str | None,
) -> TestPatterns | None:
    include = [p for p in include if isinstance(p, str)] if include else None
    exclude = [p for p in exclude if isinstance(p, str)] if exclude else None
    if not include and not exclude and not test_dir and not root:
        return None
    return TestPatterns(
        patterns=include or [],
        root_dir=root,
        exclude_patterns=exclude or None,
        dir=test_dir,
    )
