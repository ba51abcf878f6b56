"""Cypress config extractor: ``specPattern`` at the top level or under ``e2e``."""

import json
import logging
import re

from ...domain.models import TestPatterns
from .scanner import extract_value, find_object_block, strip_comments

logger = logging.getLogger(__name__)

_E2E_BLOCK = re.compile(r"(?<![\w$.])['\"]?e2e['\"]?\s*:\s*\{")


def parse_cypress_config(content: str, config_path: str) -> TestPatterns | None:
    """
    Extract the spec pattern of a Cypress config.

    The returned record has empty ``patterns`` when no ``specPattern`` is set;
    callers then fall back to the Cypress default spec pattern.
    """
    if config_path.endswith(".json"):
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            logger.debug(f"Invalid JSON in Cypress config {config_path}: {e}")
            return None
        if not isinstance(data, dict):
            return None
        e2e = data.get("e2e") if isinstance(data.get("e2e"), dict) else {}
        spec = e2e.get("specPattern") or data.get("specPattern")
        if isinstance(spec, str):
            return TestPatterns(patterns=[spec])
        if isinstance(spec, list):
            return TestPatterns(patterns=[p for p in spec if isinstance(p, str)])
        return TestPatterns()

    text = strip_comments(content)
    patterns: list[str] = []

    bounds = find_object_block(text, _E2E_BLOCK)
    if bounds is not None:
        value = extract_value(text[bounds[0] : bounds[1]], "specPattern")
        if value is not None and value.kind != "regex":
            patterns = value.as_list()

    if not patterns:
        value = extract_value(text, "specPattern")
        if value is not None and value.kind != "regex":
            patterns = value.as_list()

    if patterns:
        logger.debug(f"Found Cypress specPattern in {config_path}: {patterns}")
    return TestPatterns(patterns=patterns)
