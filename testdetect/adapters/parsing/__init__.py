"""
Config parsers.

Each parser turns the raw text of one config format into a
``TestPatterns`` record, or None when the config has nothing usable. None
of them raise on malformed input.
"""

import os
from collections.abc import Callable

from ...domain.frameworks import DENO_CONFIG_FILES, PACKAGE_JSON
from ...domain.models import Framework, TestPatterns
from .cypress_parser import parse_cypress_config
from .deno_parser import parse_deno_config
from .jest_parser import parse_jest_config
from .playwright_parser import parse_playwright_config
from .vitest_parser import has_test_attribute, parse_vitest_config

ConfigParser = Callable[[str, str], TestPatterns | None]

PARSERS: dict[Framework, ConfigParser] = {
    Framework.JEST: parse_jest_config,
    Framework.VITEST: parse_vitest_config,
    Framework.CYPRESS: parse_cypress_config,
    Framework.PLAYWRIGHT: parse_playwright_config,
}


def framework_for_config(config_path: str) -> Framework | None:
    """Guess the framework a config file belongs to from its name."""
    name = os.path.basename(config_path).lower()
    if name.startswith("jest") or name.endswith("jest-e2e.json") or name == PACKAGE_JSON:
        return Framework.JEST
    if name.startswith(("vitest.", "vite.")):
        return Framework.VITEST
    if name.startswith("cypress"):
        return Framework.CYPRESS
    if name.startswith("playwright"):
        return Framework.PLAYWRIGHT
    return None


def parse_config(
    content: str, config_path: str, framework: Framework | None = None
) -> TestPatterns | None:
    """Parse ``content`` with the parser matching ``framework`` or the file name."""
    if framework is None and os.path.basename(config_path) in DENO_CONFIG_FILES:
        return parse_deno_config(content, config_path)

    framework = framework or framework_for_config(config_path)
    if framework is None:
        return None
    return PARSERS[framework](content, config_path)


__all__ = [
    "PARSERS",
    "ConfigParser",
    "framework_for_config",
    "has_test_attribute",
    "parse_config",
    "parse_cypress_config",
    "parse_deno_config",
    "parse_jest_config",
    "parse_playwright_config",
    "parse_vitest_config",
]
