"""ESM project detection for Jest runs."""

import logging
import os
import re

from ..adapters.io import files
from ..domain.frameworks import PACKAGE_JSON, get_definition
from ..domain.models import Framework

logger = logging.getLogger(__name__)

_EXTENSIONS_TO_TREAT_AS_ESM = re.compile(r"extensionsToTreatAsEsm\s*[:=]")
_USE_ESM = re.compile(r"useESM\s*[:=]\s*true")


def _find_jest_config(project_dir: str) -> str | None:
    for config_file in get_definition(Framework.JEST).config_files:
        if config_file == PACKAGE_JSON:
            continue
        config_path = os.path.join(project_dir, config_file)
        if files.is_file(config_path):
            return config_path
    return None


def is_esm_project(project_dir: str, jest_config_path: str | None = None) -> bool:
    """
    Whether Jest must run the project as native ES modules.

    True when package.json declares ``"type": "module"``, or the Jest config
    sets ``extensionsToTreatAsEsm`` or ts-jest's ``useESM: true``.
    """
    package = files.load_json(os.path.join(project_dir, PACKAGE_JSON))
    if isinstance(package, dict) and package.get("type") == "module":
        logger.debug('ESM detected: package.json has "type": "module"')
        return True

    config_path = jest_config_path or _find_jest_config(project_dir)
    if not config_path:
        return False

    content = files.read_text(config_path)
    if content is None:
        return False
    if _EXTENSIONS_TO_TREAT_AS_ESM.search(content):
        logger.debug("ESM detected: jest config has extensionsToTreatAsEsm")
        return True
    if _USE_ESM.search(content):
        logger.debug("ESM detected: jest config has useESM: true")
        return True
    return False
