"""
Config discovery for one directory.

Answers which framework config files exist in a directory, whether a
framework is usable there (config, ``package.json`` declaration or local
binary), and resolves the user's custom config-path overrides.
"""

import logging
import os
from collections.abc import Mapping

from wcmatch import glob

from ..adapters.io import files
from ..adapters.parsing import PARSERS, has_test_attribute
from ..config.models import DetectionSettings
from ..domain.frameworks import PACKAGE_JSON, VITE_CONFIG_FILES, get_definition
from ..domain.models import Framework, TestPatterns
from ..ports.settings_port import SettingsPort
from ..ports.workspace_port import WorkspacePort
from .detection_cache import CACHED_FRAMEWORKS, DetectionCache
from .pattern_matcher import globmatch, to_posix

logger = logging.getLogger(__name__)

DEPENDENCY_SECTIONS = ("dependencies", "devDependencies", "peerDependencies")

MAPPING_GLOB_FLAGS = glob.GLOBSTAR | glob.BRACE | glob.EXTGLOB | glob.FORCEUNIX


def resolve_config_path_or_mapping(
    value: str | Mapping[str, str] | None,
    file_path: str,
    workspace_root: str | None = None,
) -> str | None:
    """
    Pick the config path that applies to ``file_path``.

    A plain string applies to every file. For a mapping of glob to path the
    first glob matching the file wins; globs are tried against the absolute
    path and, when known, the path relative to the workspace root.
    """
    if value is None or isinstance(value, str):
        return value

    candidates = [to_posix(file_path), to_posix(file_path).lstrip("/")]
    if workspace_root:
        candidates.append(to_posix(os.path.relpath(file_path, workspace_root)))

    for pattern, config_path in value.items():
        if any(globmatch(c, pattern, flags=MAPPING_GLOB_FLAGS) for c in candidates):
            return to_posix(config_path)

    if value:
        logger.warning(f"No glob pattern in config path mapping matched: {file_path}")
    return None


class ConfigLocator:
    """Finds and reads framework configs, memoizing through a DetectionCache."""

    def __init__(
        self,
        cache: DetectionCache,
        workspace: WorkspacePort,
        settings: SettingsPort | None = None,
    ) -> None:
        self.cache = cache
        self.workspace = workspace
        self.settings = settings

    def _settings(self) -> DetectionSettings:
        if self.settings is None:
            return DetectionSettings()
        return self.settings.get_detection_settings()

    def _is_disabled(self, framework: Framework) -> bool:
        return framework is Framework.PLAYWRIGHT and self._settings().disable_playwright

    def get_config_path(self, directory: str, framework: Framework) -> str | None:
        """First existing config file of ``framework`` in ``directory``."""
        if self._is_disabled(framework):
            return None

        for config_file in get_definition(framework).config_files:
            config_path = os.path.join(directory, config_file)
            if not files.is_file(config_path):
                continue

            if config_file in VITE_CONFIG_FILES:
                content = files.read_text(config_path)
                if content is not None and has_test_attribute(content, config_path):
                    return config_path
            elif config_file == PACKAGE_JSON:
                data = files.load_json(config_path)
                if isinstance(data, dict) and "jest" in data:
                    return config_path
            else:
                return config_path

        return None

    @staticmethod
    def binary_exists(directory: str, binary_name: str) -> bool:
        candidates = (
            os.path.join(directory, "node_modules", ".bin", binary_name),
            os.path.join(directory, "node_modules", ".bin", f"{binary_name}.cmd"),
            os.path.join(directory, "node_modules", binary_name, PACKAGE_JSON),
        )
        return any(files.exists(candidate) for candidate in candidates)

    def package_json_declares(self, directory: str, framework: Framework) -> bool:
        """Dependency entry or same-named top-level block in package.json."""
        package_json = os.path.join(directory, PACKAGE_JSON)
        if not files.is_file(package_json):
            return False
        data = files.load_json(package_json)
        if not isinstance(data, dict):
            return False

        keys = get_definition(framework).package_keys
        for section in DEPENDENCY_SECTIONS:
            deps = data.get(section)
            if isinstance(deps, dict) and any(deps.get(key) for key in keys):
                return True
        return bool(data.get(framework.value))

    def _detect(self, directory: str, framework: Framework) -> bool:
        definition = get_definition(framework)
        return (
            self.binary_exists(directory, definition.binary_name)
            or self.get_config_path(directory, framework) is not None
            or self.package_json_declares(directory, framework)
        )

    def is_framework_used_in(self, directory: str, framework: Framework) -> bool:
        """Whether ``framework`` is usable at ``directory``; Jest and Vitest are cached."""
        if self._is_disabled(framework):
            return False

        if framework in CACHED_FRAMEWORKS:
            cached = self.cache.get(framework, directory)
            if cached is not None:
                return cached

        used = self._detect(directory, framework)
        if framework in CACHED_FRAMEWORKS:
            self.cache.set(framework, directory, used)
        return used

    def resolve_custom_config(self, framework: Framework, file_path: str) -> str | None:
        """Absolute path of the user's custom config for ``file_path``, if it exists."""
        settings = self._settings()
        if framework is Framework.JEST:
            value = settings.config_path
        elif framework is Framework.VITEST:
            value = settings.vitest_config_path
        else:
            return None
        if not value:
            return None

        root = self.workspace.get_workspace_root(file_path)
        if root is None:
            return None

        resolved = resolve_config_path_or_mapping(value, file_path, root)
        if not resolved:
            return None

        full_path = os.path.normpath(os.path.join(root, resolved))
        if not files.is_file(full_path):
            logger.debug(f"Custom {framework} config does not exist: {full_path}")
            return None
        return full_path

    def load_patterns(self, config_path: str, framework: Framework) -> TestPatterns | None:
        """Parsed patterns of one config, memoized until the file changes."""

        def compute() -> TestPatterns | None:
            content = files.read_text(config_path)
            if content is None:
                return None
            return PARSERS[framework](content, config_path)

        return self.cache.get_patterns(
            config_path, framework, files.file_signature(config_path), compute
        )

    def find_config_with_patterns(
        self, directory: str, framework: Framework
    ) -> tuple[str, TestPatterns] | None:
        """First config of ``framework`` in ``directory`` that yields patterns."""
        if self._is_disabled(framework):
            return None

        for config_file in get_definition(framework).config_files:
            config_path = os.path.join(directory, config_file)
            if not files.is_file(config_path):
                continue
            patterns = self.load_patterns(config_path, framework)
            if patterns is not None:
                return config_path, patterns
        return None
