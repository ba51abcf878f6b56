"""
Detection engine: the public query surface.

Composes config discovery, directory resolution, pattern matching and
conflict detection to answer "is this a test file, and which framework owns
it?" for callers such as a CodeLens provider, a test controller or a file
watcher. Every query is total: failures degrade to "not a test file" and
are logged, never raised.
"""

import logging
import os
from dataclasses import dataclass

from ..domain.frameworks import (
    DEFAULT_TEST_PATTERNS,
    E2E_FRAMEWORKS,
    get_definition,
)
from ..domain.models import (
    Framework,
    FrameworkDirectoryResult,
    PatternConflictInfo,
    TestPatterns,
)
from ..ports.notification_port import NotificationPort
from ..ports.settings_port import SettingsPort
from ..ports.workspace_port import WorkspacePort
from .config_locator import ConfigLocator
from .conflict_detector import ConflictDetector, detect_pattern_conflict
from .detection_cache import DetectionCache, TestFileCache
from .esm_detection import is_esm_project
from .framework_resolver import FrameworkDirectoryResolver, parent_directories
from .pattern_matcher import glob_matches, is_within, matches_test_patterns, to_posix

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PatternSource:
    """Patterns that apply to a file, anchored at their config's directory."""

    config_dir: str
    patterns: TestPatterns | None
    default_patterns: tuple[str, ...] = DEFAULT_TEST_PATTERNS

    def matches(self, file_path: str) -> bool:
        return matches_test_patterns(
            file_path, self.config_dir, self.patterns, self.default_patterns
        )


class DetectionEngine:
    """
    Test-file and framework queries over one workspace.

    Each engine owns its caches, so independent instances never share
    state.
    """

    def __init__(
        self,
        workspace: WorkspacePort,
        settings: SettingsPort | None = None,
        notifier: NotificationPort | None = None,
        cache: DetectionCache | None = None,
    ) -> None:
        self.workspace = workspace
        self.settings = settings
        self.cache = cache or DetectionCache()
        self.file_cache = TestFileCache()
        self.locator = ConfigLocator(self.cache, workspace, settings)
        self.conflicts = ConflictDetector(self.locator, notifier)
        self.resolver = FrameworkDirectoryResolver(self.locator, self.conflicts, workspace)

    # Queries

    def is_test_file(self, file_path: str) -> bool:
        file_path = _normalize(file_path)
        return self.file_cache.get_or_compute(
            "is_test_file", file_path, lambda: self._compute_is_test_file(file_path)
        )

    def _compute_is_test_file(self, file_path: str) -> bool:
        if not self.matches_test_file_pattern(file_path):
            return False

        result = self.resolver.find_framework_directory(file_path)
        if result is None:
            return False

        if self.has_conflicting_test_framework(file_path, result.framework):
            logger.debug(f"{file_path} lies in another end-to-end framework's territory")
            return False
        return True

    def is_jest_test_file(self, file_path: str) -> bool:
        file_path = _normalize(file_path)
        if not self.matches_test_file_pattern(file_path):
            return False
        return bool(
            self.resolver.find_jest_directory(file_path)
            or self.locator.resolve_custom_config(Framework.JEST, file_path)
        )

    def is_vitest_test_file(self, file_path: str) -> bool:
        file_path = _normalize(file_path)
        if not self.matches_test_file_pattern(file_path):
            return False
        return bool(
            self.resolver.find_vitest_directory(file_path)
            or self.locator.resolve_custom_config(Framework.VITEST, file_path)
        )

    def get_test_framework_for_file(self, file_path: str) -> Framework | None:
        result = self.find_test_framework_directory(file_path)
        return result.framework if result else None

    def find_test_framework_directory(
        self, file_path: str, target: Framework | None = None
    ) -> FrameworkDirectoryResult | None:
        return self.resolver.find_framework_directory(_normalize(file_path), target)

    def find_jest_directory(self, file_path: str) -> str | None:
        return self.resolver.find_jest_directory(_normalize(file_path))

    def find_vitest_directory(self, file_path: str) -> str | None:
        return self.resolver.find_vitest_directory(_normalize(file_path))

    def matches_test_file_pattern(self, file_path: str) -> bool:
        file_path = _normalize(file_path)
        return self.file_cache.get_or_compute(
            "matches_test_file_pattern",
            file_path,
            lambda: any(source.matches(file_path) for source in self.pattern_sources(file_path)),
        )

    def pattern_sources(self, file_path: str) -> list[PatternSource]:
        """
        Patterns that decide whether ``file_path`` is a test file.

        Custom config overrides come first. Otherwise the owning framework's
        config in the owning directory applies, and without an owner the
        default patterns anchored at the workspace root.
        """
        file_path = _normalize(file_path)
        root = self.workspace.get_workspace_root(file_path)
        if root is None:
            return [PatternSource(os.path.dirname(file_path), None)]

        jest_config = self.locator.resolve_custom_config(Framework.JEST, file_path)
        vitest_config = self.locator.resolve_custom_config(Framework.VITEST, file_path)
        if jest_config and vitest_config:
            framework = self.resolver.framework_by_pattern_match(file_path, jest_config, vitest_config)
            if framework is Framework.JEST:
                return [self._config_source(jest_config, Framework.JEST)]
            if framework is Framework.VITEST:
                return [self._config_source(vitest_config, Framework.VITEST)]
            return [
                self._config_source(jest_config, Framework.JEST),
                self._config_source(vitest_config, Framework.VITEST),
            ]
        if jest_config:
            return [self._config_source(jest_config, Framework.JEST)]
        if vitest_config:
            return [self._config_source(vitest_config, Framework.VITEST)]

        owner = self.resolver.find_framework_directory(file_path)
        if owner is None:
            return [PatternSource(root, None)]

        defaults = get_definition(owner.framework).default_patterns
        found = self.locator.find_config_with_patterns(owner.directory, owner.framework)
        if found is None:
            return [PatternSource(owner.directory, None, defaults)]
        config_path, patterns = found
        return [PatternSource(os.path.dirname(config_path), patterns, defaults)]

    def _config_source(self, config_path: str, framework: Framework) -> PatternSource:
        return PatternSource(
            os.path.dirname(config_path),
            self.locator.load_patterns(config_path, framework),
            get_definition(framework).default_patterns,
        )

    def has_conflicting_test_framework(self, file_path: str, current: Framework) -> bool:
        """Whether a Cypress or Playwright config other than ``current`` claims the file."""
        root = self.workspace.get_workspace_root(file_path)
        if root is None:
            return False

        for directory in parent_directories(os.path.dirname(file_path), root):
            for framework in E2E_FRAMEWORKS:
                if framework is current:
                    continue
                config_path = self.locator.get_config_path(directory, framework)
                if config_path is None:
                    continue
                patterns = self.locator.load_patterns(config_path, framework)

                if framework is Framework.PLAYWRIGHT:
                    test_dir = patterns.dir if patterns else None
                    if not test_dir or is_within(file_path, os.path.join(directory, test_dir)):
                        return True
                else:
                    specs = patterns.patterns if patterns else []
                    if specs:
                        relative = to_posix(os.path.relpath(file_path, directory))
                        if glob_matches(relative, specs):
                            return True
                    elif is_within(file_path, os.path.join(directory, "cypress")):
                        return True
        return False

    # Invalidation

    def clear_test_detection_cache(self) -> None:
        """Forget Jest detection results and everything derived from configs."""
        self.cache.clear(Framework.JEST)
        self.cache.clear_patterns()
        self.file_cache.clear()

    def clear_vitest_detection_cache(self) -> None:
        self.cache.clear(Framework.VITEST)
        self.cache.clear_patterns()
        self.file_cache.clear()

    def clear_all(self) -> None:
        self.cache.clear_all()
        self.file_cache.clear()

    def on_settings_changed(self) -> None:
        """Settings affect custom configs and Playwright detection; start over."""
        logger.debug("Detection settings changed, clearing caches")
        self.clear_all()

    # Conflicts

    def detect_pattern_conflict(
        self, jest_patterns: TestPatterns | None, vitest_patterns: TestPatterns | None
    ) -> PatternConflictInfo:
        return detect_pattern_conflict(jest_patterns, vitest_patterns)

    def show_pattern_conflict_warning(self, directory: str, info: PatternConflictInfo) -> bool:
        return self.conflicts.show_warning(directory, info)

    def clear_pattern_conflict_warnings(self) -> None:
        self.conflicts.clear_warnings()

    def has_warned_for_directory(self, directory: str) -> bool:
        return self.conflicts.has_warned(directory)

    def check_pattern_conflict_for_directory(self, directory: str) -> PatternConflictInfo | None:
        return self.conflicts.check_directory(directory)

    # Project facts

    def is_esm_project(self, project_dir: str, jest_config_path: str | None = None) -> bool:
        return is_esm_project(project_dir, jest_config_path)


def _normalize(file_path: str) -> str:
    return os.path.normpath(os.path.abspath(file_path))
