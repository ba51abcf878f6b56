"""
Framework directory resolution.

Walks from a file's directory up to its workspace root and stops at the
first directory where any framework is detected. A closer framework masks a
farther one even when the caller is looking for a different framework: the
nearest test-runner boundary owns the file.
"""

import logging
import os

from ..domain.frameworks import DETECTION_ORDER
from ..domain.models import Framework, FrameworkDirectoryResult
from ..ports.workspace_port import WorkspacePort
from .config_locator import ConfigLocator
from .conflict_detector import ConflictDetector
from .pattern_matcher import is_within, matches_test_patterns

logger = logging.getLogger(__name__)


def parent_directories(start_dir: str, root: str) -> list[str]:
    """``start_dir`` and its ancestors up to and including ``root``.

    Empty when ``start_dir`` is not inside ``root``.
    """
    current = os.path.normpath(start_dir)
    root = os.path.normpath(root)
    if not is_within(current, root):
        return []

    directories = [current]
    while current != root:
        parent = os.path.dirname(current)
        if parent == current:
            break
        current = parent
        directories.append(current)
    return directories


class FrameworkDirectoryResolver:
    """Finds the directory and framework owning a file."""

    def __init__(
        self,
        locator: ConfigLocator,
        conflicts: ConflictDetector,
        workspace: WorkspacePort,
    ) -> None:
        self.locator = locator
        self.conflicts = conflicts
        self.workspace = workspace

    def framework_by_pattern_match(
        self, file_path: str, jest_config: str, vitest_config: str
    ) -> Framework | None:
        """
        Choose between Jest and Vitest configs by their explicit patterns.

        With explicit patterns on both sides the side that exclusively
        matches wins. With explicit patterns on one side only, that side
        wins if it matches and yields to the other side otherwise. Returns
        None when this is inconclusive.
        """
        jest_patterns = self.locator.load_patterns(jest_config, Framework.JEST)
        vitest_patterns = self.locator.load_patterns(vitest_config, Framework.VITEST)

        jest_explicit = jest_patterns is not None and jest_patterns.has_explicit_patterns
        vitest_explicit = vitest_patterns is not None and vitest_patterns.has_explicit_patterns

        jest_matches = jest_explicit and matches_test_patterns(
            file_path, os.path.dirname(jest_config), jest_patterns
        )
        vitest_matches = vitest_explicit and matches_test_patterns(
            file_path, os.path.dirname(vitest_config), vitest_patterns
        )

        if jest_explicit and vitest_explicit:
            if jest_matches and not vitest_matches:
                return Framework.JEST
            if vitest_matches and not jest_matches:
                return Framework.VITEST
            return None
        if jest_explicit:
            return Framework.JEST if jest_matches else Framework.VITEST
        if vitest_explicit:
            return Framework.VITEST if vitest_matches else Framework.JEST
        return None

    def detect_framework(self, directory: str, file_path: str | None = None) -> Framework | None:
        """The framework authoritative at ``directory``, if any."""
        jest_config = self.locator.get_config_path(directory, Framework.JEST)
        vitest_config = self.locator.get_config_path(directory, Framework.VITEST)

        if jest_config and vitest_config:
            if file_path:
                by_pattern = self.framework_by_pattern_match(file_path, jest_config, vitest_config)
                if by_pattern is not None:
                    return by_pattern
            self.conflicts.check_directory(directory)

        for framework in DETECTION_ORDER:
            if self.locator.is_framework_used_in(directory, framework):
                return framework
        return None

    def _resolve_custom_configs(
        self, file_path: str, root: str, target: Framework | None
    ) -> FrameworkDirectoryResult | None:
        jest_config = self.locator.resolve_custom_config(Framework.JEST, file_path)
        vitest_config = self.locator.resolve_custom_config(Framework.VITEST, file_path)
        if not jest_config and not vitest_config:
            return None

        if jest_config and vitest_config:
            framework = self.framework_by_pattern_match(file_path, jest_config, vitest_config)
            if framework is None:
                framework = Framework.VITEST
        else:
            framework = Framework.JEST if jest_config else Framework.VITEST

        if target is not None and framework is not target:
            return None
        return FrameworkDirectoryResult(directory=root, framework=framework)

    def find_framework_directory(
        self, file_path: str, target: Framework | None = None
    ) -> FrameworkDirectoryResult | None:
        """
        Nearest directory (inclusive) owning ``file_path``.

        Args:
            file_path: Absolute path of the file
            target: Only accept this framework

        Returns:
            The owning directory and framework, or None when the file is
            outside the workspace, unowned, or owned by a framework other
            than ``target``
        """
        file_path = os.path.normpath(os.path.abspath(file_path))
        root = self.workspace.get_workspace_root(file_path)
        if root is None:
            logger.debug(f"{file_path} is outside every workspace folder")
            return None

        custom = self._resolve_custom_configs(file_path, root, target)
        if custom is not None:
            return custom

        for directory in parent_directories(os.path.dirname(file_path), root):
            framework = self.detect_framework(directory, file_path)
            if framework is None:
                continue
            if target is not None and framework is not target:
                logger.debug(
                    f"{file_path} belongs to {framework} at {directory}, not {target}"
                )
                return None
            return FrameworkDirectoryResult(directory=directory, framework=framework)

        candidates = [target] if target is not None else [Framework.VITEST, Framework.JEST]
        for framework in candidates:
            if self.locator.is_framework_used_in(root, framework):
                return FrameworkDirectoryResult(directory=root, framework=framework)
        return None

    def find_jest_directory(self, file_path: str) -> str | None:
        result = self.find_framework_directory(file_path, Framework.JEST)
        return result.directory if result else None

    def find_vitest_directory(self, file_path: str) -> str | None:
        result = self.find_framework_directory(file_path, Framework.VITEST)
        return result.directory if result else None
