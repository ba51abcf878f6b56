"""
Config-file change handling.

A file watcher (owned by the host) reports created, changed and deleted
paths. Changes to recognized config files invalidate detection and re-run
the pattern conflict check for the affected directory.
"""

import logging
import os
from enum import Enum

from ..domain.frameworks import recognized_config_filenames
from .engine import DetectionEngine

logger = logging.getLogger(__name__)


class ChangeKind(str, Enum):
    CREATED = "created"
    CHANGED = "changed"
    DELETED = "deleted"


class ConfigChangeHandler:
    """Routes config-file events to the engine's invalidation hooks."""

    def __init__(self, engine: DetectionEngine) -> None:
        self.engine = engine
        self._recognized = recognized_config_filenames()

    def is_recognized(self, path: str) -> bool:
        return os.path.basename(path) in self._recognized

    @staticmethod
    def owning_directory(path: str) -> str:
        """Directory a config applies to; ``test/jest-e2e.json`` belongs to its parent."""
        directory = os.path.dirname(os.path.normpath(path))
        if os.path.basename(path) == "jest-e2e.json" and os.path.basename(directory) == "test":
            return os.path.dirname(directory)
        return directory

    def handle(self, path: str, kind: ChangeKind | str = ChangeKind.CHANGED) -> bool:
        """
        Process one file event.

        Returns:
            True if the path was a recognized config file and caches were cleared
        """
        if not self.is_recognized(path):
            return False

        kind = ChangeKind(kind)
        logger.debug(f"Config file {kind.value}: {path}")
        self.engine.clear_test_detection_cache()
        self.engine.clear_vitest_detection_cache()

        directory = self.owning_directory(path)
        self.engine.conflicts.clear_warning_for_directory(directory)
        self.engine.check_pattern_conflict_for_directory(directory)
        return True
