"""
Application layer.

The detection engine and the services it composes: config discovery,
directory resolution, pattern matching, conflict detection and caching.
"""

from .config_locator import ConfigLocator, resolve_config_path_or_mapping
from .config_watcher import ChangeKind, ConfigChangeHandler
from .conflict_detector import ConflictDetector, detect_pattern_conflict
from .detection_cache import DetectionCache, TestFileCache
from .engine import DetectionEngine, PatternSource
from .esm_detection import is_esm_project
from .framework_resolver import FrameworkDirectoryResolver, parent_directories
from .pattern_matcher import file_matches_patterns, matches_test_patterns

__all__ = [
    "ChangeKind",
    "ConfigChangeHandler",
    "ConfigLocator",
    "ConflictDetector",
    "DetectionCache",
    "DetectionEngine",
    "FrameworkDirectoryResolver",
    "PatternSource",
    "TestFileCache",
    "detect_pattern_conflict",
    "file_matches_patterns",
    "is_esm_project",
    "matches_test_patterns",
    "parent_directories",
    "resolve_config_path_or_mapping",
]
