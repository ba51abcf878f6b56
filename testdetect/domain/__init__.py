"""Domain models and the framework registry."""

from .frameworks import (
    DEFAULT_TEST_PATTERNS,
    DETECTION_ORDER,
    FRAMEWORK_DEFINITIONS,
    FrameworkDefinition,
    get_definition,
    recognized_config_filenames,
)
from .models import (
    ConflictReason,
    Framework,
    FrameworkDirectoryResult,
    PatternConflictInfo,
    TestPatterns,
)

__all__ = [
    "ConflictReason",
    "DEFAULT_TEST_PATTERNS",
    "DETECTION_ORDER",
    "FRAMEWORK_DEFINITIONS",
    "Framework",
    "FrameworkDefinition",
    "FrameworkDirectoryResult",
    "PatternConflictInfo",
    "TestPatterns",
    "get_definition",
    "recognized_config_filenames",
]
