"""
testdetect - test-framework resolution and pattern matching for Jest and Vitest.

Given a file inside a (possibly multi-root, monorepo) workspace, decides
whether it is a test file and which framework and config own it, by
statically reading framework config files.
"""

from .application.engine import DetectionEngine
from .domain.models import Framework, FrameworkDirectoryResult, PatternConflictInfo, TestPatterns

__version__ = "0.1.0"

__all__ = [
    "DetectionEngine",
    "Framework",
    "FrameworkDirectoryResult",
    "PatternConflictInfo",
    "TestPatterns",
    "__version__",
]
