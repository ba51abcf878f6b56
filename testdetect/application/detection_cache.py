"""
Detection caches.

``DetectionCache`` memoizes "is framework F usable at directory D" for Jest
and Vitest, and parsed ``TestPatterns`` per config file. The pattern memo
is keyed by the file's (mtime, size) signature so an edited config is
re-parsed. Directory entries are never evicted on their own: they live
until an explicit clear.

``TestFileCache`` memoizes per-file query results.

Both are guarded by a re-entrant lock so a multi-threaded host can share
one engine.
"""

import threading
from collections.abc import Callable
from typing import TypeVar

from ..domain.models import Framework, TestPatterns

T = TypeVar("T")

CACHED_FRAMEWORKS = (Framework.JEST, Framework.VITEST)

_MISSING = object()


class DetectionCache:
    """Per-directory framework usability plus a parsed-config memo."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._usable: dict[Framework, dict[str, bool]] = {
            framework: {} for framework in CACHED_FRAMEWORKS
        }
        self._patterns: dict[tuple[str, Framework], tuple[tuple[int, int] | None, TestPatterns | None]] = {}

    def get(self, framework: Framework, directory: str) -> bool | None:
        """Cached usability, or None when absent or not a cached framework."""
        with self._lock:
            entries = self._usable.get(framework)
            if entries is None:
                return None
            return entries.get(directory)

    def set(self, framework: Framework, directory: str, value: bool) -> None:
        with self._lock:
            entries = self._usable.get(framework)
            if entries is not None:
                entries[directory] = value

    def clear(self, framework: Framework) -> None:
        """Drop all usability entries of one framework."""
        with self._lock:
            entries = self._usable.get(framework)
            if entries is not None:
                entries.clear()

    def clear_all(self) -> None:
        with self._lock:
            for entries in self._usable.values():
                entries.clear()
            self._patterns.clear()

    def clear_patterns(self) -> None:
        with self._lock:
            self._patterns.clear()

    def get_patterns(
        self,
        config_path: str,
        framework: Framework,
        signature: tuple[int, int] | None,
        compute: Callable[[], TestPatterns | None],
    ) -> TestPatterns | None:
        """Return memoized patterns for an unchanged config, computing them otherwise."""
        key = (config_path, framework)
        with self._lock:
            cached = self._patterns.get(key)
            if cached is not None and signature is not None and cached[0] == signature:
                return cached[1]

        value = compute()
        with self._lock:
            self._patterns[key] = (signature, value)
        return value

    def __len__(self) -> int:
        with self._lock:
            return sum(len(entries) for entries in self._usable.values())


class TestFileCache:
    """Memoized per-file results, keyed by (query name, file path)."""

    __test__ = False  # not a pytest test class

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._results: dict[tuple[str, str], object] = {}

    def get_or_compute(self, query: str, file_path: str, compute: Callable[[], T]) -> T:
        key = (query, file_path)
        with self._lock:
            value = self._results.get(key, _MISSING)
        if value is not _MISSING:
            return value  # type: ignore[return-value]

        value = compute()
        with self._lock:
            self._results[key] = value
        return value  # type: ignore[return-value]

    def clear(self) -> None:
        with self._lock:
            self._results.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._results)
