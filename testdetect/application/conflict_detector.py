"""
Jest/Vitest pattern conflict detection.

When one directory configures both frameworks and their effective patterns
select the same files, the owner of a test file cannot be told apart. This
is an advisory only: it never changes matching. Warnings are shown once per
directory until cleared.
"""

import logging
import threading
from collections.abc import Sequence

from ..domain.frameworks import DEFAULT_TEST_PATTERNS
from ..domain.models import ConflictReason, Framework, PatternConflictInfo, TestPatterns
from ..ports.notification_port import (
    CONFIGURE_SETTINGS_ACTION,
    OPEN_OUTPUT_ACTION,
    NotificationPort,
)
from .config_locator import ConfigLocator

logger = logging.getLogger(__name__)

SETTINGS_QUERY = "detection"

_MESSAGES = {
    ConflictReason.BOTH_DEFAULT: (
        'Both Jest and Vitest detected in "{directory}" but neither has explicit '
        "test patterns. Cannot determine which framework to use for test files."
    ),
    ConflictReason.BOTH_SAME_EXPLICIT: (
        'Both Jest and Vitest detected in "{directory}" with identical test '
        "patterns. Cannot determine which framework to use for test files."
    ),
    ConflictReason.EXPLICIT_MATCHES_DEFAULT: (
        'Both Jest and Vitest detected in "{directory}" with overlapping test '
        "patterns (one explicit, one default). Cannot determine which framework "
        "to use for test files."
    ),
}

SUGGESTION = (
    "Configure distinct testMatch/testRegex (Jest) or test.include (Vitest) "
    "patterns to resolve this."
)


def patterns_equal(first: Sequence[str], second: Sequence[str]) -> bool:
    """Order-insensitive comparison of two pattern lists."""
    return sorted(first) == sorted(second)


def detect_pattern_conflict(
    jest_patterns: TestPatterns | None, vitest_patterns: TestPatterns | None
) -> PatternConflictInfo:
    """Classify whether the two frameworks compete for the same files."""
    jest_is_default = jest_patterns is None or not jest_patterns.patterns
    vitest_is_default = vitest_patterns is None or not vitest_patterns.patterns
    jest_effective = list(DEFAULT_TEST_PATTERNS) if jest_is_default else list(jest_patterns.patterns)  # type: ignore[union-attr]
    vitest_effective = list(DEFAULT_TEST_PATTERNS) if vitest_is_default else list(vitest_patterns.patterns)  # type: ignore[union-attr]

    reason: ConflictReason | None = None
    if jest_is_default and vitest_is_default:
        reason = ConflictReason.BOTH_DEFAULT
    elif not jest_is_default and not vitest_is_default:
        if patterns_equal(jest_effective, vitest_effective):
            reason = ConflictReason.BOTH_SAME_EXPLICIT
    elif not jest_is_default and patterns_equal(jest_effective, DEFAULT_TEST_PATTERNS):
        reason = ConflictReason.EXPLICIT_MATCHES_DEFAULT
    elif not vitest_is_default and patterns_equal(vitest_effective, DEFAULT_TEST_PATTERNS):
        reason = ConflictReason.EXPLICIT_MATCHES_DEFAULT

    return PatternConflictInfo(
        has_conflict=reason is not None,
        reason=reason,
        jest_patterns=jest_effective,
        vitest_patterns=vitest_effective,
        jest_is_default=jest_is_default,
        vitest_is_default=vitest_is_default,
    )


class ConflictDetector:
    """Classifies conflicts and shows deduplicated, per-directory warnings."""

    def __init__(
        self, locator: ConfigLocator, notifier: NotificationPort | None = None
    ) -> None:
        self.locator = locator
        self.notifier = notifier
        self._warned: set[str] = set()
        self._lock = threading.Lock()

    detect = staticmethod(detect_pattern_conflict)

    def show_warning(self, directory: str, info: PatternConflictInfo) -> bool:
        """
        Warn about a conflict in ``directory`` unless already warned.

        Returns:
            True if a warning was emitted by this call
        """
        if not info.has_conflict or info.reason is None:
            return False

        with self._lock:
            if directory in self._warned:
                return False
            self._warned.add(directory)

        message = f"{_MESSAGES[info.reason].format(directory=directory)} {SUGGESTION}"
        logger.warning(message)
        logger.debug(
            f"Pattern conflict details: Jest patterns={info.jest_patterns} "
            f"(default={info.jest_is_default}), Vitest patterns={info.vitest_patterns} "
            f"(default={info.vitest_is_default})"
        )

        if self.notifier is not None:
            selection = self.notifier.show_warning(
                message, [OPEN_OUTPUT_ACTION, CONFIGURE_SETTINGS_ACTION]
            )
            if selection == OPEN_OUTPUT_ACTION:
                self.notifier.open_output()
            elif selection == CONFIGURE_SETTINGS_ACTION:
                self.notifier.open_settings(SETTINGS_QUERY)
        return True

    def clear_warnings(self) -> None:
        with self._lock:
            self._warned.clear()

    def has_warned(self, directory: str) -> bool:
        with self._lock:
            return directory in self._warned

    def clear_warning_for_directory(self, directory: str) -> None:
        with self._lock:
            if directory in self._warned:
                self._warned.discard(directory)
                logger.debug(f"Cleared pattern conflict warning for {directory} due to config change")

    def conflict_for_directory(self, directory: str) -> PatternConflictInfo | None:
        """Conflict classification for ``directory``; None unless both frameworks are configured there."""
        jest_config = self.locator.get_config_path(directory, Framework.JEST)
        vitest_config = self.locator.get_config_path(directory, Framework.VITEST)
        if jest_config is None or vitest_config is None:
            return None

        jest_patterns = self.locator.load_patterns(jest_config, Framework.JEST)
        vitest_patterns = self.locator.load_patterns(vitest_config, Framework.VITEST)
        return detect_pattern_conflict(jest_patterns, vitest_patterns)

    def check_directory(self, directory: str) -> PatternConflictInfo | None:
        """Re-evaluate ``directory`` and warn when its configs conflict."""
        info = self.conflict_for_directory(directory)
        if info is not None and info.has_conflict:
            self.show_warning(directory, info)
        return info
