"""
Settings Port interface definition.

Exposes the user settings that influence detection: custom Jest and Vitest
config-path overrides and the Playwright opt-out.
"""

from typing_extensions import Protocol

from ..config.models import DetectionSettings


class SettingsPort(Protocol):
    """Interface for reading the current detection settings."""

    def get_detection_settings(self) -> DetectionSettings:
        """
        Return the settings in effect right now.

        Implementations may return a fresh object on every call; the engine
        never caches the result itself.
        """
        ...
