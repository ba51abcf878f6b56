"""In-memory settings store."""

from typing import Any

from ...config.models import DetectionSettings
from ...ports.settings_port import SettingsPort


class SettingsStore(SettingsPort):
    """Holds the current detection settings and allows replacing them."""

    def __init__(self, settings: DetectionSettings | None = None) -> None:
        self._settings = settings or DetectionSettings()

    def get_detection_settings(self) -> DetectionSettings:
        return self._settings

    def update(self, **changes: Any) -> DetectionSettings:
        """Apply field changes and return the new settings."""
        data = self._settings.model_dump()
        data.update(changes)
        self._settings = DetectionSettings(**data)
        return self._settings
