"""
Notification Port interface definition.

The sink for user-facing advisories such as pattern-conflict warnings. A
warning offers two actions; the port reports which one the user picked.
"""

from collections.abc import Sequence

from typing_extensions import Protocol

OPEN_OUTPUT_ACTION = "Open Output"
CONFIGURE_SETTINGS_ACTION = "Configure Settings"


class NotificationPort(Protocol):
    """Interface for showing warnings and acting on the user's choice."""

    def show_warning(self, message: str, actions: Sequence[str]) -> str | None:
        """
        Show a warning with action buttons.

        Args:
            message: Full warning text
            actions: Labels of the offered actions

        Returns:
            The selected action label, or None if the warning was dismissed
        """
        ...

    def open_output(self) -> None:
        """Reveal the log output."""
        ...

    def open_settings(self, query: str) -> None:
        """Open the settings view filtered by ``query``."""
        ...
