"""
Port interfaces for the testdetect system.

Protocols describing the external collaborators the detection engine
consumes: workspace lookup, settings, and user notifications.
"""

from .notification_port import (
    CONFIGURE_SETTINGS_ACTION,
    OPEN_OUTPUT_ACTION,
    NotificationPort,
)
from .settings_port import SettingsPort
from .workspace_port import WorkspacePort

__all__ = [
    "CONFIGURE_SETTINGS_ACTION",
    "NotificationPort",
    "OPEN_OUTPUT_ACTION",
    "SettingsPort",
    "WorkspacePort",
]
