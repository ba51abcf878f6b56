"""
IO adapters.

Filesystem helpers and concrete implementations of the workspace, settings
and notification ports, plus logging setup.
"""

from . import files
from .logging_setup import LoggerManager, setup_logging
from .notifications import ConsoleNotifier
from .settings import SettingsStore
from .workspace import WorkspaceFolders, derive_workspace_root

__all__ = [
    "ConsoleNotifier",
    "LoggerManager",
    "SettingsStore",
    "WorkspaceFolders",
    "derive_workspace_root",
    "files",
    "setup_logging",
]
