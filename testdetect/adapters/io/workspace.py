"""
Workspace folder adapter.

Maps a file to the workspace folder that contains it. With several folders
open, the deepest containing folder wins, so a nested package opened as its
own folder owns its files.
"""

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from ...ports.workspace_port import WorkspacePort

logger = logging.getLogger(__name__)

# Markers of a JavaScript repository or monorepo root
WORKSPACE_MARKERS = [
    ".git",
    "pnpm-workspace.yaml",
    "lerna.json",
    "nx.json",
    "turbo.json",
    "rush.json",
]


class WorkspaceFolders(WorkspacePort):
    """A fixed set of workspace folder roots."""

    def __init__(self, roots: Iterable[str | Path]) -> None:
        normalized = {os.path.normpath(os.path.abspath(str(root))) for root in roots}
        # deepest first
        self._roots = sorted(normalized, key=len, reverse=True)

    @property
    def roots(self) -> list[str]:
        return list(self._roots)

    def get_workspace_root(self, file_path: str) -> str | None:
        path = os.path.normpath(os.path.abspath(file_path))
        for root in self._roots:
            if path == root or path.startswith(root.rstrip(os.sep) + os.sep):
                return root
        return None


def derive_workspace_root(start: str | Path) -> Path:
    """
    Find the repository root for a file or directory.

    Ascends from ``start`` looking for a monorepo or VCS marker and falls
    back to the current working directory when none is found.
    """
    start = Path(start).resolve()
    search_path = start.parent if start.is_file() else start

    current = search_path
    while current != current.parent:
        for marker in WORKSPACE_MARKERS:
            if (current / marker).exists():
                logger.debug(f"Found workspace marker '{marker}' at {current}")
                return current
        current = current.parent

    logger.debug("Could not find workspace markers, using current working directory")
    return Path.cwd().resolve()
