"""
Workspace Port interface definition.

Maps a file to the root of the workspace folder that encloses it. The
directory walk never leaves that root.
"""

from typing_extensions import Protocol


class WorkspacePort(Protocol):
    """Interface for looking up the enclosing workspace root of a file."""

    def get_workspace_root(self, file_path: str) -> str | None:
        """
        Return the absolute root of the workspace folder containing a file.

        Args:
            file_path: Absolute path of the file being queried

        Returns:
            The workspace root, or None when the file is outside every folder
        """
        ...
