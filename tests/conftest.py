"""Global fixtures and utilities for the testdetect test suite.

Detection tests build small JavaScript projects under ``tmp_path`` and run
a fresh engine over them, so no test shares cache state with another.
"""

from collections.abc import Sequence
from pathlib import Path

import pytest

from testdetect.adapters.io import LoggerManager, SettingsStore, WorkspaceFolders
from testdetect.application.engine import DetectionEngine
from testdetect.config.models import DetectionSettings


def write_tree(root: Path, files: dict[str, str]) -> Path:
    """Create ``files`` (relative path -> content) below ``root``."""
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return root


class FakeNotifier:
    """NotificationPort double that records calls and returns a fixed choice."""

    def __init__(self, selection: str | None = None) -> None:
        self.selection = selection
        self.warnings: list[tuple[str, list[str]]] = []
        self.outputs_opened = 0
        self.settings_queries: list[str] = []

    def show_warning(self, message: str, actions: Sequence[str]) -> str | None:
        self.warnings.append((message, list(actions)))
        return self.selection

    def open_output(self) -> None:
        self.outputs_opened += 1

    def open_settings(self, query: str) -> None:
        self.settings_queries.append(query)


# ================================================================================
# Engine Fixtures
# ================================================================================


@pytest.fixture
def project(tmp_path):
    """Factory writing a file tree into the temporary workspace root.

    Usage:
        def test_something(project):
            root = project({"jest.config.js": "module.exports = {}"})
    """

    def _project(files: dict[str, str]) -> Path:
        return write_tree(tmp_path, files)

    return _project


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def make_engine(tmp_path, notifier):
    """Factory for a DetectionEngine rooted at ``tmp_path``."""

    def _make(roots: list[Path] | None = None, **settings) -> DetectionEngine:
        store = SettingsStore(DetectionSettings(**settings))
        return DetectionEngine(WorkspaceFolders(roots or [tmp_path]), store, notifier)

    return _make


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop the global rich handler installed by CLI runs."""
    yield
    LoggerManager.reset()
