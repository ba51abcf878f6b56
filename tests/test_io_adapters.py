"""Tests for the IO adapters: files, workspace, settings, notifier and logging."""

import io
import logging
from unittest.mock import patch

from rich.console import Console
from rich.logging import RichHandler

from testdetect.adapters.io import (
    ConsoleNotifier,
    LoggerManager,
    SettingsStore,
    WorkspaceFolders,
    derive_workspace_root,
    files,
    setup_logging,
)
from testdetect.config.models import DetectionSettings
from testdetect.ports import CONFIGURE_SETTINGS_ACTION, OPEN_OUTPUT_ACTION


class TestFiles:
    def test_read_missing_file(self, tmp_path):
        assert files.read_text(str(tmp_path / "missing.js")) is None

    def test_read_binary_file(self, tmp_path):
        path = tmp_path / "blob.js"
        path.write_bytes(b"\xff\xfe\x00\x80")
        assert files.read_text(str(path)) is None

    def test_load_json(self, tmp_path):
        good = tmp_path / "good.json"
        good.write_text('{"a": 1}')
        bad = tmp_path / "bad.json"
        bad.write_text("{a: 1")

        assert files.load_json(str(good)) == {"a": 1}
        assert files.load_json(str(bad)) is None

    def test_file_signature_changes_with_content(self, tmp_path):
        path = tmp_path / "jest.config.js"
        path.write_text("module.exports = {};")
        before = files.file_signature(str(path))
        path.write_text("module.exports = { testMatch: ['**/*.spec.js'] };")

        assert before != files.file_signature(str(path))
        assert files.file_signature(str(tmp_path / "missing.js")) is None


class TestWorkspaceFolders:
    def test_deepest_root_wins(self, tmp_path):
        workspace = WorkspaceFolders([tmp_path, tmp_path / "packages/app"])

        assert workspace.get_workspace_root(str(tmp_path / "packages/app/a.ts")) == str(tmp_path / "packages/app")
        assert workspace.get_workspace_root(str(tmp_path / "src/a.ts")) == str(tmp_path)

    def test_outside_every_root(self, tmp_path):
        workspace = WorkspaceFolders([tmp_path / "ws"])

        assert workspace.get_workspace_root(str(tmp_path / "wsx/a.ts")) is None
        assert workspace.roots == [str(tmp_path / "ws")]

    def test_derive_workspace_root_from_marker(self, tmp_path):
        (tmp_path / "repo/.git").mkdir(parents=True)
        (tmp_path / "repo/packages/app").mkdir(parents=True)
        target = tmp_path / "repo/packages/app/a.test.ts"
        target.write_text("")

        assert derive_workspace_root(target) == (tmp_path / "repo").resolve()

    def test_derive_workspace_root_falls_back_to_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with patch("testdetect.adapters.io.workspace.Path.exists", return_value=False):
            assert derive_workspace_root(tmp_path / "src") == tmp_path.resolve()


class TestSettingsStore:
    def test_update_replaces_settings(self):
        store = SettingsStore()
        assert store.get_detection_settings() == DetectionSettings()

        updated = store.update(config_path="jest.config.custom.js", disable_playwright=True)

        assert updated.config_path == "jest.config.custom.js"
        assert store.get_detection_settings().disable_playwright is True


class TestConsoleNotifier:
    def _console(self):
        return Console(file=io.StringIO(), width=120)

    def test_non_interactive_warning(self):
        console = self._console()
        notifier = ConsoleNotifier(console)

        selection = notifier.show_warning("Both Jest and Vitest detected", [OPEN_OUTPUT_ACTION])

        assert selection is None
        assert "Both Jest and Vitest detected" in console.file.getvalue()

    def test_interactive_choice(self):
        notifier = ConsoleNotifier(self._console(), interactive=True)
        actions = [OPEN_OUTPUT_ACTION, CONFIGURE_SETTINGS_ACTION]

        with patch("testdetect.adapters.io.notifications.Prompt.ask", return_value=CONFIGURE_SETTINGS_ACTION):
            assert notifier.show_warning("conflict", actions) == CONFIGURE_SETTINGS_ACTION

        with patch("testdetect.adapters.io.notifications.Prompt.ask", return_value="Dismiss"):
            assert notifier.show_warning("conflict", actions) is None

    def test_open_settings_mentions_query(self):
        console = self._console()
        ConsoleNotifier(console).open_settings("detection")
        assert "detection" in console.file.getvalue()


class TestLogging:
    def test_setup_is_idempotent(self):
        console = Console(file=io.StringIO())
        first = setup_logging(logging.INFO, console=console)
        second = setup_logging("debug", console=console)

        assert first is second
        assert isinstance(first, RichHandler)
        assert logging.getLogger().level == logging.DEBUG
        assert [h for h in logging.getLogger().handlers if isinstance(h, RichHandler)] == [first]

    def test_suppressed_modules(self):
        setup_logging(logging.INFO, console=Console(file=io.StringIO()), suppress_modules=["noisy.lib"])
        assert logging.getLogger("noisy.lib").level == logging.WARNING

    def test_reset_removes_handler(self):
        handler = LoggerManager.setup_global_logging(logging.INFO, Console(file=io.StringIO()))
        LoggerManager.reset()
        assert handler not in logging.getLogger().handlers
