"""
Console notification adapter.

Renders pattern-conflict warnings with rich. In interactive mode the user
picks one of the offered actions from a prompt.
"""

import logging
from collections.abc import Sequence

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt

from ...ports.notification_port import NotificationPort

logger = logging.getLogger(__name__)

_DISMISS = "Dismiss"


class ConsoleNotifier(NotificationPort):
    """NotificationPort that writes to a rich console."""

    def __init__(self, console: Console | None = None, interactive: bool = False) -> None:
        self.console = console or Console(stderr=True)
        self.interactive = interactive

    def show_warning(self, message: str, actions: Sequence[str]) -> str | None:
        self.console.print(
            Panel(message, title="Pattern conflict", border_style="yellow", expand=False)
        )
        if not self.interactive or not actions:
            return None

        choice = Prompt.ask(
            "Action", choices=[*actions, _DISMISS], default=_DISMISS, console=self.console
        )
        return None if choice == _DISMISS else choice

    def open_output(self) -> None:
        self.console.print("Re-run with [bold]--verbose[/bold] to see the detection log.")

    def open_settings(self, query: str) -> None:
        self.console.print(
            f"Configure [bold]{query}[/bold] settings in .testdetect.toml "
            "([cyan]detection.config_path[/cyan] / [cyan]detection.vitest_config_path[/cyan])."
        )
