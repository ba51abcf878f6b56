"""Global logging setup with a single rich handler."""

import logging
import threading
from collections.abc import Iterable

from rich.console import Console
from rich.logging import RichHandler


class LoggerManager:
    """Installs the root RichHandler once per process."""

    _console: Console | None = None
    _handler: RichHandler | None = None
    _setup_lock: threading.Lock = threading.Lock()

    @classmethod
    def setup_global_logging(
        cls,
        level: int = logging.INFO,
        console: Console | None = None,
        suppress_modules: Iterable[str] = (),
    ) -> RichHandler:
        """Set up global logging configuration with thread safety."""
        with cls._setup_lock:
            root_logger = logging.getLogger()

            if cls._handler is not None and cls._handler in root_logger.handlers:
                # Already configured, just ensure correct level
                root_logger.setLevel(level)
                return cls._handler

            # Drop foreign RichHandlers, keep other handlers
            for handler in list(root_logger.handlers):
                if isinstance(handler, RichHandler):
                    root_logger.removeHandler(handler)

            cls._console = console or Console(stderr=True)
            rich_handler = RichHandler(
                console=cls._console,
                show_time=False,
                show_path=False,
                markup=False,
                rich_tracebacks=True,
            )
            rich_handler.setFormatter(logging.Formatter(fmt="%(message)s"))

            root_logger.addHandler(rich_handler)
            root_logger.setLevel(level)
            cls._handler = rich_handler

            if level > logging.DEBUG:
                for module in suppress_modules:
                    logging.getLogger(module).setLevel(logging.WARNING)

            return rich_handler

    @classmethod
    def reset(cls) -> None:
        """Remove the installed handler (used by tests)."""
        with cls._setup_lock:
            if cls._handler is not None:
                logging.getLogger().removeHandler(cls._handler)
            cls._handler = None
            cls._console = None


def setup_logging(
    level: int | str = logging.INFO,
    console: Console | None = None,
    suppress_modules: Iterable[str] = (),
) -> RichHandler:
    """Configure root logging; safe to call more than once."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    return LoggerManager.setup_global_logging(level, console, suppress_modules)
