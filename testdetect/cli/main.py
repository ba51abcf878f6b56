"""Main CLI entry point for testdetect."""

import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from ..adapters.io import (
    ConsoleNotifier,
    SettingsStore,
    WorkspaceFolders,
    derive_workspace_root,
    files,
    setup_logging,
)
from ..adapters.parsing import parse_config
from ..application.engine import DetectionEngine
from ..config.loader import ConfigLoader, ConfigurationError
from ..config.models import TestDetectConfig
from ..domain.models import Framework

logger = logging.getLogger(__name__)


class ClickContext:
    """Context object for Click commands."""

    def __init__(self) -> None:
        self.config: TestDetectConfig | None = None
        self.console: Console = Console()
        self.err_console: Console = Console(stderr=True)
        self.verbose: bool = False
        self.quiet: bool = False

    def create_engine(self, paths: list[Path]) -> DetectionEngine:
        """Engine over the configured roots, or roots derived from ``paths``."""
        config = self.config or TestDetectConfig()
        roots: list[str | Path] = list(config.workspace_roots)
        if not roots:
            roots = [derive_workspace_root(path) for path in paths] or [Path.cwd()]
            logger.debug(f"Derived workspace roots: {roots}")

        return DetectionEngine(
            WorkspaceFolders(roots),
            SettingsStore(config.detection),
            ConsoleNotifier(self.err_console),
        )


def _log_level(config: TestDetectConfig, verbose: bool, quiet: bool) -> int:
    if verbose and not quiet:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.getLevelName(config.logging.level)


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file",
)
@click.option(
    "--root",
    "roots",
    multiple=True,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Workspace folder root (repeatable)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Reduce output: set log level to WARNING and hide INFO",
)
@click.pass_context
def app(
    ctx: click.Context,
    config: Path | None,
    roots: tuple[Path, ...],
    verbose: bool,
    quiet: bool,
) -> None:
    """testdetect - find out which test framework owns a JavaScript/TypeScript file."""
    ctx.ensure_object(ClickContext)
    ctx.obj.verbose = verbose
    ctx.obj.quiet = quiet

    cli_overrides = {"workspace_roots": [str(root.resolve()) for root in roots]} if roots else None

    try:
        loader = ConfigLoader(config)
        ctx.obj.config = loader.load_config(cli_overrides=cli_overrides)
    except ConfigurationError as e:
        ctx.obj.err_console.print(f"[red]Configuration error:[/red] {e}")
        sys.exit(1)

    setup_logging(
        _log_level(ctx.obj.config, verbose, quiet),
        console=ctx.obj.err_console,
        suppress_modules=ctx.obj.config.logging.suppress_modules,
    )
    if verbose and not quiet:
        logger.debug("Debug mode enabled - verbose logging active")


@app.command()
@click.argument(
    "file_paths",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.pass_context
def check(ctx: click.Context, file_paths: tuple[Path, ...]) -> None:
    """Show the owning framework and test-file status of FILE_PATHS."""
    paths = [path.resolve() for path in file_paths]
    engine = ctx.obj.create_engine(paths)

    table = Table(title="Test detection")
    table.add_column("File", style="cyan")
    table.add_column("Framework")
    table.add_column("Directory")
    table.add_column("Matches pattern", justify="center")
    table.add_column("Test file", justify="center")

    for given, path in zip(file_paths, paths):
        owner = engine.find_test_framework_directory(str(path))
        table.add_row(
            str(given),
            owner.framework.value if owner else "-",
            owner.directory if owner else "-",
            "yes" if engine.matches_test_file_pattern(str(path)) else "no",
            "yes" if engine.is_test_file(str(path)) else "no",
        )

    ctx.obj.console.print(table)


@app.command()
@click.argument("config_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--framework",
    "-f",
    type=click.Choice([f.value for f in Framework], case_sensitive=False),
    help="Parse as this framework's config instead of guessing from the file name",
)
def patterns(config_file: Path, framework: str | None) -> None:
    """Print the test patterns parsed from CONFIG_FILE as JSON."""
    config_path = str(config_file.resolve())
    content = files.read_text(config_path)
    if content is None:
        raise click.ClickException(f"Cannot read {config_file}")

    parsed = parse_config(
        content, config_path, Framework(framework.lower()) if framework else None
    )
    payload = {
        "config": config_path,
        "framework": framework.lower() if framework else None,
        "patterns": parsed.to_dict() if parsed else None,
    }
    click.echo(json.dumps(payload, indent=2))


@app.command()
@click.argument("directory", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.pass_context
def conflicts(ctx: click.Context, directory: Path) -> None:
    """Classify the Jest/Vitest pattern conflict of DIRECTORY."""
    directory = directory.resolve()
    engine = ctx.obj.create_engine([directory])
    info = engine.conflicts.conflict_for_directory(str(directory))
    console = ctx.obj.console

    if info is None:
        console.print(f"No Jest and Vitest configs found together in {directory}")
        return

    if not info.has_conflict:
        console.print(f"No pattern conflict in {directory}")
    else:
        console.print(f"Pattern conflict in {directory}: {info.reason.value}")  # type: ignore[union-attr]

    table = Table(show_header=True)
    table.add_column("Framework")
    table.add_column("Patterns")
    table.add_column("Default", justify="center")
    table.add_row("jest", ", ".join(info.jest_patterns), "yes" if info.jest_is_default else "no")
    table.add_row("vitest", ", ".join(info.vitest_patterns), "yes" if info.vitest_is_default else "no")
    console.print(table)


if __name__ == "__main__":
    app()
