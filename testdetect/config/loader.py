"""
Settings loader for testdetect.

Detection settings come from, in increasing priority: model defaults, a
``.testdetect.toml`` / ``.testdetect.yml`` file, ``TESTDETECT_*``
environment variables and command line overrides.
"""

import logging
import os
import tomllib
from collections.abc import Callable
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .models import TestDetectConfig

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Raised when the settings file or overrides cannot be turned into a config."""

    pass


def _read_toml(path: Path) -> Any:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in {path}: {e}") from e


def _read_yaml(path: Path) -> Any:
    try:
        with open(path, encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e


_READERS: dict[str, Callable[[Path], Any]] = {
    ".toml": _read_toml,
    ".yml": _read_yaml,
    ".yaml": _read_yaml,
}


class ConfigLoader:
    """Builds a validated TestDetectConfig from files, environment and CLI values."""

    DEFAULT_CONFIG_FILES = [
        ".testdetect.toml",
        ".testdetect.yml",
        ".testdetect.yaml",
        "testdetect.toml",
        "testdetect.yml",
        "testdetect.yaml",
    ]

    ENV_PREFIX = "TESTDETECT_"
    ENV_NESTING = "__"

    def __init__(
        self, config_file: str | Path | None = None, search_dir: str | Path | None = None
    ):
        """
        Args:
            config_file: Explicit settings file; skips the default file search.
            search_dir: Where default files are looked up. Defaults to the working directory.
        """
        self.config_file = Path(config_file) if config_file else None
        self.search_dir = Path(search_dir) if search_dir else None
        self._loaded: TestDetectConfig | None = None

    def load_config(
        self,
        env_overrides: dict[str, Any] | None = None,
        cli_overrides: dict[str, Any] | None = None,
        reload: bool = False,
    ) -> TestDetectConfig:
        """
        Merge every settings source and validate the result.

        Args:
            env_overrides: Used instead of reading ``TESTDETECT_*`` variables
            cli_overrides: Values given on the command line
            reload: Ignore the config built by a previous call

        Returns:
            The validated config

        Raises:
            ConfigurationError: A file is unreadable or malformed, or the merged values are invalid
        """
        if self._loaded is not None and not reload:
            return self._loaded

        merged: dict[str, Any] = {}
        sources = (
            ("settings file", self._load_config_file),
            ("environment", lambda: env_overrides or self._load_env_config()),
            ("command line", lambda: cli_overrides),
        )

        try:
            for name, load in sources:
                values = load()
                if values:
                    merged = self._deep_merge(merged, values)
                    logger.debug(f"Applied {name} settings")

            self._loaded = TestDetectConfig(**merged)
        except ValidationError as e:
            message = f"Configuration validation failed: {e}"
            logger.error(message)
            raise ConfigurationError(message) from e
        except ConfigurationError as e:
            logger.error(str(e))
            raise
        except OSError as e:
            message = f"Failed to load configuration: {e}"
            logger.error(message)
            raise ConfigurationError(message) from e

        return self._loaded

    def _load_config_file(self) -> dict[str, Any] | None:
        path = self._get_config_file_path()
        if path is None or not path.exists():
            logger.debug("No settings file found, using defaults")
            return None

        reader = _READERS.get(path.suffix.lower())
        if reader is None:
            logger.warning(f"Unknown configuration file type: {path}")
            return None

        content = reader(path)
        if not content:
            logger.warning(f"Configuration file {path} is empty")
            return None
        if not isinstance(content, dict):
            raise ConfigurationError(f"Configuration file {path} must contain a mapping")

        logger.debug(f"Loaded settings from {path}")
        return content

    def _load_env_config(self) -> dict[str, Any]:
        """``TESTDETECT_DETECTION__CONFIG_PATH=x`` becomes ``{"detection": {"config_path": "x"}}``."""
        values: dict[str, Any] = {}
        for key, raw in os.environ.items():
            if not key.startswith(self.ENV_PREFIX):
                continue
            path = key[len(self.ENV_PREFIX) :].lower().split(self.ENV_NESTING)
            self._set_nested_value(values, path, self._parse_env_value(raw))
        return values

    @staticmethod
    def _parse_env_value(value: str) -> Any:
        lowered = value.lower()
        if lowered in ("true", "yes", "on"):
            return True
        if lowered in ("false", "no", "off"):
            return False
        # several workspace roots
        if "," in value:
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    @staticmethod
    def _set_nested_value(target: dict[str, Any], keys: list[str], value: Any) -> None:
        for key in keys[:-1]:
            target = target.setdefault(key, {})
        target[keys[-1]] = value

    def _get_config_file_path(self) -> Path | None:
        if self.config_file:
            return self.config_file

        base = self.search_dir or Path.cwd()
        return next(
            (base / name for name in self.DEFAULT_CONFIG_FILES if (base / name).exists()),
            None,
        )

    def _deep_merge(self, base: dict[str, Any], updates: dict[str, Any]) -> dict[str, Any]:
        """Merge ``updates`` into a copy of ``base``; nested mappings merge key by key."""
        result = dict(base)
        for key, value in updates.items():
            current = result.get(key)
            if isinstance(current, dict) and isinstance(value, dict):
                result[key] = self._deep_merge(current, value)
            else:
                result[key] = value
        return result


def load_config(
    config_file: str | Path | None = None,
    env_overrides: dict[str, Any] | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> TestDetectConfig:
    """Load testdetect settings from all sources.

    Args:
        config_file: Settings file to use instead of the default search
        env_overrides: Environment overrides
        cli_overrides: Command line overrides

    Returns:
        Validated testdetect configuration
    """
    return ConfigLoader(config_file).load_config(env_overrides, cli_overrides)
