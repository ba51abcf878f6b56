"""Configuration models for testdetect."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class DetectionSettings(BaseModel):
    """User settings that steer framework detection."""

    config_path: str | dict[str, str] | None = Field(
        default=None,
        description="Custom Jest config: a path, or a mapping of glob pattern to path (first match wins)",
    )

    vitest_config_path: str | dict[str, str] | None = Field(
        default=None,
        description="Custom Vitest config: a path, or a mapping of glob pattern to path (first match wins)",
    )

    disable_playwright: bool = Field(
        default=False,
        description="Ignore Playwright configs and binaries during directory detection",
    )

    @field_validator("config_path", "vitest_config_path")
    @classmethod
    def validate_config_path(cls, v):
        """Blank strings and empty mappings mean 'not configured'."""
        if isinstance(v, str) and not v.strip():
            return None
        if isinstance(v, dict) and not v:
            return None
        return v


class LoggingConfig(BaseModel):
    """Configuration for logging behavior."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Root log level when not overridden on the command line"
    )

    suppress_modules: list[str] = Field(
        default=["asyncio", "urllib3"],
        description="Library loggers kept at WARNING in non-verbose mode",
    )


class TestDetectConfig(BaseModel):
    """Main configuration model for testdetect."""

    __test__ = False  # not a pytest test class

    detection: DetectionSettings = Field(
        default_factory=DetectionSettings, description="Framework detection settings"
    )

    workspace_roots: list[str] = Field(
        default_factory=list,
        description="Workspace folder roots; the current directory is used when empty",
    )

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging behavior configuration"
    )

    @field_validator("workspace_roots", mode="before")
    @classmethod
    def validate_workspace_roots(cls, v):
        """Accept a single root given as a plain string."""
        if isinstance(v, str):
            return [v]
        return v
