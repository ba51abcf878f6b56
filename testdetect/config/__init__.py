"""Configuration management for testdetect."""

from .loader import ConfigLoader, ConfigurationError, load_config
from .models import DetectionSettings, LoggingConfig, TestDetectConfig

__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "DetectionSettings",
    "LoggingConfig",
    "TestDetectConfig",
    "load_config",
]
