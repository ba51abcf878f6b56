"""Command line interface for testdetect."""

from .main import app

__all__ = ["app"]
