"""Command-line interface for optiongate."""

from .app import app

__all__ = ["app"]
