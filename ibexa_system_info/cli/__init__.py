"""Command line interface for ibexa-system-info."""

from .main import cli, main

__all__ = ["cli", "main"]
