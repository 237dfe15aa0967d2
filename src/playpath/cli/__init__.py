"""Command-line interface for PlayPath."""

from .app import main

__all__ = ["main"]
