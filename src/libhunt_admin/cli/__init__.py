"""Command line interface for the library catalog admin console."""

from .app import app, main


__all__ = ["app", "main"]
