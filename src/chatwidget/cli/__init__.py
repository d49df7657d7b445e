"""Command-line interface for chatwidget."""

from .app import app, main

__all__ = ["app", "main"]
