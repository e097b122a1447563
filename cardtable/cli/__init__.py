"""Command-line interface for the card table."""

from .main import app, main

__all__ = ["app", "main"]
