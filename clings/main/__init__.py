"""Command-line surface of clings."""

from .entry import main

__all__ = ["main"]
