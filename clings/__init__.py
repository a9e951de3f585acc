"""clings - command-line companion for a personal task manager."""

__version__ = "0.1.0"
