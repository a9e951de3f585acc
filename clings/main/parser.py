"""Argument parser creation for the clings CLI tool."""

import argparse

from ..config import OUTPUT_FORMATS


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        description="clings - query your todos with SQL-like filter expressions",
        prog="clings",
    )
    parser.add_argument(
        "--config",
        dest="config_path",
        help="Path to the config file (default: ~/.config/clings/clings.yml)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    # Top-level subparsers
    top_level_subparsers = parser.add_subparsers(
        dest="command", help="Available commands", required=True
    )

    # =========================================================================
    # TOP-LEVEL SUBCOMMANDS (keep sorted alphabetically)
    # =========================================================================

    # --- check ---
    check_parser = top_level_subparsers.add_parser(
        "check",
        help="Validate a filter expression and print its canonical form",
    )
    check_parser.add_argument(
        "query",
        help="Filter expression to validate (e.g. \"status = open AND due < today\")",
    )

    # --- filter ---
    filter_parser = top_level_subparsers.add_parser(
        "filter",
        aliases=["f"],
        help="List todos matching a filter expression",
        description=(
            "Fields: name, notes, status, tags, project, area, due, created, "
            "modified. Operators: =, !=, <, <=, >, >=, LIKE, CONTAINS, IN, "
            "IS NULL, IS NOT NULL. Logic: AND, OR, NOT, ()."
        ),
    )
    filter_parser.add_argument(
        "query",
        help="Filter expression. Examples: \"status = open\", "
        "\"tags CONTAINS 'work' OR tags CONTAINS 'urgent'\", "
        "\"NOT (area LIKE '%%Work%%') OR status = completed\"",
    )
    # Options for 'filter' (keep sorted alphabetically by long option name)
    filter_parser.add_argument(
        "-f",
        "--file",
        dest="tasks_file",
        help="JSON task export to read (default: tasks_file from the config)",
    )
    filter_parser.add_argument(
        "-o",
        "--format",
        choices=OUTPUT_FORMATS,
        help="Output format (default: output.format from the config, or rich)",
    )
    filter_parser.add_argument(
        "-n",
        "--limit",
        type=int,
        help="Show at most this many matching todos",
    )

    return parser
