"""Command handlers for filter-related operations."""

import argparse
import logging
import sys
from typing import NoReturn

from ..config import ClingsConfig
from ..query import FilterError, filter_items, parse_filter, to_canonical_string
from ..rich_utils import format_json, format_plain_line, print_status, print_todo_table
from ..store import TaskSourceError, load_todos

logger = logging.getLogger(__name__)


def handle_check_command(args: argparse.Namespace, config: ClingsConfig) -> NoReturn:
    """Handle the 'check' command.

    Args:
        args: Parsed command-line arguments.
        config: Loaded configuration.
    """
    try:
        expr = parse_filter(args.query, status_synonyms=config.status_synonyms)
    except FilterError as e:
        print(f"Error: Invalid query: {e}", file=sys.stderr)
        sys.exit(1)

    print(to_canonical_string(expr))
    sys.exit(0)


def handle_filter_command(args: argparse.Namespace, config: ClingsConfig) -> NoReturn:
    """Handle the 'filter' command.

    Args:
        args: Parsed command-line arguments.
        config: Loaded configuration.
    """
    try:
        expr = parse_filter(args.query, status_synonyms=config.status_synonyms)
    except FilterError as e:
        print(f"Error: Invalid query: {e}", file=sys.stderr)
        sys.exit(1)

    tasks_file = args.tasks_file or config.tasks_file
    try:
        todos = load_todos(tasks_file)
    except TaskSourceError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    matching = filter_items(todos, expr)
    logger.debug(f"{len(matching)} of {len(todos)} todos match")

    total = len(matching)
    if args.limit is not None and args.limit >= 0:
        matching = matching[: args.limit]

    output_format = args.format or config.output_format

    if output_format == "json":
        print(format_json(matching))
    elif output_format == "plain":
        for todo in matching:
            print(format_plain_line(todo))
    elif not matching:
        print_status("No todos match the query.", "info")
    else:
        print_todo_table(matching, title=to_canonical_string(expr))
        if len(matching) < total:
            print_status(
                f"Showing {len(matching)} of {total} matching todos.", "warning"
            )

    sys.exit(0)
