"""Main entry point for the clings CLI tool."""

import logging
import sys
from typing import NoReturn

from ..config import load_config
from .filter_handler import handle_check_command, handle_filter_command
from .parser import create_parser


def main(argv: list[str] | None = None) -> NoReturn:
    """Main entry point for the clings CLI tool."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    config = load_config(args.config_path)

    # =========================================================================
    # COMMAND HANDLERS (keep sorted alphabetically to match parser order)
    # =========================================================================

    # --- check ---
    if args.command == "check":
        handle_check_command(args, config)

    # --- filter ---
    if args.command in ("filter", "f"):
        handle_filter_command(args, config)

    parser.print_help()
    sys.exit(1)
