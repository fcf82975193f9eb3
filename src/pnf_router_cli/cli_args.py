"""Command line argument parsing for the PNF Router CLI."""

from __future__ import annotations

import argparse
from logging import getLevelName
from pathlib import Path
from typing import Optional

from .program_constants import (
    DEFAULT_CONFIG_FILE,
    DEFAULT_HISTORY_FILE,
    DEFAULT_LOG_FILE,
    DEFAULT_LOG_LEVEL,
    PROGRAM_CONSTANTS,
)


def parse_args(args: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments for the CLI.

    Args:
        args: List of arguments to parse. If None, uses sys.argv.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog=PROGRAM_CONSTANTS.NAME,
        description="An interactive, simulated Cisco-style router shell",
        epilog="Environment variables: None.",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=getLevelName(DEFAULT_LOG_LEVEL),
        help=f"Set the logging level (default: {getLevelName(DEFAULT_LOG_LEVEL)})",
    )

    parser.add_argument(
        "--log-file",
        type=str,
        default=str(DEFAULT_LOG_FILE),
        help=f"Path to log file (default: {DEFAULT_LOG_FILE})",
    )

    parser.add_argument(
        "--no-console-log",
        action="store_true",
        help="Disable console logging (only log to file)",
    )

    parser.add_argument(
        "--config-file",
        type=Path,
        default=DEFAULT_CONFIG_FILE,
        help=f"Startup configuration to load and save (default: {DEFAULT_CONFIG_FILE})",
    )

    parser.add_argument(
        "--history-file",
        type=Path,
        default=DEFAULT_HISTORY_FILE,
        help=f"Command history file (default: {DEFAULT_HISTORY_FILE})",
    )

    parser.add_argument(
        "--hostname",
        type=str,
        default=None,
        help="Start with this hostname instead of the saved one",
    )

    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {PROGRAM_CONSTANTS.VERSION}"
    )

    return parser.parse_args(args)


def setup_logging_from_args(args: argparse.Namespace) -> None:
    """Set up logging based on parsed command line arguments.

    Args:
        args: Parsed arguments from parse_args()
    """
    from .program_logging import setup_logging

    # Create logs directory if logging to file
    if args.log_file:
        log_path = Path(args.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

    # Initialize logging
    setup_logging(
        level=args.log_level,
        log_file=args.log_file,
        console_output=False if args.no_console_log else True,
    )
