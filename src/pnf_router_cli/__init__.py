"""PNF Router CLI - an interactive, simulated Cisco-style router shell."""

from __future__ import annotations

from . import handlers  # noqa: F401
from .cli_args import parse_args, setup_logging_from_args
from .clock import Clock
from .commands import Command, CommandRegistry, _registry, command, register_command
from .context import Context
from .custom_types import Mode, ModeKind
from .handlers import (
    h_configure,
    h_enable,
    h_exit,
    h_help,
    h_show,
    register_custom_commands,
)
from .persistence import load_config
from .program_exceptions import (
    AmbiguousCommandError,
    BaseCommandError,
    CommandError,
    CommandNotFoundError,
    ModeViolationError,
)
from .program_logging import log_shutdown, log_startup
from .shell import Shell

__version__ = "0.1.0"
__all__ = [
    "Clock",
    "Command",
    "CommandRegistry",
    "Context",
    "_registry",
    "command",
    "register_command",
    "register_custom_commands",
    "AmbiguousCommandError",
    "BaseCommandError",
    "CommandError",
    "CommandNotFoundError",
    "ModeViolationError",
    "Shell",
    "Mode",
    "ModeKind",
    "h_configure",
    "h_enable",
    "h_exit",
    "h_help",
    "h_show",
    "main",
]


def main() -> None:
    """Main entry point for the CLI application."""
    # Parse command line arguments
    args = parse_args()

    # Set up logging based on arguments
    setup_logging_from_args(args)

    log_startup()

    config = load_config(args.config_file)
    if args.hostname:
        config.hostname = args.hostname
    ctx = Context.from_config(config, config_path=args.config_file)

    # Static commands are registered when handlers are imported
    register_custom_commands()

    try:
        Shell(context=ctx, history_file=args.history_file).run()
    except Exception as e:
        from .program_logging import get_logger

        logger = get_logger("main")
        logger.error(f"Unexpected error: {e}", exc_info=True)
        raise
    finally:
        log_shutdown()


if __name__ == "__main__":
    main()
