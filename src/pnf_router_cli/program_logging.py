"""Logging configuration for the PNF Router CLI."""

from __future__ import annotations

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

_ROOT_LOGGER = "pnf_router_cli"


def setup_logging(
    level: str | int = "INFO",
    log_file: Optional[str | Path] = None,
    console_output: bool = True,
) -> logging.Logger:
    """Set up logging for the PNF Router CLI.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file. If None, no file logging.
        console_output: Whether to log to console

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(_ROOT_LOGGER)

    # Clear any existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    if isinstance(level, str):
        numeric_level = getattr(logging, level.upper(), logging.INFO)
    else:
        numeric_level = level
    logger.setLevel(numeric_level)

    console_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    file_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
    )

    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(console_formatter)
        # The console shares the terminal with the router prompt, so keep it
        # quiet unless debugging.
        if numeric_level <= logging.DEBUG:
            console_handler.setLevel(logging.DEBUG)
        else:
            console_handler.setLevel(logging.WARNING)
        logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setFormatter(file_formatter)
        file_handler.setLevel(numeric_level)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = "") -> logging.Logger:
    """Get a logger for a specific module.

    Args:
        name: Module name (will be prefixed with 'pnf_router_cli.')

    Returns:
        Logger instance
    """
    if name:
        return logging.getLogger(f"{_ROOT_LOGGER}.{name}")
    return logging.getLogger(_ROOT_LOGGER)


def log_command_execution(command_tokens: list[str], mode: str, success: bool) -> None:
    """Log command execution details.

    Args:
        command_tokens: The command tokens that were executed
        mode: The shell mode the command ran in
        success: Whether the command executed successfully
    """
    logger = get_logger("commands")
    command_str = " ".join(command_tokens)

    if success:
        logger.info(f"Command executed successfully: '{command_str}' in {mode} mode")
    else:
        logger.warning(f"Command failed: '{command_str}' in {mode} mode")


def log_mode_change(old_mode: str, new_mode: str) -> None:
    """Log shell mode changes."""
    logger = get_logger("shell")
    logger.info(f"Mode changed: {old_mode} -> {new_mode}")


def log_startup() -> None:
    """Log application startup."""
    get_logger("main").info("PNF Router CLI starting up")


def log_shutdown() -> None:
    """Log application shutdown."""
    get_logger("main").info("PNF Router CLI shutting down")
