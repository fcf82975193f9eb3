"""Core exceptions for the PNF Router CLI."""

from __future__ import annotations


class BaseCommandError(Exception):
    """Base class for errors encountered by the command-line interface.

    Some examples of these errors are:
    - `CommandNotFoundError`
    - `AmbiguousCommandError`
    - `CommandError`
    """


class CommandNotFoundError(BaseCommandError):
    """Raised when a command is not found."""


class AmbiguousCommandError(BaseCommandError):
    """Raised when a command is ambiguous."""


class CommandError(BaseCommandError):
    """Raised by a command handler when it cannot carry out the request.

    The shell prints the message as ``Error: <message>`` and carries on.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ModeViolationError(CommandError):
    """Raised when a known command is used in a mode that does not allow it."""
