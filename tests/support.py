"""Shared helpers for the test suite."""

from unittest.mock import Mock

from pnf_router_cli import Clock, Context, Mode, Shell, register_custom_commands

register_custom_commands()


def make_shell(mode=Mode.USER, context=None, clock=None):
    """A shell over the global registry with a fake prompt session."""
    ctx = context if context is not None else Context()
    ctx.mode = mode
    return Shell(context=ctx, clock=clock or Clock(), session=Mock())


def printed(mock_print):
    """Every first positional argument passed to a patched `print`."""
    return [c.args[0] if c.args else "" for c in mock_print.call_args_list]
