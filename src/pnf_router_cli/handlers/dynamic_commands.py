"""Commands registered at runtime rather than at import.

Dynamic commands carry the modes they may run in; the visibility policy
uses those modes instead of the static allow-lists.
"""

from __future__ import annotations

from typing import List, Optional

from ..clock import Clock
from ..commands import _registry, register_command
from ..context import Context
from ..custom_types import Mode, ModeKind
from ..program_exceptions import CommandError


def h_hello(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    match args[0] if args else None:
        case "world":
            print("Hello, World!")
        case "friend":
            print("Hello, Friend!")
        case "privileged":
            if not ctx.in_mode(ModeKind.PRIVILEGED):
                raise CommandError("This 'hello privileged' is only valid in Privileged Mode")
            print("Hello in Privileged Mode!")
        case "config":
            if not ctx.in_mode(ModeKind.CONFIG):
                raise CommandError("This 'hello config' is only valid in Config Mode")
            print("Hello in Config Mode!")
        case None:
            print("Hello there!")
        case name:
            print(f"Hello, {name}!")


def register_custom_commands() -> None:
    """Register the runtime commands; calling this twice is harmless."""
    if "hello" in _registry:
        return
    register_command(
        "hello",
        "Prints a greeting message",
        subcommands=("world", "friend", "privileged", "config"),
        handler=h_hello,
        allowed_modes=(Mode.USER, Mode.PRIVILEGED, Mode.CONFIG),
    )
