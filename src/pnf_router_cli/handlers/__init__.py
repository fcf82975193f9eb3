"""Command handlers for the PNF Router CLI.

Importing this package registers every static command with the global
registry. Dynamic commands are added later by `register_custom_commands`.
"""

from __future__ import annotations

from . import (  # noqa: F401
    acl_commands,
    config_commands,
    crypto_commands,
    exec_commands,
    interface_commands,
    routing_commands,
    show_commands,
    vlan_commands,
)
from .dynamic_commands import register_custom_commands
from .exec_commands import h_configure, h_enable, h_exit, h_help
from .show_commands import h_show

__all__ = [
    "register_custom_commands",
    "h_configure",
    "h_enable",
    "h_exit",
    "h_help",
    "h_show",
]
