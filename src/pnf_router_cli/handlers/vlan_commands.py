"""VLAN database commands."""

from __future__ import annotations

from typing import List, Optional

from ..clock import Clock
from ..commands import command
from ..context import Context
from ..custom_types import Mode, ModeKind
from ..program_exceptions import CommandError
from .interface_commands import parse_vlan_id


def _selected_vlan(ctx: Context) -> int:
    if ctx.selected_vlan is None:
        raise CommandError("No VLAN selected. Use the 'vlan' command first.")
    return ctx.selected_vlan


@command("vlan", "Configure a VLAN", options=("<vlan-id>    - Enter the VLAN ID (1-4094)",))
def h_vlan(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    ctx.require_mode(
        "The 'vlan' command is only available in Global Configuration mode and VLAN mode.",
        ModeKind.CONFIG,
        ModeKind.VLAN,
    )
    if len(args) != 1:
        raise CommandError("Usage: vlan <vlan-id>")
    vlan_id = parse_vlan_id(args[0])

    ctx.set_mode(Mode.VLAN)
    ctx.selected_vlan = vlan_id
    ctx.vlan_names.setdefault(vlan_id, f"VLAN{vlan_id:04d}")
    ctx.vlan_states.setdefault(vlan_id, "active")
    print(f"Entering VLAN configuration mode for VLAN {vlan_id}")


@command("name", "Set the name of the selected VLAN", options=("<vlan-name>    - Enter the VLAN name",))
def h_name(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    ctx.require_mode("The 'name' command is only available in VLAN mode.", ModeKind.VLAN)
    if len(args) != 1:
        raise CommandError("Usage: name <vlan-name>")
    vlan_id = _selected_vlan(ctx)
    ctx.vlan_names[vlan_id] = args[0]
    print(f"VLAN {vlan_id} name set to {args[0]}")


@command("state", "Set the state of the selected VLAN", subcommands=("active", "suspend"))
def h_state(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    ctx.require_mode("The 'state' command is only available in VLAN mode.", ModeKind.VLAN)
    if args not in (["active"], ["suspend"]):
        raise CommandError("Usage: state active|suspend")
    vlan_id = _selected_vlan(ctx)
    ctx.vlan_states[vlan_id] = args[0]
    print(f"VLAN {vlan_id} state set to {args[0]}")
