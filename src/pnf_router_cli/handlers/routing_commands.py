"""OSPF process configuration (`router ospf` and router-config mode)."""

from __future__ import annotations

from typing import List, Optional

from ..clock import Clock
from ..commands import command
from ..context import Context
from ..custom_types import Mode, ModeKind
from ..network_state import AreaConfig, parse_ipv4
from ..program_exceptions import CommandError
from ..program_logging import get_logger


def _require_router_config(ctx: Context, name: str, where: str = "Router OSPF") -> None:
    ctx.require_mode(
        f"The '{name}' command is only available in {where} mode.",
        ModeKind.ROUTER_CONFIG,
    )


def _positive_int(text: str, error: str) -> int:
    if not text.isdigit():
        raise CommandError(error)
    return int(text)


@command(
    "router",
    "Enable OSPF routing and enter router configuration mode",
    subcommands=("ospf",),
    options=("<process-id>       - Enter the ospf process-id",),
)
def h_router(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    logger = get_logger("handlers")
    ctx.require_mode(
        "The 'router ospf' command is only available in Global Configuration mode.",
        ModeKind.CONFIG,
    )
    if len(args) != 2 or args[0] != "ospf":
        raise CommandError(
            "The 'router ospf' command requires exactly one argument: the process ID."
        )
    if not args[1].isdigit() or int(args[1]) == 0:
        raise CommandError("Invalid process ID provided. It must be a positive integer.")

    process_id = int(args[1])
    ctx.state.ospf.process_id = process_id
    ctx.set_mode(Mode.ROUTER_CONFIG)
    logger.info(f"OSPF process {process_id} enabled")
    print(f"OSPF routing enabled with process ID {process_id}.")


@command(
    "network",
    "Define an OSPF network and associate it with an area ID",
    options=(
        "<ip-address>        - Enter the ip-address",
        "<wildcard-mask>      - Enter the wildcard-mask",
        "<area-id>          - Enter the area-id",
    ),
)
def h_network(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    _require_router_config(ctx, "network", "Router Configuration")
    if len(args) != 4 or args[2] != "area":
        raise CommandError(
            "The 'network' command requires three arguments: "
            "<ip-address> <wildcard-mask> area <area-id>."
        )
    ip, wildcard, _, area_text = args
    if not area_text.isdigit():
        raise CommandError(
            "Invalid arguments provided. Usage: network <ip-address> <wildcard-mask> area <area-id>"
        )
    area_id = int(area_text)
    ctx.state.ospf.networks[f"{ip} {wildcard}"] = area_id
    print(f"Network {ip} {wildcard} added to OSPF area {area_id}.")


@command(
    "neighbor",
    "Specify a neighbor and optionally assign a cost.",
    options=(
        "<ip-address>       - Enter the ip-address",
        "<cost>       - Enter the cost",
    ),
)
def h_neighbor(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    _require_router_config(ctx, "neighbor", "Router Configuration")
    usage = "Usage: neighbor <ip-address> [cost <number>]"
    match args:
        case [address]:
            cost = None
        case [address, "cost", cost_text]:
            cost = _positive_int(cost_text, "Invalid cost value. It must be a positive integer.")
        case _:
            raise CommandError(usage)
    ip = str(parse_ipv4(address))

    ctx.state.ospf.neighbors[ip] = cost
    if cost is None:
        print(f"Neighbor {ip} configured with default cost.")
    else:
        print(f"Neighbor {ip} configured with cost {cost}.")


@command(
    "area",
    "Configure OSPF area options.",
    options=("<area-id>       - Enter the area-id",),
    completions=("authentication", "stub", "default-cost"),
)
def h_area(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    _require_router_config(ctx, "area", "Router Configuration")
    if not args:
        raise CommandError("Usage: area <area-id> <subcommand> [options]")
    area_id = args[0]
    area = ctx.state.ospf.areas.get(area_id, AreaConfig())

    match args[1:]:
        case ["authentication"]:
            area.authentication = True
            message = f"Authentication enabled for area {area_id}."
        case ["authentication", *_]:
            raise CommandError("Usage: area <area-id> authentication")
        case ["stub"]:
            area.stub, area.no_summary = True, False
            message = f"Area {area_id} configured as a stub."
        case ["stub", "no-summary"]:
            area.stub, area.no_summary = True, True
            message = f"Area {area_id} configured as a stub with no-summary."
        case ["stub", *_]:
            raise CommandError("Usage: area <area-id> stub [no-summary]")
        case ["default-cost", cost_text]:
            area.default_cost = _positive_int(
                cost_text, "Invalid cost value. It must be a positive integer."
            )
            message = f"Default cost for area {area_id} set to {area.default_cost}."
        case ["default-cost", *_]:
            raise CommandError("Usage: area <area-id> default-cost <cost>")
        case _:
            raise CommandError(
                "Invalid subcommand. Valid subcommands: authentication, stub, default-cost"
            )

    ctx.state.ospf.areas[area_id] = area
    print(message)


@command(
    "passive-interface",
    "Disables sending OSPF Hello packets on an interface",
    options=("<interface>     - Enter the interface name",),
)
def h_passive_interface(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    _require_router_config(ctx, "passive-interface")
    if not args:
        raise CommandError("Usage: passive-interface <interface>")
    interface = args[0]
    if interface not in ctx.state.ospf.passive_interfaces:
        ctx.state.ospf.passive_interfaces.append(interface)
    print(f"Passive interface set on: {interface}")


@command(
    "distance",
    "Set administrative distance for OSPF",
    options=("<distance>      - Set the distance",),
)
def h_distance(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    _require_router_config(ctx, "distance")
    if not args:
        raise CommandError("Usage: distance <value>")
    if not args[0].isdigit() or not 1 <= int(args[0]) <= 255:
        raise CommandError("Invalid distance value. Must be a number between 1 and 255.")
    ctx.state.ospf.distance = int(args[0])
    print(f"OSPF administrative distance set to: {ctx.state.ospf.distance}")


@command(
    "default-information",
    "Originate a default route in OSPF",
    subcommands=("originate",),
)
def h_default_information(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    _require_router_config(ctx, "default-information originate")
    if args[:1] != ["originate"]:
        raise CommandError("Usage: default-information originate")
    ctx.state.ospf.default_information_originate = True
    print("Default-information originate command executed.")


@command(
    "router-id",
    "Set the router ID for the OSPF process",
    options=("<router-id>       - Enter the router-id",),
)
def h_router_id(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    _require_router_config(ctx, "router-id")
    if not args:
        raise CommandError("Usage: router-id <id>")
    ctx.state.ospf.router_id = str(parse_ipv4(args[0], "router ID"))
    print(f"Router ID set to: {ctx.state.ospf.router_id}")
