"""Interface selection and per-interface configuration, plus the `ip` family."""

from __future__ import annotations

from typing import List, Optional

from ..clock import Clock
from ..commands import command
from ..context import Context
from ..custom_types import Mode, ModeKind
from ..network_state import AccessControlList, Route, parse_ipv4
from ..program_exceptions import CommandError
from ..program_logging import get_logger

logger = get_logger("handlers")

_RANGE_USAGE = "Invalid range format. Use 'interface range f0/0 - 24'."

_OSPF_SUBCOMMANDS = (
    "cost, retransmit-interval, transmit-delay, priority, hello-interval, "
    "dead-interval, authentication-key, message-digest-key, authentication"
)

# subcommand -> (message template, error for a bad value, usage placeholder)
_OSPF_NUMERIC = {
    "cost": (
        "OSPF cost set to {}.",
        "Invalid cost value. It must be a positive integer.",
        "<cost>",
    ),
    "retransmit-interval": (
        "OSPF retransmit interval set to {} seconds.",
        "Invalid retransmit interval. It must be a positive integer.",
        "<seconds>",
    ),
    "transmit-delay": (
        "OSPF transmit delay set to {} seconds.",
        "Invalid transmit delay. It must be a positive integer.",
        "<seconds>",
    ),
    "hello-interval": (
        "OSPF hello interval set to {} seconds.",
        "Invalid hello interval. It must be a positive integer.",
        "<seconds>",
    ),
    "dead-interval": (
        "OSPF dead interval set to {} seconds.",
        "Invalid dead interval. It must be a positive integer.",
        "<seconds>",
    ),
}


def selected_interface(ctx: Context) -> str:
    """The interface being configured, or a `CommandError` if there is none."""
    if ctx.selected_interface is None:
        raise CommandError("No interface selected. Use the 'interface' command first.")
    return ctx.selected_interface


def _parse_unsigned(text: str, error: str, maximum: Optional[int] = None) -> int:
    if not text.isdigit():
        raise CommandError(error)
    value = int(text)
    if maximum is not None and value > maximum:
        raise CommandError(error)
    return value


@command(
    "interface",
    "Enter Interface configuration mode or Interface Range configuration mode",
    options=("range", "<interface-name>    - Specify a valid interface name"),
    completions=("range",),
)
def h_interface(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    """Select an interface, or a range written as ``range <start> - <end>``."""
    ctx.require_mode(
        "The 'interface' command is only available in Global Configuration mode "
        "and interface configuration mode.",
        ModeKind.CONFIG,
        ModeKind.INTERFACE,
    )
    if not args:
        raise CommandError(
            "Please specify an interface or range, e.g., "
            "'interface g0/0' or 'interface range f0/0 - 24'."
        )

    text = " ".join(args)
    if text.startswith("r"):
        _, sep, after = text.partition(" ")
        if not sep:
            raise CommandError(_RANGE_USAGE)
        bounds = [part.strip() for part in after.split("-")]
        if len(bounds) != 2:
            raise CommandError(_RANGE_USAGE)
        start, end = bounds
        if not start or not end:
            raise CommandError(
                "Invalid range format. Start and end interfaces must be specified."
            )
        ctx.set_mode(Mode.INTERFACE)
        ctx.selected_interface = f"{start} - {end}"
        ctx.interface_range = True
        print(f"Entering Interface Range configuration mode for: {start} - {end}")
        return

    ctx.set_mode(Mode.INTERFACE)
    ctx.selected_interface = text
    ctx.interface_range = False
    print(f"Entering Interface configuration mode for: {text}")


@command("shutdown", "Disable the selected network interface.")
def h_shutdown(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    ctx.require_mode(
        "The 'shutdown' command is only available in Interface Configuration mode.",
        ModeKind.INTERFACE,
    )
    interface = selected_interface(ctx)
    ctx.state.interface_status[interface] = False
    logger.info(f"Interface {interface} administratively down")
    print(f"Interface {interface} has been shut down. IP address set to 0.0.0.0")


def no_shutdown(ctx: Context) -> None:
    """Bring the selected interface administratively up."""
    ctx.require_mode(
        "The 'no shutdown' command is only available in Interface Configuration mode.",
        ModeKind.INTERFACE,
    )
    interface = selected_interface(ctx)
    ctx.state.interface_status[interface] = True
    logger.info(f"Interface {interface} administratively up")
    print(f"%LINK-5-CHANGED: Interface {interface}, changed state to up")
    print(f"%LINEPROTO-5-UPDOWN: Line protocol on Interface {interface}, changed state to up")


def _ip_address(args: List[str], ctx: Context) -> None:
    if len(args) != 3:
        raise CommandError("Usage: ip address <ip_address> <netmask>")
    ip = parse_ipv4(args[1])
    netmask = parse_ipv4(args[2], "netmask")
    interface = selected_interface(ctx)

    table = ctx.state.ip_addresses
    existed = interface in table
    table[interface] = (str(ip), str(netmask))
    if existed:
        print(f"Updated interface {interface} with IP {ip} and netmask {netmask}")
    else:
        print(f"Assigned IP {ip} and netmask {netmask} to interface {interface}")


def _ip_ospf(args: List[str], ctx: Context) -> None:
    if len(args) == 1:
        raise CommandError(
            "The 'ip ospf' command requires a subcommand. "
            f"Available subcommands: {_OSPF_SUBCOMMANDS}."
        )
    sub = args[1]
    settings = ctx.state.interface_ospf.setdefault(selected_interface(ctx), {})

    if sub in _OSPF_NUMERIC:
        message, error, placeholder = _OSPF_NUMERIC[sub]
        if len(args) != 3:
            raise CommandError(f"Usage: ip ospf {sub} {placeholder}")
        value = _parse_unsigned(args[2], error)
        settings[sub] = str(value)
        print(message.format(value))
        return

    match sub, args[2:]:
        case "priority", [value_text]:
            value = _parse_unsigned(
                value_text,
                "Invalid priority value. It must be a number between 0 and 255.",
                maximum=255,
            )
            settings[sub] = str(value)
            print(f"OSPF priority set to {value}.")
        case "priority", _:
            raise CommandError("Usage: ip ospf priority <priority>")
        case "authentication-key", [key]:
            settings[sub] = key
            print(f"OSPF authentication key set to '{key}'.")
        case "authentication-key", _:
            raise CommandError("Usage: ip ospf authentication-key <key>")
        case "message-digest-key", [key_id_text, "md5", key]:
            key_id = _parse_unsigned(
                key_id_text, "Invalid key-id. It must be a positive integer."
            )
            settings[sub] = f"{key_id} md5 {key}"
            print(f"OSPF MD5 message-digest-key set with key-id {key_id} and key '{key}'.")
        case "message-digest-key", _:
            raise CommandError("Usage: ip ospf message-digest-key <key-id> md5 <key>")
        case "authentication", [("message-digest" | "null") as kind]:
            settings[sub] = kind
            print(f"OSPF authentication set to '{kind}'.")
        case "authentication", [_]:
            raise CommandError(
                "Invalid authentication type. Valid options: message-digest, null."
            )
        case "authentication", _:
            raise CommandError("Usage: ip ospf authentication [message-digest | null]")
        case _:
            raise CommandError(
                f"Unknown subcommand '{sub}'. Use 'ip ospf' to see available subcommands."
            )


def _ip_route(args: List[str], ctx: Context) -> None:
    """Add a static route; a later route to the same destination replaces it."""
    usage = "Usage: ip route <ip-address> <netmask> <next-hop | exit-interface> <next-hop>"
    match args[1:]:
        case [destination, netmask, via]:
            next_hop = via
        case [destination, netmask, exit_interface, via]:
            next_hop = f"{exit_interface} {parse_ipv4(via)}"
        case _:
            raise CommandError(usage)
    destination = str(parse_ipv4(destination))
    netmask = str(parse_ipv4(netmask, "netmask"))

    if destination in ctx.state.routes:
        logger.info(f"Replacing route to {destination}")
    ctx.state.routes[destination] = Route(netmask=netmask, next_hop=next_hop)
    print(f"Added route: ip route {destination} {netmask} {next_hop}")


def _ip_domain_name(args: List[str], ctx: Context) -> None:
    if len(args) < 2:
        raise CommandError("Usage: ip domain-name <name>")
    ctx.config.domain_name = args[1]
    print(f"Domain name set to: {args[1]}")


def _ip_access_list(args: List[str], ctx: Context) -> None:
    """Create a named ACL if needed and enter its configuration mode."""
    if len(args) < 3:
        raise CommandError("Usage: ip access-list standard|extended <acl_name|number>")
    kind = args[1].lower()
    name = args[2]
    if kind not in ("standard", "extended"):
        raise CommandError(
            "Invalid syntax. Use 'ip access-list standard <acl_name>' "
            "or 'ip access-list extended <name_or_number>'."
        )

    acl = ctx.state.acls.setdefault(name, AccessControlList(name=name, kind=kind))
    acl.kind = kind
    if kind == "standard":
        ctx.set_mode(Mode.std_nacl(name))
        print(f"Standard ACL '{name}' created. Enter ACL configuration mode.")
    else:
        ctx.set_mode(Mode.ext_nacl(name))
        print(f"Extended ACL '{name}' created. Enter ACL configuration mode.")


@command(
    "ip",
    "Define all the ip commands",
    subcommands=("address", "ospf", "route", "domain-name", "access-list"),
)
def h_ip(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    """Dispatch the `ip` family by mode.

    `address` and `ospf` belong to interface mode, `route` and `domain-name`
    to global configuration, and `access-list` to global configuration and
    the ACL editors.
    """
    if not args:
        raise CommandError("Incomplete command. Use 'ip ?' for help.")

    kind = ctx.mode.kind
    match args[0]:
        case "address" if kind is ModeKind.INTERFACE:
            _ip_address(args, ctx)
        case "ospf" if kind is ModeKind.INTERFACE:
            _ip_ospf(args, ctx)
        case "route" if kind is ModeKind.CONFIG:
            _ip_route(args, ctx)
        case "domain-name" if kind is ModeKind.CONFIG:
            _ip_domain_name(args, ctx)
        case "access-list" if kind is ModeKind.CONFIG or ctx.mode.is_nacl:
            _ip_access_list(args, ctx)
        case _:
            raise CommandError("Command not available in current mode or invalid command")


def parse_vlan_id(text: str) -> int:
    if not text.isdigit() or not 1 <= int(text) <= 4094:
        raise CommandError("Invalid VLAN ID. It must be a number between 1 and 4094.")
    return int(text)


@command(
    "switchport",
    "Configure switching parameters on the interface",
    subcommands=("mode", "access", "trunk"),
)
def h_switchport(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    ctx.require_mode(
        "The 'switchport' command is only available in Interface Configuration mode.",
        ModeKind.INTERFACE,
    )
    interface = selected_interface(ctx)
    port = ctx.state.switchport(interface)

    match args:
        case ["mode", ("access" | "trunk") as mode]:
            port.mode = mode
            print(f"Switchport mode set to {mode} on {interface}.")
        case ["mode", *_]:
            raise CommandError("Usage: switchport mode access|trunk")
        case ["access", "vlan", vlan]:
            port.access_vlan = parse_vlan_id(vlan)
            print(f"Access VLAN set to {port.access_vlan} on {interface}.")
        case ["trunk", "encapsulation", ("dot1q" | "isl") as encapsulation]:
            port.trunk_encapsulation = encapsulation
            print(f"Trunk encapsulation set to {encapsulation} on {interface}.")
        case ["trunk", "native", "vlan", vlan]:
            port.native_vlan = parse_vlan_id(vlan)
            print(f"Native VLAN set to {port.native_vlan} on {interface}.")
        case ["trunk", "allowed", "vlan", vlan_list]:
            port.allowed_vlans = [parse_vlan_id(v) for v in vlan_list.split(",") if v]
            allowed = ",".join(str(v) for v in port.allowed_vlans)
            print(f"Allowed VLANs set to {allowed} on {interface}.")
        case _:
            raise CommandError(
                "Usage: switchport mode access|trunk | access vlan <id> | "
                "trunk encapsulation dot1q|isl | trunk native vlan <id> | "
                "trunk allowed vlan <list>"
            )
