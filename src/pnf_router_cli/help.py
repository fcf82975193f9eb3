"""Contextual help for input ending in "?".

Help only reads the registry and the tables below; it never changes the
session.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from .commands import CommandRegistry, _registry
from .context import Context
from .custom_types import Mode, ModeKind
from .program_logging import get_logger
from .visibility import CombinedPolicy, VisibilityPolicy

logger = get_logger("help")

HELP_BANNER = """\
Help may be requested at any point in a command by entering
a question mark '?'. If nothing matches, the help list will
be empty and you must backup until entering a '?' shows the
available options.
Two styles of help are provided:
1. Full help is available when you are ready to enter a
   command argument (e.g. 'show ?') and describes each possible
   argument.
2. Partial help is provided when an abbreviated argument is entered
   and you want to know what arguments match the input
   (e.g. 'show pr?'."""

_SHOW_HINT = "Some available show commands are present. To view enter 'show ?'"
_RELOAD = ("reload", "Reload the system")
_CLEAR = ("clear", "Clear the terminal")
_HELP = ("help", "Display available commands")

_NACL_HELP: Tuple[Tuple[str, str], ...] = (
    ("deny", "Deny specific traffic"),
    ("permit", "Permit specific traffic"),
    ("exit", "Exit to config mode"),
    ("ip access-list", "Configure IP access list"),
    _RELOAD,
    _CLEAR,
    _HELP,
)

MODE_HELP: Dict[ModeKind, Tuple[Tuple[str, str], ...]] = {
    ModeKind.USER: (
        ("enable", "Enter privileged mode"),
        ("exit", "Exit current mode"),
        ("ping", "Send ICMP echo request"),
        _HELP,
        _RELOAD,
        _CLEAR,
        ("show", _SHOW_HINT),
    ),
    ModeKind.PRIVILEGED: (
        ("configure", "Enter configuration mode"),
        ("exit", "Exit to user mode"),
        _HELP,
        ("write", "Save the configuration"),
        ("copy", "Copy configuration files"),
        ("clock", "Manage system clock"),
        ("clear ip ospf process", "Clear all the ospf processes"),
        ("ping", "Send ICMP echo request"),
        ("show", _SHOW_HINT),
        ("ifconfig", "Display interface configuration"),
        _RELOAD,
        _CLEAR,
        ("debug", "Debug the availbale processes"),
        ("undebug", "Undebug the availbale processes"),
    ),
    ModeKind.CONFIG: (
        ("hostname", "Set system hostname"),
        ("interface", "Configure interface"),
        ("exit", "Exit to privileged mode"),
        ("tunnel", "Configure tunnel interface"),
        ("virtual-template", "Configure virtual template"),
        _HELP,
        ("write", "Save the configuration"),
        ("ping", "Send ICMP echo request"),
        ("vlan", "Configure VLAN"),
        ("access-list", "Configure access list"),
        ("router", "Configure routing protocol"),
        ("enable", "Enter privileged mode"),
        ("ip route", "Configure static routes"),
        ("ip domain-name", "Configure DNS domain name"),
        ("ip access-list", "Configure IP access list"),
        ("service", "Configure system services"),
        ("set", "Set system parameters"),
        ("ifconfig", "Configure interface"),
        ("ntp", "Configure NTP"),
        ("crypto", "Configure encryption"),
        _RELOAD,
        _CLEAR,
    ),
    ModeKind.INTERFACE: (
        ("exit", "Exit to config mode"),
        ("shutdown", "Shutdown interface"),
        ("no", "Negate a command"),
        ("switchport", "Configure switching parameters"),
        _HELP,
        ("write", "Save the configuration"),
        ("interface", "Select another interface"),
        ("ip address", "Set IP address"),
        ("ip ospf", "Configure OSPF protocol"),
        _RELOAD,
        _CLEAR,
    ),
    ModeKind.VLAN: (
        ("name", "Set VLAN name"),
        ("exit", "Exit to config mode"),
        ("state", "Set VLAN state"),
        ("vlan", "Configure VLAN parameters"),
        _RELOAD,
        _CLEAR,
        _HELP,
    ),
    ModeKind.ROUTER_CONFIG: (
        ("network", "Configure network"),
        ("exit", "Exit to config mode"),
        ("neighbor", "Configure BGP neighbor"),
        ("area", "Configure OSPF area"),
        ("passive-interface", "Configure passive interface"),
        ("distance", "Configure administrative distance"),
        ("default-information", "Configure default route distribution"),
        ("router-id", "Configure router ID"),
        _RELOAD,
        _CLEAR,
        _HELP,
    ),
    ModeKind.CONFIG_STD_NACL: _NACL_HELP,
    ModeKind.CONFIG_EXT_NACL: _NACL_HELP,
    ModeKind.CRYPTO_USER: (("exit", "Exit to privileged mode"),),
}


def format_help_line(name: str, description: str) -> str:
    return f"{name:<17} - {description}"


def print_help_banner(mode: Mode, registry: Optional[CommandRegistry] = None) -> None:
    """Print the banner and the command table for `mode`.

    Dynamic commands reachable from `mode` are listed after the fixed table.
    """
    registry = registry if registry is not None else _registry
    print()
    print(HELP_BANNER)
    print()
    print("Available commands")
    print()
    for name, description in MODE_HELP[mode.kind]:
        print(format_help_line(name, description))
    for name in CombinedPolicy(registry).dynamic.visible(mode):
        cmd = registry.get(name)
        if cmd is not None:
            print(format_help_line(name, cmd.description))
    print()


def _print_completions(items: Sequence[str], header: str = "Possible completions:") -> None:
    print(header)
    for item in items:
        print(f"  {item}")


def show_help(
    line: str,
    ctx: Context,
    registry: Optional[CommandRegistry] = None,
    policy: Optional[VisibilityPolicy] = None,
) -> None:
    """Answer a line ending in "?" for the current mode.

    Args:
        line: The trimmed input, including the trailing "?".
        ctx: The session; only its mode is read.
        registry: Registry to describe commands from.
        policy: Visibility policy deciding which commands count as typed-able.
    """
    registry = registry if registry is not None else _registry
    policy = policy if policy is not None else CombinedPolicy(registry)

    text = line.rstrip("?")
    parts: List[str] = text.split()
    visible = policy.visible(ctx.mode)
    logger.debug(f"Help requested for {text!r} in {ctx.mode.value} mode")

    match len(parts):
        case 0:
            print_help_banner(ctx.mode, registry)

        case 1:
            name = parts[0]
            cmd = registry.get(name)
            if name in visible and cmd is not None:
                if cmd.subcommands:
                    _print_completions(cmd.subcommands)
                elif cmd.options:
                    _print_completions(cmd.options)
                else:
                    print("No subcommands or more options available")
                return

            matches = [c for c in visible if c.startswith(name)]
            if matches:
                _print_completions(matches, f"Possible completions for '{name}?':")
            elif cmd is not None and cmd.options:
                _print_completions(cmd.options)
            else:
                print("No more options available")

        case 2:
            name, partial = parts
            cmd = registry.get(name)
            if name in visible and cmd is not None and not text.endswith(" "):
                if not cmd.subcommands:
                    print("No subcommands available")
                    return
                matching = [s for s in cmd.subcommands if s.startswith(partial)]
                if matching:
                    _print_completions(matching)
                else:
                    print("No matching commands found")
            elif cmd is not None and cmd.options:
                _print_completions(cmd.options)
            else:
                print("No more options available")

        case _:
            print("No additional parameters available")
