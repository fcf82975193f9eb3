"""Exec-level commands: mode changes, saving, and the housekeeping commands."""

from __future__ import annotations

import getpass
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from prompt_toolkit.shortcuts import clear as clear_screen

from ..clock import Clock, parse_clock_set
from ..commands import command
from ..context import Context
from ..custom_types import Mode, ModeKind
from ..help import print_help_banner
from ..network_state import calculate_broadcast, parse_ipv4
from ..persistence import save_config
from ..program_exceptions import CommandError
from ..program_logging import get_logger
from ..running_config import render_running_config

logger = get_logger("handlers")

_ENTER_CONFIG = "Enter configuration commands, one per line.  End with CNTL/Z"

_EXIT_MESSAGES = {
    ModeKind.INTERFACE: (Mode.CONFIG, "Exiting Interface Configuration Mode..."),
    ModeKind.VLAN: (Mode.CONFIG, "Exiting VLAN Mode..."),
    ModeKind.ROUTER_CONFIG: (Mode.CONFIG, "Exiting Router Configuration Mode..."),
    ModeKind.CONFIG_STD_NACL: (Mode.CONFIG, "Exiting Standard ACL Mode..."),
    ModeKind.CONFIG_EXT_NACL: (Mode.CONFIG, "Exiting Extended ACL Mode..."),
    ModeKind.CONFIG: (Mode.PRIVILEGED, "Exiting Global Configuration Mode..."),
    ModeKind.CRYPTO_USER: (Mode.PRIVILEGED, "Exiting User Configuration Mode..."),
    ModeKind.PRIVILEGED: (Mode.USER, "Exiting Privileged EXEC Mode..."),
}

_BOOTSTRAP_BANNER = (
    "System Bootstrap, Version 15.1(4)M4, RELEASE SOFTWARE (fc1)",
    "Technical Support: http://www.cisco.com/techsupport",
    "Copyright (c) 2010 by cisco Systems, Inc.",
    "Total memory size = 512 MB - On-board = 512 MB, DIMM0 = 0 MB",
)


def save_running_config(ctx: Context) -> None:
    """Copy the running configuration into the startup snapshot.

    The rendered text is kept as both `running_config` and `startup_config`,
    and written to disk when the session has a config path.
    """
    text = render_running_config(ctx)
    ctx.config.running_config = text
    ctx.config.startup_config = text
    ctx.config.last_written = datetime.now().isoformat(sep=" ", timespec="seconds")
    if ctx.config_path is not None:
        try:
            save_config(ctx.config, ctx.config_path)
        except OSError as e:
            logger.error(f"Could not write {ctx.config_path}: {e}")
            raise CommandError(f"Failed to save configuration: {e}") from e


def _ask(question: str) -> str:
    print(question)
    return input().strip()


def _enter_privileged(ctx: Context) -> None:
    ctx.set_mode(Mode.PRIVILEGED)
    print("Entering privileged EXEC mode...")


@command(
    "enable",
    "Enter privileged EXEC mode",
    completions=("password", "secret"),
)
def h_enable(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    """Enter privileged mode, or set the enable password/secret in config mode."""
    if not args:
        ctx.require_mode(
            "The 'enable' command is only available in User EXEC mode.", ModeKind.USER
        )
        store = ctx.state.passwords
        if store.is_empty:
            _enter_privileged(ctx)
            return

        # Only the credentials that are configured are asked for.
        password_ok = secret_ok = True
        if store.enable_password is not None:
            password_ok = getpass.getpass("Enter password:") == store.enable_password
        if store.enable_secret is not None:
            secret_ok = getpass.getpass("Enter secret:") == store.enable_secret
        if not (password_ok and secret_ok):
            logger.warning("Failed enable attempt")
            raise CommandError("Incorrect password or secret.")
        _enter_privileged(ctx)
        return

    match args[0]:
        case "password":
            ctx.require_mode(
                "The 'enable password' command is only available in Config mode.",
                ModeKind.CONFIG,
            )
            if len(args) != 2:
                raise CommandError("You must provide the enable password.")
            ctx.state.passwords.enable_password = args[1]
            ctx.config.enable_password = args[1]
            print("Enable password set.")
        case "secret":
            ctx.require_mode(
                "The 'enable secret' command is only available in Config mode.",
                ModeKind.CONFIG,
            )
            if len(args) != 2:
                raise CommandError("You must provide the enable secret password.")
            ctx.state.passwords.enable_secret = args[1]
            ctx.config.enable_secret = args[1]
            print("Enable secret password set.")
        case other:
            raise CommandError(f"Unknown enable subcommand: {other}")


@command("configure", "Enter global configuration mode", subcommands=("terminal", "user"))
def h_configure(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    ctx.require_mode(
        "The 'configure terminal' command is only available in Privileged EXEC mode.",
        ModeKind.PRIVILEGED,
    )
    match args:
        case ["terminal"]:
            ctx.set_mode(Mode.CONFIG)
        case ["user"]:
            ctx.set_mode(Mode.CRYPTO_USER)
        case _:
            raise CommandError(
                "Invalid arguments provided to 'configure'. "
                "This command does not accept additional arguments."
            )
    print(_ENTER_CONFIG)


@command("exit", "Exit the current mode and return to the previous mode.")
def h_exit(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    """Step one level up the mode hierarchy.

    `exit ssh` ends the process; `exit cli` is handled by the shell itself.
    """
    match args:
        case []:
            if ctx.mode.kind is ModeKind.USER:
                print("Already at the top level. No mode to exit.")
                raise CommandError("No mode to exit.")
            target, message = _EXIT_MESSAGES[ctx.mode.kind]
            ctx.set_mode(target)
            print(message)
        case ["ssh"]:
            print("Terminating SSH session...")
            logger.info("SSH session terminated by user")
            sys.exit(0)
        case _:
            raise CommandError("Command is either 'exit' , 'exit cli' or 'exit ssh'")


@command("reload", "Reload the system")
def h_reload(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    answer = _ask("System configuration has been modified. Save? [yes/no]:").lower()
    if answer == "yes":
        print("Building configuration...")
        save_running_config(ctx)
        print("[OK]")
    elif answer == "no":
        print("Configuration not saved.")
    else:
        raise CommandError("Invalid input. Please enter 'yes' or 'no'.")

    confirm = _ask("Proceed with reload? [confirm]:").lower()
    if confirm in ("yes", "y"):
        for line in _BOOTSTRAP_BANNER:
            print(line)
        ctx.set_mode(Mode.USER)
        logger.info("System reloaded")
        print("\nPress RETURN to get started!")
    elif confirm == "no":
        print("Reload aborted.")
    else:
        raise CommandError("Invalid input. Please enter 'yes', 'y', or 'no'.")


@command("debug", "To turn on all the possible debug levels", subcommands=("all",))
def h_debug(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    ctx.require_mode(
        "The 'debug all' command is only available in Privileged EXEC mode.",
        ModeKind.PRIVILEGED,
    )
    if args != ["all"]:
        raise CommandError(
            "Invalid arguments provided to 'debug all'. "
            "This command does not accept additional arguments."
        )
    answer = _ask("This may severely impact network performance. Continue? (yes/[no]):")
    if answer.lower() != "yes":
        raise CommandError("Invalid input. Please enter 'yes' or 'no'.")
    ctx.debug_all = True
    print("All possible debugging has been turned on")


@command("undebug", "Turning off all possible debugging processes", subcommands=("all",))
def h_undebug(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    ctx.require_mode(
        "The 'undebug all' command is only available in Privileged EXEC mode.",
        ModeKind.PRIVILEGED,
    )
    if args != ["all"]:
        raise CommandError(
            "Invalid arguments provided to 'undebug all'. "
            "This command does not accept additional arguments."
        )
    ctx.debug_all = False
    print("All possible debugging has been turned off")


@command("help", "Display available commands for current mode")
def h_help(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    print_help_banner(ctx.mode)


@command(
    "ping",
    "Ping a specific IP address to check reachability",
    options=("<ip-address>    - Enter the ip-address",),
)
def h_ping(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    if len(args) != 1:
        raise CommandError("Invalid syntax. Usage: ping <ip>")
    ip = args[0]

    print(f"Pinging {ip} with 32 bytes of data:")
    if ctx.state.is_reachable(ip):
        for _ in range(4):
            print(f"Reply from {ip}: bytes=32 time<1ms TTL=128")
        print(f"\nPing statistics for {ip}:")
        print("    Packets: Sent = 4, Received = 4, Lost = 0 (0% loss),")
        print("Approximate round trip times in milli-seconds:")
        print("    Minimum = 0ms, Maximum = 1ms, Average = 0ms")
        return

    for _ in range(4):
        print("Request timed out.")
    print(f"\nPing statistics for {ip}:")
    print("    Packets: Sent = 4, Received = 0, Lost = 4 (100% loss),")
    raise CommandError(f"IP address {ip} is not reachable.")


@command("clear", "Reset all OSPF processes", completions=("ip ospf process",))
def h_clear(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    """Clear the terminal, or with `ip ospf process` reset OSPF."""
    if not args:
        clear_screen()
        return
    ctx.require_mode(
        "The 'clear ip ospf process' command is only available in EXEC mode.",
        ModeKind.PRIVILEGED,
    )
    if args != ["ip", "ospf", "process"]:
        raise CommandError(
            "Invalid arguments provided to 'clear ip ospf process'. "
            "This command does not accept additional arguments."
        )
    response = input("Reset ALL OSPF processes? [no]: ").strip().lower()
    if response in ("yes", "y"):
        ctx.state.reset_ospf()
        logger.info("OSPF configuration cleared")
        print("All OSPF processes cleared.")
    else:
        print("Clear process cancelled.")


@command(
    "write",
    "Save the running configuration to the startup configuration",
    subcommands=("memory",),
)
def h_write(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    ctx.require_mode(
        "The 'write memory' command is only available in Privileged EXEC mode.",
        ModeKind.PRIVILEGED,
        ModeKind.CONFIG,
        ModeKind.INTERFACE,
    )
    if args != ["memory"]:
        raise CommandError(
            "Invalid arguments provided to 'write memory'. "
            "This command does not accept additional arguments."
        )
    save_running_config(ctx)
    print("Configuration saved successfully.")


@command(
    "copy",
    "Copy running configuration",
    subcommands=("running-config",),
    options=("startup-config",),
)
def h_copy(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    """Copy the running configuration to startup-config or to a file."""
    ctx.require_mode(
        "The 'copy' command is only available in Privileged EXEC mode, "
        "Config mode and interface mode",
        ModeKind.PRIVILEGED,
        ModeKind.CONFIG,
        ModeKind.INTERFACE,
    )
    if not args or not args[0].startswith("run"):
        raise CommandError("Invalid source. Use 'running-config'")
    if len(args) != 2:
        raise CommandError("Usage: copy running-config <startup-config | file-name>")

    destination = args[1]
    if destination == "startup-config":
        save_running_config(ctx)
        print("Configuration saved successfully.")
        return

    try:
        Path(destination).write_text(render_running_config(ctx), encoding="utf-8")
    except OSError as e:
        logger.error(f"Could not write running configuration to {destination}: {e}")
        raise CommandError(str(e)) from e
    print(f"Running configuration copied to {destination}")


@command(
    "clock",
    "Change the clock date and time",
    subcommands=("set",),
    options=(
        "<hh:mm:ss>      - Enter the time in this specified format",
        "<day>      - Enter the day '1-31'",
        "<month>    - Enter a valid month",
        "<year>     - Enter the year",
    ),
)
def h_clock(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    ctx.require_mode(
        "The 'clock set' command is only available in Privileged EXEC mode.",
        ModeKind.PRIVILEGED,
    )
    if len(args) < 2 or args[0] != "set":
        raise CommandError(
            "Correct Usage of 'clock set' command is "
            "'clock set <hh:mm:ss> <day> <month> <year>'."
        )
    if clock is None:
        raise CommandError("Clock functionality is unavailable.")
    time, day, month, year = parse_clock_set(args)
    clock.set_time(time, day, month, year)
    print(f"Clock updated successfully to {time} {day} {month} {year}.")


def _print_ifconfig_entry(ip: str, broadcast: str) -> None:
    print(f"    inet {ip}  netmask 255.255.255.0  broadcast {broadcast}")
    print("    inet6 fe80::6a01:72f9:adf2:3ffb  prefixlen 64  scopeid 0x20<link>")
    print("    ether 00:0c:29:16:30:92  txqueuelen 1000  (Ethernet)")


@command(
    "ifconfig",
    "Display or configure network details of the router",
    options=(
        "<interface      - Enter the interface you need to change the ip-address of or need to add",
        "<ip-address>      - Enter the new ip-address",
    ),
)
def h_ifconfig(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    table = ctx.state.ifconfig
    match args:
        case []:
            if not table:
                print("No interfaces found.")
                return
            for interface, (ip, broadcast) in table.items():
                print(f"{interface}: flags=4163<UP,BROADCAST,RUNNING,MULTICAST>  mtu 1500")
                _print_ifconfig_entry(ip, broadcast)
        case [interface, address, "up"]:
            ip = parse_ipv4(address)
            broadcast = str(calculate_broadcast(ip, 24))
            table[interface] = (str(ip), broadcast)
            print(f"Updated {interface}: flags=4163<UP,BROADCAST,RUNNING,MULTICAST>  mtu 1500")
            _print_ifconfig_entry(str(ip), broadcast)
        case _:
            raise CommandError(
                "Invalid arguments provided to 'ifconfig'. "
                "To create an entry 'ifconfig <interface> <ip-address> up"
            )

