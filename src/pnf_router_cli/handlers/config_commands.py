"""Global configuration commands: hostname, services, tunnels, NTP and `no`."""

from __future__ import annotations

from typing import List, Optional

from ..clock import Clock
from ..commands import command
from ..context import Context, NtpAssociation
from ..custom_types import ModeKind
from ..network_state import encrypt_password, parse_ipv4
from ..program_exceptions import CommandError
from ..program_logging import get_logger
from .crypto_commands import no_crypto
from .interface_commands import no_shutdown

logger = get_logger("handlers")

NTP_SUBCOMMANDS = ("server", "master", "authenticate", "authentication-key", "trusted-key")


@command(
    "hostname",
    "Set the device hostname",
    options=("<new-hostname>    - Enter a new hostname",),
)
def h_hostname(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    ctx.require_mode(
        "The 'hostname' command is only available in Global Configuration Mode.",
        ModeKind.CONFIG,
    )
    if not args:
        raise CommandError("Please specify a new hostname. Usage: hostname <new_hostname>")
    old, ctx.config.hostname = ctx.config.hostname, args[0]
    logger.info(f"Hostname changed from {old} to {args[0]}")
    print(f"Hostname changed to '{args[0]}'")


@command("service", "Enable password encryption", subcommands=("password-encryption",))
def h_service(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    ctx.require_mode(
        "The 'service password-encryption' command is only available in Privileged EXEC mode.",
        ModeKind.CONFIG,
    )
    if args != ["password-encryption"]:
        raise CommandError(
            "Invalid arguments provided to 'service password-encryption'. "
            "This command does not accept additional arguments."
        )
    store = ctx.state.passwords
    if store.enable_password is not None:
        ctx.config.encrypted_password = encrypt_password(store.enable_password)
    if store.enable_secret is not None:
        ctx.config.encrypted_secret = encrypt_password(store.enable_secret)
    ctx.config.password_encryption = True
    print("Password encryption enabled.")


@command(
    "tunnel",
    "Configures the tunnel interface with multiple parameters "
    "(mode, source, destination, protection, virtual-template).",
    subcommands=("mode", "source", "destination", "protection"),
)
def h_tunnel(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    ctx.require_mode("The 'tunnel' command is only available in Config mode.", ModeKind.CONFIG)
    config = ctx.config

    match args:
        case []:
            raise CommandError(
                "Invalid arguments. Please specify a subcommand like 'mode', 'source', "
                "'destination', 'protection', or 'virtual-template'."
            )
        case ["mode", "ipsec", "ipv4"]:
            config.tunnel_mode = "ipsec ipv4"
            print("Tunnel mode set to IPsec IPv4.")
        case ["mode", *_]:
            raise CommandError("Invalid arguments for 'mode'. Use 'mode ipsec ipv4'.")
        case ["source", interface]:
            config.tunnel_source = interface
            print(f"Tunnel source interface set to '{interface}'.")
        case ["source", *_]:
            raise CommandError("Invalid arguments for 'source'. Use 'source <interface>'.")
        case ["destination", address]:
            config.tunnel_destination = str(parse_ipv4(address))
            print(f"Tunnel destination IP address set to '{config.tunnel_destination}'.")
        case ["destination", *_]:
            raise CommandError(
                "Invalid arguments for 'destination'. Use 'destination <ip-address>'."
            )
        case ["protection", "ipsec", "profile", profile]:
            config.tunnel_protection_profile = profile
            print(f"Tunnel protection associated with IPsec profile '{profile}'.")
        case ["protection", *_]:
            raise CommandError(
                "Invalid arguments for 'protection'. "
                "Use 'protection ipsec profile <profile-name>'."
            )
        case _:
            raise CommandError(
                "Invalid subcommand. Use 'mode', 'source', 'destination' or 'protection'."
            )


@command(
    "virtual-template",
    "Enter interface configuration mode for a virtual-template interface",
    options=("<template-number>       - Enter the template number",),
)
def h_virtual_template(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    ctx.require_mode(
        "The 'virtual-template' command is only available in Configuration mode.",
        ModeKind.CONFIG,
    )
    if len(args) != 1:
        raise CommandError(
            "Invalid arguments for 'virtual-template'. Use 'virtual-template <number>'."
        )
    if not args[0].isdigit():
        raise CommandError(
            "Invalid argument for 'virtual-template'. "
            "The template number must be a valid number."
        )
    ctx.config.virtual_template = args[0]
    print(
        "Entering interface configuration mode for virtual-template interface "
        f"'{args[0]}'."
    )


@command(
    "set",
    "Specifies which transform sets can be used with the crypto map entry.",
    subcommands=("transform-set",),
)
def h_set(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    ctx.require_mode(
        "The 'set transform-set' command is only available in Config mode.", ModeKind.CONFIG
    )
    if len(args) < 2 or args[0] != "transform-set":
        raise CommandError(
            "Invalid command. The command should be set transform-set <transform set name>"
        )
    ctx.config.transform_sets = args[1:]
    print(f"Transform set(s) set to: {' '.join(args[1:])}")


def _key_number(text: str) -> int:
    if not text.isdigit():
        raise CommandError("Invalid key number. Must be a positive integer.")
    return int(text)


@command("ntp", "NTP configuration commands", subcommands=NTP_SUBCOMMANDS)
def h_ntp(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    ctx.require_mode(
        "NTP commands are only available in configuration mode.", ModeKind.CONFIG
    )
    available = f"Available subcommands: {', '.join(NTP_SUBCOMMANDS)}"

    match args:
        case []:
            raise CommandError(f"Subcommand required. {available}")
        case ["server", address]:
            ip = str(parse_ipv4(address))
            if ip not in ctx.ntp_servers:
                ctx.ntp_servers.add(ip)
                ctx.ntp_associations.append(NtpAssociation(address=ip))
            print(f"NTP server {ip} configured.")
        case ["server", *_]:
            raise CommandError("Invalid arguments. Usage: ntp server {ip-address}")
        case ["master", *_]:
            ctx.ntp_master = True
            print("Device configured as NTP master.")
        case ["authenticate"]:
            ctx.ntp_authentication_enabled = not ctx.ntp_authentication_enabled
            status = "enabled" if ctx.ntp_authentication_enabled else "disabled"
            print(f"NTP authentication {status}")
        case ["authenticate", *_]:
            raise CommandError("Invalid arguments. Use 'ntp authenticate'.")
        case ["authentication-key", number, "md5", key]:
            key_number = _key_number(number)
            ctx.ntp_authentication_keys[key_number] = key
            print(f"NTP authentication key {key_number} configured with MD5 key: {key}")
        case ["authentication-key", *_]:
            raise CommandError(
                "Invalid arguments. Use 'ntp authentication-key <key-number> md5 <key-value>'."
            )
        case ["trusted-key", number]:
            key_number = _key_number(number)
            ctx.ntp_trusted_keys.add(key_number)
            print(f"NTP trusted key {key_number} configured.")
        case ["trusted-key", *_]:
            raise CommandError("Invalid arguments. Use 'ntp trusted-key <key-number>'.")
        case _:
            raise CommandError(f"Invalid NTP subcommand. {available}")


@command(
    "no",
    "Negate a command or set its defaults",
    subcommands=(
        "shutdown",
        "ntp",
        "crypto dynamic-map",
        "crypto engine accelerator",
        "crypto ipsec security-association lifetime",
        "crypto ipsec transform-set",
        "crypto map",
    ),
)
def h_no(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    match args:
        case ["shutdown"]:
            no_shutdown(ctx)
        case ["ntp", "server", address]:
            ctx.require_mode(
                "The 'no ntp server' command is only available in configuration mode.",
                ModeKind.CONFIG,
            )
            if address not in ctx.ntp_servers:
                raise CommandError("NTP server not found.")
            ctx.ntp_servers.discard(address)
            ctx.ntp_associations = [a for a in ctx.ntp_associations if a.address != address]
            print(f"NTP server {address} removed.")
        case ["crypto", *rest]:
            no_crypto(rest, ctx)
        case _:
            raise CommandError("Invalid arguments provided to 'no'.")
