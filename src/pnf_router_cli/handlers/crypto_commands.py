"""Simulated crypto configuration: keys, certificates, IPsec and crypto maps.

Nothing here does real cryptography. Keys and certificates are placeholder
PEM-style blocks stored in the configuration so that they persist and show
up in `show crypto ...`.
"""

from __future__ import annotations

from typing import List, Optional

from ..clock import Clock
from ..commands import command
from ..configuration import Configuration, CryptoMapEntry, DynamicMapEntry
from ..context import Context
from ..custom_types import ModeKind
from ..program_exceptions import CommandError
from ..program_logging import get_logger

logger = get_logger("handlers")

DEFAULT_KEY_SIZE = 2048
KEY_TYPES = ("rsa", "dsa")


def generate_key(key_name: str, key_type: str, key_size: int) -> str:
    kind = key_type.upper()
    return (
        f"-----BEGIN {kind} PRIVATE KEY-----\n"
        f"Generated {key_type} key for {key_name} with size {key_size}\n"
        f"-----END {kind} PRIVATE KEY-----"
    )


def self_signed_certificate(config: Configuration) -> str:
    return (
        "-----BEGIN CERTIFICATE-----\n"
        f"Subject: CN={config.key_name}\n"
        "Issuer: Self Signed\n"
        "Valid: 1 year\n"
        "-----END CERTIFICATE-----"
    )


def certificate_request(name: str, config: Configuration) -> str:
    return (
        "-----BEGIN CERTIFICATE REQUEST-----\n"
        f"Subject: CN={config.key_name}\n"
        f"Organization: {name}\n"
        f"Key Type: RSA {DEFAULT_KEY_SIZE}\n"
        "-----END CERTIFICATE REQUEST-----"
    )


def _read_pasted_block() -> List[str]:
    """Read lines until a blank line."""
    lines = []
    while line := input().rstrip():
        lines.append(line)
    return lines


def _parse_number(text: str, error: str) -> int:
    if not text.isdigit():
        raise CommandError(error)
    return int(text)


def _crypto_ipsec(args: List[str], config: Configuration) -> None:
    match args[1:]:
        case ["profile", name]:
            config.crypto_ipsec_profile = name
            print(f"Crypto IPsec profile '{name}' defined.")
        case ["profile", *_]:
            raise CommandError("Invalid arguments. Use 'crypto ipsec profile <profile-name>'.")
        case ["security-association", "lifetime", "seconds", value]:
            seconds = _parse_number(value, "Invalid seconds value")
            config.crypto_ipsec_lifetime.seconds = seconds
            print(f"IPSec security association lifetime set to {seconds} seconds")
        case ["security-association", "lifetime", "kilobytes", value]:
            kilobytes = _parse_number(value, "Invalid kilobytes value")
            config.crypto_ipsec_lifetime.kilobytes = kilobytes
            print(f"IPSec security association lifetime set to {kilobytes} kilobytes")
        case ["security-association", "lifetime", _, _]:
            raise CommandError("Invalid lifetime parameter. Use 'seconds' or 'kilobytes'.")
        case ["security-association", *_]:
            raise CommandError(
                "Usage: crypto ipsec security-association lifetime "
                "{seconds <seconds> | kilobytes <kilobytes>}"
            )
        case ["transform-set", name, *transforms] if transforms:
            config.crypto_transform_sets[name] = list(transforms)
            print(f"Created transform set '{name}' with transforms: {', '.join(transforms)}")
        case ["transform-set", *_]:
            raise CommandError(
                "Usage: crypto ipsec transform-set <transform-set-name> "
                "<transform1> [transform2] [transform3]"
            )
        case _:
            raise CommandError(
                "Invalid ipsec subcommand. Use 'crypto ipsec profile <profile-name>' "
                "or 'crypto ipsec security-association lifetime <s/kb>'."
            )


def _crypto_key(args: List[str], config: Configuration) -> None:
    if len(args) < 2:
        raise CommandError(
            "Subcommand required. Use 'generate' to create keys, or 'zeroize' to delete keys."
        )
    action = args[1]
    key_type = args[2] if len(args) > 2 else ""
    if action in ("generate", "zeroize", "import") and key_type not in KEY_TYPES:
        raise CommandError(
            f"Invalid {action} command. Use 'crypto key {action} <rsa|dsa>'."
        )

    match action:
        case "generate":
            answer = input("Enter key size (default is 2048 bits): ").strip()
            key_size = _parse_number(answer, "Invalid key size.") if answer else DEFAULT_KEY_SIZE
            key_name = config.key_name
            print(f"The name for the keys will be: {key_name}")
            print(
                f"Generating {key_size}-bit {key_type.upper()} keys, "
                "keys will be non-exportable..."
            )
            config.crypto_keys[key_name] = generate_key(key_name, key_type, key_size)
            logger.info(f"Generated {key_type} key {key_name}")
            print(f"[OK] {key_type.upper()} keys generated successfully.")
        case "zeroize":
            key_name = config.key_name
            print(f"Securely deleting key: {key_name}")
            config.crypto_keys.pop(key_name, None)
            print(f"[OK] {key_type.upper()} keys deleted successfully.")
        case "import":
            print("Enter the key data (paste the key content, end with a blank line):")
            body = _read_pasted_block() or ["Imported key data would go here"]
            kind = key_type.upper()
            if not body[0].startswith("-----BEGIN"):
                body = [f"-----BEGIN {kind} PRIVATE KEY-----", *body, f"-----END {kind} PRIVATE KEY-----"]
            config.crypto_keys[f"imported_{key_type}"] = "\n".join(body)
            print(f"[OK] {kind} key imported successfully.")
        case _:
            raise CommandError(
                "Invalid key subcommand. Available subcommands: 'generate rsa', 'zeroize rsa'."
            )


def _crypto_certificate(args: List[str], config: Configuration) -> None:
    if len(args) < 2:
        raise CommandError(
            "Subcommand required. Use 'generate', 'request' or 'import' with a certificate name."
        )
    action = args[1]
    if action not in ("generate", "request", "import"):
        raise CommandError(
            "Invalid certificate subcommand. Available subcommands: "
            "'generate', 'request', 'import'."
        )
    if len(args) < 3:
        raise CommandError(
            f"Certificate name required. Use 'crypto certificate {action} <name>'."
        )
    name = args[2]

    match action:
        case "generate":
            config.certificates[name] = self_signed_certificate(config)
            print(f"[OK] Self-signed certificate '{name}' generated successfully.")
        case "request":
            print(f"Certificate signing request for '{name}' generated:")
            print(certificate_request(name, config))
        case "import":
            print(
                "Enter the certificate data "
                "(paste the certificate content, end with a blank line):"
            )
            body = _read_pasted_block() or [f"Imported certificate for: {name}"]
            if not body[0].startswith("-----BEGIN"):
                body = ["-----BEGIN CERTIFICATE-----", *body, "-----END CERTIFICATE-----"]
            config.certificates[name] = "\n".join(body)
            print(f"[OK] Certificate '{name}' imported successfully.")


@command(
    "crypto",
    "Crypto configuration commands",
    subcommands=(
        "ipsec",
        "key",
        "certificate",
        "dynamic-map",
        "engine accelerator",
        "ipsec security-association lifetime",
        "ipsec transform-set",
        "map",
        "map local-address",
    ),
)
def h_crypto(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    ctx.require_mode("Crypto commands are only available in Config mode.", ModeKind.CONFIG)
    config = ctx.config

    match args[0] if args else None:
        case "ipsec":
            _crypto_ipsec(args, config)
        case "key":
            _crypto_key(args, config)
        case "certificate":
            _crypto_certificate(args, config)
        case "dynamic-map":
            if len(args) < 3:
                raise CommandError(
                    "Usage: crypto dynamic-map <dynamic-map-name> <dynamic-seq-num>"
                )
            name = args[1]
            seq_num = _parse_number(args[2], "Invalid sequence number")
            config.crypto_dynamic_maps[name] = DynamicMapEntry(name=name, seq_num=seq_num)
            print(f"Created dynamic map entry '{name}' with sequence number {seq_num}")
        case "engine":
            if args[1:2] != ["accelerator"]:
                raise CommandError("Usage: crypto engine accelerator [slot]")
            slot = _parse_number(args[2], "Invalid slot number") if len(args) > 2 else None
            config.crypto_engine_accelerator = slot
            print(f"IPSec accelerator {slot if slot is not None else 'default'} configured")
        case "map":
            if len(args) < 3:
                raise CommandError("Usage: crypto map <map-name> <seq-num> ipsec-manual")
            name = args[1]
            seq_num = _parse_number(args[2], "Invalid sequence number")
            if args[3:4] == ["local-address"]:
                if len(args) < 5:
                    raise CommandError(
                        "Usage: crypto map <map-name> <seq-num> local-address <interface-id>"
                    )
                config.crypto_local_addresses[name] = args[4]
                print(f"Set local address interface '{args[4]}' for crypto map '{name}'")
            else:
                config.crypto_maps[name] = CryptoMapEntry(name=name, seq_num=seq_num)
                print(f"Created crypto map entry '{name}' with sequence number {seq_num}")
        case _:
            raise CommandError(
                "Invalid crypto subcommand. Available subcommands: 'ipsec profile', 'key'."
            )


def no_crypto(args: List[str], ctx: Context) -> None:
    """Undo a crypto setting; `args` are the words after ``no crypto``."""
    ctx.require_mode(
        "The 'no crypto' commands are only available in Global Configuration mode.",
        ModeKind.CONFIG,
    )
    config = ctx.config
    match args:
        case []:
            raise CommandError("Crypto command to negate required")
        case ["dynamic-map", name, *_]:
            if config.crypto_dynamic_maps.pop(name, None) is None:
                raise CommandError("Dynamic map not found")
            print(f"Removed dynamic map '{name}'")
        case ["dynamic-map"]:
            raise CommandError("Dynamic map name required")
        case ["engine", "accelerator", *_]:
            config.crypto_engine_accelerator = None
            print("Disabled IPSec accelerator")
        case ["engine", *_]:
            raise CommandError("Invalid engine command to negate")
        case ["ipsec", "security-association", "lifetime", "seconds", *_]:
            config.crypto_ipsec_lifetime.seconds = None
            print("Reset IPSec security association lifetime seconds to default")
        case ["ipsec", "security-association", "lifetime", "kilobytes", *_]:
            config.crypto_ipsec_lifetime.kilobytes = None
            print("Reset IPSec security association lifetime kilobytes to default")
        case ["ipsec", "security-association", *_]:
            raise CommandError(
                "Usage: no crypto ipsec security-association lifetime {seconds | kilobytes}"
            )
        case ["ipsec", "transform-set", name, *_]:
            if config.crypto_transform_sets.pop(name, None) is None:
                raise CommandError("Transform set not found")
            print(f"Removed transform set '{name}'")
        case ["ipsec", "transform-set"]:
            raise CommandError("Transform set name required")
        case ["ipsec", *_]:
            raise CommandError("Invalid ipsec command to negate")
        case ["map", name, "local-address", *_]:
            if config.crypto_local_addresses.pop(name, None) is None:
                raise CommandError("Crypto map local address not found")
            print(f"Removed local address for crypto map '{name}'")
        case ["map", name, *_]:
            if config.crypto_maps.pop(name, None) is None:
                raise CommandError("Crypto map not found")
            print(f"Removed crypto map '{name}'")
        case ["map"]:
            raise CommandError("Map name required")
        case _:
            raise CommandError("Invalid crypto command to negate")
