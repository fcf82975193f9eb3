"""
Configuration serialization for the PNF Router CLI.

Functions for saving and loading the `Configuration` aggregate to/from JSON.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path

from .configuration import (
    Configuration,
    CryptoMapEntry,
    DynamicMapEntry,
    IpsecLifetime,
)
from .program_logging import get_logger

logger = get_logger("persistence")


def to_dict(config: Configuration) -> dict:
    """Convert the configuration (and its nested dataclasses) to plain dicts."""
    return asdict(config)


def save_config(config: Configuration, config_file: Path) -> None:
    """Save configuration to a pretty-printed JSON file."""
    config_file = Path(config_file)
    config_file.parent.mkdir(parents=True, exist_ok=True)

    with open(config_file, "w", encoding="utf-8") as f:
        json.dump(to_dict(config), f, indent=2)

    logger.info(f"Configuration saved to {config_file}")


def from_dict(data: dict) -> Configuration:
    """Build a `Configuration` from decoded JSON; missing keys take defaults."""
    defaults = Configuration()

    lifetime = data.get("crypto_ipsec_lifetime") or {}
    transform_sets = data.get("transform_sets")

    return Configuration(
        hostname=data.get("hostname", defaults.hostname),
        running_config=data.get("running_config"),
        startup_config=data.get("startup_config"),
        last_written=data.get("last_written"),
        enable_password=data.get("enable_password"),
        enable_secret=data.get("enable_secret"),
        encrypted_password=data.get("encrypted_password"),
        encrypted_secret=data.get("encrypted_secret"),
        password_encryption=bool(data.get("password_encryption", False)),
        domain_name=data.get("domain_name"),
        tunnel_mode=data.get("tunnel_mode"),
        tunnel_source=data.get("tunnel_source"),
        tunnel_destination=data.get("tunnel_destination"),
        tunnel_protection_profile=data.get("tunnel_protection_profile"),
        virtual_template=data.get("virtual_template"),
        crypto_ipsec_profile=data.get("crypto_ipsec_profile"),
        transform_sets=list(transform_sets) if transform_sets is not None else None,
        crypto_keys=dict(data.get("crypto_keys", {})),
        certificates=dict(data.get("certificates", {})),
        crypto_dynamic_maps={
            name: DynamicMapEntry(**entry)
            for name, entry in data.get("crypto_dynamic_maps", {}).items()
        },
        crypto_maps={
            name: CryptoMapEntry(**entry)
            for name, entry in data.get("crypto_maps", {}).items()
        },
        crypto_local_addresses=dict(data.get("crypto_local_addresses", {})),
        crypto_engine_accelerator=data.get("crypto_engine_accelerator"),
        crypto_transform_sets={
            name: list(transforms)
            for name, transforms in data.get("crypto_transform_sets", {}).items()
        },
        crypto_ipsec_lifetime=IpsecLifetime(
            seconds=lifetime.get("seconds"), kilobytes=lifetime.get("kilobytes")
        ),
    )


def load_config(config_file: Path) -> Configuration:
    """Load configuration from JSON, falling back to defaults on any problem."""
    config_file = Path(config_file)
    if not config_file.exists():
        logger.info(f"No saved configuration at {config_file}; using defaults")
        return Configuration()

    try:
        with open(config_file, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise TypeError(f"expected a JSON object, got {type(data).__name__}")
        return from_dict(data)
    except (OSError, ValueError, TypeError, AttributeError) as e:
        logger.warning(f"Could not load configuration from {config_file}: {e}")
        return Configuration()
