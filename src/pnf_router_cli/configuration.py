"""The persistent configuration aggregate, saved as startup-config.json."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .program_constants import PROGRAM_CONSTANTS


@dataclass
class DynamicMapEntry:
    name: str
    seq_num: int


@dataclass
class CryptoMapEntry:
    name: str
    seq_num: int
    interface_id: Optional[str] = None


@dataclass
class IpsecLifetime:
    seconds: Optional[int] = None
    kilobytes: Optional[int] = None


@dataclass
class Configuration:
    """Device configuration that survives a restart once written."""

    hostname: str = PROGRAM_CONSTANTS.DEFAULT_HOSTNAME
    running_config: Optional[str] = None
    startup_config: Optional[str] = None
    last_written: Optional[str] = None

    # passwords
    enable_password: Optional[str] = None
    enable_secret: Optional[str] = None
    encrypted_password: Optional[str] = None
    encrypted_secret: Optional[str] = None
    password_encryption: bool = False

    domain_name: Optional[str] = None

    # tunnel
    tunnel_mode: Optional[str] = None
    tunnel_source: Optional[str] = None
    tunnel_destination: Optional[str] = None
    tunnel_protection_profile: Optional[str] = None
    virtual_template: Optional[str] = None

    # crypto
    crypto_ipsec_profile: Optional[str] = None
    transform_sets: Optional[List[str]] = None
    crypto_keys: Dict[str, str] = field(default_factory=dict)
    certificates: Dict[str, str] = field(default_factory=dict)
    crypto_dynamic_maps: Dict[str, DynamicMapEntry] = field(default_factory=dict)
    crypto_maps: Dict[str, CryptoMapEntry] = field(default_factory=dict)
    crypto_local_addresses: Dict[str, str] = field(default_factory=dict)
    crypto_engine_accelerator: Optional[int] = None
    crypto_transform_sets: Dict[str, List[str]] = field(default_factory=dict)
    crypto_ipsec_lifetime: IpsecLifetime = field(default_factory=IpsecLifetime)

    @property
    def key_name(self) -> str:
        """Name crypto keys are stored under: <hostname>.<domain>."""
        domain = self.domain_name or PROGRAM_CONSTANTS.DEFAULT_DOMAIN
        return f"{self.hostname}.{domain}"
