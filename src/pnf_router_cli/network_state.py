"""In-memory tables the router commands read and write.

Everything here lives for one session and is owned by the session's
`Context`; none of it is written to the JSON snapshot.
"""

from __future__ import annotations

import hashlib
import ipaddress
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .program_exceptions import CommandError


def parse_ipv4(text: str, what: str = "IP address") -> ipaddress.IPv4Address:
    """Parse a dotted-quad address or raise a `CommandError`."""
    try:
        return ipaddress.IPv4Address(text)
    except ValueError:
        raise CommandError(f"Invalid {what} format.") from None


def calculate_broadcast(ip: ipaddress.IPv4Address, prefix_len: int) -> ipaddress.IPv4Address:
    """Broadcast address of the network `ip` sits in."""
    return ipaddress.IPv4Network(f"{ip}/{prefix_len}", strict=False).broadcast_address


def encrypt_password(password: str) -> str:
    """Hex SHA-256 of `password`, as stored by `service password-encryption`."""
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


@dataclass
class Route:
    netmask: str
    next_hop: str
    """Next-hop address, exit interface, or "<interface> <next-hop>"."""

    @property
    def is_connected(self) -> bool:
        try:
            ipaddress.IPv4Address(self.next_hop)
        except ValueError:
            return True
        return False


@dataclass
class AreaConfig:
    authentication: bool = False
    stub: bool = False
    no_summary: bool = False
    default_cost: Optional[int] = None


@dataclass
class OspfConfig:
    process_id: Optional[int] = None
    router_id: Optional[str] = None
    distance: Optional[int] = None
    default_information_originate: bool = False
    passive_interfaces: List[str] = field(default_factory=list)
    networks: Dict[str, int] = field(default_factory=dict)
    """Keyed by "<ip> <wildcard>", valued by area id."""
    neighbors: Dict[str, Optional[int]] = field(default_factory=dict)
    areas: Dict[str, AreaConfig] = field(default_factory=dict)


@dataclass
class AclEntry:
    action: str
    source: str
    destination: str = "any"
    protocol: Optional[str] = None
    source_wildcard: Optional[str] = None
    source_operator: Optional[str] = None
    source_port: Optional[str] = None
    destination_wildcard: Optional[str] = None
    destination_operator: Optional[str] = None
    destination_port: Optional[str] = None
    matches: Optional[int] = None

    def render(self) -> str:
        """The entry as it appears in running-config, without indentation."""
        parts = [self.action, self.protocol or "ip", self.source]
        if self.source_wildcard:
            parts.append(self.source_wildcard)
        if self.source_operator and self.source_port:
            parts += [self.source_operator, self.source_port]
        parts.append(self.destination)
        if self.destination_wildcard:
            parts.append(self.destination_wildcard)
        if self.destination_operator and self.destination_port:
            parts += [self.destination_operator, self.destination_port]
        return " ".join(parts)


@dataclass
class AccessControlList:
    name: str
    kind: str = "extended"  # "standard" or "extended"
    entries: List[AclEntry] = field(default_factory=list)


@dataclass
class PasswordStore:
    enable_password: Optional[str] = None
    enable_secret: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.enable_password is None and self.enable_secret is None


@dataclass
class SwitchportConfig:
    mode: Optional[str] = None  # "access" or "trunk"
    access_vlan: Optional[int] = None
    trunk_encapsulation: Optional[str] = None
    native_vlan: Optional[int] = None
    allowed_vlans: List[int] = field(default_factory=list)


def _default_ifconfig() -> Dict[str, Tuple[str, str]]:
    ip = ipaddress.IPv4Address("192.168.253.135")
    return {"ens33": (str(ip), str(calculate_broadcast(ip, 24)))}


@dataclass
class NetworkState:
    """All per-session router tables."""

    interface_status: Dict[str, bool] = field(default_factory=lambda: {"ens33": False})
    """Administrative state per interface; True means `no shutdown`."""

    ip_addresses: Dict[str, Tuple[str, str]] = field(default_factory=dict)
    """Interface name to (address, netmask), set by `ip address`."""

    ifconfig: Dict[str, Tuple[str, str]] = field(default_factory=_default_ifconfig)
    """Host-style table used by `ifconfig`: name to (address, broadcast)."""

    routes: Dict[str, Route] = field(default_factory=dict)
    ospf: OspfConfig = field(default_factory=OspfConfig)
    interface_ospf: Dict[str, Dict[str, str]] = field(default_factory=dict)
    acls: Dict[str, AccessControlList] = field(default_factory=dict)
    passwords: PasswordStore = field(default_factory=PasswordStore)
    switchports: Dict[str, SwitchportConfig] = field(default_factory=dict)

    def reset_ospf(self) -> None:
        self.ospf = OspfConfig()

    def is_reachable(self, address: str) -> bool:
        """Whether `ping` should get replies from `address`."""
        if address in self.routes:
            return True
        return any(ip == address for ip, _ in self.ip_addresses.values())

    def switchport(self, interface: str) -> SwitchportConfig:
        return self.switchports.setdefault(interface, SwitchportConfig())
