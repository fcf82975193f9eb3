"""Core enums and types for the PNF Router CLI."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, ClassVar, Dict, Optional


class ModeKind(Enum):
    """The kinds of shell mode a session can be in.

    Two kinds (the named access-list editors) need the ACL name to form a
    complete `Mode`; see `Mode` below.
    """

    USER = "user"
    PRIVILEGED = "privileged"
    CONFIG = "config"
    INTERFACE = "interface"
    VLAN = "vlan"
    ROUTER_CONFIG = "router-config"
    CONFIG_STD_NACL = "config-std-nacl"
    CONFIG_EXT_NACL = "config-ext-nacl"
    CRYPTO_USER = "crypto-user"


_NACL_KINDS = frozenset({ModeKind.CONFIG_STD_NACL, ModeKind.CONFIG_EXT_NACL})


@dataclass(frozen=True)
class Mode:
    """The active shell mode.

    Equality and hashing include `acl`, so editing ACL "101" and editing
    ACL "BLOCK" are different modes.
    """

    kind: ModeKind
    acl: Optional[str] = None

    USER: ClassVar[Mode]
    PRIVILEGED: ClassVar[Mode]
    CONFIG: ClassVar[Mode]
    INTERFACE: ClassVar[Mode]
    VLAN: ClassVar[Mode]
    ROUTER_CONFIG: ClassVar[Mode]
    CRYPTO_USER: ClassVar[Mode]

    def __post_init__(self) -> None:
        match (self.kind in _NACL_KINDS, self.acl):
            case (True, None | ""):
                raise ValueError(f"{self.kind.value} mode needs an access-list name")
            case (False, str()):
                raise ValueError(f"{self.kind.value} mode does not take an access-list")

    @classmethod
    def std_nacl(cls, acl: str) -> Mode:
        return cls(ModeKind.CONFIG_STD_NACL, acl)

    @classmethod
    def ext_nacl(cls, acl: str) -> Mode:
        return cls(ModeKind.CONFIG_EXT_NACL, acl)

    @property
    def value(self) -> str:
        """A printable name, used in log lines."""
        if self.acl is None:
            return self.kind.value
        return f"{self.kind.value}({self.acl})"

    @property
    def is_nacl(self) -> bool:
        return self.kind in _NACL_KINDS

    def __str__(self) -> str:
        return self.value


Mode.USER = Mode(ModeKind.USER)
Mode.PRIVILEGED = Mode(ModeKind.PRIVILEGED)
Mode.CONFIG = Mode(ModeKind.CONFIG)
Mode.INTERFACE = Mode(ModeKind.INTERFACE)
Mode.VLAN = Mode(ModeKind.VLAN)
Mode.ROUTER_CONFIG = Mode(ModeKind.ROUTER_CONFIG)
Mode.CRYPTO_USER = Mode(ModeKind.CRYPTO_USER)


_PARENTS: Dict[ModeKind, Optional[ModeKind]] = {
    ModeKind.USER: None,
    ModeKind.PRIVILEGED: ModeKind.USER,
    ModeKind.CONFIG: ModeKind.PRIVILEGED,
    ModeKind.INTERFACE: ModeKind.CONFIG,
    ModeKind.VLAN: ModeKind.CONFIG,
    ModeKind.ROUTER_CONFIG: ModeKind.CONFIG,
    ModeKind.CONFIG_STD_NACL: ModeKind.CONFIG,
    ModeKind.CONFIG_EXT_NACL: ModeKind.CONFIG,
    ModeKind.CRYPTO_USER: ModeKind.PRIVILEGED,
}


def parent_of(mode: Mode) -> Optional[Mode]:
    """Return the mode one level up the hierarchy, or None for user mode."""
    parent = _PARENTS[mode.kind]
    if parent is None:
        return None
    return Mode(parent)


def walkup_find_command(
    mode: Mode, command_name: str, is_legal: Callable[[Mode, str], bool]
) -> Optional[Mode]:
    """Find the nearest mode, starting at `mode`, in which a command is legal.

    Args:
        mode: The mode to start from.
        command_name: The full command name.
        is_legal: Predicate deciding whether the command is legal in one
            particular mode (no inheritance).

    Returns:
        The first mode on the way up where `is_legal` holds, or None once
        the root has been tested.
    """
    current: Optional[Mode] = mode
    while current is not None:
        if is_legal(current, command_name):
            return current
        current = parent_of(current)
    return None
