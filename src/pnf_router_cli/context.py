"""Session context threaded through every command handler."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Set

from .configuration import Configuration
from .custom_types import Mode, ModeKind
from .network_state import NetworkState
from .program_exceptions import ModeViolationError
from .program_logging import log_mode_change

_PROMPT_SUFFIXES: Dict[ModeKind, str] = {
    ModeKind.USER: ">",
    ModeKind.PRIVILEGED: "#",
    ModeKind.CONFIG: "(config)#",
    ModeKind.INTERFACE: "(config-if)#",
    ModeKind.VLAN: "(config-vlan)#",
    ModeKind.ROUTER_CONFIG: "(config-router)#",
    ModeKind.CONFIG_STD_NACL: "(config-std-nacl)#",
    ModeKind.CONFIG_EXT_NACL: "(config-ext-nacl)#",
    ModeKind.CRYPTO_USER: "(user)#",
}


@dataclass
class NtpAssociation:
    address: str
    ref_clock: str = ".INIT."
    st: int = 16
    when: str = "-"
    poll: int = 64
    reach: int = 0
    delay: float = 0.0
    offset: float = 0.0
    disp: float = 0.01


@dataclass
class Context:
    """Mutable state for one CLI session.

    The prompt is always derived from the hostname and the current mode, so
    changing either is enough to change the prompt.
    """

    config: Configuration = field(default_factory=Configuration)
    state: NetworkState = field(default_factory=NetworkState)
    mode: Mode = Mode.USER
    config_path: Optional[Path] = None
    """Where `write memory` saves the configuration; None keeps it in memory."""

    selected_interface: Optional[str] = None
    interface_range: bool = False
    selected_vlan: Optional[int] = None
    vlan_names: Dict[int, str] = field(default_factory=dict)
    vlan_states: Dict[int, str] = field(default_factory=dict)

    ntp_servers: Set[str] = field(default_factory=set)
    ntp_associations: List[NtpAssociation] = field(default_factory=list)
    ntp_master: bool = False
    ntp_authentication_enabled: bool = False
    ntp_authentication_keys: Dict[int, str] = field(default_factory=dict)
    ntp_trusted_keys: Set[int] = field(default_factory=set)

    debug_all: bool = False

    @classmethod
    def from_config(cls, config: Configuration, config_path: Optional[Path] = None) -> Context:
        """Start a session from a loaded configuration, restoring the enable credentials."""
        ctx = cls(config=config, config_path=config_path)
        ctx.state.passwords.enable_password = config.enable_password
        ctx.state.passwords.enable_secret = config.enable_secret
        return ctx

    @property
    def prompt(self) -> str:
        suffix = _PROMPT_SUFFIXES[self.mode.kind]
        if self.mode.kind is ModeKind.INTERFACE and self.interface_range:
            suffix = "(config-if-range)#"
        return f"{self.config.hostname}{suffix}"

    def set_mode(self, mode: Mode) -> None:
        """Switch modes, dropping the range flag and the VLAN selection.

        The selected interface is kept after leaving interface mode.
        """
        old = self.mode
        if mode.kind is not ModeKind.INTERFACE:
            self.interface_range = False
        if mode.kind is not ModeKind.VLAN:
            self.selected_vlan = None
        self.mode = mode
        if old != mode:
            log_mode_change(old.value, mode.value)

    def in_mode(self, *kinds: ModeKind) -> bool:
        return self.mode.kind in kinds

    def require_mode(self, message: str, *kinds: ModeKind) -> None:
        """Raise `ModeViolationError(message)` unless in one of `kinds`."""
        if not self.in_mode(*kinds):
            raise ModeViolationError(message)
