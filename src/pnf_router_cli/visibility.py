"""Which commands are legal in which mode.

Two strategies answer the same question. `AllowListPolicy` uses one fixed
list per mode and never looks at other modes. `WalkUpPolicy` serves the
dynamically registered commands: it checks each command's allowed modes
and inherits from parent modes. `CombinedPolicy` puts the two together and
is what the shell, the help system and the completer use.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, List, Optional, Tuple

from .commands import Command, CommandRegistry, _registry
from .custom_types import Mode, ModeKind, walkup_find_command

_NACL_COMMANDS = ("deny", "permit", "help", "exit", "clear", "reload", "ip")

ALLOWED_COMMANDS: Dict[ModeKind, Tuple[str, ...]] = {
    ModeKind.USER: ("enable", "ping", "help", "show", "clear", "reload", "exit"),
    ModeKind.PRIVILEGED: (
        "configure",
        "ping",
        "exit",
        "write",
        "help",
        "show",
        "copy",
        "clock",
        "clear",
        "reload",
        "debug",
        "undebug",
        "ifconfig",
    ),
    ModeKind.CONFIG: (
        "hostname",
        "interface",
        "ping",
        "exit",
        "clear",
        "tunnel",
        "access-list",
        "router",
        "virtual-template",
        "help",
        "write",
        "vlan",
        "ip",
        "service",
        "set",
        "enable",
        "ifconfig",
        "ntp",
        "no",
        "reload",
        "crypto",
    ),
    ModeKind.INTERFACE: (
        "shutdown",
        "no",
        "exit",
        "clear",
        "help",
        "switchport",
        "write",
        "reload",
        "ip",
        "interface",
    ),
    ModeKind.VLAN: ("name", "state", "clear", "exit", "help", "reload", "vlan"),
    ModeKind.ROUTER_CONFIG: (
        "network",
        "neighbor",
        "exit",
        "clear",
        "area",
        "passive-interface",
        "distance",
        "help",
        "reload",
        "default-information",
        "router-id",
    ),
    ModeKind.CONFIG_STD_NACL: _NACL_COMMANDS,
    ModeKind.CONFIG_EXT_NACL: _NACL_COMMANDS,
    ModeKind.CRYPTO_USER: ("exit",),
}

# A dynamic command allowed in the key mode is also legal in these modes.
_WIDENED_FROM: Dict[ModeKind, FrozenSet[ModeKind]] = {
    ModeKind.USER: frozenset(
        {ModeKind.PRIVILEGED, ModeKind.CONFIG, ModeKind.INTERFACE}
    ),
    ModeKind.PRIVILEGED: frozenset({ModeKind.CONFIG, ModeKind.INTERFACE}),
    ModeKind.CONFIG: frozenset({ModeKind.INTERFACE}),
}


class VisibilityPolicy:
    """Answers "which command names may be typed in this mode?"."""

    def visible(self, mode: Mode) -> List[str]:
        raise NotImplementedError

    def is_legal(self, mode: Mode, name: str) -> bool:
        return name in self.visible(mode)


class AllowListPolicy(VisibilityPolicy):
    """One fixed list of command names per mode, with no inheritance."""

    def __init__(self, registry: Optional[CommandRegistry] = None) -> None:
        self.registry = registry if registry is not None else _registry

    def visible(self, mode: Mode) -> List[str]:
        static = {cmd.name for cmd in self.registry.static_commands()}
        return [name for name in ALLOWED_COMMANDS[mode.kind] if name in static]


def allowed_directly(cmd: Command, mode: Mode) -> bool:
    """Whether a dynamic command is legal in `mode` without walking up."""
    if mode in cmd.allowed_modes:
        return True
    return any(
        mode.kind in _WIDENED_FROM.get(allowed.kind, frozenset())
        for allowed in cmd.allowed_modes
    )


class WalkUpPolicy(VisibilityPolicy):
    """Dynamic commands, checked against the mode and then its ancestors."""

    def __init__(self, registry: Optional[CommandRegistry] = None) -> None:
        self.registry = registry if registry is not None else _registry

    def _legal_here(self, mode: Mode, name: str) -> bool:
        cmd = self.registry.get(name)
        return cmd is not None and cmd.is_dynamic and allowed_directly(cmd, mode)

    def found_in(self, mode: Mode, name: str) -> Optional[Mode]:
        """Return the mode the command was found in, walking up from `mode`."""
        return walkup_find_command(mode, name, self._legal_here)

    def visible(self, mode: Mode) -> List[str]:
        return [
            cmd.name
            for cmd in self.registry.dynamic_commands()
            if self.found_in(mode, cmd.name) is not None
        ]


class CombinedPolicy(VisibilityPolicy):
    """Static allow-list first, then any dynamic commands reachable from here."""

    def __init__(self, registry: Optional[CommandRegistry] = None) -> None:
        self.registry = registry if registry is not None else _registry
        self.static = AllowListPolicy(self.registry)
        self.dynamic = WalkUpPolicy(self.registry)

    def visible(self, mode: Mode) -> List[str]:
        names = self.static.visible(mode)
        names.extend(n for n in self.dynamic.visible(mode) if n not in names)
        return names
