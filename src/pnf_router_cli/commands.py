"""Command definition and registry for the PNF Router CLI."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import (
    TYPE_CHECKING,
    Callable,
    Dict,
    FrozenSet,
    Iterable,
    List,
    Optional,
    Sequence,
    Tuple,
)

from .custom_types import Mode
from .program_exceptions import AmbiguousCommandError, CommandNotFoundError
from .program_logging import get_logger

if TYPE_CHECKING:
    from .clock import Clock
    from .context import Context

Handler = Callable[[List[str], "Context", Optional["Clock"]], None]
"""Handlers take the argument tokens, the session context and the clock.
They return nothing on success and raise `CommandError` on failure."""


@dataclass(frozen=True)
class Command:
    """A definition of a command in the shell."""

    name: str  # e.g., "show"
    handler: Handler
    description: str = "(no help given)"  # brief help text

    subcommands: Tuple[str, ...] = ()
    """First-level keywords. When present, a two-token line must name one
    of these (by unambiguous prefix) and `show ?` style help lists them."""

    options: Tuple[str, ...] = ()
    """Leaf argument hints shown by help, e.g. "<ip-address>    - ..."."""

    completions: Tuple[str, ...] = ()
    """Extra keywords offered by tab completion only."""

    allowed_modes: FrozenSet[Mode] = field(default_factory=frozenset)
    """Only set for dynamically registered commands."""

    def __post_init__(self) -> None:
        """Make sure the name is a single token and hint lists are tuples."""
        match self.name.split():
            case []:
                msg = f"This command must have a name: {self}"
                raise ValueError(msg)
            case [_]:
                pass
            case _:
                raise ValueError(f"command names are a single word: {self.name!r}")
        # The instance is frozen, so object.__setattr__ is used to normalise
        # whatever sequences were passed in.
        for attr in ("subcommands", "options", "completions"):
            object.__setattr__(self, attr, tuple(getattr(self, attr) or ()))
        object.__setattr__(self, "allowed_modes", frozenset(self.allowed_modes or ()))

    @property
    def is_dynamic(self) -> bool:
        return bool(self.allowed_modes)


def resolve_prefix(prefix: str, candidates: Iterable[str]) -> Optional[str]:
    """Return the only candidate starting with `prefix`.

    Zero matches and several matches both give None; an exact match does not
    win over a longer candidate that shares it as a prefix.
    """
    matches = [c for c in candidates if c.startswith(prefix)]
    if len(matches) == 1:
        return matches[0]
    return None


class CommandRegistry:
    """Registry for CLI commands with singleton pattern.

    Static commands are registered at import time by the `command`
    decorator. Commands registered later through `register_command` carry
    the modes they are allowed in, and visibility policies decide where
    each kind shows up.
    """

    _instance = None

    def __new__(cls):  # A singleton
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:  # A singleton
        # Only initialize if not already initialized
        if not hasattr(self, "_initialized"):
            self._commands: Dict[str, Command] = {}
            self._initialized = True

    def register(self, cmd: Command) -> None:
        """Registers a `Command` in the `CommandRegistry`."""
        if cmd.name in self._commands:
            raise ValueError(f"duplicate command: {cmd.name}")
        self._commands[cmd.name] = cmd

    def register_command(
        self,
        name: str,
        description: str,
        subcommands: Sequence[str] = (),
        options: Sequence[str] = (),
        handler: Optional[Handler] = None,
        allowed_modes: Iterable[Mode] = (),
    ) -> Command:
        """Register a command after startup, limited to `allowed_modes`."""
        if handler is None:
            raise ValueError(f"command {name!r} needs a handler")
        modes = frozenset(allowed_modes)
        if not modes:
            raise ValueError(f"command {name!r} must be allowed in at least one mode")
        cmd = Command(
            name=name,
            handler=handler,
            description=description,
            subcommands=tuple(subcommands),
            options=tuple(options),
            allowed_modes=modes,
        )
        self.register(cmd)
        get_logger("commands").info(
            f"Dynamic command registered: {name} "
            f"(modes: {', '.join(sorted(m.value for m in modes))})"
        )
        return cmd

    def get(self, name: str) -> Optional[Command]:
        return self._commands.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def static_commands(self) -> List[Command]:
        return [c for c in self._commands.values() if not c.is_dynamic]

    def dynamic_commands(self) -> List[Command]:
        return [c for c in self._commands.values() if c.is_dynamic]

    def resolve(self, prefix: str, candidates: Sequence[str]) -> Command:
        """Resolve a typed prefix to a specific command among `candidates`.

        Unlike `resolve_prefix`, this tells unknown and ambiguous input apart
        so callers can report which one happened.
        """
        if not prefix:
            raise CommandNotFoundError("empty input")
        matches = [c for c in candidates if c.startswith(prefix) and c in self._commands]
        if not matches:
            raise CommandNotFoundError(f'unknown command: "{prefix}"')
        if len(matches) > 1:
            alts = ", ".join(matches[:10])
            raise AmbiguousCommandError(f"ambiguous command: {alts}")
        return self._commands[matches[0]]


# Global registry instance for auto-registration
_registry = CommandRegistry()


def command(
    name: str,
    description: str = "(no help given)",
    subcommands: Sequence[str] = (),
    options: Sequence[str] = (),
    completions: Sequence[str] = (),
):
    """Decorator to auto-register command handlers."""

    def decorator(func: Handler) -> Handler:
        cmd = Command(
            name=name,
            handler=func,
            description=description,
            subcommands=tuple(subcommands),
            options=tuple(options),
            completions=tuple(completions),
        )
        _registry.register(cmd)
        return func

    return decorator


def register_command(
    name: str,
    description: str,
    subcommands: Sequence[str] = (),
    options: Sequence[str] = (),
    handler: Optional[Handler] = None,
    allowed_modes: Iterable[Mode] = (),
) -> Command:
    """Register a dynamic command in the global registry."""
    return _registry.register_command(
        name, description, subcommands, options, handler, allowed_modes
    )
