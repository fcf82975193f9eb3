"""Access-control lists: numbered `access-list` and the named-ACL editors."""

from __future__ import annotations

from typing import List, Optional, Tuple

from ..clock import Clock
from ..commands import command
from ..context import Context
from ..custom_types import ModeKind
from ..network_state import AccessControlList, AclEntry, parse_ipv4
from ..program_exceptions import CommandError
from ..program_logging import get_logger

logger = get_logger("handlers")

PORT_OPERATORS = ("eq", "gt", "lt", "neq")

_STANDARD_USAGE = "Invalid syntax. Use '{action} <ip> <wildcard mask>'."
_EXTENDED_USAGE = (
    "Invalid syntax. Use '{action} <protocol> <src_ip> <dest_ip>' or "
    "'{action} <protocol> <src_ip> <eq|gt|lt> <src_port> <dest_ip> <eq|gt|lt> <dest_port>'."
)


class _Tokens:
    """A cursor over the words of an ACL entry."""

    def __init__(self, words: List[str], usage: str) -> None:
        self.words = words
        self.pos = 0
        self.usage = usage

    def peek(self) -> Optional[str]:
        return self.words[self.pos] if self.pos < len(self.words) else None

    def take(self) -> str:
        word = self.peek()
        if word is None:
            raise CommandError(self.usage)
        self.pos += 1
        return word

    @property
    def exhausted(self) -> bool:
        return self.pos >= len(self.words)


def _is_ipv4(word: Optional[str]) -> bool:
    if word is None:
        return False
    parts = word.split(".")
    return len(parts) == 4 and all(p.isdigit() and int(p) <= 255 for p in parts)


def _take_address(tokens: _Tokens) -> Tuple[str, Optional[str]]:
    """Read ``any``, ``host <ip>`` or ``<ip> [wildcard]``."""
    word = tokens.take()
    if word == "any":
        return "any", None
    if word == "host":
        return str(parse_ipv4(tokens.take())), "0.0.0.0"
    address = str(parse_ipv4(word))
    wildcard = None
    if _is_ipv4(tokens.peek()):
        wildcard = str(parse_ipv4(tokens.take(), "wildcard mask"))
    return address, wildcard


def _take_port(tokens: _Tokens) -> Tuple[Optional[str], Optional[str]]:
    if tokens.peek() in PORT_OPERATORS:
        operator = tokens.take()
        return operator, tokens.take()
    return None, None


def parse_standard_entry(action: str, words: List[str]) -> AclEntry:
    """Parse ``<src> [wildcard]`` for a standard ACL."""
    tokens = _Tokens(words, _STANDARD_USAGE.format(action=action))
    source, wildcard = _take_address(tokens)
    if not tokens.exhausted:
        raise CommandError(tokens.usage)
    return AclEntry(action=action, source=source, source_wildcard=wildcard or "0.0.0.0")


def parse_extended_entry(action: str, words: List[str]) -> AclEntry:
    """Parse an extended ACL entry.

    The layout is ``<protocol> <src> [wildcard] [op port] <dst> [wildcard]
    [op port]`` where `op` is one of `PORT_OPERATORS`.
    """
    usage = _EXTENDED_USAGE.format(action=action)
    if len(words) < 3:
        raise CommandError(usage)
    tokens = _Tokens(words, usage)
    protocol = tokens.take().lower()
    source, source_wildcard = _take_address(tokens)
    source_operator, source_port = _take_port(tokens)
    destination, destination_wildcard = _take_address(tokens)
    destination_operator, destination_port = _take_port(tokens)
    if not tokens.exhausted:
        raise CommandError(usage)
    return AclEntry(
        action=action,
        protocol=protocol,
        source=source,
        source_wildcard=source_wildcard,
        source_operator=source_operator,
        source_port=source_port,
        destination=destination,
        destination_wildcard=destination_wildcard,
        destination_operator=destination_operator,
        destination_port=destination_port,
    )


def _numbered_kind(number: str) -> str:
    if number.isdigit() and (1 <= int(number) <= 99 or 1300 <= int(number) <= 1999):
        return "standard"
    return "extended"


@command("access-list", "Configure a numbered ACL")
def h_access_list(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    """``access-list <number> <permit|deny> <protocol> <src> [dst]``"""
    ctx.require_mode(
        "The 'access-list' command is only available in global configuration mode.",
        ModeKind.CONFIG,
    )
    if len(args) < 4 or args[1] not in ("permit", "deny"):
        raise CommandError(
            "Invalid syntax. Use 'access-list <number> {deny|permit} <protocol> "
            "<source_ip> [destination_ip]'."
        )
    number, action, protocol, source = args[:4]
    destination = str(parse_ipv4(args[4])) if len(args) > 4 else "any"
    entry = AclEntry(
        action=action,
        protocol=protocol.lower(),
        source=str(parse_ipv4(source)),
        destination=destination,
    )

    acl = ctx.state.acls.setdefault(
        number, AccessControlList(name=number, kind=_numbered_kind(number))
    )
    acl.entries.append(entry)
    logger.info(f"ACL {number}: added '{entry.render()}'")
    print(f"ACL {number} updated.")


def _add_entry(action: str, args: List[str], ctx: Context) -> None:
    if not ctx.mode.is_nacl or ctx.mode.acl is None:
        raise CommandError("This command is only available in ACL configuration mode.")
    name = ctx.mode.acl
    acl = ctx.state.acls.get(name)
    if acl is None:
        raise CommandError(f"ACL '{name}' not found.")

    if ctx.mode.kind is ModeKind.CONFIG_STD_NACL:
        entry = parse_standard_entry(action, args)
        kind = "standard"
    else:
        entry = parse_extended_entry(action, args)
        kind = "extended"
    acl.entries.append(entry)
    logger.info(f"ACL {name}: added '{entry.render()}'")
    print(f"{action.capitalize()} entry added to {kind} ACL '{name}'.")


@command("deny", "Add a deny entry to the ACL (standard or extended)")
def h_deny(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    _add_entry("deny", args, ctx)


@command("permit", "Add a permit entry to the ACL (standard or extended)")
def h_permit(args: List[str], ctx: Context, clock: Optional[Clock]) -> None:
    _add_entry("permit", args, ctx)
