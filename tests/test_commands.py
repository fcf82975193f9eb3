"""
Tests for command definitions and the command registry.

This test suite covers:
- Command validation and normalisation
- Prefix resolution
- The singleton registry and its strict resolver
"""

import itertools
import unittest
from unittest.mock import Mock

# Importing support registers the dynamic commands
import support  # noqa: F401

from pnf_router_cli import (
    AmbiguousCommandError,
    Command,
    CommandNotFoundError,
    CommandRegistry,
    Mode,
    _registry,
)
from pnf_router_cli.commands import resolve_prefix


class TestCommand(unittest.TestCase):
    """Test the Command dataclass."""

    def test_command_defaults(self):
        cmd = Command(name="test", handler=Mock())
        self.assertEqual(cmd.description, "(no help given)")
        self.assertEqual(cmd.subcommands, ())
        self.assertFalse(cmd.is_dynamic)

    def test_hint_lists_become_tuples(self):
        cmd = Command(name="test", handler=Mock(), subcommands=["a", "b"], options=["<x>"])
        self.assertEqual(cmd.subcommands, ("a", "b"))
        self.assertEqual(cmd.options, ("<x>",))

    def test_empty_name_raises_error(self):
        with self.assertRaises(ValueError):
            Command(name="", handler=Mock())

    def test_multi_word_name_raises_error(self):
        with self.assertRaises(ValueError):
            Command(name="show version", handler=Mock())

    def test_allowed_modes_make_command_dynamic(self):
        cmd = Command(name="test", handler=Mock(), allowed_modes=[Mode.USER])
        self.assertTrue(cmd.is_dynamic)
        self.assertEqual(cmd.allowed_modes, frozenset({Mode.USER}))

    def test_command_is_frozen(self):
        cmd = Command(name="test", handler=Mock())
        with self.assertRaises(AttributeError):
            cmd.name = "other"


class TestResolvePrefix(unittest.TestCase):
    """Test unique-prefix matching."""

    def test_unique_prefix(self):
        self.assertEqual(resolve_prefix("en", ["enable", "exit"]), "enable")

    def test_ambiguous_prefix(self):
        self.assertIsNone(resolve_prefix("e", ["enable", "exit"]))
        self.assertIsNone(resolve_prefix("e", ["exit", "enable"]))

    def test_result_does_not_depend_on_candidate_order(self):
        candidates = ["configure", "copy", "clock", "clear", "exit"]
        for order in itertools.permutations(candidates):
            with self.subTest(order=order):
                self.assertIsNone(resolve_prefix("c", order))
                self.assertIsNone(resolve_prefix("co", order))
                self.assertEqual(resolve_prefix("cop", order), "copy")
                self.assertEqual(resolve_prefix("cle", order), "clear")
                self.assertIsNone(resolve_prefix("z", order))

    def test_no_match(self):
        self.assertIsNone(resolve_prefix("x", ["enable", "exit"]))

    def test_exact_match_does_not_win_over_longer_candidate(self):
        self.assertIsNone(resolve_prefix("map", ["map", "map local-address"]))

    def test_full_name(self):
        self.assertEqual(resolve_prefix("exit", ["enable", "exit"]), "exit")


class TestCommandRegistry(unittest.TestCase):
    """Test the CommandRegistry class."""

    def test_registry_is_singleton(self):
        self.assertIs(CommandRegistry(), CommandRegistry())
        self.assertIs(CommandRegistry(), _registry)

    def test_static_commands_registered_on_import(self):
        for name in ("enable", "show", "configure", "interface", "crypto", "no"):
            self.assertIn(name, _registry)
            self.assertFalse(_registry.get(name).is_dynamic)

    def test_register_duplicate_command_raises_error(self):
        with self.assertRaises(ValueError):
            _registry.register(Command(name="enable", handler=Mock()))

    def test_register_command_requires_modes(self):
        with self.assertRaises(ValueError):
            _registry.register_command("never-registered", "x", handler=Mock())
        self.assertNotIn("never-registered", _registry)

    def test_register_command_requires_handler(self):
        with self.assertRaises(ValueError):
            _registry.register_command("never-registered", "x", allowed_modes=[Mode.USER])

    def test_dynamic_commands(self):
        names = [c.name for c in _registry.dynamic_commands()]
        self.assertIn("hello", names)
        self.assertNotIn("hello", [c.name for c in _registry.static_commands()])

    def test_resolve_unique(self):
        cmd = _registry.resolve("conf", ["configure", "copy"])
        self.assertEqual(cmd.name, "configure")

    def test_resolve_empty_input_raises_error(self):
        with self.assertRaises(CommandNotFoundError):
            _registry.resolve("", ["configure"])

    def test_resolve_unknown_command_raises_error(self):
        with self.assertRaises(CommandNotFoundError):
            _registry.resolve("zzz", ["configure", "copy"])

    def test_resolve_ambiguous_command_raises_error(self):
        with self.assertRaises(AmbiguousCommandError):
            _registry.resolve("c", ["configure", "copy"])
        with self.assertRaises(AmbiguousCommandError):
            _registry.resolve("c", ["copy", "configure"])


if __name__ == "__main__":
    unittest.main()
