"""
Tests for access-control lists.

This test suite covers:
- Parsing of standard and extended entries
- Numbered ACLs created with `access-list`
- The named ACL editors and `show access-lists`
"""

import unittest
from unittest.mock import patch

from support import make_shell, printed

from pnf_router_cli import CommandError, Mode
from pnf_router_cli.handlers.acl_commands import parse_extended_entry, parse_standard_entry


class TestEntryParsing(unittest.TestCase):
    def test_standard_with_wildcard(self):
        entry = parse_standard_entry("deny", ["192.168.1.0", "0.0.0.255"])
        self.assertEqual(entry.source, "192.168.1.0")
        self.assertEqual(entry.source_wildcard, "0.0.0.255")

    def test_standard_any(self):
        entry = parse_standard_entry("permit", ["any"])
        self.assertEqual(entry.source, "any")
        self.assertEqual(entry.source_wildcard, "0.0.0.0")

    def test_standard_errors(self):
        with self.assertRaises(CommandError) as raised:
            parse_standard_entry("permit", [])
        self.assertEqual(
            raised.exception.message, "Invalid syntax. Use 'permit <ip> <wildcard mask>'."
        )
        with self.assertRaises(CommandError):
            parse_standard_entry("permit", ["10.0.0.1", "0.0.0.0", "extra"])

    def test_extended_host_and_port(self):
        entry = parse_extended_entry("permit", ["tcp", "any", "host", "10.0.0.1", "eq", "80"])
        self.assertEqual(entry.protocol, "tcp")
        self.assertEqual(entry.source, "any")
        self.assertEqual(entry.destination, "10.0.0.1")
        self.assertEqual(entry.destination_wildcard, "0.0.0.0")
        self.assertEqual((entry.destination_operator, entry.destination_port), ("eq", "80"))

    def test_extended_source_port(self):
        entry = parse_extended_entry(
            "deny", ["UDP", "10.0.0.0", "0.0.0.255", "gt", "1023", "any"]
        )
        self.assertEqual(entry.protocol, "udp")
        self.assertEqual(entry.source_wildcard, "0.0.0.255")
        self.assertEqual((entry.source_operator, entry.source_port), ("gt", "1023"))
        self.assertEqual(entry.destination, "any")
        self.assertEqual(entry.render(), "deny udp 10.0.0.0 0.0.0.255 gt 1023 any")

    def test_extended_too_short(self):
        with self.assertRaises(CommandError) as raised:
            parse_extended_entry("deny", ["ip", "any"])
        self.assertTrue(raised.exception.message.startswith("Invalid syntax. Use 'deny"))

    def test_extended_missing_port(self):
        with self.assertRaises(CommandError):
            parse_extended_entry("permit", ["tcp", "any", "any", "eq"])

    def test_extended_bad_address(self):
        with self.assertRaises(CommandError) as raised:
            parse_extended_entry("permit", ["ip", "999.1.1.1", "any"])
        self.assertEqual(raised.exception.message, "Invalid IP address format.")


class TestAclCommands(unittest.TestCase):
    """Test ACL commands through the shell."""

    @patch("builtins.print")
    def test_numbered_acl_kinds(self, mock_print):
        shell = make_shell(Mode.CONFIG)
        shell.execute_line("access-list 10 permit ip 10.0.0.1")
        shell.execute_line("access-list 150 deny tcp 10.0.0.1 10.0.0.2")
        acls = shell.ctx.state.acls
        self.assertEqual(acls["10"].kind, "standard")
        self.assertEqual(acls["10"].entries[0].render(), "permit ip 10.0.0.1 any")
        self.assertEqual(acls["150"].kind, "extended")
        self.assertEqual(acls["150"].entries[0].destination, "10.0.0.2")
        self.assertIn("ACL 10 updated.", printed(mock_print))

    @patch("builtins.print")
    def test_numbered_acl_bad_syntax(self, mock_print):
        shell = make_shell(Mode.CONFIG)
        shell.execute_line("access-list 10 allow ip 10.0.0.1")
        self.assertEqual(shell.ctx.state.acls, {})
        self.assertEqual(
            printed(mock_print)[-1],
            "Error: Invalid syntax. Use 'access-list <number> {deny|permit} <protocol> "
            "<source_ip> [destination_ip]'.",
        )

    @patch("builtins.print")
    def test_access_list_hidden_outside_config(self, mock_print):
        shell = make_shell(Mode.PRIVILEGED)
        shell.execute_line("access-list 10 permit ip 10.0.0.1")
        self.assertEqual(
            printed(mock_print),
            ["Ambiguous command or command not available in current mode: access-list"],
        )

    @patch("builtins.print")
    def test_extended_editor(self, mock_print):
        shell = make_shell(Mode.CONFIG)
        shell.execute_line("ip access-list extended 101")
        self.assertEqual(shell.ctx.mode, Mode.ext_nacl("101"))
        self.assertEqual(shell.prompt, "Router(config-ext-nacl)#")

        shell.execute_line("permit tcp any host 10.0.0.1 eq 80")
        entry = shell.ctx.state.acls["101"].entries[0]
        self.assertEqual(entry.destination_port, "80")
        self.assertIn("Permit entry added to extended ACL '101'.", printed(mock_print))

        shell.execute_line("exit")
        self.assertEqual(shell.ctx.mode, Mode.CONFIG)
        self.assertEqual(printed(mock_print)[-1], "Exiting Extended ACL Mode...")

    @patch("builtins.print")
    def test_standard_editor(self, mock_print):
        shell = make_shell(Mode.CONFIG)
        shell.execute_line("ip access-list standard BLOCK")
        self.assertEqual(shell.prompt, "Router(config-std-nacl)#")
        shell.execute_line("deny 192.168.1.0 0.0.0.255")
        self.assertEqual(
            printed(mock_print)[-1], "Deny entry added to standard ACL 'BLOCK'."
        )
        shell.execute_line("permit tcp any any")
        self.assertEqual(len(shell.ctx.state.acls["BLOCK"].entries), 1)

    @patch("builtins.print")
    def test_switch_editor_from_editor(self, mock_print):
        shell = make_shell(Mode.CONFIG)
        shell.execute_line("ip access-list standard A")
        shell.execute_line("ip access-list extended B")
        self.assertEqual(shell.ctx.mode, Mode.ext_nacl("B"))

    @patch("builtins.print")
    def test_show_access_lists(self, mock_print):
        shell = make_shell(Mode.CONFIG)
        shell.execute_line("access-list 10 permit ip 10.0.0.1")
        shell.execute_line("exit")
        mock_print.reset_mock()
        shell.execute_line("show access-lists")
        self.assertEqual(printed(mock_print), ["\nAccess list: 10", "  permit ip 10.0.0.1 any"])

    @patch("builtins.print")
    def test_show_access_lists_empty(self, mock_print):
        shell = make_shell(Mode.PRIVILEGED)
        shell.execute_line("show access-lists")
        self.assertEqual(printed(mock_print), ["No access lists configured."])


if __name__ == "__main__":
    unittest.main()
