"""
Tests for the shell: the line dispatcher, the read loop and completion.

This test suite covers:
- Prefix resolution of commands and subcommands per mode
- Error reporting and the state left behind by failed commands
- Contextual help and that it never changes the session
- Shell.run with a fake prompt session
- Tab completion
"""

import copy
import tempfile
import unittest
from pathlib import Path
from unittest.mock import Mock, patch

from prompt_toolkit.document import Document
from support import make_shell, printed

from pnf_router_cli import Context, Mode, Shell
from pnf_router_cli.completer import RouterCompleter
from pnf_router_cli.handlers.show_commands import SHOW_SUBCOMMANDS
from pnf_router_cli.persistence import load_config


class TestDispatcher(unittest.TestCase):
    """Test Shell.execute_line."""

    @patch("builtins.print")
    def test_enable_prefix(self, mock_print):
        shell = make_shell()
        self.assertTrue(shell.execute_line("en"))
        self.assertEqual(shell.ctx.mode, Mode.PRIVILEGED)
        self.assertEqual(shell.prompt, "Router#")
        self.assertIn("Entering privileged EXEC mode...", printed(mock_print))

    @patch("getpass.getpass", return_value="cisco")
    @patch("builtins.print")
    def test_enable_with_password(self, mock_print, mock_getpass):
        shell = make_shell()
        shell.ctx.state.passwords.enable_password = "cisco"
        shell.execute_line("enable")
        mock_getpass.assert_called_once_with("Enter password:")
        self.assertEqual(shell.ctx.mode, Mode.PRIVILEGED)

    @patch("getpass.getpass", return_value="wrong")
    @patch("builtins.print")
    def test_enable_with_wrong_secret(self, mock_print, mock_getpass):
        shell = make_shell()
        shell.ctx.state.passwords.enable_secret = "s3cret"
        shell.execute_line("enable")
        self.assertEqual(shell.ctx.mode, Mode.USER)
        self.assertIn("Error: Incorrect password or secret.", printed(mock_print))

    @patch("builtins.print")
    def test_configure_terminal_by_prefixes(self, mock_print):
        shell = make_shell(Mode.PRIVILEGED)
        shell.execute_line("conf t")
        self.assertEqual(shell.ctx.mode, Mode.CONFIG)
        self.assertEqual(shell.prompt, "Router(config)#")

    @patch("builtins.print")
    def test_interface_selection(self, mock_print):
        shell = make_shell(Mode.CONFIG)
        shell.execute_line("int g0/0")
        self.assertEqual(shell.prompt, "Router(config-if)#")
        self.assertEqual(shell.ctx.selected_interface, "g0/0")

    @patch("builtins.print")
    def test_interface_range_prompt(self, mock_print):
        shell = make_shell(Mode.CONFIG)
        shell.execute_line("interface range f0/0 - 24")
        self.assertEqual(shell.prompt, "Router(config-if-range)#")
        self.assertIn(
            "Entering Interface Range configuration mode for: f0/0 - 24", printed(mock_print)
        )

    @patch("builtins.print")
    def test_shutdown_without_interface(self, mock_print):
        shell = make_shell(Mode.INTERFACE)
        shell.execute_line("shutdown")
        self.assertIn(
            "Error: No interface selected. Use the 'interface' command first.",
            printed(mock_print),
        )
        self.assertEqual(shell.ctx.mode, Mode.INTERFACE)

    @patch("builtins.print")
    def test_shutdown_and_no_shutdown(self, mock_print):
        shell = make_shell(Mode.CONFIG)
        shell.execute_line("interface g0/1")
        shell.execute_line("shutdown")
        self.assertFalse(shell.ctx.state.interface_status["g0/1"])
        shell.execute_line("no shutdown")
        self.assertTrue(shell.ctx.state.interface_status["g0/1"])
        self.assertIn(
            "%LINK-5-CHANGED: Interface g0/1, changed state to up", printed(mock_print)
        )

    @patch("builtins.print")
    def test_ambiguous_command(self, mock_print):
        shell = make_shell()
        shell.execute_line("e")
        self.assertEqual(
            printed(mock_print),
            ["Ambiguous command or command not available in current mode: e"],
        )

    @patch("builtins.print")
    def test_command_not_available_in_mode(self, mock_print):
        shell = make_shell()
        shell.execute_line("hostname R1")
        self.assertEqual(shell.ctx.config.hostname, "Router")
        self.assertIn(
            "Ambiguous command or command not available in current mode: hostname",
            printed(mock_print),
        )

    @patch("builtins.print")
    def test_incomplete_command(self, mock_print):
        shell = make_shell(Mode.PRIVILEGED)
        shell.execute_line("configure")
        self.assertEqual(printed(mock_print), ["Incomplete command. Subcommand required."])
        self.assertEqual(shell.ctx.mode, Mode.PRIVILEGED)

    @patch("builtins.print")
    def test_invalid_subcommand(self, mock_print):
        shell = make_shell(Mode.PRIVILEGED)
        shell.execute_line("configure x")
        self.assertEqual(printed(mock_print), ["Ambiguous or invalid subcommand: x"])

    @patch("builtins.print")
    def test_handler_error_is_printed(self, mock_print):
        shell = make_shell(Mode.CONFIG)
        self.assertTrue(shell.execute_line("hostname"))
        self.assertIn(
            "Error: Please specify a new hostname. Usage: hostname <new_hostname>",
            printed(mock_print),
        )

    @patch("builtins.print")
    def test_unexpected_exception_is_reported(self, mock_print):
        shell = make_shell()
        with patch(
            "pnf_router_cli.handlers.exec_commands.print_help_banner",
            side_effect=RuntimeError("boom"),
        ):
            self.assertTrue(shell.execute_line("help"))
        self.assertIn("Error: boom", printed(mock_print))

    @patch("builtins.print")
    def test_hostname_changes_prompt(self, mock_print):
        shell = make_shell(Mode.CONFIG)
        shell.execute_line("hostname R1")
        self.assertEqual(shell.prompt, "R1(config)#")
        self.assertIn("Hostname changed to 'R1'", printed(mock_print))

    @patch("builtins.print")
    def test_exit_walks_up(self, mock_print):
        shell = make_shell(Mode.CONFIG)
        shell.execute_line("interface g0/0")
        shell.execute_line("exit")
        self.assertEqual(shell.ctx.mode, Mode.CONFIG)
        self.assertEqual(shell.ctx.selected_interface, "g0/0")
        shell.execute_line("exit")
        self.assertEqual(shell.ctx.mode, Mode.PRIVILEGED)

    @patch("builtins.print")
    def test_exit_clears_range_flag(self, mock_print):
        shell = make_shell(Mode.CONFIG)
        shell.execute_line("interface range f0/1 - 24")
        shell.execute_line("exit")
        self.assertFalse(shell.ctx.interface_range)
        self.assertEqual(shell.prompt, "Router(config)#")

    @patch("builtins.print")
    def test_show_interfaces_after_leaving_interface_mode(self, mock_print):
        shell = make_shell(Mode.CONFIG)
        shell.execute_line("interface g0/0")
        shell.execute_line("ip address 10.0.0.1 255.255.255.0")
        shell.execute_line("exit")
        shell.execute_line("exit")
        mock_print.reset_mock()
        shell.execute_line("show interfaces")
        lines = printed(mock_print)
        self.assertEqual(lines[0], "g0/0 is up, line protocol is up")
        self.assertEqual(lines[1], "  Internet address is 10.0.0.1, subnet mask 255.255.255.0")

    @patch("builtins.print")
    def test_running_config_after_leaving_interface_mode(self, mock_print):
        shell = make_shell(Mode.CONFIG)
        shell.execute_line("interface g0/0")
        shell.execute_line("ip address 10.0.0.1 255.255.255.0")
        shell.execute_line("no shutdown")
        shell.execute_line("exit")
        shell.execute_line("exit")
        mock_print.reset_mock()
        shell.execute_line("show running-config")
        text = "\n".join(printed(mock_print))
        self.assertIn("interface g0/0\n ip address 10.0.0.1 255.255.255.0", text)
        self.assertIn(" no shutdown", text)

    @patch("builtins.print")
    def test_exit_cli(self, mock_print):
        shell = make_shell(Mode.CONFIG)
        self.assertFalse(shell.execute_line("  exit cli  "))
        self.assertEqual(printed(mock_print), ["Exiting CLI..."])

    @patch("builtins.print")
    def test_exit_cli_with_extra_spacing(self, mock_print):
        shell = make_shell(Mode.CONFIG)
        self.assertFalse(shell.execute_line("exit   cli"))
        self.assertEqual(printed(mock_print), ["Exiting CLI..."])
        self.assertEqual(shell.ctx.mode, Mode.CONFIG)

    @patch("builtins.print")
    def test_lookup_failures_are_logged_by_kind(self, mock_print):
        shell = make_shell()
        with self.assertLogs("pnf_router_cli.shell", level="INFO") as logs:
            shell.execute_line("e")
            shell.execute_line("zzz")
        self.assertTrue(any("ambiguous command: enable, exit" in m for m in logs.output))
        self.assertTrue(any('unknown command: "zzz"' in m for m in logs.output))
        self.assertEqual(
            printed(mock_print),
            [
                "Ambiguous command or command not available in current mode: e",
                "Ambiguous command or command not available in current mode: zzz",
            ],
        )

    @patch("builtins.print")
    def test_exit_ssh(self, mock_print):
        shell = make_shell()
        with self.assertRaises(SystemExit) as raised:
            shell.execute_line("exit ssh")
        self.assertEqual(raised.exception.code, 0)
        self.assertIn("Terminating SSH session...", printed(mock_print))

    @patch("builtins.print")
    def test_empty_line(self, mock_print):
        shell = make_shell()
        self.assertTrue(shell.execute_line("   "))
        mock_print.assert_not_called()

    @patch("builtins.print")
    def test_route_overwrite(self, mock_print):
        shell = make_shell(Mode.CONFIG)
        shell.execute_line("ip route 10.0.0.0 255.0.0.0 192.168.1.1")
        shell.execute_line("ip route 10.0.0.0 255.0.0.0 192.168.1.2")
        routes = shell.ctx.state.routes
        self.assertEqual(list(routes), ["10.0.0.0"])
        self.assertEqual(routes["10.0.0.0"].next_hop, "192.168.1.2")

    @patch("builtins.print")
    def test_ping(self, mock_print):
        shell = make_shell(Mode.CONFIG)
        shell.execute_line("ip route 10.0.0.0 255.0.0.0 192.168.1.1")
        shell.execute_line("ping 10.0.0.0")
        self.assertIn("Reply from 10.0.0.0: bytes=32 time<1ms TTL=128", printed(mock_print))

        mock_print.reset_mock()
        shell.execute_line("ping 172.16.0.1")
        self.assertIn("Request timed out.", printed(mock_print))
        self.assertIn("Error: IP address 172.16.0.1 is not reachable.", printed(mock_print))

    @patch("builtins.print")
    def test_show_privileged_view_from_user_mode(self, mock_print):
        shell = make_shell()
        shell.execute_line("show running-config")
        self.assertIn(
            "Error: The 'running-config' command is only available in Privileged EXEC mode.",
            printed(mock_print),
        )

    @patch("builtins.print")
    def test_hello(self, mock_print):
        shell = make_shell()
        shell.execute_line("hello world")
        shell.execute_line("hell fr")
        shell.execute_line("hello privileged")
        shell.execute_line("hello")
        self.assertEqual(
            printed(mock_print),
            [
                "Hello, World!",
                "Hello, Friend!",
                "Error: This 'hello privileged' is only valid in Privileged Mode",
                "Incomplete command. Subcommand required.",
            ],
        )

    @patch("builtins.print")
    def test_hello_in_config_and_name(self, mock_print):
        shell = make_shell(Mode.CONFIG)
        shell.execute_line("hello config")
        shell.execute_line("hello there again")
        self.assertEqual(printed(mock_print), ["Hello in Config Mode!", "Hello, there!"])

    @patch("builtins.print")
    def test_write_memory_saves_file(self, mock_print):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "startup-config.json"
            ctx = Context(config_path=path)
            shell = make_shell(Mode.CONFIG, context=ctx)
            shell.execute_line("hostname Edge")
            shell.execute_line("write memory")
            self.assertTrue(path.exists())
            loaded = load_config(path)
        self.assertEqual(loaded.hostname, "Edge")
        self.assertIn("hostname Edge", loaded.startup_config)
        self.assertEqual(loaded.running_config, loaded.startup_config)
        self.assertIn("Configuration saved successfully.", printed(mock_print))


class TestHelp(unittest.TestCase):
    """Test lines ending in '?'."""

    @patch("builtins.print")
    def test_show_question_mark_lists_in_order(self, mock_print):
        shell = make_shell(Mode.PRIVILEGED)
        shell.execute_line("show ?")
        self.assertEqual(
            printed(mock_print),
            ["Possible completions:"] + [f"  {s}" for s in SHOW_SUBCOMMANDS],
        )

    @patch("builtins.print")
    def test_partial_command_completions(self, mock_print):
        shell = make_shell(Mode.PRIVILEGED)
        shell.execute_line("co?")
        self.assertEqual(
            printed(mock_print),
            ["Possible completions for 'co?':", "  configure", "  copy"],
        )

    @patch("builtins.print")
    def test_partial_subcommand(self, mock_print):
        shell = make_shell(Mode.PRIVILEGED)
        shell.execute_line("configure t?")
        self.assertEqual(printed(mock_print), ["Possible completions:", "  terminal"])

    @patch("builtins.print")
    def test_options_listed(self, mock_print):
        shell = make_shell(Mode.CONFIG)
        shell.execute_line("hostname ?")
        self.assertEqual(
            printed(mock_print),
            ["Possible completions:", "  <new-hostname>    - Enter a new hostname"],
        )

    @patch("builtins.print")
    def test_too_many_tokens(self, mock_print):
        shell = make_shell()
        shell.execute_line("show ip route ?")
        self.assertEqual(printed(mock_print), ["No additional parameters available"])

    @patch("builtins.print")
    def test_banner_lists_mode_table_and_dynamic_commands(self, mock_print):
        shell = make_shell()
        shell.execute_line("?")
        lines = printed(mock_print)
        self.assertIn("Available commands", lines)
        self.assertIn("enable            - Enter privileged mode", lines)
        self.assertIn("hello             - Prints a greeting message", lines)

    @patch("builtins.print")
    def test_help_never_mutates(self, mock_print):
        for mode in (Mode.USER, Mode.PRIVILEGED, Mode.CONFIG, Mode.INTERFACE):
            shell = make_shell(mode)
            before = (
                shell.ctx.mode,
                shell.ctx.selected_interface,
                copy.deepcopy(shell.ctx.config),
                copy.deepcopy(shell.ctx.state),
            )
            for line in ("?", "show ?", "conf ?", "ip ro ?", "exit ?", "x y z ?", "no sh?"):
                shell.execute_line(line)
            after = (
                shell.ctx.mode,
                shell.ctx.selected_interface,
                shell.ctx.config,
                shell.ctx.state,
            )
            self.assertEqual(before, after)


class TestShellRun(unittest.TestCase):
    """Test Shell.run with a fake prompt session."""

    @patch("builtins.print")
    def test_run_until_exit_cli(self, mock_print):
        session = Mock()
        session.prompt.side_effect = ["en", "exit cli", "never read"]
        shell = Shell(context=Context(), session=session)

        exit_code = shell.run()

        self.assertEqual(exit_code, 0)
        self.assertEqual(
            [c.args[0] for c in session.prompt.call_args_list], ["Router>", "Router#"]
        )

    @patch("builtins.print")
    def test_run_keyboard_interrupt(self, mock_print):
        session = Mock()
        session.prompt.side_effect = [KeyboardInterrupt, EOFError]
        shell = Shell(context=Context(), session=session)

        self.assertEqual(shell.run(), 0)
        self.assertIn(
            "Ctrl+C pressed, but waiting for 'exit cli' command to exit...",
            printed(mock_print),
        )

    @patch("builtins.print")
    def test_run_empty_line(self, mock_print):
        session = Mock()
        session.prompt.side_effect = ["", EOFError]
        shell = Shell(context=Context(), session=session)
        self.assertEqual(shell.run(), 0)


class TestCompleter(unittest.TestCase):
    """Test the prompt_toolkit completer."""

    def _complete(self, ctx, text):
        completer = RouterCompleter(ctx)
        return [c.text for c in completer.get_completions(Document(text), None)]

    def test_first_word(self):
        self.assertEqual(self._complete(Context(), "sh"), ["show"])

    def test_first_word_includes_dynamic_commands(self):
        self.assertEqual(self._complete(Context(), "hel"), ["hello", "help"])

    def test_subcommands(self):
        ctx = Context(mode=Mode.PRIVILEGED)
        self.assertEqual(self._complete(ctx, "configure "), ["terminal", "user"])

    def test_multi_word_keywords_offered_a_word_at_a_time(self):
        ctx = Context(mode=Mode.PRIVILEGED)
        completions = self._complete(ctx, "show c")
        self.assertEqual(completions, ["clock", "crypto"])
        self.assertEqual(
            self._complete(ctx, "show crypto "),
            ["key", "certificate", "dynamic-map", "map", "engine"],
        )

    def test_completion_only_keywords(self):
        ctx = Context(mode=Mode.CONFIG)
        self.assertEqual(self._complete(ctx, "enable "), ["password", "secret"])

    def test_unknown_command_has_no_completions(self):
        self.assertEqual(self._complete(Context(), "zzz "), [])


if __name__ == "__main__":
    unittest.main()
