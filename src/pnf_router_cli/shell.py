"""The interactive shell: reads lines, dispatches them, and keeps the prompt."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory

from .clock import Clock
from .commands import Command, CommandRegistry, _registry, resolve_prefix
from .completer import RouterCompleter
from .context import Context
from .help import show_help
from .program_constants import DEFAULT_HISTORY_FILE
from .program_exceptions import AmbiguousCommandError, CommandError, CommandNotFoundError
from .program_logging import get_logger, log_command_execution
from .visibility import CombinedPolicy, VisibilityPolicy

EXIT_TOKENS = ["exit", "cli"]


class Shell:
    """Line-oriented router shell.

    `execute_line` is the whole dispatcher and is what the tests drive;
    `run` only adds line reading around it.
    """

    def __init__(
        self,
        registry: Optional[CommandRegistry] = None,
        context: Optional[Context] = None,
        clock: Optional[Clock] = None,
        session=None,
        policy: Optional[VisibilityPolicy] = None,
        history_file: Optional[Path] = None,
    ) -> None:
        self.registry = registry if registry is not None else _registry
        self.ctx = context if context is not None else Context()
        self.clock = clock if clock is not None else Clock()
        self.policy = policy if policy is not None else CombinedPolicy(self.registry)
        self.logger = get_logger("shell")

        if session is None:
            history_path = Path(history_file or DEFAULT_HISTORY_FILE)
            history_path.parent.mkdir(parents=True, exist_ok=True)
            session = PromptSession(
                history=FileHistory(str(history_path)),
                completer=RouterCompleter(self.ctx, self.registry, self.policy),
            )
        self.session = session

    @property
    def prompt(self) -> str:
        return self.ctx.prompt

    def run(self) -> int:
        """Read and execute lines until `exit cli` or end of input."""
        self.logger.info(f"Shell started in {self.ctx.mode.value} mode")
        while True:
            try:
                line = self.session.prompt(self.prompt)
            except KeyboardInterrupt:
                print("Ctrl+C pressed, but waiting for 'exit cli' command to exit...")
                continue
            except EOFError:
                self.logger.info("End of input, leaving the shell")
                print()
                return 0

            if not self.execute_line(line):
                return 0

    def execute_line(self, line: str) -> bool:
        """Run one input line. Returns False when the shell should stop."""
        line = line.strip()
        if not line:
            return True
        if line.endswith("?"):
            show_help(line, self.ctx, self.registry, self.policy)
            return True
        tokens = line.split()
        if tokens == EXIT_TOKENS:
            self.logger.info("Exit requested")
            print("Exiting CLI...")
            return False

        mode = self.ctx.mode.value
        try:
            cmd = self.registry.resolve(tokens[0], self.policy.visible(self.ctx.mode))
        except (CommandNotFoundError, AmbiguousCommandError) as e:
            self.logger.info(f"{e} in {mode} mode")
            print(f"Ambiguous command or command not available in current mode: {tokens[0]}")
            log_command_execution(tokens, mode, success=False)
            return True

        args = self._arguments(cmd, tokens[1:])
        if args is None:
            log_command_execution(tokens, mode, success=False)
            return True

        success = self._invoke(cmd, args)
        log_command_execution(tokens, mode, success)
        return True

    def _arguments(self, cmd: Command, args: List[str]) -> Optional[List[str]]:
        """Apply subcommand resolution; None means a message was printed."""
        if not cmd.subcommands:
            return args
        match args:
            case []:
                print("Incomplete command. Subcommand required.")
                return None
            case [word]:
                matched = resolve_prefix(word, cmd.subcommands)
                if matched is None:
                    print(f"Ambiguous or invalid subcommand: {word}")
                    return None
                return matched.split()
            case _:
                return args

    def _invoke(self, cmd: Command, args: List[str]) -> bool:
        try:
            cmd.handler(args, self.ctx, self.clock)
        except CommandError as e:
            self.logger.warning(f"{cmd.name}: {e.message}")
            print(f"Error: {e.message}")
            return False
        except (KeyboardInterrupt, EOFError):
            # Interrupted while a handler was asking a question.
            print()
            return False
        except Exception as e:
            self.logger.error(f"Handler error in {cmd.name}: {e}", exc_info=True)
            print(f"Error: {e}")
            return False
        return True
