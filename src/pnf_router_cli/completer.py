"""Tab completion for the router shell, using prompt_toolkit."""

from __future__ import annotations

from typing import Iterable, List, Optional

from prompt_toolkit.completion import Completer, Completion

from .commands import CommandRegistry, _registry
from .context import Context
from .visibility import CombinedPolicy, VisibilityPolicy


class RouterCompleter(Completer):
    """Completes command names, then the keywords of the typed command.

    The first word completes from the commands visible in the current mode.
    Later words complete from the command's subcommands and its extra
    completion keywords; multi-word keywords are offered one word at a time.
    """

    def __init__(
        self,
        ctx: Context,
        registry: Optional[CommandRegistry] = None,
        policy: Optional[VisibilityPolicy] = None,
    ) -> None:
        self.ctx = ctx
        self.registry = registry if registry is not None else _registry
        self.policy = policy if policy is not None else CombinedPolicy(self.registry)

    def get_completions(self, document, complete_event):
        text = document.text_before_cursor
        words = text.split()

        if not words:
            typed, word = [], ""
        elif text.endswith(" "):
            typed, word = words, ""
        else:
            typed, word = words[:-1], words[-1]

        for item in self.candidates(typed):
            if item.startswith(word):
                yield Completion(item, start_position=-len(word))

    def candidates(self, typed: List[str]) -> List[str]:
        """Words that may follow `typed` in the current mode."""
        visible = self.policy.visible(self.ctx.mode)
        if not typed:
            return sorted(visible)

        matches = [name for name in visible if name.startswith(typed[0])]
        if len(matches) != 1:
            return []
        cmd = self.registry.get(matches[0])
        if cmd is None:
            return []
        return _next_words(typed[1:], [*cmd.subcommands, *cmd.completions])


def _next_words(typed: List[str], phrases: Iterable[str]) -> List[str]:
    """The word following `typed` in each phrase that starts with `typed`."""
    found: List[str] = []
    depth = len(typed)
    for phrase in phrases:
        parts = phrase.split()
        if len(parts) > depth and parts[:depth] == typed and parts[depth] not in found:
            found.append(parts[depth])
    return found
