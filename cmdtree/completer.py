# Cmdtree Command Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Provides `CmdtreeCompleter`, a Prompt Toolkit completer backed by
`CommandDispatcher.complete()`.

The text before the cursor is split on single spaces, exactly like the
command lines the dispatcher executes, so a trailing space produces an empty
last word and asks for completion of the next argument. Completions replace
the last word.

A None result from the dispatcher (the command has no completion handler)
yields nothing, leaving the prompt's own behavior untouched.
"""
from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any, Iterable

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

if TYPE_CHECKING:
    from cmdtree.dispatcher import CommandDispatcher


class CmdtreeCompleter(Completer):
    """
    Prompt Toolkit completer for Cmdtree command input.

    Args:
        dispatcher (CommandDispatcher): The dispatcher whose command tree is completed.
        sender (Any): The sender completions are computed for.
        extra (tuple[Any, ...]): Extra handler arguments, as passed to `execute()`.
    """

    def __init__(
        self, dispatcher: "CommandDispatcher", sender: Any, extra: tuple[Any, ...] = ()
    ):
        self.dispatcher = dispatcher
        self.sender = sender
        self.extra = extra

    def get_completions(
        self, document: Document, complete_event
    ) -> Iterable[Completion]:
        """
        Compute completions for the current user input.

        Args:
            document (Document): The current Prompt Toolkit document.
            complete_event: The triggering event, not used here.

        Yields:
            Completion: Completions replacing the word under the cursor.
        """
        words = document.text_before_cursor.lstrip("/").split(" ")
        name, args = words[0], words[1:]
        stub = words[-1]

        suggestions = self.dispatcher.complete(name, args, self.sender, *self.extra)
        if not suggestions:
            return
        yield from self._yield_lcp_completions(suggestions, stub)

    def _yield_lcp_completions(self, suggestions: list[str], stub: str):
        """
        Yield completions for the current stub using longest-common-prefix logic.

        Behavior:
        - If only one suggestion: yield it fully.
        - If multiple suggestions share a prefix longer than the stub: insert the
          prefix, but also display all suggestions in the menu.
        - Otherwise: list all suggestions individually.
        """
        if len(suggestions) == 1:
            yield Completion(suggestions[0], start_position=-len(stub))
            return

        lcp = os.path.commonprefix(suggestions)
        if len(lcp) > len(stub) and not lcp.startswith("-"):
            yield Completion(lcp, start_position=-len(stub), display=lcp)
        for suggestion in suggestions:
            yield Completion(suggestion, start_position=-len(stub), display=suggestion)
