# Cmdtree Command Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Interactive host for a Cmdtree command tree.

`Shell` reads lines with a Prompt Toolkit session, tab-completes them through
`CmdtreeCompleter`, and executes them through a `CommandDispatcher`, reporting
command errors on a Rich console. Handlers can end the session by raising
`QuitSignal`.
"""
from __future__ import annotations

from typing import Any

from prompt_toolkit import PromptSession
from rich.console import Console
from rich.markup import escape

from cmdtree.completer import CmdtreeCompleter
from cmdtree.console import console as default_console
from cmdtree.dispatcher import CommandDispatcher
from cmdtree.exceptions import (
    CommandError,
    CommandPermissionsError,
    CommandUsageError,
    UnhandledCommandError,
    WrappedCommandError,
)
from cmdtree.logger import logger
from cmdtree.sender import ConsoleSender
from cmdtree.signals import CancelSignal, QuitSignal


class Shell:
    """
    Read-eval loop dispatching command lines.

    Args:
        dispatcher (CommandDispatcher): Dispatcher executing the lines.
        sender (Any | None): Sender issuing the commands. Defaults to a
            `ConsoleSender` with every permission.
        extra (tuple[Any, ...] | None): Extra handler arguments. Defaults to
            `(sender,)`, so handlers are called as `handler(context, sender)`.
        prompt (str): Prompt text.
        console (Console | None): Console errors are printed to.
    """

    def __init__(
        self,
        dispatcher: CommandDispatcher,
        sender: Any | None = None,
        extra: tuple[Any, ...] | None = None,
        prompt: str = "> ",
        console: Console | None = None,
    ) -> None:
        self.dispatcher = dispatcher
        self.console: Console = console or default_console
        self.sender = (
            sender if sender is not None else ConsoleSender(console=self.console)
        )
        self.extra: tuple[Any, ...] = extra if extra is not None else (self.sender,)
        self.prompt = prompt
        self.last_error: CommandError | None = None
        self._prompt_session: PromptSession | None = None

    @property
    def prompt_session(self) -> PromptSession:
        if self._prompt_session is None:
            self._prompt_session = PromptSession(
                completer=CmdtreeCompleter(self.dispatcher, self.sender, self.extra),
                complete_while_typing=False,
            )
        return self._prompt_session

    def handle_line(self, line: str) -> bool:
        """
        Execute one command line.

        Returns:
            bool: False if the session should end.
        """
        self.last_error = None
        line = line.strip().lstrip("/")
        if not line:
            return True
        words = line.split(" ")
        try:
            self.dispatcher.execute(words[0], words[1:], self.sender, *self.extra)
        except CommandError as error:
            self.last_error = error
            self.report_error(words[0], error)
        except QuitSignal:
            logger.info("[QuitSignal]. <- Exiting shell.")
            return False
        except CancelSignal:
            logger.info("[CancelSignal]. <- Command cancelled.")
        return True

    def report_error(self, command_name: str, error: CommandError) -> None:
        if isinstance(error, UnhandledCommandError):
            self.console.print(f"[red]Unknown command: {escape(command_name)}[/red]")
        elif isinstance(error, CommandPermissionsError):
            self.console.print("[red]You don't have permission.[/red]")
        elif isinstance(error, CommandUsageError):
            self.console.print(f"[red]{escape(str(error))}[/red]")
            if error.usage:
                self.console.print(escape(error.usage))
        elif isinstance(error, WrappedCommandError):
            self.console.print(
                "[red]An error has occurred. See the log for details.[/red]"
            )
            logger.debug("Wrapped command error: %s", error.__cause__)
        else:
            self.console.print(f"[red]{escape(str(error))}[/red]")

    def run(self) -> None:
        """Prompt for lines until EOF, interrupt or `QuitSignal`."""
        logger.info("Starting shell.")
        while True:
            try:
                line = self.prompt_session.prompt(self.prompt)
            except (EOFError, KeyboardInterrupt):
                logger.info("EOF or KeyboardInterrupt. Exiting shell.")
                break
            if not self.handle_line(line):
                break
        logger.info("Exiting shell.")
