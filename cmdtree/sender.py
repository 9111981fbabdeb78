# Cmdtree Command Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the minimal capability set a host exposes for whoever issued a command.

Host adapters wrap their native sender objects (players, consoles, scripted
entities) in something implementing `CommandSender`. The dispatcher itself
never looks at senders; the default permission oracle, handlers and the
interactive shell do.

Contents:
- `SenderType`: Coarse classification of a sender.
- `CommandSender`: Runtime-checkable protocol for senders.
- `ConsoleSender`: A sender writing to a Rich console.
- `require_interactive()`: Guard for commands that cannot run from a console.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Iterable, Protocol, runtime_checkable

from rich.console import Console

from cmdtree.console import console as default_console
from cmdtree.exceptions import ConsoleRestrictedError


class SenderType(Enum):
    """Kinds of command senders."""

    CONSOLE = "console"
    PLAYER = "player"
    BLOCK = "block"
    UNKNOWN = "unknown"


@runtime_checkable
class CommandSender(Protocol):
    @property
    def name(self) -> str: ...

    def send_message(self, message: str) -> None: ...

    def send_messages(self, messages: Iterable[str]) -> None: ...

    def has_permission(self, permission: str) -> bool: ...

    def get_type(self) -> SenderType: ...

    def get_command_sender(self) -> Any: ...


class ConsoleSender:
    """
    A `CommandSender` printing to a Rich console.

    Args:
        name (str): Display name of the sender.
        permissions (Iterable[str] | None): Granted permissions. None grants all.
        console (Console | None): Console to print to. Defaults to the global one.
    """

    def __init__(
        self,
        name: str = "CONSOLE",
        permissions: Iterable[str] | None = None,
        console: Console | None = None,
    ) -> None:
        self._name = name
        self.permissions: set[str] | None = (
            set(permissions) if permissions is not None else None
        )
        self.console: Console = console or default_console

    @property
    def name(self) -> str:
        return self._name

    def send_message(self, message: str) -> None:
        self.console.print(message)

    def send_messages(self, messages: Iterable[str]) -> None:
        for message in messages:
            self.send_message(message)

    def has_permission(self, permission: str) -> bool:
        if self.permissions is None:
            return True
        return permission in self.permissions

    def get_type(self) -> SenderType:
        return SenderType.CONSOLE

    def get_command_sender(self) -> Any:
        return self.console

    def __repr__(self) -> str:
        return f"ConsoleSender(name='{self._name}')"


def require_interactive(sender: CommandSender) -> None:
    """Raise `ConsoleRestrictedError` if `sender` is a console."""
    if sender.get_type() is SenderType.CONSOLE:
        raise ConsoleRestrictedError()
