# Cmdtree Command Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used in the Cmdtree command framework.

Dispatch-time failures derive from `CommandError` and surface synchronously to
the caller of `CommandDispatcher.execute()`. Registration and configuration
failures are raised at startup, while the command tree is being built.

Exception Hierarchy:
- CmdtreeError
    ├── CommandError
    │     ├── UnhandledCommandError
    │     ├── CommandPermissionsError
    │     ├── CommandUsageError
    │     │     └── MissingNestedCommandError
    │     ├── CommandFlagError
    │     ├── CommandNumberFormatError
    │     ├── ConsoleRestrictedError
    │     └── WrappedCommandError
    ├── CommandRegistrationError
    └── ConfigError
"""
from __future__ import annotations


class CmdtreeError(Exception):
    """Base exception for the Cmdtree framework."""


class CommandError(CmdtreeError):
    """Exception raised when a command cannot be dispatched or fails."""


class UnhandledCommandError(CommandError):
    """Exception raised when no root command matches the given name."""

    def __init__(self, message: str = "Unknown command."):
        super().__init__(message)


class CommandPermissionsError(CommandError):
    """Exception raised when the sender may not use a command."""

    def __init__(self, message: str = "You don't have permission."):
        super().__init__(message)


class CommandUsageError(CommandError):
    """
    Exception raised when a command is used incorrectly.

    Carries a usage string describing the correct invocation. The usage is
    attached at the point of failure, so handlers can raise this without
    knowing the path the command was reached through.
    """

    def __init__(self, message: str, usage: str | None = None):
        super().__init__(message)
        self.usage: str | None = usage

    def offer_usage(self, usage: str) -> None:
        """Set the usage string unless one was already given."""
        if self.usage is None:
            self.usage = usage


class MissingNestedCommandError(CommandUsageError):
    """Exception raised when a sub-command is required or unknown."""


class CommandFlagError(CommandError):
    """Exception raised when flags cannot be parsed (missing value, duplicate)."""


class CommandNumberFormatError(CommandError):
    """Exception raised when an argument or flag value is not a number."""

    def __init__(self, actual_text: str | None):
        super().__init__(f"Number expected in place of '{actual_text}'")
        self.actual_text: str | None = actual_text


class ConsoleRestrictedError(CommandError):
    """Exception raised when a command that needs a player is run from a console."""

    def __init__(self, message: str = "This command cannot be used from the console."):
        super().__init__(message)


class WrappedCommandError(CommandError):
    """Exception raised when a handler fails with an unexpected error.

    The original error is available as `__cause__`.
    """


class CommandRegistrationError(CmdtreeError):
    """Exception raised when the command tree is malformed."""


class ConfigError(CmdtreeError):
    """Exception raised when a command configuration file cannot be loaded."""
