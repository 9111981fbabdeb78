import io

import pytest
from rich.console import Console

from cmdtree import CommandDispatcher, CommandNode, CommandRegistry
from cmdtree.exceptions import (
    CommandPermissionsError,
    CommandUsageError,
    UnhandledCommandError,
    WrappedCommandError,
)
from cmdtree.sender import ConsoleSender
from cmdtree.shell import Shell
from cmdtree.signals import CancelSignal, QuitSignal


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def shell(output):
    console = Console(file=output, width=120)
    registry = CommandRegistry()

    def echo(context, sender):
        sender.send_message(context.get_remaining_string(0))

    def quit_shell(context, sender):
        raise QuitSignal()

    def cancel(context, sender):
        raise CancelSignal()

    def broken(context, sender):
        raise RuntimeError("boom")

    registry.register(
        CommandNode(aliases=("echo",), min_args=1, usage="<text>", handler=echo)
    )
    registry.register(CommandNode(aliases=("quit",), handler=quit_shell))
    registry.register(CommandNode(aliases=("cancel",), handler=cancel))
    registry.register(CommandNode(aliases=("broken",), handler=broken))
    registry.register(
        CommandNode(aliases=("secret",), permissions=("secret",), handler=echo)
    )
    sender = ConsoleSender(permissions=[], console=console)
    return Shell(CommandDispatcher(registry), sender=sender, console=console)


def test_default_extra_is_sender(shell):
    assert shell.extra == (shell.sender,)


def test_default_sender_is_console_sender(output):
    console = Console(file=output)
    shell = Shell(CommandDispatcher(CommandRegistry()), console=console)
    assert isinstance(shell.sender, ConsoleSender)
    assert shell.sender.console is console


def test_handle_line_executes(shell, output):
    assert shell.handle_line("/echo hello  world") is True
    assert shell.last_error is None
    assert "hello world" in output.getvalue()


def test_blank_line_is_ignored(shell):
    assert shell.handle_line("   ") is True
    assert shell.last_error is None


def test_unknown_command_is_reported(shell, output):
    assert shell.handle_line("nope") is True
    assert isinstance(shell.last_error, UnhandledCommandError)
    assert "Unknown command: nope" in output.getvalue()


def test_usage_error_is_reported_with_usage(shell, output):
    shell.handle_line("echo")
    assert isinstance(shell.last_error, CommandUsageError)
    assert "Too few arguments." in output.getvalue()
    assert "/echo <text>" in output.getvalue()


def test_permission_error_is_reported(shell, output):
    shell.handle_line("secret x")
    assert isinstance(shell.last_error, CommandPermissionsError)
    assert "You don't have permission." in output.getvalue()


def test_wrapped_error_is_reported(shell, output):
    shell.handle_line("broken")
    assert isinstance(shell.last_error, WrappedCommandError)
    assert "An error has occurred" in output.getvalue()


def test_last_error_is_reset(shell):
    shell.handle_line("nope")
    shell.handle_line("echo hi")
    assert shell.last_error is None


def test_quit_signal_ends_session(shell):
    assert shell.handle_line("quit") is False


def test_cancel_signal_keeps_session(shell):
    assert shell.handle_line("cancel") is True
    assert shell.last_error is None


def test_run_stops_on_quit(shell, monkeypatch):
    lines = iter(["echo one", "quit", "echo never"])
    monkeypatch.setattr(
        type(shell), "prompt_session", property(lambda self: FakeSession(lines))
    )
    shell.run()
    assert next(lines) == "echo never"


def test_run_stops_on_eof(shell, output, monkeypatch):
    lines = iter(["echo one"])
    monkeypatch.setattr(
        type(shell), "prompt_session", property(lambda self: FakeSession(lines))
    )
    shell.run()
    assert "one" in output.getvalue()


class FakeSession:
    def __init__(self, lines):
        self.lines = lines

    def prompt(self, message):
        try:
            return next(self.lines)
        except StopIteration:
            raise EOFError from None
