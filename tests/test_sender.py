import io

import pytest
from rich.console import Console

from cmdtree.exceptions import ConsoleRestrictedError
from cmdtree.sender import CommandSender, ConsoleSender, SenderType, require_interactive


class PlayerSender:
    name = "Notch"

    def send_message(self, message):
        pass

    def send_messages(self, messages):
        pass

    def has_permission(self, permission):
        return False

    def get_type(self):
        return SenderType.PLAYER

    def get_command_sender(self):
        return self


def test_console_sender_prints():
    output = io.StringIO()
    sender = ConsoleSender(console=Console(file=output))
    sender.send_messages(["one", "two"])
    assert output.getvalue() == "one\ntwo\n"
    assert sender.get_type() is SenderType.CONSOLE
    assert sender.name == "CONSOLE"


def test_console_sender_permissions():
    assert ConsoleSender().has_permission("anything")
    limited = ConsoleSender(permissions=["region.define"])
    assert limited.has_permission("region.define")
    assert not limited.has_permission("region.info")


def test_senders_satisfy_protocol():
    assert isinstance(ConsoleSender(), CommandSender)
    assert isinstance(PlayerSender(), CommandSender)
    assert not isinstance(object(), CommandSender)


def test_require_interactive():
    require_interactive(PlayerSender())
    with pytest.raises(ConsoleRestrictedError):
        require_interactive(ConsoleSender())
