import pytest

from cmdtree.exceptions import CommandError
from cmdtree.pagination import SimplePaginatedResult


class RecordingSender:
    def __init__(self):
        self.messages = []

    def send_message(self, message):
        self.messages.append(message)


class RegionList(SimplePaginatedResult[str]):
    def format(self, entry, index):
        return f"{index + 1}. {entry}"


REGIONS = [f"region{n}" for n in range(1, 9)]


def test_first_page():
    sender = RecordingSender()
    RegionList("Regions").display(sender, REGIONS, 1)
    assert sender.messages[0] == "[yellow]Regions (page 1/2)[/yellow]"
    assert sender.messages[1:] == [f"{n}. region{n}" for n in range(1, 7)]


def test_last_page_keeps_global_index():
    sender = RecordingSender()
    RegionList("Regions").display(sender, iter(REGIONS), 2)
    assert sender.messages[1:] == ["7. region7", "8. region8"]


def test_custom_page_size():
    sender = RecordingSender()
    RegionList("Regions", results_per_page=3).display(sender, REGIONS, 3)
    assert sender.messages == [
        "[yellow]Regions (page 3/3)[/yellow]",
        "7. region7",
        "8. region8",
    ]


def test_no_results():
    with pytest.raises(CommandError, match="No results match!"):
        RegionList("Regions").display(RecordingSender(), [], 1)


@pytest.mark.parametrize("page", [0, -1, 3])
def test_unknown_page(page):
    with pytest.raises(CommandError, match="Unknown page selected! 2 total pages."):
        RegionList("Regions").display(RecordingSender(), REGIONS, page)


def test_page_size_must_be_positive():
    with pytest.raises(ValueError):
        RegionList("Regions", results_per_page=0)
