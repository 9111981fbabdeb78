# Cmdtree Command Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Pagination helpers for command handlers that list results to a sender.

Subclasses decide how the header and each entry are rendered; `display()`
validates the page number and sends the page line by line.

Example:
    class RegionList(SimplePaginatedResult[str]):
        def format(self, entry, index):
            return f"{index + 1}. {entry}"

    RegionList("Regions").display(sender, regions, context.get_integer(0, 1))
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Iterable, TypeVar

from cmdtree.exceptions import CommandError
from cmdtree.sender import CommandSender
from cmdtree.utils import chunks

T = TypeVar("T")


class PaginatedResult(ABC, Generic[T]):
    """Splits results into pages of `results_per_page` entries."""

    def __init__(self, results_per_page: int = 6) -> None:
        if results_per_page <= 0:
            raise ValueError("results_per_page must be a positive integer")
        self.results_per_page = results_per_page

    def display(self, sender: CommandSender, results: Iterable[T], page: int) -> None:
        """
        Send page `page` (1-based) of `results` to `sender`.

        Raises:
            CommandError: If there are no results or the page does not exist.
        """
        pages = list(chunks(results, self.results_per_page))
        if not pages:
            raise CommandError("No results match!")

        max_pages = len(pages)
        if page <= 0 or page > max_pages:
            raise CommandError(f"Unknown page selected! {max_pages} total pages.")

        sender.send_message(self.format_header(page, max_pages))
        offset = self.results_per_page * (page - 1)
        for index, entry in enumerate(pages[page - 1], start=offset):
            sender.send_message(self.format(entry, index))

    @abstractmethod
    def format_header(self, page: int, max_pages: int) -> str: ...

    @abstractmethod
    def format(self, entry: T, index: int) -> str: ...


class SimplePaginatedResult(PaginatedResult[T]):
    """A paginated result with a `<header> (page p/max)` header line."""

    def __init__(self, header: str, results_per_page: int = 6) -> None:
        super().__init__(results_per_page)
        self.header = header

    def format_header(self, page: int, max_pages: int) -> str:
        return f"[yellow]{self.header} (page {page}/{max_pages})[/yellow]"
