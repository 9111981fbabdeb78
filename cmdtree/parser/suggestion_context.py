# Cmdtree Command Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Describes what is being tab-completed when a command line is parsed in
completion mode.

A `SuggestionContext` is attached to an `ArgumentContext` only when the line is
being completed. Handlers use it to find out whether the cursor sits on a
positional argument or on the value of a flag, and to build the list of
completions for it.

Handlers answer a completion request by returning a `Suggestions` value. The
dispatcher matches on it explicitly, so suggesting never unwinds the stack.

Example:
    def give(context, sender):
        suggestion = context.suggestion_context
        if suggestion:
            return suggestion.suggest_argument(0, ["apple", "apricot", "banana"])
        ...
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from cmdtree.utils import complete_prefix


@dataclass(frozen=True)
class Suggestions:
    """Completions produced by a handler in response to a completion request."""

    completions: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "completions", tuple(self.completions))

    def to_list(self) -> list[str]:
        return list(self.completions)


@dataclass(frozen=True)
class SuggestionContext:
    """
    Extra information about the point at which completion is happening.

    Attributes:
        context (str): The part of the command line before the text that will be
            replaced by the completion. Starts at the first argument and may end
            with spaces. Completion can never change this text.
        prefix (str): The part of the command line that will be replaced by the
            completion: the last span of non-space characters, or an empty string
            if the line ends with a space. Quotes and backslashes are treated like
            any other character here.
        index (int): Index of the positional argument being completed, or -1 when
            a flag value is being completed.
        flag (str | None): The flag whose value is being completed, if any.
    """

    context: str
    prefix: str
    index: int = -1
    flag: str | None = None

    def is_argument(self, index: int | None = None) -> bool:
        """True if completing a positional argument, optionally a specific one."""
        if self.flag is not None:
            return False
        return index is None or self.index == index

    def is_flag(self, flag: str | None = None) -> bool:
        """True if completing a flag value, optionally for a specific flag."""
        if self.flag is None:
            return False
        return flag is None or self.flag == flag

    def complete(self, choices: Iterable[str]) -> list[str]:
        """Return the sorted subset of `choices` that start with the prefix."""
        return complete_prefix(self.prefix, choices)

    def suggest(self, choices: Iterable[str]) -> Suggestions:
        """Build a `Suggestions` result from the valid subset of `choices`."""
        return Suggestions(self.complete(choices))

    def suggest_argument(
        self, index: int, choices: Iterable[str]
    ) -> Suggestions | None:
        """Suggest `choices` if positional argument `index` is being completed."""
        if self.is_argument(index):
            return self.suggest(choices)
        return None

    def suggest_flag(self, flag: str, choices: Iterable[str]) -> Suggestions | None:
        """Suggest `choices` if the value of `flag` is being completed."""
        if self.is_flag(flag):
            return self.suggest(choices)
        return None

    def __str__(self) -> str:
        if self.is_argument():
            return f"argument {self.index}"
        return f"flag -{self.flag}"
