# Cmdtree Command Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Implements `ArgumentContext`, the tokenized view of one command invocation.

The context is built from the raw words of a command line, the first word being
the command name. Words are expected to have been split on single spaces, so
any word except the first may be empty. Parsing:

- joins words between matching `"` (or `\\`) delimiters back into one argument,
- extracts single-letter flags (`-ab`), where letters registered as value flags
  consume the next argument as their value,
- stops treating words as flags after a `--` terminator,
- records, when completing, which argument or flag value is under the cursor.

Example:
    context = ArgumentContext.parse(["give", "-f", "value", "\\"red", "apple\\""], {"f"})
    context.parsed_args          # ("red apple",)
    context.get_flag("f")        # "value"

The returned context is immutable. A fresh one is built at every dispatch level.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import AbstractSet, Iterator, Mapping, Sequence, overload

from cmdtree.exceptions import CommandFlagError, CommandNumberFormatError
from cmdtree.parser.suggestion_context import SuggestionContext

QUOTE_CHARACTERS = ('"', "\\")
FLAG_TERMINATOR = "--"
FLAG_PATTERN = re.compile(r"-[a-zA-Z?]+")
INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")

_MISSING = object()


@dataclass
class _ParseState:
    """Accumulator for a single `ArgumentContext.parse()` call."""

    parsed_args: list[str] = field(default_factory=list)
    original_arg_indices: list[int] = field(default_factory=list)
    boolean_flags: set[str] = field(default_factory=set)
    value_flags: dict[str, str] = field(default_factory=dict)
    accepting_flags: bool = True
    pending_flag: str | None = None
    completing_index: int = -1
    completing_flag: str | None = None

    def add_value(self, value: str, start_index: int, completing: bool) -> None:
        if self.pending_flag is None:
            if completing:
                self.completing_index = len(self.parsed_args)
                self.completing_flag = None
            self.parsed_args.append(value)
            self.original_arg_indices.append(start_index)
        else:
            if completing:
                self.completing_index = -1
                self.completing_flag = self.pending_flag
            self.value_flags[self.pending_flag] = value
            self.pending_flag = None

    def add_flags(self, letters: str, value_flag_names: AbstractSet[str]) -> None:
        for letter in letters:
            if letter in value_flag_names:
                if letter in self.value_flags:
                    raise CommandFlagError(f"Value flag '{letter}' already given")
                if self.pending_flag is not None:
                    raise CommandFlagError(
                        f"No value specified for the '-{letter}' flag."
                    )
                self.pending_flag = letter
            else:
                self.boolean_flags.add(letter)


def _consume_quoted(tokens: Sequence[str], start: int) -> tuple[str, int]:
    """
    Join tokens from `start` up to the one ending with the opening quote.

    Returns the joined argument and the index of the last token consumed.
    An unterminated quote consumes every remaining token.
    """
    quote = tokens[start][0]
    parts: list[str] = []
    end = start
    for end in range(start, len(tokens)):
        part = tokens[end][1:] if end == start else tokens[end]
        if part and part[-1] == quote:
            parts.append(part[:-1])
            break
        parts.append(part)
    return " ".join(parts), end


@dataclass(frozen=True)
class ArgumentContext:
    """
    Parsed arguments and flags of one command invocation.

    Attributes:
        original_args (tuple[str, ...]): Raw words, including the command name.
        parsed_args (tuple[str, ...]): Arguments after quote joining and flag
            extraction. Never includes the command name, flags or flag values.
            The last element may be empty while completing.
        original_arg_indices (tuple[int, ...]): Index in `original_args` where
            each parsed argument started.
        boolean_flags (frozenset[str]): Flags given without a value.
        value_flags (Mapping[str, str]): Value flags and their values.
        suggestion_context (SuggestionContext | None): Set only when completing.
    """

    original_args: tuple[str, ...]
    parsed_args: tuple[str, ...] = ()
    original_arg_indices: tuple[int, ...] = ()
    boolean_flags: frozenset[str] = frozenset()
    value_flags: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    suggestion_context: SuggestionContext | None = None

    @classmethod
    def parse(
        cls,
        args: Sequence[str],
        value_flags: AbstractSet[str] | None = None,
        completing: bool = False,
    ) -> ArgumentContext:
        """
        Parse the given words into an `ArgumentContext`.

        Empty words are dropped, except for the last word while completing.

        Args:
            args (Sequence[str]): Raw words, the first being the command name.
            value_flags (AbstractSet[str] | None): Flag letters that take a value.
            completing (bool): True if completing a partial command line.

        Raises:
            CommandFlagError: If a value flag is repeated or lacks its value.
        """
        if not args:
            raise ValueError("args must contain at least the command name")
        tokens = tuple(args)
        value_flag_names = value_flags or frozenset()
        if len(tokens) < 2:
            completing = False

        state = _ParseState()
        index = 1
        while index < len(tokens):
            token = tokens[index]
            start_index = index
            value: str | None = token

            if not token:
                if not completing or index != len(tokens) - 1:
                    index += 1
                    continue
            elif token[0] in QUOTE_CHARACTERS:
                value, index = _consume_quoted(tokens, index)
            elif state.pending_flag is None:
                if token == FLAG_TERMINATOR:
                    state.accepting_flags = False
                    value = None
                elif state.accepting_flags and FLAG_PATTERN.fullmatch(token):
                    state.add_flags(token[1:], value_flag_names)
                    value = None

            if value is not None:
                state.add_value(value, start_index, completing)
            index += 1

        if state.pending_flag is not None:
            raise CommandFlagError(
                f"No value specified for the '-{state.pending_flag}' flag."
            )

        suggestion_context = None
        if completing:
            suggestion_context = SuggestionContext(
                context="".join(f"{token} " for token in tokens[1:-1]),
                prefix=tokens[-1],
                index=state.completing_index,
                flag=state.completing_flag,
            )

        return cls(
            original_args=tokens,
            parsed_args=tuple(state.parsed_args),
            original_arg_indices=tuple(state.original_arg_indices),
            boolean_flags=frozenset(state.boolean_flags),
            value_flags=MappingProxyType(dict(state.value_flags)),
            suggestion_context=suggestion_context,
        )

    @property
    def command(self) -> str:
        """The command name, i.e. the first raw word."""
        return self.original_args[0]

    @property
    def is_suggesting(self) -> bool:
        return self.suggestion_context is not None

    def matches(self, command: str) -> bool:
        return self.command.lower() == command.lower()

    @property
    def args_length(self) -> int:
        return len(self.parsed_args)

    def __len__(self) -> int:
        return len(self.parsed_args)

    def __iter__(self) -> Iterator[str]:
        return iter(self.parsed_args)

    @overload
    def get_string(self, index: int) -> str: ...

    @overload
    def get_string(self, index: int, default: str | None) -> str | None: ...

    def get_string(self, index, default=_MISSING):
        if default is not _MISSING and index >= len(self.parsed_args):
            return default
        return self.parsed_args[index]

    def get_string_range(self, start: int, end: int) -> str:
        """Join parsed arguments `start` through `end` (inclusive) with spaces."""
        if start >= len(self.parsed_args):
            raise IndexError(start)
        if end >= len(self.parsed_args):
            raise IndexError(end)
        return " ".join(self.parsed_args[start : end + 1])

    def get_remaining_string(self, start: int) -> str:
        """Join parsed arguments from `start` to the end with spaces."""
        return self.get_string_range(start, len(self.parsed_args) - 1)

    def get_joined_strings(self, start: int) -> str:
        """
        Join the raw words from where parsed argument `start` began.

        Unlike `get_remaining_string()`, quotes are kept and the original
        spacing between words is preserved.
        """
        initial_index = self.original_arg_indices[start]
        return " ".join(self.original_args[initial_index:])

    def get_integer(self, index: int, default: int | None = None) -> int:
        if default is not None and index >= len(self.parsed_args):
            return default
        return _parse_integer(self.parsed_args[index])

    def get_double(self, index: int, default: float | None = None) -> float:
        if default is not None and index >= len(self.parsed_args):
            return default
        return _parse_double(self.parsed_args[index])

    def get_slice(self, index: int) -> list[str]:
        """Raw words from `index`, counting the command name as word 0."""
        return list(self.original_args[index:])

    def get_padded_slice(self, index: int, padding: int) -> list[str | None]:
        return [None] * padding + list(self.original_args[index:])

    def get_parsed_slice(self, index: int) -> list[str]:
        return list(self.parsed_args[index:])

    def get_parsed_padded_slice(self, index: int, padding: int) -> list[str | None]:
        return [None] * padding + list(self.parsed_args[index:])

    def has_flag(self, flag: str) -> bool:
        return flag in self.boolean_flags or flag in self.value_flags

    @property
    def flags(self) -> frozenset[str]:
        """Boolean flags given. Value flags are in `value_flags`."""
        return self.boolean_flags

    def get_flag(self, flag: str, default: str | None = None) -> str | None:
        return self.value_flags.get(flag, default)

    def get_flag_integer(self, flag: str, default: int | None = None) -> int:
        if default is not None and flag not in self.value_flags:
            return default
        return _parse_integer(self.value_flags.get(flag))

    def get_flag_double(self, flag: str, default: float | None = None) -> float:
        if default is not None and flag not in self.value_flags:
            return default
        return _parse_double(self.value_flags.get(flag))


def _parse_integer(text: str | None) -> int:
    if text is None or not INTEGER_PATTERN.fullmatch(text):
        raise CommandNumberFormatError(text)
    return int(text)


def _parse_double(text: str | None) -> float:
    if text is None or "_" in text:
        raise CommandNumberFormatError(text)
    try:
        return float(text)
    except ValueError as error:
        raise CommandNumberFormatError(text) from error
