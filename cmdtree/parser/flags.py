# Cmdtree Command Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Parses the flag specification string declared on a command node.

A flag spec lists single-letter flags. A letter followed by `:` takes a value,
every other letter is a boolean flag:

    FlagSpec.parse("fb:v")
    # FlagSpec(boolean_flags={'f', 'v'}, value_flags={'b'})
"""
from __future__ import annotations

import re
from dataclasses import dataclass

from cmdtree.exceptions import CommandRegistrationError

FLAG_LETTER = re.compile(r"[a-zA-Z?]")


@dataclass(frozen=True)
class FlagSpec:
    """The boolean and value flags a command node accepts."""

    boolean_flags: frozenset[str] = frozenset()
    value_flags: frozenset[str] = frozenset()

    @property
    def declared(self) -> frozenset[str]:
        """Every flag letter the node declares."""
        return self.boolean_flags | self.value_flags

    @classmethod
    def parse(cls, spec: str) -> FlagSpec:
        boolean_flags: set[str] = set()
        value_flags: set[str] = set()
        index = 0
        while index < len(spec):
            letter = spec[index]
            if not FLAG_LETTER.fullmatch(letter):
                raise CommandRegistrationError(
                    f"Invalid flag '{letter}' in flag spec '{spec}'"
                )
            if index + 1 < len(spec) and spec[index + 1] == ":":
                value_flags.add(letter)
                index += 2
            else:
                boolean_flags.add(letter)
                index += 1
        return cls(frozenset(boolean_flags), frozenset(value_flags))

    def usage_text(self) -> str:
        """The `[-abc]` block shown in usage strings, value flags excluded."""
        letters = "".join(sorted(self.boolean_flags - self.value_flags))
        if not letters:
            return ""
        return f"[-{letters}] "
