# Cmdtree Command Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""command.py

Defines the CommandNode model for Cmdtree.

A CommandNode is one entry in the command tree: a root command or a nested
sub-command. It carries everything the dispatcher needs to resolve and invoke
it:

- Names (the first alias is the primary name)
- Argument count bounds and the flags it accepts
- The permissions guarding it
- Nested child commands, or a fixed token vector it redirects to
- The handler called with the parsed `ArgumentContext`

Nodes are frozen once built. The `CommandRegistry` indexes them by name.
"""
from __future__ import annotations

import collections.abc
import inspect
import types
from typing import Any, Callable, Union, get_args, get_origin

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cmdtree.parser.flags import FlagSpec
from cmdtree.parser.suggestion_context import Suggestions

UNBOUNDED = -1

Handler = Callable[..., Any]


def _is_completion_type(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return any(
            name in annotation for name in ("list", "List", "Sequence", "Suggestions")
        )
    if annotation in (list, Suggestions, collections.abc.Sequence):
        return True
    origin = get_origin(annotation)
    if origin in (list, collections.abc.Sequence):
        return True
    if origin is Union or isinstance(annotation, types.UnionType):
        return any(_is_completion_type(arg) for arg in get_args(annotation))
    return False


def returns_completions(handler: Handler | None) -> bool:
    """True if the handler's return annotation says it can produce completions."""
    if not callable(handler):
        return False
    try:
        annotation = inspect.signature(handler).return_annotation
    except (TypeError, ValueError):
        return False
    if annotation is inspect.Signature.empty:
        return False
    return _is_completion_type(annotation)


class CommandNode(BaseModel):
    """
    Represents a command in the Cmdtree command tree.

    Attributes:
        aliases (tuple[str, ...]): Names the command answers to. The first is the
            primary name used in usage strings.
        description (str): Short description of the command.
        usage (str): Argument usage text, e.g. `<player> [amount]`.
        help_text (str): Longer help appended to usage strings.
        flags (str): Flag spec. Letters followed by `:` take a value.
        any_flags (bool): Accept boolean flags that are not declared.
        min_args (int): Minimum number of positional arguments.
        max_args (int): Maximum number of positional arguments, -1 for no limit.
        permissions (tuple[str, ...]): Permissions, any of which grants access.
        children (tuple[CommandNode, ...]): Nested sub-commands.
        always_descend (bool): With no further arguments, require a sub-command
            instead of running this node's own handler.
        alias_of (tuple[str, ...] | None): Token vector this node redirects to,
            resolved under the same parent.
        handler (Callable | None): Called as `handler(context, *extra)`.
        supports_completion (bool | None): Whether the handler answers completion
            requests. Inferred from its return annotation when not given.
    """

    aliases: tuple[str, ...]
    description: str = ""
    usage: str = ""
    help_text: str = ""
    flags: str = ""
    any_flags: bool = False
    min_args: int = 0
    max_args: int = UNBOUNDED
    permissions: tuple[str, ...] = Field(default_factory=tuple)
    children: tuple[CommandNode, ...] = Field(default_factory=tuple)
    always_descend: bool = False
    alias_of: tuple[str, ...] | None = None
    handler: Handler | None = None
    supports_completion: bool | None = None

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    @field_validator("aliases", "permissions", "alias_of", mode="before")
    @classmethod
    def split_single_string(cls, value: Any) -> Any:
        if isinstance(value, str):
            return (value,) if value else ()
        return value

    @property
    def name(self) -> str:
        """The primary name of the command."""
        return self.aliases[0]

    @property
    def flag_spec(self) -> FlagSpec:
        return FlagSpec.parse(self.flags)

    @property
    def is_nested(self) -> bool:
        return bool(self.children)

    @property
    def is_alias(self) -> bool:
        return self.alias_of is not None

    @property
    def completion_aware(self) -> bool:
        """True if the handler can return completions."""
        if self.supports_completion is not None:
            return self.supports_completion
        return returns_completions(self.handler)

    @property
    def arguments_text(self) -> str:
        """The flags block followed by the usage text."""
        return f"{self.flag_spec.usage_text()}{self.usage}"

    def __str__(self) -> str:
        return (
            f"CommandNode(name='{self.name}', aliases={list(self.aliases)}, "
            f"children={[child.name for child in self.children]})"
        )


CommandNode.model_rebuild()
