from typing import List, Optional, Sequence

import pytest
from pydantic import ValidationError

from cmdtree import UNBOUNDED, CommandNode, Suggestions
from cmdtree.command import returns_completions


def test_defaults():
    node = CommandNode(aliases="give")
    assert node.aliases == ("give",)
    assert node.name == "give"
    assert node.min_args == 0
    assert node.max_args == UNBOUNDED
    assert node.permissions == ()
    assert not node.is_nested
    assert not node.is_alias
    assert node.handler is None


def test_arguments_text():
    node = CommandNode(aliases=("tp",), flags="sw:", usage="<target>")
    assert node.arguments_text == "[-s] <target>"
    assert node.flag_spec.value_flags == {"w"}


def test_node_is_frozen():
    node = CommandNode(aliases=("give",))
    with pytest.raises(ValidationError):
        node.min_args = 3


def test_alias_of_from_string():
    node = CommandNode(aliases=("home",), alias_of="spawn")
    assert node.alias_of == ("spawn",)
    assert node.is_alias


def test_str_lists_children():
    node = CommandNode(
        aliases=("region", "rg"), children=(CommandNode(aliases=("define",)),)
    )
    assert str(node) == (
        "CommandNode(name='region', aliases=['region', 'rg'], children=['define'])"
    )


def returns_list(context) -> list[str]: ...


def returns_typing_list(context) -> List[str]: ...


def returns_sequence(context) -> Sequence[str]: ...


def returns_optional(context) -> Optional[Suggestions]: ...


def returns_union(context) -> Suggestions | None: ...


def returns_string_annotation(context) -> "list[str]": ...


def returns_none(context) -> None: ...


def returns_nothing(context): ...


def returns_string(context) -> str: ...


@pytest.mark.parametrize(
    "handler",
    [
        returns_list,
        returns_typing_list,
        returns_sequence,
        returns_optional,
        returns_union,
        returns_string_annotation,
    ],
)
def test_completion_aware_handlers(handler):
    assert returns_completions(handler)
    assert CommandNode(aliases=("x",), handler=handler).completion_aware


@pytest.mark.parametrize(
    "handler", [returns_none, returns_nothing, returns_string, None]
)
def test_plain_handlers(handler):
    assert not returns_completions(handler)


def test_supports_completion_overrides_annotation():
    assert not CommandNode(
        aliases=("x",), handler=returns_list, supports_completion=False
    ).completion_aware
    assert CommandNode(
        aliases=("x",), handler=returns_nothing, supports_completion=True
    ).completion_aware
