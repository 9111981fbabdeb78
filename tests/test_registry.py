import pytest

from cmdtree import CommandNode, CommandRegistry
from cmdtree.exceptions import CommandRegistrationError


def noop(context, *extra):
    pass


def test_register_root_command():
    registry = CommandRegistry()
    node = registry.register(CommandNode(aliases=("Give", "g"), handler=noop))
    assert registry.get_command("give") is node
    assert registry.get_command("G") is node
    assert "GIVE" in registry
    assert registry.has_command("g")
    assert registry.commands == [node]
    assert len(registry) == 1
    assert list(registry) == [node]


def test_register_from_constructor():
    nodes = [
        CommandNode(aliases=("a",), handler=noop),
        CommandNode(aliases=("b",), handler=noop),
    ]
    registry = CommandRegistry(nodes)
    assert [node.name for node in registry] == ["a", "b"]


def test_children_are_indexed_per_parent():
    child = CommandNode(aliases=("define", "def"), handler=noop)
    parent = CommandNode(aliases=("region",), children=(child,))
    registry = CommandRegistry()
    registry.register(parent)

    assert registry.has_children(parent)
    assert registry.children_of(parent)["DEF"] is child
    assert not registry.has_children(child)
    assert registry.get_command("define") is None
    assert set(registry.children_of(None)) == {"region"}


def test_same_name_under_different_parents():
    registry = CommandRegistry()
    registry.register(
        CommandNode(
            aliases=("a",), children=(CommandNode(aliases=("x",), handler=noop),)
        )
    )
    registry.register(
        CommandNode(
            aliases=("b",), children=(CommandNode(aliases=("x",), handler=noop),)
        )
    )
    assert len(registry) == 2


def test_duplicate_alias_is_rejected():
    registry = CommandRegistry()
    registry.register(CommandNode(aliases=("give",), handler=noop))
    with pytest.raises(CommandRegistrationError, match="already registered"):
        registry.register(CommandNode(aliases=("take", "GIVE"), handler=noop))
    assert registry.get_command("take") is None


def test_duplicate_child_alias_is_rejected():
    parent = CommandNode(
        aliases=("region",),
        children=(
            CommandNode(aliases=("define",), handler=noop),
            CommandNode(aliases=("Define",), handler=noop),
        ),
    )
    with pytest.raises(CommandRegistrationError):
        CommandRegistry().register(parent)


def test_decorator_registers_and_nests():
    registry = CommandRegistry()

    @registry.command(aliases=["region"], always_descend=True)
    def region(context, sender):
        pass

    @registry.command(aliases="define", parent=region, min_args=1)
    def define(context, sender):
        pass

    assert isinstance(region, CommandNode)
    assert registry.get_command("region") is region
    assert registry.children_of(region)["define"] is define
    assert define.min_args == 1
    assert define.aliases == ("define",)


def test_unregistered_parent_is_rejected():
    registry = CommandRegistry()
    orphan = CommandNode(aliases=("orphan",), always_descend=True)
    with pytest.raises(CommandRegistrationError, match="not registered"):
        registry.register(CommandNode(aliases=("x",), handler=noop), parent=orphan)


@pytest.mark.parametrize(
    "fields",
    [
        {"aliases": ()},
        {"aliases": ("ok", "")},
        {"aliases": ("x",), "flags": "a-"},
        {"aliases": ("x",), "min_args": -1},
        {"aliases": ("x",), "min_args": 3, "max_args": 2},
        {"aliases": ("x",), "alias_of": ()},
    ],
)
def test_malformed_nodes_are_rejected(fields):
    fields.setdefault("handler", noop)
    with pytest.raises(CommandRegistrationError):
        CommandRegistry().register(CommandNode(**fields))


def test_node_without_behavior_is_rejected():
    with pytest.raises(CommandRegistrationError, match="no handler"):
        CommandRegistry().register(CommandNode(aliases=("x",)))


def test_nested_alias_is_rejected():
    node = CommandNode(
        aliases=("x",),
        alias_of=("y",),
        children=(CommandNode(aliases=("z",), handler=noop),),
    )
    with pytest.raises(CommandRegistrationError, match="both nested and an alias"):
        CommandRegistry().register(node)


def test_root_descriptions_and_help():
    registry = CommandRegistry()
    registry.register(
        CommandNode(
            aliases=("give", "g"),
            usage="<item>",
            flags="s",
            description="Give an item",
            handler=noop,
        )
    )
    assert registry.descriptions == {"give": "<item> - Give an item"}
    assert registry.help_messages["give"] == "/give [-s] <item>\n\nGive an item"
    assert registry.help_messages["g"] == "/g [-s] <item>\n\nGive an item"


def test_help_messages_merge_for_shared_alias_keys():
    registry = CommandRegistry()
    registry.register(
        CommandNode(
            aliases=("/tp",), usage="<target>", description="Teleport", handler=noop
        )
    )
    registry.register(
        CommandNode(
            aliases=("tp",), usage="<x> <y>", description="Teleport", handler=noop
        )
    )
    assert registry.help_messages["tp"] == (
        "//tp <target>\n\nTeleport\n\n/tp <x> <y>\n\nTeleport"
    )
