# Cmdtree Command Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Builds and indexes the command tree consumed by `CommandDispatcher`.

`CommandRegistry` maps every alias of a command (lower-cased) to its
`CommandNode`, for the root level and for the children of each nested node.
All lookups are cached at registration time; the tree is read-only afterwards.

Commands can be registered as prebuilt nodes or through the `command()`
decorator:

    registry = CommandRegistry()

    @registry.command(aliases=["give", "g"], usage="<item> [amount]", min_args=1)
    def give(context, sender):
        ...

    registry.register(
        CommandNode(aliases=("region",), children=(define_node, remove_node))
    )
"""
from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping

from cmdtree.command import UNBOUNDED, CommandNode
from cmdtree.exceptions import CommandRegistrationError
from cmdtree.logger import logger
from cmdtree.parser.flags import FlagSpec
from cmdtree.utils import CaseInsensitiveDict


class CommandRegistry:
    """
    Index of registered commands, by parent node and name.

    Root commands are stored under the parent `None`. Child maps are cached
    per nested node, so resolving a sub-command is a single dictionary lookup.
    """

    def __init__(self, commands: Iterable[CommandNode] | None = None) -> None:
        self._root: CaseInsensitiveDict = CaseInsensitiveDict()
        self._children: dict[int, CaseInsensitiveDict] = {}
        self._nodes: list[CommandNode] = []
        self.descriptions: dict[str, str] = {}
        self.help_messages: dict[str, str] = {}
        for command in commands or ():
            self.register(command)

    def _validate_node(self, node: CommandNode) -> None:
        if not isinstance(node, CommandNode):
            raise CommandRegistrationError(
                "command must be an instance of CommandNode."
            )
        if not node.aliases or not all(node.aliases):
            raise CommandRegistrationError(
                f"Command {list(node.aliases)} must have at least one non-empty alias."
            )
        try:
            FlagSpec.parse(node.flags)
        except CommandRegistrationError as error:
            raise CommandRegistrationError(
                f"Command '{node.name}' has an invalid flag spec: {error}"
            ) from error
        if node.min_args < 0:
            raise CommandRegistrationError(
                f"Command '{node.name}' has a negative minimum argument count."
            )
        if node.max_args != UNBOUNDED and node.max_args < node.min_args:
            raise CommandRegistrationError(
                f"Command '{node.name}' has max_args {node.max_args} "
                f"below min_args {node.min_args}."
            )
        if node.children and node.alias_of is not None:
            raise CommandRegistrationError(
                f"Command '{node.name}' cannot be both nested and an alias."
            )
        if node.alias_of is not None and not node.alias_of:
            raise CommandRegistrationError(
                f"Command '{node.name}' has an empty alias target."
            )
        if (
            not node.children
            and not node.always_descend
            and node.alias_of is None
            and not callable(node.handler)
        ):
            raise CommandRegistrationError(
                f"Command '{node.name}' has no handler, children or alias target."
            )

    def _child_map(self, parent: CommandNode | None) -> CaseInsensitiveDict:
        if parent is None:
            return self._root
        if id(parent) not in self._children:
            raise CommandRegistrationError(
                f"Parent command '{parent.name}' is not registered."
            )
        return self._children[id(parent)]

    def register(
        self, node: CommandNode, parent: CommandNode | None = None
    ) -> CommandNode:
        """
        Register a command and its declared children.

        Args:
            node (CommandNode): The command to register.
            parent (CommandNode | None): A registered nested command to attach the
                node under, or None for a root command.

        Returns:
            CommandNode: The registered node.

        Raises:
            CommandRegistrationError: If the node is malformed or one of its names
                is already taken under the same parent.
        """
        self._validate_node(node)
        siblings = self._child_map(parent)
        for alias in node.aliases:
            existing = siblings.get(alias)
            if existing is not None and existing is not node:
                raise CommandRegistrationError(
                    f"Command name '{alias}' is already registered "
                    f"for '{existing.name}'."
                )
        for alias in node.aliases:
            siblings[alias] = node

        self._nodes.append(node)
        self._children.setdefault(id(node), CaseInsensitiveDict())
        if parent is None:
            self._add_root_help(node)
        logger.debug(
            "Registered command '%s' under '%s'.",
            node.name,
            parent.name if parent else "<root>",
        )

        for child in node.children:
            self.register(child, parent=node)
        return node

    def register_all(self, nodes: Iterable[CommandNode]) -> list[CommandNode]:
        return [self.register(node) for node in nodes]

    def command(
        self,
        aliases: Iterable[str] | str,
        *,
        parent: CommandNode | None = None,
        **metadata: Any,
    ) -> Callable[[Callable[..., Any]], CommandNode]:
        """
        Decorator registering a function as a command handler.

        The keyword arguments are `CommandNode` fields. The decorated name is
        bound to the registered `CommandNode`, so it can be passed as `parent`
        to nest further commands under it.
        """

        def decorator(handler: Callable[..., Any]) -> CommandNode:
            node = CommandNode(aliases=aliases, handler=handler, **metadata)
            return self.register(node, parent=parent)

        return decorator

    def _add_root_help(self, node: CommandNode) -> None:
        if node.usage:
            self.descriptions[node.name] = f"{node.usage} - {node.description}"
        else:
            self.descriptions[node.name] = node.description

        help_text = node.help_text or node.description
        arguments = node.arguments_text
        for alias in node.aliases:
            help_message = f"/{alias} {arguments}\n\n{help_text}"
            key = alias.replace("/", "")
            previous = self.help_messages.get(key)
            self.help_messages[key] = help_message
            if previous is not None and _strip_command(previous) != _strip_command(
                help_message
            ):
                self.help_messages[key] = f"{previous}\n\n{help_message}"

    def children_of(
        self, parent: CommandNode | None = None
    ) -> Mapping[str, CommandNode]:
        """Return the name → node map for the children of `parent` (root if None)."""
        if parent is None:
            return self._root
        return self._children.get(id(parent), CaseInsensitiveDict())

    def has_children(self, node: CommandNode) -> bool:
        return bool(self._children.get(id(node)))

    def has_command(self, name: str) -> bool:
        """Check whether a root command (or alias) is registered under `name`."""
        return name in self._root

    def get_command(self, name: str) -> CommandNode | None:
        return self._root.get(name)

    @property
    def commands(self) -> list[CommandNode]:
        """Registered root commands, each listed once."""
        unique: dict[int, CommandNode] = {}
        for node in self._root.values():
            unique.setdefault(id(node), node)
        return list(unique.values())

    def __iter__(self):
        return iter(self.commands)

    def __len__(self) -> int:
        return len(self.commands)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has_command(name)


def _strip_command(help_message: str) -> str:
    """Drop the leading `/alias ` of a help message."""
    if help_message.startswith("/"):
        _, _, rest = help_message.partition(" ")
        return rest
    return help_message
