# Cmdtree Command Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Implements `CommandDispatcher`, which resolves a command line through the
command tree and invokes the handler it reaches.

Resolution walks the registry one level at a time. At each level the current
word is looked up (case-insensitively) among the children of the node reached
so far, its permissions are checked, and then:

- a nested command descends to the next word,
- an alias command substitutes its target words and resolves again,
- a leaf command parses the remaining words into an `ArgumentContext`,
  validates argument counts and flags, and calls its handler.

The same walk serves tab-completion. `complete()` parses the partial line in
completion mode and either lists matching command names, returns the
handler's `Suggestions`, or returns None so the host falls back to its own
default completion.

Example:
    dispatcher = CommandDispatcher(registry)
    dispatcher.execute("region", ["define", "spawn"], sender, sender)
    dispatcher.complete("region", ["def"], sender, sender)   # ["def", "define"]
"""
from __future__ import annotations

from typing import Any, Sequence

from cmdtree.command import UNBOUNDED, CommandNode
from cmdtree.exceptions import (
    CommandError,
    CommandPermissionsError,
    CommandUsageError,
    MissingNestedCommandError,
    UnhandledCommandError,
    WrappedCommandError,
)
from cmdtree.logger import logger
from cmdtree.parser.argument_context import ArgumentContext
from cmdtree.parser.suggestion_context import Suggestions
from cmdtree.protocols import PermissionOracle
from cmdtree.registry import CommandRegistry

MAX_ALIAS_DEPTH = 16


def default_permission_oracle(sender: Any, node: CommandNode) -> bool:
    """Grant access if the node needs no permission or the sender has any of them."""
    if not node.permissions:
        return True
    return any(sender.has_permission(permission) for permission in node.permissions)


class CommandDispatcher:
    """
    Dispatches command lines to the handlers of a `CommandRegistry`.

    The dispatcher holds no state besides the registry and the permission
    oracle, so one instance can serve any number of (re-entrant) calls.

    Args:
        registry (CommandRegistry): The command tree.
        permission_oracle (PermissionOracle | None): Called as
            `permission_oracle(sender, node)`. Defaults to checking the node's
            permissions with `sender.has_permission()`.
    """

    def __init__(
        self,
        registry: CommandRegistry,
        permission_oracle: PermissionOracle | None = None,
    ) -> None:
        self.registry: CommandRegistry = registry
        self.permission_oracle: PermissionOracle = (
            permission_oracle or default_permission_oracle
        )

    def has_permission(self, sender: Any, node: CommandNode) -> bool:
        return bool(self.permission_oracle(sender, node))

    def execute(self, name: str, args: Sequence[str], sender: Any, *extra: Any) -> None:
        """
        Execute a command.

        Args:
            name (str): The root command name.
            args (Sequence[str]): The words following the command name.
            sender (Any): Whoever issued the command, passed to the permission oracle.
            *extra (Any): Extra arguments passed to the handler after the context.

        Raises:
            CommandError: If the command is unknown, denied, misused or fails.
        """
        self._dispatch(False, name, args, sender, extra)

    def complete(
        self, name: str, args: Sequence[str], sender: Any, *extra: Any
    ) -> list[str] | None:
        """
        Complete a partially typed command.

        Returns None if the host's default completion should be used. Any other
        result, even an empty list, is authoritative. Errors never escape: they
        yield an empty list. Flow signals still propagate.
        """
        try:
            return self._dispatch(True, name, args, sender, extra)
        except CommandError as error:
            logger.debug(
                "Completion of '%s' failed (%s): %s", name, type(error).__name__, error
            )
            return []
        except Exception as error:
            logger.error(
                "Completion of '%s' failed (%s): %s",
                name,
                type(error).__name__,
                error,
                exc_info=True,
            )
            return []

    def _dispatch(
        self,
        completing: bool,
        name: str,
        args: Sequence[str],
        sender: Any,
        extra: tuple[Any, ...],
    ) -> list[str] | None:
        tokens = (name, *args)
        return self._resolve(None, completing, tokens, sender, extra, 0)

    def _resolve(
        self,
        parent: CommandNode | None,
        completing: bool,
        tokens: tuple[str, ...],
        sender: Any,
        extra: tuple[Any, ...],
        level: int,
        alias_depth: int = 0,
    ) -> list[str] | None:
        command_name = tokens[level]
        lookup_key = command_name.lower()
        args_count = len(tokens) - 1 - level
        siblings = self.registry.children_of(parent)

        if completing and args_count == 0:
            return sorted(
                key
                for key, node in siblings.items()
                if key.lower().startswith(lookup_key)
                and self.has_permission(sender, node)
            )

        node = siblings.get(lookup_key)
        if node is None:
            if parent is None:
                raise UnhandledCommandError(f"Unknown command: {command_name}")
            raise MissingNestedCommandError(
                f"Unknown command: {command_name}",
                self.get_nested_usage(tokens, level - 1, parent, sender),
            )

        if not self.has_permission(sender, node):
            logger.info(
                "Permission denied for '%s' on command '%s'.",
                getattr(sender, "name", sender),
                node.name,
            )
            raise CommandPermissionsError()

        if self._is_container(node) and (
            args_count > 0 or node.always_descend or node.handler is None
        ):
            if args_count == 0:
                raise MissingNestedCommandError(
                    "Sub-command required.",
                    self.get_nested_usage(tokens, level, node, sender),
                )
            logger.debug("Descending into '%s' at level %d.", node.name, level + 1)
            return self._resolve(node, completing, tokens, sender, extra, level + 1)

        if node.alias_of is not None:
            if alias_depth >= MAX_ALIAS_DEPTH:
                raise CommandError(f"Alias '{command_name}' is too deeply nested.")
            aliased = tokens[:level] + node.alias_of + tokens[level + 1 :]
            logger.debug("Alias '%s' resolved to %s.", command_name, node.alias_of)
            return self._resolve(
                parent, completing, aliased, sender, extra, level, alias_depth + 1
            )

        return self._invoke(node, completing, tokens, sender, extra, level)

    def _is_container(self, node: CommandNode) -> bool:
        return self.registry.has_children(node) or node.always_descend

    def _invoke(
        self,
        node: CommandNode,
        completing: bool,
        tokens: tuple[str, ...],
        sender: Any,
        extra: tuple[Any, ...],
        level: int,
    ) -> list[str] | None:
        flag_spec = node.flag_spec
        context = ArgumentContext.parse(
            tokens[level:], flag_spec.value_flags, completing
        )

        if completing and not node.completion_aware:
            return None

        if not completing:
            if len(context) < node.min_args:
                raise CommandUsageError(
                    "Too few arguments.", self.get_usage(tokens, level, node)
                )
            if node.max_args != UNBOUNDED and len(context) > node.max_args:
                raise CommandUsageError(
                    "Too many arguments.", self.get_usage(tokens, level, node)
                )
            if not node.any_flags:
                for flag in sorted(context.boolean_flags):
                    if flag not in flag_spec.declared:
                        raise CommandUsageError(
                            f"Unknown flag: {flag}", self.get_usage(tokens, level, node)
                        )

        if node.handler is None:
            raise CommandError(f"Command '{node.name}' has no handler.")
        logger.debug("Invoking '%s' with %s.", node.name, list(context.parsed_args))
        try:
            result = node.handler(context, *extra)
        except CommandUsageError as error:
            error.offer_usage(self.get_usage(tokens, level, node))
            raise
        except CommandError:
            raise
        except Exception as error:
            logger.error(
                "[%s] Handler failed (%s): %s",
                node.name,
                type(error).__name__,
                error,
                exc_info=True,
            )
            raise WrappedCommandError(
                f"Command '{node.name}' failed: {error}"
            ) from error

        if isinstance(result, Suggestions):
            if context.is_suggesting:
                return result.to_list()
            raise WrappedCommandError(
                f"Command '{node.name}' suggested completions while executing."
            )
        if not completing:
            return None
        return list(result) if result is not None else []

    def get_usage(self, tokens: Sequence[str], level: int, node: CommandNode) -> str:
        """Usage string for a leaf command reached at `level`."""
        path = "".join(f"{token} " for token in tokens[: level + 1])
        usage = f"/{path}{node.arguments_text}"
        if node.help_text:
            usage = f"{usage}\n\n{node.help_text}"
        return usage

    def get_nested_usage(
        self, tokens: Sequence[str], level: int, node: CommandNode, sender: Any
    ) -> str:
        """
        Usage string listing the sub-commands of `node` the sender may use.

        Raises:
            CommandPermissionsError: If `node` has children but none are permitted.
        """
        path = "".join(f"{token} " for token in tokens[: level + 1])
        children = self.registry.children_of(node)
        allowed = sorted(
            {
                child.name
                for child in children.values()
                if self.has_permission(sender, child)
            }
        )
        if allowed:
            return f"/{path}<{'|'.join(allowed)}>"
        if not children:
            return f"/{path}<?>"
        raise CommandPermissionsError()
