# Cmdtree Command Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines structural protocols for the collaborators the dispatcher calls into.

Protocols:
- PermissionOracle: Decides whether a sender may use a command node. Supplied
  by the host; the dispatcher only calls it and never interprets permissions.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from cmdtree.command import CommandNode


@runtime_checkable
class PermissionOracle(Protocol):
    def __call__(self, sender: Any, node: CommandNode) -> bool: ...
