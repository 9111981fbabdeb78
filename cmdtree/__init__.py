"""
Cmdtree Command Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import logging

from .command import UNBOUNDED, CommandNode
from .dispatcher import CommandDispatcher, default_permission_oracle
from .parser import ArgumentContext, SuggestionContext, Suggestions
from .registry import CommandRegistry

logger = logging.getLogger("cmdtree")


__all__ = [
    "ArgumentContext",
    "CommandDispatcher",
    "CommandNode",
    "CommandRegistry",
    "SuggestionContext",
    "Suggestions",
    "UNBOUNDED",
    "default_permission_oracle",
]
