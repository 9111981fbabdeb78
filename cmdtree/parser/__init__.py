"""
Cmdtree Command Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .argument_context import ArgumentContext
from .flags import FlagSpec
from .suggestion_context import SuggestionContext, Suggestions

__all__ = [
    "ArgumentContext",
    "FlagSpec",
    "SuggestionContext",
    "Suggestions",
]
