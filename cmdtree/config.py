# Cmdtree Command Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Configuration loader for Cmdtree command trees.

Commands are declared in a YAML or TOML file, with handlers given as dotted
import paths:

    commands:
      - aliases: [region, rg]
        description: Manage regions
        children:
          - aliases: [define, def]
            handler: myplugin.regions.define
            usage: "<id>"
            flags: "w:"
            min: 1
            max: 1
            permissions: [region.define]
      - aliases: [spawn]
        alias_of: [region, define, spawn]
"""
from __future__ import annotations

import importlib
from pathlib import Path
from typing import Any, Callable

import toml
import yaml
from pydantic import AliasChoices, BaseModel, Field, ValidationError, field_validator

from cmdtree.command import UNBOUNDED, CommandNode
from cmdtree.exceptions import ConfigError
from cmdtree.logger import logger
from cmdtree.registry import CommandRegistry

MAX_DEPTH = 5


def import_handler(dotted_path: str) -> Callable[..., Any]:
    """Dynamically imports a callable from a dotted path like 'my.module.func'."""
    module_path, _, attr = dotted_path.rpartition(".")
    if not module_path:
        raise ConfigError(f"Invalid handler path: {dotted_path}")
    try:
        module = importlib.import_module(module_path)
    except ModuleNotFoundError as error:
        logger.error("Failed to import module '%s': %s", module_path, error)
        raise ConfigError(
            f"Could not import '{dotted_path}': {error}. Ensure the module is "
            "installed and discoverable via PYTHONPATH."
        ) from error
    try:
        handler = getattr(module, attr)
    except AttributeError as error:
        logger.error(
            "Module '%s' does not have attribute '%s': %s", module_path, attr, error
        )
        raise ConfigError(
            f"Module '{module_path}' has no attribute '{attr}': {error}"
        ) from error
    if not callable(handler):
        raise ConfigError(f"Handler '{dotted_path}' is not callable.")
    return handler


class RawCommand(BaseModel):
    """Raw command model for Cmdtree configuration."""

    aliases: list[str]
    description: str = ""
    handler: str | None = None
    usage: str = ""
    help_text: str = Field(
        default="", validation_alias=AliasChoices("help", "help_text")
    )
    flags: str = ""
    any_flags: bool = False
    min_args: int = Field(default=0, validation_alias=AliasChoices("min", "min_args"))
    max_args: int = Field(
        default=UNBOUNDED, validation_alias=AliasChoices("max", "max_args")
    )
    permissions: list[str] = Field(default_factory=list)
    always_descend: bool = False
    alias_of: list[str] | None = None
    completion: bool | None = None
    children: list[RawCommand] = Field(default_factory=list)

    @field_validator("aliases", "permissions", mode="before")
    @classmethod
    def split_single_string(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [value]
        return value

    def to_node(self, depth: int = 0) -> CommandNode:
        if depth > MAX_DEPTH:
            raise ConfigError(
                f"Maximum command depth exceeded ({MAX_DEPTH} levels deep)"
            )
        return CommandNode(
            aliases=tuple(self.aliases),
            description=self.description,
            usage=self.usage,
            help_text=self.help_text,
            flags=self.flags,
            any_flags=self.any_flags,
            min_args=self.min_args,
            max_args=self.max_args,
            permissions=tuple(self.permissions),
            children=tuple(child.to_node(depth + 1) for child in self.children),
            always_descend=self.always_descend,
            alias_of=tuple(self.alias_of) if self.alias_of is not None else None,
            handler=import_handler(self.handler) if self.handler else None,
            supports_completion=self.completion,
        )


class CmdtreeConfig(BaseModel):
    """Cmdtree configuration model."""

    commands: list[RawCommand] = Field(default_factory=list)

    def to_registry(self) -> CommandRegistry:
        registry = CommandRegistry()
        for raw_command in self.commands:
            registry.register(raw_command.to_node())
        return registry


def build_registry(raw_config: dict[str, Any]) -> CommandRegistry:
    """Build a `CommandRegistry` from an already-parsed configuration mapping."""
    if not isinstance(raw_config, dict) or not isinstance(
        raw_config.get("commands"), list
    ):
        raise ConfigError(
            "Configuration must contain a dictionary with a list of commands.\n"
            "Example:\n"
            "commands:\n"
            "  - aliases: ['greet']\n"
            "    description: 'Example command'\n"
            "    handler: 'my_module.my_function'"
        )
    try:
        config = CmdtreeConfig.model_validate(raw_config)
    except ValidationError as error:
        raise ConfigError(f"Invalid command configuration: {error}") from error
    return config.to_registry()


def loader(file_path: Path | str) -> CommandRegistry:
    """
    Load a command tree from a YAML or TOML file.

    Args:
        file_path (Path | str): Path to the config file.

    Returns:
        CommandRegistry: A registry holding the configured commands.

    Raises:
        ConfigError: If the file is missing, has an unsupported format or holds
            an invalid configuration.
        CommandRegistrationError: If the configured command tree is malformed.
    """
    if isinstance(file_path, (str, Path)):
        path = Path(file_path)
    else:
        raise TypeError("file_path must be a string or Path object.")

    if not path.is_file():
        raise ConfigError(f"No such config file: {file_path}")

    suffix = path.suffix
    with path.open("r", encoding="UTF-8") as config_file:
        try:
            if suffix in (".yaml", ".yml"):
                raw_config = yaml.safe_load(config_file)
            elif suffix == ".toml":
                raw_config = toml.load(config_file)
            else:
                raise ConfigError(f"Unsupported config format: {suffix}")
        except (yaml.YAMLError, toml.TomlDecodeError) as error:
            raise ConfigError(f"Could not parse {path}: {error}") from error

    logger.debug("Loaded command configuration from '%s'.", path)
    return build_registry(raw_config)


RawCommand.model_rebuild()
