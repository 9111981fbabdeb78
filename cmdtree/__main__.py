"""
Cmdtree Command Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import logging
import os
import sys
from argparse import ArgumentParser
from pathlib import Path
from typing import Sequence

from cmdtree.config import loader
from cmdtree.dispatcher import CommandDispatcher
from cmdtree.exceptions import CmdtreeError
from cmdtree.shell import Shell
from cmdtree.utils import setup_logging


def find_cmdtree_config() -> Path | None:
    candidates = [
        Path.cwd() / "cmdtree.yaml",
        Path.cwd() / "cmdtree.toml",
        Path(os.environ.get("CMDTREE_CONFIG", "cmdtree.yaml")),
        Path.home() / ".config" / "cmdtree" / "cmdtree.yaml",
        Path.home() / ".config" / "cmdtree" / "cmdtree.toml",
    ]
    return next((p for p in candidates if p.exists()), None)


def get_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="cmdtree",
        description="Run commands from a Cmdtree configuration file.",
        epilog="Without a command line, an interactive shell is started.",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Path to a YAML or TOML command configuration.",
    )
    parser.add_argument(
        "--log-mode",
        choices=["cli", "json"],
        help="Console logging format.",
    )
    parser.add_argument(
        "--debug", action="store_true", help="Log debug output to the console."
    )
    parser.add_argument("line", nargs="*", help="Command line to execute.")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = get_parser().parse_args(argv)
    setup_logging(
        mode=args.log_mode,
        log_filename=None,
        console_log_level=logging.DEBUG if args.debug else logging.WARNING,
    )

    config_path = args.config or find_cmdtree_config()
    if config_path is None:
        print("No cmdtree configuration found.", file=sys.stderr)
        return 2
    if str(config_path.parent) not in sys.path:
        sys.path.insert(0, str(config_path.parent))

    try:
        registry = loader(config_path)
    except CmdtreeError as error:
        print(f"Failed to load {config_path}: {error}", file=sys.stderr)
        return 2

    shell = Shell(CommandDispatcher(registry))
    if args.line:
        shell.handle_line(" ".join(args.line))
        return 1 if shell.last_error else 0
    shell.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
