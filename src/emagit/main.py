# emagit/main.py
"""
emagit Main Entry Point
=======================

Primary entry point for the ``emagit`` command. It performs:
1) Environment Loading: reads ~/.config/emagit/.env early.
2) Configuration & Logging: loads config and initializes logging ASAP.
3) Argument Parsing: ``emagit [-C DIR] [dispatch|fetch|push|commit]`` or,
   when git calls us back as its editor, ``emagit edit --wait FILE``.
4) Application Run: loads the repository and shows the requested menu on
   the rich console host, inside one asyncio event loop.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from emagit.utils.logging_config import setup_logging
from emagit.utils.utils import get_config_dir, load_config


logger = logging.getLogger("emagit")


def load_environment() -> None:
    """Loads ~/.config/emagit/.env; a missing HOME or file is not an error."""
    try:
        load_dotenv(dotenv_path=get_config_dir() / ".env")
    except Exception:
        logger.debug("Could not load user .env", exc_info=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="emagit", description="Menu-driven git porcelain for the terminal."
    )
    parser.add_argument(
        "-C",
        dest="directory",
        default=".",
        help="Run as if emagit was started in this directory.",
    )
    sub = parser.add_subparsers(dest="command")
    for name, help_text in (
        ("dispatch", "Top-level menu (default)."),
        ("fetch", "Fetching menu."),
        ("push", "Pushing menu."),
        ("commit", "Committing menu."),
    ):
        sub.add_parser(name, help=help_text)

    edit = sub.add_parser("edit", help="Edit a commit message (used by git).")
    edit.add_argument("--wait", action="store_true", help="Block until confirmed or cancelled.")
    edit.add_argument("file", help="Message file prepared by git.")
    return parser


async def run_menu(command: str, directory: Path, config: dict[str, Any]) -> Any:
    """Loads the repository and shows the menu named ``command``."""
    from emagit.commands.DispatchCommands import MENUS
    from emagit.core.Repository import MagitRepository
    from emagit.ui.ConsoleHost import ConsoleHost

    repository = await MagitRepository.load(directory)
    host = ConsoleHost(config)
    return await MENUS[command](repository, host, config)


def main(argv: Optional[list[str]] = None) -> int:
    """Runs emagit and returns the process exit code."""
    args = build_parser().parse_args(argv)

    if args.command == "edit":
        from emagit.ui.MessageEditor import compose_message

        return compose_message(args.file)

    from rich.console import Console

    from emagit.errors import EmagitError

    config = load_config()
    try:
        asyncio.run(run_menu(args.command or "dispatch", Path(args.directory), config))
    except EmagitError as e:
        logger.error(f"emagit failed: {e}")
        Console(stderr=True).print(f"[bold red]error:[/] {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user.")
        return 130
    return 0


def start() -> None:
    """Console-script entry point."""
    load_environment()
    try:
        setup_logging(load_config())
    except Exception as e:
        print(f"FATAL: Could not initialize configuration or logging system: {e}", file=sys.stderr)
        sys.exit(1)

    logger.info("emagit starting: %s", sys.argv[1:])
    try:
        sys.exit(main())
    except SystemExit:
        raise
    except Exception:
        logger.critical("Unhandled exception at the top level.", exc_info=True)
        sys.exit(1)
