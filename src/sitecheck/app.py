from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from sitecheck.core.command_registry import CommandRegistry, get_help_text, register_all_commands
from sitecheck.core.handlers.config_handler import apply_overrides
from sitecheck.core.managers.config_manager import config_manager
from sitecheck.core.utils.configure_logging import configure_logger

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sitecheck", add_help=False)
    parser.add_argument("--log-level", default=None, help="Override debug.level from settings.")
    parser.add_argument("--config", type=Path, default=None, help="JSON settings merged over the defaults.")
    parser.add_argument("--set", action="append", default=[], metavar="KEY=VALUE",
                        help="Override one setting for this run, e.g. validator.check_images=false.")
    parser.add_argument("-h", "--help", action="store_true")
    parser.add_argument("command", nargs="?")
    parser.add_argument("args", nargs=argparse.REMAINDER)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entrypoint for the `sitecheck` command."""
    register_all_commands()
    pargs = _build_parser().parse_args(sys.argv[1:] if argv is None else argv)

    if pargs.config:
        try:
            config_manager.load_file(pargs.config)
        except (OSError, ValueError) as e:
            print(f"❌ Could not load settings from {pargs.config}: {e}")
            return 1
    try:
        apply_overrides(pargs.set)
    except ValueError as e:
        print(f"❌ Invalid --set: {e}")
        return 1

    configure_logger(
        pargs.log_level or config_manager.get_nested("debug.level", "WARNING"),
        silenced_loggers={"concurrent.futures": "WARNING"},
    )

    if pargs.help or not pargs.command:
        print(get_help_text())
        return 0

    handler = CommandRegistry.get(pargs.command)
    if handler is None:
        print(f"Unknown command: {pargs.command}")
        print(get_help_text())
        return 1

    logger.debug("Running command '%s' with args %s", pargs.command, pargs.args)
    return handler(pargs.args)


if __name__ == "__main__":
    sys.exit(main())
