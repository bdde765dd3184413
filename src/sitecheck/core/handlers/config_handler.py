# src/sitecheck/core/handlers/config_handler.py
import json
import logging
from typing import List

from sitecheck.core.managers.config_manager import config_manager

logger = logging.getLogger(__name__)

config_help_text = """
  config list | config get <key>
      Shows the effective configuration (defaults, --config file and --set overrides) as JSON.
""".strip()

USAGE = """
Usage:
  config list        Show the effective configuration as JSON.
  config get <key>   Show one value (e.g., validator.index_files).
"""


def handle_config(args: List[str]) -> int:
    """Handles the 'config' command for inspecting the configuration of this run."""
    if not args:
        print(USAGE)
        return 1

    command = args[0]

    if command == "list":
        print(json.dumps(config_manager.get_all(), indent=2))
        return 0

    if command == "get":
        if len(args) != 2:
            print("Usage: config get <key>")
            return 1
        value = config_manager.get_nested(args[1])
        if value is None:
            print(f"❌ Unknown config key '{args[1]}'.")
            return 1
        print(json.dumps(value, indent=2))
        return 0

    print(f"Unknown command: 'config {command}'.")
    print(USAGE)
    return 1


def apply_overrides(assignments: List[str]) -> None:
    """Applies `key=value` pairs from the command line on top of the loaded settings."""
    for assignment in assignments:
        key_path, sep, value = assignment.partition("=")
        if not sep or not key_path:
            raise ValueError(f"Expected <key>=<value>, got '{assignment}'")
        if not config_manager.set_nested(key_path.strip(), value):
            raise ValueError(f"Cannot set '{key_path}'")
        logger.debug("Override %s = %r", key_path, config_manager.get_nested(key_path.strip()))
