# src/sitecheck/core/command_registry.py
import logging
from typing import Callable, Dict, List

logger = logging.getLogger(__name__)

# The central registries, filled by register_all_commands().
CommandRegistry: Dict[str, Callable[[List[str]], int]] = {}
COMMAND_HELP_TEXTS: Dict[str, str] = {}


def register_command(name: str, handler: Callable[[List[str]], int], help_text: str = "") -> None:
    """Adds a command and its handler function to the registry."""
    CommandRegistry[name] = handler
    COMMAND_HELP_TEXTS[name] = help_text
    logger.debug("Registered command '%s'", name)


def register_all_commands() -> None:
    # Imported here so handler modules load only when the CLI actually runs
    from sitecheck.core.handlers.check_handler import check_help_text, handle_check
    from sitecheck.core.handlers.config_handler import config_help_text, handle_config
    from sitecheck.core.handlers.index_handler import handle_index, index_help_text

    for name, handler, help_text in (
            ("index", handle_index, index_help_text),
            ("check", handle_check, check_help_text),
            ("config", handle_config, config_help_text),
    ):
        if name not in CommandRegistry:
            register_command(name, handler, help_text)


def get_help_text() -> str:
    lines = ["Usage: sitecheck [--log-level LEVEL] [--config FILE] [--set KEY=VALUE] <command> [args]", "", "Commands:"]
    lines.extend(COMMAND_HELP_TEXTS[name] for name in sorted(COMMAND_HELP_TEXTS))
    return "\n".join(lines)
