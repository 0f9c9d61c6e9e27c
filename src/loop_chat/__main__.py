"""Entry point for replaying action scripts through a conversation store.

This module provides the command line entry point for loop-chat.
It handles:
- Configuration loading
- Logging setup
- Wiring a catalog, dispatcher, store and loopback driver together
- Replaying a YAML or JSON script of actions and printing the final state

A script is a list of entries such as:

    - action: setOwnDisplayName
      values: {displayName: Ada}
    - action: sendTextChatMessage
      values: {contentType: chat-text, message: hi, sentTimestamp: 0}
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any

import structlog
import yaml

from loop_chat._version import __version__

log = structlog.get_logger()


def setup_logging(
    debug: bool = False,
    log_format: str = "console",
    file_path: Path | None = None,
    file_enabled: bool = False,
) -> None:
    """Configure structured logging.

    Args:
        debug: Enable debug logging if True
        log_format: Output format ("json" or "console")
        file_path: Path to log file (if file logging enabled)
        file_enabled: Whether to enable file logging
    """
    from loop_chat.utils.logging import LogFormat, LogLevel, configure_logging

    level = LogLevel.DEBUG if debug else LogLevel.INFO

    configure_logging(
        level=level,
        log_format=LogFormat(log_format.lower()),
        file_path=file_path,
        file_enabled=file_enabled,
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed argument namespace
    """
    parser = argparse.ArgumentParser(
        prog="loop-chat",
        description="Replay chat actions through a conversation store",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: built-in defaults)",
    )

    parser.add_argument(
        "-s",
        "--script",
        type=Path,
        required=True,
        help="YAML or JSON file listing the actions to replay",
    )

    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "--format",
        choices=["json", "console"],
        default="console",
        help="Log output format (default: console)",
    )

    return parser.parse_args(argv)


def load_script(path: Path) -> list[dict[str, Any]]:
    """Load a replay script.

    Raises:
        FileNotFoundError: If the script doesn't exist
        ValueError: If the script is not a list of {action, values} entries
    """
    if not path.exists():
        raise FileNotFoundError(f"Script file not found: {path}")

    with path.open() as f:
        # JSON is a subset of YAML
        entries = yaml.safe_load(f) or []

    if not isinstance(entries, list):
        raise ValueError(f"Script must be a list of actions: {path}")
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict) or "action" not in entry:
            raise ValueError(f"Script entry {index} has no 'action'")
        if not isinstance(entry.get("values", {}), dict):
            raise ValueError(f"Script entry {index} has non-mapping 'values'")
    return entries


def replay(config_path: Path | None, script_path: Path) -> int:
    """Replay a script and print the final conversation state as JSON.

    Args:
        config_path: Path to configuration file, if any
        script_path: Path to the action script

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    from loop_chat.actions.base import ActionError
    from loop_chat.actions.catalog import build_default_catalog
    from loop_chat.adapters.loopback import LoggingNotifier, LoopbackDataDriver
    from loop_chat.config.loader import load_config
    from loop_chat.core.conversation_store import ConversationStore
    from loop_chat.core.dispatcher import Dispatcher
    from loop_chat.utils.logging import (
        bind_context,
        clear_context,
        configure_logging,
        unbind_context,
    )

    try:
        config = load_config(config_path)

        configure_logging(
            level=config.logging.level,
            log_format=config.logging.format,
            file_path=config.logging.file.path if config.logging.file.enabled else None,
            file_enabled=config.logging.file.enabled,
        )

        entries = load_script(script_path)

        catalog = build_default_catalog(reject_name_field=config.actions.reject_name_field)
        dispatcher = Dispatcher()
        driver = LoopbackDataDriver(dispatcher)
        store = ConversationStore(
            driver,
            LoggingNotifier(),
            reemit_chat_enabled=config.store.reemit_chat_enabled,
            room_name_from_context=config.store.room_name_from_context,
        )
        dispatcher.register(store, store.ACTIONS)

        bind_context(script=str(script_path))
        log.info("replay_starting", actions=len(entries))
        for index, entry in enumerate(entries):
            bind_context(entry=index, action=entry["action"])
            dispatcher.dispatch(catalog.create(entry["action"], entry.get("values")))
        unbind_context("entry", "action")
        log.info("replay_complete", messages=len(store.state.messages), sent=len(driver.sent))

    except FileNotFoundError as e:
        log.error("file_not_found", error=str(e))
        return 1
    except ActionError as e:
        log.error("action_invalid", error=str(e))
        return 1
    except ValueError as e:
        log.error("input_invalid", error=str(e))
        return 1
    finally:
        clear_context()

    print(json.dumps(store.state.to_dict(), indent=2))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    setup_logging(
        debug=args.debug,
        log_format=args.format,
    )

    return replay(args.config, args.script)


if __name__ == "__main__":
    sys.exit(main())
