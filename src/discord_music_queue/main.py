#!/usr/bin/env python3
"""Entry point: configure logging, load settings and serve the music queue bot."""

from __future__ import annotations

import json
import logging
import logging.config
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from discord_music_queue.domain.shared.messages import ErrorMessages, LogTemplates
from discord_music_queue.utils.logging import ColoredFormatter

LOGGING_CONFIG_FILE = Path(__file__).resolve().parents[2] / "logging_config.json"
PACKAGE_LOGGER = "discord_music_queue"

CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
CONSOLE_DATEFMT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger(__name__)


def load_logging_config(path: Path) -> dict[str, Any] | None:
    """Read a ``dictConfig`` mapping; None when the file is missing or not JSON."""
    try:
        with open(path) as f:
            return json.load(f)
    except (FileNotFoundError, json.JSONDecodeError):
        return None


def _install_console_handler() -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ColoredFormatter(CONSOLE_FORMAT, datefmt=CONSOLE_DATEFMT))
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.INFO)


def _apply_dict_config(config: dict[str, Any]) -> bool:
    try:
        logging.config.dictConfig(config)
    except ValueError:
        return False
    return True


def setup_logging(log_level: str = "INFO", config_path: Path = LOGGING_CONFIG_FILE) -> None:
    """Send every record through :class:`ColoredFormatter` on stdout.

    ``log_level`` is applied to this package's loggers only. The root and
    ``discord`` levels come from the config file, so ``LOG_LEVEL=DEBUG`` shows
    queue transitions without the voice gateway chatter.
    """
    config = load_logging_config(config_path)
    if config is None or not _apply_dict_config(config):
        _install_console_handler()
        logger.warning(LogTemplates.LOGGING_CONFIG_FALLBACK, config_path)

    logging.getLogger(PACKAGE_LOGGER).setLevel(getattr(logging, log_level.upper(), logging.INFO))


def main() -> int:
    from discord_music_queue.config.settings import get_settings

    try:
        settings = get_settings()
    except ValidationError as exc:
        setup_logging()
        logger.error(LogTemplates.SETTINGS_INVALID, exc)
        return 2

    setup_logging(settings.log_level)

    token = settings.bot_token
    if not token:
        logger.error(ErrorMessages.DISCORD_TOKEN_REQUIRED)
        return 1

    from discord_music_queue.config.container import create_container
    from discord_music_queue.infrastructure.discord.bot import create_bot

    bot = create_bot(create_container(settings), settings)
    logger.info(LogTemplates.BOT_STARTING.format(environment=settings.environment))

    try:
        bot.run_until_signal(token)
    except Exception:
        logger.exception(LogTemplates.BOT_FATAL_ERROR)
        return 1

    logger.info(LogTemplates.BOT_STOPPED)
    return 0


def cli() -> None:
    """Console script entry point (used by pyproject.toml [project.scripts])."""
    sys.exit(main())


if __name__ == "__main__":
    cli()  # pragma: no cover
