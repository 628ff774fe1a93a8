"""
Logging configuration module for Dungeon Fighter.

Provides centralized logging setup with colored output using rich.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: int | str = logging.WARNING) -> None:
    """
    Sets up logging configuration with rich colored output.

    Args:
        level (int | str): The logging level to set, either a number or a
            level name such as "DEBUG". Defaults to logging.WARNING.

    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    # Log to stderr so narrative output on stdout stays clean.
    console = Console(stderr=True, width=120)

    # Configure the rich handler
    rich_handler = RichHandler(
        console=console,
        show_time=True,
        show_level=True,
        show_path=False,
        markup=True,
        rich_tracebacks=True,
    )

    rich_handler.setFormatter(
        logging.Formatter(
            "%(name)s - %(message)s",
            datefmt="[%X]"
        )
    )

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[rich_handler],
        force=True,
    )

    # The account store is chatty at INFO.
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Gets a logger instance with the specified name.

    Args:
        name (str): The name of the logger.

    Returns:
        logging.Logger: The configured logger instance.

    """
    return logging.getLogger(name)


logger = get_logger("dungeon_fighter")
