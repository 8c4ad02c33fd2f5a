"""
Logging configuration module for the combat core.

Provides centralized logging setup with colored output using rich, and
routes the catchery error handler through the same logger tree so that
warnings raised by validation helpers end up next to the combat trace.
"""

import logging
from typing import Any

from catchery import ErrorHandler, set_default_handler
from rich.console import Console
from rich.logging import RichHandler

# Name of the package logger, every module logger hangs below it.
LOGGER_NAME = "combat_core"


def setup_logging(level: int = logging.INFO) -> None:
    """
    Sets up logging configuration with rich colored output.

    Args:
        level (int): The logging level to set. Defaults to logging.INFO.

    """
    console = Console(width=120, force_terminal=True, force_jupyter=False)

    rich_handler = RichHandler(
        console=console,
        show_time=True,
        show_level=True,
        show_path=False,
        markup=True,
        rich_tracebacks=True,
        tracebacks_show_locals=True,
    )
    rich_handler.setFormatter(
        logging.Formatter(
            "%(name)s - %(levelname)s - %(message)s",
            datefmt="[%X]",
        )
    )

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[rich_handler],
        force=True,
    )

    # Catchery reports through a child of the package logger, which
    # propagates to the rich handler installed above.
    set_default_handler(ErrorHandler(logger=get_logger("errors")))


def get_logger(name: str) -> logging.Logger:
    """
    Gets a logger instance below the package logger.

    Args:
        name (str): The name of the logger, relative to the package.

    Returns:
        logging.Logger: The configured logger instance.

    """
    if name == LOGGER_NAME or name.startswith(LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


logger = get_logger(LOGGER_NAME)


def _with_context(message: str, context: dict[str, Any] | None) -> str:
    if context:
        context_str = " ".join(f"{k}={v}" for k, v in context.items())
        return f"{message} [{context_str}]"
    return message


def log_error(message: str, context: dict[str, Any] | None = None) -> None:
    """
    Logs an error message with optional context.

    Args:
        message (str): The error message.
        context (dict[str, Any] | None): Optional context dictionary.

    """
    logger.error(_with_context(message, context))


def log_warning(message: str, context: dict[str, Any] | None = None) -> None:
    """
    Logs a warning message with optional context.

    Args:
        message (str): The warning message.
        context (dict[str, Any] | None): Optional context dictionary.

    """
    logger.warning(_with_context(message, context))


def log_info(message: str, context: dict[str, Any] | None = None) -> None:
    """
    Logs an info message with optional context.

    Args:
        message (str): The info message.
        context (dict[str, Any] | None): Optional context dictionary.

    """
    logger.info(_with_context(message, context))


def log_debug(message: str, context: dict[str, Any] | None = None) -> None:
    """
    Logs a debug message with optional context.

    Args:
        message (str): The debug message.
        context (dict[str, Any] | None): Optional context dictionary.

    """
    logger.debug(_with_context(message, context))
