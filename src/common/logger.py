"""Logging utilities with rich console output for the audit pipeline.

Every module gets its logger through this module so that console output,
levels and tracebacks look the same across the pipeline.

Usage:
    from common.logger import get_logger

    logger = get_logger(__name__)
    logger.info("Running build (attempt 1/3)...")
    logger.warning("Dependency install failed for admin")
"""

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

# Shared console so log lines and status lines never interleave badly
console = Console()
error_console = Console(stderr=True)

DEFAULT_LEVEL = "INFO"


def _resolve_level(level: str | None) -> str:
    if level is None:
        level = os.getenv("LOG_LEVEL", DEFAULT_LEVEL)
    return level.upper()


def _rich_handler(show_time: bool = False, show_path: bool = False) -> RichHandler:
    handler = RichHandler(
        console=console,
        show_time=show_time,
        show_path=show_path,
        rich_tracebacks=True,
        markup=True,
    )
    handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
    return handler


def get_logger(
    name: str,
    level: str | None = None,
    show_time: bool = False,
    show_path: bool = False,
) -> logging.Logger:
    """Get a logger that writes through the shared rich console.

    Args:
        name: Logger name (typically __name__ of the module)
        level: Logging level name. Falls back to the LOG_LEVEL environment
               variable, then INFO.
        show_time: Show timestamps in console output
        show_path: Show the emitting file path in console output

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Already configured by an earlier call
    if logger.handlers:
        return logger

    logger.setLevel(_resolve_level(level))
    logger.addHandler(_rich_handler(show_time=show_time, show_path=show_path))

    # pytest's caplog captures through propagation
    logger.propagate = True

    return logger


def setup_logging(level: str = DEFAULT_LEVEL, log_file: str | None = None) -> None:
    """Configure the root logger once, at a CLI entry point.

    Args:
        level: Default level; LOG_LEVEL in the environment wins
        log_file: Optional path that also receives plain-text log records
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(os.getenv("LOG_LEVEL", level).upper())
    root_logger.handlers.clear()
    root_logger.addHandler(_rich_handler())

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root_logger.addHandler(file_handler)


def success(message: str) -> None:
    """Print a line prefixed with a green check mark."""
    console.print(f"[green]✓[/green] {message}")


def error(message: str) -> None:
    """Print a line prefixed with a red cross, to stderr."""
    error_console.print(f"[red]✗[/red] {message}")
