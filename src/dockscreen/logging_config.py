"""
Logging setup for dockscreen built on rich.logging.

Library modules only ever ask for a logger; handlers are installed by the
application (or a debug tool) through setup_logging(). Until then log records
propagate to whatever the host application configured.
"""

import logging
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "dockscreen"

_logging_configured = False


def resolve_level(level: Union[int, str]) -> int:
    """
    Turn a level number or name ("debug", "WARNING", ...) into a level number.

    Raises:
        ValueError: If the name is not a standard logging level
    """
    if isinstance(level, int):
        return level
    number = logging.getLevelName(level.strip().upper())
    if not isinstance(number, int):
        raise ValueError(f"Unknown logging level: {level}")
    return number


def setup_logging(
    level: Union[int, str] = logging.INFO,
    show_time: bool = True,
    show_path: bool = False,
    rich_tracebacks: bool = True,
    console: Optional[Console] = None,
) -> None:
    """
    Install a rich handler on the root logger.

    Only the first call has an effect, so screens loaded repeatedly do not
    stack handlers.

    Args:
        level: Level number or name applied to the root logger
        show_time: Show timestamp in log messages
        show_path: Show the emitting file and line
        rich_tracebacks: Render exception tracebacks with rich
        console: Rich console to write to (stderr if None)
    """
    global _logging_configured

    if _logging_configured:
        return

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=show_time,
        show_path=show_path,
        rich_tracebacks=rich_tracebacks,
        markup=False,
        log_time_format="[%X]",
    )
    logging.basicConfig(level=resolve_level(level), format="%(message)s", handlers=[handler], force=True)

    _logging_configured = True


def get_logger(name: str) -> logging.Logger:
    """Logger for a dockscreen module (pass __name__)."""
    return logging.getLogger(name)


def set_module_level(module_name: str, level: Union[int, str]) -> None:
    """
    Set logging level for one module, or for the whole package.

    Args:
        module_name: Full module name (e.g. 'dockscreen.interaction') or
            PACKAGE_LOGGER for every dockscreen module
        level: Level number or name

    Example:
        >>> from dockscreen.logging_config import set_module_level
        >>> set_module_level('dockscreen.interaction', 'debug')
    """
    logging.getLogger(module_name).setLevel(resolve_level(level))
