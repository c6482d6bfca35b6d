"""
loguru sinks for zenspace.

Library modules only ``from loguru import logger``; sinks are installed once
per process by the CLI through ``configure_logging``.
"""

import os
import sys

from loguru import logger

CONSOLE_FORMAT = "<level>{level: <8}</level> {message}"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{line} | {message}"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    rotation: str = "5 MB",
    retention: int = 3,
) -> None:
    """Replace all sinks with stderr at ``level`` plus an optional rotating file.

    Args:
        level: Minimum level for both sinks.
        log_file: File to append to; its directory is created if missing.
        rotation: Size at which the file rolls over.
        retention: Number of rolled-over files to keep.
    """
    level = level.upper()
    logger.remove()
    logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT)

    if not log_file:
        return
    log_file = os.path.expanduser(log_file)
    os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
    logger.add(log_file, level=level, format=FILE_FORMAT, rotation=rotation, retention=retention, encoding="utf-8")


def configure_logging(config, verbose: bool = False) -> None:
    """Install sinks from the ``logging`` section of a :class:`Config`.

    ``verbose`` forces DEBUG on both sinks.
    """
    level = "DEBUG" if verbose else str(config.get("logging.level") or "WARNING")
    setup_logging(level=level, log_file=config.get("logging.file") or None)
