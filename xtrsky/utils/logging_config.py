"""
Logging setup for xtrsky.

Every module logs through ``get_logger(__name__)``, so all records end up
under the ``xtrsky`` logger configured here. Skipped systems are also issued
as ``MissingCombinationWarning``; ``setup_logging(capture_warnings=True)``
sends those to the same handlers.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

PACKAGE_LOGGER = "xtrsky"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: Union[str, int] = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    console_output: bool = True,
    capture_warnings: bool = False,
) -> logging.Logger:
    """
    Configure the ``xtrsky`` logger.

    Args:
        level: Level name (``"DEBUG"``, ``"INFO"``, ...) or number
        log_file: Optional log file; parent folders are created
        console_output: Log to stdout
        capture_warnings: Route ``warnings.warn`` output (e.g. missing MP
            combinations) through the same handlers

    Returns:
        The configured package logger

    Example:
        >>> setup_logging(level="DEBUG", log_file="logs/xtrsky.log")
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    # Repeated calls replace the handlers
    package_logger.handlers.clear()

    handlers = []
    if console_output:
        handlers.append(logging.StreamHandler(sys.stdout))
    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)

    logging.captureWarnings(capture_warnings)
    warnings_logger = logging.getLogger("py.warnings")
    warnings_logger.handlers.clear()
    if capture_warnings:
        for handler in handlers:
            warnings_logger.addHandler(handler)

    return package_logger


def get_logger(name: str) -> logging.Logger:
    """
    Logger under the ``xtrsky`` hierarchy.

    Module names inside the package are used as is; any other name (scripts,
    notebooks) is placed below ``xtrsky`` so that ``setup_logging`` applies.

    Example:
        >>> get_logger("xtrsky.analyzer").name
        'xtrsky.analyzer'
        >>> get_logger("batch_run").name
        'xtrsky.batch_run'
    """
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)
