"""Logging setup shared by the API server and the CLI."""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_handlers: list[logging.Handler] = []


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Configure the ``ojt_tracker`` logger.

    Calling this again replaces the handlers installed by the previous call.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional path of a file to log to in addition to stderr
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger("ojt_tracker")
    logger.setLevel(log_level)

    for handler in _handlers:
        logger.removeHandler(handler)
        handler.close()
    _handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    _handlers.append(console_handler)

    if log_file:
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path)
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        _handlers.append(file_handler)

    for handler in _handlers:
        logger.addHandler(handler)
