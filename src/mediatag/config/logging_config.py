"""
Logging setup for the mediatag package logger.
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_HANDLER_NAME = "mediatag-console"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Attach a console handler to the ``mediatag`` logger.

    Calling this repeatedly only updates the level; a second handler is
    never added.

    Parameters
    ----------
    level : str
        Log level name (e.g. "INFO", "DEBUG").

    Returns
    -------
    logging.Logger
        The configured package logger.
    """
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        raise ValueError(f"Invalid log level: {level}")

    root_logger = logging.getLogger("mediatag")
    root_logger.setLevel(log_level)

    handler = next(
        (h for h in root_logger.handlers if h.get_name() == _HANDLER_NAME), None
    )
    if handler is None:
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        root_logger.addHandler(handler)
    handler.setLevel(log_level)

    return root_logger
