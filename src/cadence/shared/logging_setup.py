from __future__ import annotations

import logging
from typing import Optional

PACKAGE_LOGGER = "cadence"
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(threadName)s %(name)s: %(message)s"

_HANDLER_NAME = "cadence-console"


def resolve_level(name: Optional[str]) -> Optional[int]:
    """Map a level name to its number; None or "OFF" means leave logging alone."""
    if name is None or name.upper() == "OFF":
        return None
    level = logging.getLevelNamesMapping().get(name.upper())
    if level is None:
        raise ValueError(f"Unknown log level: {name}")
    return level


def configure_package_logger(level: int, name: str = PACKAGE_LOGGER) -> logging.Logger:
    """Send the package's records to stderr at ``level``.

    Timer callbacks log from worker threads, so the thread name is part of
    every line. Calling this again only changes the level: the console
    handler is installed once, found by name, and never duplicated.
    """
    logger = logging.getLogger(name)
    handler = next((h for h in logger.handlers if h.get_name() == _HANDLER_NAME), None)
    if handler is None:
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger
