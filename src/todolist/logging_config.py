from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_PACKAGE_LOGGER = "todolist"

_handler = logging.StreamHandler()
_handler.setFormatter(logging.Formatter(LOG_FORMAT))


# PUBLIC_INTERFACE
def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Attach the package's stderr handler to the package logger and set its level.

    Calling it again only updates the level. Unknown level names fall back to INFO.
    """
    logger = logging.getLogger(_PACKAGE_LOGGER)
    resolved = logging.getLevelName(level.upper())
    logger.setLevel(resolved if isinstance(resolved, int) else logging.INFO)

    if _handler not in logger.handlers:
        logger.addHandler(_handler)
    return logger
