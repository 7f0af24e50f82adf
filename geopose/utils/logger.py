"""Console logger factory for scripts and examples.

Library modules only call ``logging.getLogger(__name__)`` and never attach
handlers; entry points use create_logger to get readable console output.
"""

import logging
from typing import Dict, Literal

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_LEVEL_MAP: Dict[str, int] = {
    "NOTSET": logging.NOTSET,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

LOG_FORMAT = "[%(name)s] %(levelname)s: %(message)s"

CONSOLE_HANDLER_NAME = "geopose-console"


def create_logger(name: str, level: LogLevel = "INFO") -> logging.Logger:
    """Create a logger with a single console handler.

    Calling it twice for the same name does not stack handlers. Handlers
    attached by anything else are left untouched.

    Args:
        name: Logger name, e.g. "geopose" to capture the whole package.
        level: Level name.

    Returns:
        Configured logging.Logger.

    Raises:
        ValueError: If ``level`` is not a known level name.
    """
    if level not in _LEVEL_MAP:
        raise ValueError(f"Unknown log level {level!r}, expected one of {sorted(_LEVEL_MAP)}")

    logger = logging.getLogger(name)
    logger.setLevel(_LEVEL_MAP[level])
    logger.propagate = False

    console = next((h for h in logger.handlers if h.get_name() == CONSOLE_HANDLER_NAME), None)
    if console is None:
        console = logging.StreamHandler()
        console.set_name(CONSOLE_HANDLER_NAME)
        console.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(console)

    console.setLevel(_LEVEL_MAP[level])

    return logger
