import logging
from logging import Logger

DEFAULT_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
DEFAULT_DATEFMT = "%H:%M:%S"
LOGGER_NAME = "dialogue"


def get_logger(name: str | None = None) -> Logger:
    """Return the project logger, or one of its children when ``name`` is given."""
    if not name:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def setup_logging(level: int = logging.INFO) -> Logger:
    logging.basicConfig(level=level, format=DEFAULT_FORMAT, datefmt=DEFAULT_DATEFMT)
    logger = get_logger()
    logger.setLevel(level)
    logger.debug("Logging initialized.")
    return logger
