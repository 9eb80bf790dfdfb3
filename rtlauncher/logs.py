import logging
import sys

LOGGER_NAME = "rtlauncher"
LOG_FORMAT = "%(levelname)s: %(message)s"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Send every ``rtlauncher.*`` record to stderr, one line per record.

    Calling it again replaces the handler, so the stream is always the
    current ``sys.stderr``.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper()))
    return logger
