import logging
import sys
from typing import Optional

from nvidia_migmanager.errors import InvalidLogLevelError, LoggerSetupError

LOGGER_NAME = "nvidia_migmanager"

LOG_LEVELS = {
    "off": logging.CRITICAL + 10,
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": logging.DEBUG,
}


def parse_log_level(name: str) -> int:
    """Map a level name to a logging level, case-insensitively."""
    try:
        return LOG_LEVELS[name.lower()]
    except KeyError:
        raise InvalidLogLevelError(name) from None


class _BelowError(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < logging.ERROR


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """Configure the package logger for the lifetime of the process.

    Records below ERROR go to stdout, ERROR and above to stderr. Calling this
    again replaces the previously installed handlers.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_fmt = logging.Formatter('%(asctime)s [%(levelname)s] %(message)s', '%H:%M:%S')

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.addFilter(_BelowError())
    stdout_handler.setFormatter(console_fmt)
    logger.addHandler(stdout_handler)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.ERROR)
    stderr_handler.setFormatter(console_fmt)
    logger.addHandler(stderr_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file)
        except OSError as e:
            raise LoggerSetupError(e) from e
        file_handler.setFormatter(
            logging.Formatter('%(asctime)s [%(levelname)s] %(name)s: %(message)s')
        )
        logger.addHandler(file_handler)

    return logger
