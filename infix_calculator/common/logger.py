"""Shared logger for the calculator package."""
import logging
import sys

from infix_calculator.common.config import settings


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str = "infix_calculator") -> logging.Logger:
    """
    Return a logger writing to stderr at the configured level.

    The handler is only attached once, so repeated calls are safe.

    :param str name: Logger name

    :return: Configured logger
    :rtype: logging.Logger
    """
    log = logging.getLogger(name)
    if not log.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        log.addHandler(handler)
    log.setLevel(settings.log_level)
    return log


logger: logging.Logger = get_logger()
