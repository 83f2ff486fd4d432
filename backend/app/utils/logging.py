import logging
import sys

from app.config import settings


def get_logger(name: str, prefix: str = None) -> logging.Logger:
    """
    Return a module logger writing to stdout as "[PREFIX] message".
    The handler is only attached once, so repeated imports don't duplicate lines.
    """
    log = logging.getLogger(name)
    log.setLevel(settings.LOG_LEVEL.upper())
    if not log.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(logging.Formatter(f"[{prefix or name.upper()}] %(message)s"))
        log.addHandler(h)
        # "app.x" loggers would otherwise print again through the "app" handler
        log.propagate = False
    return log
