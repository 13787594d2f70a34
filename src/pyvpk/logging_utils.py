import logging
import os
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_LOGGERS: dict[str, logging.Logger] = {}


def _configured_level() -> int:
    return getattr(logging, os.getenv("PYVPK_LOG", "INFO").upper(), logging.INFO)


def _formatter() -> logging.Formatter:
    return logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)


def get_logger(name: str) -> logging.Logger:
    """Return the named logger, attaching a stderr handler the first time it is requested."""
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    level = _configured_level()
    logger.setLevel(level)
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(_formatter())
    logger.addHandler(handler)
    _LOGGERS[name] = logger
    return logger


def configure_logging() -> None:
    """Re-read PYVPK_LOG and PYVPK_LOG_FILE for every logger handed out so far.

    Loggers are created at import time, before the entry point has had a
    chance to load a .env file.
    """
    level = _configured_level()
    log_file = os.getenv("PYVPK_LOG_FILE")
    for logger in _LOGGERS.values():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)
        if log_file and not any(isinstance(h, logging.FileHandler) for h in logger.handlers):
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setLevel(level)
            file_handler.setFormatter(_formatter())
            logger.addHandler(file_handler)
