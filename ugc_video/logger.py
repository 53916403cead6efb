"""
Logging for the UGC video generation library.

Library modules log through the ``ugc_video`` logger and never attach
handlers themselves. Applications (the CLI) call :func:`init_library_logger`
once to get console output and a rotating file under ``logs/``.
Per-request loggers prefix every line with the request id.
"""

import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler


LIBRARY_LOGGER_NAME = "ugc_video"
LOG_DIR = "logs"
LOG_FILE_NAME = "ugc_video.log"
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5

_library_logger = None


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter('%(message)s'))
    return handler


def _file_handler(log_dir: str) -> logging.Handler:
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_path / LOG_FILE_NAME,
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding='utf-8'
    )
    # The file always keeps debug detail; verbosity only affects the console
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))
    return handler


def init_library_logger(
    verbose: bool = False,
    log_to_file: bool = True,
    log_dir: str = LOG_DIR
) -> logging.Logger:
    """
    Attach console (and optionally file) output to the library logger.

    Calling it again replaces the handlers from the previous call.

    Args:
        verbose: Show DEBUG lines on the console instead of INFO and up
        log_to_file: Also write to a rotating file in ``log_dir``
        log_dir: Directory for the log file

    Returns:
        The configured library logger
    """
    global _library_logger

    logger = logging.getLogger(LIBRARY_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    logger.addHandler(_console_handler(logging.DEBUG if verbose else logging.INFO))
    if log_to_file:
        logger.addHandler(_file_handler(log_dir))
        logger.debug(f"Logging to: {Path(log_dir) / LOG_FILE_NAME}")

    _library_logger = logger
    return logger


def get_library_logger() -> logging.Logger:
    """
    Get the library-wide logger.

    Until the application calls :func:`init_library_logger` records
    propagate to the root logger.
    """
    global _library_logger

    if _library_logger is None:
        _library_logger = logging.getLogger(LIBRARY_LOGGER_NAME)

    return _library_logger


class RequestLoggerAdapter(logging.LoggerAdapter):
    """Prefixes each message with ``[<request_id>]``."""

    def process(self, msg, kwargs):
        return f"[{self.extra['request_id']}] {msg}", kwargs


def get_request_logger(request_id: str) -> RequestLoggerAdapter:
    """
    Get a logger bound to one inbound request.

    Args:
        request_id: Correlation token minted for the request

    Returns:
        Logger adapter that tags every line with the request id
    """
    return RequestLoggerAdapter(get_library_logger(), {"request_id": request_id})
