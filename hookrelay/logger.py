"""Logging setup for applications embedding hookrelay."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

LOGGER_NAME = "hookrelay"
_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def get_logger(name: str = "") -> logging.Logger:
    """Return the hookrelay logger or one of its children."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}" if name else LOGGER_NAME)


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    log_rotate: bool = False,
    quiet: bool = False
) -> logging.Logger:
    """Configure console and file handlers on the hookrelay logger.

    Calling it again replaces the handlers installed by an earlier call.

    Args:
        level: Log level name
        log_file: Optional file to also write logs to
        log_rotate: Rotate the log file at 10MB, keeping 5 backups
        quiet: Skip the console handler

    Returns:
        The configured logger
    """
    logger = get_logger()
    logger.setLevel(getattr(logging, level.upper()))

    for handler in list(logger.handlers):
        if getattr(handler, "_hookrelay", False):
            logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(_FORMAT)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(formatter)
        console_handler._hookrelay = True
        logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        if log_rotate:
            file_handler = RotatingFileHandler(
                log_path,
                maxBytes=10*1024*1024,  # 10MB
                backupCount=5
            )
        else:
            file_handler = logging.FileHandler(log_path)

        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        file_handler._hookrelay = True
        logger.addHandler(file_handler)

    return logger
