"""
Logging Setup
=============

The library logs under the ``feie_print`` logger and never touches the root
logger. ``configure_logging`` is called by FeieClient with its configured
level and optional log directory.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional, Union

LOGGER_NAME = 'feie_print'
LOG_FILE = 'feie.log'
LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'

MAX_BYTES = 10 * 1024 * 1024
BACKUP_COUNT = 50

# Receipt text, images and phone numbers never reach the logs verbatim
PRIVATE_FIELDS = ('content', 'img', 'phonenum', 'printerContent')


def configure_logging(level: Union[str, int, None] = None,
                      log_path: Optional[str] = None) -> logging.Logger:
    """
    Set the package log level and optionally attach a rotating file sink.

    Args:
        level: Level name ('DEBUG', 'INFO', ...) or logging constant;
            None leaves the level to the host application
        log_path: Directory for feie.log; created if missing

    Returns:
        The package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f'Unknown log level: {level}')
        level = resolved
    if level is not None:
        logger.setLevel(level)

    if log_path:
        os.makedirs(log_path, exist_ok=True)
        filename = os.path.abspath(os.path.join(log_path, LOG_FILE))
        # One handler per file, however many clients are built
        for handler in logger.handlers:
            if getattr(handler, 'baseFilename', None) == filename:
                break
        else:
            handler = RotatingFileHandler(
                filename, maxBytes=MAX_BYTES, backupCount=BACKUP_COUNT, encoding='utf-8'
            )
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            logger.addHandler(handler)

    return logger


def mask_form(form: dict) -> dict:
    """Copy of a form body safe to log: signature masked, customer data reduced to its size."""
    masked = {}
    for key, value in form.items():
        if key == 'sig':
            masked[key] = value[:6] + '...'
        elif key in PRIVATE_FIELDS:
            masked[key] = f'<{len(value)} chars>'
        else:
            masked[key] = value
    return masked
