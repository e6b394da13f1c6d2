"""Colorized terminal logging for the portal's modules and scripts."""
import logging
import re
from os import environ

BLUE = '\u001b[34m'
MAGENTA = '\u001b[35m'
CYAN = '\u001b[0;36m'
RESET = '\u001b[0m'
DIVIDER = '┃'

LEVEL_COLORS = {
    logging.DEBUG: '',
    logging.INFO: '\u001b[32;1m',
    logging.WARNING: '\u001b[33;1m',
    logging.ERROR: '\u001b[31;1m',
    logging.CRITICAL: '\u001b[31;1m',
}


def _level_format(color: str, show_line: bool) -> str:
    line = f'{BLUE}%(lineno)3d{RESET} ' if show_line else ''
    return (
        f'{BLUE}%(asctime)s {RESET}{MAGENTA}[ {RESET}{color}%(levelname)-8s{RESET}{MAGENTA} ] '
        f'{RESET}{line}{MAGENTA}%(name)-40s{RESET}{CYAN}{DIVIDER}{RESET} %(message)s'
    )


class CustomFormatter(logging.Formatter):
    """Colors the level name by severity. Line numbers are shown except at INFO level."""
    FORMATTERS = {
        level: logging.Formatter(
            _level_format(color, level != logging.INFO),
            datefmt='%m-%d %H:%M:%S',
        )
        for level, color in LEVEL_COLORS.items()
    }

    def format(self, record):
        formatter = self.FORMATTERS.get(record.levelno, self.FORMATTERS[logging.DEBUG])
        return formatter.format(record)


def _configured_level() -> int:
    name = environ.get('CANCER_STUDY_PORTAL_LOG_LEVEL', 'DEBUG').upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.DEBUG


def colorized_logger(name: str) -> logging.Logger:
    """Requisition a logger writing colorized messages to the terminal.

    Args:
        name (str):
            Typically a module's ``__name__``. The leading package name is dropped, so that
            messages show e.g. ``db.querying``.

    Returns:
        The logger. A handler is attached only the first time a given logger is requested.
    """
    logger = logging.getLogger(re.sub(r'^cancerstudyportal\.', '', name))
    level = _configured_level()
    logger.setLevel(level)
    if not logger.handlers:
        stream_handler = logging.StreamHandler()
        stream_handler.setLevel(level)
        stream_handler.setFormatter(CustomFormatter())
        logger.addHandler(stream_handler)
    return logger
