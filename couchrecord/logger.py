"""couchrecord logging.

couchrecord has two channels for communicating with the user: the loggers
returned by :any:`get_logger` and the exceptions of :any:`couchrecord.error`.
Every logger is a child of the ``couchrecord`` root logger, which writes to
stderr through :any:`_STDERR_HANDLER` and, when the ``log_file``
configuration key is set, to :any:`LOG_FILE`.
"""

import os
import sys
import shutil
import logging
import textwrap
from logging import handlers
import termcolor
from couchrecord import COUCHRECORD_ENV_PREFIX
from couchrecord.config import CONFIGURATION

ROOT_LOGGER_NAME = 'couchrecord'

TERM_SIZE = shutil.get_terminal_size((80, 24))
"""tuple: (width, height) of the terminal, or a sensible default."""

LINE_WIDTH = TERM_SIZE[0]
"""int: Maximum width of a line of log output."""

LOG_LEVEL = os.environ.get(f"{COUCHRECORD_ENV_PREFIX}_LOG_LEVEL",
                           CONFIGURATION.log_level).upper()
"""str: Minimum severity of records that reach the handlers."""

LOG_FILE = CONFIGURATION.log_file or None
"""str: Path of the file receiving a copy of every record, if any."""

_LEVEL_COLORS = {
    'CRITICAL': 'red',
    'ERROR': 'red',
    'WARNING': 'yellow',
    'INFO': None,
    'DEBUG': 'cyan',
}


class LogFormatter(logging.Formatter):
    """Custom log message formatter.

    Wraps messages to `line_width` and prefixes every line but informational
    ones with the colored level name.

    Args:
        line_width (int): Maximum width of a formatted line.
        printable_only (bool): Never emit terminal control characters.
        allow_colors (bool): Color level names when the stream is a terminal.
    """

    def __init__(self, line_width=LINE_WIDTH, printable_only=False,
                 allow_colors=True):
        super().__init__()
        self.line_width = line_width
        self.printable_only = printable_only
        self.allow_colors = allow_colors and not printable_only

    def _level(self, record):
        color = _LEVEL_COLORS.get(record.levelname)
        if self.allow_colors and color and sys.stderr.isatty():
            return termcolor.colored(record.levelname, color, attrs=['bold'])
        return record.levelname

    def format(self, record):
        message = record.getMessage()
        if record.exc_info:
            message = '\n'.join([message, self.formatException(record.exc_info)])
        if record.levelno == logging.INFO:
            return message
        prefix = f"[{self._level(record)} {record.name}] "
        if not self.line_width or len(prefix) >= self.line_width:
            return prefix + message
        lines = []
        for line in message.splitlines() or ['']:
            lines.extend(
                textwrap.wrap(line,
                              width=self.line_width,
                              initial_indent=prefix,
                              subsequent_indent=' ' * 4,
                              break_long_words=False) or [prefix])
        return '\n'.join(lines)


def set_log_level(level):
    """Sets :any:`LOG_LEVEL`, the output level for the couchrecord loggers.

    Args:
        level (str): A string corresponding to a valid logging level, e.g. 'INFO'.
    """
    global LOG_LEVEL
    LOG_LEVEL = level.upper()
    _ROOT_LOGGER.setLevel(LOG_LEVEL)


def get_logger(name):
    """Returns a customized logging object.

    Args:
        name (str): Name of the logger, usually the `__name__` of the module.

    Returns:
        Logger: A child of the couchrecord root logger.
    """
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + '.'):
        return logging.getLogger(name)
    return _ROOT_LOGGER.getChild(name)


_STDERR_HANDLER = logging.StreamHandler(sys.stderr)
_STDERR_HANDLER.setFormatter(LogFormatter())

_ROOT_LOGGER = logging.getLogger(ROOT_LOGGER_NAME)
_ROOT_LOGGER.setLevel(LOG_LEVEL)
_ROOT_LOGGER.addHandler(_STDERR_HANDLER)
_ROOT_LOGGER.propagate = False

if LOG_FILE:
    _FILE_HANDLER = handlers.RotatingFileHandler(LOG_FILE,
                                                 maxBytes=1 << 20,
                                                 backupCount=3)
    _FILE_HANDLER.setFormatter(
        logging.Formatter(
            '%(asctime)s [%(levelname)s %(name)s:%(lineno)d] %(message)s'))
    _ROOT_LOGGER.addHandler(_FILE_HANDLER)
