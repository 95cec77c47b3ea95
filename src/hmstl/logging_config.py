"""
Logging Configuration
Sets up the ``hmstl`` logger. Diagnostics go to stderr so they never mix
with STL written to stdout.
"""
import logging
import sys
from typing import Optional, TextIO

from hmstl.errors import ConfigError

LOGGER_NAME = "hmstl"


def setup_logging(level: int = logging.WARNING, log_file: Optional[str] = None,
                  stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Configures the logger for the 'hmstl' namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to also save logs to a file.
        stream: Console stream, stderr when omitted.

    Raises:
        ConfigError: if log_file cannot be opened for writing.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Avoid duplicate handlers when main() runs more than once in a process
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter('%(message)s'))
    logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        except OSError as exc:
            raise ConfigError(f"cannot open log file {log_file}: {exc}") from exc
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%H:%M:%S'
        ))
        logger.addHandler(file_handler)

    return logger
