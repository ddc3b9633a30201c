"""
Logging setup for command-line use.

Library modules only create ``logging.getLogger(__name__)`` loggers under
the ``pystl`` namespace. ``setup_logging`` attaches handlers to that
namespace; records go to stderr so they never mix with command output.
"""
import logging
import sys
from typing import IO, Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None,
                  stream: Optional[IO[str]] = None) -> logging.Logger:
    """
    Route 'pystl' records to the console and, optionally, a file.

    Args:
        level: Logging level for the namespace and its handlers.
        log_file: Optional path; the file is truncated on each call.
        stream: Console stream, stderr when not given.
    """
    logger = logging.getLogger("pystl")
    logger.setLevel(level)

    # calling twice replaces the handlers instead of stacking them
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers = [logging.StreamHandler(stream if stream is not None else sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging set up at level %s", logging.getLevelName(level))
    return logger
