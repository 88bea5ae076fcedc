"""Logging setup for podscribe.

Every module logs through the shared ``podscribe`` logger defined here. Its
level comes from PODSCRIBE_LOG_LEVEL unless set explicitly.
"""

import logging
import os
import sys
from typing import Optional, TextIO, Union

LOGGER_NAME = "podscribe"
LOG_LEVEL_ENV = "PODSCRIBE_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def resolve_log_level(value: Union[int, str, None]) -> int:
    """
    Turn a level name or number into a logging level.

    Names are case-insensitive ("debug", "WARNING"), numbers may be given
    as int or digit strings. Unknown or empty values give INFO.
    """
    if isinstance(value, int):
        return value
    if not value:
        return logging.INFO

    value = value.strip()
    if value.isdigit():
        return int(value)

    level = logging.getLevelName(value.upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logger(
    name: str = LOGGER_NAME,
    level: Union[int, str, None] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Configure a logger with a single console handler.

    Calling it again replaces the handler, so the level or stream can be
    changed at runtime (e.g. by ``--debug``).

    Args:
        name (str): Logger name
        level: Level name or number. Defaults to PODSCRIBE_LOG_LEVEL, then INFO.
        stream: Output stream for the handler. Defaults to stderr.

    Returns:
        logging.Logger: Configured logger instance
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV)
    resolved = resolve_log_level(level)

    configured = logging.getLogger(name)
    for handler in list(configured.handlers):
        configured.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    configured.setLevel(resolved)
    configured.addHandler(handler)
    return configured


logger = setup_logger()
