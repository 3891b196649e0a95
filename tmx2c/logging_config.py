"""Logging setup for the tmx2c package.

WHY: Conversion runs inside build scripts, so diagnostics must go to
stderr and never mix with anything written to stdout. Library modules
only create loggers; the CLI decides where records go.

HOW: setup_logging() attaches one stderr StreamHandler to the ``tmx2c``
package logger and sets its level. Modules keep using
``logging.getLogger(__name__)``, which puts them under that logger.

RULES:
- Only the package logger is configured; the root logger is untouched
- Calling setup_logging() again replaces the level, never adds handlers
- Records still propagate so host applications and tests can capture them
"""

from __future__ import annotations

import logging
from typing import Union

PACKAGE_LOGGER = "tmx2c"
HANDLER_NAME = "tmx2c-stderr"
_FORMAT = "%(levelname)s %(name)s: %(message)s"


def setup_logging(level: Union[int, str] = logging.INFO) -> logging.Logger:
    """Configure the package logger.

    Args:
        level: Logging level as a number or a name such as ``"DEBUG"``.
               Unknown names fall back to INFO.

    Returns:
        The configured ``tmx2c`` logger.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    if not any(h.get_name() == HANDLER_NAME for h in logger.handlers):
        # StreamHandler() defaults to sys.stderr
        handler = logging.StreamHandler()
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)

    return logger
