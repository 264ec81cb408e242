"""Shared logging configuration for regcheck.

Call ``configure_logging()`` once at a CLI entry point. Library modules only
create their own loggers and never configure handlers.
"""

import logging
from typing import Union


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """Configure the root logger with a console handler.

    Only configures if the root logger has no handlers, so repeated calls
    are no-ops.

    Args:
        level: Logging level as an int or a name such as "DEBUG".
    """
    root = logging.getLogger()
    if root.handlers:
        return

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(console)

    root.setLevel(level)
