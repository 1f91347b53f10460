"""Logging configuration.

Stdout carries only the two display lines, so log records always go to
stderr. The host discards stderr unless the user is debugging a config.
"""

import logging
import os
import sys
from typing import Optional

LOG_LEVEL_ENV = "STATUSLINE_LOG_LEVEL"


def resolve_log_level(cli_level: Optional[str], config_level: str) -> int:
    """Pick the effective level: CLI flag, then environment, then config."""
    name = cli_level or os.environ.get(LOG_LEVEL_ENV) or config_level
    return getattr(logging, name.upper(), logging.WARNING)


def setup_logging(level: int) -> None:
    """Install a stderr handler on the package logger."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    )

    logger = logging.getLogger("statusline")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
