"""Logging configuration."""

from __future__ import annotations

import logging
import sys

from musicpos.infrastructure.config import LoggingConfig


def setup_logging(config: LoggingConfig) -> None:
    """Configure the ``musicpos`` package logger from *config*.

    Output goes to ``config.file`` if set, otherwise to stderr so it never
    mixes with command output on stdout.
    """
    handler: logging.Handler
    if config.file:
        handler = logging.FileHandler(config.file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)

    if config.format == "json":
        formatter = logging.Formatter(
            '{"timestamp": "%(asctime)s", "level": "%(levelname)s", '
            '"module": "%(name)s", "message": "%(message)s"}'
        )
    else:
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    handler.setFormatter(formatter)

    logger = logging.getLogger("musicpos")
    logger.setLevel(config.level)

    for old_handler in logger.handlers[:]:
        old_handler.close()
        logger.removeHandler(old_handler)

    logger.addHandler(handler)
    logger.propagate = False
