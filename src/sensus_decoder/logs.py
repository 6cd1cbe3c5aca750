"""Logging setup for tools and tests built on the decoders."""

from __future__ import annotations

import logging
from typing import Optional

from .config import LoggingConfig, log_level


def setup_logging(config: Optional[LoggingConfig] = None, debug: bool = False) -> None:
    """Set up logging configuration.

    `debug` forces DEBUG regardless of the configured level.
    """
    if config is None:
        config = LoggingConfig()

    level = logging.DEBUG if debug else log_level(config)
    logging.basicConfig(
        level=level,
        format=config.format,
        datefmt=config.datefmt,
    )
    logging.getLogger("sensus_decoder").setLevel(level)
