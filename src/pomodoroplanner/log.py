"""Logger configuration for the planner shells."""
from __future__ import annotations

import sys

from loguru import logger


def setup_logger(level: str = "WARNING") -> None:
    """Replace loguru's default sink with a colored stderr sink at ``level``."""
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=level,
        colorize=True,
    )
    logger.debug(f"Logger initialized with level={level}")
