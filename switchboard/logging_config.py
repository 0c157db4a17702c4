from __future__ import annotations

import logging
import sys


def setup_logging(component: str, level: str | int = logging.INFO) -> logging.Logger:
    """Configure root logging to stdout and return the component logger.

    Safe to call more than once; later calls replace the handlers.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(
        level=level,
        format=f"[%(asctime)s] [{component.upper()}] %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    logger = logging.getLogger(component)
    logger.info("%s logging initialized (level=%s)", component.upper(), logging.getLevelName(level))
    return logger
