"""Logging setup for the command-line and web entry points."""

from __future__ import annotations

import logging
import os
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_LEVEL_ENV = "DEBT_PAYOFF_LOG_LEVEL"


def setup_logging(level: Optional[Union[str, int]] = None) -> logging.Logger:
    """Attach a stderr handler to the ``debt_payoff`` logger.

    ``level`` defaults to ``$DEBT_PAYOFF_LOG_LEVEL`` (or ``WARNING``). Calling
    this again only updates the level.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "WARNING")
    if isinstance(level, str):
        level = level.upper()
    logger = logging.getLogger("debt_payoff")
    logger.setLevel(level)
    if not any(getattr(h, "_debt_payoff", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._debt_payoff = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger
