"""Logging helpers for the TradeGPT gateway."""

import logging
import sys
from typing import Optional, Union

_ROOT = "tradegpt"
_level: int = logging.INFO


def _coerce_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Return a configured logger with the given name.

    Logging format:  [LEVEL]  logger_name — message

    Parameters
    ----------
    name : str
        Typically __name__ of the calling module.
    level : int | None
        Explicit level; defaults to the process-wide level set through
        :func:`set_log_level` (INFO until configured).
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            fmt="%(asctime)s  [%(levelname)s]  %(name)s — %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.propagate = False

    logger.setLevel(_level if level is None else level)
    return logger


def set_log_level(level: Union[int, str]) -> int:
    """Apply *level* to every ``tradegpt.*`` logger, existing and future."""
    global _level
    _level = _coerce_level(level)
    for name, logger in logging.Logger.manager.loggerDict.items():
        if isinstance(logger, logging.Logger) and (name == _ROOT or name.startswith(_ROOT + ".")):
            logger.setLevel(_level)
    return _level
