"""Logging and tracing helpers shared by every TradeGPT module."""

from .logging import get_logger, set_log_level
from .tracing import traceable, tracing_enabled

__all__ = ["get_logger", "set_log_level", "traceable", "tracing_enabled"]
