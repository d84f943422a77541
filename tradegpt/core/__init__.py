"""Core pieces of the gateway: error taxonomy and ticker detection."""

from .errors import (
    TradeGPTError,
    MissingPromptError,
    UpstreamError,
    TransportFault,
    MalformedResponseError,
    QuizParseFault,
)
from .tickers import KNOWN_TICKERS, MAX_TICKERS, extract_tickers, select_tickers

__all__ = [
    "TradeGPTError",
    "MissingPromptError",
    "UpstreamError",
    "TransportFault",
    "MalformedResponseError",
    "QuizParseFault",
    "KNOWN_TICKERS",
    "MAX_TICKERS",
    "extract_tickers",
    "select_tickers",
]
