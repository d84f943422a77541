"""
Failure taxonomy for the TradeGPT gateway.

    MissingPromptError      client sent no usable prompt          → 400
    UpstreamError           completion endpoint answered non-2xx  → 502
    TransportFault          completion endpoint unreachable       → 502
    MalformedResponseError  2xx answer that is not a completion   → 502
    QuizParseFault          generated quiz is not a valid item    → static fallback

Price lookups have no exception here: an unresolved price is a normal
``PriceQuote`` with ``usd_price=None``.
"""

from __future__ import annotations

from typing import Optional


class TradeGPTError(Exception):
    """Base class for every error raised by the gateway itself."""


class MissingPromptError(TradeGPTError, ValueError):
    """The ask request carried no prompt, or only whitespace."""

    def __init__(self, message: str = "Missing prompt") -> None:
        super().__init__(message)


class UpstreamError(TradeGPTError):
    """
    The completion endpoint returned a non-success status.

    ``detail`` holds the raw upstream response body, forwarded verbatim to
    the client as diagnostic detail.
    """

    def __init__(self, status_code: Optional[int], detail: str) -> None:
        super().__init__(f"Upstream returned {status_code}: {detail[:200]}")
        self.status_code = status_code
        self.detail = detail


class TransportFault(UpstreamError):
    """The completion endpoint could not be reached (connection error or timeout)."""

    def __init__(self, description: str) -> None:
        super().__init__(None, f"Upstream unreachable: {description}")
        self.description = description


class MalformedResponseError(UpstreamError):
    """The completion endpoint answered 2xx with a body that is not a chat completion."""

    def __init__(self, status_code: Optional[int], detail: str) -> None:
        super().__init__(status_code, detail)


class QuizParseFault(TradeGPTError, ValueError):
    """A generated quiz reply was not a single valid quiz item."""
