"""Core logic for the TradeGPT mentor.

Pipeline for one ask request
----------------------------
1. Detect up to three known tickers in the prompt
2. Resolve their live USD prices (unknown prices are simply left out)
3. Compose the mentor system instruction
4. Send system + user messages to the completion endpoint, single attempt
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

import openai
from openai import OpenAI

from tradegpt.config import Settings
from tradegpt.core.errors import (
    MalformedResponseError,
    MissingPromptError,
    TransportFault,
    UpstreamError,
)
from tradegpt.core.tickers import select_tickers
from tradegpt.tools.price_tools import PriceFetcher, PriceQuote, fetch_price, get_live_quotes
from tradegpt.utils.logging import get_logger
from tradegpt.utils.tracing import traceable
from .client import get_client
from .prompts import build_system_prompt

logger = get_logger(__name__)

ASK_TEMPERATURE = 0.2
QUIZ_TEMPERATURE = 0.3


@dataclass
class CompletionResult:
    reply_text: str
    token_count: Optional[int] = None
    live_quotes: Dict[str, PriceQuote] = field(default_factory=dict)

    def live_prices(self) -> Dict[str, Optional[float]]:
        return {symbol: quote.usd_price for symbol, quote in self.live_quotes.items()}


def build_chat_request(
    system: str,
    prompt: str,
    model: str,
    temperature: float = ASK_TEMPERATURE,
) -> Dict[str, Any]:
    """Assemble the chat-completions payload: system message first, then the user's."""
    return {
        "model": model,
        "temperature": temperature,
        "messages": [
            {"role": "system", "content": system},
            {"role": "user", "content": prompt},
        ],
    }


def _extract_reply(response: Any) -> str:
    choices = getattr(response, "choices", None) or []
    if not choices:
        return ""
    message = getattr(choices[0], "message", None)
    return getattr(message, "content", None) or ""


def _extract_tokens(response: Any) -> Optional[int]:
    total = getattr(getattr(response, "usage", None), "total_tokens", None)
    return total if isinstance(total, int) else None


@traceable(name="completion_dispatch", run_type="llm", tags=["openai"])
def dispatch_completion(client: OpenAI, request: Dict[str, Any]) -> CompletionResult:
    """
    Send *request* to the completion endpoint once.

    Raises
    ------
    UpstreamError
        The endpoint answered with a non-success status; ``detail`` is the
        raw response body.
    TransportFault
        The endpoint could not be reached or timed out.
    MalformedResponseError
        The endpoint answered 2xx but the body is not a chat completion.
    """
    try:
        response = client.chat.completions.create(**request)
    except openai.APIResponseValidationError as exc:
        logger.warning("Completion endpoint sent an invalid body (HTTP %s)", exc.status_code)
        raise MalformedResponseError(exc.status_code, exc.response.text) from exc
    except openai.APIStatusError as exc:
        body = exc.response.text
        logger.warning("Completion endpoint returned HTTP %s", exc.status_code)
        raise UpstreamError(exc.status_code, body) from exc
    except openai.APIConnectionError as exc:
        logger.error("Completion endpoint unreachable: %s", exc)
        raise TransportFault(str(exc)) from exc
    except ValueError as exc:
        doc = getattr(exc, "doc", None)
        body = doc if isinstance(doc, str) and doc else str(exc)
        logger.warning("Completion endpoint sent a non-JSON body: %s", exc)
        raise MalformedResponseError(200, body) from exc

    # Non-JSON content types come back from the SDK as plain text.
    if isinstance(response, str):
        logger.warning("Completion endpoint sent a non-JSON body (%d chars)", len(response))
        raise MalformedResponseError(200, response)

    return CompletionResult(
        reply_text=_extract_reply(response),
        token_count=_extract_tokens(response),
    )


@traceable(name="tradegpt_ask", run_type="chain", tags=["tradegpt", "ask"])
def ask_mentor(
    prompt: Optional[str],
    settings: Settings,
    model: Optional[str] = None,
    client_factory: Callable[[Settings], OpenAI] = get_client,
    fetcher: PriceFetcher = fetch_price,
) -> CompletionResult:
    """
    Answer a trading question with live prices injected into the system prompt.

    Parameters
    ----------
    prompt : str | None
        The user's question. Missing or blank prompts are rejected before
        any outbound call.
    settings : Settings
        Process configuration (default model, price endpoint).
    model : str | None
        Overrides ``settings.openai_model`` for this request.
    client_factory : callable
        Builds the OpenAI client; called only once the prompt is valid.
    fetcher : callable
        Price lookup used per ticker; injectable for tests.
    """
    if not isinstance(prompt, str) or not prompt.strip():
        raise MissingPromptError()

    tickers = select_tickers(prompt)
    quotes = get_live_quotes(tickers, settings, fetcher=fetcher) if tickers else {}
    if tickers:
        logger.info(
            "Live prices for %s: %s",
            ",".join(tickers),
            {s: q.usd_price for s, q in quotes.items()},
        )

    request = build_chat_request(
        system=build_system_prompt(quotes.values()),
        prompt=prompt,
        model=model or settings.openai_model,
        temperature=ASK_TEMPERATURE,
    )
    result = dispatch_completion(client_factory(settings), request)
    result.live_quotes = quotes

    logger.info(
        "Mentor reply: %d chars, tokens=%s (first 80 chars: %s)",
        len(result.reply_text), result.token_count, result.reply_text[:80],
    )
    return result
