"""Shared fixtures: settings and an OpenAI client wired to a fake upstream."""
from __future__ import annotations

import json
from typing import Callable, List, Optional

import httpx
import pytest
from openai import OpenAI

from tradegpt.config import Settings
from tradegpt.tools.price_tools import PriceQuote


def completion_body(content: Optional[str] = "Stubbed mentor reply.", total_tokens: Optional[int] = 42) -> dict:
    """A chat-completions response body as the upstream would send it."""
    body = {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 1_700_000_000,
        "model": "gpt-4o-mini",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
    }
    if total_tokens is not None:
        body["usage"] = {
            "prompt_tokens": total_tokens - 2,
            "completion_tokens": 2,
            "total_tokens": total_tokens,
        }
    return body


class FakeUpstream:
    """Records every request and answers with a canned response (or raises)."""

    def __init__(
        self,
        status_code: int = 200,
        body=None,
        text: Optional[str] = None,
        error: Optional[Exception] = None,
        content_type: str = "text/plain",
    ):
        self.status_code = status_code
        self.body = completion_body() if body is None and text is None else body
        self.text = text
        self.error = error
        self.content_type = content_type
        self.requests: List[dict] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(json.loads(request.content or b"{}"))
        if self.error is not None:
            raise self.error
        if self.text is not None:
            return httpx.Response(
                self.status_code,
                content=self.text.encode(),
                headers={"content-type": self.content_type},
            )
        return httpx.Response(self.status_code, json=self.body)

    def client(self) -> OpenAI:
        return OpenAI(
            api_key="sk-test",
            base_url="https://upstream.test/v1",
            max_retries=0,
            http_client=httpx.Client(transport=httpx.MockTransport(self)),
        )

    def factory(self) -> Callable[[Settings], OpenAI]:
        client = self.client()
        return lambda settings: client


@pytest.fixture
def settings() -> Settings:
    return Settings(
        openai_api_key="sk-test",
        openai_model="gpt-4o-mini",
        price_api_url="https://prices.test/api/v3/ticker/price",
    )


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def make_upstream() -> Callable[..., FakeUpstream]:
    return FakeUpstream


@pytest.fixture
def fixed_prices() -> Callable[[str, Settings], PriceQuote]:
    """Deterministic price fetcher: BTC and ETH known, everything else unknown."""
    prices = {"BTC": 65000.0, "ETH": 3000.5}

    def _fetch(symbol: str, settings: Settings) -> PriceQuote:
        return PriceQuote(symbol=symbol, usd_price=prices.get(symbol))

    return _fetch


@pytest.fixture
def completion() -> Callable[..., dict]:
    return completion_body
