"""
Live spot prices for crypto tickers.

Uses the public Binance ticker endpoint through standard-library urllib.
No API key required.

A lookup never raises: any transport error, non-success status or
unusable body resolves to ``PriceQuote(symbol, None)`` so the ask
pipeline simply proceeds without that price.
"""
from __future__ import annotations

import json
import math
import urllib.parse
import urllib.request
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from tradegpt.config import Settings
from tradegpt.utils.logging import get_logger

logger = get_logger(__name__)

_HEADERS = {
    "Accept": "application/json",
    "User-Agent": "Mozilla/5.0 (compatible; tradegpt-gateway/1.0)",
}

# Exact exchange pairs; anything else resolves to <SYMBOL>USDT.
_PAIR_OVERRIDES: Dict[str, str] = {
    "BTC": "BTCUSDT",
    "ETH": "ETHUSDT",
    "SOL": "SOLUSDT",
}

_MAX_WORKERS = 3


@dataclass(frozen=True)
class PriceQuote:
    symbol: str
    usd_price: Optional[float] = None

    @property
    def known(self) -> bool:
        return self.usd_price is not None

    @classmethod
    def unknown(cls, symbol: str) -> "PriceQuote":
        return cls(symbol=symbol, usd_price=None)


PriceFetcher = Callable[[str, Settings], PriceQuote]


# ── helpers ───────────────────────────────────────────────────────────────────

def trading_pair(symbol: str) -> str:
    """Map a ticker to its exchange pair, e.g. ``'avax'`` → ``'AVAXUSDT'``."""
    symbol = symbol.strip().upper()
    return _PAIR_OVERRIDES.get(symbol, f"{symbol}USDT")


def _safe_price(val) -> Optional[float]:
    """Coerce *val* to a finite positive float, else ``None``."""
    try:
        price = float(val)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(price) or price <= 0:
        return None
    return price


def _price_url(base_url: str, pair: str) -> str:
    sep = "&" if "?" in base_url else "?"
    return f"{base_url}{sep}{urllib.parse.urlencode({'symbol': pair})}"


# ── lookups ───────────────────────────────────────────────────────────────────

def fetch_price(symbol: str, settings: Settings) -> PriceQuote:
    """
    Resolve the USD price of *symbol* with a single outbound request.

    Returns a quote with ``usd_price=None`` on any failure.
    """
    symbol = symbol.strip().upper()
    url = _price_url(settings.price_api_url, trading_pair(symbol))
    try:
        req = urllib.request.Request(url, headers=_HEADERS)
        with urllib.request.urlopen(req, timeout=settings.price_timeout) as resp:
            status = getattr(resp, "status", 200)
            if not 200 <= status < 300:
                logger.warning("Price lookup %s: HTTP %s", symbol, status)
                return PriceQuote.unknown(symbol)
            data = json.loads(resp.read())
    except Exception as exc:
        logger.warning("Price lookup %s failed: %s", symbol, exc)
        return PriceQuote.unknown(symbol)

    price = _safe_price(data.get("price")) if isinstance(data, dict) else None
    if price is None:
        logger.warning("Price lookup %s: unusable body %.200r", symbol, data)
        return PriceQuote.unknown(symbol)
    return PriceQuote(symbol=symbol, usd_price=price)


def get_live_quotes(
    symbols: Iterable[str],
    settings: Settings,
    fetcher: PriceFetcher = fetch_price,
) -> Dict[str, PriceQuote]:
    """
    Look up every symbol concurrently and return ``{symbol: PriceQuote}``.

    The mapping keeps the order of *symbols*. A fetcher that raises anyway
    is treated as an unknown price.
    """
    ordered = list(dict.fromkeys(s.strip().upper() for s in symbols if s and s.strip()))
    if not ordered:
        return {}

    def _lookup(symbol: str) -> PriceQuote:
        try:
            return fetcher(symbol, settings)
        except Exception as exc:
            logger.warning("Price fetcher raised for %s: %s", symbol, exc)
            return PriceQuote.unknown(symbol)

    with ThreadPoolExecutor(max_workers=min(len(ordered), _MAX_WORKERS)) as executor:
        quotes = list(executor.map(_lookup, ordered))

    return {symbol: quote for symbol, quote in zip(ordered, quotes)}
