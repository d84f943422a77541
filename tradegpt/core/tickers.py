"""
Ticker detection for free-text prompts.

Scans a prompt for a bounded allow-list of crypto tickers so the ask
pipeline knows which live prices to look up.

Public helpers
--------------
- ``extract_tickers(text)``  → every known ticker mentioned, allow-list order
- ``select_tickers(text)``   → the first ``MAX_TICKERS`` of those

Matching is case-insensitive and whole-word: a ticker glued to another
letter or digit ("BTCX", "BTCUSD", "XBTC", "BTC2") does not count, while
punctuation around it ("$BTC", "BTC/ETH", "btc?") does.

Pure functions, no I/O.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterable, List, Pattern, Sequence

# ── Constants ──────────────────────────────────────────────────────────────────

KNOWN_TICKERS: tuple[str, ...] = (
    "BTC", "ETH", "SOL", "BNB", "AVAX",
    "ARB", "OP", "SUI", "TON", "DOGE",
)

# Upper bound on outbound price calls per prompt.
MAX_TICKERS = 3


# ── Internal helpers ───────────────────────────────────────────────────────────

@lru_cache(maxsize=64)
def _pattern(symbol: str) -> Pattern[str]:
    return re.compile(
        rf"(?<![A-Za-z0-9]){re.escape(symbol)}(?![A-Za-z0-9])",
        re.IGNORECASE,
    )


# ── Public API ─────────────────────────────────────────────────────────────────

def extract_tickers(text: str, known: Iterable[str] = KNOWN_TICKERS) -> List[str]:
    """
    Return every ticker from *known* that appears in *text* as a whole word.

    Results are upper-case, deduplicated and ordered by the allow-list, not
    by position in the text. Empty or missing text yields an empty list.
    """
    if not text:
        return []

    found: List[str] = []
    for symbol in known:
        symbol = symbol.strip().upper()
        if symbol and symbol not in found and _pattern(symbol).search(text):
            found.append(symbol)
    return found


def select_tickers(
    text: str,
    known: Sequence[str] = KNOWN_TICKERS,
    limit: int = MAX_TICKERS,
) -> List[str]:
    """Return at most *limit* tickers found in *text* (see :func:`extract_tickers`)."""
    return extract_tickers(text, known)[: max(limit, 0)]
