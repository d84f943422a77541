"""Unit tests for tradegpt/core/tickers.py"""
from __future__ import annotations

import pytest

from tradegpt.core.tickers import KNOWN_TICKERS, MAX_TICKERS, extract_tickers, select_tickers


class TestExtractTickers:

    def test_whole_word_match(self):
        assert extract_tickers("What is BTC?") == ["BTC"]

    def test_case_insensitive(self):
        assert extract_tickers("is eth or Sol better for fees") == ["ETH", "SOL"]

    @pytest.mark.parametrize("text", ["BTCX breakout", "BTCUSD chart", "wrapped XBTC", "BTC2 fork"])
    def test_substring_does_not_match(self, text):
        assert "BTC" not in extract_tickers(text)

    @pytest.mark.parametrize("text", ["$BTC pump", "BTC/ETH ratio", "(btc)", "btc?", "long BTC."])
    def test_punctuation_is_a_boundary(self, text):
        assert "BTC" in extract_tickers(text)

    def test_allow_list_order_not_text_order(self):
        assert extract_tickers("DOGE then SOL then BTC") == ["BTC", "SOL", "DOGE"]

    def test_duplicates_collapsed(self):
        assert extract_tickers("BTC btc Btc") == ["BTC"]

    def test_empty_text(self):
        assert extract_tickers("") == []
        assert extract_tickers(None) == []

    def test_unknown_tickers_ignored(self):
        assert extract_tickers("What about XRP and ADA?") == []

    def test_custom_allow_list(self):
        assert extract_tickers("pepe season", known=("PEPE",)) == ["PEPE"]


class TestSelectTickers:

    def test_capped_at_three(self):
        text = " ".join(KNOWN_TICKERS)
        assert select_tickers(text) == list(KNOWN_TICKERS[:MAX_TICKERS])

    def test_fewer_than_cap_returned_as_is(self):
        assert select_tickers("AVAX vs ARB") == ["AVAX", "ARB"]

    def test_cap_keeps_first_matches(self):
        assert select_tickers("ton sui op arb avax") == ["AVAX", "ARB", "OP"]

    def test_custom_limit(self):
        assert select_tickers("BTC ETH SOL", limit=1) == ["BTC"]
        assert select_tickers("BTC ETH SOL", limit=0) == []
