"""
Tools package — outbound data sources used to enrich prompts.

    price_tools   Live USD spot prices for crypto tickers
"""

from .price_tools import PriceQuote, fetch_price, get_live_quotes, trading_pair

__all__ = ["PriceQuote", "fetch_price", "get_live_quotes", "trading_pair"]
