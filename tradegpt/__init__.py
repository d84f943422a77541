"""TradeGPT gateway — trading-mentor prompts and daily quizzes over HTTP."""

__version__ = "1.0.0"
