"""System prompts for the TradeGPT mentor and quiz generator."""

from __future__ import annotations

from typing import Iterable, Optional

PERSONA_RULE = (
    "You are TradeGPT, a concise trading mentor. "
    "Do not give financial advice."
)

STRUCTURE_RULE = (
    "Always structure your answer: "
    "Definition → Price context → Confirmation → Risk → Disclaimer."
)

NO_FABRICATION_RULE = (
    "Never invent dollar figures. Only state prices the user supplied "
    "or the live prices given in this instruction."
)

EXAMPLES_RULE = "Prefer crypto examples (BTC/ETH/SOL) when relevant."

QUIZ_SYSTEM_PROMPT = (
    "You write short multiple-choice trading quizzes. "
    "Reply with a single JSON object and nothing else."
)


def format_live_prices(quotes: Iterable) -> Optional[str]:
    """
    Render known quotes as one clause, e.g. ``Live prices (USD): BTC 65000.00, ETH 3000.50.``

    Returns ``None`` when no quote carries a price.
    """
    parts = [
        f"{quote.symbol} {quote.usd_price:.2f}"
        for quote in quotes
        if quote.usd_price is not None
    ]
    if not parts:
        return None
    return "Live prices (USD): " + ", ".join(parts) + "."


def build_system_prompt(quotes: Iterable = ()) -> str:
    """Compose the mentor system instruction, with the live-price clause when available."""
    fragments = [PERSONA_RULE, STRUCTURE_RULE, NO_FABRICATION_RULE, EXAMPLES_RULE]
    live = format_live_prices(quotes)
    if live:
        fragments.append(live)
    return " ".join(fragments)


def _format_elo(elo: float) -> str:
    return str(int(elo)) if float(elo).is_integer() else f"{elo:g}"


def build_quiz_prompt(elo: float) -> str:
    return (
        f"Create a concise trading quiz JSON tuned for ELO {_format_elo(elo)}.\n"
        "Fields: {type:'mcq'|'image_mcq', img?, q, opts:[A,B,C], a(0-2)}. "
        "img is an image URL and is required only for image_mcq. Keep it short."
    )
