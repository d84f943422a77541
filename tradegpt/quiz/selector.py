"""
Quiz selection for the daily adaptive quiz.

Two modes, chosen by ``Settings.quiz_mode``:

  static   uniform random pick from ``QUIZ_BANK`` (default)
  llm      one generated item tuned to the player's ELO, falling back to
           the static pick on any upstream, transport or parse failure
"""

from __future__ import annotations

import json
import math
import random
import re
from typing import Callable, Optional, Sequence

from openai import OpenAI
from pydantic import ValidationError

from tradegpt.agents.mentor_agent.mentor_agent import (
    QUIZ_TEMPERATURE,
    build_chat_request,
    dispatch_completion,
)
from tradegpt.agents.mentor_agent.prompts import QUIZ_SYSTEM_PROMPT, build_quiz_prompt
from tradegpt.config import Settings
from tradegpt.core.errors import QuizParseFault, UpstreamError
from tradegpt.utils.logging import get_logger
from tradegpt.utils.tracing import traceable
from .quiz_bank import QUIZ_BANK, QuizItem

logger = get_logger(__name__)

DEFAULT_ELO = 1200.0

_JSON_OBJECT = re.compile(r"\{.*\}", re.S)


def parse_elo(raw: Optional[str]) -> float:
    """Return *raw* as a finite number, or ``DEFAULT_ELO`` when absent or unusable."""
    if raw is None or not str(raw).strip():
        return DEFAULT_ELO
    try:
        elo = float(raw)
    except (TypeError, ValueError):
        return DEFAULT_ELO
    return elo if math.isfinite(elo) else DEFAULT_ELO


def pick_static(rng: random.Random, bank: Sequence[QuizItem] = QUIZ_BANK) -> dict:
    """Pick one bank item uniformly at random."""
    if not bank:
        raise ValueError("quiz bank is empty")
    return bank[rng.randrange(len(bank))].to_wire()


def parse_quiz_item(text: str) -> dict:
    """
    Parse a model reply into a single validated quiz item.

    Accepts bare JSON or the first ``{...}`` span of the reply (e.g. inside a
    code fence). Raises ``QuizParseFault`` for anything else, including
    items whose answer index does not fit the options.
    """
    if not text or not text.strip():
        raise QuizParseFault("empty quiz reply")
    try:
        payload = json.loads(text)
    except ValueError:
        match = _JSON_OBJECT.search(text)
        if not match:
            raise QuizParseFault("quiz reply is not JSON") from None
        try:
            payload = json.loads(match.group(0))
        except ValueError as exc:
            raise QuizParseFault(f"quiz reply is not JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise QuizParseFault(f"quiz reply is a JSON {type(payload).__name__}, not an object")
    try:
        return QuizItem.model_validate(payload).to_wire()
    except ValidationError as exc:
        raise QuizParseFault(f"quiz item failed validation: {exc.error_count()} error(s)") from exc


@traceable(name="quiz_generate", run_type="chain", tags=["tradegpt", "quiz"])
def generate_quiz(elo: float, settings: Settings, client: OpenAI) -> dict:
    """Generate one quiz item for *elo*; upstream and parse failures propagate."""
    request = build_chat_request(
        system=QUIZ_SYSTEM_PROMPT,
        prompt=build_quiz_prompt(elo),
        model=settings.openai_model,
        temperature=QUIZ_TEMPERATURE,
    )
    result = dispatch_completion(client, request)
    return parse_quiz_item(result.reply_text)


def select_quiz(
    elo: float,
    settings: Settings,
    rng: random.Random,
    client_factory: Callable[[Settings], OpenAI],
) -> dict:
    """Return one quiz item according to the configured quiz mode."""
    if settings.generative_quiz:
        try:
            item = generate_quiz(elo, settings, client_factory(settings))
            logger.info("Serving generated quiz item (elo=%s)", elo)
            return item
        except QuizParseFault as exc:
            logger.warning("Generated quiz unusable, using bank: %s", exc)
        except UpstreamError as exc:
            logger.warning("Quiz generation upstream failure, using bank: %s", exc)
        except EnvironmentError as exc:
            logger.warning("Quiz generation not configured, using bank: %s", exc)

    return pick_static(rng)
