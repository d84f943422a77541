"""TradeGPT Mentor Agent — trading Q&A enriched with live crypto prices."""
from .mentor_agent import (
    ASK_TEMPERATURE,
    QUIZ_TEMPERATURE,
    CompletionResult,
    ask_mentor,
    build_chat_request,
    dispatch_completion,
)

__all__ = [
    "ASK_TEMPERATURE",
    "QUIZ_TEMPERATURE",
    "CompletionResult",
    "ask_mentor",
    "build_chat_request",
    "dispatch_completion",
]
