"""
LangSmith tracing helper.

Set these variables in .env to enable tracing:
    LANGCHAIN_TRACING_V2=true
    LANGCHAIN_API_KEY=ls__...
    LANGCHAIN_PROJECT=tradegpt   (optional)

When tracing is not enabled, ``traceable`` returns the decorated function
unchanged, so the ask and quiz pipelines run identically with or without it.
"""

from __future__ import annotations

import os
from typing import Any, Callable, TypeVar

from tradegpt.utils.logging import get_logger

logger = get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def tracing_enabled() -> bool:
    return (
        os.getenv("LANGCHAIN_TRACING_V2", "").lower() in ("true", "1", "yes")
        and bool(os.getenv("LANGCHAIN_API_KEY", "").strip())
    )


def traceable(
    name: str | None = None,
    run_type: str = "chain",
    tags: list[str] | None = None,
) -> Callable[[F], F]:
    """
    Decorator that wraps a function with LangSmith tracing.

    Parameters
    ----------
    name : str | None
        Display name in the LangSmith UI (defaults to the function name).
    run_type : str
        One of "chain", "llm", "tool", "retriever" (default "chain").
    tags : list[str] | None
        Optional list of tags visible in the LangSmith UI.
    """
    def decorator(func: F) -> F:
        if not tracing_enabled():
            return func

        from langsmith import traceable as ls_traceable  # noqa: PLC0415

        logger.info(
            "LangSmith tracing '%s' into project %s",
            name or func.__name__,
            os.getenv("LANGCHAIN_PROJECT", "tradegpt"),
        )
        return ls_traceable(  # type: ignore[return-value]
            run_type=run_type,
            name=name or func.__name__,
            tags=tags or [],
        )(func)

    return decorator
