"""OpenAI client initialisation for the TradeGPT mentor."""

from typing import Optional

import httpx
from openai import OpenAI

from tradegpt.config import Settings


def get_client(settings: Settings, http_client: Optional[httpx.Client] = None) -> OpenAI:
    """
    Return an OpenAI client bound to the configured credential and endpoint.

    Retries are disabled: every dispatch is a single upstream attempt.
    """
    if not settings.openai_api_key:
        raise EnvironmentError(
            "OPENAI_API_KEY is not set. "
            "Add it to your environment or to a .env file in the project root."
        )
    return OpenAI(
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
        timeout=settings.openai_timeout,
        max_retries=0,
        http_client=http_client,
    )
