"""FastAPI server for the TradeGPT gateway."""

import random
import time
from typing import Dict, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from tradegpt.agents.mentor_agent.client import get_client
from tradegpt.agents.mentor_agent.mentor_agent import ask_mentor
from tradegpt.config import Settings, load_settings
from tradegpt.core.errors import (
    MalformedResponseError,
    MissingPromptError,
    TransportFault,
    UpstreamError,
)
from tradegpt.quiz.selector import parse_elo, select_quiz
from tradegpt.tools.price_tools import fetch_price
from tradegpt.utils.logging import get_logger

logger = get_logger(__name__)

_SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Resource-Policy": "same-origin",
}
_BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


# ── Request / Response models ──────────────────────────────────────────────────

class AskRequest(BaseModel):
    prompt: Optional[str] = None
    model: Optional[str] = None  # omit to use OPENAI_MODEL

    model_config = {
        "json_schema_extra": {
            "example": {"prompt": "What is a BTC order block?"}
        }
    }


class AskResponse(BaseModel):
    reply: str
    tokens: Optional[int] = None
    cost: Optional[float] = None  # not computed; always null
    live: Dict[str, Optional[float]] = {}


# ── Dependencies ───────────────────────────────────────────────────────────────

def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_rng(request: Request) -> random.Random:
    return request.app.state.rng


def _error(status_code: int, error: str, detail=None) -> JSONResponse:
    content = {"error": error}
    if detail is not None:
        content["detail"] = detail
    return JSONResponse(status_code=status_code, content=content)


# ── Application factory ────────────────────────────────────────────────────────

def create_app(settings: Optional[Settings] = None, rng: Optional[random.Random] = None) -> FastAPI:
    """
    Build the gateway application.

    Parameters
    ----------
    settings : Settings | None
        Process configuration; resolved from the environment when omitted.
    rng : random.Random | None
        Randomness source for static quiz picks; seed it for deterministic tests.
    """
    settings = settings or load_settings()

    app = FastAPI(
        title="TradeGPT API",
        description=(
            "Gateway between the TradeGPT front-end and the completion API. "
            "Trading education only — not financial advice."
        ),
        version="1.0.0",
    )
    app.state.settings = settings
    app.state.rng = rng or random.Random()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.allowed_origins) or ["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_hygiene(request: Request, call_next):
        """Body-size limit, security headers and one access-log line per request."""
        started = time.perf_counter()
        length = request.headers.get("content-length")
        if length and length.isdigit():
            too_large = int(length) > settings.max_body_bytes
        elif request.method in _BODY_METHODS:
            # Chunked upload: the size is only known once the body is read.
            # Starlette replays the buffered body to the route.
            too_large = len(await request.body()) > settings.max_body_bytes
        else:
            too_large = False
        if too_large:
            response = _error(413, "Payload too large")
        else:
            response = await call_next(request)
        for header, value in _SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        logger.info(
            "%s %s %s %.1fms",
            request.method, request.url.path, response.status_code,
            (time.perf_counter() - started) * 1000,
        )
        return response

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info("Rejected %s %s: invalid body", request.method, request.url.path)
        return _error(400, "Invalid request body", jsonable_encoder(exc.errors()))

    _register_routes(app)
    logger.info(
        "TradeGPT app ready (model=%s, quiz_mode=%s, origins=%s)",
        settings.openai_model, settings.quiz_mode, ",".join(settings.allowed_origins) or "*",
    )
    return app


# ── Routes ─────────────────────────────────────────────────────────────────────

def _register_routes(app: FastAPI) -> None:

    @app.get("/health", summary="Health check")
    def health_check() -> dict:
        """Returns 200 OK when the service is running."""
        return {"ok": True}

    @app.post("/api/tradegpt/ask", response_model=AskResponse, summary="Ask the trading mentor")
    def ask(
        body: Optional[AskRequest] = None,
        settings: Settings = Depends(get_settings),
    ):
        """
        Forward a trading question to the completion API.

        Known crypto tickers in the prompt (at most three) get their live USD
        price injected into the system instruction and echoed back in ``live``.
        """
        prompt = body.prompt if body else None
        try:
            result = ask_mentor(
                prompt,
                settings,
                model=body.model if body else None,
                client_factory=get_client,
                fetcher=fetch_price,
            )
        except MissingPromptError:
            logger.info("POST /ask rejected: missing prompt")
            return _error(400, "Missing prompt")
        except TransportFault as exc:
            logger.error("POST /ask transport fault: %s", exc.description)
            return _error(502, "OpenAI error", exc.detail)
        except MalformedResponseError as exc:
            logger.warning("POST /ask malformed upstream body: %.200s", exc.detail)
            return _error(502, "OpenAI error", exc.detail)
        except UpstreamError as exc:
            logger.warning("POST /ask upstream HTTP %s", exc.status_code)
            return _error(502, "OpenAI error", exc.detail)
        except Exception as exc:
            logger.error("Error processing ask: %s", exc, exc_info=True)
            return _error(500, "Server error", str(exc))

        return AskResponse(
            reply=result.reply_text,
            tokens=result.token_count,
            cost=None,
            live=result.live_prices(),
        )

    @app.get("/api/tradegpt/quiz", summary="Daily adaptive quiz item")
    def quiz(
        elo: Optional[str] = None,
        settings: Settings = Depends(get_settings),
        rng: random.Random = Depends(get_rng),
    ):
        """
        Return one quiz item ``{type, q, opts, a}`` (plus ``img`` for image items).

        ``elo`` tunes generated quizzes (default 1200); static mode ignores it.
        """
        try:
            return select_quiz(parse_elo(elo), settings, rng, client_factory=get_client)
        except Exception as exc:
            logger.error("Error selecting quiz: %s", exc, exc_info=True)
            return _error(500, "Server error", str(exc))


app = create_app()
