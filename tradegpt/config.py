"""Process-wide configuration for the TradeGPT gateway.

Values are resolved once at startup, in increasing priority:

  1. built-in defaults
  2. optional ``config.yaml`` (project root, or the path in ``TRADEGPT_CONFIG``)
  3. environment variables (``.env`` is loaded first via python-dotenv)

The resulting :class:`Settings` object is passed explicitly to every
component that needs it; nothing below ``tradegpt.web_app`` reads the
environment on its own.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Mapping, Optional, Tuple

import yaml
from dotenv import load_dotenv

from tradegpt.utils.logging import get_logger

logger = get_logger(__name__)

_DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[1] / "config.yaml"

QUIZ_MODES = ("static", "llm")

DEFAULT_PORT = 10000
DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_OPENAI_TIMEOUT = 30.0
DEFAULT_PRICE_API_URL = "https://api.binance.com/api/v3/ticker/price"
DEFAULT_PRICE_TIMEOUT = 5.0
DEFAULT_MAX_BODY_BYTES = 1024 * 1024


def parse_origins(raw: Optional[str]) -> Tuple[str, ...]:
    """Split a comma-separated origin list, dropping blanks."""
    if not raw:
        return ()
    return tuple(part.strip() for part in str(raw).split(",") if part.strip())


def _load_yaml(path: Path) -> dict:
    if path.exists():
        with open(path, "r") as f:
            return yaml.safe_load(f) or {}
    return {}


def _as_float(name: str, value, default: float) -> float:
    try:
        result = float(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring non-numeric %s=%r; using %s", name, value, default)
        return default
    if not math.isfinite(result) or result <= 0:
        logger.warning("Ignoring out-of-range %s=%r; using %s", name, value, default)
        return default
    return result


def _as_int(name: str, value, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring non-integer %s=%r; using %s", name, value, default)
        return default


@dataclass(frozen=True)
class Settings:
    port: int = DEFAULT_PORT
    allowed_origins: Tuple[str, ...] = ()
    openai_model: str = DEFAULT_MODEL
    openai_api_key: Optional[str] = None
    openai_base_url: Optional[str] = None
    openai_timeout: float = DEFAULT_OPENAI_TIMEOUT
    quiz_mode: str = "static"
    price_api_url: str = DEFAULT_PRICE_API_URL
    price_timeout: float = DEFAULT_PRICE_TIMEOUT
    log_level: str = "INFO"
    max_body_bytes: int = DEFAULT_MAX_BODY_BYTES

    @property
    def generative_quiz(self) -> bool:
        return self.quiz_mode == "llm"

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        config_path: Optional[Path] = None,
    ) -> "Settings":
        """
        Build settings from YAML defaults overlaid with environment variables.

        Parameters
        ----------
        environ : Mapping[str, str] | None
            Variables to read; defaults to ``os.environ`` after loading ``.env``.
        config_path : Path | None
            YAML file to read; defaults to ``TRADEGPT_CONFIG`` or ``config.yaml``
            at the project root. A missing file is not an error.
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        if config_path is None:
            config_path = Path(environ.get("TRADEGPT_CONFIG") or _DEFAULT_CONFIG_PATH)
        config = _load_yaml(Path(config_path))
        openai_cfg = config.get("openai", {}) or {}
        server_cfg = config.get("server", {}) or {}
        quiz_cfg = config.get("quiz", {}) or {}
        prices_cfg = config.get("prices", {}) or {}

        def pick(env_key: str, section: dict, yaml_key: str, default):
            if environ.get(env_key) not in (None, ""):
                return environ[env_key]
            return section.get(yaml_key, default)

        quiz_mode = str(pick("QUIZ_MODE", quiz_cfg, "mode", "static")).strip().lower()
        if quiz_mode not in QUIZ_MODES:
            logger.warning("Unknown QUIZ_MODE=%r; falling back to 'static'", quiz_mode)
            quiz_mode = "static"

        origins = pick("ALLOW_ORIGIN", server_cfg, "allow_origin", "")
        if isinstance(origins, (list, tuple)):
            origins = ",".join(str(o) for o in origins)

        return cls(
            port=_as_int("PORT", pick("PORT", server_cfg, "port", DEFAULT_PORT), DEFAULT_PORT),
            allowed_origins=parse_origins(origins),
            openai_model=str(pick("OPENAI_MODEL", openai_cfg, "model", DEFAULT_MODEL)),
            openai_api_key=environ.get("OPENAI_API_KEY") or None,
            openai_base_url=pick("OPENAI_BASE_URL", openai_cfg, "base_url", None) or None,
            openai_timeout=_as_float(
                "OPENAI_TIMEOUT",
                pick("OPENAI_TIMEOUT", openai_cfg, "timeout", DEFAULT_OPENAI_TIMEOUT),
                DEFAULT_OPENAI_TIMEOUT,
            ),
            quiz_mode=quiz_mode,
            price_api_url=str(pick("PRICE_API_URL", prices_cfg, "api_url", DEFAULT_PRICE_API_URL)),
            price_timeout=_as_float(
                "PRICE_TIMEOUT",
                pick("PRICE_TIMEOUT", prices_cfg, "timeout", DEFAULT_PRICE_TIMEOUT),
                DEFAULT_PRICE_TIMEOUT,
            ),
            log_level=str(pick("LOG_LEVEL", server_cfg, "log_level", "INFO")).upper(),
            max_body_bytes=_as_int(
                "MAX_BODY_BYTES",
                pick("MAX_BODY_BYTES", server_cfg, "max_body_bytes", DEFAULT_MAX_BODY_BYTES),
                DEFAULT_MAX_BODY_BYTES,
            ),
        )


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Return the process-wide settings, resolved on first use."""
    return Settings.from_env()
