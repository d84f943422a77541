"""Unit tests for tradegpt/config.py"""
from __future__ import annotations

from tradegpt.config import (
    DEFAULT_MODEL,
    DEFAULT_PRICE_API_URL,
    Settings,
    parse_origins,
)


class TestParseOrigins:

    def test_empty(self):
        assert parse_origins("") == ()
        assert parse_origins(None) == ()

    def test_strips_and_drops_blanks(self):
        assert parse_origins(" https://a.app , ,https://b.app,") == ("https://a.app", "https://b.app")


class TestSettingsFromEnv:

    def test_defaults(self, tmp_path):
        s = Settings.from_env(environ={}, config_path=tmp_path / "missing.yaml")
        assert s.port == 10000
        assert s.allowed_origins == ()
        assert s.openai_model == DEFAULT_MODEL == "gpt-4o-mini"
        assert s.openai_api_key is None
        assert s.quiz_mode == "static"
        assert not s.generative_quiz
        assert s.price_api_url == DEFAULT_PRICE_API_URL
        assert s.max_body_bytes == 1024 * 1024

    def test_environment_values(self, tmp_path):
        env = {
            "PORT": "8080",
            "ALLOW_ORIGIN": "https://tradegpt.app,https://staging.tradegpt.app",
            "OPENAI_MODEL": "gpt-4.1-mini",
            "OPENAI_API_KEY": "sk-live",
            "QUIZ_MODE": "LLM",
            "OPENAI_TIMEOUT": "12.5",
        }
        s = Settings.from_env(environ=env, config_path=tmp_path / "missing.yaml")
        assert s.port == 8080
        assert s.allowed_origins == ("https://tradegpt.app", "https://staging.tradegpt.app")
        assert s.openai_model == "gpt-4.1-mini"
        assert s.openai_api_key == "sk-live"
        assert s.generative_quiz
        assert s.openai_timeout == 12.5

    def test_unknown_quiz_mode_falls_back_to_static(self, tmp_path):
        s = Settings.from_env(environ={"QUIZ_MODE": "dynamic"}, config_path=tmp_path / "missing.yaml")
        assert s.quiz_mode == "static"

    def test_bad_numbers_use_defaults(self, tmp_path):
        env = {"PORT": "eighty", "PRICE_TIMEOUT": "-1", "OPENAI_TIMEOUT": "soon"}
        s = Settings.from_env(environ=env, config_path=tmp_path / "missing.yaml")
        assert s.port == 10000
        assert s.price_timeout == 5.0
        assert s.openai_timeout == 30.0

    def test_yaml_defaults_overridden_by_env(self, tmp_path):
        cfg = tmp_path / "config.yaml"
        cfg.write_text(
            "openai:\n  model: gpt-4o\n  timeout: 20\n"
            "server:\n  port: 9000\n  allow_origin: [https://x.app, https://y.app]\n"
            "quiz:\n  mode: llm\n"
        )
        s = Settings.from_env(environ={"OPENAI_MODEL": "gpt-4.1"}, config_path=cfg)
        assert s.openai_model == "gpt-4.1"
        assert s.openai_timeout == 20.0
        assert s.port == 9000
        assert s.allowed_origins == ("https://x.app", "https://y.app")
        assert s.quiz_mode == "llm"

    def test_config_path_from_environment(self, tmp_path):
        cfg = tmp_path / "alt.yaml"
        cfg.write_text("prices:\n  api_url: https://prices.example/ticker\n")
        s = Settings.from_env(environ={"TRADEGPT_CONFIG": str(cfg)})
        assert s.price_api_url == "https://prices.example/ticker"
