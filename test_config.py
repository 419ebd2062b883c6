"""
Tests for `core/config.py`.

Covers required variables, key fallbacks, numeric overrides and
log level coercion.
"""
import pytest
from pydantic import ValidationError

import core.config
from core.config import DEFAULT_LLM_MODEL, Settings, load_settings

ENV_VARS = (
    "SUPABASE_URL", "SUPABASE_SERVICE_KEY", "SUPABASE_SERVICE_ROLE_KEY", "SUPABASE_ANON_KEY",
    "OPENAI_API_KEY", "OPENROUTER_API_KEY", "LLM_API_URL", "LLM_MODEL",
    "LLM_MAX_COMPLETION_TOKENS", "LLM_TIMEOUT_SECONDS", "LOG_LEVEL", "PORT", "ENVIRONMENT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # Keep a developer's .env out of these tests
    monkeypatch.setattr(core.config, "load_dotenv", lambda: False)


def _set_minimal_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SUPABASE_URL", "https://project.supabase.co")
    monkeypatch.setenv("SUPABASE_SERVICE_KEY", "service-key")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-openai")


def test_defaults(monkeypatch):
    _set_minimal_env(monkeypatch)

    settings = load_settings()

    assert settings.supabase_anon_key == "service-key"
    assert settings.llm_model == DEFAULT_LLM_MODEL
    assert settings.llm_max_completion_tokens == 1000
    assert settings.llm_timeout_seconds == 60.0
    assert settings.log_level == "INFO"
    assert settings.port == 8000


def test_overrides_and_aliases(monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", "https://project.supabase.co")
    monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "role-key")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "anon-key")
    monkeypatch.setenv("OPENROUTER_API_KEY", "sk-or")
    monkeypatch.setenv("LLM_API_URL", "https://openrouter.ai/api/v1/chat/completions")
    monkeypatch.setenv("LLM_TIMEOUT_SECONDS", "12.5")
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = load_settings()

    assert settings.supabase_service_key == "role-key"
    assert settings.supabase_anon_key == "anon-key"
    assert settings.llm_api_key == "sk-or"
    assert settings.llm_api_url.startswith("https://openrouter.ai")
    assert settings.llm_timeout_seconds == 12.5
    assert settings.port == 9000
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("missing", ["SUPABASE_URL", "SUPABASE_SERVICE_KEY", "OPENAI_API_KEY"])
def test_missing_required_value_fails_fast(monkeypatch, missing):
    _set_minimal_env(monkeypatch)
    monkeypatch.delenv(missing)

    with pytest.raises(ValidationError):
        load_settings()


def test_settings_are_immutable(monkeypatch):
    _set_minimal_env(monkeypatch)
    settings = load_settings()

    with pytest.raises(ValidationError):
        settings.llm_model = "other"


def test_timeout_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(
            supabase_url="u", supabase_service_key="k", supabase_anon_key="a",
            llm_api_key="sk", llm_timeout_seconds=0,
        )
