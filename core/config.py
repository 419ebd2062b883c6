"""
Application settings loaded once from the environment.

The settings object is built at start-up and handed to the Supabase client,
the LLM client and the assessment service. Nothing reads os.environ while a
request is being served.
"""
import os
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_LLM_API_URL = "https://api.openai.com/v1/chat/completions"
DEFAULT_LLM_MODEL = "gpt-4.1-2025-04-14"


class Settings(BaseModel):
    """Process-wide configuration for the ai-diagnose backend"""

    model_config = ConfigDict(frozen=True)

    supabase_url: str
    supabase_service_key: str
    supabase_anon_key: str

    llm_api_key: str
    llm_api_url: str = DEFAULT_LLM_API_URL
    llm_model: str = DEFAULT_LLM_MODEL
    llm_max_completion_tokens: int = Field(default=1000, gt=0)
    llm_timeout_seconds: float = Field(default=60.0, gt=0.0)

    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    port: int = 8000

    @field_validator("supabase_url", "supabase_service_key", "supabase_anon_key", "llm_api_key")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must be set in the environment or .env file")
        return v.strip()

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, v):
        return v.upper() if isinstance(v, str) else v


def _first_env(*names: str) -> Optional[str]:
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return None


def load_settings() -> Settings:
    """Build Settings from the environment (and .env, if present)"""
    load_dotenv()

    service_key = _first_env("SUPABASE_SERVICE_KEY", "SUPABASE_SERVICE_ROLE_KEY") or ""
    values = {
        "supabase_url": os.getenv("SUPABASE_URL", ""),
        "supabase_service_key": service_key,
        "supabase_anon_key": os.getenv("SUPABASE_ANON_KEY") or service_key,
        "llm_api_key": _first_env("OPENAI_API_KEY", "OPENROUTER_API_KEY") or "",
        "llm_api_url": os.getenv("LLM_API_URL", DEFAULT_LLM_API_URL),
        "llm_model": os.getenv("LLM_MODEL", DEFAULT_LLM_MODEL),
        "environment": os.getenv("ENVIRONMENT", "development"),
        "log_level": os.getenv("LOG_LEVEL", "INFO"),
    }

    # Optional numerics are only passed when present so model defaults apply
    for env_name, field in (
        ("LLM_MAX_COMPLETION_TOKENS", "llm_max_completion_tokens"),
        ("LLM_TIMEOUT_SECONDS", "llm_timeout_seconds"),
        ("PORT", "port"),
    ):
        raw = os.getenv(env_name)
        if raw:
            values[field] = raw

    return Settings(**values)
