import logging
from typing import List, Dict, Any

import httpx
from pydantic import ValidationError

from core.config import Settings
from core.exceptions import ModelFailure
from models.records import ModelDiagnosis
from utils.async_http import make_async_post
from utils.json_parser import extract_json_from_response

logger = logging.getLogger(__name__)


async def call_llm(
    http_client: httpx.AsyncClient,
    settings: Settings,
    messages: List[Dict[str, str]],
    json_mode: bool = True
) -> str:
    """Call the chat-completions endpoint once and return the message content"""
    request_params: Dict[str, Any] = {
        "model": settings.llm_model,
        "messages": messages,
        "max_completion_tokens": settings.llm_max_completion_tokens,
    }
    if json_mode:
        request_params["response_format"] = {"type": "json_object"}

    headers = {
        "Authorization": f"Bearer {settings.llm_api_key}",
        "Content-Type": "application/json"
    }

    data = await make_async_post(
        http_client,
        url=settings.llm_api_url,
        headers=headers,
        json_data=request_params,
        timeout=settings.llm_timeout_seconds
    )

    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        logger.error(f"Unexpected completion shape: {str(data)[:300]}")
        raise ModelFailure("Diagnostic model returned no message content") from e

    if not isinstance(content, str) or not content.strip():
        raise ModelFailure("Diagnostic model returned empty content")
    return content.strip()


def parse_diagnosis(content: str) -> ModelDiagnosis:
    """Validate model output against the required diagnosis shape"""
    parsed = extract_json_from_response(content)
    if not isinstance(parsed, dict):
        logger.error(f"Could not extract JSON object from model output: {content[:200]}")
        raise ModelFailure("Diagnostic model response was not valid JSON")

    try:
        return ModelDiagnosis(**parsed)
    except ValidationError as e:
        logger.error(f"Model output failed validation: {e}")
        raise ModelFailure("Diagnostic model response did not match the expected format") from e


class LLMDiagnosticModel:
    """Diagnostic model backed by an OpenAI-compatible chat-completions API"""

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient):
        self.settings = settings
        self.http_client = http_client

    async def diagnose(self, messages: List[Dict[str, str]]) -> ModelDiagnosis:
        logger.info(f"Sending request to {self.settings.llm_model}...")
        content = await call_llm(self.http_client, self.settings, messages)
        return parse_diagnosis(content)
