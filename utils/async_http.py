"""Async HTTP client with connection pooling for the LLM endpoint"""
import httpx
from typing import Dict, Any
import logging

from core.config import Settings
from core.exceptions import ModelFailure, ModelTimeout

logger = logging.getLogger(__name__)


def create_http_client(settings: Settings) -> httpx.AsyncClient:
    """Pooled client owned by the application lifespan"""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(
            timeout=settings.llm_timeout_seconds,
            connect=10.0
        ),
        limits=httpx.Limits(
            max_keepalive_connections=20,
            max_connections=100,
            keepalive_expiry=30
        )
    )


async def make_async_post(
    client: httpx.AsyncClient,
    url: str,
    headers: Dict[str, str],
    json_data: Dict[str, Any],
    timeout: float
) -> Dict[str, Any]:
    """Single POST, no retry. Non-2xx, transport errors and non-JSON bodies raise ModelFailure."""
    try:
        response = await client.post(
            url,
            headers=headers,
            json=json_data,
            timeout=timeout
        )
    except httpx.TimeoutException as e:
        logger.error(f"Request timeout after {timeout}s: {str(e)}")
        raise ModelTimeout(f"Diagnostic model timed out after {timeout}s") from e
    except httpx.HTTPError as e:
        logger.error(f"Request failed: {str(e)}")
        raise ModelFailure(f"Diagnostic model request failed: {e}") from e

    if not response.is_success:
        logger.error(f"HTTP error {response.status_code}: {response.text[:500]}")
        raise ModelFailure(f"Diagnostic model API error: {response.status_code}")

    try:
        return response.json()
    except ValueError as e:
        logger.error(f"Response body is not JSON: {response.text[:200]}")
        raise ModelFailure("Diagnostic model returned a non-JSON body") from e
