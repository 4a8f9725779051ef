"""Chat Completion Client - one-shot calls to an OpenAI-compatible endpoint."""

import time
from typing import Any

import httpx

from ..core.logging_config import get_logger
from ..monitoring import metrics_collector
from .config import ModelConfig


logger = get_logger(__name__)


class ModelConfigError(Exception):
    """Model client is not usable with the given configuration."""


class UpstreamError(Exception):
    """The generative model call failed (transport, status or envelope)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ChatCompletionClient:
    """
    Async client for the generative-model collaborator.

    Each ``complete`` call is a single non-streaming POST: no retry, no
    idempotency key and no timeout beyond the transport default. Two calls
    with the same prompt do the work twice and may return different text.
    """

    def __init__(self, config: ModelConfig, http_client: httpx.AsyncClient | None = None) -> None:
        self.config = config
        self._client = http_client or httpx.AsyncClient()
        logger.info("client_init", model=config.model, endpoint=config.endpoint)

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.api_key.get_secret_value()}",
            "Content-Type": "application/json",
        }

    def build_payload(self, system: str, prompt: str, temperature: float) -> dict[str, Any]:
        """Request body: model, system + user messages, sampling parameters."""
        return {
            "model": self.config.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
            "temperature": temperature,
            "max_tokens": self.config.max_tokens,
        }

    async def complete(self, system: str, prompt: str, temperature: float) -> str:
        """
        Run one completion and return the message text.

        Args:
            system: System instruction
            prompt: User prompt
            temperature: Sampling temperature

        Returns:
            Content of the first choice

        Raises:
            ModelConfigError: If no API key is configured
            UpstreamError: On transport failure, non-2xx status or a reply without content
        """
        if not self.config.has_api_key:
            raise ModelConfigError("GROQ_API_KEY is not configured")

        payload = self.build_payload(system, prompt, temperature)
        start_time = time.time()

        try:
            response = await self._client.post(
                self.config.endpoint, json=payload, headers=self._headers()
            )
        except httpx.HTTPError as e:
            metrics_collector.record_llm_call(self.config.model, "transport_error", time.time() - start_time)
            logger.error("llm_transport_error", error=str(e))
            raise UpstreamError(f"Model API request failed: {e}") from e

        duration = time.time() - start_time

        if response.is_error:
            metrics_collector.record_llm_call(self.config.model, "http_error", duration)
            logger.error("llm_http_error", status=response.status_code, body=response.text[:500])
            raise UpstreamError(
                f"Model API error: {response.status_code} - {response.text}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            metrics_collector.record_llm_call(self.config.model, "bad_envelope", duration)
            logger.error("llm_bad_envelope", error=str(e))
            raise UpstreamError("Malformed completion response from model API") from e

        if not isinstance(content, str) or not content.strip():
            metrics_collector.record_llm_call(self.config.model, "empty", duration)
            raise UpstreamError("No content returned from AI")

        metrics_collector.record_llm_call(self.config.model, "success", duration)
        logger.info("llm_complete", model=self.config.model, content_length=len(content), duration_ms=duration * 1000)
        return content

    async def aclose(self) -> None:
        """Close HTTP client"""
        await self._client.aclose()

    async def __aenter__(self) -> "ChatCompletionClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()
