"""Async client for a local Ollama server's /api/generate endpoint."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from tailorkit.errors import ModelServerError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:11434"
DEFAULT_MODEL = "llama3"


@dataclass
class LLMResponse:
    """Response from the model server including usage metadata."""

    text: str
    input_tokens: int
    output_tokens: int


class OllamaClient:
    """Single-shot, non-streaming completions. Failed calls are not retried."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        model: str = DEFAULT_MODEL,
        timeout: float | None = 120.0,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.model = model
        kwargs: dict = {"base_url": self.base_url, "timeout": timeout}
        if transport is not None:
            kwargs["transport"] = transport
        self.client = httpx.AsyncClient(**kwargs)

    async def __aenter__(self) -> OllamaClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    async def generate(
        self,
        prompt: str,
        *,
        temperature: float = 0.7,
        model: str | None = None,
    ) -> LLMResponse:
        """Send a prompt and return the raw completion text with usage."""
        model = model or self.model
        body = {
            "model": model,
            "prompt": prompt,
            "stream": False,
            "temperature": temperature,
            "options": {"temperature": temperature},
        }
        logger.debug("Ollama call: model=%s, prompt=%d chars", model, len(prompt))
        try:
            response = await self.client.post("/api/generate", json=body)
        except httpx.HTTPError as e:
            logger.error("Ollama request to %s failed: %s", self.base_url, e)
            raise ModelServerError(f"Ollama request failed: {e}") from e

        if response.is_error:
            logger.error("Ollama returned %d: %s", response.status_code, response.text[:200])
            raise ModelServerError(f"Ollama request failed: {response.text}")

        try:
            data = response.json()
        except ValueError as e:
            raise ModelServerError("Ollama returned a non-JSON body") from e

        text = data.get("response") if isinstance(data, dict) else None
        if not isinstance(text, str):
            raise ModelServerError("Ollama response is missing the 'response' field")

        input_tokens = int(data.get("prompt_eval_count") or 0)
        output_tokens = int(data.get("eval_count") or 0)
        logger.debug("Ollama response: %d input, %d output tokens", input_tokens, output_tokens)
        return LLMResponse(
            text=text.strip(),
            input_tokens=input_tokens,
            output_tokens=output_tokens,
        )
