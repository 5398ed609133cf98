"""Ollama LLM provider implementation."""

import logging
from typing import Any

import httpx
from pydantic import BaseModel

from smart_recall.errors import ModelUnavailableError
from smart_recall.llm.base import GenerationParams, LLMProvider, ResponseResult

logger = logging.getLogger(__name__)


class OllamaConfig(BaseModel):
    """Configuration for Ollama provider."""

    host: str = "http://localhost:11434"
    model: str = "llama3.2"
    temperature: float = 0.7
    top_p: float = 0.8
    top_k: int = 40
    max_output_tokens: int = 1024
    timeout: int = 180


class OllamaProvider(LLMProvider):
    """Ollama LLM provider implementation."""

    def __init__(
        self,
        config: OllamaConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize Ollama provider.

        Args:
            config: Ollama configuration
            transport: Optional httpx transport, used to stub the server in tests
            **kwargs: Additional configuration options
        """
        self.config = config or OllamaConfig(**kwargs)
        self.client = httpx.AsyncClient(
            base_url=self.config.host,
            timeout=self.config.timeout,
            transport=transport,
        )

    async def generate_response(
        self, prompt: str, params: GenerationParams | None = None
    ) -> ResponseResult:
        """Generate response using Ollama's generate endpoint.

        Args:
            prompt: Fully built instruction prompt
            params: Sampling parameters

        Returns:
            ResponseResult with generated response
        """
        params = params or GenerationParams(
            temperature=self.config.temperature,
            top_p=self.config.top_p,
            top_k=self.config.top_k,
            max_output_tokens=self.config.max_output_tokens,
        )

        try:
            logger.debug(f"Sending request to Ollama with model: {self.config.model}")
            logger.debug(f"Prompt length: {len(prompt)} characters")

            response = await self.client.post(
                "/api/generate",
                json={
                    "model": self.config.model,
                    "prompt": prompt,
                    "stream": False,
                    "options": {
                        "temperature": params.temperature,
                        "top_p": params.top_p,
                        "top_k": params.top_k,
                        "num_predict": params.max_output_tokens,
                    },
                },
            )
            response.raise_for_status()
            data = response.json()

        except httpx.TimeoutException as e:
            logger.error(f"Ollama request timed out after {self.config.timeout}s: {e}")
            raise ModelUnavailableError(f"Ollama request timed out: {e}") from e
        except httpx.HTTPStatusError as e:
            logger.error(f"Ollama response HTTP error: {e}")
            logger.error(f"Status: {e.response.status_code}")
            logger.error(f"Response text: {e.response.text}")
            raise ModelUnavailableError(f"Ollama API error: {e.response.status_code}") from e
        except httpx.RequestError as e:
            logger.error(f"Ollama response request failed: {e}")
            logger.error(f"Model: {self.config.model}, Host: {self.config.host}")
            raise ModelUnavailableError(f"Failed to reach Ollama: {e}") from e

        return ResponseResult(
            content=data.get("response", ""),
            model=self.config.model,
            token_count=data.get("eval_count"),
            finish_reason=data.get("done_reason"),
        )

    async def health_check(self) -> bool:
        """Check if Ollama service is healthy.

        Returns:
            True if healthy, False otherwise
        """
        try:
            response = await self.client.get("/api/tags")
            return response.status_code == 200
        except Exception as e:
            logger.warning(f"Ollama health check failed: {e}")
            return False

    async def close(self) -> None:
        await self.client.aclose()
