"""Anthropic Claude LLM provider implementation."""

import logging
from typing import Any

import anthropic
from pydantic import BaseModel

from smart_recall.errors import ModelUnavailableError
from smart_recall.llm.base import GenerationParams, LLMProvider, ResponseResult

logger = logging.getLogger(__name__)


class AnthropicConfig(BaseModel):
    """Configuration for Anthropic provider."""

    api_key: str
    model: str = "claude-3-5-haiku-20241022"
    temperature: float = 0.7
    top_p: float = 0.8
    top_k: int = 40
    max_output_tokens: int = 1024
    timeout: int = 30
    max_retries: int = 0


class AnthropicProvider(LLMProvider):
    """Anthropic Claude LLM provider implementation."""

    def __init__(self, config: AnthropicConfig | None = None, **kwargs: Any) -> None:
        """Initialize Anthropic provider.

        Args:
            config: Anthropic configuration
            **kwargs: Additional configuration options
        """
        self.config = config or AnthropicConfig(**kwargs)
        self.client = anthropic.AsyncAnthropic(
            api_key=self.config.api_key,
            timeout=self.config.timeout,
            max_retries=self.config.max_retries,
        )

    async def generate_response(
        self, prompt: str, params: GenerationParams | None = None
    ) -> ResponseResult:
        """Generate response using Anthropic's Claude model.

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
            response = await self.client.messages.create(
                model=self.config.model,
                max_tokens=params.max_output_tokens,
                temperature=params.temperature,
                top_p=params.top_p,
                top_k=params.top_k,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.AnthropicError as e:
            logger.error(f"Anthropic response request failed: {e}")
            raise ModelUnavailableError(f"Anthropic API error: {e}") from e

        # Anthropic returns content as a list of blocks
        content = ""
        for block in response.content:
            if block.type == "text":
                content += block.text

        return ResponseResult(
            content=content,
            model=self.config.model,
            token_count=response.usage.output_tokens + response.usage.input_tokens,
            finish_reason=response.stop_reason,
        )

    async def health_check(self) -> bool:
        """Check if Anthropic service is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            await self.client.models.retrieve(self.config.model)
            return True
        except Exception as e:
            logger.warning(f"Anthropic health check failed: {e}")
            return False

    async def close(self) -> None:
        await self.client.close()
