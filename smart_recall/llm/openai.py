"""OpenAI LLM provider implementation."""

import logging
from typing import Any

import openai
from pydantic import BaseModel

from smart_recall.errors import ModelUnavailableError
from smart_recall.llm.base import GenerationParams, LLMProvider, ResponseResult

logger = logging.getLogger(__name__)


class OpenAIConfig(BaseModel):
    """Configuration for OpenAI provider."""

    api_key: str
    model: str = "gpt-4o-mini"
    temperature: float = 0.7
    top_p: float = 0.8
    max_output_tokens: int = 1024
    timeout: int = 30
    max_retries: int = 0


class OpenAIProvider(LLMProvider):
    """OpenAI LLM provider implementation.

    The chat completions API has no top-k sampling, so ``params.top_k`` is ignored.
    """

    def __init__(self, config: OpenAIConfig | None = None, **kwargs: Any) -> None:
        """Initialize OpenAI provider.

        Args:
            config: OpenAI configuration
            **kwargs: Additional configuration options
        """
        self.config = config or OpenAIConfig(**kwargs)
        self.client = openai.AsyncOpenAI(
            api_key=self.config.api_key,
            timeout=self.config.timeout,
            max_retries=self.config.max_retries,
        )

    async def generate_response(
        self, prompt: str, params: GenerationParams | None = None
    ) -> ResponseResult:
        """Generate response using OpenAI's chat model.

        Args:
            prompt: Fully built instruction prompt
            params: Sampling parameters

        Returns:
            ResponseResult with generated response
        """
        params = params or GenerationParams(
            temperature=self.config.temperature,
            top_p=self.config.top_p,
            max_output_tokens=self.config.max_output_tokens,
        )

        try:
            response = await self.client.chat.completions.create(
                model=self.config.model,
                messages=[{"role": "user", "content": prompt}],
                max_tokens=params.max_output_tokens,
                temperature=params.temperature,
                top_p=params.top_p,
            )
        except openai.OpenAIError as e:
            logger.error(f"OpenAI response request failed: {e}")
            raise ModelUnavailableError(f"OpenAI API error: {e}") from e

        choice = response.choices[0]

        return ResponseResult(
            content=choice.message.content or "",
            model=self.config.model,
            token_count=response.usage.total_tokens if response.usage else None,
            finish_reason=choice.finish_reason,
        )

    async def health_check(self) -> bool:
        """Check if OpenAI service is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            await self.client.models.retrieve(self.config.model)
            return True
        except Exception as e:
            logger.warning(f"OpenAI health check failed: {e}")
            return False

    async def close(self) -> None:
        await self.client.close()
