"""Google Gemini LLM provider implementation."""

import logging
from typing import Any

import google.generativeai as genai
from pydantic import BaseModel

from smart_recall.errors import ModelUnavailableError
from smart_recall.llm.base import GenerationParams, LLMProvider, ResponseResult

logger = logging.getLogger(__name__)

NO_RESPONSE_TEXT = "No response generated"


class GeminiConfig(BaseModel):
    """Configuration for Gemini provider."""

    api_key: str
    model: str = "gemini-1.5-flash"
    temperature: float = 0.7
    top_p: float = 0.8
    top_k: int = 40
    max_output_tokens: int = 1024
    timeout: int = 30


class GeminiProvider(LLMProvider):
    """Google Gemini LLM provider implementation."""

    def __init__(self, config: GeminiConfig | None = None, **kwargs: Any) -> None:
        """Initialize Gemini provider.

        Args:
            config: Gemini configuration
            **kwargs: Additional configuration options
        """
        self.config = config or GeminiConfig(**kwargs)
        genai.configure(api_key=self.config.api_key)
        self.model = genai.GenerativeModel(self.config.model)

    def _default_params(self) -> GenerationParams:
        return GenerationParams(
            temperature=self.config.temperature,
            top_p=self.config.top_p,
            top_k=self.config.top_k,
            max_output_tokens=self.config.max_output_tokens,
        )

    async def generate_response(
        self, prompt: str, params: GenerationParams | None = None
    ) -> ResponseResult:
        """Generate response using Gemini's generateContent endpoint.

        Args:
            prompt: Fully built instruction prompt
            params: Sampling parameters

        Returns:
            ResponseResult with generated response
        """
        params = params or self._default_params()

        # retry=None turns off the SDK's default retry on 503s
        try:
            response = await self.model.generate_content_async(
                prompt,
                generation_config=genai.types.GenerationConfig(
                    temperature=params.temperature,
                    top_p=params.top_p,
                    top_k=params.top_k,
                    max_output_tokens=params.max_output_tokens,
                ),
                request_options={"timeout": self.config.timeout, "retry": None},
            )
        except Exception as e:
            logger.error(f"Gemini response request failed: {e}")
            raise ModelUnavailableError(f"Gemini API error: {e}") from e

        candidates = getattr(response, "candidates", None) or []
        finish_reason = None
        if candidates and getattr(candidates[0], "finish_reason", None) is not None:
            finish_reason = getattr(candidates[0].finish_reason, "name", str(candidates[0].finish_reason))

        usage = getattr(response, "usage_metadata", None)

        return ResponseResult(
            content=self._extract_text(candidates) or NO_RESPONSE_TEXT,
            model=self.config.model,
            token_count=usage.total_token_count if usage else None,
            finish_reason=finish_reason,
        )

    @staticmethod
    def _extract_text(candidates: list[Any]) -> str:
        """Return the text of the first part of the first candidate, if any."""
        if not candidates:
            return ""
        content = getattr(candidates[0], "content", None)
        parts = getattr(content, "parts", None) or []
        if not parts:
            return ""
        return getattr(parts[0], "text", "") or ""

    async def health_check(self) -> bool:
        """Check if Gemini service is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            genai.get_model(f"models/{self.config.model}")
            return True
        except Exception as e:
            logger.warning(f"Gemini health check failed: {e}")
            return False
