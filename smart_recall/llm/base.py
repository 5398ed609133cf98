"""Base LLM provider interface and factory pattern."""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, Field


class GenerationParams(BaseModel):
    """Sampling parameters sent with a generation request."""

    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    top_p: float = Field(default=0.8, ge=0.0, le=1.0)
    top_k: int = Field(default=40, ge=1)
    max_output_tokens: int = Field(default=1024, ge=1)


class ResponseResult(BaseModel):
    """Result from response generation."""

    content: str
    model: str
    token_count: int | None = None
    finish_reason: str | None = None


class LLMProvider(ABC):
    """Abstract base class for LLM providers."""

    @abstractmethod
    async def generate_response(
        self, prompt: str, params: GenerationParams | None = None
    ) -> ResponseResult:
        """Generate a response for the given prompt.

        Args:
            prompt: Fully built instruction prompt
            params: Sampling parameters, provider defaults when omitted

        Returns:
            ResponseResult with generated response and metadata

        Raises:
            ModelUnavailableError: If the service is unreachable or returns an error
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the provider is healthy and accessible.

        Returns:
            True if healthy, False otherwise
        """
        pass

    async def close(self) -> None:
        """Release any network resources held by the provider."""
        return None


class LLMProviderFactory:
    """Factory for creating LLM providers."""

    _providers: dict[str, type[LLMProvider]] = {}

    @classmethod
    def register(cls, name: str, provider_class: type[LLMProvider]) -> None:
        """Register a provider class.

        Args:
            name: Provider name (e.g., "gemini", "openai")
            provider_class: Provider class to register
        """
        cls._providers[name] = provider_class

    @classmethod
    def create(cls, name: str, **kwargs: Any) -> LLMProvider:
        """Create a provider instance.

        Args:
            name: Provider name
            **kwargs: Provider-specific configuration

        Returns:
            LLMProvider instance

        Raises:
            ValueError: If provider name is not registered
        """
        if name not in cls._providers:
            available = ", ".join(cls._providers.keys())
            raise ValueError(f"Unknown provider '{name}'. Available: {available}")

        return cls._providers[name](**kwargs)
