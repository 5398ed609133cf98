"""Factory for creating LLM providers from configuration."""

from smart_recall.config import LLMProvider as LLMProviderEnum
from smart_recall.config import Settings, get_settings
from smart_recall.llm.base import LLMProvider, LLMProviderFactory


def create_llm_provider(
    provider_name: str | None = None,
    settings: Settings | None = None,
) -> LLMProvider:
    """Create LLM provider from configuration.

    Args:
        provider_name: Override provider name, defaults to settings.llm_provider
        settings: Settings to read from, defaults to the global settings

    Returns:
        Configured LLM provider instance

    Raises:
        ValueError: If provider configuration is invalid
    """
    settings = settings or get_settings()
    provider_name = provider_name or settings.llm_provider
    sampling = {
        "temperature": settings.llm_temperature,
        "top_p": settings.llm_top_p,
        "max_output_tokens": settings.llm_max_output_tokens,
    }

    # Build provider-specific config
    if provider_name == LLMProviderEnum.GEMINI:
        from smart_recall.llm.gemini import GeminiConfig

        if not settings.gemini_api_key:
            raise ValueError("Gemini API key is required")

        config = GeminiConfig(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            top_k=settings.llm_top_k,
            timeout=int(settings.request_timeout),
            **sampling,
        )
        return LLMProviderFactory.create("gemini", config=config)

    elif provider_name == LLMProviderEnum.OPENAI:
        from smart_recall.llm.openai import OpenAIConfig

        if not settings.openai_api_key:
            raise ValueError("OpenAI API key is required")

        config = OpenAIConfig(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            timeout=int(settings.request_timeout),
            **sampling,
        )
        return LLMProviderFactory.create("openai", config=config)

    elif provider_name == LLMProviderEnum.ANTHROPIC:
        from smart_recall.llm.anthropic import AnthropicConfig

        if not settings.anthropic_api_key:
            raise ValueError("Anthropic API key is required")

        config = AnthropicConfig(
            api_key=settings.anthropic_api_key,
            model=settings.anthropic_model,
            top_k=settings.llm_top_k,
            timeout=int(settings.request_timeout),
            **sampling,
        )
        return LLMProviderFactory.create("anthropic", config=config)

    elif provider_name == LLMProviderEnum.OLLAMA:
        from smart_recall.llm.ollama import OllamaConfig

        config = OllamaConfig(
            host=settings.ollama_host,
            model=settings.ollama_model,
            top_k=settings.llm_top_k,
            timeout=int(settings.request_timeout),
            **sampling,
        )
        return LLMProviderFactory.create("ollama", config=config)

    else:
        raise ValueError(f"Unknown LLM provider: {provider_name}")
