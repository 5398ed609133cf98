"""LLM providers module."""

from smart_recall.llm.anthropic import AnthropicConfig, AnthropicProvider
from smart_recall.llm.base import GenerationParams, LLMProvider, LLMProviderFactory, ResponseResult
from smart_recall.llm.factory import create_llm_provider
from smart_recall.llm.gemini import GeminiConfig, GeminiProvider
from smart_recall.llm.ollama import OllamaConfig, OllamaProvider
from smart_recall.llm.openai import OpenAIConfig, OpenAIProvider

# Register all providers
LLMProviderFactory.register("gemini", GeminiProvider)
LLMProviderFactory.register("openai", OpenAIProvider)
LLMProviderFactory.register("anthropic", AnthropicProvider)
LLMProviderFactory.register("ollama", OllamaProvider)

__all__ = [
    "AnthropicConfig",
    "AnthropicProvider",
    "GeminiConfig",
    "GeminiProvider",
    "GenerationParams",
    "LLMProvider",
    "LLMProviderFactory",
    "OllamaConfig",
    "OllamaProvider",
    "OpenAIConfig",
    "OpenAIProvider",
    "ResponseResult",
    "create_llm_provider",
]
