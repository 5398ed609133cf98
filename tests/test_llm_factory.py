"""Tests for LLM factory functions."""

from unittest.mock import patch

import pytest

from smart_recall.config import LLMProvider as LLMProviderEnum
from smart_recall.config import Settings
from smart_recall.llm.anthropic import AnthropicProvider
from smart_recall.llm.factory import create_llm_provider
from smart_recall.llm.gemini import GeminiProvider
from smart_recall.llm.ollama import OllamaProvider
from smart_recall.llm.openai import OpenAIProvider


class TestLLMFactory:
    """Test LLM factory functions."""

    @patch("smart_recall.llm.factory.get_settings")
    def test_create_ollama_provider(self, mock_get_settings):
        """Test creating Ollama provider."""
        mock_get_settings.return_value = Settings(
            _env_file=None,
            llm_provider=LLMProviderEnum.OLLAMA,
            ollama_host="http://test:11434",
            ollama_model="llama3.2",
            request_timeout=45.0,
        )

        provider = create_llm_provider()
        assert isinstance(provider, OllamaProvider)
        assert provider.config.host == "http://test:11434"
        assert provider.config.model == "llama3.2"
        assert provider.config.top_k == 40
        assert provider.config.timeout == 45

    @patch("smart_recall.llm.factory.get_settings")
    def test_create_openai_provider(self, mock_get_settings):
        """Test creating OpenAI provider."""
        mock_get_settings.return_value = Settings(
            _env_file=None,
            llm_provider=LLMProviderEnum.OPENAI,
            openai_api_key="test-key",
        )

        provider = create_llm_provider()
        assert isinstance(provider, OpenAIProvider)
        assert provider.config.api_key == "test-key"
        assert provider.config.max_retries == 0

    @patch("smart_recall.llm.factory.get_settings")
    def test_create_openai_provider_missing_key(self, mock_get_settings):
        """Test creating OpenAI provider without API key."""
        mock_get_settings.return_value = Settings(
            _env_file=None, llm_provider=LLMProviderEnum.OPENAI
        )

        with pytest.raises(ValueError, match="OpenAI API key is required"):
            create_llm_provider()

    def test_create_gemini_provider_uses_generation_settings(self):
        """Test that Gemini picks up sampling parameters from settings."""
        settings = Settings(
            _env_file=None,
            gemini_api_key="test-key",
            llm_temperature=0.2,
            llm_top_k=10,
        )

        with patch("smart_recall.llm.gemini.genai"):
            provider = create_llm_provider(settings=settings)

        assert isinstance(provider, GeminiProvider)
        assert provider.config.temperature == 0.2
        assert provider.config.top_k == 10
        assert provider.config.max_output_tokens == 1024

    def test_create_gemini_provider_missing_key(self):
        """Test creating Gemini provider without API key."""
        settings = Settings(_env_file=None)

        with pytest.raises(ValueError, match="Gemini API key is required"):
            create_llm_provider(settings=settings)

    def test_provider_name_override(self):
        """Test overriding the configured provider."""
        settings = Settings(_env_file=None, anthropic_api_key="test-key")

        provider = create_llm_provider(LLMProviderEnum.ANTHROPIC, settings=settings)
        assert isinstance(provider, AnthropicProvider)

    def test_unknown_provider(self):
        """Test that unknown provider names are rejected."""
        with pytest.raises(ValueError, match="Unknown LLM provider"):
            create_llm_provider("mystery", settings=Settings(_env_file=None))
