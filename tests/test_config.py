"""Tests for configuration module."""

import pytest

from smart_recall.config import Environment, LLMProvider, Settings, StorageBackend


def test_default_settings():
    """Test that default settings are loaded correctly."""
    settings = Settings(_env_file=None)

    assert settings.llm_provider == LLMProvider.GEMINI
    assert settings.gemini_model == "gemini-1.5-flash"
    assert settings.storage_backend == StorageBackend.SUPABASE
    assert settings.environment == Environment.DEVELOPMENT
    assert settings.log_level == "INFO"
    assert settings.search_result_limit == 5


def test_generation_params_defaults():
    """Test default sampling parameters."""
    settings = Settings(_env_file=None)

    assert settings.generation_params() == {
        "temperature": 0.7,
        "top_p": 0.8,
        "top_k": 40,
        "max_output_tokens": 1024,
    }


def test_validate_gemini_config():
    """Test Gemini configuration validation."""
    settings = Settings(_env_file=None, llm_provider=LLMProvider.GEMINI)

    with pytest.raises(ValueError, match="Gemini API key is required"):
        settings.validate_provider_config()


def test_validate_openai_config():
    """Test OpenAI configuration validation."""
    settings = Settings(_env_file=None, llm_provider=LLMProvider.OPENAI)

    with pytest.raises(ValueError, match="OpenAI API key is required"):
        settings.validate_provider_config()


def test_valid_openai_config():
    """Test valid OpenAI configuration."""
    settings = Settings(
        _env_file=None,
        llm_provider=LLMProvider.OPENAI,
        openai_api_key="sk-test-key",
    )

    # Should not raise
    settings.validate_provider_config()


def test_ollama_needs_no_key():
    """Test that Ollama is valid without any API key."""
    settings = Settings(_env_file=None, llm_provider=LLMProvider.OLLAMA)

    settings.validate_provider_config()


def test_validate_supabase_config():
    """Test Supabase storage validation."""
    settings = Settings(_env_file=None, supabase_url="https://abc.supabase.co")

    with pytest.raises(ValueError, match="service role key is required"):
        settings.validate_storage_config()


def test_memory_storage_needs_no_credentials():
    """Test that the in-memory backend is valid without Supabase settings."""
    settings = Settings(_env_file=None, storage_backend=StorageBackend.MEMORY)

    settings.validate_storage_config()
