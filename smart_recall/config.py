"""Configuration management using pydantic-settings."""

from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMProvider(str, Enum):
    """Supported LLM providers."""

    OLLAMA = "ollama"
    OPENAI = "openai"
    GEMINI = "gemini"
    ANTHROPIC = "anthropic"


class StorageBackend(str, Enum):
    """Supported persistence backends."""

    SUPABASE = "supabase"
    MEMORY = "memory"


class Environment(str, Enum):
    """Application environments."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # LLM Provider Configuration
    llm_provider: LLMProvider = Field(
        default=LLMProvider.GEMINI,
        description="LLM provider used to answer searches",
    )

    # Google Gemini Configuration
    gemini_api_key: str | None = Field(
        default=None,
        description="Google Gemini API key",
    )
    gemini_model: str = Field(
        default="gemini-1.5-flash",
        description="Google Gemini model to use",
    )

    # OpenAI Configuration
    openai_api_key: str | None = Field(
        default=None,
        description="OpenAI API key",
    )
    openai_model: str = Field(
        default="gpt-4o-mini",
        description="OpenAI chat model to use",
    )

    # Anthropic Configuration
    anthropic_api_key: str | None = Field(
        default=None,
        description="Anthropic API key",
    )
    anthropic_model: str = Field(
        default="claude-3-5-haiku-20241022",
        description="Anthropic model to use",
    )

    # Ollama Configuration
    ollama_host: str = Field(
        default="http://localhost:11434",
        description="Ollama API host URL",
    )
    ollama_model: str = Field(
        default="llama3.2",
        description="Ollama model to use",
    )

    # Generation parameters
    llm_temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    llm_top_p: float = Field(default=0.8, ge=0.0, le=1.0, description="Nucleus sampling threshold")
    llm_top_k: int = Field(default=40, ge=1)
    llm_max_output_tokens: int = Field(default=1024, ge=1)

    # Storage Configuration
    storage_backend: StorageBackend = Field(
        default=StorageBackend.SUPABASE,
        description="Where knowledge items, queries and results are persisted",
    )
    supabase_url: str | None = Field(
        default=None,
        description="Supabase project URL, e.g. https://xyz.supabase.co",
    )
    supabase_service_role_key: str | None = Field(
        default=None,
        description="Supabase service role key used by the search pipeline",
    )

    # Search Configuration
    search_result_limit: int = Field(
        default=5,
        ge=1,
        description="Maximum knowledge items retrieved per search",
    )
    request_timeout: float = Field(
        default=30.0,
        description="Timeout in seconds for outbound HTTP requests",
    )

    # Server Configuration
    server_host: str = Field(default="0.0.0.0", description="HTTP bind address")
    server_port: int = Field(default=3000, description="HTTP port")

    # Application Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment",
    )

    def generation_params(self) -> dict[str, float | int]:
        """Get generation parameters as keyword arguments."""
        return {
            "temperature": self.llm_temperature,
            "top_p": self.llm_top_p,
            "top_k": self.llm_top_k,
            "max_output_tokens": self.llm_max_output_tokens,
        }

    def validate_provider_config(self) -> None:
        """Validate that required API keys are set for the selected provider."""
        if self.llm_provider == LLMProvider.OPENAI and not self.openai_api_key:
            raise ValueError("OpenAI API key is required when using OpenAI provider")
        elif self.llm_provider == LLMProvider.GEMINI and not self.gemini_api_key:
            raise ValueError("Gemini API key is required when using Gemini provider")
        elif self.llm_provider == LLMProvider.ANTHROPIC and not self.anthropic_api_key:
            raise ValueError("Anthropic API key is required when using Anthropic provider")

    def validate_storage_config(self) -> None:
        """Validate that the selected storage backend is fully configured."""
        if self.storage_backend == StorageBackend.SUPABASE:
            if not self.supabase_url:
                raise ValueError("Supabase URL is required when using Supabase storage")
            if not self.supabase_service_role_key:
                raise ValueError("Supabase service role key is required when using Supabase storage")


# Global settings instance - lazy loaded
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
