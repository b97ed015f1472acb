"""Configuration management for the Intervention Engine."""

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file (only if accessible)
try:
    load_dotenv()
except (PermissionError, OSError):
    # In sandboxed environments, .env might not be accessible
    pass


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # Supabase configuration (required)
    SUPABASE_URL: str = Field(..., description="Supabase project URL")
    SUPABASE_SERVICE_ROLE_KEY: str = Field(..., description="Supabase service role key")

    # OpenAI configuration (required)
    OPENAI_API_KEY: str = Field(..., description="OpenAI API key")

    # Environment
    ENGINE_ENV: str = Field(default="dev", description="Environment: dev, staging, prod, test")
    ENGINE_VERSION: str = Field(
        default="validated-live-2", description="Engine tag stamped into draft metadata"
    )

    # Embedding configuration
    EMBEDDING_MODEL: str = Field(
        default="text-embedding-3-small", description="OpenAI embedding model"
    )
    EMBEDDING_DIM: int = Field(default=1536, description="Embedding vector dimension")

    # Generative analysis configuration
    ANALYSIS_MODEL: str = Field(default="gpt-4o-mini", description="Model for behavior analysis")
    ANALYSIS_TEMPERATURE: float = Field(
        default=0.7, description="Temperature for the comprehensive analysis"
    )
    ANALYSIS_MAX_TOKENS: int = Field(
        default=2048, description="Max output tokens for the comprehensive analysis"
    )
    FUNCTION_TEMPERATURE: float = Field(
        default=0.3, description="Temperature for the quick behavior-function analysis"
    )
    FUNCTION_MAX_TOKENS: int = Field(
        default=150, description="Max output tokens for the quick behavior-function analysis"
    )

    # Catalog and retrieval limits
    CATALOG_FETCH_LIMIT: int = Field(
        default=80, description="Catalog rows fetched for keyword scoring"
    )
    SEMANTIC_MATCH_COUNT: int = Field(
        default=5, description="Interventions kept after embedding similarity ranking"
    )

    # Storage batching
    BATCH_WRITE_LIMIT: int = Field(
        default=400, description="Max rows committed per storage batch"
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance

    Raises:
        ValidationError: If required environment variables are missing
    """
    return Settings()
