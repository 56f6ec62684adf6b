"""Configuration management for the LifeOS API."""

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
    SUPABASE_ANON_KEY: str | None = Field(
        default=None, description="Supabase anon key used by the caller-side client"
    )

    # OpenAI configuration (required)
    OPENAI_API_KEY: str = Field(..., description="OpenAI API key")

    # Environment
    LIFEOS_ENV: str = Field(default="dev", description="Environment: dev, staging, prod")

    # Embedding configuration
    EMBEDDING_MODEL: str = Field(
        default="text-embedding-3-small", description="OpenAI embedding model"
    )
    EMBEDDING_DIM: int = Field(default=1536, description="Embedding vector dimension")
    EMBEDDING_MAX_CHARS: int = Field(
        default=8000, description="Input is truncated to this many chars before embedding"
    )

    # Chat model for snippet compression and daily digests
    OPENAI_MODEL: str = Field(default="gpt-4o-mini", description="OpenAI chat model")

    # ElevenLabs text-to-speech
    ELEVENLABS_API_KEY: str | None = Field(default=None, description="ElevenLabs API key")
    ELEVENLABS_VOICE_ID: str = Field(
        default="uYXf8XasLslADfZ2MB4u", description="Default ElevenLabs voice"
    )
    ELEVENLABS_MODEL_ID: str = Field(
        default="eleven_multilingual_v2", description="ElevenLabs synthesis model"
    )

    # Google Calendar (single-account refresh token)
    GOOGLE_CLIENT_ID: str | None = Field(default=None, description="Google OAuth client ID")
    GOOGLE_CLIENT_SECRET: str | None = Field(
        default=None, description="Google OAuth client secret"
    )
    GOOGLE_REFRESH_TOKEN: str | None = Field(
        default=None, description="Refresh token for the calendar owner"
    )

    # Edge function gateway
    FUNCTIONS_BASE_URL: str | None = Field(
        default=None,
        description="Base URL of the function routes (defaults to <SUPABASE_URL>/functions/v1)",
    )
    FUNCTIONS_TIMEOUT: int = Field(default=30, description="Gateway request timeout in seconds")

    # Contact cadence
    DEFAULT_DAILY_CAPACITY: int = Field(
        default=8, description="Max due contacts surfaced when the user has no capacity set"
    )

    @property
    def functions_base_url(self) -> str:
        """Resolved base URL for edge function calls."""
        if self.FUNCTIONS_BASE_URL:
            return self.FUNCTIONS_BASE_URL.rstrip("/")
        return f"{self.SUPABASE_URL.rstrip('/')}/functions/v1"


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
