"""Application configuration management."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Configuration
    app_name: str = "Subtitle Translation Service"
    app_version: str = "0.1.0"
    app_description: str = (
        "Translate SRT subtitle files with Google GenAI while preserving timing and structure"
    )

    # Environment
    environment: str = "development"  # development, staging, production

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 8000
    allowed_hosts: list[str] = ["*"]

    # Authentication
    api_key: str | None = None

    # CORS Configuration
    cors_enabled: bool = True
    cors_origins: list[str] = ["*"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]
    cors_expose_headers: list[str] = ["Content-Disposition"]  # Download name for browsers

    # Compression
    gzip_minimum_size: int = 1000

    # Google GenAI Configuration
    google_api_key: str | None = None
    default_model: str = "gemini-2.5-flash"
    translation_temperature: float = 0.2  # Low temperature for consistent structure

    # Translation Configuration
    default_chunk_size: int = 50
    max_upload_size: int = 5 * 1024 * 1024  # 5MB

    # Logging
    log_level: str = "INFO"
    log_dir: str = "./logs"
    enable_log_redaction: bool = True  # Redact sensitive data from logs
    quiet_loggers: list[str] = ["httpx", "httpcore", "google_genai"]  # Per-request SDK noise

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )


@lru_cache
def get_settings() -> Settings:
    """Return the cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
