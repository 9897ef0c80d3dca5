# core/config.py

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from typing import Optional, List

class Settings(BaseSettings):
    """Application settings with environment variable support"""

    # Application settings
    app_name: str = "MedBridge Clinical Translator"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"  # development, staging, production

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = True

    # Database settings
    database_url: str = "sqlite:///./medbridge.db"  # Default to SQLite for development
    database_pool_pre_ping: bool = True

    # CORS settings
    cors_origins: List[str] = ["http://localhost:3000", "http://localhost:5173"]
    cors_allow_credentials: bool = True
    cors_allow_methods: List[str] = ["*"]
    cors_allow_headers: List[str] = ["*"]

    # Translation settings
    translation_provider: str = "google"  # google, openai
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o-mini"
    translation_timeout_seconds: float = 15.0
    translation_fallback_text: str = "Translation unavailable"

    # Simulated speech devices
    capture_delay_seconds: float = 2.0
    playback_seconds: float = 2.0
    min_press_ms: int = 500
    playback_history_size: int = 50

    # Dashboard
    recent_sessions_limit: int = 5

    # Logging settings
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_file: Optional[str] = None
    log_max_bytes: int = 1024 * 1024
    log_backup_count: int = 3

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v):
        """Validate database URL format"""
        if not v:
            raise ValueError("Database URL cannot be empty")
        return v

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Validate environment setting"""
        allowed_envs = ["development", "staging", "production"]
        if v not in allowed_envs:
            raise ValueError(f"Environment must be one of: {allowed_envs}")
        return v

    @field_validator("translation_provider")
    @classmethod
    def validate_translation_provider(cls, v):
        """Validate translation backend name"""
        allowed_providers = ["google", "openai"]
        v = v.lower()
        if v not in allowed_providers:
            raise ValueError(f"Translation provider must be one of: {allowed_providers}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        return v.upper()

# Global settings instance
settings = Settings()
