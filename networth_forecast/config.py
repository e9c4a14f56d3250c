"""Application configuration management using Pydantic Settings."""

from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from networth_forecast.models.profile import MODEL_VARIANTS


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # Application Environment
    app_env: str = Field(default="development", alias="APP_ENV")

    # Flask Configuration
    secret_key: str = Field(..., alias="SECRET_KEY")
    flask_env: str = Field(default="development", alias="FLASK_ENV")

    # Forecast Defaults
    default_timeline_months: int = Field(
        default=12, ge=1, alias="DEFAULT_TIMELINE_MONTHS"
    )
    max_timeline_months: int = Field(default=120, ge=1, alias="MAX_TIMELINE_MONTHS")
    default_model: str = Field(default="realistic", alias="DEFAULT_MODEL")

    # Logging Configuration
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, v):
        """Ensure SECRET_KEY is provided and not a placeholder."""
        if not v or v == "your-secret-key-here-change-in-production":
            raise ValueError("SECRET_KEY must be set to a secure value")
        return v

    @field_validator("app_env")
    @classmethod
    def validate_app_env(cls, v):
        allowed_envs = {"development", "testing", "production"}
        if v not in allowed_envs:
            raise ValueError(f"APP_ENV must be one of {allowed_envs}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        allowed_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed_levels:
            raise ValueError(f"LOG_LEVEL must be one of {allowed_levels}")
        return v.upper()

    @field_validator("default_model")
    @classmethod
    def validate_default_model(cls, v):
        """Default model must name one of the projection variants."""
        if v not in MODEL_VARIANTS:
            raise ValueError(f"DEFAULT_MODEL must be one of {list(MODEL_VARIANTS)}")
        return v

    @model_validator(mode="after")
    def validate_timeline_range(self):
        if self.default_timeline_months > self.max_timeline_months:
            raise ValueError(
                "DEFAULT_TIMELINE_MONTHS cannot exceed MAX_TIMELINE_MONTHS"
            )
        return self


def get_settings(env_file: Optional[str] = None) -> Settings:
    """Get application settings instance."""
    if env_file is not None:
        return Settings(_env_file=env_file)
    return Settings()


_settings: Optional[Settings] = None


def get_global_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = get_settings()
    return _settings


def reset_global_settings() -> None:
    """Reset global settings instance (useful for testing)."""
    global _settings
    _settings = None
