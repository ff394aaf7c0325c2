"""Configuration management for rx-validate"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, read from ``RX_*`` environment variables or ``.env``"""

    model_config = SettingsConfigDict(
        env_prefix="RX_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Compiler
    max_schema_depth: int = Field(default=64, ge=1, description="Deepest nesting accepted in a schema document")

    # Registry
    allow_custom_shadowing: bool = Field(default=False, description="Let a custom type replace another custom type")

    # Logging
    log_level: str = Field(default="WARNING")
    log_format: str = Field(default="console", description="'console' or 'json'")


def get_settings() -> Settings:
    """Build a fresh Settings instance from the current environment"""
    return Settings()


# Global settings instance
settings = Settings()
