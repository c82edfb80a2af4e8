"""Configuration management."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings pulled from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PY_MOSAIC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Logging format (console or json)")

    # Generation Configuration
    sampling_loop_limit: int = Field(
        default=1_000_000,
        description="Maximum iterations of a point sampling loop before it gives up",
    )
    default_seed: str = Field(default="default", description="Seed for the module PRNG")


# Instantiate singleton settings object
settings = Settings()
