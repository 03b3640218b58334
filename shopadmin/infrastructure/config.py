"""Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Dashboard client settings loaded from environment variables."""

    # API
    api_url: str = Field(
        default="http://localhost:5000/api",
        description="Backend REST API base URL",
    )
    request_timeout: float = Field(
        default=30.0,
        description="HTTP request timeout in seconds",
    )

    # Session
    token_path: str | None = Field(
        default=None,
        description="File used to persist the auth token; in-memory when unset",
    )

    # Catalog
    sku_token_digits: int = Field(
        default=4,
        ge=1,
        le=13,
        description="Timestamp digits appended to generated variant SKUs",
    )
    max_image_bytes: int = Field(
        default=5 * 1024 * 1024,
        description="Largest accepted product image upload",
    )
    max_images: int = Field(
        default=5,
        description="Most images a single product may carry",
    )

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    model_config = SettingsConfigDict(
        env_prefix="SHOPADMIN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
