"""Application configuration using Pydantic Settings.

Environment variables are loaded with the PERSISTENT_STATE_ prefix.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from persistent_state.core.constants import DEFAULT_ONE_YEAR_TTL_SECONDS


class Settings(BaseSettings):
    """Storage settings loaded from environment variables.

    Pattern: Pydantic Settings with Environment Variables
    """

    # Service configuration
    service_name: str = "persistent-state"
    environment: str = Field(default="development", description="Runtime environment")
    log_level: str = Field(default="INFO", description="Logging level")

    # Fast tier (Redis)
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL for the fast tier"
    )
    redis_socket_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Socket and connect timeout for Redis calls"
    )

    # Durable blob tier (S3 / R2)
    s3_bucket: Optional[str] = Field(default=None, description="Bucket holding durable blobs")
    s3_endpoint_url: Optional[str] = Field(
        default=None,
        description="Custom endpoint for S3-compatible storage (R2, MinIO)"
    )
    s3_region: Optional[str] = Field(default=None, description="Bucket region")
    s3_access_key_id: Optional[SecretStr] = Field(default=None, description="Access key id")
    s3_secret_access_key: Optional[SecretStr] = Field(default=None, description="Secret access key")
    s3_key_prefix: str = Field(default="", description="Prefix prepended to every blob path")

    # Durable document tier (MongoDB)
    mongo_uri: SecretStr = Field(
        default=SecretStr("mongodb://localhost:27017"),
        description="MongoDB connection URI"
    )
    mongo_database: str = Field(default="persistent_state", description="MongoDB database name")
    mongo_server_selection_timeout_ms: int = Field(
        default=5000,
        gt=0,
        description="Server selection timeout for MongoDB"
    )

    # Storage client defaults
    default_ttl_seconds: int = Field(
        default=DEFAULT_ONE_YEAR_TTL_SECONDS,
        ge=1,
        le=DEFAULT_ONE_YEAR_TTL_SECONDS,
        description="Fast tier TTL used by the one-shot helpers"
    )

    model_config = SettingsConfigDict(
        env_prefix="PERSISTENT_STATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: Application settings singleton
    """
    return Settings()
