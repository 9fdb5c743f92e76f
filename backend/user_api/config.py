"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Table name and region come from the environment (never hardcoded per deployment)
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support (ADR: developer UX)
    - aws_region defaults to None: boto3 resolves it from AWS_REGION / AWS_DEFAULT_REGION / profile
      the same way the Lambda runtime provides it
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # DynamoDB
    table_name: str = "users"
    aws_region: str | None = None
    dynamodb_endpoint_url: str | None = None  # DynamoDB Local, e.g. http://localhost:8000

    @field_validator("aws_region", "dynamodb_endpoint_url", mode="before")
    @classmethod
    def empty_to_none(cls, v):
        """Lambda/compose files often export empty strings for unset values."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    # Timeouts
    request_timeout_seconds: float = 10.0
    store_connect_timeout_seconds: float = 5.0
    store_read_timeout_seconds: float = 5.0

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
