"""Application and token settings loaded from the environment.
"""
import os

from datetime import timedelta
from functools import lru_cache

from dotenv import load_dotenv

from pydantic import BaseModel, Field, model_validator

from typing import Annotated, Self

load_dotenv()


class TokenSettings(BaseModel):
    """Secrets and lifetimes used by the token codec."""

    access_secret: Annotated[str, Field(min_length=1)]
    refresh_secret: Annotated[str, Field(min_length=1)]
    access_ttl: Annotated[timedelta, Field(default=timedelta(minutes=15))]
    refresh_ttl: Annotated[timedelta, Field(default=timedelta(days=30))]
    algorithm: Annotated[str, Field(default="HS256")]

    # * Access and refresh tokens must never be signed with the same key
    @model_validator(mode="after")
    def check_secrets_and_ttls(self) -> Self:
        if self.access_secret == self.refresh_secret:
            raise ValueError("Access and refresh secrets must be different")
        if self.access_ttl <= timedelta(0) or self.refresh_ttl <= timedelta(0):
            raise ValueError("Token lifetimes must be positive")
        return self


class AppSettings(BaseModel):
    """Settings for the whole application."""

    tokens: TokenSettings
    environment: Annotated[str, Field(default="development")]
    client_url: Annotated[str, Field(default="http://localhost:3000")]
    database_url: Annotated[str, Field(default="mongodb://localhost:27017")]
    database_name: Annotated[str, Field(default="accounts")]
    logfire_token: Annotated[str | None, Field(default=None)]

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


def load_settings() -> AppSettings:
    """Build the application settings from environment variables.

    Raises:
        pydantic.ValidationError: If a required secret is missing or invalid.

    Returns:
        AppSettings: The validated settings.
    """
    tokens = TokenSettings(
        access_secret=os.getenv("JWT_ACCESS_SECRET", ""),
        refresh_secret=os.getenv("JWT_REFRESH_SECRET", ""),
        access_ttl=timedelta(minutes=int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "15"))),
        refresh_ttl=timedelta(days=int(os.getenv("REFRESH_TOKEN_EXPIRE_DAYS", "30"))),
    )

    return AppSettings(
        tokens=tokens,
        environment=os.getenv("ENVIRONMENT", "development"),
        client_url=os.getenv("CLIENT_URL", "http://localhost:3000"),
        database_url=os.getenv("DATABASE_CONNECTION_STRING", "mongodb://localhost:27017"),
        database_name=os.getenv("DATABASE_NAME", "accounts"),
        logfire_token=os.getenv("LOGFIRE_WRITE_TOKEN"),
    )


@lru_cache
def get_settings() -> AppSettings:
    """Get the cached application settings."""
    return load_settings()
