"""Defines schema of requests and responses related to security"""

from pydantic import BaseModel, ConfigDict, Field

from typing import Annotated


class TokenPair(BaseModel):
    """Model representing both access and refresh tokens."""

    access_token: str
    refresh_token: str


class TokenClaims(BaseModel):
    """Model representing the claims carried by a verified token."""

    sub: Annotated[str, Field(min_length=1, description="ID of the account the token was issued to")]
    iat: int  # Unix timestamp
    exp: int  # Unix timestamp


class AuthenticatedUser(BaseModel):
    """Identity attached to a request that passed the auth gate."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: Annotated[str, Field(alias="userId")]
