"""Contains the schema definition for requests and responses related to users
"""

import re

from datetime import datetime

from pydantic import BaseModel, Field, EmailStr, field_validator

from typing import Annotated


class RegisterRequest(BaseModel):
    """Describes the structure of the register request."""

    username: Annotated[str, Field(max_length=50, min_length=3)]
    email: Annotated[EmailStr, Field(max_length=254)]
    password: Annotated[str, Field(min_length=1, max_length=72)]  # bcrypt only uses the first 72 bytes

    # * Usernames are limited to letters, digits, dots, dashes and underscores
    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str):
        if not re.fullmatch(r"[A-Za-z0-9._-]+", v):
            raise ValueError("Username may only contain letters, digits, '.', '-' and '_'")
        return v


class LoginRequest(BaseModel):
    """Describes the structure of the login request."""

    email: Annotated[EmailStr, Field(max_length=254)]
    password: Annotated[str, Field(min_length=1, max_length=72)]


class UserInDB(BaseModel):
    """Public representation of an account. Never includes the password hash."""

    id: Annotated[str, Field(description="Unique identifier for the user")]
    username: str
    email: EmailStr
    created_at: Annotated[datetime, Field(serialization_alias="createdAt")]


class AuthResponse(BaseModel):
    """Response of the register, login and refresh endpoints."""

    user: UserInDB


class MessageResponse(BaseModel):
    message: str
