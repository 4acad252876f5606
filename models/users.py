from datetime import datetime, timezone

from pydantic import Field, EmailStr, field_serializer
from typing import Annotated

from beanie import Document, Indexed, PydanticObjectId

from security.passwords import verify_password


class User(Document):
    """Account of a registered user.

    `email` and `username` carry unique indexes; they are the source of truth for
    duplicate detection when two registrations race.
    """
    username: Annotated[str, Indexed(unique=True), Field(max_length=50, min_length=3)]
    email: Annotated[EmailStr, Indexed(unique=True), Field(max_length=254)]
    password: Annotated[str, Field(min_length=1)]  # bcrypt hash, never the plain password
    created_at: Annotated[datetime, Field(default_factory=lambda: datetime.now(timezone.utc), serialization_alias="createdAt")]

    @field_serializer("id")
    def convert_pydantic_object_id_to_string(self, id: PydanticObjectId):
        return str(id)

    def verify_password(self, plain_password: str) -> bool:
        """Compare `plain_password` with the stored hash."""
        return verify_password(plain_password, self.password)

    class Settings:
        name = "users"
