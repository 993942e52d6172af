"""User domain entities."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from stockopname.core.clock import utcnow


class User(BaseModel):
    """Operator conducting stock counts. Carries no credential material."""

    id: int | None = None
    username: str
    email: EmailStr
    full_name: str
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class UserCredentials(BaseModel):
    """A user paired with its stored password hash.

    Only the credential gate reads this; it is never returned to callers.
    """

    user: User
    password_hash: str = Field(repr=False)
