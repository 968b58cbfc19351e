"""User API contracts."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ...domain import DocumentId, User


class CredentialsRequest(BaseModel):
    """Email and password, used for both registration and login.

    Left untyped so the User aggregate reports every invalid value.
    """

    email: Any = Field(default=None, examples=["someone@example.com"])
    password: Any = Field(default=None, examples=["correct-horse"])


class UserResponse(BaseModel):
    """Public profile - never exposes the password hash or tokens."""

    id: DocumentId = Field(alias="_id")
    email: str

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_user(cls, user: User) -> UserResponse:
        return cls(id=user.id, email=user.email)
