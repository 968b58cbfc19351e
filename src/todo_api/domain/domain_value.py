"""Identity Layer - Value Objects Shared by the Aggregates.

Architecture:
    - Identity: DocumentId wraps MongoDB's ObjectId as a 24-hex string
    - Credentials: AuthToken pairs an issued token with its access purpose

Both are frozen so they can be compared, hashed and embedded in other
immutable models.
"""

from __future__ import annotations

from typing import Any

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, RootModel, ValidationError, field_validator

from .domain_type import TokenAccess


class DocumentId(RootModel[str]):
    """Unique Identifier for Stored Documents.

    The API renders identifiers as lowercase 24-character hex strings while
    the store keys documents by ``ObjectId``. This wrapper holds the string
    form and converts on demand.

    Usage:
        >>> doc_id = DocumentId()  # Auto-generates an ObjectId
        >>> doc_id.object_id  # bson.ObjectId for queries
        >>> DocumentId.parse("1337")  # None - malformed ids never reach the store
    """

    root: str = Field(default_factory=lambda: str(ObjectId()), pattern=r"^[0-9a-f]{24}$")
    model_config = ConfigDict(frozen=True)

    @field_validator("root", mode="before")
    @classmethod
    def coerce_object_id(cls, value: Any) -> Any:
        if isinstance(value, ObjectId):
            return str(value)
        if isinstance(value, str):
            return value.lower()
        return value

    @property
    def object_id(self) -> ObjectId:
        return ObjectId(self.root)

    @classmethod
    def parse(cls, raw: str) -> DocumentId | None:
        """Parse a path parameter, returning None when it is not a valid id."""
        try:
            return cls(raw)
        except ValidationError:
            return None

    def __str__(self) -> str:
        return self.root


class AuthToken(BaseModel):
    """Token issued to a user at registration or login."""

    access: TokenAccess = TokenAccess.AUTH
    token: str = Field(min_length=1)

    model_config = ConfigDict(frozen=True)


__all__ = ["AuthToken", "DocumentId"]
