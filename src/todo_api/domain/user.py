"""User Aggregate - account credentials and issued auth tokens.

Validation happens on the plain-text password (length rules), after which
the caller-provided hasher replaces it. A stored User therefore always holds
a hash, never the original password.

Token lifecycle:
    register()  -> user with no tokens, then with_token() before the insert
    push_token()/revoke_token() mutate only the ``tokens`` array in the store
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Annotated, Any

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    StringConstraints,
    TypeAdapter,
    field_validator,
)

from .domain_type import TokenAccess
from .domain_value import AuthToken, DocumentId

if TYPE_CHECKING:
    from motor.motor_asyncio import AsyncIOMotorCollection

BCRYPT_MAX_BYTES = 72


def _fits_bcrypt(value: str) -> str:
    if len(value.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValueError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes when UTF-8 encoded")
    return value


Password = Annotated[str, StringConstraints(min_length=6), AfterValidator(_fits_bcrypt)]

_email_adapter = TypeAdapter(EmailStr)


def normalize_email(raw: str) -> str:
    """Normalize an address the same way User validation does. Raises ValidationError."""
    return _email_adapter.validate_python(raw.strip())


class User(BaseModel):
    """
    User aggregate.

    Attributes:
        id: Document identifier, rendered as ``_id``
        email: Unique, validated address
        password: Password hash once registered (plain text only inside register())
        tokens: Issued tokens, oldest first
    """

    id: DocumentId = Field(default_factory=DocumentId, alias="_id")
    email: EmailStr
    password: Password = Field(repr=False)
    tokens: tuple[AuthToken, ...] = ()

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @classmethod
    def register(cls, *, email: str | None, password: str | None, hasher: Callable[[str], str]) -> User:
        """
        Factory: validate registration input and hash the password.

        Raises:
            ValidationError: invalid email or password (title "User")
        """
        candidate = cls.model_validate({"email": email, "password": password})
        return candidate.model_copy(update={"password": hasher(candidate.password)})

    def with_token(self, token: AuthToken) -> User:
        """Append a token immutably."""
        return self.model_copy(update={"tokens": (*self.tokens, token)})

    def has_token(self, token: str, access: TokenAccess = TokenAccess.AUTH) -> bool:
        return any(t.token == token and t.access == access for t in self.tokens)

    # =============================================================================
    # PERSISTENCE
    # =============================================================================

    def to_document(self) -> dict[str, Any]:
        document = self.model_dump(mode="json", by_alias=True, exclude={"id"})
        document["_id"] = self.id.object_id
        return document

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> User:
        return cls.model_validate(document)

    async def insert(self, collection: AsyncIOMotorCollection) -> None:
        """Insert a new user. The unique email index raises DuplicateKeyError on conflict."""
        await collection.insert_one(self.to_document())

    @classmethod
    async def load_by_email(cls, *, email: str, collection: AsyncIOMotorCollection) -> User | None:
        document = await collection.find_one({"email": email})
        return cls.from_document(document) if document else None

    @classmethod
    async def load_by_token(
        cls,
        *,
        user_id: DocumentId,
        token: str,
        collection: AsyncIOMotorCollection,
        access: TokenAccess = TokenAccess.AUTH,
    ) -> User | None:
        """Load the user only if it still holds ``token`` with the given access."""
        document = await collection.find_one(
            {
                "_id": user_id.object_id,
                "tokens.token": token,
                "tokens.access": access.value,
            }
        )
        return cls.from_document(document) if document else None

    async def push_token(self, token: AuthToken, collection: AsyncIOMotorCollection) -> User:
        await collection.update_one(
            {"_id": self.id.object_id},
            {"$push": {"tokens": token.model_dump(mode="json")}},
        )
        return self.with_token(token)

    async def revoke_token(self, token: str, collection: AsyncIOMotorCollection) -> User:
        await collection.update_one(
            {"_id": self.id.object_id},
            {"$pull": {"tokens": {"token": token}}},
        )
        return self.model_copy(update={"tokens": tuple(t for t in self.tokens if t.token != token)})


__all__ = ["Password", "User", "normalize_email"]
