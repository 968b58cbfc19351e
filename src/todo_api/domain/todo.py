"""Todo Aggregate - a task record with completion state.

The aggregate owns both its validation rules and its document mapping,
while the caller supplies the collection (same split as an infrastructure
client handed to a domain model).

Invariant:
    ``completed_at`` is set if and only if ``completed`` is true. Every
    construction path, including updates, re-validates the whole record.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, model_validator

from .domain_value import DocumentId

if TYPE_CHECKING:
    from motor.motor_asyncio import AsyncIOMotorCollection

TodoText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class Todo(BaseModel):
    """
    Todo aggregate.

    Attributes:
        id: Document identifier, rendered as ``_id``
        text: Task description, trimmed and non-empty
        completed: Completion flag
        completed_at: Epoch milliseconds of completion, rendered as ``completedAt``
    """

    id: DocumentId = Field(default_factory=DocumentId, alias="_id")
    text: TodoText
    completed: bool = False
    completed_at: int | None = Field(default=None, alias="completedAt")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @model_validator(mode="after")
    def completed_at_tracks_completion(self) -> Todo:
        if self.completed != (self.completed_at is not None):
            raise ValueError("completedAt must be set exactly when the todo is completed")
        return self

    @classmethod
    def create(cls, *, text: object) -> Todo:
        """Factory: new, not-yet-completed todo. Raises ValidationError on blank text."""
        return cls.model_validate({"text": text})

    def apply_update(self, *, text: object, completed: bool | None, now_ms: int) -> Todo:
        """
        Return a new Todo with the requested changes applied.

        Only ``completed is True`` marks the todo as done (stamped with
        ``now_ms``). Any other value, including omission, leaves it not
        completed with the timestamp cleared.
        """
        changes: dict[str, Any] = {
            "completed": completed is True,
            "completedAt": now_ms if completed is True else None,
        }
        if text is not None:
            changes["text"] = text
        return Todo.model_validate({**self.model_dump(by_alias=True), **changes})

    # =============================================================================
    # PERSISTENCE
    # =============================================================================

    def to_document(self) -> dict[str, Any]:
        document = self.model_dump(by_alias=True, exclude={"id"})
        document["_id"] = self.id.object_id
        return document

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> Todo:
        return cls.model_validate(document)

    @classmethod
    async def load(cls, *, todo_id: DocumentId, collection: AsyncIOMotorCollection) -> Todo | None:
        """Load a todo by id. Returns None if it doesn't exist."""
        document = await collection.find_one({"_id": todo_id.object_id})
        if document is None:
            return None
        return cls.from_document(document)

    @classmethod
    async def load_all(cls, *, collection: AsyncIOMotorCollection) -> list[Todo]:
        documents = await collection.find().to_list(length=None)
        return [cls.from_document(document) for document in documents]

    @classmethod
    async def remove(cls, *, todo_id: DocumentId, collection: AsyncIOMotorCollection) -> Todo | None:
        """Delete a todo by id, returning the deleted record (None if absent)."""
        document = await collection.find_one_and_delete({"_id": todo_id.object_id})
        if document is None:
            return None
        return cls.from_document(document)

    async def save(self, collection: AsyncIOMotorCollection) -> None:
        """Insert or replace the stored document for this todo."""
        await collection.replace_one({"_id": self.id.object_id}, self.to_document(), upsert=True)


__all__ = ["Todo", "TodoText"]
