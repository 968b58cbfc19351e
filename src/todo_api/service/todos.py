"""Todo service - thin orchestration over the Todo aggregate."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from ..domain import DocumentId, Todo

if TYPE_CHECKING:
    from motor.motor_asyncio import AsyncIOMotorCollection

logger = logging.getLogger(__name__)


def epoch_millis() -> int:
    return time.time_ns() // 1_000_000


class TodoService:
    """
    Pure orchestrator - the Todo aggregate owns validation and mapping.

    Service responsibilities:
    1. Hold the todos collection
    2. Supply the clock used to stamp completedAt
    3. Translate raw path ids (malformed ids behave like missing ones)
    """

    def __init__(self, collection: AsyncIOMotorCollection, clock: Callable[[], int] = epoch_millis):
        self.collection = collection
        self.clock = clock

    async def create(self, text: object) -> Todo:
        """Create a todo. Raises ValidationError (nothing stored) on blank text."""
        todo = Todo.create(text=text)
        await todo.save(self.collection)
        logger.info("Created todo %s", todo.id)
        return todo

    async def list_all(self) -> list[Todo]:
        return await Todo.load_all(collection=self.collection)

    async def get(self, raw_id: str) -> Todo | None:
        todo_id = DocumentId.parse(raw_id)
        if todo_id is None:
            return None
        return await Todo.load(todo_id=todo_id, collection=self.collection)

    async def remove(self, raw_id: str) -> Todo | None:
        todo_id = DocumentId.parse(raw_id)
        if todo_id is None:
            return None
        todo = await Todo.remove(todo_id=todo_id, collection=self.collection)
        if todo is not None:
            logger.info("Deleted todo %s", todo.id)
        return todo

    async def update(self, raw_id: str, *, text: object, completed: bool | None) -> Todo | None:
        """
        Apply a PATCH to an existing todo.

        Returns:
            Updated todo, or None if it doesn't exist

        Raises:
            ValidationError: new text is blank
        """
        todo = await self.get(raw_id)
        if todo is None:
            return None

        updated = todo.apply_update(text=text, completed=completed, now_ms=self.clock())
        await updated.save(self.collection)
        logger.info("Updated todo %s (completed=%s)", updated.id, updated.completed)
        return updated


def create_todo_service(collection: AsyncIOMotorCollection) -> TodoService:
    """Factory function for creating TodoService."""
    return TodoService(collection=collection)


__all__ = ["TodoService", "create_todo_service", "epoch_millis"]
