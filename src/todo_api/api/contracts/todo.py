"""Todo API contracts - use the domain aggregate directly for responses.

Request fields accept any JSON type on purpose: the Todo aggregate decides what is
valid so that every rule lives in one place.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from ...domain import Todo


class CreateTodoRequest(BaseModel):
    """Request to create a todo."""

    text: Any = Field(
        default=None,
        description="Task description (required, non-blank)",
        examples=["Walk the dog"],
    )


class UpdateTodoRequest(BaseModel):
    """Partial update. Any other fields in the body (e.g. completedAt) are ignored."""

    text: Any = Field(default=None, examples=["Walk the dog twice"])
    completed: bool | None = Field(
        default=None,
        description="true marks the todo done; false or omitted clears completion",
        examples=[True],
    )


class TodoResponse(BaseModel):
    """Single todo wrapped under ``todo``."""

    todo: Todo


class TodoListResponse(BaseModel):
    """All todos wrapped under ``todos``."""

    todos: list[Todo]
