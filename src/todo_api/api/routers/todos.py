"""Todos API Router - thin HTTP layer over the Todo aggregate."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from ...domain import Todo
from ...service import TodoService
from ..contracts import CreateTodoRequest, TodoListResponse, TodoResponse, UpdateTodoRequest
from ..deps import get_todo_service

router = APIRouter(prefix="/todos", tags=["todos"])

TODO_NOT_FOUND = "Todo not found"


@router.post("", response_model=Todo)
async def create_todo(
    request: CreateTodoRequest,
    service: Annotated[TodoService, Depends(get_todo_service)],
) -> Todo:
    """Create a todo from ``text``. Blank or missing text -> 400."""
    return await service.create(request.text)


@router.get("", response_model=TodoListResponse)
async def list_todos(
    service: Annotated[TodoService, Depends(get_todo_service)],
) -> TodoListResponse:
    return TodoListResponse(todos=await service.list_all())


@router.get("/{todo_id}", response_model=TodoResponse)
async def get_todo(
    todo_id: str,
    service: Annotated[TodoService, Depends(get_todo_service)],
) -> TodoResponse:
    """Get a todo by id. Unknown and malformed ids both -> 404."""
    todo = await service.get(todo_id)
    if todo is None:
        raise HTTPException(status_code=404, detail=TODO_NOT_FOUND)
    return TodoResponse(todo=todo)


@router.delete("/{todo_id}", response_model=TodoResponse)
async def delete_todo(
    todo_id: str,
    service: Annotated[TodoService, Depends(get_todo_service)],
) -> TodoResponse:
    """Delete a todo and return the removed record."""
    todo = await service.remove(todo_id)
    if todo is None:
        raise HTTPException(status_code=404, detail=TODO_NOT_FOUND)
    return TodoResponse(todo=todo)


@router.patch("/{todo_id}", response_model=TodoResponse)
async def update_todo(
    todo_id: str,
    request: UpdateTodoRequest,
    service: Annotated[TodoService, Depends(get_todo_service)],
) -> TodoResponse:
    """
    Update ``text`` and/or ``completed``.

    completedAt is always derived server-side: stamped when completed is
    true, cleared otherwise.
    """
    todo = await service.update(todo_id, text=request.text, completed=request.completed)
    if todo is None:
        raise HTTPException(status_code=404, detail=TODO_NOT_FOUND)
    return TodoResponse(todo=todo)
