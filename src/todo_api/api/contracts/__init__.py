from .health import HealthResponse
from .todo import CreateTodoRequest, TodoListResponse, TodoResponse, UpdateTodoRequest
from .user import CredentialsRequest, UserResponse

__all__ = [
    "CreateTodoRequest",
    "CredentialsRequest",
    "HealthResponse",
    "TodoListResponse",
    "TodoResponse",
    "UpdateTodoRequest",
    "UserResponse",
]
