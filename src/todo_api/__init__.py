"""Todo API package exports."""

from .config import Settings, settings
from .domain import Todo, User
from .service import TodoService, UserService

__all__ = [
    "Settings",
    "Todo",
    "TodoService",
    "User",
    "UserService",
    "settings",
]
