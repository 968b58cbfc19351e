"""Service layer exports."""

from .errors import AuthenticationError, InvalidCredentialsError
from .security import TokenIssuer, hash_password, verify_password
from .storage import DocumentStoreConfig, StorageService, create_storage_service
from .todos import TodoService, create_todo_service
from .users import UserService, create_user_service

__all__ = [
    "AuthenticationError",
    "DocumentStoreConfig",
    "InvalidCredentialsError",
    "StorageService",
    "TodoService",
    "TokenIssuer",
    "UserService",
    "create_storage_service",
    "create_todo_service",
    "create_user_service",
    "hash_password",
    "verify_password",
]
