"""Domain Layer - Aggregates and Value Objects.

Key Components:
    - Todo: task aggregate with the completed/completedAt invariant
    - User: account aggregate holding a password hash and issued tokens
    - DocumentId: ObjectId-backed identity shared by both aggregates

Design Principles:
    - Immutable by Default: updates return new instances
    - Aggregates own their document mapping; callers pass the collection
    - Validation errors surface as pydantic ValidationError titled by model
"""

from .domain_type import TokenAccess
from .domain_value import AuthToken, DocumentId
from .todo import Todo
from .user import User, normalize_email

__all__ = [
    "AuthToken",
    "DocumentId",
    "Todo",
    "TokenAccess",
    "User",
    "normalize_email",
]
