"""API router exports"""

from .health import router as health_router
from .todos import router as todos_router
from .users import router as users_router

__all__ = ["health_router", "todos_router", "users_router"]
