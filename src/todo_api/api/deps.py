"""API dependency wiring - thin DI glue over the service factories."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header

from ..config import settings
from ..domain import User
from ..service import (
    DocumentStoreConfig,
    StorageService,
    TodoService,
    TokenIssuer,
    UserService,
    create_storage_service,
    create_todo_service,
    create_user_service,
)


@lru_cache(maxsize=1)
def get_storage_service() -> StorageService:
    """Create storage service from config (cached singleton)."""
    return create_storage_service(
        DocumentStoreConfig(url=settings.mongodb_url, database=settings.mongodb_database),
    )


@lru_cache(maxsize=1)
def get_token_issuer() -> TokenIssuer:
    """Create token issuer from config (cached singleton)."""
    return TokenIssuer(secret=settings.jwt_secret, algorithm=settings.jwt_algorithm)


def get_todo_service(
    storage: Annotated[StorageService, Depends(get_storage_service)],
) -> TodoService:
    return create_todo_service(collection=storage.todos())


def get_user_service(
    storage: Annotated[StorageService, Depends(get_storage_service)],
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
) -> UserService:
    return create_user_service(
        collection=storage.users(),
        issuer=issuer,
        bcrypt_rounds=settings.bcrypt_rounds,
    )


def get_auth_token(x_auth: Annotated[str | None, Header(alias="x-auth")] = None) -> str | None:
    """Raw token from the ``x-auth`` request header."""
    return x_auth


async def get_current_user(
    token: Annotated[str | None, Depends(get_auth_token)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> User:
    """Resolve the authenticated user. Raises AuthenticationError (-> 401)."""
    return await service.authenticate(token)
