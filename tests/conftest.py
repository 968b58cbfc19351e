"""
Shared test fixtures and configuration.

Environment strategy:
- Settings come from .env.test (loaded before the app is imported)
- MongoDB is replaced by mongomock-motor, so no server is needed
"""

from pathlib import Path

import pytest
from dotenv import load_dotenv

ENV_FILE = Path(__file__).parent.parent / ".env.test"
load_dotenv(ENV_FILE, override=True)

import httpx
from mongomock_motor import AsyncMongoMockClient

from todo_api.api.deps import get_storage_service, get_token_issuer
from todo_api.config import settings
from todo_api.domain import Todo, User
from todo_api.main import app
from todo_api.service import DocumentStoreConfig, StorageService, TokenIssuer

from .seed import SEED_TODOS, build_users, fill_todos, fill_users


@pytest.fixture
def storage() -> StorageService:
    """Storage service backed by a fresh in-memory client."""
    config = DocumentStoreConfig(url=settings.mongodb_url, database=settings.mongodb_database)
    return StorageService(config, client=AsyncMongoMockClient())


@pytest.fixture
def issuer() -> TokenIssuer:
    """The same issuer the app uses, so seeded tokens verify."""
    return get_token_issuer()


@pytest.fixture
async def todos(storage: StorageService) -> list[Todo]:
    await fill_todos(storage.todos())
    return SEED_TODOS


@pytest.fixture
async def users(storage: StorageService, issuer: TokenIssuer) -> list[User]:
    await storage.ensure_indexes()
    seeded = build_users(issuer, settings.bcrypt_rounds)
    await fill_users(storage.users(), seeded)
    return seeded


@pytest.fixture
async def client(storage: StorageService, todos: list[Todo], users: list[User]):
    """HTTP client wired to the seeded in-memory store."""
    app.dependency_overrides[get_storage_service] = lambda: storage
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
