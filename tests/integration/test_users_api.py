"""
Integration tests for the /users endpoints.

Seeded users: users[0] holds one valid token, users[1] holds none.
"""

import httpx
import pytest

from tests.seed import SEED_PASSWORDS
from todo_api.domain import DocumentId, User
from todo_api.service import StorageService, TokenIssuer


def auth(token: str) -> dict[str, str]:
    return {"x-auth": token}


async def test_me_returns_authenticated_user(client: httpx.AsyncClient, users: list[User]):
    response = await client.get("/users/me", headers=auth(users[0].tokens[0].token))

    assert response.status_code == 200
    assert response.json() == {"_id": str(users[0].id), "email": users[0].email}


async def test_me_without_token_returns_401_with_empty_body(client: httpx.AsyncClient):
    response = await client.get("/users/me")

    assert response.status_code == 401
    assert response.content == b""


async def test_me_with_forged_token_returns_401(client: httpx.AsyncClient, users: list[User]):
    forged = TokenIssuer(secret="unrelated-signing-secret-0123456789abcdef").issue(users[0].id)

    response = await client.get("/users/me", headers=auth(forged))

    assert response.status_code == 401
    assert response.content == b""


async def test_me_with_token_not_held_by_user_returns_401(
    client: httpx.AsyncClient, issuer: TokenIssuer, users: list[User]
):
    """A correctly signed token that was never stored (or was revoked) is rejected."""
    response = await client.get("/users/me", headers=auth(issuer.issue(users[0].id)))

    assert response.status_code == 401


async def test_me_with_token_for_unknown_user_returns_401(client: httpx.AsyncClient, issuer: TokenIssuer):
    response = await client.get("/users/me", headers=auth(issuer.issue(DocumentId())))

    assert response.status_code == 401


async def test_register_user(client: httpx.AsyncClient, storage: StorageService):
    email = "email@example.com"

    response = await client.post("/users", json={"email": email, "password": "lele123!"})

    assert response.status_code == 200
    assert response.headers["x-auth"]
    body = response.json()
    assert body["_id"]
    assert body["email"] == email
    assert "password" not in body

    stored = await storage.users().find_one({"email": email})
    assert stored["password"] != "lele123!"
    assert stored["tokens"][0]["token"] == response.headers["x-auth"]


async def test_registration_token_authenticates(client: httpx.AsyncClient):
    registered = await client.post("/users", json={"email": "new@example.com", "password": "lele123!"})

    response = await client.get("/users/me", headers=auth(registered.headers["x-auth"]))

    assert response.status_code == 200
    assert response.json()["_id"] == registered.json()["_id"]


async def test_register_with_invalid_email_is_rejected(client: httpx.AsyncClient):
    response = await client.post("/users", json={"email": "asdfa@asssss.", "password": "sdasdasd123"})

    assert response.status_code == 400
    assert response.json()["_message"] == "User validation failed"
    assert "email" in response.json()["errors"]


async def test_register_with_short_password_is_rejected(client: httpx.AsyncClient):
    response = await client.post("/users", json={"email": "test@lele.pl", "password": "sdasd"})

    assert response.status_code == 400
    assert response.json()["_message"] == "User validation failed"
    assert "password" in response.json()["errors"]


async def test_register_with_password_over_bcrypt_byte_limit_is_rejected(
    client: httpx.AsyncClient, storage: StorageService
):
    response = await client.post("/users", json={"email": "wide@example.com", "password": "\U0001F600" * 40})

    assert response.status_code == 400
    assert response.json()["_message"] == "User validation failed"
    assert "password" in response.json()["errors"]
    assert await storage.users().count_documents({"email": "wide@example.com"}) == 0


@pytest.mark.parametrize(
    "body",
    [{"email": 123, "password": "lele123!"}, {"email": "test@lele.pl", "password": 12345678}],
)
async def test_register_with_non_string_credentials_is_rejected(client: httpx.AsyncClient, body):
    response = await client.post("/users", json=body)

    assert response.status_code == 400
    assert response.json()["_message"] == "User validation failed"


async def test_register_with_used_email_returns_duplicate_key_code(
    client: httpx.AsyncClient, storage: StorageService, users: list[User]
):
    response = await client.post("/users", json={"email": users[0].email, "password": "validpassword123!"})

    assert response.status_code == 400
    assert response.json()["code"] == 11000
    assert await storage.users().count_documents({}) == 2


async def test_login_issues_new_token(client: httpx.AsyncClient, storage: StorageService, users: list[User]):
    user = users[1]

    response = await client.post("/users/login", json={"email": user.email, "password": SEED_PASSWORDS[user.id]})

    assert response.status_code == 200
    token = response.headers["x-auth"]
    assert response.json()["_id"] == str(user.id)

    stored = await storage.users().find_one({"_id": user.id.object_id})
    assert [t["token"] for t in stored["tokens"]] == [token]

    me = await client.get("/users/me", headers=auth(token))
    assert me.status_code == 200


async def test_login_with_wrong_password_is_rejected(client: httpx.AsyncClient, users: list[User]):
    response = await client.post("/users/login", json={"email": users[1].email, "password": "wrong-password"})

    assert response.status_code == 400
    assert "x-auth" not in response.headers
    assert response.content == b""


async def test_login_with_unknown_email_is_rejected(client: httpx.AsyncClient):
    response = await client.post("/users/login", json={"email": "nobody@example.com", "password": "whatever1"})

    assert response.status_code == 400


async def test_login_with_non_string_email_is_rejected(client: httpx.AsyncClient, users: list[User]):
    response = await client.post("/users/login", json={"email": 123, "password": SEED_PASSWORDS[users[1].id]})

    assert response.status_code == 400
    assert response.content == b""


async def test_logout_revokes_token(client: httpx.AsyncClient, storage: StorageService, users: list[User]):
    token = users[0].tokens[0].token

    response = await client.delete("/users/me/token", headers=auth(token))

    assert response.status_code == 200
    stored = await storage.users().find_one({"_id": users[0].id.object_id})
    assert stored["tokens"] == []

    again = await client.get("/users/me", headers=auth(token))
    assert again.status_code == 401


async def test_logout_without_token_returns_401(client: httpx.AsyncClient):
    response = await client.delete("/users/me/token")

    assert response.status_code == 401
