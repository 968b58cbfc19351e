"""User service - registration, login, token authentication and logout."""

from __future__ import annotations

import logging
from functools import partial
from typing import TYPE_CHECKING

from pydantic import ValidationError

from ..domain import AuthToken, TokenAccess, User, normalize_email
from .errors import AuthenticationError, InvalidCredentialsError
from .security import TokenIssuer, hash_password, verify_password

if TYPE_CHECKING:
    from motor.motor_asyncio import AsyncIOMotorCollection

logger = logging.getLogger(__name__)


class UserService:
    """
    Orchestrates the User aggregate with hashing and token signing.

    Every successful register/login returns the user together with the
    newly issued token, which the API layer sends back in ``x-auth``.
    """

    def __init__(self, collection: AsyncIOMotorCollection, issuer: TokenIssuer, bcrypt_rounds: int = 12):
        self.collection = collection
        self.issuer = issuer
        self.bcrypt_rounds = bcrypt_rounds

    def _issue(self, user: User) -> AuthToken:
        return AuthToken(access=TokenAccess.AUTH, token=self.issuer.issue(user.id))

    async def register(self, *, email: str | None, password: str | None) -> tuple[User, str]:
        """
        Create an account and its first token.

        Raises:
            ValidationError: invalid email or password
            DuplicateKeyError: email already registered
        """
        user = User.register(
            email=email,
            password=password,
            hasher=partial(hash_password, rounds=self.bcrypt_rounds),
        )
        token = self._issue(user)
        user = user.with_token(token)
        await user.insert(self.collection)
        logger.info("Registered user %s", user.id)
        return user, token.token

    async def login(self, *, email: object, password: object) -> tuple[User, str]:
        """
        Verify credentials and issue an additional token.

        Raises:
            InvalidCredentialsError: unknown email or wrong password
        """
        if not isinstance(email, str) or not isinstance(password, str):
            raise InvalidCredentialsError("Invalid credentials")

        try:
            normalized = normalize_email(email)
        except ValidationError as exc:
            raise InvalidCredentialsError("Invalid credentials") from exc

        user = await User.load_by_email(email=normalized, collection=self.collection)
        if user is None or not verify_password(password, user.password):
            logger.info("Rejected login attempt")
            raise InvalidCredentialsError("Invalid credentials")

        token = self._issue(user)
        user = await user.push_token(token, self.collection)
        logger.info("User %s logged in", user.id)
        return user, token.token

    async def authenticate(self, token: str | None) -> User:
        """
        Resolve the user owning ``token``.

        Raises:
            AuthenticationError: token missing, invalid, or no longer held by the user
        """
        if not token:
            raise AuthenticationError("Missing auth token")

        user_id = self.issuer.decode(token)
        user = await User.load_by_token(user_id=user_id, token=token, collection=self.collection)
        if user is None:
            raise AuthenticationError("Token revoked or user unknown")
        return user

    async def logout(self, user: User, token: str) -> User:
        """Revoke a single token; other sessions stay valid."""
        user = await user.revoke_token(token, self.collection)
        logger.info("User %s logged out", user.id)
        return user


def create_user_service(collection: AsyncIOMotorCollection, issuer: TokenIssuer, bcrypt_rounds: int) -> UserService:
    """Factory function for creating UserService."""
    return UserService(collection=collection, issuer=issuer, bcrypt_rounds=bcrypt_rounds)


__all__ = ["UserService", "create_user_service"]
