"""Password hashing and auth token signing.

Passwords are hashed with bcrypt. Tokens are HS256 JWTs whose claims
identify the user; a token is only honoured while it is also present in
that user's stored ``tokens`` list (see UserService.authenticate).
"""

from __future__ import annotations

from uuid import uuid4

import bcrypt
import jwt

from ..domain import DocumentId, TokenAccess
from .errors import AuthenticationError


def hash_password(password: str, rounds: int = 12) -> str:
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds))
    return hashed.decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # stored value is not a bcrypt hash
        return False


class TokenIssuer:
    """Signs and verifies auth tokens with a shared secret."""

    def __init__(self, secret: str, algorithm: str = "HS256"):
        self.secret = secret
        self.algorithm = algorithm

    def issue(self, user_id: DocumentId, access: TokenAccess = TokenAccess.AUTH) -> str:
        """Sign a fresh token for ``user_id``. Each call yields a distinct token."""
        claims = {"_id": user_id.root, "access": access.value, "jti": uuid4().hex}
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def decode(self, token: str, access: TokenAccess = TokenAccess.AUTH) -> DocumentId:
        """
        Verify ``token`` and return the user id it was issued for.

        Raises:
            AuthenticationError: bad signature, malformed token, or wrong claims
        """
        try:
            claims = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.PyJWTError as exc:
            raise AuthenticationError("Invalid auth token") from exc

        if claims.get("access") != access.value:
            raise AuthenticationError("Token not valid for this access")

        user_id = DocumentId.parse(str(claims.get("_id", "")))
        if user_id is None:
            raise AuthenticationError("Token carries no user id")
        return user_id


__all__ = ["TokenIssuer", "hash_password", "verify_password"]
