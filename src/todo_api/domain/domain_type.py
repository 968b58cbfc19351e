"""Domain Type System - Core Enumerations.

Defines type-safe constants using Python's StrEnum for domain concepts.
StrEnum values serialize to plain strings in both JSON and BSON.
"""

from enum import StrEnum


class TokenAccess(StrEnum):
    """Purpose an issued token grants.

    Stored alongside each token in a user's ``tokens`` list. Only ``AUTH``
    tokens are accepted by the ``x-auth`` header.
    """

    AUTH = "auth"


__all__ = ["TokenAccess"]
