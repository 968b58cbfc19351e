"""Service-level failures mapped to HTTP responses by the API layer."""


class AuthenticationError(Exception):
    """Missing, malformed, revoked or forged ``x-auth`` token."""


class InvalidCredentialsError(Exception):
    """Login attempted with an unknown email or a wrong password."""


__all__ = ["AuthenticationError", "InvalidCredentialsError"]
