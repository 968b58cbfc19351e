"""Users API Router - registration, login, profile and logout.

Issued tokens travel in the ``x-auth`` response header; the body carries
only the public profile.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response

from ...domain import User
from ...service import UserService
from ..contracts import CredentialsRequest, UserResponse
from ..deps import get_auth_token, get_current_user, get_user_service

router = APIRouter(prefix="/users", tags=["users"])

AUTH_HEADER = "x-auth"


@router.post("", response_model=UserResponse)
async def register_user(
    request: CredentialsRequest,
    response: Response,
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """Register a user and return its first token in ``x-auth``."""
    user, token = await service.register(email=request.email, password=request.password)
    response.headers[AUTH_HEADER] = token
    return UserResponse.from_user(user)


@router.post("/login", response_model=UserResponse)
async def login_user(
    request: CredentialsRequest,
    response: Response,
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """Exchange email and password for a new token. Bad credentials -> 400, empty body."""
    user, token = await service.login(email=request.email, password=request.password)
    response.headers[AUTH_HEADER] = token
    return UserResponse.from_user(user)


@router.get("/me", response_model=UserResponse)
async def read_current_user(
    user: Annotated[User, Depends(get_current_user)],
) -> UserResponse:
    """Profile of the token holder. Missing or invalid token -> 401, empty body."""
    return UserResponse.from_user(user)


@router.delete("/me/token")
async def logout_user(
    user: Annotated[User, Depends(get_current_user)],
    token: Annotated[str, Depends(get_auth_token)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> Response:
    """Revoke the token used for this request."""
    await service.logout(user, token)
    return Response(status_code=200)
