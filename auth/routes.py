"""
User API routes: register, login.

Route prefix: /users
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status

from auth.schemas import (
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
)
from auth.service import AuthService

router = APIRouter(tags=["users"])

_error_responses = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
    status.HTTP_409_CONFLICT: {"model": ErrorResponse},
}


def get_auth_service(request: Request) -> AuthService:
    """The service is built once in ``create_app`` and kept on app state."""
    return request.app.state.auth_service


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_error_responses,
)
async def register(
    req: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
) -> RegisterResponse:
    """Register a new user."""
    return await service.register(req)


@router.post("/login", response_model=LoginResponse, responses=_error_responses)
async def login(
    req: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> LoginResponse:
    """Login with email + password."""
    return await service.login(req)
