"""
Login endpoint.
"""

from fastapi import APIRouter, Depends

from oficina.api.dependencies import get_auth
from oficina.application.dto.requests import LoginRequest
from oficina.application.dto.responses import ErrorResponse, LoginResponse, UserResponse
from oficina.core.services import AuthService

router = APIRouter(prefix="/api", tags=["auth"])


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={401: {"model": ErrorResponse}},
)
async def login(
    request: LoginRequest,
    auth: AuthService = Depends(get_auth),
) -> LoginResponse:
    """Exchange name and secret for an 8-hour bearer token."""
    token, caller = await auth.login(request.name, request.secret)
    return LoginResponse(
        token=token,
        user=UserResponse(id=caller.id, name=caller.name, role=caller.role),
    )
