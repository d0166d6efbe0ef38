"""
Staff account endpoints (ADMIN only).
"""

from fastapi import APIRouter, Depends, status

from oficina.api.dependencies import get_accounts, require
from oficina.application.dto.requests import CreateUserRequest, UpdateUserRequest
from oficina.application.dto.responses import DeleteResponse, ErrorResponse, UserResponse
from oficina.core.entities.user import Caller, User
from oficina.core.services import AccountService, Action

router = APIRouter(
    prefix="/api/usuarios",
    tags=["users"],
    responses={403: {"model": ErrorResponse}},
)


def _entity_to_response(user: User) -> UserResponse:
    return UserResponse(id=user.id, name=user.name, role=user.role, created_at=user.created_at)


@router.get("", response_model=list[UserResponse])
async def list_users(
    caller: Caller = Depends(require(Action.MANAGE_USERS)),
    accounts: AccountService = Depends(get_accounts),
) -> list[UserResponse]:
    users = await accounts.list_users()
    return [_entity_to_response(u) for u in users]


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_user(
    request: CreateUserRequest,
    caller: Caller = Depends(require(Action.MANAGE_USERS)),
    accounts: AccountService = Depends(get_accounts),
) -> UserResponse:
    user = await accounts.create_user(request.name, request.secret, request.role)
    return _entity_to_response(user)


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_user(
    user_id: int,
    request: UpdateUserRequest,
    caller: Caller = Depends(require(Action.MANAGE_USERS)),
    accounts: AccountService = Depends(get_accounts),
) -> UserResponse:
    user = await accounts.update_user(
        user_id, name=request.name, secret=request.secret, role=request.role
    )
    return _entity_to_response(user)


@router.delete(
    "/{user_id}",
    response_model=DeleteResponse,
    responses={404: {"model": ErrorResponse}},
)
async def delete_user(
    user_id: int,
    caller: Caller = Depends(require(Action.MANAGE_USERS)),
    accounts: AccountService = Depends(get_accounts),
) -> DeleteResponse:
    """Delete an account. Admins cannot delete themselves."""
    await accounts.delete_user(caller, user_id)
    return DeleteResponse(id=user_id)
