"""
User endpoints.

List, create, update and delete users.  Errors are raised as
``UserServiceError`` by the service and rendered by the handlers
registered in ``main.create_app``.
"""

from typing import List

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from user_admin_api.app.core.db import get_db
from user_admin_api.app.repositories.user_repository import UserRepository
from user_admin_api.app.schemas.user import ErrorResponse, MessageResponse, UserCreate, UserRead
from user_admin_api.app.services.user_service import UserService


router = APIRouter()


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(UserRepository(db))


async def read_raw_body(request: Request) -> bytes:
    """Return the undecoded request body.

    The update endpoint must answer 404 for an unknown id before it
    looks at the payload, so the body is decoded by the service rather
    than by FastAPI.
    """
    return await request.body()


@router.get("", response_model=List[UserRead])
def list_users(service: UserService = Depends(get_user_service)) -> List[UserRead]:
    """Return all users."""
    return service.list_users()


@router.post(
    "",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_409_CONFLICT: {"model": ErrorResponse},
    },
)
def create_user(user: UserCreate, service: UserService = Depends(get_user_service)) -> MessageResponse:
    """Create a user.

    Fails with 409 when the email is already registered and with 400
    when the payload can not be decoded or does not validate.  The
    created user is not echoed back.
    """
    service.create_user(user)
    return MessageResponse(message="User created.")


@router.put(
    "/{user_id}",
    response_model=MessageResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
        status.HTTP_409_CONFLICT: {"model": ErrorResponse},
    },
)
def update_user(
    user_id: int,
    body: bytes = Depends(read_raw_body),
    service: UserService = Depends(get_user_service),
) -> MessageResponse:
    """Update some or all fields of a user.

    Only the keys present in the JSON body are changed; ``id`` and
    ``created_at`` are never modified.
    """
    service.update_user(user_id, body)
    return MessageResponse(message="User updated.")


@router.delete(
    "/{user_id}",
    response_model=MessageResponse,
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
def delete_user(user_id: int, service: UserService = Depends(get_user_service)) -> MessageResponse:
    """Delete a user permanently."""
    service.delete_user(user_id)
    return MessageResponse(message="User deleted.")
