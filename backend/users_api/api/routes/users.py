"""User Routes: list, fetch, create and delete over the users table.

Invariants:
    - Path ids parsed by parse_user_id (signed 32-bit, 400 otherwise)
    - Ids are read from the undecoded request path: "/users/%31" is not id 1
    - POST body capped at settings.max_body_bytes before JSON decoding
    - Failures raised as UsersApiError subclasses; status chosen by the
      global handler, never here
    - DELETE success is 204 with an empty body

Design Decisions:
    - {raw_id:path} captures the whole remainder of the path, so "/users/" and
      "/users/1/2" reach parse_user_id and fail as invalid ids instead of
      falling through to the router's 404/redirect handling
    - Body read by hand (not a typed Pydantic parameter): 413 and 400 must use
      this service's own messages
"""

import logging

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import ValidationError

from users_api.api.dependencies import (
    get_app_settings, get_user_repository, read_limited_body,
)
from users_api.config import Settings
from users_api.core.errors import InvalidJsonError, UserNotFoundError
from users_api.core.parse_user_id import parse_user_id
from users_api.core.repository_protocols import UserRepository
from users_api.schemas.user import CreateUser, UserResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/users", tags=["users"])


def _raw_id_segment(request: Request, decoded: str) -> str:
    """Return the id segment exactly as sent, before percent-decoding."""
    raw_path = request.scope.get("raw_path")
    if raw_path is None:
        return decoded
    path = raw_path.decode("latin-1").split("?", 1)[0]
    return path.removeprefix(f"{router.prefix}/")


@router.get("", response_model=list[UserResponse])
async def list_users(
    repo: UserRepository = Depends(get_user_repository),
):
    """List every user ordered by id."""
    users = await repo.get_all_users()
    logger.info(f"Fetched {len(users)} users")
    return [UserResponse.model_validate(u) for u in users]


@router.get("/{raw_id:path}", response_model=UserResponse)
async def get_user(
    raw_id: str,
    request: Request,
    repo: UserRepository = Depends(get_user_repository),
):
    user_id = parse_user_id(_raw_id_segment(request, raw_id))
    user = await repo.get_user_by_id(user_id)
    logger.info(f"Fetched user {user_id}", extra={"user_id": user_id})
    return UserResponse.model_validate(user)


@router.post(
    "", response_model=UserResponse, status_code=status.HTTP_201_CREATED,
)
async def create_user(
    request: Request,
    repo: UserRepository = Depends(get_user_repository),
    settings: Settings = Depends(get_app_settings),
):
    """Create a user from a {"name", "email"} JSON body."""
    body = await read_limited_body(request, settings.max_body_bytes)
    try:
        new_user = CreateUser.model_validate_json(body)
    except ValidationError as e:
        raise InvalidJsonError(str(e)) from e
    user = await repo.create_user(new_user)
    logger.info(f"Created user {user.id}", extra={"user_id": user.id})
    return UserResponse.model_validate(user)


@router.delete(
    "/{raw_id:path}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_user(
    raw_id: str,
    request: Request,
    repo: UserRepository = Depends(get_user_repository),
):
    user_id = parse_user_id(_raw_id_segment(request, raw_id))
    if not await repo.delete_user(user_id):
        raise UserNotFoundError(user_id)
    logger.info(f"Deleted user {user_id}", extra={"user_id": user_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
