"""
User endpoints for API v1.

Create a user (optionally with a first post) and list all users with
their posts.  The same handlers are also exposed on the web front
end paths ``/api/addUser`` and ``/api/getUser`` through
``legacy_router``.
"""

from typing import Any, List

from fastapi import APIRouter, Body, status

from user_post_api.app.schemas.user import ErrorResponse, UserCreated, UserWithPosts
from user_post_api.app.services.user_service import UserService


router = APIRouter()
legacy_router = APIRouter()

_create_responses = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_409_CONFLICT: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


@router.post(
    "/",
    response_model=UserCreated,
    status_code=status.HTTP_201_CREATED,
    responses=_create_responses,
)
async def create_user(
    payload: Any = Body(
        None,
        examples=[
            {
                "email": "user@example.com",
                "name": "Jane Doe",
                "post": {"title": "Hello", "content": "My first post", "published": True},
            }
        ],
    ),
) -> UserCreated:
    """Create a user and, if ``post`` is given, its first post.

    The body is validated by the service so that malformed input is
    reported as 400 with a specific message.  409 means a user with the
    email already exists.
    """
    return await UserService.create_user_with_post(payload)


@router.get("/", response_model=List[UserWithPosts])
async def list_users() -> List[UserWithPosts]:
    """Return every user with its posts, without pagination."""
    return await UserService.list_users()


legacy_router.add_api_route(
    "/addUser",
    create_user,
    methods=["POST"],
    response_model=UserCreated,
    status_code=status.HTTP_201_CREATED,
    responses=_create_responses,
)
legacy_router.add_api_route(
    "/getUser",
    list_users,
    methods=["GET"],
    response_model=List[UserWithPosts],
)
