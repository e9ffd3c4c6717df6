"""
Users API - User Route Handlers
================================

What:  CRUD endpoints for /api/users.
How:   Each handler parses the request, calls one UserStore operation, and
       shapes the result. Errors raised by the store (NotFoundError,
       ValidationError) propagate to the global handlers in main.py.

Endpoint Map:
    GET    /api/users        → store.list_all()   200
    GET    /api/users/{id}   → store.get_by_id()  200 | 404
    POST   /api/users        → store.create()     201 | 400
    PUT    /api/users/{id}   → store.update()     200 | 400 | 404
    DELETE /api/users/{id}   → store.delete()     204 | 404

A non-integer {id} never reaches the store: FastAPI rejects it with 422.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response, status

from users_api.dependencies import get_user_store
from users_api.schemas.user import (
    ErrorResponse,
    UserCreate,
    UserResponse,
    UserUpdate,
)
from users_api.services.user_store import UserStore

logger = logging.getLogger(__name__)

# ── Router Configuration ──────────────────────────────────────────────────
router = APIRouter(prefix="/api", tags=["Users"])


@router.get(
    "/users",
    response_model=List[UserResponse],
    summary="List all users",
    description="Returns every user in creation order.",
)
async def list_users(
    response: Response,
    store: UserStore = Depends(get_user_store),
) -> List[UserResponse]:
    """
    List every user.

    The total is also sent as X-Total-Count so clients can show a count
    without walking the body.
    """
    users = store.list_all()
    response.headers["X-Total-Count"] = str(len(users))
    return [UserResponse.model_validate(user) for user in users]


@router.get(
    "/users/{user_id}",
    response_model=UserResponse,
    responses={
        404: {"description": "User not found", "model": ErrorResponse},
    },
    summary="Get a single user by ID",
)
async def get_user(
    user_id: int,
    store: UserStore = Depends(get_user_store),
) -> UserResponse:
    return UserResponse.model_validate(store.get_by_id(user_id))


@router.post(
    "/users",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Missing or empty name/email", "model": ErrorResponse},
    },
    summary="Create a user",
    description="Creates a user from `name` and `email`. The id is assigned by the server.",
)
async def create_user(
    body: UserCreate,
    response: Response,
    store: UserStore = Depends(get_user_store),
) -> UserResponse:
    """
    Create a user.

    Responds 201 with the stored user and a Location header pointing at it.
    """
    user = store.create(name=body.name, email=body.email)
    response.headers["Location"] = f"/api/users/{user.id}"
    return UserResponse.model_validate(user)


@router.put(
    "/users/{user_id}",
    response_model=UserResponse,
    responses={
        400: {"description": "A supplied field is empty", "model": ErrorResponse},
        404: {"description": "User not found", "model": ErrorResponse},
    },
    summary="Update a user",
    description=(
        "Applies only the fields present in the body. Omitted fields keep their "
        "current value; a field that is sent must be non-empty."
    ),
)
async def update_user(
    user_id: int,
    body: UserUpdate,
    store: UserStore = Depends(get_user_store),
) -> UserResponse:
    user = store.update(user_id, name=body.name, email=body.email)
    return UserResponse.model_validate(user)


@router.delete(
    "/users/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        404: {"description": "User not found", "model": ErrorResponse},
    },
    summary="Delete a user",
)
async def delete_user(
    user_id: int,
    store: UserStore = Depends(get_user_store),
) -> Response:
    """Delete a user. The id is never reused."""
    store.delete(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
