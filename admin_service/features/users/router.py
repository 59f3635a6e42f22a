"""API router for users.

Endpoints:
    GET /users            - Keyset-paginated user listing
    GET /users/{user_id}  - Single user

Example:
    GET /api/v1/users?filter=disabled=0 AND last_name='Lovelace'&sort=first_name ASC&limit=20
"""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Request

from admin_service.core.database import NotFoundError
from admin_service.core.dependencies.database import DbSession
from admin_service.core.dependencies.pagination import ListParamsDep
from admin_service.core.exceptions import NotFoundException
from admin_service.core.pagination import Page
from admin_service.features.users.repository import UserRepository, get_user_repository
from admin_service.features.users.schemas import UserRead

router = APIRouter(prefix="/users", tags=["users"])

UserRepo = Annotated[UserRepository, Depends(get_user_repository)]


@router.get(
    "",
    response_model=Page[UserRead],
    response_model_exclude_unset=True,
    summary="List users",
)
async def list_users(
    request: Request,
    session: DbSession,
    repo: UserRepo,
    params: ListParamsDep,
) -> Page[UserRead]:
    query = repo.listing.parse(**params.listing_kwargs())
    page = await repo.list_page(session, query)
    return page.cast(UserRead).with_links(
        str(request.url.replace(query="")), params.carried()
    )


@router.get("/{user_id}", response_model=UserRead, summary="Get a user")
async def get_user(user_id: UUID, session: DbSession, repo: UserRepo) -> UserRead:
    try:
        user = await repo.get_or_raise(session, user_id)
    except NotFoundError as exc:
        raise NotFoundException(
            detail=f"User {user_id} not found",
            type="user-not-found",
            extra={"user_id": str(user_id)},
        ) from exc
    return UserRead.model_validate(user)
