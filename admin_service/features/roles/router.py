"""API router for roles.

Endpoints:
    GET /roles            - Keyset-paginated role listing
    GET /roles/{role_id}  - Single role
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
from admin_service.features.roles.repository import RoleRepository, get_role_repository
from admin_service.features.roles.schemas import RoleRead

router = APIRouter(prefix="/roles", tags=["roles"])

RoleRepo = Annotated[RoleRepository, Depends(get_role_repository)]


@router.get(
    "",
    response_model=Page[RoleRead],
    response_model_exclude_unset=True,
    summary="List roles",
)
async def list_roles(
    request: Request,
    session: DbSession,
    repo: RoleRepo,
    params: ListParamsDep,
) -> Page[RoleRead]:
    query = repo.listing.parse(**params.listing_kwargs())
    page = await repo.list_page(session, query)
    return page.cast(RoleRead).with_links(
        str(request.url.replace(query="")), params.carried()
    )


@router.get("/{role_id}", response_model=RoleRead, summary="Get a role")
async def get_role(role_id: UUID, session: DbSession, repo: RoleRepo) -> RoleRead:
    try:
        role = await repo.get_or_raise(session, role_id)
    except NotFoundError as exc:
        raise NotFoundException(
            detail=f"Role {role_id} not found",
            type="role-not-found",
            extra={"role_id": str(role_id)},
        ) from exc
    return RoleRead.model_validate(role)
