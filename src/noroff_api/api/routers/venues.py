"""
noroff_api.api.routers.venues

Holidaze venue endpoints.

Responsibilities:
- Public list/get with `_owner` / `_bookings` inclusion flags.
- Create/update/delete for venue managers, gated by the access guard
  (ownership, `venueManager` flag, media URLs).
"""

from __future__ import annotations

import uuid
from typing import Any

from fastapi import APIRouter, Depends, Response
from pydantic import Field
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT, HTTP_404_NOT_FOUND

from noroff_api.api.deps import db_session, guard_for, inclusion_flags
from noroff_api.api.errors import ApiError, enforce
from noroff_api.api.pagination import page_body, page_query
from noroff_api.api.schemas import CamelModel, Media, VenueLocation, VenueMeta, media_urls
from noroff_api.api.serializers import venue_out
from noroff_api.auth.deps import api_principal
from noroff_api.auth.models import Principal
from noroff_api.db.models import Venue
from noroff_api.db.paging import PageQuery
from noroff_api.db.repositories.profiles import ProfileRepo
from noroff_api.db.repositories.venues import SORTABLE, VenueRepo
from noroff_api.guard.core import ResourceAccessGuard
from noroff_api.guard.policy import VENUE, Action, Resource
from noroff_api.observability.logging import get_logger

log = get_logger(__name__)

router = APIRouter(prefix="/v2/holidaze/venues", tags=["holidaze-venues"])

_guard = guard_for(VENUE)


class CreateVenueRequest(CamelModel):
    name: str = Field(min_length=1, max_length=256)
    description: str = Field(min_length=1)
    media: list[Media] = Field(default_factory=list, max_length=8)
    price: float = Field(ge=0, le=10000)
    max_guests: int = Field(ge=1, le=100)
    rating: float = Field(default=0, ge=0, le=5)
    meta: VenueMeta = Field(default_factory=VenueMeta)
    location: VenueLocation = Field(default_factory=VenueLocation)


class UpdateVenueRequest(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=256)
    description: str | None = Field(default=None, min_length=1)
    media: list[Media] | None = Field(default=None, max_length=8)
    price: float | None = Field(default=None, ge=0, le=10000)
    max_guests: int | None = Field(default=None, ge=1, le=100)
    rating: float | None = Field(default=None, ge=0, le=5)
    meta: VenueMeta | None = None
    location: VenueLocation | None = None


def resource_of(venue: Venue) -> Resource:
    return Resource(
        owner=venue.owner.name,
        media=tuple(m.get("url", "") for m in venue.media or []),
    )


async def _get_or_404(
    repo: VenueRepo, venue_id: uuid.UUID, include: frozenset[str] = frozenset()
) -> Venue:
    venue = await repo.get(venue_id, include=include)
    if venue is None:
        raise ApiError(HTTP_404_NOT_FOUND, "No venue with such ID")
    return venue


@router.get("")
async def list_venues(
    query: PageQuery = Depends(page_query(SORTABLE)),
    include: dict[str, bool] = Depends(inclusion_flags),
    session: AsyncSession = Depends(db_session),
    guard: ResourceAccessGuard = Depends(_guard),
) -> dict[str, Any]:
    inclusions = enforce(
        await guard.authorize(Action.read, None, include=include, limit=query.limit),
        kind=VENUE.kind,
    )
    result = await VenueRepo(session).list(query=query, include=inclusions)
    return page_body(result, lambda v: venue_out(v, inclusions))


@router.get("/{venue_id}")
async def get_venue(
    venue_id: uuid.UUID,
    include: dict[str, bool] = Depends(inclusion_flags),
    session: AsyncSession = Depends(db_session),
    guard: ResourceAccessGuard = Depends(_guard),
) -> dict[str, Any]:
    inclusions = enforce(await guard.authorize(Action.read, None, include=include), kind=VENUE.kind)
    venue = await _get_or_404(VenueRepo(session), venue_id, inclusions)
    return {"data": venue_out(venue, inclusions), "meta": {}}


@router.post("", status_code=HTTP_201_CREATED)
async def create_venue(
    body: CreateVenueRequest,
    include: dict[str, bool] = Depends(inclusion_flags),
    principal: Principal = Depends(api_principal),
    session: AsyncSession = Depends(db_session),
    guard: ResourceAccessGuard = Depends(_guard),
) -> dict[str, Any]:
    inclusions = enforce(
        await guard.authorize(
            Action.create, principal, None, include, media_urls(body.media)
        ),
        kind=VENUE.kind,
    )
    owner = await ProfileRepo(session).get_by_name(principal.identity)
    if owner is None:
        raise ApiError(HTTP_404_NOT_FOUND, "Profile not found")

    repo = VenueRepo(session)
    created = await repo.create(owner_id=owner.id, fields=body.model_dump())
    await session.commit()
    log.info("venue.created", venue_id=str(created.id), owner=owner.name)

    venue = await _get_or_404(repo, created.id, inclusions)
    return {"data": venue_out(venue, inclusions), "meta": {}}


@router.put("/{venue_id}")
async def update_venue(
    venue_id: uuid.UUID,
    body: UpdateVenueRequest,
    include: dict[str, bool] = Depends(inclusion_flags),
    principal: Principal = Depends(api_principal),
    session: AsyncSession = Depends(db_session),
    guard: ResourceAccessGuard = Depends(_guard),
) -> dict[str, Any]:
    repo = VenueRepo(session)
    venue = await _get_or_404(repo, venue_id)
    inclusions = enforce(
        await guard.authorize(
            Action.update, principal, resource_of(venue), include, media_urls(body.media)
        ),
        kind=VENUE.kind,
    )

    fields = {k: v for k, v in body.model_dump(exclude_unset=True).items() if v is not None}
    await repo.update(venue, fields)
    await session.commit()
    log.info("venue.updated", venue_id=str(venue_id))

    venue = await _get_or_404(repo, venue_id, inclusions)
    return {"data": venue_out(venue, inclusions), "meta": {}}


@router.delete("/{venue_id}", status_code=HTTP_204_NO_CONTENT)
async def delete_venue(
    venue_id: uuid.UUID,
    principal: Principal = Depends(api_principal),
    session: AsyncSession = Depends(db_session),
    guard: ResourceAccessGuard = Depends(_guard),
) -> Response:
    repo = VenueRepo(session)
    venue = await _get_or_404(repo, venue_id)
    enforce(await guard.authorize(Action.delete, principal, resource_of(venue)), kind=VENUE.kind)

    await repo.delete(venue)
    await session.commit()
    log.info("venue.deleted", venue_id=str(venue_id))
    return Response(status_code=HTTP_204_NO_CONTENT)


# --- Module Notes -----------------------------------------------------------
# The venue is looked up (404) before the guard runs; the guard assumes the
# resource exists for update/delete.
