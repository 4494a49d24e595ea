"""
noroff_api.api.routers.profiles

Holidaze profile endpoints (bearer token + API key).

Responsibilities:
- List/get profiles with `_venues` / `_bookings` inclusion flags.
- Update the caller's own profile (bio, avatar, banner, venue manager flag).
- List a profile's venues and bookings.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import Field
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_404_NOT_FOUND

from noroff_api.api.deps import db_session, guard_for, inclusion_flags
from noroff_api.api.errors import ApiError, enforce
from noroff_api.api.pagination import page_body, page_query
from noroff_api.api.schemas import CamelModel, Media, media_urls
from noroff_api.api.serializers import booking_out, profile_out, venue_out
from noroff_api.auth.deps import api_principal
from noroff_api.auth.models import Principal
from noroff_api.db.models import Profile
from noroff_api.db.paging import PageQuery
from noroff_api.db.repositories import bookings as booking_repo
from noroff_api.db.repositories import venues as venue_repo
from noroff_api.db.repositories.profiles import SORTABLE, ProfileRepo
from noroff_api.guard.core import ResourceAccessGuard
from noroff_api.guard.policy import BOOKING, PROFILE, VENUE, Action, Resource
from noroff_api.observability.logging import get_logger

log = get_logger(__name__)

router = APIRouter(prefix="/v2/holidaze/profiles", tags=["holidaze-profiles"])


class UpdateProfileRequest(CamelModel):
    bio: str | None = Field(default=None, max_length=160)
    avatar: Media | None = None
    banner: Media | None = None
    venue_manager: bool | None = None


async def profile_or_404(
    repo: ProfileRepo, name: str, include: Iterable[str] = ()
) -> Profile:
    profile = await repo.get_by_name(name, include=include)
    if profile is None:
        raise ApiError(HTTP_404_NOT_FOUND, "No profile with this name")
    return profile


@router.get("")
async def list_profiles(
    query: PageQuery = Depends(page_query(SORTABLE)),
    include: dict[str, bool] = Depends(inclusion_flags),
    principal: Principal = Depends(api_principal),
    session: AsyncSession = Depends(db_session),
    guard: ResourceAccessGuard = Depends(guard_for(PROFILE)),
) -> dict[str, Any]:
    inclusions = enforce(
        await guard.authorize(Action.read, principal, include=include, limit=query.limit),
        kind=PROFILE.kind,
    )
    result = await ProfileRepo(session).list(query=query, include=inclusions)
    return page_body(result, lambda p: profile_out(p, inclusions))


@router.get("/{name}")
async def get_profile(
    name: str,
    include: dict[str, bool] = Depends(inclusion_flags),
    principal: Principal = Depends(api_principal),
    session: AsyncSession = Depends(db_session),
    guard: ResourceAccessGuard = Depends(guard_for(PROFILE)),
) -> dict[str, Any]:
    inclusions = enforce(
        await guard.authorize(Action.read, principal, include=include), kind=PROFILE.kind
    )
    profile = await profile_or_404(ProfileRepo(session), name, inclusions)
    return {"data": profile_out(profile, inclusions), "meta": {}}


@router.put("/{name}")
async def update_profile(
    name: str,
    body: UpdateProfileRequest,
    include: dict[str, bool] = Depends(inclusion_flags),
    principal: Principal = Depends(api_principal),
    session: AsyncSession = Depends(db_session),
    guard: ResourceAccessGuard = Depends(guard_for(PROFILE)),
) -> dict[str, Any]:
    fields = {k: v for k, v in body.model_dump(exclude_unset=True).items() if v is not None}
    if not fields:
        raise ApiError(HTTP_400_BAD_REQUEST, "You must provide at least one field to update")

    repo = ProfileRepo(session)
    profile = await profile_or_404(repo, name)
    inclusions = enforce(
        await guard.authorize(
            Action.update,
            principal,
            Resource(owner=profile.name),
            include,
            media_urls(body.avatar, body.banner),
        ),
        kind=PROFILE.kind,
    )

    await repo.update(profile, **fields)
    await session.commit()
    log.info("profile.updated", name=profile.name, fields=sorted(fields))

    profile = await profile_or_404(repo, name, inclusions)
    return {"data": profile_out(profile, inclusions), "meta": {}}


@router.get("/{name}/venues")
async def list_profile_venues(
    name: str,
    query: PageQuery = Depends(page_query(venue_repo.SORTABLE)),
    include: dict[str, bool] = Depends(inclusion_flags),
    principal: Principal = Depends(api_principal),
    session: AsyncSession = Depends(db_session),
    guard: ResourceAccessGuard = Depends(guard_for(VENUE)),
) -> dict[str, Any]:
    inclusions = enforce(
        await guard.authorize(Action.read, principal, include=include, limit=query.limit),
        kind=VENUE.kind,
    )
    profile = await profile_or_404(ProfileRepo(session), name)
    result = await venue_repo.VenueRepo(session).list_for_owner(
        profile.id, query=query, include=inclusions
    )
    return page_body(result, lambda v: venue_out(v, inclusions))


@router.get("/{name}/bookings")
async def list_profile_bookings(
    name: str,
    query: PageQuery = Depends(page_query(booking_repo.SORTABLE)),
    include: dict[str, bool] = Depends(inclusion_flags),
    principal: Principal = Depends(api_principal),
    session: AsyncSession = Depends(db_session),
    guard: ResourceAccessGuard = Depends(guard_for(BOOKING)),
) -> dict[str, Any]:
    inclusions = enforce(
        await guard.authorize(Action.read, principal, include=include, limit=query.limit),
        kind=BOOKING.kind,
    )
    profile = await profile_or_404(ProfileRepo(session), name)
    result = await booking_repo.BookingRepo(session).list_for_customer(
        profile.id, query=query, include=inclusions
    )
    return page_body(result, lambda b: booking_out(b, inclusions))
