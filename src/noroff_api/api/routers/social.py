"""
noroff_api.api.routers.social

Social profile endpoints (bearer token + API key).

Responsibilities:
- List/get/search profiles with `_followers` / `_following` inclusion flags.
- Follow and unfollow other profiles.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_400_BAD_REQUEST

from noroff_api.api.deps import db_session, guard_for, inclusion_flags
from noroff_api.api.errors import ApiError, enforce
from noroff_api.api.pagination import page_body, page_query
from noroff_api.api.routers.profiles import profile_or_404
from noroff_api.api.serializers import follow_graph, profile_out
from noroff_api.auth.deps import api_principal
from noroff_api.auth.models import Principal, identity_key
from noroff_api.db.paging import PageQuery
from noroff_api.db.repositories.profiles import SORTABLE, ProfileRepo
from noroff_api.guard.core import ResourceAccessGuard
from noroff_api.guard.policy import PROFILE, Action
from noroff_api.observability.logging import get_logger

log = get_logger(__name__)

router = APIRouter(prefix="/v2/social/profiles", tags=["social-profiles"])

_guard = guard_for(PROFILE)
_FOLLOW_GRAPH = frozenset({"followers", "following"})


@router.get("")
async def list_profiles(
    query: PageQuery = Depends(page_query(SORTABLE)),
    include: dict[str, bool] = Depends(inclusion_flags),
    principal: Principal = Depends(api_principal),
    session: AsyncSession = Depends(db_session),
    guard: ResourceAccessGuard = Depends(_guard),
) -> dict[str, Any]:
    inclusions = enforce(
        await guard.authorize(Action.read, principal, include=include, limit=query.limit),
        kind=PROFILE.kind,
    )
    result = await ProfileRepo(session).list(query=query, include=inclusions)
    return page_body(result, lambda p: profile_out(p, inclusions))


@router.get("/search")
async def search_profiles(
    q: str = Query(min_length=1, max_length=100),
    query: PageQuery = Depends(page_query(SORTABLE)),
    include: dict[str, bool] = Depends(inclusion_flags),
    principal: Principal = Depends(api_principal),
    session: AsyncSession = Depends(db_session),
    guard: ResourceAccessGuard = Depends(_guard),
) -> dict[str, Any]:
    inclusions = enforce(
        await guard.authorize(Action.read, principal, include=include, limit=query.limit),
        kind=PROFILE.kind,
    )
    result = await ProfileRepo(session).search(text=q, query=query, include=inclusions)
    return page_body(result, lambda p: profile_out(p, inclusions))


@router.get("/{name}")
async def get_profile(
    name: str,
    include: dict[str, bool] = Depends(inclusion_flags),
    principal: Principal = Depends(api_principal),
    session: AsyncSession = Depends(db_session),
    guard: ResourceAccessGuard = Depends(_guard),
) -> dict[str, Any]:
    inclusions = enforce(
        await guard.authorize(Action.read, principal, include=include), kind=PROFILE.kind
    )
    profile = await profile_or_404(ProfileRepo(session), name, inclusions)
    return {"data": profile_out(profile, inclusions), "meta": {}}


@router.put("/{name}/follow")
async def follow_profile(
    name: str,
    principal: Principal = Depends(api_principal),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    if identity_key(name) == identity_key(principal.identity):
        raise ApiError(HTTP_400_BAD_REQUEST, "You can't follow yourself")

    repo = ProfileRepo(session)
    target = await profile_or_404(repo, name)
    me = await profile_or_404(repo, principal.identity)
    if await repo.is_following(follower_id=me.id, following_id=target.id):
        raise ApiError(HTTP_400_BAD_REQUEST, "You are already following this profile")

    try:
        await repo.follow(follower_id=me.id, following_id=target.id)
        await session.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent follow of the same profile.
        await session.rollback()
        raise ApiError(HTTP_400_BAD_REQUEST, "You are already following this profile") from e

    log.info("profile.followed", follower=me.name, following=target.name)

    target = await profile_or_404(repo, name, _FOLLOW_GRAPH)
    return {"data": follow_graph(target), "meta": {}}


@router.put("/{name}/unfollow")
async def unfollow_profile(
    name: str,
    principal: Principal = Depends(api_principal),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    if identity_key(name) == identity_key(principal.identity):
        raise ApiError(HTTP_400_BAD_REQUEST, "You can't unfollow yourself")

    repo = ProfileRepo(session)
    target = await profile_or_404(repo, name)
    me = await profile_or_404(repo, principal.identity)
    if not await repo.is_following(follower_id=me.id, following_id=target.id):
        raise ApiError(HTTP_400_BAD_REQUEST, "You are not following this profile")

    await repo.unfollow(follower_id=me.id, following_id=target.id)
    await session.commit()
    log.info("profile.unfollowed", follower=me.name, following=target.name)

    target = await profile_or_404(repo, name, _FOLLOW_GRAPH)
    return {"data": follow_graph(target), "meta": {}}
