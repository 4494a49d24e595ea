"""
noroff_api.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings and DB sessions.
- Provide the shared media validator and per-kind access guards.
- Parse `_relation` query flags into an inclusion request.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from noroff_api.guard.core import ResourceAccessGuard
from noroff_api.guard.media import MediaValidator
from noroff_api.guard.policy import ResourcePolicy
from noroff_api.settings import Settings, get_settings

_TRUTHY = frozenset({"true", "1", "yes", "on"})


def settings_dep(request: Request) -> Settings:
    # `create_app` pins its settings on app.state; fall back to env-driven settings.
    return getattr(request.app.state, "settings", None) or get_settings()


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    # Created on app startup in `noroff_api.api.app.create_app`.
    return request.app.state.sessionmaker  # type: ignore[attr-defined]


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    # Request-scoped DB session. Routers commit explicitly after a successful mutation.
    async with session_factory() as session:
        yield session


def media_validator(request: Request) -> MediaValidator:
    return request.app.state.media_validator  # type: ignore[attr-defined]


def guard_for(policy: ResourcePolicy) -> Callable[..., ResourceAccessGuard]:
    def _dep(validator: MediaValidator = Depends(media_validator)) -> ResourceAccessGuard:
        return ResourceAccessGuard(policy=policy, validator=validator)

    return _dep


def inclusion_flags(request: Request) -> dict[str, bool]:
    """
    `?_owner=true&_bookings=1` -> {"owner": True, "bookings": True}.

    Unknown names are passed through; the guard drops relations the resource kind
    does not have.
    """

    return {
        key[1:]: value.strip().lower() in _TRUTHY
        for key, value in request.query_params.items()
        if key.startswith("_") and len(key) > 1
    }


# --- Module Notes -----------------------------------------------------------
# Shared handles (sessionmaker, media validator) live on `app.state` and are only
# reached through these dependencies, so tests can swap them per app instance.
