"""
noroff_api.auth.deps

FastAPI dependency functions for authentication.

Responsibilities:
- Convert a bearer token into a typed `Principal` whose role flags come from the
  profile store (not from token claims).
- Require a valid API key header for API-key-protected modules.

Authorization (ownership/roles) is not decided here; see `noroff_api.guard`.
"""

from __future__ import annotations

import dataclasses

import structlog
from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_401_UNAUTHORIZED

from noroff_api.api.deps import db_session, settings_dep
from noroff_api.auth.jwt import JwtConfig, JwtValidationError, decode_and_validate
from noroff_api.auth.models import VENUE_MANAGER, Principal
from noroff_api.db.models import Profile
from noroff_api.db.repositories.api_keys import ApiKeyRepo
from noroff_api.db.repositories.profiles import ProfileRepo
from noroff_api.settings import Settings

_bearer = HTTPBearer(auto_error=False)


def principal_from_profile(profile: Profile, *, credential: str | None = None) -> Principal:
    flags = {VENUE_MANAGER} if profile.venue_manager else set()
    return Principal(
        identity=profile.name,
        email=profile.email,
        role_flags=frozenset(flags),
        credential=credential,
    )


async def get_principal(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(settings_dep),
    session: AsyncSession = Depends(db_session),
) -> Principal:
    if creds is None or not creds.credentials:
        raise HTTPException(
            status_code=HTTP_401_UNAUTHORIZED, detail="No authorization header was found"
        )

    try:
        payload = decode_and_validate(cfg=JwtConfig.from_settings(settings), token=creds.credentials)
    except JwtValidationError as e:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail=f"Invalid token: {e}") from e

    subject = str(payload.get("sub", ""))
    if not subject:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Invalid token subject")

    # Role flags can change after the token was issued; always read them fresh.
    profile = await ProfileRepo(session).get_by_name(subject)
    if profile is None:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Profile no longer exists")

    structlog.contextvars.bind_contextvars(principal=profile.name)
    return principal_from_profile(profile)


async def require_api_key(
    request: Request,
    settings: Settings = Depends(settings_dep),
    session: AsyncSession = Depends(db_session),
) -> str:
    key = request.headers.get(settings.api_key_header)
    if not key:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="No API key header was found")
    if await ApiKeyRepo(session).get_by_key(key) is None:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Invalid API key")
    return key


async def api_principal(
    principal: Principal = Depends(get_principal),
    api_key: str = Depends(require_api_key),
) -> Principal:
    return dataclasses.replace(principal, credential=api_key)


# --- Module Notes -----------------------------------------------------------
# Bearer is checked before the API key: a request missing both reports the
# missing authorization header first.
