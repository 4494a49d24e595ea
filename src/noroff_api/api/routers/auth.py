"""
noroff_api.api.routers.auth

Registration, login and API key issuance.

Responsibilities:
- Register profiles (unique name/email, allowed email domain, media checks).
- Exchange email + password for an access token.
- Issue API keys to authenticated profiles.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import Field
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED, HTTP_400_BAD_REQUEST, HTTP_401_UNAUTHORIZED

from noroff_api.api.deps import db_session, guard_for, settings_dep
from noroff_api.api.errors import ApiError, enforce
from noroff_api.api.schemas import CamelModel, Media, media_urls
from noroff_api.api.serializers import profile_out
from noroff_api.auth.deps import get_principal
from noroff_api.auth.jwt import JwtConfig, issue_token
from noroff_api.auth.models import Principal
from noroff_api.auth.passwords import hash_password, verify_password
from noroff_api.db.repositories.api_keys import ApiKeyRepo
from noroff_api.db.repositories.profiles import ProfileRepo
from noroff_api.guard.core import ResourceAccessGuard
from noroff_api.guard.policy import PROFILE
from noroff_api.observability.logging import get_logger
from noroff_api.settings import Settings

log = get_logger(__name__)

router = APIRouter(prefix="/v2/auth", tags=["auth"])

_EMAIL_PATTERN = r"^[\w\-.+]+@([\w-]+\.)+[\w-]{2,}$"


class RegisterRequest(CamelModel):
    name: str = Field(min_length=1, max_length=20, pattern=r"^\w+$")
    email: str = Field(max_length=256, pattern=_EMAIL_PATTERN)
    password: str = Field(min_length=8, max_length=72)
    bio: str | None = Field(default=None, max_length=160)
    avatar: Media | None = None
    banner: Media | None = None
    venue_manager: bool = False


class LoginRequest(CamelModel):
    email: str = Field(max_length=256, pattern=_EMAIL_PATTERN)
    password: str = Field(min_length=1, max_length=72)


class CreateApiKeyRequest(CamelModel):
    name: str = Field(default="API Key", min_length=1, max_length=32)


@router.post("/register", status_code=HTTP_201_CREATED)
async def register(
    body: RegisterRequest,
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
    guard: ResourceAccessGuard = Depends(guard_for(PROFILE)),
) -> dict[str, Any]:
    domain = body.email.rsplit("@", 1)[-1].lower()
    if domain not in {d.lower() for d in settings.allowed_email_domains}:
        raise ApiError(
            HTTP_400_BAD_REQUEST,
            f"Only {', '.join(settings.allowed_email_domains)} emails are allowed to register",
            path=["email"],
        )

    profiles = ProfileRepo(session)
    if await profiles.find_by_email_or_name(email=body.email, name=body.name) is not None:
        raise ApiError(HTTP_400_BAD_REQUEST, "Profile already exists")

    # No principal exists yet, so only the media part of the guard applies.
    denied = await guard.check_media(media_urls(body.avatar, body.banner))
    if denied is not None:
        enforce(denied, kind=PROFILE.kind)

    try:
        profile = await profiles.create(
            name=body.name,
            email=body.email,
            password_hash=hash_password(body.password, rounds=settings.bcrypt_rounds),
            bio=body.bio,
            avatar=body.avatar.model_dump() if body.avatar else None,
            banner=body.banner.model_dump() if body.banner else None,
            venue_manager=body.venue_manager,
        )
        await session.commit()
    except IntegrityError as e:
        # A concurrent registration claimed the name or email after the check above.
        await session.rollback()
        raise ApiError(HTTP_400_BAD_REQUEST, "Profile already exists") from e

    log.info("profile.registered", name=profile.name, venue_manager=profile.venue_manager)
    return {"data": profile_out(profile), "meta": {}}


@router.post("/login")
async def login(
    body: LoginRequest,
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> dict[str, Any]:
    profile = await ProfileRepo(session).get_by_email(body.email)
    # Same message for unknown email and wrong password.
    if profile is None or not verify_password(body.password, profile.password_hash):
        raise ApiError(HTTP_401_UNAUTHORIZED, "Invalid email or password")

    token = issue_token(
        cfg=JwtConfig.from_settings(settings),
        subject=profile.name,
        email=profile.email,
        ttl=timedelta(minutes=settings.jwt_ttl_minutes),
    )
    return {"data": {**profile_out(profile), "accessToken": token}, "meta": {}}


@router.post("/create-api-key", status_code=HTTP_201_CREATED)
async def create_api_key(
    body: CreateApiKeyRequest | None = None,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    profile = await ProfileRepo(session).get_by_name(principal.identity)
    if profile is None:
        raise ApiError(HTTP_401_UNAUTHORIZED, "Profile no longer exists")

    api_key = await ApiKeyRepo(session).create(
        owner_id=profile.id, name=(body or CreateApiKeyRequest()).name
    )
    await session.commit()
    log.info("api_key.created", owner=profile.name, label=api_key.name)
    return {"data": {"name": api_key.name, "status": "ACTIVE", "key": api_key.key}, "meta": {}}


# --- Module Notes -----------------------------------------------------------
# Login and create-api-key take no API key: clients need a token first to
# create one.
