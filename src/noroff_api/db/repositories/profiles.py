"""
noroff_api.db.repositories.profiles

Repository for `Profile` entities and the follow graph.

Responsibilities:
- Create profiles and look them up case-insensitively by name or email.
- Paginated listing/search with optional relation loading.
- Maintain follower/following edges.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from typing import Any

from sqlalchemy import delete, func, insert, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.interfaces import ORMOption

from noroff_api.auth.models import identity_key
from noroff_api.db.models import Profile, follows
from noroff_api.db.paging import PageQuery, PageResult, paginate

SORTABLE = {
    "name": Profile.name,
    "email": Profile.email,
    "created": Profile.created_at,
    "updated": Profile.updated_at,
}

_RELATIONS = {
    "venues": Profile.venues,
    "bookings": Profile.bookings,
    "followers": Profile.followers,
    "following": Profile.following,
}


def _contains(text: str) -> str:
    # LIKE wildcards in user input match literally.
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _loaders(include: Iterable[str]) -> list[ORMOption]:
    return [selectinload(_RELATIONS[name]) for name in include if name in _RELATIONS]


class ProfileRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        bio: str | None = None,
        avatar: dict[str, Any] | None = None,
        banner: dict[str, Any] | None = None,
        venue_manager: bool = False,
    ) -> Profile:
        profile = Profile(
            name=name,
            name_key=identity_key(name),
            email=email.lower(),
            password_hash=password_hash,
            bio=bio,
            avatar=avatar,
            banner=banner,
            venue_manager=venue_manager,
        )
        self._session.add(profile)
        await self._session.flush()
        return profile

    async def get_by_name(self, name: str, *, include: Iterable[str] = ()) -> Profile | None:
        stmt = (
            select(Profile)
            .where(Profile.name_key == identity_key(name))
            .options(*_loaders(include))
            .execution_options(populate_existing=True)
        )
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def get_by_email(self, email: str) -> Profile | None:
        stmt = select(Profile).where(Profile.email == email.lower())
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def find_by_email_or_name(self, *, email: str, name: str) -> Profile | None:
        stmt = select(Profile).where(
            or_(Profile.email == email.lower(), Profile.name_key == identity_key(name))
        )
        return (await self._session.execute(stmt)).scalars().first()

    async def list(self, *, query: PageQuery, include: Iterable[str] = ()) -> PageResult[Profile]:
        return await paginate(
            self._session,
            select(Profile),
            query=query,
            sortable=SORTABLE,
            default_sort="name",
            options=_loaders(include),
        )

    async def search(
        self, *, text: str, query: PageQuery, include: Iterable[str] = ()
    ) -> PageResult[Profile]:
        stmt = select(Profile).where(
            or_(
                Profile.name_key.like(_contains(identity_key(text)), escape="\\"),
                func.lower(Profile.bio).like(_contains(text.lower()), escape="\\"),
            )
        )
        return await paginate(
            self._session,
            stmt,
            query=query,
            sortable=SORTABLE,
            default_sort="name",
            options=_loaders(include),
        )

    async def update(self, profile: Profile, **fields: Any) -> Profile:
        for key, value in fields.items():
            setattr(profile, key, value)
        await self._session.flush()
        return profile

    async def is_following(self, *, follower_id: uuid.UUID, following_id: uuid.UUID) -> bool:
        stmt = select(func.count()).select_from(follows).where(
            follows.c.follower_id == follower_id, follows.c.following_id == following_id
        )
        return (await self._session.execute(stmt)).scalar_one() > 0

    async def follow(self, *, follower_id: uuid.UUID, following_id: uuid.UUID) -> None:
        await self._session.execute(
            insert(follows).values(follower_id=follower_id, following_id=following_id)
        )

    async def unfollow(self, *, follower_id: uuid.UUID, following_id: uuid.UUID) -> None:
        await self._session.execute(
            delete(follows).where(
                follows.c.follower_id == follower_id, follows.c.following_id == following_id
            )
        )
