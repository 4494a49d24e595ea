"""
noroff_api.db.repositories.venues

Repository for `Venue` entities.

Responsibilities:
- CRUD for venues.
- Paginated listing (all venues or per owner) with optional `owner` / `bookings` loading.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.interfaces import ORMOption

from noroff_api.db.models import Venue
from noroff_api.db.paging import PageQuery, PageResult, paginate

SORTABLE = {
    "name": Venue.name,
    "price": Venue.price,
    "rating": Venue.rating,
    "maxGuests": Venue.max_guests,
    "created": Venue.created_at,
    "updated": Venue.updated_at,
}


def _loaders(include: Iterable[str]) -> list[ORMOption]:
    # The owner is always loaded: the access guard needs its name for every mutation.
    options: list[ORMOption] = [selectinload(Venue.owner)]
    if "bookings" in include:
        options.append(selectinload(Venue.bookings))
    return options


class VenueRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, venue_id: uuid.UUID, *, include: Iterable[str] = ()) -> Venue | None:
        stmt = (
            select(Venue)
            .where(Venue.id == venue_id)
            .options(*_loaders(include))
            .execution_options(populate_existing=True)
        )
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def list(self, *, query: PageQuery, include: Iterable[str] = ()) -> PageResult[Venue]:
        return await paginate(
            self._session,
            select(Venue),
            query=query,
            sortable=SORTABLE,
            default_sort="created",
            options=_loaders(include),
        )

    async def list_for_owner(
        self, owner_id: uuid.UUID, *, query: PageQuery, include: Iterable[str] = ()
    ) -> PageResult[Venue]:
        return await paginate(
            self._session,
            select(Venue).where(Venue.owner_id == owner_id),
            query=query,
            sortable=SORTABLE,
            default_sort="created",
            options=_loaders(include),
        )

    async def create(self, *, owner_id: uuid.UUID, fields: dict[str, Any]) -> Venue:
        venue = Venue(owner_id=owner_id, **fields)
        self._session.add(venue)
        await self._session.flush()
        return venue

    async def update(self, venue: Venue, fields: dict[str, Any]) -> Venue:
        for key, value in fields.items():
            setattr(venue, key, value)
        await self._session.flush()
        return venue

    async def delete(self, venue: Venue) -> None:
        # ORM cascade removes the venue's bookings as well.
        await self._session.delete(venue)
        await self._session.flush()
