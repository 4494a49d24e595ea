"""
noroff_api.db.repositories.bookings

Repository for `Booking` entities.

Responsibilities:
- CRUD for bookings.
- Paginated listing (all bookings or per customer) with optional `customer` / `venue` loading.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.interfaces import ORMOption

from noroff_api.db.models import Booking, Venue
from noroff_api.db.paging import PageQuery, PageResult, paginate

SORTABLE = {
    "dateFrom": Booking.date_from,
    "dateTo": Booking.date_to,
    "guests": Booking.guests,
    "created": Booking.created_at,
    "updated": Booking.updated_at,
}


def _loaders(include: Iterable[str]) -> list[ORMOption]:
    # The customer is the booking's owner and is always loaded for the access guard.
    options: list[ORMOption] = [selectinload(Booking.customer)]
    if "venue" in include:
        options.append(selectinload(Booking.venue).selectinload(Venue.owner))
    return options


class BookingRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, booking_id: uuid.UUID, *, include: Iterable[str] = ()) -> Booking | None:
        stmt = (
            select(Booking)
            .where(Booking.id == booking_id)
            .options(*_loaders(include))
            .execution_options(populate_existing=True)
        )
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def list(self, *, query: PageQuery, include: Iterable[str] = ()) -> PageResult[Booking]:
        return await paginate(
            self._session,
            select(Booking),
            query=query,
            sortable=SORTABLE,
            default_sort="created",
            options=_loaders(include),
        )

    async def list_for_customer(
        self, customer_id: uuid.UUID, *, query: PageQuery, include: Iterable[str] = ()
    ) -> PageResult[Booking]:
        return await paginate(
            self._session,
            select(Booking).where(Booking.customer_id == customer_id),
            query=query,
            sortable=SORTABLE,
            default_sort="created",
            options=_loaders(include),
        )

    async def create(
        self, *, customer_id: uuid.UUID, venue_id: uuid.UUID, fields: dict[str, Any]
    ) -> Booking:
        booking = Booking(customer_id=customer_id, venue_id=venue_id, **fields)
        self._session.add(booking)
        await self._session.flush()
        return booking

    async def update(self, booking: Booking, fields: dict[str, Any]) -> Booking:
        for key, value in fields.items():
            setattr(booking, key, value)
        await self._session.flush()
        return booking

    async def delete(self, booking: Booking) -> None:
        await self._session.delete(booking)
        await self._session.flush()
