"""
noroff_api.api.routers.bookings

Holidaze booking endpoints (bearer token + API key).

Responsibilities:
- List/get bookings with `_customer` / `_venue` inclusion flags.
- Create bookings for the calling profile against an existing venue.
- Update/delete bookings owned by the calling profile (access guard).
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from fastapi import APIRouter, Depends, Response
from pydantic import Field, field_validator, model_validator
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import (
    HTTP_201_CREATED,
    HTTP_204_NO_CONTENT,
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
)

from noroff_api.api.deps import db_session, guard_for, inclusion_flags
from noroff_api.api.errors import ApiError, enforce
from noroff_api.api.pagination import page_body, page_query
from noroff_api.api.schemas import CamelModel, naive_utc
from noroff_api.api.serializers import booking_out
from noroff_api.auth.deps import api_principal
from noroff_api.auth.models import Principal
from noroff_api.db.models import Booking, Venue
from noroff_api.db.paging import PageQuery
from noroff_api.db.repositories.bookings import SORTABLE, BookingRepo
from noroff_api.db.repositories.profiles import ProfileRepo
from noroff_api.db.repositories.venues import VenueRepo
from noroff_api.guard.core import ResourceAccessGuard
from noroff_api.guard.policy import BOOKING, Action, Resource
from noroff_api.observability.logging import get_logger

log = get_logger(__name__)

router = APIRouter(prefix="/v2/holidaze/bookings", tags=["holidaze-bookings"])

_guard = guard_for(BOOKING)


class CreateBookingRequest(CamelModel):
    date_from: datetime
    date_to: datetime
    guests: int = Field(ge=1)
    venue_id: uuid.UUID

    @field_validator("date_from", "date_to")
    @classmethod
    def _normalize(cls, value: datetime) -> datetime:
        return naive_utc(value)

    @model_validator(mode="after")
    def _check_range(self) -> CreateBookingRequest:
        if self.date_from >= self.date_to:
            raise ValueError("dateFrom must be before dateTo")
        return self


class UpdateBookingRequest(CamelModel):
    date_from: datetime | None = None
    date_to: datetime | None = None
    guests: int | None = Field(default=None, ge=1)

    @field_validator("date_from", "date_to")
    @classmethod
    def _normalize(cls, value: datetime | None) -> datetime | None:
        return naive_utc(value) if value is not None else None


def _check_guests(guests: int, venue: Venue) -> None:
    if guests > venue.max_guests:
        raise ApiError(
            HTTP_400_BAD_REQUEST,
            f"Guests cannot exceed the venue's maximum of {venue.max_guests}",
            path=["guests"],
        )


async def _get_or_404(
    repo: BookingRepo, booking_id: uuid.UUID, include: frozenset[str] = frozenset()
) -> Booking:
    booking = await repo.get(booking_id, include=include)
    if booking is None:
        raise ApiError(HTTP_404_NOT_FOUND, "No booking with such ID")
    return booking


@router.get("")
async def list_bookings(
    query: PageQuery = Depends(page_query(SORTABLE)),
    include: dict[str, bool] = Depends(inclusion_flags),
    principal: Principal = Depends(api_principal),
    session: AsyncSession = Depends(db_session),
    guard: ResourceAccessGuard = Depends(_guard),
) -> dict[str, Any]:
    inclusions = enforce(
        await guard.authorize(Action.read, principal, include=include, limit=query.limit),
        kind=BOOKING.kind,
    )
    result = await BookingRepo(session).list(query=query, include=inclusions)
    return page_body(result, lambda b: booking_out(b, inclusions))


@router.get("/{booking_id}")
async def get_booking(
    booking_id: uuid.UUID,
    include: dict[str, bool] = Depends(inclusion_flags),
    principal: Principal = Depends(api_principal),
    session: AsyncSession = Depends(db_session),
    guard: ResourceAccessGuard = Depends(_guard),
) -> dict[str, Any]:
    inclusions = enforce(
        await guard.authorize(Action.read, principal, include=include), kind=BOOKING.kind
    )
    booking = await _get_or_404(BookingRepo(session), booking_id, inclusions)
    return {"data": booking_out(booking, inclusions), "meta": {}}


@router.post("", status_code=HTTP_201_CREATED)
async def create_booking(
    body: CreateBookingRequest,
    include: dict[str, bool] = Depends(inclusion_flags),
    principal: Principal = Depends(api_principal),
    session: AsyncSession = Depends(db_session),
    guard: ResourceAccessGuard = Depends(_guard),
) -> dict[str, Any]:
    inclusions = enforce(
        await guard.authorize(Action.create, principal, None, include), kind=BOOKING.kind
    )

    venue = await VenueRepo(session).get(body.venue_id)
    if venue is None:
        raise ApiError(HTTP_404_NOT_FOUND, "No venue with such ID")
    _check_guests(body.guests, venue)

    customer = await ProfileRepo(session).get_by_name(principal.identity)
    if customer is None:
        raise ApiError(HTTP_404_NOT_FOUND, "Profile not found")

    repo = BookingRepo(session)
    created = await repo.create(
        customer_id=customer.id,
        venue_id=venue.id,
        fields=body.model_dump(exclude={"venue_id"}),
    )
    await session.commit()
    log.info("booking.created", booking_id=str(created.id), venue_id=str(venue.id))

    booking = await _get_or_404(repo, created.id, inclusions)
    return {"data": booking_out(booking, inclusions), "meta": {}}


@router.put("/{booking_id}")
async def update_booking(
    booking_id: uuid.UUID,
    body: UpdateBookingRequest,
    include: dict[str, bool] = Depends(inclusion_flags),
    principal: Principal = Depends(api_principal),
    session: AsyncSession = Depends(db_session),
    guard: ResourceAccessGuard = Depends(_guard),
) -> dict[str, Any]:
    repo = BookingRepo(session)
    booking = await _get_or_404(repo, booking_id)
    inclusions = enforce(
        await guard.authorize(
            Action.update, principal, Resource(owner=booking.customer.name), include
        ),
        kind=BOOKING.kind,
    )

    fields = {k: v for k, v in body.model_dump(exclude_unset=True).items() if v is not None}
    if fields.get("date_from", booking.date_from) >= fields.get("date_to", booking.date_to):
        raise ApiError(HTTP_400_BAD_REQUEST, "dateFrom must be before dateTo", path=["dateFrom"])
    if "guests" in fields:
        venue = await VenueRepo(session).get(booking.venue_id)
        if venue is not None:
            _check_guests(fields["guests"], venue)

    await repo.update(booking, fields)
    await session.commit()
    log.info("booking.updated", booking_id=str(booking_id))

    booking = await _get_or_404(repo, booking_id, inclusions)
    return {"data": booking_out(booking, inclusions), "meta": {}}


@router.delete("/{booking_id}", status_code=HTTP_204_NO_CONTENT)
async def delete_booking(
    booking_id: uuid.UUID,
    principal: Principal = Depends(api_principal),
    session: AsyncSession = Depends(db_session),
    guard: ResourceAccessGuard = Depends(_guard),
) -> Response:
    repo = BookingRepo(session)
    booking = await _get_or_404(repo, booking_id)
    enforce(
        await guard.authorize(Action.delete, principal, Resource(owner=booking.customer.name)),
        kind=BOOKING.kind,
    )

    await repo.delete(booking)
    await session.commit()
    log.info("booking.deleted", booking_id=str(booking_id))
    return Response(status_code=HTTP_204_NO_CONTENT)
