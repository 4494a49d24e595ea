"""
noroff_api.db.models

Persistence schema for the API modules.

Responsibilities:
- Define ORM models:
  - Profile / Follow / ApiKey: accounts, social graph and issued API keys
  - Venue / Booking: holidaze accommodation domain
  - Product / CatFact / OldGame / Book: read-only practice datasets
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    Uuid as SAUuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from noroff_api.db.base import Base


def _utcnow() -> datetime:
    # Naive UTC timestamps; SQLite has no tz-aware storage.
    return datetime.now(tz=UTC).replace(tzinfo=None)


follows = Table(
    "follows",
    Base.metadata,
    Column("follower_id", SAUuid(as_uuid=True), ForeignKey("profiles.id", ondelete="CASCADE"), primary_key=True),
    Column("following_id", SAUuid(as_uuid=True), ForeignKey("profiles.id", ondelete="CASCADE"), primary_key=True),
)


class Profile(Base):
    __tablename__ = "profiles"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    name: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)
    # `identity_key(name)`; uniqueness and lookups go through this column.
    name_key: Mapped[str] = mapped_column(String(64), nullable=False, unique=True, index=True)
    # Stored lower-case; lookups are case-insensitive.
    email: Mapped[str] = mapped_column(String(256), nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(128), nullable=False)

    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    avatar: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    banner: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    venue_manager: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=_utcnow, onupdate=_utcnow
    )

    venues: Mapped[list[Venue]] = relationship(
        back_populates="owner", cascade="all, delete-orphan"
    )
    bookings: Mapped[list[Booking]] = relationship(
        back_populates="customer", cascade="all, delete-orphan"
    )
    api_keys: Mapped[list[ApiKey]] = relationship(
        back_populates="owner", cascade="all, delete-orphan"
    )
    followers: Mapped[list[Profile]] = relationship(
        secondary=follows,
        primaryjoin=lambda: Profile.id == follows.c.following_id,
        secondaryjoin=lambda: Profile.id == follows.c.follower_id,
        viewonly=True,
    )
    following: Mapped[list[Profile]] = relationship(
        secondary=follows,
        primaryjoin=lambda: Profile.id == follows.c.follower_id,
        secondaryjoin=lambda: Profile.id == follows.c.following_id,
        viewonly=True,
    )


class ApiKey(Base):
    __tablename__ = "api_keys"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    key: Mapped[str] = mapped_column(String(64), nullable=False, unique=True, index=True)
    name: Mapped[str] = mapped_column(String(64), nullable=False, default="API Key")
    owner_id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), ForeignKey("profiles.id"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)

    owner: Mapped[Profile] = relationship(back_populates="api_keys")


class Venue(Base):
    __tablename__ = "venues"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    media: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    max_guests: Mapped[int] = mapped_column(Integer, nullable=False)
    rating: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    # Amenities {wifi, parking, breakfast, pets} and location {address, city, zip, ...}.
    meta: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    location: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    owner_id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), ForeignKey("profiles.id"), nullable=False, index=True
    )

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=_utcnow, onupdate=_utcnow
    )

    owner: Mapped[Profile] = relationship(back_populates="venues")
    bookings: Mapped[list[Booking]] = relationship(
        back_populates="venue", cascade="all, delete-orphan"
    )


class Booking(Base):
    __tablename__ = "bookings"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    date_from: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    date_to: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    guests: Mapped[int] = mapped_column(Integer, nullable=False)

    venue_id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), ForeignKey("venues.id"), nullable=False
    )
    customer_id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), ForeignKey("profiles.id"), nullable=False, index=True
    )

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=_utcnow, onupdate=_utcnow
    )

    venue: Mapped[Venue] = relationship(back_populates="bookings")
    customer: Mapped[Profile] = relationship(back_populates="bookings")

    __table_args__ = (Index("ix_bookings_venue_dates", "venue_id", "date_from", "date_to"),)


class Product(Base):
    __tablename__ = "products"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    title: Mapped[str] = mapped_column(String(256), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    discounted_price: Mapped[float] = mapped_column(Float, nullable=False)
    image: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    rating: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    reviews: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)


class CatFact(Base):
    __tablename__ = "cat_facts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    text: Mapped[str] = mapped_column(Text, nullable=False)


class OldGame(Base):
    __tablename__ = "old_games"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    released: Mapped[str] = mapped_column(String(16), nullable=False)
    genre: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    image: Mapped[str] = mapped_column(String(512), nullable=False)


class Book(Base):
    __tablename__ = "books"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(256), nullable=False)
    author: Mapped[str] = mapped_column(String(256), nullable=False)
    genre: Mapped[str] = mapped_column(String(64), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    isbn: Mapped[str] = mapped_column(String(32), nullable=False)
    image: Mapped[str] = mapped_column(String(512), nullable=False)
    published: Mapped[str] = mapped_column(String(16), nullable=False)
    publisher: Mapped[str] = mapped_column(String(256), nullable=False)


# --- Module Notes -----------------------------------------------------------
# Ownership columns (`Venue.owner_id`, `Booking.customer_id`) are set once at creation;
# no update path rewrites them.
