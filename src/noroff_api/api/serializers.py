"""
noroff_api.api.serializers

ORM -> response dict conversion.

Relations are only read when they are in `include`; everything else may not be
loaded on the async session and must not be touched.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from noroff_api.db.models import Book, Booking, CatFact, OldGame, Product, Profile, Venue


def profile_summary(profile: Profile) -> dict[str, Any]:
    return {
        "name": profile.name,
        "email": profile.email,
        "bio": profile.bio,
        "avatar": profile.avatar,
        "banner": profile.banner,
    }


def profile_out(profile: Profile, include: Iterable[str] = ()) -> dict[str, Any]:
    include = frozenset(include)
    out = profile_summary(profile)
    out["venueManager"] = profile.venue_manager
    if "venues" in include:
        out["venues"] = [venue_out(v) for v in profile.venues]
    if "bookings" in include:
        out["bookings"] = [booking_out(b) for b in profile.bookings]
    if "followers" in include:
        out["followers"] = [_follow_entry(p) for p in profile.followers]
    if "following" in include:
        out["following"] = [_follow_entry(p) for p in profile.following]
    return out


def _follow_entry(profile: Profile) -> dict[str, Any]:
    return {"name": profile.name, "avatar": profile.avatar, "banner": profile.banner}


def follow_graph(profile: Profile) -> dict[str, Any]:
    return {
        "followers": [_follow_entry(p) for p in profile.followers],
        "following": [_follow_entry(p) for p in profile.following],
    }


def venue_out(venue: Venue, include: Iterable[str] = ()) -> dict[str, Any]:
    include = frozenset(include)
    out: dict[str, Any] = {
        "id": venue.id,
        "name": venue.name,
        "description": venue.description,
        "media": venue.media,
        "price": venue.price,
        "maxGuests": venue.max_guests,
        "rating": venue.rating,
        "created": venue.created_at,
        "updated": venue.updated_at,
        "meta": venue.meta,
        "location": venue.location,
    }
    if "owner" in include:
        out["owner"] = profile_summary(venue.owner)
    if "bookings" in include:
        out["bookings"] = [booking_out(b) for b in venue.bookings]
    return out


def booking_out(booking: Booking, include: Iterable[str] = ()) -> dict[str, Any]:
    include = frozenset(include)
    out: dict[str, Any] = {
        "id": booking.id,
        "dateFrom": booking.date_from,
        "dateTo": booking.date_to,
        "guests": booking.guests,
        "created": booking.created_at,
        "updated": booking.updated_at,
    }
    if "venue" in include:
        out["venue"] = venue_out(booking.venue)
    if "customer" in include:
        out["customer"] = profile_summary(booking.customer)
    return out


def product_out(product: Product) -> dict[str, Any]:
    return {
        "id": product.id,
        "title": product.title,
        "description": product.description,
        "price": product.price,
        "discountedPrice": product.discounted_price,
        "image": product.image,
        "rating": product.rating,
        "tags": product.tags,
        "reviews": product.reviews,
    }


def cat_fact_out(fact: CatFact) -> dict[str, Any]:
    return {"id": fact.id, "text": fact.text}


def old_game_out(game: OldGame) -> dict[str, Any]:
    return {
        "id": game.id,
        "name": game.name,
        "description": game.description,
        "released": game.released,
        "genre": game.genre,
        "image": game.image,
    }


def book_out(book: Book) -> dict[str, Any]:
    return {
        "id": book.id,
        "title": book.title,
        "author": book.author,
        "genre": book.genre,
        "description": book.description,
        "isbn": book.isbn,
        "image": book.image,
        "published": book.published,
        "publisher": book.publisher,
    }
