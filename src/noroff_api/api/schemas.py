"""
noroff_api.api.schemas

Request models shared across routers.

Responsibilities:
- camelCase wire names for request bodies (snake_case in Python).
- Shared value objects: media references, venue amenities and location.
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from noroff_api.guard.media import MAX_URL_LENGTH


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Media(CamelModel):
    url: str = Field(min_length=1, max_length=MAX_URL_LENGTH)
    alt: str = Field(default="", max_length=120)


class VenueMeta(CamelModel):
    wifi: bool = False
    parking: bool = False
    breakfast: bool = False
    pets: bool = False


class VenueLocation(CamelModel):
    address: str | None = None
    city: str | None = None
    zip: str | None = None
    country: str | None = None
    continent: str | None = None
    lat: float = Field(default=0, ge=-90, le=90)
    lng: float = Field(default=0, ge=-180, le=180)


def media_urls(*items: Media | list[Media] | None) -> list[str]:
    """Flatten optional media fields into the ordered URL list the guard validates."""

    urls: list[str] = []
    for item in items:
        if item is None:
            continue
        if isinstance(item, list):
            urls.extend(m.url for m in item)
        else:
            urls.append(item.url)
    return urls


def naive_utc(value: datetime) -> datetime:
    # Stored timestamps are naive UTC; normalize aware inputs before comparing or saving.
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)
