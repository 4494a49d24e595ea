"""
tests.helpers

Test doubles and request helpers shared by the API tests.
"""

from __future__ import annotations

from typing import Any

import httpx

from noroff_api.result import Failure, Result, Success

PASSWORD = "correct-horse-battery"
BROKEN_IMAGE = "https://img.example/broken.png"


class FakeMediaValidator:
    """Accepts every URL except those listed in `bad`; records every call."""

    def __init__(self, bad: set[str] | None = None) -> None:
        self.bad = set(bad or ())
        self.calls: list[str] = []

    async def validate(self, url: str) -> Result[None, str]:
        self.calls.append(url)
        if url in self.bad:
            return Failure("Image is not accessible")
        return Success(None)


async def register(
    client: httpx.AsyncClient, name: str, *, venue_manager: bool = False, **extra: Any
) -> httpx.Response:
    return await client.post(
        "/v2/auth/register",
        json={
            "name": name,
            "email": f"{name}@stud.noroff.no",
            "password": PASSWORD,
            "venueManager": venue_manager,
            **extra,
        },
    )


async def bearer(client: httpx.AsyncClient, name: str) -> dict[str, str]:
    r = await client.post(
        "/v2/auth/login", json={"email": f"{name}@stud.noroff.no", "password": PASSWORD}
    )
    assert r.status_code == 200, r.text
    return {"Authorization": f"Bearer {r.json()['data']['accessToken']}"}


async def auth_headers(
    client: httpx.AsyncClient, name: str, *, venue_manager: bool = False
) -> dict[str, str]:
    """Register `name`, log in, and mint an API key; returns headers for both."""

    r = await register(client, name, venue_manager=venue_manager)
    assert r.status_code == 201, r.text
    headers = await bearer(client, name)
    r = await client.post("/v2/auth/create-api-key", headers=headers)
    assert r.status_code == 201, r.text
    return {**headers, "X-Noroff-API-Key": r.json()["data"]["key"]}


def venue_payload(**overrides: Any) -> dict[str, Any]:
    body: dict[str, Any] = {
        "name": "Nice hotel",
        "description": "A nice hotel",
        "price": 100,
        "maxGuests": 2,
        "media": [{"url": "https://img.example/front.png", "alt": "front"}],
        "location": {"city": "Oslo", "country": "Norway"},
    }
    body.update(overrides)
    return body


def error_codes(response: httpx.Response) -> list[str | None]:
    return [e.get("code") for e in response.json()["errors"]]
