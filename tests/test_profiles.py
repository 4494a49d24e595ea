"""
tests.test_profiles

Holidaze profile endpoints.
"""

from __future__ import annotations

import httpx
import pytest
from helpers import BROKEN_IMAGE, FakeMediaValidator, auth_headers, error_codes, venue_payload


@pytest.mark.asyncio
async def test_list_and_get_profiles(client: httpx.AsyncClient) -> None:
    alice = await auth_headers(client, "alice")
    await auth_headers(client, "bob")

    r = await client.get("/v2/holidaze/profiles", headers=alice)
    assert r.status_code == 200
    body = r.json()
    assert [p["name"] for p in body["data"]] == ["bob", "alice"]
    assert body["meta"]["totalCount"] == 2

    r = await client.get("/v2/holidaze/profiles", params={"sortOrder": "asc"}, headers=alice)
    assert [p["name"] for p in r.json()["data"]] == ["alice", "bob"]

    r = await client.get("/v2/holidaze/profiles/BOB", headers=alice)
    assert r.status_code == 200
    assert r.json()["data"]["name"] == "bob"

    r = await client.get("/v2/holidaze/profiles/nobody", headers=alice)
    assert r.status_code == 404
    assert r.json()["errors"][0]["message"] == "No profile with this name"


@pytest.mark.asyncio
async def test_profile_venue_and_booking_inclusions(client: httpx.AsyncClient) -> None:
    alice = await auth_headers(client, "alice", venue_manager=True)
    r = await client.post("/v2/holidaze/venues", json=venue_payload(), headers=alice)
    venue_id = r.json()["data"]["id"]

    r = await client.get(
        "/v2/holidaze/profiles/alice",
        params={"_venues": "true", "_bookings": "true", "_owner": "true"},
        headers=alice,
    )
    data = r.json()["data"]
    assert [v["id"] for v in data["venues"]] == [venue_id]
    assert data["bookings"] == []
    assert "owner" not in data

    r = await client.get("/v2/holidaze/profiles/alice/venues", headers=alice)
    assert [v["id"] for v in r.json()["data"]] == [venue_id]

    r = await client.get("/v2/holidaze/profiles/alice/bookings", headers=alice)
    assert r.json()["data"] == []
    assert r.json()["meta"]["pageCount"] == 0


@pytest.mark.asyncio
async def test_update_own_profile(client: httpx.AsyncClient) -> None:
    alice = await auth_headers(client, "alice")

    r = await client.put(
        "/v2/holidaze/profiles/alice",
        json={"bio": "Hello", "avatar": {"url": "https://img.example/me.png", "alt": "me"}},
        headers=alice,
    )
    assert r.status_code == 200, r.text
    data = r.json()["data"]
    assert data["bio"] == "Hello"
    assert data["avatar"] == {"url": "https://img.example/me.png", "alt": "me"}


@pytest.mark.asyncio
async def test_update_requires_at_least_one_field(client: httpx.AsyncClient) -> None:
    alice = await auth_headers(client, "alice")
    r = await client.put("/v2/holidaze/profiles/alice", json={}, headers=alice)
    assert r.status_code == 400
    assert r.json()["errors"][0]["message"] == "You must provide at least one field to update"


@pytest.mark.asyncio
async def test_cannot_update_someone_else(client: httpx.AsyncClient) -> None:
    await auth_headers(client, "alice")
    bob = await auth_headers(client, "bob")
    r = await client.put("/v2/holidaze/profiles/alice", json={"bio": "pwned"}, headers=bob)
    assert r.status_code == 403
    assert error_codes(r) == ["NOT_OWNER"]
    assert r.json()["errors"][0]["message"] == "You are not the owner of this profile"


@pytest.mark.asyncio
async def test_update_rejects_broken_banner(
    client: httpx.AsyncClient, media_validator: FakeMediaValidator
) -> None:
    alice = await auth_headers(client, "alice")
    r = await client.put(
        "/v2/holidaze/profiles/alice",
        json={"avatar": {"url": "https://img.example/ok.png"}, "banner": {"url": BROKEN_IMAGE}},
        headers=alice,
    )
    assert r.status_code == 400
    assert error_codes(r) == ["INVALID_MEDIA"]
    assert media_validator.calls == ["https://img.example/ok.png", BROKEN_IMAGE]

    r = await client.get("/v2/holidaze/profiles/alice", headers=alice)
    assert r.json()["data"]["avatar"] is None
