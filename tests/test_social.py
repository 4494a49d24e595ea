"""
tests.test_social

Social profile endpoints: follow graph and search.
"""

from __future__ import annotations

import httpx
import pytest
from helpers import auth_headers

from noroff_api.db.repositories.profiles import ProfileRepo


@pytest.mark.asyncio
async def test_follow_and_unfollow(client: httpx.AsyncClient) -> None:
    alice = await auth_headers(client, "alice")
    await auth_headers(client, "bob")

    r = await client.put("/v2/social/profiles/bob/follow", headers=alice)
    assert r.status_code == 200, r.text
    assert [p["name"] for p in r.json()["data"]["followers"]] == ["alice"]

    r = await client.put("/v2/social/profiles/bob/follow", headers=alice)
    assert r.status_code == 400
    assert r.json()["errors"][0]["message"] == "You are already following this profile"

    r = await client.get(
        "/v2/social/profiles/alice", params={"_following": "true"}, headers=alice
    )
    assert [p["name"] for p in r.json()["data"]["following"]] == ["bob"]
    assert "followers" not in r.json()["data"]

    r = await client.put("/v2/social/profiles/bob/unfollow", headers=alice)
    assert r.status_code == 200
    assert r.json()["data"]["followers"] == []

    r = await client.put("/v2/social/profiles/bob/unfollow", headers=alice)
    assert r.status_code == 400
    assert r.json()["errors"][0]["message"] == "You are not following this profile"


@pytest.mark.asyncio
async def test_cannot_follow_yourself(client: httpx.AsyncClient) -> None:
    alice = await auth_headers(client, "alice")
    r = await client.put("/v2/social/profiles/ALICE/follow", headers=alice)
    assert r.status_code == 400
    assert r.json()["errors"][0]["message"] == "You can't follow yourself"


@pytest.mark.asyncio
async def test_follow_unknown_profile(client: httpx.AsyncClient) -> None:
    alice = await auth_headers(client, "alice")
    r = await client.put("/v2/social/profiles/ghost/follow", headers=alice)
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_search_profiles(client: httpx.AsyncClient) -> None:
    alice = await auth_headers(client, "alice")
    await auth_headers(client, "alfred")
    await auth_headers(client, "bob")

    r = await client.get("/v2/social/profiles/search", params={"q": "AL", "sortOrder": "asc"}, headers=alice)
    assert r.status_code == 200
    assert [p["name"] for p in r.json()["data"]] == ["alfred", "alice"]

    r = await client.get("/v2/social/profiles/search", headers=alice)
    assert r.status_code == 400

    r = await client.get("/v2/social/profiles/search", params={"q": "a", "limit": 101}, headers=alice)
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_search_wildcards_match_literally(client: httpx.AsyncClient) -> None:
    alice = await auth_headers(client, "alice")
    await auth_headers(client, "bob_smith")

    r = await client.get("/v2/social/profiles/search", params={"q": "_"}, headers=alice)
    assert [p["name"] for p in r.json()["data"]] == ["bob_smith"]

    r = await client.get("/v2/social/profiles/search", params={"q": "%"}, headers=alice)
    assert r.json()["data"] == []


@pytest.mark.asyncio
async def test_concurrent_duplicate_follow_is_a_400(
    client: httpx.AsyncClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    alice = await auth_headers(client, "alice")
    await auth_headers(client, "bob")
    assert (await client.put("/v2/social/profiles/bob/follow", headers=alice)).status_code == 200

    # A racing request passes the check before the first insert lands.
    async def _not_following(self, *, follower_id, following_id) -> bool:
        return False

    monkeypatch.setattr(ProfileRepo, "is_following", _not_following)

    r = await client.put("/v2/social/profiles/bob/follow", headers=alice)
    assert r.status_code == 400
    assert r.json()["errors"][0]["message"] == "You are already following this profile"
