"""
tests.test_catalog

Public practice datasets: online shop, cat facts, old games, books.
"""

from __future__ import annotations

import httpx
import pytest
from fastapi import FastAPI
from helpers import error_codes

from noroff_api.db.models import Book, CatFact, OldGame, Product


async def _seed(app: FastAPI, *rows: object) -> None:
    async with app.state.sessionmaker() as session:
        session.add_all(rows)
        await session.commit()


@pytest.mark.asyncio
async def test_online_shop_is_empty_until_seeded(app: FastAPI, client: httpx.AsyncClient) -> None:
    r = await client.get("/v2/online-shop")
    assert r.status_code == 404
    assert r.json()["errors"][0]["message"] == "Couldn't find any products."

    await _seed(
        app,
        Product(title="Mug", description="A mug", price=10, discounted_price=8),
        Product(title="Cap", description="A cap", price=20, discounted_price=20),
    )

    r = await client.get("/v2/online-shop", params={"sort": "price", "sortOrder": "asc"})
    assert r.status_code == 200
    products = r.json()["data"]
    assert [p["title"] for p in products] == ["Mug", "Cap"]
    assert products[0]["discountedPrice"] == 8

    r = await client.get(f"/v2/online-shop/{products[1]['id']}")
    assert r.status_code == 200
    assert r.json()["data"]["title"] == "Cap"


@pytest.mark.asyncio
async def test_cat_facts(app: FastAPI, client: httpx.AsyncClient) -> None:
    r = await client.get("/v2/cat-facts/random")
    assert r.status_code == 404

    await _seed(app, CatFact(text="Cats sleep a lot."), CatFact(text="Cats purr."))

    r = await client.get("/v2/cat-facts", params={"sortOrder": "asc"})
    assert [f["text"] for f in r.json()["data"]] == ["Cats sleep a lot.", "Cats purr."]

    r = await client.get("/v2/cat-facts/random")
    assert r.status_code == 200
    assert r.json()["data"]["text"] in {"Cats sleep a lot.", "Cats purr."}

    r = await client.get("/v2/cat-facts/2")
    assert r.json()["data"]["text"] == "Cats purr."

    r = await client.get("/v2/cat-facts/99")
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_old_games(app: FastAPI, client: httpx.AsyncClient) -> None:
    await _seed(
        app,
        OldGame(
            name="Pong",
            description="Tennis",
            released="1972",
            genre=["Sports"],
            image="https://img.example/pong.png",
        ),
    )

    r = await client.get("/v2/old-games")
    assert r.status_code == 200
    game = r.json()["data"][0]
    assert game["name"] == "Pong"
    assert game["genre"] == ["Sports"]

    r = await client.get("/v2/old-games/random")
    assert r.json()["data"]["id"] == game["id"]


@pytest.mark.asyncio
async def test_catalog_limit_ceiling(client: httpx.AsyncClient) -> None:
    for path in ("/v2/online-shop", "/v2/cat-facts", "/v2/old-games", "/v2/books"):
        r = await client.get(path, params={"limit": 101})
        assert r.status_code == 400
        assert error_codes(r) == ["LIMIT_EXCEEDED"]


@pytest.mark.asyncio
async def test_books(app: FastAPI, client: httpx.AsyncClient) -> None:
    r = await client.get("/v2/books")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("application/json")
    assert r.json()["data"] == []

    r = await client.get("/v2/books/random")
    assert r.status_code == 404

    await _seed(
        app,
        Book(
            title="Dune",
            author="Frank Herbert",
            genre="Science fiction",
            description="Spice.",
            isbn="9780441013593",
            image="https://img.example/dune.png",
            published="1965",
            publisher="Chilton Books",
        ),
    )

    r = await client.get("/v2/books", params={"sort": "title"})
    book = r.json()["data"][0]
    assert book["author"] == "Frank Herbert"

    r = await client.get(f"/v2/books/{book['id']}")
    assert r.json()["data"]["isbn"] == "9780441013593"

    r = await client.get("/v2/books/random")
    assert r.json()["data"]["id"] == book["id"]

    r = await client.get("/v2/books/42")
    assert r.status_code == 404
