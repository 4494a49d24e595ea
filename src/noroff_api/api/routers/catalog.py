"""
noroff_api.api.routers.catalog

Public read-only practice datasets.

Responsibilities:
- Online shop products: list, get.
- Cat facts, old games and books: list, get, random.
"""

from __future__ import annotations

import uuid
from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_404_NOT_FOUND

from noroff_api.api.deps import db_session, guard_for
from noroff_api.api.errors import ApiError, enforce
from noroff_api.api.pagination import page_body, page_query
from noroff_api.api.serializers import book_out, cat_fact_out, old_game_out, product_out
from noroff_api.db.paging import PageQuery
from noroff_api.db.repositories import catalog
from noroff_api.guard.core import ResourceAccessGuard
from noroff_api.guard.policy import BOOK, CAT_FACT, OLD_GAME, PRODUCT, Action

online_shop_router = APIRouter(prefix="/v2/online-shop", tags=["online-shop"])
cat_facts_router = APIRouter(prefix="/v2/cat-facts", tags=["cat-facts"])
old_games_router = APIRouter(prefix="/v2/old-games", tags=["old-games"])
books_router = APIRouter(prefix="/v2/books", tags=["books"])


async def _check_limit(guard: ResourceAccessGuard, query: PageQuery) -> None:
    enforce(await guard.authorize(Action.read, None, limit=query.limit), kind=guard.policy.kind)


# Online shop


@online_shop_router.get("")
async def list_products(
    query: PageQuery = Depends(page_query(catalog.PRODUCT_SORTABLE)),
    session: AsyncSession = Depends(db_session),
    guard: ResourceAccessGuard = Depends(guard_for(PRODUCT)),
) -> dict[str, Any]:
    await _check_limit(guard, query)
    result = await catalog.products(session).list(query=query)
    if not result.items:
        raise ApiError(HTTP_404_NOT_FOUND, "Couldn't find any products.")
    return page_body(result, product_out)


@online_shop_router.get("/{product_id}")
async def get_product(
    product_id: uuid.UUID,
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    product = await catalog.products(session).get(product_id)
    if product is None:
        raise ApiError(HTTP_404_NOT_FOUND, "No product with such ID")
    return {"data": product_out(product), "meta": {}}


# Cat facts


@cat_facts_router.get("")
async def list_cat_facts(
    query: PageQuery = Depends(page_query(catalog.CAT_FACT_SORTABLE)),
    session: AsyncSession = Depends(db_session),
    guard: ResourceAccessGuard = Depends(guard_for(CAT_FACT)),
) -> dict[str, Any]:
    await _check_limit(guard, query)
    result = await catalog.cat_facts(session).list(query=query)
    return page_body(result, cat_fact_out)


@cat_facts_router.get("/random")
async def random_cat_fact(session: AsyncSession = Depends(db_session)) -> dict[str, Any]:
    fact = await catalog.cat_facts(session).random()
    if fact is None:
        raise ApiError(HTTP_404_NOT_FOUND, "No cat facts available")
    return {"data": cat_fact_out(fact), "meta": {}}


@cat_facts_router.get("/{fact_id}")
async def get_cat_fact(fact_id: int, session: AsyncSession = Depends(db_session)) -> dict[str, Any]:
    fact = await catalog.cat_facts(session).get(fact_id)
    if fact is None:
        raise ApiError(HTTP_404_NOT_FOUND, "No cat fact with such ID")
    return {"data": cat_fact_out(fact), "meta": {}}


# Old games


@old_games_router.get("")
async def list_old_games(
    query: PageQuery = Depends(page_query(catalog.OLD_GAME_SORTABLE)),
    session: AsyncSession = Depends(db_session),
    guard: ResourceAccessGuard = Depends(guard_for(OLD_GAME)),
) -> dict[str, Any]:
    await _check_limit(guard, query)
    result = await catalog.old_games(session).list(query=query)
    return page_body(result, old_game_out)


@old_games_router.get("/random")
async def random_old_game(session: AsyncSession = Depends(db_session)) -> dict[str, Any]:
    game = await catalog.old_games(session).random()
    if game is None:
        raise ApiError(HTTP_404_NOT_FOUND, "No old games available")
    return {"data": old_game_out(game), "meta": {}}


@old_games_router.get("/{game_id}")
async def get_old_game(game_id: int, session: AsyncSession = Depends(db_session)) -> dict[str, Any]:
    game = await catalog.old_games(session).get(game_id)
    if game is None:
        raise ApiError(HTTP_404_NOT_FOUND, "No old game with such ID")
    return {"data": old_game_out(game), "meta": {}}


# Books


@books_router.get("")
async def list_books(
    query: PageQuery = Depends(page_query(catalog.BOOK_SORTABLE)),
    session: AsyncSession = Depends(db_session),
    guard: ResourceAccessGuard = Depends(guard_for(BOOK)),
) -> dict[str, Any]:
    await _check_limit(guard, query)
    result = await catalog.books(session).list(query=query)
    return page_body(result, book_out)


@books_router.get("/random")
async def random_book(session: AsyncSession = Depends(db_session)) -> dict[str, Any]:
    book = await catalog.books(session).random()
    if book is None:
        raise ApiError(HTTP_404_NOT_FOUND, "No books available")
    return {"data": book_out(book), "meta": {}}


@books_router.get("/{book_id}")
async def get_book(book_id: int, session: AsyncSession = Depends(db_session)) -> dict[str, Any]:
    book = await catalog.books(session).get(book_id)
    if book is None:
        raise ApiError(HTTP_404_NOT_FOUND, "No book with such ID")
    return {"data": book_out(book), "meta": {}}
