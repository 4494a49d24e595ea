"""
noroff_api.db.repositories.catalog

Read-only repository shared by the practice datasets (products, cat facts, old games, books).
"""

from __future__ import annotations

import random
from typing import Any, Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from noroff_api.db.models import Book, CatFact, OldGame, Product
from noroff_api.db.paging import PageQuery, PageResult, paginate

M = TypeVar("M", Product, CatFact, OldGame, Book)

PRODUCT_SORTABLE = {
    "title": Product.title,
    "price": Product.price,
    "discountedPrice": Product.discounted_price,
    "rating": Product.rating,
}
CAT_FACT_SORTABLE = {"id": CatFact.id, "text": CatFact.text}
OLD_GAME_SORTABLE = {"id": OldGame.id, "name": OldGame.name, "released": OldGame.released}
BOOK_SORTABLE = {
    "id": Book.id,
    "title": Book.title,
    "author": Book.author,
    "published": Book.published,
}


class CatalogRepo(Generic[M]):
    def __init__(
        self,
        session: AsyncSession,
        model: type[M],
        *,
        sortable: dict[str, InstrumentedAttribute[Any]],
        default_sort: str,
    ) -> None:
        self._session = session
        self._model = model
        self._sortable = sortable
        self._default_sort = default_sort

    async def get(self, item_id: Any) -> M | None:
        return await self._session.get(self._model, item_id)

    async def list(self, *, query: PageQuery) -> PageResult[M]:
        return await paginate(
            self._session,
            select(self._model),
            query=query,
            sortable=self._sortable,
            default_sort=self._default_sort,
        )

    async def random(self) -> M | None:
        total = (
            await self._session.execute(select(func.count()).select_from(self._model))
        ).scalar_one()
        if not total:
            return None
        # Offset-based pick stays uniform even when ids have gaps.
        stmt = select(self._model).offset(random.randrange(total)).limit(1)
        return (await self._session.execute(stmt)).scalar_one_or_none()


def products(session: AsyncSession) -> CatalogRepo[Product]:
    return CatalogRepo(session, Product, sortable=PRODUCT_SORTABLE, default_sort="title")


def cat_facts(session: AsyncSession) -> CatalogRepo[CatFact]:
    return CatalogRepo(session, CatFact, sortable=CAT_FACT_SORTABLE, default_sort="id")


def old_games(session: AsyncSession) -> CatalogRepo[OldGame]:
    return CatalogRepo(session, OldGame, sortable=OLD_GAME_SORTABLE, default_sort="id")


def books(session: AsyncSession) -> CatalogRepo[Book]:
    return CatalogRepo(session, Book, sortable=BOOK_SORTABLE, default_sort="id")
