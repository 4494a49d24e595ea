"""
noroff_api.db.paging

Offset pagination and sorting for list queries.

Responsibilities:
- Apply limit/page/sort to a SELECT and count the unpaged total.
- Compute page metadata returned in list responses.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Generic, Literal, TypeVar

from sqlalchemy import Select, asc, desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute
from sqlalchemy.orm.interfaces import ORMOption

from noroff_api.guard.policy import MAX_LIMIT

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class PageQuery:
    limit: int = MAX_LIMIT
    page: int = 1
    sort: str | None = None
    sort_order: Literal["asc", "desc"] = "desc"

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True, slots=True)
class PageResult(Generic[T]):
    items: list[T]
    total: int
    query: PageQuery

    @property
    def page_count(self) -> int:
        return math.ceil(self.total / self.query.limit) if self.total else 0

    def meta(self) -> dict[str, Any]:
        page = self.query.page
        is_last = page >= self.page_count
        return {
            "isFirstPage": page == 1,
            "isLastPage": is_last,
            "currentPage": page,
            "previousPage": page - 1 if page > 1 else None,
            "nextPage": None if is_last else page + 1,
            "pageCount": self.page_count,
            "totalCount": self.total,
        }


async def paginate(
    session: AsyncSession,
    stmt: Select[Any],
    *,
    query: PageQuery,
    sortable: Mapping[str, InstrumentedAttribute[Any]],
    default_sort: str,
    options: Sequence[ORMOption] = (),
) -> PageResult[Any]:
    # Count against the filtered statement before ordering/limits/loader options are applied.
    total = (
        await session.execute(select(func.count()).select_from(stmt.order_by(None).subquery()))
    ).scalar_one()

    column = sortable[query.sort or default_sort]
    direction = asc if query.sort_order == "asc" else desc
    paged = (
        stmt.options(*options)
        .order_by(direction(column))
        .limit(query.limit)
        .offset(query.offset)
    )
    items = list((await session.execute(paged)).scalars().unique().all())
    return PageResult(items=items, total=total, query=query)


# --- Module Notes -----------------------------------------------------------
# `sortable` maps public (camelCase) sort keys to columns; the API layer validates
# `sort` against the same keys before a query is built.
