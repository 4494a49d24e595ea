"""
noroff_api.api.pagination

Query-parameter dependency for paginated list endpoints.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Literal

from fastapi import Query
from starlette.status import HTTP_400_BAD_REQUEST

from noroff_api.api.errors import ApiError
from noroff_api.db.paging import PageQuery, PageResult
from noroff_api.guard.policy import MAX_LIMIT


def page_query(sortable: Mapping[str, Any]) -> Callable[..., PageQuery]:
    def _dep(
        limit: int = Query(MAX_LIMIT, ge=1),
        page: int = Query(1, ge=1),
        sort: str | None = Query(None),
        sort_order: Literal["asc", "desc"] = Query("desc", alias="sortOrder"),
    ) -> PageQuery:
        # `limit` has no upper bound here: the access guard owns the ceiling.
        if sort is not None and sort not in sortable:
            raise ApiError(
                HTTP_400_BAD_REQUEST,
                f"Cannot sort by '{sort}'. Allowed: {', '.join(sorted(sortable))}",
                path=["sort"],
            )
        return PageQuery(limit=limit, page=page, sort=sort, sort_order=sort_order)

    return _dep


def page_body(result: PageResult[Any], serialize: Callable[[Any], dict[str, Any]]) -> dict[str, Any]:
    return {"data": [serialize(item) for item in result.items], "meta": result.meta()}
