from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from noroff_api.db.models import ApiKey


class ApiKeyRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, *, owner_id: uuid.UUID, name: str = "API Key") -> ApiKey:
        api_key = ApiKey(key=str(uuid.uuid4()), name=name, owner_id=owner_id)
        self._session.add(api_key)
        await self._session.flush()
        return api_key

    async def get_by_key(self, key: str) -> ApiKey | None:
        stmt = select(ApiKey).where(ApiKey.key == key)
        return (await self._session.execute(stmt)).scalar_one_or_none()
