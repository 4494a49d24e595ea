"""
tests.conftest

Shared fixtures for API tests.

Responsibilities:
- Build an app per test against a throwaway SQLite file.
- Replace outbound media validation with a recording fake.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from helpers import BROKEN_IMAGE, FakeMediaValidator

from noroff_api.api.app import create_app
from noroff_api.settings import Settings


@pytest.fixture
def media_validator() -> FakeMediaValidator:
    return FakeMediaValidator(bad={BROKEN_IMAGE})


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        env="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        jwt_secret="test-secret-with-enough-length-for-hs256",
        bcrypt_rounds=4,
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def app(settings: Settings, media_validator: FakeMediaValidator) -> AsyncIterator[FastAPI]:
    app = create_app(settings=settings, media_validator=media_validator)
    # httpx ASGITransport does not run lifespan events; drive them explicitly.
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
