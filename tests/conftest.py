"""
Shared fixtures: in-memory SQLite store, isolated AppContext per test, ASGI client.
The mock webhook answers instantly (MOCK_N8N_DELAY_SCALE=0) with a seeded RNG.
"""
import random
import uuid

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool

from content_studio.context import AppContext
from content_studio.db import build_engine, create_all
from content_studio.main import create_app
from content_studio.services.mock_workflow import MockWorkflow
from helpers import make_settings


@pytest_asyncio.fixture
async def engine():
    engine = build_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def ctx(engine):
    context = AppContext.build(
        make_settings(),
        engine=engine,
        mock_workflow=MockWorkflow(0, random.Random(7)),
    )
    yield context
    await context.aclose()


@pytest_asyncio.fixture
async def client(ctx):
    app = create_app(ctx)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


@pytest.fixture
def user_id() -> uuid.UUID:
    return uuid.uuid4()
