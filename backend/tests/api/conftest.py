"""API test infrastructure: async httpx client against the ASGI app."""

from __future__ import annotations

from collections.abc import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient


@pytest_asyncio.fixture
async def app():
    from scuc_api.main import create_app

    yield create_app()


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def default_system_payload(client: AsyncClient) -> dict:
    resp = await client.get("/api/v1/systems/default")
    assert resp.status_code == 200
    return resp.json()
