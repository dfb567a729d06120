import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from clansite.api.deps import get_kv_repo
from clansite.main import create_api_router
from clansite.services import AuthService


@pytest_asyncio.fixture
async def prefixed_client(kv_repo):
    """Client for an app with every route mounted under /api"""
    await AuthService(kv_repo).initialize()

    prefixed_app = FastAPI()
    prefixed_app.include_router(create_api_router("/api/"))
    prefixed_app.dependency_overrides[get_kv_repo] = lambda: kv_repo

    transport = ASGITransport(app=prefixed_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.mark.asyncio
async def test_routes_resolve_under_prefix(prefixed_client):
    resp = await prefixed_client.get("/api/wipes")

    assert resp.status_code == 200
    assert resp.json() == []


@pytest.mark.asyncio
async def test_unprefixed_route_not_mounted(prefixed_client):
    resp = await prefixed_client.get("/wipes")

    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_login_and_replace_under_prefix(prefixed_client):
    login = await prefixed_client.post(
        "/api/login", json={"username": "admin", "password": "admin123"}
    )
    assert login.status_code == 200, login.text
    headers = {"Authorization": f"Bearer {login.json()['token']}"}

    resp = await prefixed_client.put(
        "/api/clan-info", json={"description": "We raid."}, headers=headers
    )
    assert resp.status_code == 200
    assert (await prefixed_client.get("/api/clan-info")).json() == {"description": "We raid."}
