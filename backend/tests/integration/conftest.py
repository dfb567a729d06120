import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from clansite.api.deps import get_kv_repo
from clansite.config import get_settings
from clansite.main import app
from clansite.services import AuthService


@pytest_asyncio.fixture
async def client(kv_repo, monkeypatch):
    """API client backed by a freshly bootstrapped store"""
    monkeypatch.delenv("DEFAULT_ADMIN_USERNAME", raising=False)
    monkeypatch.delenv("DEFAULT_ADMIN_PASSWORD", raising=False)
    get_settings.cache_clear()

    await AuthService(kv_repo).initialize()
    app.dependency_overrides[get_kv_repo] = lambda: kv_repo

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides = {}
    get_settings.cache_clear()


@pytest_asyncio.fixture
async def auth_headers(client):
    resp = await client.post("/login", json={"username": "admin", "password": "admin123"})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['token']}"}
