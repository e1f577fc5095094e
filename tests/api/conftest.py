"""API test fixtures — FastAPI test client over in-memory SQLite.

Invariants:
    - get_db overridden to hand out sessions on the per-test engine
    - get_view_cache overridden with a fresh ViewCache per test
    - get_identity_provider overridden with a scripted provider
    - Lifespan does not run under ASGITransport: nothing touches app.state.db_manager
"""

import pytest
from httpx import ASGITransport, AsyncClient

from dashboard.api.dependencies import get_identity_provider, get_view_cache
from dashboard.infrastructure.database import get_db
from dashboard.infrastructure.view_cache import ViewCache
from dashboard.main import app


class ScriptedProvider:
    """Identity provider that raises the scripted error, or accepts."""

    def __init__(self):
        self.error: BaseException | None = None
        self.calls = []

    async def sign_in(self, credentials):
        self.calls.append(dict(credentials))
        if self.error is not None:
            raise self.error
        return {"user": {"email": credentials["email"]}}


@pytest.fixture
def views():
    return ViewCache()


@pytest.fixture
def provider():
    return ScriptedProvider()


@pytest.fixture
async def client(test_session_factory, seeded, views, provider):
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_view_cache] = lambda: views
    app.dependency_overrides[get_identity_provider] = lambda: provider

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
