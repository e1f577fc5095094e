"""Request Dependencies — per-request store, view cache, identity provider, form input.

Invariants:
    - A new DashboardStore is built for every request from that request's session
    - The ViewCache is the application's single instance (app.state.view_cache)
    - read_form keeps only text fields; file uploads are dropped

Design Decisions:
    - Everything injected through Depends: tests swap each piece with dependency_overrides
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from dashboard.config import Settings, get_settings
from dashboard.core.repository_protocols import DashboardStore, IdentityProvider
from dashboard.infrastructure.database import get_db
from dashboard.infrastructure.identity_client import HttpIdentityProvider
from dashboard.infrastructure.store import SqlAlchemyDashboardStore
from dashboard.infrastructure.view_cache import ViewCache


def get_store(db: AsyncSession = Depends(get_db)) -> DashboardStore:
    return SqlAlchemyDashboardStore(db)


def get_view_cache(request: Request) -> ViewCache:
    return request.app.state.view_cache


def get_identity_provider(
    settings: Settings = Depends(get_settings),
) -> IdentityProvider:
    return HttpIdentityProvider(
        settings.identity_provider_url,
        timeout_seconds=settings.identity_timeout_seconds,
    )


async def read_form(request: Request) -> dict[str, str]:
    """Flat field name → raw string map from a submitted form."""
    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}
