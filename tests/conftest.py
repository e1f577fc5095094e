"""Root conftest — shared environment and in-memory database fixtures.

Invariants:
    - Every test that asks for test_engine gets a fresh in-memory SQLite database
    - Environment defaults are set before any dashboard module reads settings
"""

import os
from datetime import date

# Ensure tests never reach a real database or identity provider
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("IDENTITY_PROVIDER_URL", "http://identity.invalid/signin")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)

from dashboard.db.base import Base  # noqa: E402
from dashboard.models import Customer, Invoice, Role, User  # noqa: E402

SEEDED_INVOICE_DATE = date(2026, 1, 15)


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def seeded(test_session_factory):
    """Two customers, two roles, one member, invoice i1 {c1, 4999, pending}."""
    async with test_session_factory() as session:
        session.add_all([
            Customer(id="c1", name="Delba de Oliveira", email="delba@oliveira.com"),
            Customer(id="c2", name="Lee Robinson", email="lee@robinson.com"),
            Role(id="r-admin", name="admin", description="Full access"),
            Role(id="r-member", name="member", description=None),
            User(
                id="u1", name="Ada Lovelace", email="ada@acme.com",
                password="", role_id="r-member",
            ),
            Invoice(
                id="i1", customer_id="c1", amount=4999,
                status="pending", date=SEEDED_INVOICE_DATE,
            ),
        ])
        await session.commit()
