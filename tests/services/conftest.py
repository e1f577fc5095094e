"""Service test fixtures — fake store seeded with invoice i1, fresh view cache."""

from datetime import date

import pytest

from dashboard.core.domain_types import RoleId
from dashboard.core.records import RoleRecord
from dashboard.infrastructure.view_cache import ViewCache
from tests.services.fake_store import FakeStore, make_invoice, seed_member

TODAY = date(2026, 10, 19)


@pytest.fixture
def store():
    store = FakeStore()
    store.invoice_rows["i1"] = make_invoice()
    store.role_rows["r-admin"] = RoleRecord(RoleId("r-admin"), "admin", "Full access")
    store.role_rows["r-member"] = RoleRecord(RoleId("r-member"), "member", None)
    seed_member(store)
    return store


@pytest.fixture
def views():
    return ViewCache()


@pytest.fixture
def today():
    return lambda: TODAY
