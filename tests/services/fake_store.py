"""Fake Store — in-memory DashboardStore with write counters and fault injection.

Usage:
    store = FakeStore()
    store.fail("invoices.add", storage_fault())   # next and all later calls raise
    store.writes["invoices"]                       # committed-or-not write calls
"""

from collections import Counter
from contextlib import asynccontextmanager
from datetime import date

from sqlalchemy.exc import OperationalError

from dashboard.core.domain_types import (
    Cents, CustomerId, InvoiceId, InvoiceStatus, RoleId, UserId,
)
from dashboard.core.records import (
    InvoiceRecord, InvoiceRow, MemberRecord, RoleRecord, TeamMemberRow,
)


def storage_fault() -> OperationalError:
    return OperationalError(
        "UPDATE invoices", {}, Exception("server closed the connection unexpectedly"),
    )


def make_invoice(
    invoice_id="i1", customer_id="c1", amount_cents=4999,
    status=InvoiceStatus.PENDING, on=date(2026, 1, 15),
) -> InvoiceRecord:
    return InvoiceRecord(
        id=InvoiceId(invoice_id), customer_id=CustomerId(customer_id),
        amount_cents=Cents(amount_cents), status=status, date=on,
    )


class FakeStore:
    def __init__(self):
        self.invoice_rows: dict[str, InvoiceRecord] = {}
        self.user_rows: dict[str, MemberRecord] = {}
        self.passwords: dict[str, str] = {}
        self.role_rows: dict[str, RoleRecord] = {}
        self.writes: Counter[str] = Counter()
        self.reads: Counter[str] = Counter()
        self.faults: dict[str, BaseException] = {}
        self.commits = 0
        self.rollbacks = 0
        self.invoices = _FakeInvoices(self)
        self.users = _FakeUsers(self)
        self.roles = _FakeRoles(self)

    def fail(self, method: str, error: BaseException) -> None:
        self.faults[method] = error

    def check(self, method: str) -> None:
        if method in self.faults:
            raise self.faults[method]

    @asynccontextmanager
    async def transaction(self):
        snapshot = (dict(self.invoice_rows), dict(self.user_rows), dict(self.passwords))
        try:
            yield
            self.check("commit")
            self.commits += 1
        except Exception:
            self.invoice_rows, self.user_rows, self.passwords = snapshot
            self.rollbacks += 1
            raise


class _FakeInvoices:
    def __init__(self, store: FakeStore):
        self._store = store
        self._next = 0

    async def get(self, invoice_id):
        self._store.check("invoices.get")
        self._store.reads["invoices"] += 1
        return self._store.invoice_rows.get(invoice_id)

    async def add(self, invoice):
        self._store.check("invoices.add")
        self._store.writes["invoices"] += 1
        self._next += 1
        invoice_id = InvoiceId(f"inv-{self._next}")
        self._store.invoice_rows[invoice_id] = InvoiceRecord(
            id=invoice_id, customer_id=invoice.customer_id,
            amount_cents=invoice.amount_cents, status=invoice.status,
            date=invoice.date,
        )
        return invoice_id

    async def update(self, invoice_id, values):
        self._store.check("invoices.update")
        self._store.writes["invoices"] += 1
        stored = self._store.invoice_rows.get(invoice_id)
        if stored is None:
            return 0
        self._store.invoice_rows[invoice_id] = InvoiceRecord(
            id=stored.id, customer_id=values.customer_id,
            amount_cents=values.amount_cents, status=values.status,
            date=stored.date,
        )
        return 1

    async def delete(self, invoice_id):
        self._store.check("invoices.delete")
        self._store.writes["invoices"] += 1
        return 1 if self._store.invoice_rows.pop(invoice_id, None) else 0

    async def search(self, query, limit, offset):
        self._store.check("invoices.search")
        self._store.reads["invoices"] += 1
        rows = [
            InvoiceRow(
                id=r.id, customer_id=r.customer_id, name=r.customer_id,
                email=f"{r.customer_id}@acme.com", image_url=None,
                amount_cents=r.amount_cents, status=r.status, date=r.date,
            )
            for r in self._store.invoice_rows.values()
            if query.lower() in r.status.value or query in r.customer_id
        ]
        return rows[offset:offset + limit]

    async def count(self, query):
        return len(await self.search(query, limit=10_000, offset=0))


class _FakeUsers:
    def __init__(self, store: FakeStore):
        self._store = store
        self._next = 0

    async def get(self, user_id):
        self._store.check("users.get")
        self._store.reads["users"] += 1
        return self._store.user_rows.get(user_id)

    async def email_exists(self, email):
        self._store.check("users.email_exists")
        self._store.reads["users"] += 1
        return any(u.email == email for u in self._store.user_rows.values())

    async def add(self, member):
        self._store.check("users.add")
        self._store.writes["users"] += 1
        self._next += 1
        user_id = UserId(f"user-{self._next}")
        self._store.user_rows[user_id] = MemberRecord(
            id=user_id, name=member.name, email=member.email, role_id=member.role_id,
        )
        self._store.passwords[user_id] = member.password
        return user_id

    async def update_role(self, user_id, role_id):
        self._store.check("users.update_role")
        self._store.writes["users"] += 1
        stored = self._store.user_rows.get(user_id)
        if stored is None:
            return 0
        self._store.user_rows[user_id] = MemberRecord(
            id=stored.id, name=stored.name, email=stored.email, role_id=role_id,
        )
        return 1

    async def delete(self, user_id):
        self._store.check("users.delete")
        self._store.writes["users"] += 1
        return 1 if self._store.user_rows.pop(user_id, None) else 0

    async def list_with_roles(self):
        self._store.reads["users"] += 1
        roles = self._store.role_rows
        return [
            TeamMemberRow(
                id=u.id, name=u.name, email=u.email, role_id=u.role_id,
                role_name=roles[u.role_id].name if u.role_id in roles else None,
            )
            for u in self._store.user_rows.values()
        ]


class _FakeRoles:
    def __init__(self, store: FakeStore):
        self._store = store

    async def list_all(self):
        return sorted(self._store.role_rows.values(), key=lambda r: r.name)


def seed_member(store: FakeStore, user_id="u1", email="ada@acme.com", role_id="r-member"):
    store.user_rows[user_id] = MemberRecord(
        id=UserId(user_id), name="Ada Lovelace", email=email,
        role_id=RoleId(role_id) if role_id else None,
    )
    store.passwords[user_id] = ""
