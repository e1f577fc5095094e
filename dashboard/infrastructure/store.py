"""SQLAlchemy Store — DashboardStore implementation over one AsyncSession.

Invariants:
    - Every statement is parameterized SQLAlchemy Core against the mapped tables
    - Every write touches exactly one row, addressed by primary key
    - Reads bypass the ORM identity map: conflict checks always see the stored row
    - transaction() commits on clean exit and rolls back on exception
    - No SQLAlchemy exception is caught here; translation happens in services/

Design Decisions:
    - Core statements over ORM unit-of-work: single-row writes need no change
      tracking, and rowcount reports "matched nothing" directly
    - Rows are translated to core records before leaving the repository
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import String, cast, delete, func, insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from dashboard.core.domain_types import (
    Cents, CustomerId, InvoiceId, InvoiceStatus, RoleId, UserId,
)
from dashboard.core.records import (
    InvoiceInput, InvoiceRecord, InvoiceRow, MemberRecord,
    NewInvoice, NewMember, RoleRecord, TeamMemberRow,
)
from dashboard.db.base import new_id
from dashboard.models import Customer, Invoice, Role, User

invoices = Invoice.__table__
customers = Customer.__table__
users = User.__table__
roles = Role.__table__


class SqlAlchemyInvoiceRepository:
    def __init__(self, session: AsyncSession):
        self._s = session

    async def get(self, invoice_id: InvoiceId) -> InvoiceRecord | None:
        result = await self._s.execute(
            select(
                invoices.c.id, invoices.c.customer_id, invoices.c.amount,
                invoices.c.status, invoices.c.date,
            ).where(invoices.c.id == invoice_id),
        )
        row = result.one_or_none()
        if row is None:
            return None
        return InvoiceRecord(
            id=InvoiceId(row.id),
            customer_id=CustomerId(row.customer_id),
            amount_cents=Cents(row.amount),
            status=InvoiceStatus(row.status),
            date=row.date,
        )

    async def add(self, invoice: NewInvoice) -> InvoiceId:
        invoice_id = InvoiceId(new_id())
        await self._s.execute(
            insert(invoices).values(
                id=invoice_id,
                customer_id=invoice.customer_id,
                amount=invoice.amount_cents,
                status=invoice.status.value,
                date=invoice.date,
            ),
        )
        return invoice_id

    async def update(self, invoice_id: InvoiceId, values: InvoiceInput) -> int:
        result = await self._s.execute(
            update(invoices)
            .where(invoices.c.id == invoice_id)
            .values(
                customer_id=values.customer_id,
                amount=values.amount_cents,
                status=values.status.value,
            ),
        )
        return result.rowcount

    async def delete(self, invoice_id: InvoiceId) -> int:
        result = await self._s.execute(
            delete(invoices).where(invoices.c.id == invoice_id),
        )
        return result.rowcount

    async def search(self, query: str, limit: int, offset: int) -> list[InvoiceRow]:
        result = await self._s.execute(
            select(
                invoices.c.id, invoices.c.customer_id,
                customers.c.name, customers.c.email, customers.c.image_url,
                invoices.c.amount, invoices.c.status, invoices.c.date,
            )
            .join_from(invoices, customers, invoices.c.customer_id == customers.c.id)
            .where(_matches(query))
            .order_by(invoices.c.date.desc(), invoices.c.id)
            .limit(limit)
            .offset(offset),
        )
        return [
            InvoiceRow(
                id=InvoiceId(row.id),
                customer_id=CustomerId(row.customer_id),
                name=row.name,
                email=row.email,
                image_url=row.image_url,
                amount_cents=Cents(row.amount),
                status=InvoiceStatus(row.status),
                date=row.date,
            )
            for row in result
        ]

    async def count(self, query: str) -> int:
        result = await self._s.execute(
            select(func.count())
            .select_from(
                invoices.join(customers, invoices.c.customer_id == customers.c.id),
            )
            .where(_matches(query)),
        )
        return result.scalar_one()


def _matches(query: str):
    """Case-insensitive substring match across the columns shown in the table."""
    pattern = f"%{query}%"
    return or_(
        customers.c.name.ilike(pattern),
        customers.c.email.ilike(pattern),
        cast(invoices.c.amount, String).ilike(pattern),
        cast(invoices.c.date, String).ilike(pattern),
        invoices.c.status.ilike(pattern),
    )


class SqlAlchemyUserRepository:
    def __init__(self, session: AsyncSession):
        self._s = session

    async def get(self, user_id: UserId) -> MemberRecord | None:
        result = await self._s.execute(
            select(
                users.c.id, users.c.name, users.c.email, users.c.role_id,
            ).where(users.c.id == user_id),
        )
        row = result.one_or_none()
        if row is None:
            return None
        return MemberRecord(
            id=UserId(row.id),
            name=row.name,
            email=row.email,
            role_id=RoleId(row.role_id) if row.role_id else None,
        )

    async def email_exists(self, email: str) -> bool:
        result = await self._s.execute(
            select(users.c.id).where(users.c.email == email).limit(1),
        )
        return result.scalar_one_or_none() is not None

    async def add(self, member: NewMember) -> UserId:
        user_id = UserId(new_id())
        await self._s.execute(
            insert(users).values(
                id=user_id,
                name=member.name,
                email=member.email,
                password=member.password,
                role_id=member.role_id,
            ),
        )
        return user_id

    async def update_role(self, user_id: UserId, role_id: RoleId) -> int:
        result = await self._s.execute(
            update(users).where(users.c.id == user_id).values(role_id=role_id),
        )
        return result.rowcount

    async def delete(self, user_id: UserId) -> int:
        result = await self._s.execute(delete(users).where(users.c.id == user_id))
        return result.rowcount

    async def list_with_roles(self) -> list[TeamMemberRow]:
        result = await self._s.execute(
            select(
                users.c.id, users.c.name, users.c.email, users.c.role_id,
                roles.c.name.label("role_name"),
            )
            .join_from(users, roles, users.c.role_id == roles.c.id, isouter=True)
            .order_by(users.c.name, users.c.id),
        )
        return [
            TeamMemberRow(
                id=UserId(row.id),
                name=row.name,
                email=row.email,
                role_id=RoleId(row.role_id) if row.role_id else None,
                role_name=row.role_name,
            )
            for row in result
        ]


class SqlAlchemyRoleRepository:
    def __init__(self, session: AsyncSession):
        self._s = session

    async def list_all(self) -> list[RoleRecord]:
        result = await self._s.execute(
            select(roles.c.id, roles.c.name, roles.c.description)
            .order_by(roles.c.name),
        )
        return [
            RoleRecord(id=RoleId(row.id), name=row.name, description=row.description)
            for row in result
        ]


class SqlAlchemyDashboardStore:
    """Bundles the repositories that share one request-scoped session."""

    def __init__(self, session: AsyncSession):
        self._session = session
        self.invoices = SqlAlchemyInvoiceRepository(session)
        self.users = SqlAlchemyUserRepository(session)
        self.roles = SqlAlchemyRoleRepository(session)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        try:
            yield
            await self._session.commit()
        except Exception:
            await self._session.rollback()
            raise
