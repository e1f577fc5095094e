"""Mutation Executor — applies exactly one create/update/delete to the store, atomically.

Invariants:
    - One write per call, inside one store transaction (commit or roll back)
    - Creates stamp the server-side current date; updates never rewrite id or date
    - Updates touch only mutable fields: customer_id/amount/status, or role_id
    - Team member creates check email uniqueness first; a duplicate writes nothing.
      A concurrent insert that wins the race still surfaces as DuplicateEmailError
      (unique violation on users.email), never as a storage fault
    - Storage faults (SQLAlchemyError, OSError) become StorageFaultError carrying
      operation + target id; the raw fault is logged, never returned
    - Deleting a missing id is not an error (rowcount 0 is logged and returned)
    - No retry: a fault is surfaced once

Design Decisions:
    - storage_guard as an async context manager: the conflict-check read and the
      write share one translation point
    - Clock injected (today=) so tests pin the creation date
"""

import logging
from collections.abc import Callable
from contextlib import asynccontextmanager
from datetime import date, datetime, timezone
from typing import AsyncIterator

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from dashboard.core.domain_types import InvoiceId, UserId
from dashboard.core.errors import (
    DuplicateEmailError, ResourceNotFoundError, StorageFaultError,
)
from dashboard.core.records import (
    InvoiceInput, MemberInput, NewInvoice, NewMember, RoleChangeInput,
)
from dashboard.core.repository_protocols import DashboardStore
from dashboard.models.user import USERS_EMAIL_CONSTRAINT

logger = logging.getLogger(__name__)


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


@asynccontextmanager
async def storage_guard(
    operation: str, target_id: str | None = None,
) -> AsyncIterator[None]:
    """Translate store failures into StorageFaultError; let everything else through."""
    try:
        yield
    except (SQLAlchemyError, OSError) as e:
        logger.error(
            f"Storage fault during {operation}: {e!r}",
            exc_info=True,
            extra={
                "operation": operation,
                "target_id": target_id,
                "error_code": "STORAGE_FAULT",
            },
        )
        raise StorageFaultError(operation, target_id) from e


def is_duplicate_email(error: IntegrityError) -> bool:
    """True when the violated constraint is the unique index on users.email."""
    detail = str(error.orig)
    return USERS_EMAIL_CONSTRAINT in detail or "users.email" in detail


class MutationExecutor:
    """Single-row writes against an injected DashboardStore."""

    def __init__(
        self, store: DashboardStore, today: Callable[[], date] = utc_today,
    ):
        self._store = store
        self._today = today

    # ─── Invoices ────────────────────────────────────────────────

    async def create_invoice(self, values: InvoiceInput) -> InvoiceId:
        async with storage_guard("Create Invoice"):
            async with self._store.transaction():
                invoice_id = await self._store.invoices.add(NewInvoice(
                    customer_id=values.customer_id,
                    amount_cents=values.amount_cents,
                    status=values.status,
                    date=self._today(),
                ))
        logger.info(
            f"Invoice {invoice_id} created",
            extra={"operation": "Create Invoice", "target_id": invoice_id},
        )
        return invoice_id

    async def update_invoice(self, invoice_id: InvoiceId, values: InvoiceInput) -> None:
        async with storage_guard("Edit Invoice", invoice_id):
            async with self._store.transaction():
                matched = await self._store.invoices.update(invoice_id, values)
                if not matched:
                    raise ResourceNotFoundError("Invoice", invoice_id)

    async def delete_invoice(self, invoice_id: InvoiceId) -> int:
        async with storage_guard("Delete Invoice", invoice_id):
            async with self._store.transaction():
                deleted = await self._store.invoices.delete(invoice_id)
        if not deleted:
            logger.info(
                f"Delete matched no invoice {invoice_id}",
                extra={"operation": "Delete Invoice", "target_id": invoice_id},
            )
        return deleted

    # ─── Team members ────────────────────────────────────────────

    async def add_member(self, values: MemberInput) -> UserId:
        async with storage_guard("Add Team Member"):
            try:
                async with self._store.transaction():
                    if await self._store.users.email_exists(values.email):
                        raise DuplicateEmailError(values.email)
                    user_id = await self._store.users.add(NewMember(
                        name=values.name, email=values.email, role_id=values.role_id,
                    ))
            except IntegrityError as e:
                if not is_duplicate_email(e):
                    raise
                raise DuplicateEmailError(values.email) from e
        logger.info(
            f"Team member {user_id} added",
            extra={"operation": "Add Team Member", "target_id": user_id},
        )
        return user_id

    async def update_member_role(self, user_id: UserId, values: RoleChangeInput) -> None:
        async with storage_guard("Update Role", user_id):
            async with self._store.transaction():
                matched = await self._store.users.update_role(user_id, values.role_id)
                if not matched:
                    raise ResourceNotFoundError("Team member", user_id)

    async def delete_member(self, user_id: UserId) -> int:
        async with storage_guard("Remove Team Member", user_id):
            async with self._store.transaction():
                deleted = await self._store.users.delete(user_id)
        if not deleted:
            logger.info(
                f"Delete matched no team member {user_id}",
                extra={"operation": "Remove Team Member", "target_id": user_id},
            )
        return deleted
