"""Conflict Detector — one read of the stored row, then a pure diff, before any edit.

Invariants:
    - Exactly one store read per check; the fetched row is discarded after comparison
    - Missing row -> NOT_FOUND, identical values -> NO_CHANGE, otherwise PROCEED
    - NO_CHANGE is a read, not a write: the executor is never called for it
    - Read failures surface as StorageFaultError (same translation as writes)
"""

from dataclasses import dataclass, field
from enum import Enum

from dashboard.core.detect_changes import diff_invoice, diff_member_role
from dashboard.core.domain_types import InvoiceId, UserId
from dashboard.core.records import InvoiceInput, RoleChangeInput
from dashboard.core.repository_protocols import DashboardStore
from dashboard.services.mutation_executor import storage_guard


class ConflictCheck(str, Enum):
    NOT_FOUND = "not_found"
    NO_CHANGE = "no_change"
    PROCEED = "proceed"


@dataclass(frozen=True)
class ConflictReport:
    check: ConflictCheck
    changes: dict[str, tuple[object, object]] = field(default_factory=dict)


async def check_invoice_edit(
    store: DashboardStore, invoice_id: InvoiceId, proposed: InvoiceInput,
) -> ConflictReport:
    async with storage_guard("Edit Invoice", invoice_id):
        stored = await store.invoices.get(invoice_id)
    if stored is None:
        return ConflictReport(ConflictCheck.NOT_FOUND)
    return _report(diff_invoice(stored, proposed))


async def check_role_change(
    store: DashboardStore, user_id: UserId, proposed: RoleChangeInput,
) -> ConflictReport:
    async with storage_guard("Update Role", user_id):
        stored = await store.users.get(user_id)
    if stored is None:
        return ConflictReport(ConflictCheck.NOT_FOUND)
    return _report(diff_member_role(stored, proposed))


def _report(changes: dict[str, tuple[object, object]]) -> ConflictReport:
    if not changes:
        return ConflictReport(ConflictCheck.NO_CHANGE)
    return ConflictReport(ConflictCheck.PROCEED, changes)
