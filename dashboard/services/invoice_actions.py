"""Invoice Actions — create, edit and delete invoices from raw form input.

Invariants:
    - create: validate -> persist (date stamped server-side)
    - edit: validate -> conflict check against the stored row -> persist
    - delete: persist only; a missing id still succeeds (nothing to remove)
    - Success invalidates the invoices list and redirects to /dashboard/invoices
"""

from collections.abc import Callable, Mapping
from datetime import date

from dashboard.core.domain_types import INVOICES_ROUTE, InvoiceId, ViewKey
from dashboard.core.outcomes import ActionOutcome
from dashboard.core.repository_protocols import DashboardStore
from dashboard.core.validate_forms import validate_invoice_form
from dashboard.infrastructure.view_cache import ViewCache
from dashboard.services.action_pipeline import ActionTarget, run_action
from dashboard.services.conflict_detector import check_invoice_edit
from dashboard.services.mutation_executor import MutationExecutor, utc_today

CREATE_INVOICE = ActionTarget("Create Invoice", "Invoice", ViewKey.INVOICES, INVOICES_ROUTE)
EDIT_INVOICE = ActionTarget("Edit Invoice", "Invoice", ViewKey.INVOICES, INVOICES_ROUTE)
DELETE_INVOICE = ActionTarget("Delete Invoice", "Invoice", ViewKey.INVOICES, INVOICES_ROUTE)


async def create_invoice(
    store: DashboardStore,
    views: ViewCache,
    raw: Mapping[str, object],
    *,
    today: Callable[[], date] = utc_today,
) -> ActionOutcome:
    executor = MutationExecutor(store, today=today)
    return await run_action(
        views, CREATE_INVOICE,
        raw=raw,
        validator=validate_invoice_form,
        persist=executor.create_invoice,
    )


async def edit_invoice(
    store: DashboardStore,
    views: ViewCache,
    invoice_id: InvoiceId,
    raw: Mapping[str, object],
) -> ActionOutcome:
    executor = MutationExecutor(store)
    return await run_action(
        views, EDIT_INVOICE,
        target_id=invoice_id,
        raw=raw,
        validator=validate_invoice_form,
        detect=lambda values: check_invoice_edit(store, invoice_id, values),
        persist=lambda values: executor.update_invoice(invoice_id, values),
    )


async def delete_invoice(
    store: DashboardStore, views: ViewCache, invoice_id: InvoiceId,
) -> ActionOutcome:
    executor = MutationExecutor(store)
    return await run_action(
        views, DELETE_INVOICE,
        target_id=invoice_id,
        persist=lambda _: executor.delete_invoice(invoice_id),
    )
