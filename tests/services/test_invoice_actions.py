"""Tests for invoice actions — create, edit, delete through the action pipeline.

Tests cover:
    - Create: valid input writes once with the pinned date and invalidates the list
    - Create: invalid input never writes and never invalidates
    - Edit: identical values are a "No changes detected." read, not a write
    - Edit: any single changed field proceeds to exactly one write
    - Edit: missing invoice is NOT_FOUND without a write
    - Delete: removes only its row, a repeated delete is a success no-op
    - Storage faults: opaque message, raw detail only in the log, no invalidation
    - Unclassified exceptions propagate
"""

import logging

import pytest

from dashboard.core.action_states import ActionState
from dashboard.core.domain_types import INVOICES_ROUTE, InvoiceStatus, ViewKey
from dashboard.core.outcomes import OutcomeKind
from dashboard.services.invoice_actions import (
    create_invoice, delete_invoice, edit_invoice,
)
from dashboard.services.read_views import list_invoices
from tests.services.conftest import TODAY
from tests.services.fake_store import make_invoice, storage_fault

VALID = {"customerId": "c1", "amount": "49.99", "status": "pending"}


# ─── Create ─────────────────────────────────────────────────────

async def test_create_writes_once_with_todays_date(store, views, today):
    outcome = await create_invoice(store, views, VALID, today=today)

    assert outcome.kind is OutcomeKind.SUCCESS
    assert outcome.redirect_to == INVOICES_ROUTE
    assert outcome.invalidated == (ViewKey.INVOICES,)
    assert store.writes["invoices"] == 1
    created = store.invoice_rows["inv-1"]
    assert created.customer_id == "c1"
    assert created.amount_cents == 4999
    assert created.status is InvoiceStatus.PENDING
    assert created.date == TODAY


async def test_create_trail(store, views, today):
    outcome = await create_invoice(store, views, VALID, today=today)
    assert outcome.trail == (
        ActionState.IDLE, ActionState.VALIDATING, ActionState.VALID,
        ActionState.PROCEED, ActionState.PERSISTING, ActionState.SUCCESS,
    )


async def test_create_invalid_status_never_writes(store, views, today):
    outcome = await create_invoice(
        store, views, {**VALID, "status": "overdue"}, today=today,
    )

    assert outcome.kind is OutcomeKind.INVALID
    assert outcome.message == "Missing Fields. Failed to Create Invoice."
    assert outcome.field_errors == {"status": ["Please select an invoice status."]}
    assert outcome.invalidated == ()
    assert outcome.redirect_to is None
    assert store.writes["invoices"] == 0
    assert views.generation(ViewKey.INVOICES) == 0


async def test_create_stores_rounded_cents(store, views, today):
    await create_invoice(store, views, {**VALID, "amount": "0.005"}, today=today)
    assert store.invoice_rows["inv-1"].amount_cents == 1


@pytest.mark.parametrize("amount", ["0.004", "1e27"])
async def test_create_out_of_range_amount_never_writes(store, views, today, amount):
    outcome = await create_invoice(store, views, {**VALID, "amount": amount}, today=today)

    assert outcome.kind is OutcomeKind.INVALID
    assert list(outcome.field_errors) == ["amount"]
    assert store.writes["invoices"] == 0
    assert list(store.invoice_rows) == ["i1"]


async def test_create_invalidates_cached_listing(store, views, today):
    await list_invoices(store, views, "", 1, 6)
    assert views.is_cached(ViewKey.INVOICES, ("page", "", 1, 6))

    await create_invoice(store, views, VALID, today=today)

    assert not views.is_cached(ViewKey.INVOICES, ("page", "", 1, 6))
    page = await list_invoices(store, views, "", 1, 6)
    assert {row.id for row in page.invoices} == {"i1", "inv-1"}


async def test_create_storage_fault_is_opaque(store, views, today, caplog):
    store.fail("invoices.add", storage_fault())

    with caplog.at_level(logging.ERROR):
        outcome = await create_invoice(store, views, VALID, today=today)

    assert outcome.kind is OutcomeKind.STORAGE_FAULT
    assert outcome.message == "Database Error: Failed to Create Invoice."
    assert "server closed" not in outcome.message
    assert outcome.invalidated == ()
    assert views.generation(ViewKey.INVOICES) == 0
    assert store.rollbacks == 1
    assert "inv-1" not in store.invoice_rows
    assert "server closed the connection" in caplog.text


# ─── Edit ───────────────────────────────────────────────────────

async def test_edit_identical_values_is_no_change(store, views):
    outcome = await edit_invoice(store, views, "i1", VALID)

    assert outcome.kind is OutcomeKind.NO_CHANGE
    assert outcome.message == "No changes detected."
    assert outcome.trail[-2:] == (ActionState.DETECTING_CONFLICT, ActionState.NO_CHANGE)
    assert store.writes["invoices"] == 0
    assert store.reads["invoices"] == 1
    assert views.generation(ViewKey.INVOICES) == 0


async def test_edit_equivalent_amount_spelling_is_no_change(store, views):
    outcome = await edit_invoice(store, views, "i1", {**VALID, "amount": "49.990"})
    assert outcome.kind is OutcomeKind.NO_CHANGE
    assert store.writes["invoices"] == 0


@pytest.mark.parametrize("change", [
    {"customerId": "c2"},
    {"amount": "50.00"},
    {"status": "paid"},
])
async def test_edit_any_changed_field_writes_once(store, views, change):
    outcome = await edit_invoice(store, views, "i1", {**VALID, **change})

    assert outcome.kind is OutcomeKind.SUCCESS
    assert outcome.trail[-4:] == (
        ActionState.DETECTING_CONFLICT, ActionState.PROCEED,
        ActionState.PERSISTING, ActionState.SUCCESS,
    )
    assert store.writes["invoices"] == 1
    assert views.generation(ViewKey.INVOICES) == 1


async def test_edit_keeps_id_and_date(store, views):
    await edit_invoice(store, views, "i1", {**VALID, "status": "paid"})
    updated = store.invoice_rows["i1"]
    assert updated.id == "i1"
    assert updated.date == make_invoice().date
    assert updated.status is InvoiceStatus.PAID


async def test_edit_invalid_input_skips_conflict_read(store, views):
    outcome = await edit_invoice(store, views, "i1", {**VALID, "amount": "0"})
    assert outcome.kind is OutcomeKind.INVALID
    assert outcome.message == "Missing Fields. Failed to Edit Invoice."
    assert store.reads["invoices"] == 0


async def test_edit_missing_invoice_is_not_found(store, views):
    outcome = await edit_invoice(store, views, "i404", VALID)
    assert outcome.kind is OutcomeKind.NOT_FOUND
    assert outcome.message == "Invoice 'i404' not found"
    assert store.writes["invoices"] == 0


async def test_edit_read_fault_names_target(store, views):
    store.fail("invoices.get", storage_fault())
    outcome = await edit_invoice(store, views, "i1", {**VALID, "status": "paid"})
    assert outcome.kind is OutcomeKind.STORAGE_FAULT
    assert outcome.message == "Database Error: Failed to Edit Invoice i1."
    assert outcome.trail[-1] is ActionState.STORAGE_FAULT
    assert store.writes["invoices"] == 0


async def test_edit_row_vanishing_before_write_is_not_found(store, views):
    original_get = store.invoices.get

    async def get_then_vanish(invoice_id):
        record = await original_get(invoice_id)
        store.invoice_rows.pop(invoice_id, None)
        return record

    store.invoices.get = get_then_vanish
    outcome = await edit_invoice(store, views, "i1", {**VALID, "status": "paid"})
    assert outcome.kind is OutcomeKind.NOT_FOUND
    assert outcome.trail[-2:] == (ActionState.PERSISTING, ActionState.NOT_FOUND)
    assert views.generation(ViewKey.INVOICES) == 0


# ─── Delete ─────────────────────────────────────────────────────

async def test_delete_removes_only_target(store, views):
    store.invoice_rows["i9"] = make_invoice("i9")

    outcome = await delete_invoice(store, views, "i9")

    assert outcome.kind is OutcomeKind.SUCCESS
    assert outcome.trail == (
        ActionState.IDLE, ActionState.PROCEED, ActionState.PERSISTING, ActionState.SUCCESS,
    )
    assert "i9" not in store.invoice_rows
    assert "i1" in store.invoice_rows


async def test_repeated_delete_is_a_no_op(store, views):
    store.invoice_rows["i9"] = make_invoice("i9")
    await delete_invoice(store, views, "i9")

    outcome = await delete_invoice(store, views, "i9")

    assert outcome.kind is OutcomeKind.SUCCESS
    assert list(store.invoice_rows) == ["i1"]


async def test_delete_storage_fault(store, views):
    store.fail("invoices.delete", OSError("connection reset"))
    outcome = await delete_invoice(store, views, "i1")
    assert outcome.kind is OutcomeKind.STORAGE_FAULT
    assert outcome.message == "Database Error: Failed to Delete Invoice i1."
    assert "i1" in store.invoice_rows


async def test_commit_fault_rolls_back(store, views):
    store.fail("commit", storage_fault())
    outcome = await delete_invoice(store, views, "i1")
    assert outcome.kind is OutcomeKind.STORAGE_FAULT
    assert "i1" in store.invoice_rows
    assert store.rollbacks == 1


async def test_unclassified_exception_propagates(store, views, today):
    store.fail("invoices.add", RuntimeError("bug"))
    with pytest.raises(RuntimeError, match="bug"):
        await create_invoice(store, views, VALID, today=today)
    assert views.generation(ViewKey.INVOICES) == 0
