"""Change Detection — pure field-by-field comparison of stored vs proposed values.

Invariants:
    - Compares only the mutable fields of an entity; identifiers and dates never diff
    - Amounts compare as integer cents, identifiers and status as exact matches
    - Empty diff means "no changes": the caller must not write
"""

from dashboard.core.records import (
    InvoiceInput, InvoiceRecord, MemberRecord, RoleChangeInput,
)

INVOICE_MUTABLE_FIELDS = ("customer_id", "amount_cents", "status")
MEMBER_MUTABLE_FIELDS = ("role_id",)


def diff_fields(
    stored: object, proposed: object, fields: tuple[str, ...],
) -> dict[str, tuple[object, object]]:
    """Return {field: (stored, proposed)} for every field whose values differ."""
    changes = {}
    for name in fields:
        before, after = getattr(stored, name), getattr(proposed, name)
        if before != after:
            changes[name] = (before, after)
    return changes


def diff_invoice(
    stored: InvoiceRecord, proposed: InvoiceInput,
) -> dict[str, tuple[object, object]]:
    return diff_fields(stored, proposed, INVOICE_MUTABLE_FIELDS)


def diff_member_role(
    stored: MemberRecord, proposed: RoleChangeInput,
) -> dict[str, tuple[object, object]]:
    return diff_fields(stored, proposed, MEMBER_MUTABLE_FIELDS)
