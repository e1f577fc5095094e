"""Records — frozen value bundles passed between core and shell.

Invariants:
    - Input bundles (InvoiceInput, MemberInput, RoleChangeInput) only exist after validation
    - Stored records mirror one table row; they are never mutated in place
    - amount_cents is an int everywhere — Decimal only lives inside the validator

Design Decisions:
    - Frozen dataclasses over ORM rows: repositories translate rows to records so
      core never sees a Session-bound object
"""

from dataclasses import dataclass
from datetime import date

from dashboard.core.domain_types import (
    Cents, CustomerId, InvoiceId, InvoiceStatus, RoleId, UserId,
)


# ─── Validated input ─────────────────────────────────────────────

@dataclass(frozen=True)
class InvoiceInput:
    customer_id: CustomerId
    amount_cents: Cents
    status: InvoiceStatus


@dataclass(frozen=True)
class MemberInput:
    name: str
    email: str
    role_id: RoleId


@dataclass(frozen=True)
class RoleChangeInput:
    role_id: RoleId


# ─── Rows to write ───────────────────────────────────────────────

@dataclass(frozen=True)
class NewInvoice:
    customer_id: CustomerId
    amount_cents: Cents
    status: InvoiceStatus
    date: date


@dataclass(frozen=True)
class NewMember:
    name: str
    email: str
    role_id: RoleId
    password: str = ""


# ─── Stored rows ─────────────────────────────────────────────────

@dataclass(frozen=True)
class InvoiceRecord:
    id: InvoiceId
    customer_id: CustomerId
    amount_cents: Cents
    status: InvoiceStatus
    date: date


@dataclass(frozen=True)
class MemberRecord:
    id: UserId
    name: str
    email: str
    role_id: RoleId | None


@dataclass(frozen=True)
class RoleRecord:
    id: RoleId
    name: str
    description: str | None


# ─── Listing rows (read views) ───────────────────────────────────

@dataclass(frozen=True)
class InvoiceRow:
    """Invoice joined with its customer, as shown in the invoices table."""
    id: InvoiceId
    customer_id: CustomerId
    name: str
    email: str
    image_url: str | None
    amount_cents: Cents
    status: InvoiceStatus
    date: date


@dataclass(frozen=True)
class TeamMemberRow:
    """User joined with its role name, as shown in the team table."""
    id: UserId
    name: str
    email: str
    role_id: RoleId | None
    role_name: str | None
