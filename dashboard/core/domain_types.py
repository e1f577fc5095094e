"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - InvoiceId, CustomerId, UserId, RoleId wrap opaque string identifiers
    - Cents is always a whole, non-negative integer (minor currency units)
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

InvoiceId = NewType("InvoiceId", str)
CustomerId = NewType("CustomerId", str)
UserId = NewType("UserId", str)
RoleId = NewType("RoleId", str)


# ─── Value Types ─────────────────────────────────────────────────

Cents = NewType("Cents", int)


# ─── Enums ───────────────────────────────────────────────────────

class InvoiceStatus(str, Enum):
    """Invoice payment status — maps to DB `status` column."""
    PENDING = "pending"
    PAID = "paid"


class MutationKind(str, Enum):
    """The three write shapes the Mutation Executor applies."""
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class ViewKey(str, Enum):
    """Cached read paths that a committed write marks stale."""
    INVOICES = "invoices list"
    TEAM = "team list"
    ROLES = "roles list"


# ─── Listing Routes ──────────────────────────────────────────────

DASHBOARD_ROUTE = "/dashboard"
INVOICES_ROUTE = "/dashboard/invoices"
TEAM_ROUTE = "/dashboard/team"
