"""Response Schemas — JSON shapes returned by the dashboard routes.

Invariants:
    - ActionStateResponse mirrors ActionOutcome: status, message, errors,
      redirect_to, invalidated
    - Amounts are returned both as integer cents and as a formatted string
"""

from datetime import date

from pydantic import BaseModel

from dashboard.core.money import format_currency
from dashboard.core.outcomes import ActionOutcome
from dashboard.core.records import InvoiceRow, RoleRecord, TeamMemberRow


class ActionStateResponse(BaseModel):
    """Result of one form submission."""
    status: str
    message: str | None = None
    errors: dict[str, list[str]] = {}
    redirect_to: str | None = None
    invalidated: list[str] = []

    @classmethod
    def from_outcome(cls, outcome: ActionOutcome) -> "ActionStateResponse":
        return cls(
            status=outcome.kind.value,
            message=outcome.message,
            errors=outcome.field_errors,
            redirect_to=outcome.redirect_to,
            invalidated=[key.value for key in outcome.invalidated],
        )


class InvoiceListItem(BaseModel):
    id: str
    customer_id: str
    name: str
    email: str
    image_url: str | None
    amount: int
    amount_display: str
    status: str
    date: date

    @classmethod
    def from_row(cls, row: InvoiceRow) -> "InvoiceListItem":
        return cls(
            id=row.id,
            customer_id=row.customer_id,
            name=row.name,
            email=row.email,
            image_url=row.image_url,
            amount=row.amount_cents,
            amount_display=format_currency(row.amount_cents),
            status=row.status.value,
            date=row.date,
        )


class InvoiceListResponse(BaseModel):
    query: str
    page: int
    invoices: list[InvoiceListItem]


class InvoicePagesResponse(BaseModel):
    query: str
    total_pages: int


class TeamMemberItem(BaseModel):
    id: str
    name: str
    email: str
    role_id: str | None
    role_name: str | None

    @classmethod
    def from_row(cls, row: TeamMemberRow) -> "TeamMemberItem":
        return cls(
            id=row.id, name=row.name, email=row.email,
            role_id=row.role_id, role_name=row.role_name,
        )


class RoleItem(BaseModel):
    id: str
    name: str
    description: str | None

    @classmethod
    def from_record(cls, role: RoleRecord) -> "RoleItem":
        return cls(id=role.id, name=role.name, description=role.description)
