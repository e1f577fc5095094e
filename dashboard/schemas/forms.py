"""Form Schemas — raw submitted fields to typed values, with user-facing messages.

Invariants:
    - Missing fields default to "" and are validated like empty fields
    - Each failing field yields exactly one human-readable message
    - customerId is an alias: the error map is keyed by the submitted field name
    - amount must coerce to a finite Decimal that rounds to at least one cent
      and at most MAX_AMOUNT_CENTS

Design Decisions:
    - PydanticCustomError over ValueError: the message reaches the caller verbatim,
      without pydantic's "Value error, " prefix
    - mode="before" validators: the raw string is judged before type coercion so a
      bad value never produces pydantic's generic type error text
"""

from decimal import Decimal, InvalidOperation

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.networks import validate_email
from pydantic_core import PydanticCustomError

from dashboard.core.domain_types import InvoiceStatus
from dashboard.core.money import (
    MAX_AMOUNT, MAX_AMOUNT_CENTS, format_currency, to_cents,
)

_STATUSES = frozenset(status.value for status in InvoiceStatus)
_AMOUNT_TOO_LARGE = (
    f"Please enter an amount no greater than {format_currency(MAX_AMOUNT_CENTS)}."
)


def _text(value: object) -> str:
    return value.strip() if isinstance(value, str) else ""


class InvoiceForm(BaseModel):
    """Create/edit invoice form."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    customer_id: str = Field("", alias="customerId", validate_default=True)
    amount: Decimal = Field("", validate_default=True)
    status: InvoiceStatus = Field("", validate_default=True)

    @field_validator("customer_id", mode="before")
    @classmethod
    def require_customer(cls, v: object) -> str:
        v = _text(v)
        if not v:
            raise PydanticCustomError("customer_required", "Please select a customer.")
        return v

    @field_validator("amount", mode="before")
    @classmethod
    def require_positive_amount(cls, v: object) -> Decimal:
        try:
            amount = Decimal(_text(v))
        except InvalidOperation:
            amount = None
        if amount is None or not amount.is_finite() or amount <= 0:
            raise _amount_not_positive()
        # Compared before to_cents: scaling a huge value overflows the decimal context
        if amount > MAX_AMOUNT:
            raise PydanticCustomError("amount_too_large", _AMOUNT_TOO_LARGE)
        if to_cents(amount) <= 0:
            raise _amount_not_positive()
        return amount

    @field_validator("status", mode="before")
    @classmethod
    def require_known_status(cls, v: object) -> str:
        if not isinstance(v, str) or v not in _STATUSES:
            raise PydanticCustomError("status_required", "Please select an invoice status.")
        return v


class MemberForm(BaseModel):
    """Add team member form."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str = Field("", validate_default=True)
    email: str = Field("", validate_default=True)
    role_id: str = Field("", validate_default=True)

    @field_validator("name", mode="before")
    @classmethod
    def require_name(cls, v: object) -> str:
        v = _text(v)
        if not v:
            raise PydanticCustomError("name_required", "Please enter a name.")
        return v

    @field_validator("email", mode="before")
    @classmethod
    def require_valid_email(cls, v: object) -> str:
        try:
            _, email = validate_email(_text(v))
        except PydanticCustomError:
            raise PydanticCustomError("email_invalid", "Please enter a valid email.")
        return email

    @field_validator("role_id", mode="before")
    @classmethod
    def require_role(cls, v: object) -> str:
        return _require_role(v)


class RoleChangeForm(BaseModel):
    """Single-field role change submitted from the team table."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    role_id: str = Field("", validate_default=True)

    @field_validator("role_id", mode="before")
    @classmethod
    def require_role(cls, v: object) -> str:
        return _require_role(v)


def _amount_not_positive() -> PydanticCustomError:
    return PydanticCustomError(
        "amount_not_positive", "Please enter an amount greater than $0.",
    )


def _require_role(v: object) -> str:
    v = _text(v)
    if not v:
        raise PydanticCustomError("role_required", "Please select a role.")
    return v
