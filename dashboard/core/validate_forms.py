"""Schema Validator — raw field map in, typed value bundle or field-error map out.

Invariants:
    - Pure: never touches the store, deterministic for a given input
    - All-or-nothing: any field failure rejects the whole submission (value is None)
    - Field-error map keys are the submitted field names, values are ordered messages
    - Amounts leave the validator as integer cents

Design Decisions:
    - Pydantic form schemas do the per-field work; this module only converts their
      outcome into FormResult so callers never handle pydantic.ValidationError
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from pydantic import BaseModel, ValidationError

from dashboard.core.domain_types import Cents, CustomerId, RoleId
from dashboard.core.money import to_cents
from dashboard.core.records import InvoiceInput, MemberInput, RoleChangeInput
from dashboard.schemas.forms import InvoiceForm, MemberForm, RoleChangeForm

T = TypeVar("T")
F = TypeVar("F", bound=BaseModel)

FieldErrors = dict[str, list[str]]


@dataclass(frozen=True)
class FormResult(Generic[T]):
    """Either a typed value or a non-empty field-error map, never both."""
    value: T | None = None
    errors: FieldErrors = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.value is not None and not self.errors


def validate_invoice_form(raw: Mapping[str, object]) -> FormResult[InvoiceInput]:
    """Validate create/edit invoice fields: customerId, amount, status."""
    return _validate(InvoiceForm, raw, lambda form: InvoiceInput(
        customer_id=CustomerId(form.customer_id),
        amount_cents=Cents(to_cents(form.amount)),
        status=form.status,
    ))


def validate_member_form(raw: Mapping[str, object]) -> FormResult[MemberInput]:
    """Validate add team member fields: name, email, role_id."""
    return _validate(MemberForm, raw, lambda form: MemberInput(
        name=form.name, email=form.email, role_id=RoleId(form.role_id),
    ))


def validate_role_change_form(raw: Mapping[str, object]) -> FormResult[RoleChangeInput]:
    """Validate the single role_id field of a role change."""
    return _validate(RoleChangeForm, raw, lambda form: RoleChangeInput(
        role_id=RoleId(form.role_id),
    ))


def _validate(
    schema: type[F], raw: Mapping[str, object], build: Callable[[F], T],
) -> FormResult[T]:
    try:
        form = schema.model_validate(dict(raw))
    except ValidationError as exc:
        return FormResult(errors=field_errors(exc))
    return FormResult(value=build(form))


def field_errors(exc: ValidationError) -> FieldErrors:
    """Group pydantic errors by top-level field name, preserving order."""
    errors: FieldErrors = {}
    for error in exc.errors():
        name = str(error["loc"][0]) if error["loc"] else "__root__"
        errors.setdefault(name, []).append(error["msg"])
    return errors
