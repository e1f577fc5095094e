"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Every write is a single statement touching a single row
    - A DashboardStore is built per request and passed explicitly to each pipeline call

Design Decisions:
    - Protocol over ABC: structural subtyping, test doubles need no inheritance
    - Async in Protocol: boundary methods are async because implementations do IO,
      core functions that USE these protocols are never async themselves
    - update/delete return the affected row count: "matched nothing" is data, not an error
"""

from collections.abc import Mapping
from contextlib import AbstractAsyncContextManager
from typing import Any, Protocol

from dashboard.core.domain_types import InvoiceId, RoleId, UserId
from dashboard.core.records import (
    InvoiceInput, InvoiceRecord, InvoiceRow, MemberRecord,
    NewInvoice, NewMember, RoleRecord, TeamMemberRow,
)


class InvoiceRepository(Protocol):
    """Contract for invoice persistence — implemented by shell."""
    async def get(self, invoice_id: InvoiceId) -> InvoiceRecord | None: ...
    async def add(self, invoice: NewInvoice) -> InvoiceId: ...
    async def update(self, invoice_id: InvoiceId, values: InvoiceInput) -> int: ...
    async def delete(self, invoice_id: InvoiceId) -> int: ...
    async def search(
        self, query: str, limit: int, offset: int,
    ) -> list[InvoiceRow]: ...
    async def count(self, query: str) -> int: ...


class UserRepository(Protocol):
    """Contract for team member persistence — implemented by shell."""
    async def get(self, user_id: UserId) -> MemberRecord | None: ...
    async def email_exists(self, email: str) -> bool: ...
    async def add(self, member: NewMember) -> UserId: ...
    async def update_role(self, user_id: UserId, role_id: RoleId) -> int: ...
    async def delete(self, user_id: UserId) -> int: ...
    async def list_with_roles(self) -> list[TeamMemberRow]: ...


class RoleRepository(Protocol):
    """Contract for the read-only roles table."""
    async def list_all(self) -> list[RoleRecord]: ...


class DashboardStore(Protocol):
    """Per-request store access handed to every pipeline invocation."""
    invoices: InvoiceRepository
    users: UserRepository
    roles: RoleRepository

    def transaction(self) -> AbstractAsyncContextManager[None]:
        """Commit on clean exit, roll back on exception."""
        ...


class IdentityProvider(Protocol):
    """External identity provider — raises IdentityProviderError on failure."""
    async def sign_in(self, credentials: Mapping[str, str]) -> Mapping[str, Any]: ...
