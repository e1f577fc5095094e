"""Read Views — listing queries served through the view cache.

Invariants:
    - Every read goes through ViewCache.get_or_load: a committed write's
      invalidation forces the next read back to the store
    - Store failures surface as StorageFaultError (503), never as raw exceptions
    - Invoice pages are 1-based; pages below 1 are clamped to 1
"""

from dataclasses import dataclass

from dashboard.core.domain_types import ViewKey
from dashboard.core.pagination import clamp_page, page_offset, total_pages
from dashboard.core.records import InvoiceRow, RoleRecord, TeamMemberRow
from dashboard.core.repository_protocols import DashboardStore
from dashboard.infrastructure.view_cache import ViewCache
from dashboard.services.mutation_executor import storage_guard


@dataclass(frozen=True)
class InvoicePage:
    query: str
    page: int
    invoices: tuple[InvoiceRow, ...]


async def list_invoices(
    store: DashboardStore, views: ViewCache, query: str, page: int, per_page: int,
) -> InvoicePage:
    page = clamp_page(page)

    async def load() -> list[InvoiceRow]:
        async with storage_guard("Fetch Invoices"):
            return await store.invoices.search(
                query, limit=per_page, offset=page_offset(page, per_page),
            )

    rows = await views.get_or_load(ViewKey.INVOICES, ("page", query, page, per_page), load)
    return InvoicePage(query=query, page=page, invoices=rows)


async def count_invoice_pages(
    store: DashboardStore, views: ViewCache, query: str, per_page: int,
) -> int:
    async def load() -> list[int]:
        async with storage_guard("Fetch Total Number Of Invoices"):
            return [await store.invoices.count(query)]

    (count,) = await views.get_or_load(ViewKey.INVOICES, ("count", query), load)
    return total_pages(count, per_page)


async def list_team_members(
    store: DashboardStore, views: ViewCache,
) -> tuple[TeamMemberRow, ...]:
    async def load() -> list[TeamMemberRow]:
        async with storage_guard("Fetch Team Members"):
            return await store.users.list_with_roles()

    return await views.get_or_load(ViewKey.TEAM, "all", load)


async def list_roles(
    store: DashboardStore, views: ViewCache,
) -> tuple[RoleRecord, ...]:
    async def load() -> list[RoleRecord]:
        async with storage_guard("Fetch Roles"):
            return await store.roles.list_all()

    return await views.get_or_load(ViewKey.ROLES, "all", load)
