"""Invoice Routes — list, paginate, create, edit and delete invoices.

Invariants:
    - Mutations take form-encoded input and answer with ActionStateResponse
    - Reads are served through the view cache (fresh after any committed write)
"""

from fastapi import APIRouter, Depends, Query

from dashboard.api.dependencies import get_store, get_view_cache, read_form
from dashboard.api.responses import outcome_response
from dashboard.config import Settings, get_settings
from dashboard.core.domain_types import InvoiceId
from dashboard.core.repository_protocols import DashboardStore
from dashboard.infrastructure.view_cache import ViewCache
from dashboard.schemas.responses import (
    InvoiceListItem, InvoiceListResponse, InvoicePagesResponse,
)
from dashboard.services.invoice_actions import (
    create_invoice, delete_invoice, edit_invoice,
)
from dashboard.services.read_views import count_invoice_pages, list_invoices

router = APIRouter(prefix="/dashboard/invoices", tags=["invoices"])


@router.get("", response_model=InvoiceListResponse)
async def get_invoices(
    query: str = Query(""),
    page: int = Query(1, ge=1),
    store: DashboardStore = Depends(get_store),
    views: ViewCache = Depends(get_view_cache),
    settings: Settings = Depends(get_settings),
):
    """Filtered, paginated invoices joined with their customer."""
    result = await list_invoices(store, views, query, page, settings.items_per_page)
    return InvoiceListResponse(
        query=result.query,
        page=result.page,
        invoices=[InvoiceListItem.from_row(row) for row in result.invoices],
    )


@router.get("/pages", response_model=InvoicePagesResponse)
async def get_invoice_pages(
    query: str = Query(""),
    store: DashboardStore = Depends(get_store),
    views: ViewCache = Depends(get_view_cache),
    settings: Settings = Depends(get_settings),
):
    pages = await count_invoice_pages(store, views, query, settings.items_per_page)
    return InvoicePagesResponse(query=query, total_pages=pages)


@router.post("")
async def post_create_invoice(
    form: dict[str, str] = Depends(read_form),
    store: DashboardStore = Depends(get_store),
    views: ViewCache = Depends(get_view_cache),
):
    return outcome_response(await create_invoice(store, views, form))


@router.post("/{invoice_id}/edit")
async def post_edit_invoice(
    invoice_id: str,
    form: dict[str, str] = Depends(read_form),
    store: DashboardStore = Depends(get_store),
    views: ViewCache = Depends(get_view_cache),
):
    return outcome_response(
        await edit_invoice(store, views, InvoiceId(invoice_id), form),
    )


@router.post("/{invoice_id}/delete")
async def post_delete_invoice(
    invoice_id: str,
    store: DashboardStore = Depends(get_store),
    views: ViewCache = Depends(get_view_cache),
):
    return outcome_response(
        await delete_invoice(store, views, InvoiceId(invoice_id)),
    )
