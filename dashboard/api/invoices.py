# dashboard/api/invoices.py

from typing import Optional, Union

from fastapi import APIRouter, Depends, Form, HTTPException, Query
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy.engine import Engine

from dashboard.api.deps import get_db_engine, require_session
from dashboard.config import Settings, get_settings
from dashboard.lib import actions
from dashboard.lib.cache import PathCache, get_cache
from dashboard.lib.data import (
    fetch_customers,
    fetch_invoice_by_id,
    fetch_invoices_page,
    parse_page,
)
from dashboard.models.customers import InvoiceFormContext
from dashboard.models.invoices import InvoiceActionState, InvoicesPage

router = APIRouter(
    prefix="/dashboard/invoices",
    tags=["invoices"],
    dependencies=[Depends(require_session)],
)


def _to_response(result: Union[InvoiceActionState, actions.Redirect]):
    if isinstance(result, actions.Redirect):
        return RedirectResponse(result.location, status_code=303)

    if result.errors:
        status_code = 422
    elif result.failed:
        status_code = 500
    else:
        status_code = 200
    return JSONResponse(
        status_code=status_code,
        content=result.model_dump(exclude_none=True),
    )


@router.get("", response_model=InvoicesPage)
def list_invoices(
    query: str = Query("", description="Matches customer name/email, amount, date or status"),
    page: Optional[str] = Query(None, description="1-based page number"),
    engine: Engine = Depends(get_db_engine),
    cache: PathCache = Depends(get_cache),
    settings: Settings = Depends(get_settings),
) -> InvoicesPage:
    """
    Paginated invoices table for the current search.
    """
    return fetch_invoices_page(engine, cache, settings, query, parse_page(page))


@router.get("/create", response_model=InvoiceFormContext)
def create_invoice_form(engine: Engine = Depends(get_db_engine)) -> InvoiceFormContext:
    return InvoiceFormContext(customers=fetch_customers(engine))


@router.post("/create")
def create_invoice(
    customerId: Optional[str] = Form(None),
    amount: Optional[str] = Form(None),
    status: Optional[str] = Form(None),
    engine: Engine = Depends(get_db_engine),
    cache: PathCache = Depends(get_cache),
):
    form = {"customerId": customerId, "amount": amount, "status": status}
    return _to_response(actions.create_invoice(engine, form, cache.revalidate_path))


@router.get("/{invoice_id}/edit", response_model=InvoiceFormContext)
def edit_invoice_form(
    invoice_id: str,
    engine: Engine = Depends(get_db_engine),
) -> InvoiceFormContext:
    """
    The invoice being edited plus the customer picker.
    """
    invoice = fetch_invoice_by_id(engine, invoice_id)
    if invoice is None:
        raise HTTPException(status_code=404, detail="Invoice not found")

    return InvoiceFormContext(customers=fetch_customers(engine), invoice=invoice)


@router.post("/{invoice_id}/edit")
def update_invoice(
    invoice_id: str,
    customerId: Optional[str] = Form(None),
    amount: Optional[str] = Form(None),
    status: Optional[str] = Form(None),
    engine: Engine = Depends(get_db_engine),
    cache: PathCache = Depends(get_cache),
):
    form = {"customerId": customerId, "amount": amount, "status": status}
    return _to_response(
        actions.update_invoice(engine, invoice_id, form, cache.revalidate_path)
    )


@router.post("/{invoice_id}/delete")
def delete_invoice(
    invoice_id: str,
    engine: Engine = Depends(get_db_engine),
    cache: PathCache = Depends(get_cache),
):
    return _to_response(
        actions.delete_invoice(engine, invoice_id, cache.revalidate_path)
    )
