# dashboard/lib/actions.py
"""
Invoice mutations: create, update, delete.

Each operation runs in a fixed order: validation, then one persistence
statement, then cache invalidation, then (create/update only) navigation.
Invalidation and navigation happen only after the statement succeeded.

Navigation is returned as a `Redirect` value. The storage `try` block
wraps the statement alone, so nothing on the success path can be caught
by it.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Callable, Mapping, Union

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from zoneinfo import ZoneInfo

from dashboard.config import get_settings
from dashboard.db.schema import invoices
from dashboard.lib.validation import CREATE_INVOICE, UPDATE_INVOICE, Invalid
from dashboard.models.invoices import InvoiceActionState

logger = logging.getLogger(__name__)

Revalidate = Callable[[str], Any]


@dataclass(frozen=True)
class Redirect:
    location: str


ActionResult = Union[InvoiceActionState, Redirect]


def to_minor_units(amount: Decimal) -> int:
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def today() -> date:
    return datetime.now(ZoneInfo(get_settings().timezone)).date()


def create_invoice(
    engine: Engine,
    form: Mapping[str, Any],
    revalidate: Revalidate,
    clock: Callable[[], date] = today,
) -> ActionResult:
    result = CREATE_INVOICE.validate(form)
    if isinstance(result, Invalid):
        return InvoiceActionState(
            errors=result.field_errors,
            message="Missing Fields. Failed to Create Invoice.",
        )

    data = result.data
    values = {
        "customer_id": data.customer_id,
        "amount": to_minor_units(data.amount),
        "status": data.status,
        "date": clock(),
    }

    try:
        with engine.begin() as conn:
            conn.execute(invoices.insert().values(**values))
    except SQLAlchemyError:
        logger.exception("Failed to create invoice for customer %s", data.customer_id)
        return InvoiceActionState(
            message="Database Error: Failed to Create Invoice.", failed=True
        )

    listing = get_settings().invoices_path
    revalidate(listing)
    return Redirect(listing)


def update_invoice(
    engine: Engine,
    invoice_id: str,
    form: Mapping[str, Any],
    revalidate: Revalidate,
) -> ActionResult:
    result = UPDATE_INVOICE.validate(form)
    if isinstance(result, Invalid):
        return InvoiceActionState(
            errors=result.field_errors,
            message="Missing Fields. Failed to Update Invoice.",
        )

    data = result.data
    stmt = (
        invoices.update()
        .where(invoices.c.id == invoice_id)
        .values(
            customer_id=data.customer_id,
            amount=to_minor_units(data.amount),
            status=data.status,
        )
    )

    try:
        with engine.begin() as conn:
            updated = conn.execute(stmt).rowcount
    except SQLAlchemyError:
        logger.exception("Failed to update invoice %s", invoice_id)
        return InvoiceActionState(
            message="Database Error: Failed to Update Invoice.", failed=True
        )

    if updated == 0:
        # Unknown ids are not an error: the update simply touches no rows.
        logger.info("Update of invoice %s matched no rows", invoice_id)

    listing = get_settings().invoices_path
    revalidate(listing)
    return Redirect(listing)


def delete_invoice(
    engine: Engine,
    invoice_id: str,
    revalidate: Revalidate,
) -> InvoiceActionState:
    try:
        with engine.begin() as conn:
            conn.execute(invoices.delete().where(invoices.c.id == invoice_id))
    except SQLAlchemyError:
        logger.exception("Failed to delete invoice %s", invoice_id)
        return InvoiceActionState(
            message="Database Error: Failed to Delete Invoice.", failed=True
        )

    revalidate(get_settings().invoices_path)
    return InvoiceActionState(message="Deleted Invoice.")
