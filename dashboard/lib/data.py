# dashboard/lib/data.py

import math
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import String, case, cast, func, or_, select
from sqlalchemy.engine import Engine

from dashboard.config import Settings
from dashboard.db.schema import customers, invoices
from dashboard.lib.cache import PathCache
from dashboard.models.customers import CustomerField, CustomerTableRow
from dashboard.models.invoices import (
    CardData,
    InvoiceOut,
    InvoicesPage,
    InvoiceTableRow,
)


def parse_page(value: Optional[str]) -> int:
    """Page numbers come straight from the query string; anything unusable means page 1."""
    try:
        page = int(value)
    except (TypeError, ValueError):
        return 1
    return page if page >= 1 else 1


def _invoice_search(query: str):
    pattern = f"%{query}%"
    return or_(
        customers.c.name.ilike(pattern),
        customers.c.email.ilike(pattern),
        cast(invoices.c.amount, String).ilike(pattern),
        cast(invoices.c.date, String).ilike(pattern),
        invoices.c.status.ilike(pattern),
    )


def fetch_filtered_invoices(
    engine: Engine, query: str, current_page: int, items_per_page: int
) -> List[InvoiceTableRow]:
    offset = (current_page - 1) * items_per_page

    stmt = (
        select(
            invoices.c.id,
            invoices.c.customer_id,
            invoices.c.amount,
            invoices.c.date,
            invoices.c.status,
            customers.c.name,
            customers.c.email,
            customers.c.image_url,
        )
        .select_from(invoices.join(customers))
        .where(_invoice_search(query))
        .order_by(invoices.c.date.desc(), invoices.c.id)
        .limit(items_per_page)
        .offset(offset)
    )

    with engine.connect() as conn:
        rows = conn.execute(stmt).mappings().all()

    return [InvoiceTableRow(**row) for row in rows]


def fetch_invoices_pages(engine: Engine, query: str, items_per_page: int) -> int:
    stmt = (
        select(func.count())
        .select_from(invoices.join(customers))
        .where(_invoice_search(query))
    )

    with engine.connect() as conn:
        total = conn.execute(stmt).scalar_one()

    return math.ceil(total / items_per_page)


def fetch_invoices_page(
    engine: Engine,
    cache: PathCache,
    settings: Settings,
    query: str,
    current_page: int,
) -> InvoicesPage:
    """
    One listing page plus the page count, memoised under the listing path
    until the next successful mutation revalidates it.
    """

    def load() -> InvoicesPage:
        return InvoicesPage(
            items=fetch_filtered_invoices(
                engine, query, current_page, settings.items_per_page
            ),
            query=query,
            current_page=current_page,
            total_pages=fetch_invoices_pages(engine, query, settings.items_per_page),
        )

    return cache.get_or_load(
        settings.invoices_path,
        ("page", query, current_page),
        load,
    )


def fetch_invoice_by_id(engine: Engine, invoice_id: str) -> Optional[InvoiceOut]:
    stmt = select(
        invoices.c.id,
        invoices.c.customer_id,
        invoices.c.amount,
        invoices.c.status,
        invoices.c.date,
    ).where(invoices.c.id == invoice_id)

    with engine.connect() as conn:
        row = conn.execute(stmt).mappings().first()

    if row is None:
        return None

    return InvoiceOut(
        id=row["id"],
        customer_id=row["customer_id"],
        # back to major units for the edit form
        amount=Decimal(row["amount"]) / 100,
        status=row["status"],
        date=row["date"],
    )


def fetch_customers(engine: Engine) -> List[CustomerField]:
    stmt = select(customers.c.id, customers.c.name).order_by(customers.c.name)

    with engine.connect() as conn:
        rows = conn.execute(stmt).mappings().all()

    return [CustomerField(id=row["id"], name=row["name"]) for row in rows]


def _sum_where(status: str):
    return func.coalesce(
        func.sum(case((invoices.c.status == status, invoices.c.amount), else_=0)),
        0,
    )


def fetch_filtered_customers(engine: Engine, query: str) -> List[CustomerTableRow]:
    pattern = f"%{query}%"
    stmt = (
        select(
            customers.c.id,
            customers.c.name,
            customers.c.email,
            customers.c.image_url,
            func.count(invoices.c.id).label("total_invoices"),
            _sum_where("pending").label("total_pending"),
            _sum_where("paid").label("total_paid"),
        )
        .select_from(customers.outerjoin(invoices))
        .where(or_(customers.c.name.ilike(pattern), customers.c.email.ilike(pattern)))
        .group_by(
            customers.c.id,
            customers.c.name,
            customers.c.email,
            customers.c.image_url,
        )
        .order_by(customers.c.name)
    )

    with engine.connect() as conn:
        rows = conn.execute(stmt).mappings().all()

    return [CustomerTableRow(**row) for row in rows]


def fetch_card_data(engine: Engine) -> CardData:
    invoice_count = select(func.count()).select_from(invoices)
    customer_count = select(func.count()).select_from(customers)
    totals = select(
        _sum_where("paid").label("paid"),
        _sum_where("pending").label("pending"),
    ).select_from(invoices)

    with engine.connect() as conn:
        number_of_invoices = conn.execute(invoice_count).scalar_one()
        number_of_customers = conn.execute(customer_count).scalar_one()
        row = conn.execute(totals).first()

    return CardData(
        number_of_invoices=number_of_invoices,
        number_of_customers=number_of_customers,
        total_paid_invoices=row.paid or 0,
        total_pending_invoices=row.pending or 0,
    )
