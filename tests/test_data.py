"""Read paths behind the invoices and customers pages."""

from datetime import date
from decimal import Decimal

import pytest

from dashboard.config import get_settings
from dashboard.db.schema import invoices
from dashboard.lib.data import (
    fetch_card_data,
    fetch_customers,
    fetch_filtered_customers,
    fetch_filtered_invoices,
    fetch_invoice_by_id,
    fetch_invoices_page,
    fetch_invoices_pages,
    parse_page,
)

from conftest import CUSTOMER_ID


@pytest.mark.parametrize(
    "raw, page",
    [(None, 1), ("", 1), ("abc", 1), ("0", 1), ("-2", 1), ("1", 1), ("3", 3)],
)
def test_parse_page(raw, page):
    assert parse_page(raw) == page


def test_filtered_invoices_newest_first(engine, invoice_rows):
    rows = fetch_filtered_invoices(engine, "", 1, 6)
    assert [r.id for r in rows] == ["inv-1", "inv-2"]
    assert rows[0].name == "Delba de Oliveira"
    assert rows[0].amount == 15795


@pytest.mark.parametrize(
    "query, ids",
    [
        ("delba", ["inv-1"]),
        ("ROBINSON.COM", ["inv-2"]),
        ("paid", ["inv-2"]),
        ("pend", ["inv-1"]),
        ("3040", ["inv-2"]),
        ("2022-12", ["inv-1"]),
        ("nothing matches this", []),
    ],
)
def test_filtered_invoices_search(engine, invoice_rows, query, ids):
    assert [r.id for r in fetch_filtered_invoices(engine, query, 1, 6)] == ids


def test_pagination(engine, invoice_rows):
    assert fetch_invoices_pages(engine, "", 1) == 2
    assert fetch_invoices_pages(engine, "", 6) == 1
    assert fetch_invoices_pages(engine, "nothing matches this", 6) == 0
    assert [r.id for r in fetch_filtered_invoices(engine, "", 2, 1)] == ["inv-2"]


def test_invoice_by_id_in_major_units(engine, invoice_rows):
    invoice = fetch_invoice_by_id(engine, "inv-1")
    assert invoice.amount == Decimal("157.95")
    assert invoice.customer_id == CUSTOMER_ID
    assert invoice.date == date(2022, 12, 6)
    assert fetch_invoice_by_id(engine, "missing") is None


def test_customers_sorted_by_name(engine):
    assert [c.name for c in fetch_customers(engine)] == [
        "Delba de Oliveira",
        "Lee Robinson",
    ]


def test_filtered_customers_totals(engine, invoice_rows):
    rows = {r.name: r for r in fetch_filtered_customers(engine, "")}
    assert rows["Delba de Oliveira"].total_invoices == 1
    assert rows["Delba de Oliveira"].total_pending == 15795
    assert rows["Delba de Oliveira"].total_paid == 0
    assert rows["Lee Robinson"].total_paid == 3040

    assert [r.name for r in fetch_filtered_customers(engine, "lee@")] == ["Lee Robinson"]


def test_customers_without_invoices_have_zero_totals(engine):
    rows = fetch_filtered_customers(engine, "")
    assert all(r.total_invoices == 0 and r.total_paid == 0 for r in rows)


def test_card_data(engine, invoice_rows):
    cards = fetch_card_data(engine)
    assert cards.number_of_invoices == 2
    assert cards.number_of_customers == 2
    assert cards.total_paid_invoices == 3040
    assert cards.total_pending_invoices == 15795


def test_listing_page_is_cached_until_revalidated(engine, cache, invoice_rows):
    settings = get_settings()
    first = fetch_invoices_page(engine, cache, settings, "", 1)
    assert first.total_pages == 1

    with engine.begin() as conn:
        conn.execute(invoices.delete())

    assert fetch_invoices_page(engine, cache, settings, "", 1) == first

    cache.revalidate_path(settings.invoices_path)
    fresh = fetch_invoices_page(engine, cache, settings, "", 1)
    assert fresh.items == []
    assert fresh.total_pages == 0
