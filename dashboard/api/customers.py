# dashboard/api/customers.py

from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.engine import Engine

from dashboard.api.deps import get_db_engine, require_session
from dashboard.lib.data import fetch_filtered_customers
from dashboard.models.customers import CustomerTableRow

router = APIRouter(
    prefix="/dashboard/customers",
    tags=["customers"],
    dependencies=[Depends(require_session)],
)


@router.get("", response_model=List[CustomerTableRow])
def list_customers(
    query: str = Query("", description="Case-insensitive match on name or email"),
    engine: Engine = Depends(get_db_engine),
) -> List[CustomerTableRow]:
    """
    Customers with their invoice count and pending/paid totals (minor units).
    """
    return fetch_filtered_customers(engine, query)
