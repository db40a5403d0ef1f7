# dashboard/api/overview.py

from fastapi import APIRouter, Depends
from sqlalchemy.engine import Engine

from dashboard.api.deps import get_db_engine, require_session
from dashboard.lib.data import fetch_card_data
from dashboard.models.invoices import CardData

router = APIRouter(
    prefix="/dashboard",
    tags=["overview"],
    dependencies=[Depends(require_session)],
)


@router.get("", response_model=CardData)
def overview(engine: Engine = Depends(get_db_engine)) -> CardData:
    return fetch_card_data(engine)
