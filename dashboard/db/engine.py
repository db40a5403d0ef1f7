# dashboard/db/engine.py

from functools import lru_cache
from typing import Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from dashboard.config import get_settings


def _enable_sqlite_foreign_keys(dbapi_conn, _record) -> None:
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@lru_cache
def _engine_for(url: str) -> Engine:
    # echo=True if you want to see SQL printed in the terminal
    engine = create_engine(url, future=True)
    if engine.dialect.name == "sqlite":
        # invoices.customer_id is only enforced with this pragma on
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def get_engine(url: Optional[str] = None) -> Engine:
    return _engine_for(url or get_settings().database_url)
