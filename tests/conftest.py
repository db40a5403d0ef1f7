"""Shared fixtures: a throwaway SQLite database, seeded rows and an app client."""

import os
from datetime import date

# settings are read once per process; pin them before the app is imported
os.environ.setdefault("DASHBOARD_SESSION_SECRET", "test-session-secret")
os.environ.setdefault("DASHBOARD_DATABASE_URL", "sqlite:///test.db")

import pytest
from fastapi.testclient import TestClient

from dashboard.api.deps import get_db_engine
from dashboard.db.engine import get_engine
from dashboard.db.schema import customers, invoices, metadata, users
from dashboard.lib.auth import hash_password
from dashboard.lib.cache import PathCache, get_cache
from dashboard.main import app

CUSTOMER_ID = "3958dc9e-712f-4377-85e9-fec4b6a6442a"
OTHER_CUSTOMER_ID = "3958dc9e-742f-4377-85e9-fec4b6a6442a"

USER_EMAIL = "user@nextmail.com"
USER_PASSWORD = "123456"


class RecordingInvalidator:
    """Stands in for the cache: remembers which paths were revalidated."""

    def __init__(self):
        self.paths = []

    def __call__(self, path):
        self.paths.append(path)


@pytest.fixture(scope="session")
def password_hash():
    return hash_password(USER_PASSWORD)


@pytest.fixture
def engine(tmp_path, password_hash):
    engine = get_engine(f"sqlite:///{tmp_path / 'dashboard.db'}")
    metadata.create_all(engine)

    with engine.begin() as conn:
        conn.execute(
            customers.insert(),
            [
                {
                    "id": CUSTOMER_ID,
                    "name": "Delba de Oliveira",
                    "email": "delba@oliveira.com",
                    "image_url": "/customers/delba-de-oliveira.png",
                },
                {
                    "id": OTHER_CUSTOMER_ID,
                    "name": "Lee Robinson",
                    "email": "lee@robinson.com",
                    "image_url": "/customers/lee-robinson.png",
                },
            ],
        )
        conn.execute(
            users.insert().values(
                name="User",
                email=USER_EMAIL,
                password=password_hash,
            )
        )

    yield engine
    engine.dispose()


@pytest.fixture
def invoice_rows(engine):
    """Two invoices, one per status, inserted behind the service's back."""
    rows = [
        {
            "id": "inv-1",
            "customer_id": CUSTOMER_ID,
            "amount": 15795,
            "status": "pending",
            "date": date(2022, 12, 6),
        },
        {
            "id": "inv-2",
            "customer_id": OTHER_CUSTOMER_ID,
            "amount": 3040,
            "status": "paid",
            "date": date(2022, 10, 29),
        },
    ]
    with engine.begin() as conn:
        conn.execute(invoices.insert(), rows)
    return rows


@pytest.fixture
def invalidator():
    return RecordingInvalidator()


@pytest.fixture
def cache(tmp_path):
    cache = PathCache(str(tmp_path / "cache"))
    yield cache
    cache.close()


@pytest.fixture
def client(engine, cache):
    app.dependency_overrides[get_db_engine] = lambda: engine
    app.dependency_overrides[get_cache] = lambda: cache
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def signed_in(client):
    res = client.post(
        "/login",
        data={"email": USER_EMAIL, "password": USER_PASSWORD},
        follow_redirects=False,
    )
    assert res.status_code == 303
    return client
