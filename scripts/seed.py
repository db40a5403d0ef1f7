# scripts/seed.py

import logging
from datetime import date
from uuid import NAMESPACE_URL, uuid5

from sqlalchemy.dialects import postgresql, sqlite

from dashboard.db.engine import get_engine
from dashboard.db.schema import customers, invoices, metadata, users
from dashboard.lib.auth import hash_password

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)

USERS = [
    {
        "id": "410544b2-4001-4271-9855-fec4b6a6442a",
        "name": "User",
        "email": "user@nextmail.com",
        "password": "123456",
    },
]

CUSTOMERS = [
    {
        "id": "3958dc9e-712f-4377-85e9-fec4b6a6442a",
        "name": "Delba de Oliveira",
        "email": "delba@oliveira.com",
        "image_url": "/customers/delba-de-oliveira.png",
    },
    {
        "id": "3958dc9e-742f-4377-85e9-fec4b6a6442a",
        "name": "Lee Robinson",
        "email": "lee@robinson.com",
        "image_url": "/customers/lee-robinson.png",
    },
    {
        "id": "3958dc9e-737f-4377-85e9-fec4b6a6442a",
        "name": "Hector Simpson",
        "email": "hector@simpson.com",
        "image_url": "/customers/hector-simpson.png",
    },
    {
        "id": "50ca3e18-62cd-11ee-8c99-0242ac120002",
        "name": "Steven Tey",
        "email": "steven@tey.com",
        "image_url": "/customers/steven-tey.png",
    },
]

# (customer index, amount in cents, status, date)
INVOICES = [
    (0, 15795, "pending", date(2022, 12, 6)),
    (1, 20348, "pending", date(2022, 11, 14)),
    (3, 3040, "paid", date(2022, 10, 29)),
    (2, 44800, "paid", date(2023, 9, 10)),
    (0, 34577, "pending", date(2023, 8, 5)),
    (2, 54246, "pending", date(2023, 7, 16)),
    (1, 666, "pending", date(2023, 6, 27)),
    (3, 32545, "paid", date(2023, 6, 9)),
    (0, 1250, "paid", date(2023, 6, 17)),
    (1, 8546, "paid", date(2023, 6, 7)),
]


def _insert_for(engine):
    if engine.dialect.name == "postgresql":
        return postgresql.insert
    return sqlite.insert


def invoice_rows():
    rows = []
    for n, (customer_index, amount, status, issued) in enumerate(INVOICES):
        customer_id = CUSTOMERS[customer_index]["id"]
        rows.append(
            {
                # stable ids so re-running the seed doesn't duplicate invoices
                "id": str(uuid5(NAMESPACE_URL, f"seed-invoice-{n}")),
                "customer_id": customer_id,
                "amount": amount,
                "status": status,
                "date": issued,
            }
        )
    return rows


def seed(engine) -> None:
    insert = _insert_for(engine)
    metadata.create_all(engine)

    with engine.begin() as conn:
        for user in USERS:
            stmt = insert(users).values(
                id=user["id"],
                name=user["name"],
                email=user["email"],
                password=hash_password(user["password"]),
            )
            conn.execute(stmt.on_conflict_do_nothing(index_elements=[users.c.email]))

        for customer in CUSTOMERS:
            stmt = insert(customers).values(**customer)
            conn.execute(stmt.on_conflict_do_nothing(index_elements=[customers.c.id]))

        for row in invoice_rows():
            stmt = insert(invoices).values(**row)
            conn.execute(stmt.on_conflict_do_nothing(index_elements=[invoices.c.id]))


def main():
    seed(get_engine())
    logger.info("Seeded users:      %s", len(USERS))
    logger.info("Seeded customers:  %s", len(CUSTOMERS))
    logger.info("Seeded invoices:   %s", len(INVOICES))


if __name__ == "__main__":
    main()
