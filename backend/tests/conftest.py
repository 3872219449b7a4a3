import sqlite3

import pytest
from httpx import AsyncClient, ASGITransport

from speechviz.main import app
from speechviz.schemas.database import DatabaseConfig
from speechviz.services.config_store import DatabaseConfigStore

SHOP_SCHEMA = """
CREATE TABLE customers (
    id INTEGER PRIMARY KEY,
    name TEXT NOT NULL,
    email VARCHAR(100)
);
CREATE UNIQUE INDEX ix_customers_email ON customers (email);

CREATE TABLE orders (
    id INTEGER PRIMARY KEY,
    customer_id INTEGER NOT NULL,
    placed_at DATETIME NOT NULL,
    total DECIMAL(10, 2),
    FOREIGN KEY (customer_id) REFERENCES customers (id)
);

CREATE TABLE "line items" (
    id INTEGER PRIMARY KEY,
    order_id INTEGER NOT NULL,
    "unit price" DECIMAL(10, 2),
    FOREIGN KEY (order_id) REFERENCES orders (id)
);

INSERT INTO customers (id, name, email) VALUES
    (1, 'Ada', 'ada@example.com'),
    (2, 'Linus', 'linus@example.com');

INSERT INTO orders (id, customer_id, placed_at, total) VALUES
    (1, 1, '2026-08-28 09:15:00', 120.50),
    (2, 1, '2026-09-03 14:00:00', 80.00),
    (3, 2, '2026-09-17 11:30:00', 42.25),
    (4, 2, '2026-10-02 16:45:00', 15.00);
"""


@pytest.fixture
def shop_db_url(tmp_path):
    """SQLite database with customers, orders and line items."""
    path = tmp_path / "shop.db"
    conn = sqlite3.connect(path)
    conn.executescript(SHOP_SCHEMA)
    conn.commit()
    conn.close()
    return f"sqlite+aiosqlite:///{path}"


@pytest.fixture
def db_config():
    return DatabaseConfig(host="localhost", user="analyst", password="secret", database="shop")


@pytest.fixture
async def client():
    """Async test client with an empty default-config slot."""
    app.state.config_store = DatabaseConfigStore()

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac
