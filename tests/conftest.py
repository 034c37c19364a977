"""
Pytest configuration to ensure paths are set up correctly for tests.

This allows imports like `from services import customer_service` to work
when running tests, matching the Lambda layout where src/ is the code root.
"""

import os
import sys
from pathlib import Path

import pytest


def _ensure_paths_on_sys_path() -> None:
    """Add repository root AND src/ to sys.path if missing."""
    repo_root = Path(__file__).resolve().parents[1]
    src_root = repo_root / "src"

    root_str = str(repo_root)
    if root_str not in sys.path:
        sys.path.insert(0, root_str)

    src_str = str(src_root)
    if src_str not in sys.path:
        sys.path.insert(0, src_str)


_ensure_paths_on_sys_path()

# Offline-friendly defaults so nothing reaches AWS or a real database.
os.environ.setdefault("AWS_REGION", "eu-west-2")
os.environ.setdefault("AWS_DEFAULT_REGION", "eu-west-2")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "test")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "test")
os.environ.setdefault("ENVIRONMENT", "dev")
for _var in ("DATABASE_URL", "DB_SECRET_ARN", "CUSTOMERS_CSV", "ORDERS_CSV"):
    os.environ.pop(_var, None)


USERS_CSV = """id,name,email,created_at
1,John Smith,john.smith@email.com,2024-01-15T10:30:00Z
2,Sarah Johnson,sarah.johnson@email.com,2024-01-16T14:20:00Z
3,Michael Brown,michael.brown@email.com,2024-01-17T09:15:00Z
4,Emily Davis,emily.davis@email.com,2024-01-18T16:45:00Z
5,David Wilson,david.wilson@email.com,2024-01-19T11:30:00Z
"""

ORDERS_CSV = """id,user_id,amount,product,created_at
1,1,299.99,Wireless Headphones,2024-01-15T11:00:00Z
2,2,149.99,Bluetooth Speaker,2024-01-16T14:30:00Z
3,1,79.99,Phone Case,2024-01-17T09:45:00Z
4,3,499.99,Laptop Stand,2024-01-17T10:15:00Z
5,4,199.99,Mechanical Keyboard,2024-01-18T17:00:00Z
6,1,20.02,Phone Case,2023-12-20T08:00:00Z
"""


@pytest.fixture
def customers():
    from services.csv_loader import CsvRecordLoader

    return CsvRecordLoader().customers_from_text(USERS_CSV)


@pytest.fixture
def orders():
    from services.csv_loader import CsvRecordLoader

    return CsvRecordLoader().orders_from_text(ORDERS_CSV)


@pytest.fixture
def memory_store(customers, orders):
    from repositories.memory_repo import InMemoryRecordStore

    return InMemoryRecordStore(customers, orders)


@pytest.fixture
def sqlite_store(tmp_path, customers, orders):
    """SQL store on a throwaway SQLite file; each thread gets its own connection."""
    from sqlalchemy import create_engine

    from repositories.sql_repo import SqlRecordStore

    engine = create_engine(f"sqlite:///{tmp_path / 'dashboard.db'}")
    store = SqlRecordStore(engine)
    store.create_schema()
    store.insert_customers(customers)
    store.insert_orders(orders)
    yield store
    store.close()


@pytest.fixture
def users_csv():
    return USERS_CSV


@pytest.fixture
def orders_csv():
    return ORDERS_CSV
