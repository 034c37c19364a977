"""SQL record store using SQLAlchemy Core (PostgreSQL in production, SQLite in tests)."""

from datetime import datetime
from typing import Any, Iterable, List, Optional, Tuple

from sqlalchemy import event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from models.customer import Customer
from models.order import Order
from repositories.base import RecordStore
from utils.error_handling import StoreError
from utils.logging_config import get_logger

logger = get_logger(__name__)

# Whitelisted ORDER BY expressions; user input never reaches the SQL text.
SORT_COLUMNS = {
    "name": "u.name",
    "email": "u.email",
    "created_at": "u.created_at",
    "order_count": "order_count",
}

SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS users (
        id INTEGER PRIMARY KEY,
        name TEXT NOT NULL,
        email TEXT UNIQUE NOT NULL,
        created_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS orders (
        id INTEGER PRIMARY KEY,
        user_id INTEGER NOT NULL REFERENCES users(id),
        amount NUMERIC(12, 2) NOT NULL,
        product TEXT NOT NULL,
        created_at TEXT NOT NULL
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_orders_user_id ON orders (user_id)",
)


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _unicode_lower(value: Any) -> Any:
    return value.lower() if isinstance(value, str) else value


def _register_sqlite_functions(dbapi_connection, connection_record) -> None:
    # SQLite's built-in lower() only folds ASCII; PostgreSQL's is locale aware.
    dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)


def _timestamp(value: Any) -> str:
    """TEXT columns come back as str, timestamp columns as datetime."""
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def _to_customer(row: dict) -> Customer:
    return Customer(
        id=row["id"],
        name=row["name"],
        email=row["email"],
        created_at=_timestamp(row["created_at"]),
    )


def _to_order(row: dict) -> Order:
    return Order(
        id=row["id"],
        user_id=row["user_id"],
        amount=float(row["amount"]),
        product=row["product"],
        created_at=_timestamp(row["created_at"]),
    )


class SqlRecordStore(RecordStore):
    """Thin wrapper to keep SQL organized and parameterized."""

    def __init__(self, engine: Engine):
        self.engine = engine
        if engine.dialect.name == "sqlite":
            event.listen(engine, "connect", _register_sqlite_functions)

    def fetch_one(self, query: str, params: dict) -> Optional[dict]:
        """Execute a SELECT and return one row as dict."""
        try:
            with self.engine.connect() as conn:
                row = conn.execute(text(query), params).fetchone()
                return dict(row._mapping) if row else None
        except SQLAlchemyError as exc:
            raise self._store_error(exc) from exc

    def fetch_all(self, query: str, params: Optional[dict] = None) -> List[dict]:
        """Execute a SELECT and return every row as dict."""
        try:
            with self.engine.connect() as conn:
                result = conn.execute(text(query), params or {})
                return [dict(row._mapping) for row in result]
        except SQLAlchemyError as exc:
            raise self._store_error(exc) from exc

    def execute(self, query: str, params: Any) -> Any:
        """Execute a parameterized statement inside a transaction."""
        try:
            with self.engine.begin() as conn:
                return conn.execute(text(query), params)
        except SQLAlchemyError as exc:
            raise self._store_error(exc) from exc

    def query_customers(
        self,
        search: Optional[str],
        sort_field: str,
        ascending: bool,
        offset: int,
        limit: int,
    ) -> Tuple[List[Customer], int]:
        column = SORT_COLUMNS.get(sort_field, SORT_COLUMNS["created_at"])
        direction = "ASC" if ascending else "DESC"

        where = ""
        filter_params: dict = {}
        if search:
            where = (
                "WHERE lower(u.name) LIKE :pattern ESCAPE '\\' "
                "OR lower(u.email) LIKE :pattern ESCAPE '\\'"
            )
            filter_params["pattern"] = f"%{_escape_like(search.lower())}%"

        page_params = dict(filter_params, limit=limit, offset=offset)

        count_query = text(f"SELECT COUNT(*) AS total FROM users u {where}")
        page_query = text(
            f"""
            SELECT u.id, u.name, u.email, u.created_at,
                   COALESCE(oc.order_count, 0) AS order_count
            FROM users u
            LEFT JOIN (
                SELECT user_id, COUNT(*) AS order_count
                FROM orders
                GROUP BY user_id
            ) oc ON oc.user_id = u.id
            {where}
            ORDER BY {column} {direction}, u.id {direction}
            LIMIT :limit OFFSET :offset
        """
        )

        # One connection for both statements so the count and the page agree.
        try:
            with self.engine.connect() as conn:
                total = conn.execute(count_query, filter_params).scalar()
                rows = [dict(row._mapping) for row in conn.execute(page_query, page_params)]
        except SQLAlchemyError as exc:
            raise self._store_error(exc) from exc

        return [_to_customer(row) for row in rows], int(total or 0)

    def fetch_customer_by_id(self, customer_id: int) -> Optional[Customer]:
        row = self.fetch_one(
            "SELECT id, name, email, created_at FROM users WHERE id = :id",
            {"id": customer_id},
        )
        return _to_customer(row) if row else None

    def fetch_orders_by_customer_id(self, customer_id: int) -> List[Order]:
        rows = self.fetch_all(
            """
            SELECT id, user_id, amount, product, created_at
            FROM orders
            WHERE user_id = :user_id
            ORDER BY id
        """,
            {"user_id": customer_id},
        )
        return [_to_order(row) for row in rows]

    def fetch_all_customers(self) -> List[Customer]:
        rows = self.fetch_all("SELECT id, name, email, created_at FROM users ORDER BY id")
        return [_to_customer(row) for row in rows]

    def fetch_all_orders(self) -> List[Order]:
        rows = self.fetch_all(
            "SELECT id, user_id, amount, product, created_at FROM orders ORDER BY id"
        )
        return [_to_order(row) for row in rows]

    def create_schema(self) -> None:
        """Create tables if missing."""
        try:
            with self.engine.begin() as conn:
                for statement in SCHEMA:
                    conn.execute(text(statement))
        except SQLAlchemyError as exc:
            raise self._store_error(exc) from exc

    def insert_customers(self, customers: Iterable[Customer]) -> int:
        rows = [c.model_dump() for c in customers]
        if rows:
            self.execute(
                "INSERT INTO users (id, name, email, created_at) "
                "VALUES (:id, :name, :email, :created_at)",
                rows,
            )
        return len(rows)

    def insert_orders(self, orders: Iterable[Order]) -> int:
        rows = [o.model_dump() for o in orders]
        if rows:
            self.execute(
                "INSERT INTO orders (id, user_id, amount, product, created_at) "
                "VALUES (:id, :user_id, :amount, :product, :created_at)",
                rows,
            )
        return len(rows)

    def counts(self) -> dict:
        """Row counts per table, used by the data verification command."""
        row = self.fetch_one(
            "SELECT (SELECT COUNT(*) FROM users) AS users, "
            "(SELECT COUNT(*) FROM orders) AS orders",
            {},
        )
        return {"users": int(row["users"]), "orders": int(row["orders"])}

    def sample_join(self, limit: int = 3) -> List[dict]:
        """A few orders joined with their customer, newest first."""
        return self.fetch_all(
            """
            SELECT o.id, o.amount, o.product, u.name, u.email, o.created_at
            FROM orders o
            JOIN users u ON o.user_id = u.id
            ORDER BY o.created_at DESC
            LIMIT :limit
        """,
            {"limit": limit},
        )

    def close(self) -> None:
        self.engine.dispose()

    @staticmethod
    def _store_error(exc: Exception) -> StoreError:
        logger.error("Database query failed", extra={"error": str(exc)})
        return StoreError(f"Database query failed: {exc}")
