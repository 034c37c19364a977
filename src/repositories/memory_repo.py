"""In-memory record store backed by validated records (CSV exports, tests)."""

from collections import Counter
from typing import Iterable, List, Optional, Tuple

from models.customer import Customer
from models.order import Order
from repositories.base import RecordStore
from utils.validators import parse_timestamp


class InMemoryRecordStore(RecordStore):
    """Hold customers and orders in insertion order and query them in Python."""

    def __init__(self, customers: Iterable[Customer] = (), orders: Iterable[Order] = ()):
        self._customers: Tuple[Customer, ...] = tuple(customers)
        self._orders: Tuple[Order, ...] = tuple(orders)

    def query_customers(
        self,
        search: Optional[str],
        sort_field: str,
        ascending: bool,
        offset: int,
        limit: int,
    ) -> Tuple[List[Customer], int]:
        rows = list(self._customers)
        if search:
            needle = search.lower()
            rows = [
                c for c in rows
                if needle in c.name.lower() or needle in c.email.lower()
            ]

        if sort_field in ("name", "email"):
            key = lambda c: getattr(c, sort_field)  # noqa: E731
        elif sort_field == "order_count":
            counts = Counter(o.user_id for o in self._orders)
            key = lambda c: counts.get(c.id, 0)  # noqa: E731
        else:
            key = lambda c: parse_timestamp(c.created_at)  # noqa: E731

        # sorted() is stable, so ties keep insertion order in both directions.
        rows = sorted(rows, key=key, reverse=not ascending)
        return rows[offset:offset + limit], len(rows)

    def fetch_customer_by_id(self, customer_id: int) -> Optional[Customer]:
        for customer in self._customers:
            if customer.id == customer_id:
                return customer
        return None

    def fetch_orders_by_customer_id(self, customer_id: int) -> List[Order]:
        return [o for o in self._orders if o.user_id == customer_id]

    def fetch_all_customers(self) -> List[Customer]:
        return list(self._customers)

    def fetch_all_orders(self) -> List[Order]:
        return list(self._orders)
