"""Record store capability surface used by the query and analytics services."""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from models.customer import Customer
from models.order import Order


class RecordStore(ABC):
    """
    Queryable collection of customers and their orders.

    Implementations raise ``StoreError`` when a query cannot be executed and
    return validated ``Customer``/``Order`` records, never raw rows.
    """

    @abstractmethod
    def query_customers(
        self,
        search: Optional[str],
        sort_field: str,
        ascending: bool,
        offset: int,
        limit: int,
    ) -> Tuple[List[Customer], int]:
        """Return one page of customers plus the exact filtered count.

        ``search`` matches name or email as a case-insensitive substring.
        """

    @abstractmethod
    def fetch_customer_by_id(self, customer_id: int) -> Optional[Customer]:
        """Exact-match lookup."""

    @abstractmethod
    def fetch_orders_by_customer_id(self, customer_id: int) -> List[Order]:
        """All orders owned by one customer."""

    @abstractmethod
    def fetch_all_customers(self) -> List[Customer]:
        ...

    @abstractmethod
    def fetch_all_orders(self) -> List[Order]:
        ...

    def close(self) -> None:
        """Release pooled resources; a no-op for stores that hold none."""
