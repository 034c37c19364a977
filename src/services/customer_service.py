"""
Customer Query Service.

Paginated, searchable, sortable customer listing plus single-customer
lookups, each row enriched with order statistics. The record store is
injected; the service keeps no state between calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional

from models.customer import CustomerWithStats
from models.order import Order
from models.response import Pagination
from repositories.base import RecordStore
from services.order_stats_service import OrderStatsAggregator
from utils.error_handling import AppError, NotFoundError
from utils.logging_config import get_logger
from utils.pagination import (
    normalize_limit,
    normalize_page,
    page_offset,
    resolve_order,
    resolve_sort,
    total_pages,
)
from utils.validators import parse_timestamp, validate_customer_id

logger = get_logger(__name__)


@dataclass(frozen=True)
class ListParams:
    """Normalized listing parameters."""

    page: int
    limit: int
    search: Optional[str]
    sort: str
    order: str

    @property
    def offset(self) -> int:
        return page_offset(self.page, self.limit)

    @property
    def ascending(self) -> bool:
        return self.order == "asc"

    @classmethod
    def from_raw(
        cls,
        page: Any = None,
        limit: Any = None,
        search: Optional[str] = None,
        sort: Optional[str] = None,
        order: Optional[str] = None,
    ) -> "ListParams":
        """Coerce raw query-string values; anything unusable gets its default."""
        term = (search or "").strip() or None
        return cls(
            page=normalize_page(page),
            limit=normalize_limit(limit),
            search=term,
            sort=resolve_sort(sort),
            order=resolve_order(order),
        )


@dataclass
class CustomerPage:
    """One page of enriched customers."""

    rows: List[CustomerWithStats]
    pagination: Pagination


class CustomerQueryEngine:
    """Service for customer listing and lookup."""

    def __init__(self, store: RecordStore, stats: Optional[OrderStatsAggregator] = None):
        self.store = store
        self.stats = stats or OrderStatsAggregator(store)

    def list_customers(
        self,
        page: Any = None,
        limit: Any = None,
        search: Optional[str] = None,
        sort: Optional[str] = None,
        order: Optional[str] = None,
    ) -> CustomerPage:
        """
        Filter, sort, then paginate customers and attach their order stats.

        A failing store query raises StoreError; per-row stats failures only
        zero that row's stats. The page is returned once every row is done.
        """
        params = ListParams.from_raw(page, limit, search, sort, order)

        customers, total = self.store.query_customers(
            search=params.search,
            sort_field=params.sort,
            ascending=params.ascending,
            offset=params.offset,
            limit=params.limit,
        )

        stats = self.stats.compute_many(c.id for c in customers)
        rows = [CustomerWithStats.merge(c, stats[c.id]) for c in customers]

        pagination = Pagination(
            page=params.page,
            limit=params.limit,
            total=total,
            total_pages=total_pages(total, params.limit),
        )
        logger.info(
            "Customer page built",
            extra={
                "page": params.page,
                "limit": params.limit,
                "sort": params.sort,
                "order": params.order,
                "searched": params.search is not None,
                "rows": len(rows),
                "total": total,
            },
        )
        return CustomerPage(rows=rows, pagination=pagination)

    def get_customer_by_id(self, customer_id: Any) -> CustomerWithStats:
        """Fetch one customer with stats.

        Raises ValidationError for a malformed id (before any store call) and
        NotFoundError when no customer matches.
        """
        cid = validate_customer_id(customer_id)
        customer = self.store.fetch_customer_by_id(cid)
        if customer is None:
            raise NotFoundError(f"Customer with ID {cid} not found")
        return CustomerWithStats.merge(customer, self.stats.compute(cid))

    def customer_exists(self, customer_id: Any) -> bool:
        """Guard check; store errors and bad ids count as absent."""
        try:
            cid = validate_customer_id(customer_id)
            return self.store.fetch_customer_by_id(cid) is not None
        except AppError as exc:
            logger.warning(
                "Customer existence check failed",
                extra={"customer_id": str(customer_id), "kind": exc.kind},
            )
            return False

    def get_customer_orders(self, customer_id: Any) -> List[Order]:
        """All orders for an existing customer, newest first."""
        cid = validate_customer_id(customer_id)
        if not self.customer_exists(cid):
            raise NotFoundError(f"Customer with ID {cid} not found")
        orders = self.store.fetch_orders_by_customer_id(cid)
        return sorted(orders, key=lambda o: parse_timestamp(o.created_at), reverse=True)
