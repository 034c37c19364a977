"""
Dashboard analytics.

The aggregator is a pure function of the customer and order lists: it does
no I/O and its output depends only on its input order, so repeated calls
over the same data serialize identically. AnalyticsService fetches both
lists from the record store and hands them over.
"""

from __future__ import annotations

import math
from typing import Dict, List, Sequence, Tuple

from models.analytics import (
    UNDEFINED,
    AnalyticsSnapshot,
    MonthlyRevenue,
    OrderWithCustomer,
    ProductSummary,
)
from models.customer import Customer
from models.order import Order
from repositories.base import RecordStore
from utils.logging_config import get_logger
from utils.validators import parse_timestamp

logger = get_logger(__name__)

UNKNOWN = "Unknown"

# Fixed English labels so the output does not depend on the process locale.
MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def month_key(timestamp: str) -> Tuple[int, int]:
    """(year, month) of a timestamp in UTC; sorts chronologically."""
    parsed = parse_timestamp(timestamp)
    return parsed.year, parsed.month


def month_label(key: Tuple[int, int]) -> str:
    year, month = key
    return f"{MONTH_ABBREVIATIONS[month - 1]} {year}"


class AnalyticsAggregator:
    """Turn raw customers and orders into dashboard metrics."""

    top_products_limit = 5
    recent_orders_limit = 10

    def compute(
        self, customers: Sequence[Customer], orders: Sequence[Order]
    ) -> AnalyticsSnapshot:
        total_orders = len(orders)
        total_revenue = math.fsum(o.amount for o in orders)
        average = total_revenue / total_orders if total_orders else UNDEFINED

        return AnalyticsSnapshot(
            total_orders=total_orders,
            total_revenue=total_revenue,
            average_order_value=average,
            top_products=self.top_products(orders),
            monthly_revenue=self.monthly_revenue(orders),
            recent_orders=self.recent_orders(customers, orders),
        )

    def top_products(self, orders: Sequence[Order]) -> List[ProductSummary]:
        """Highest-revenue products; equal revenue keeps first-seen order."""
        # dicts keep insertion order, i.e. the order products first appear.
        buckets: Dict[str, List[float]] = {}
        for order in orders:
            buckets.setdefault(order.product, []).append(order.amount)

        summaries = [
            ProductSummary(product=product, count=len(amounts), revenue=math.fsum(amounts))
            for product, amounts in buckets.items()
        ]
        summaries.sort(key=lambda s: s.revenue, reverse=True)
        return summaries[: self.top_products_limit]

    def monthly_revenue(self, orders: Sequence[Order]) -> List[MonthlyRevenue]:
        """One entry per calendar month, oldest first."""
        buckets: Dict[Tuple[int, int], List[float]] = {}
        for order in orders:
            buckets.setdefault(month_key(order.created_at), []).append(order.amount)

        return [
            MonthlyRevenue(month=month_label(key), revenue=math.fsum(buckets[key]))
            for key in sorted(buckets)
        ]

    def recent_orders(
        self, customers: Sequence[Customer], orders: Sequence[Order]
    ) -> List[OrderWithCustomer]:
        """Newest orders joined with their customer's name and email."""
        by_id: Dict[int, Customer] = {}
        for customer in customers:
            by_id.setdefault(customer.id, customer)

        joined = [self._join(order, by_id.get(order.user_id)) for order in orders]
        joined.sort(key=lambda o: parse_timestamp(o.created_at), reverse=True)
        return joined[: self.recent_orders_limit]

    @staticmethod
    def _join(order: Order, customer: Customer | None) -> OrderWithCustomer:
        return OrderWithCustomer(
            **order.model_dump(),
            user_name=customer.name if customer else UNKNOWN,
            user_email=customer.email if customer else UNKNOWN,
        )


class AnalyticsService:
    """Compute a fresh snapshot from everything in the record store."""

    def __init__(self, store: RecordStore, aggregator: AnalyticsAggregator | None = None):
        self.store = store
        self.aggregator = aggregator or AnalyticsAggregator()

    def get_snapshot(self) -> AnalyticsSnapshot:
        customers = self.store.fetch_all_customers()
        orders = self.store.fetch_all_orders()
        snapshot = self.aggregator.compute(customers, orders)
        logger.info(
            "Analytics snapshot computed",
            extra={
                "customers": len(customers),
                "orders": snapshot.total_orders,
                "months": len(snapshot.monthly_revenue),
                "has_average": snapshot.has_average,
            },
        )
        return snapshot
