"""
Per-customer order statistics.

Stats are derived on read from the customer's orders and never stored.
A store failure while computing one customer's stats is absorbed here and
reported as zeroed stats, so a listing page never fails because of a
single row.
"""

from __future__ import annotations

import math
from concurrent.futures import Future, ThreadPoolExecutor
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List

from models.customer import CustomerStats
from models.order import Order
from repositories.base import RecordStore
from utils.error_handling import StoreError
from utils.logging_config import get_logger
from utils.validators import parse_timestamp

logger = get_logger(__name__)

CENTS = Decimal("0.01")

ZERO_STATS = CustomerStats(order_count=0, total_spent=0.0, last_order_date=None)


def round_currency(value: float) -> float:
    """Round to 2 decimal places, halves away from zero."""
    return float(Decimal(repr(value)).quantize(CENTS, rounding=ROUND_HALF_UP))


def compute_order_stats(customer_id: int, orders: Iterable[Order]) -> CustomerStats:
    """Compute stats over the orders owned by ``customer_id``.

    Orders belonging to other customers are ignored, so callers may pass
    either a pre-filtered list or the full order set.
    """
    owned: List[Order] = [o for o in orders if o.user_id == customer_id]
    if not owned:
        return ZERO_STATS

    latest = max(owned, key=lambda o: parse_timestamp(o.created_at))
    return CustomerStats(
        order_count=len(owned),
        total_spent=round_currency(math.fsum(o.amount for o in owned)),
        last_order_date=latest.created_at,
    )


class OrderStatsAggregator:
    """Compute CustomerStats against a record store."""

    def __init__(self, store: RecordStore, max_workers: int = 8):
        self.store = store
        self.max_workers = max(1, max_workers)

    def compute(self, customer_id: int) -> CustomerStats:
        """Stats for one customer; zeroed if the store query fails."""
        try:
            orders = self.store.fetch_orders_by_customer_id(customer_id)
        except StoreError as exc:
            logger.warning(
                "Order stats unavailable, using zeroed stats",
                extra={"customer_id": customer_id, "error": str(exc)},
            )
            return ZERO_STATS
        return compute_order_stats(customer_id, orders)

    def compute_many(self, customer_ids: Iterable[int]) -> Dict[int, CustomerStats]:
        """
        Fan out one stats computation per customer and join them all.

        Each task's outcome is collected separately, so an unexpected failure
        in one task yields zeroed stats for that customer only.
        """
        ids = list(dict.fromkeys(customer_ids))
        if not ids:
            return {}

        workers = min(self.max_workers, len(ids))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="order-stats") as pool:
            futures = {cid: pool.submit(self.compute, cid) for cid in ids}

        return {cid: self._result_or_zero(cid, future) for cid, future in futures.items()}

    @staticmethod
    def _result_or_zero(customer_id: int, future: Future) -> CustomerStats:
        try:
            return future.result()
        except Exception as exc:
            logger.warning(
                "Order stats task failed, using zeroed stats",
                extra={"customer_id": customer_id, "error": str(exc)},
            )
            return ZERO_STATS
