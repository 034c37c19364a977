"""Handlers for GET /api/customers, /api/customers/{id} and /api/customers/{id}/orders."""

from __future__ import annotations

from typing import Optional

from handlers.wiring import get_settings, get_store
from models.response import ApiResponse
from utils.error_handling import (
    AppError,
    internal_error_response,
    json_response,
    to_response,
)
from utils.logging_config import get_logger

logger = get_logger(__name__)

# Lazy-loaded service to avoid import-time DB connections
_customer_service: Optional["CustomerQueryEngine"] = None


def _get_customer_service():
    """Lazy-load CustomerQueryEngine."""
    global _customer_service
    if _customer_service is None:
        from services.customer_service import CustomerQueryEngine
        from services.order_stats_service import OrderStatsAggregator

        store = get_store()
        stats = OrderStatsAggregator(store, max_workers=get_settings().stats_max_workers)
        _customer_service = CustomerQueryEngine(store, stats=stats)
    return _customer_service


def _error_response(exc: Exception, route: str):
    debug = get_settings().debug
    if isinstance(exc, AppError):
        log = logger.error if exc.status_code >= 500 else logger.info
        log("Customer request failed", extra={"route": route, "kind": exc.kind, "error": str(exc)})
        return to_response(exc, debug=debug)
    logger.exception("Customer request crashed", extra={"route": route})
    return internal_error_response(exc, debug=debug)


def _customer_id(event) -> Optional[str]:
    path_params = event.get("pathParameters") or {}
    return path_params.get("id")


def list_handler(event, context):
    """Return one page of customers with order statistics."""
    query = event.get("queryStringParameters") or {}
    try:
        result = _get_customer_service().list_customers(
            page=query.get("page"),
            limit=query.get("limit"),
            search=query.get("search"),
            sort=query.get("sort"),
            order=query.get("order"),
        )
    except Exception as exc:
        return _error_response(exc, "list")

    response = ApiResponse(
        success=True,
        data=[row.model_dump(mode="json") for row in result.rows],
        message=f"Retrieved {len(result.rows)} customers",
        pagination=result.pagination,
    )
    return json_response(200, response.to_body())


def detail_handler(event, context):
    """Return one customer with order statistics."""
    customer_id = _customer_id(event)
    try:
        customer = _get_customer_service().get_customer_by_id(customer_id)
    except Exception as exc:
        return _error_response(exc, "detail")

    response = ApiResponse(
        success=True,
        data=customer.model_dump(mode="json"),
        message=f"Customer {customer.id} retrieved successfully",
    )
    return json_response(200, response.to_body())


def orders_handler(event, context):
    """Return a customer's orders, newest first."""
    customer_id = _customer_id(event)
    try:
        orders = _get_customer_service().get_customer_orders(customer_id)
    except Exception as exc:
        return _error_response(exc, "orders")

    response = ApiResponse(
        success=True,
        data=[order.model_dump(mode="json") for order in orders],
        message=f"Orders for customer {customer_id} retrieved successfully",
    )
    return json_response(200, response.to_body())
