"""Handler for GET /api/analytics."""

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

_analytics_service: Optional["AnalyticsService"] = None


def _get_analytics_service():
    """Lazy-load AnalyticsService."""
    global _analytics_service
    if _analytics_service is None:
        from services.analytics_service import AnalyticsService

        _analytics_service = AnalyticsService(get_store())
    return _analytics_service


def lambda_handler(event, context):
    """Compute and return a fresh dashboard snapshot."""
    try:
        snapshot = _get_analytics_service().get_snapshot()
    except AppError as exc:
        logger.error("Analytics failed", extra={"kind": exc.kind, "error": str(exc)})
        return to_response(exc, debug=get_settings().debug)
    except Exception as exc:
        logger.exception("Analytics crashed")
        return internal_error_response(exc, debug=get_settings().debug)

    response = ApiResponse(
        success=True,
        data=snapshot.model_dump(mode="json", by_alias=True),
        message=f"Analytics computed from {snapshot.total_orders} orders",
    )
    return json_response(200, response.to_body())
