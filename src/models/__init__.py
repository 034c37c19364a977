"""Pydantic models for records and API payloads."""

from models.analytics import (  # noqa: F401
    UNDEFINED,
    AnalyticsSnapshot,
    MonthlyRevenue,
    OrderWithCustomer,
    ProductSummary,
)
from models.customer import Customer, CustomerStats, CustomerWithStats  # noqa: F401
from models.order import Order  # noqa: F401
from models.response import ApiResponse, Pagination  # noqa: F401
