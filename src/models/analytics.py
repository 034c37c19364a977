"""Dashboard analytics models.

Field names are snake_case in Python and camelCase on the wire, matching
what the dashboard frontend reads.
"""

from typing import List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from models.order import Order

# Average order value when there are no orders to average over.
UNDEFINED = "undefined"


class ProductSummary(BaseModel):
    """Revenue bucket for one product label."""

    model_config = ConfigDict(frozen=True)

    product: str
    count: int
    revenue: float


class MonthlyRevenue(BaseModel):
    """Revenue for one calendar month, labelled e.g. ``Jan 2024``."""

    model_config = ConfigDict(frozen=True)

    month: str
    revenue: float


class OrderWithCustomer(Order):
    """Order joined with its owner's name and email."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    user_name: str = Field(alias="userName")
    user_email: str = Field(alias="userEmail")


class AnalyticsSnapshot(BaseModel):
    """Metrics computed fresh from the full customer and order sets."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    total_orders: int = Field(alias="totalOrders")
    total_revenue: float = Field(alias="totalRevenue")
    average_order_value: Union[float, Literal["undefined"]] = Field(
        alias="averageOrderValue"
    )
    top_products: List[ProductSummary] = Field(alias="topProducts")
    monthly_revenue: List[MonthlyRevenue] = Field(alias="monthlyRevenue")
    recent_orders: List[OrderWithCustomer] = Field(alias="recentOrders")

    @property
    def has_average(self) -> bool:
        return self.average_order_value != UNDEFINED
