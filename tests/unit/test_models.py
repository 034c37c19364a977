"""
Pydantic model validation tests.

Ensures record models validate at the boundary and serialize as the API
clients expect.

Run with: pytest tests/unit/test_models.py -v
"""

import pytest
from pydantic import ValidationError

from models.analytics import AnalyticsSnapshot, MonthlyRevenue, ProductSummary
from models.customer import Customer, CustomerStats, CustomerWithStats
from models.order import Order
from models.response import ApiResponse, Pagination


class TestCustomer:
    def test_valid_customer(self):
        customer = Customer(id="3", name="Ann", email="ann@x.com", created_at="2024-01-01T00:00:00Z")
        assert customer.id == 3

    @pytest.mark.parametrize("bad_id", [0, -1])
    def test_id_must_be_positive(self, bad_id):
        with pytest.raises(ValidationError):
            Customer(id=bad_id, name="Ann", email="ann@x.com", created_at="2024-01-01T00:00:00Z")

    def test_created_at_must_parse(self):
        with pytest.raises(ValidationError):
            Customer(id=1, name="Ann", email="ann@x.com", created_at="last tuesday")

    def test_customer_is_immutable(self):
        customer = Customer(id=1, name="Ann", email="ann@x.com", created_at="2024-01-01T00:00:00Z")
        with pytest.raises(ValidationError):
            customer.name = "Bob"

    def test_merge_with_stats(self):
        customer = Customer(id=1, name="Ann", email="ann@x.com", created_at="2024-01-01T00:00:00Z")
        row = CustomerWithStats.merge(customer, CustomerStats())
        assert row.model_dump() == {
            "id": 1,
            "name": "Ann",
            "email": "ann@x.com",
            "created_at": "2024-01-01T00:00:00Z",
            "order_count": 0,
            "total_spent": 0.0,
            "last_order_date": None,
        }


class TestOrder:
    def test_amount_must_be_non_negative(self):
        with pytest.raises(ValidationError):
            Order(id=1, user_id=1, amount=-0.01, product="A", created_at="2024-01-01T00:00:00Z")

    def test_naive_timestamp_is_accepted(self):
        order = Order(id=1, user_id=1, amount=1, product="A", created_at="2024-01-01 10:00:00")
        assert order.created_at == "2024-01-01 10:00:00"


class TestResponses:
    def test_pagination_alias(self):
        pagination = Pagination(page=2, limit=10, total=23, total_pages=3)
        assert pagination.offset == 10
        assert pagination.model_dump(by_alias=True) == {
            "page": 2, "limit": 10, "total": 23, "totalPages": 3,
        }

    def test_limit_bounds(self):
        with pytest.raises(ValidationError):
            Pagination(page=1, limit=101, total=0, total_pages=0)

    def test_body_without_pagination(self):
        body = ApiResponse(success=False, data=None, message="nope").to_body()
        assert body == {"success": False, "data": None, "message": "nope"}

    def test_body_with_pagination(self):
        pagination = Pagination(page=1, limit=10, total=0, total_pages=0)
        body = ApiResponse(success=True, data=[], message="ok", pagination=pagination).to_body()
        assert body["pagination"]["totalPages"] == 0


class TestAnalyticsSnapshot:
    def test_camel_case_serialization(self):
        snapshot = AnalyticsSnapshot(
            total_orders=1,
            total_revenue=5.0,
            average_order_value=5.0,
            top_products=[ProductSummary(product="A", count=1, revenue=5.0)],
            monthly_revenue=[MonthlyRevenue(month="Jan 2024", revenue=5.0)],
            recent_orders=[],
        )
        payload = snapshot.model_dump(by_alias=True)
        assert set(payload) == {
            "totalOrders", "totalRevenue", "averageOrderValue",
            "topProducts", "monthlyRevenue", "recentOrders",
        }

    def test_average_accepts_only_number_or_sentinel(self):
        with pytest.raises(ValidationError):
            AnalyticsSnapshot(
                total_orders=0,
                total_revenue=0,
                average_order_value="n/a",
                top_products=[],
                monthly_revenue=[],
                recent_orders=[],
            )
