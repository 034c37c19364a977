"""Customer models."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from utils.validators import parse_timestamp


class Customer(BaseModel):
    """Customer record as held by the record store."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(gt=0)
    name: str
    email: str
    created_at: str

    @field_validator("created_at")
    @classmethod
    def validate_created_at(cls, value: str) -> str:
        """Reject timestamps that cannot be ordered later on."""
        parse_timestamp(value)
        return value


class CustomerStats(BaseModel):
    """Order statistics derived for one customer on read."""

    model_config = ConfigDict(frozen=True)

    order_count: int = Field(default=0, ge=0)
    total_spent: float = 0.0
    last_order_date: Optional[str] = None


class CustomerWithStats(Customer):
    """Listing/detail row: the customer merged with its order statistics."""

    order_count: int = Field(ge=0)
    total_spent: float
    last_order_date: Optional[str] = None

    @classmethod
    def merge(cls, customer: Customer, stats: CustomerStats) -> "CustomerWithStats":
        return cls(**customer.model_dump(), **stats.model_dump())
