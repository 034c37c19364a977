"""Order models."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from utils.validators import parse_timestamp


class Order(BaseModel):
    """Order record; append-only from the service's point of view."""

    model_config = ConfigDict(frozen=True)

    id: int
    user_id: int
    amount: float = Field(ge=0)
    product: str
    created_at: str

    @field_validator("created_at")
    @classmethod
    def validate_created_at(cls, value: str) -> str:
        parse_timestamp(value)
        return value
