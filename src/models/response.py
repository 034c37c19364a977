"""Common response wrapper."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class Pagination(BaseModel):
    """Page window plus exact totals for a listing."""

    model_config = ConfigDict(populate_by_name=True)

    page: int = Field(ge=1)
    limit: int = Field(ge=1, le=100)
    total: int = Field(ge=0)
    total_pages: int = Field(ge=0, alias="totalPages")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class ApiResponse(BaseModel):
    """Generic API response envelope."""

    success: bool
    data: Optional[Any] = None
    message: str
    pagination: Optional[Pagination] = None

    def to_body(self) -> Dict[str, Any]:
        """Serialize for the wire; ``pagination`` only appears on listings."""
        body = self.model_dump(mode="json", by_alias=True)
        if self.pagination is None:
            body.pop("pagination")
        return body
