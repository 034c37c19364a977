"""
CSV record loader.

Parses users/orders exports into validated records. Sources are local
paths or ``s3://bucket/key`` URIs; when a default bucket is configured,
other sources are keys in that bucket. Columns are positional; the header
row is skipped without being interpreted.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Optional, Tuple, TypeVar

from pydantic import ValidationError as PydanticValidationError

from models.customer import Customer
from models.order import Order
from repositories.s3_repo import S3Repository
from utils.error_handling import ValidationError
from utils.logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

CUSTOMER_COLUMNS = ("id", "name", "email", "created_at")
ORDER_COLUMNS = ("id", "user_id", "amount", "product", "created_at")


def split_line(line: str) -> List[str]:
    """Split one line on commas; a double quote toggles quoted mode."""
    fields: List[str] = []
    current: List[str] = []
    in_quotes = False
    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)
    fields.append("".join(current).strip())
    return fields


def numbered_rows(text: str) -> List[Tuple[int, List[str]]]:
    """Rows of trimmed fields paired with their 1-based line number in ``text``."""
    return [
        (line_no, split_line(line))
        for line_no, line in enumerate(text.splitlines(), start=1)
        if line.strip()
    ]


def parse_csv(text: str) -> List[List[str]]:
    """Parse CSV text into rows of trimmed fields, skipping blank lines."""
    return [row for _, row in numbered_rows(text)]


class CsvRecordLoader:
    """Load Customer and Order records from CSV text, files or S3."""

    def __init__(
        self,
        s3_factory: Optional[Callable[[str], S3Repository]] = None,
        default_bucket: Optional[str] = None,
    ):
        self.s3_factory = s3_factory or S3Repository
        self.default_bucket = default_bucket

    def read_source(self, source: str) -> str:
        if source.startswith("s3://"):
            bucket, _, key = source[len("s3://"):].partition("/")
            return self.s3_factory(bucket).read_text(key)
        if self.default_bucket:
            return self.s3_factory(self.default_bucket).read_text(source)
        return Path(source).read_text(encoding="utf-8")

    def load_customers(self, source: str) -> List[Customer]:
        return self.customers_from_text(self.read_source(source))

    def load_orders(self, source: str) -> List[Order]:
        return self.orders_from_text(self.read_source(source))

    def customers_from_text(self, text: str) -> List[Customer]:
        customers = self._records(text, CUSTOMER_COLUMNS, Customer)
        logger.info("Customers parsed from CSV", extra={"count": len(customers)})
        return customers

    def orders_from_text(self, text: str) -> List[Order]:
        orders = self._records(text, ORDER_COLUMNS, Order)
        logger.info("Orders parsed from CSV", extra={"count": len(orders)})
        return orders

    @staticmethod
    def _records(text: str, columns: tuple, model: Callable[..., T]) -> List[T]:
        records: List[T] = []
        # Line numbers are 1-based and count the header and blank lines.
        for line_no, row in numbered_rows(text)[1:]:
            if len(row) < len(columns):
                raise ValidationError(
                    f"CSV line {line_no}: expected {len(columns)} fields, got {len(row)}"
                )
            try:
                records.append(model(**dict(zip(columns, row))))
            except PydanticValidationError as exc:
                raise ValidationError(f"CSV line {line_no}: {exc.errors()[0]['msg']}") from exc
        return records
