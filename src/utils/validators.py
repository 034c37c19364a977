"""Input coercion helpers shared by services and the CSV loader."""

from datetime import datetime, timezone
from typing import Any, Optional

from utils.error_handling import ValidationError


def coerce_int(value: Any) -> Optional[int]:
    """Parse an int from an int or a decimal string; None when impossible."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text[:1] in ("+", "-"):
            digits = text[1:]
        else:
            digits = text
        # isdigit() also accepts superscripts and other digits int() rejects.
        if digits.isascii() and digits.isdecimal():
            return int(text)
    return None


def validate_customer_id(value: Any) -> int:
    """Return a positive integer id or raise ValidationError."""
    customer_id = coerce_int(value)
    if customer_id is None or customer_id <= 0:
        raise ValidationError("Invalid customer ID. ID must be a positive integer.")
    return customer_id


def parse_timestamp(value: str) -> datetime:
    """
    Parse an ISO-8601 timestamp into an aware UTC datetime.

    A trailing ``Z`` is accepted and naive values are treated as UTC so that
    timestamps from different sources compare safely.
    """
    text = value.strip()
    if text.endswith("Z") or text.endswith("z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)
