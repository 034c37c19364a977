"""Custom exceptions and helpers for consistent error responses."""

import json
from typing import Any, Dict, Optional


class AppError(Exception):
    """Base class for application errors.

    ``kind`` tags the failure so the HTTP boundary can pick a status code
    without inspecting the message text.
    """

    kind = "error"

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class NotFoundError(AppError):
    """Raised when a requested resource is missing."""

    kind = "not_found"

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status_code=404)


class ValidationError(AppError):
    """Raised when input validation fails."""

    kind = "validation"

    def __init__(self, message: str = "Invalid input"):
        super().__init__(message, status_code=400)


class StoreError(AppError):
    """Raised when the record store cannot execute a query."""

    kind = "store"
    public_message = "Database operation failed"

    def __init__(self, message: str = "Database query failed"):
        super().__init__(message, status_code=500)


def error_body(error: AppError, debug: bool = False) -> Dict[str, Any]:
    """Build the JSON envelope for a failed request."""
    message = getattr(error, "public_message", None) or error.message
    data: Optional[Dict[str, Any]] = None
    if debug:
        data = {"error": error.message, "kind": error.kind}
    return {"success": False, "data": data, "message": message}


def to_response(error: AppError, debug: bool = False) -> Dict[str, Any]:
    """Convert an AppError into a Lambda proxy integration response."""
    return json_response(error.status_code, error_body(error, debug=debug))


def json_response(status: int, body: Dict[str, Any]) -> Dict[str, Any]:
    """Format a JSON API Gateway HTTP API response."""
    return {
        "statusCode": status,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body),
    }


def internal_error_response(exc: Exception, debug: bool = False) -> Dict[str, Any]:
    """500 envelope for failures that carry no error kind."""
    return json_response(
        500,
        {
            "success": False,
            "data": {"error": str(exc)} if debug else None,
            "message": "Internal server error",
        },
    )
