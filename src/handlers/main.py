"""
Single entrypoint Lambda that routes HTTP API requests to thin handler modules.

Why one Lambda?
- Keeps the record store's connection pool warm across routes.
- Simpler to deploy while still keeping code organized by delegating to modules.
"""

import re
from typing import Callable, Dict, Pattern, Tuple

from . import analytics, customers, health_check
from utils.error_handling import json_response


def _route(method: str, template: str) -> Tuple[str, Pattern]:
    """Compile ``/api/customers/{id}`` style templates into anchored regexes."""
    pattern = re.sub(r"\{(\w+)\}", r"(?P<\1>[^/]+)", template.rstrip("/"))
    return method, re.compile(f"^{pattern}/?$")


def lambda_handler(event, context):
    """
    Entry point invoked by API Gateway HTTP API.

    The event contains the HTTP method and path; we route it to the correct
    handler and expose path placeholders as ``pathParameters``.
    """
    http = event.get("requestContext", {}).get("http", {})
    method = http.get("method", "").upper()
    path = http.get("path", "")

    # Handler lookups happen per request so tests can monkeypatch them.
    route_table: Tuple[Tuple[Tuple[str, Pattern], Callable], ...] = (
        (_route("GET", "/api/health"), health_check.lambda_handler),
        (_route("GET", "/api/analytics"), analytics.lambda_handler),
        (_route("GET", "/api/customers"), customers.list_handler),
        (_route("GET", "/api/customers/{id}/orders"), customers.orders_handler),
        (_route("GET", "/api/customers/{id}"), customers.detail_handler),
    )

    for (route_method, pattern), handler in route_table:
        match = pattern.match(path)
        if route_method == method and match:
            if match.groupdict():
                params: Dict = dict(event.get("pathParameters") or {})
                params.update(match.groupdict())
                event = {**event, "pathParameters": params}
            return handler(event, context)

    return json_response(
        404,
        {"success": False, "data": None, "message": "Endpoint not found", "route": f"{method} {path}"},
    )
