"""HTTP API handlers (API Gateway proxy events)."""
