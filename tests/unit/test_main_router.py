import json

from handlers import main


def _event(method, path):
    return {"requestContext": {"http": {"method": method, "path": path}}}


def test_main_routes_health(monkeypatch):
    monkeypatch.setattr(main.health_check, "lambda_handler", lambda e, c: {"status": "ok"})
    resp = main.lambda_handler(_event("GET", "/api/health"), None)
    assert resp["status"] == "ok"


def test_main_routes_listing(monkeypatch):
    marker = {}

    def fake_handler(event, context):
        marker["called"] = True
        return {"statusCode": 200}

    monkeypatch.setattr(main.customers, "list_handler", fake_handler)
    resp = main.lambda_handler(_event("GET", "/api/customers"), None)
    assert resp["statusCode"] == 200
    assert marker["called"] is True


def test_main_routes_detail_with_path_parameter(monkeypatch):
    monkeypatch.setattr(main.customers, "detail_handler", lambda e, c: e["pathParameters"])
    resp = main.lambda_handler(_event("GET", "/api/customers/42"), None)
    assert resp == {"id": "42"}


def test_main_routes_orders(monkeypatch):
    monkeypatch.setattr(main.customers, "orders_handler", lambda e, c: {"orders": e["pathParameters"]["id"]})
    resp = main.lambda_handler(_event("GET", "/api/customers/7/orders"), None)
    assert resp["orders"] == "7"


def test_main_routes_analytics(monkeypatch):
    monkeypatch.setattr(main.analytics, "lambda_handler", lambda e, c: {"analytics": True})
    resp = main.lambda_handler(_event("GET", "/api/analytics"), None)
    assert resp["analytics"] is True


def test_main_trailing_slash(monkeypatch):
    monkeypatch.setattr(main.customers, "list_handler", lambda e, c: {"ok": True})
    assert main.lambda_handler(_event("GET", "/api/customers/"), None) == {"ok": True}


def test_main_unknown_route():
    resp = main.lambda_handler(_event("GET", "/unknown"), None)
    assert resp["statusCode"] == 404
    body = json.loads(resp["body"])
    assert body["message"] == "Endpoint not found"
    assert body["success"] is False


def test_main_wrong_method():
    resp = main.lambda_handler(_event("POST", "/api/customers"), None)
    assert resp["statusCode"] == 404
