from sqlalchemy.exc import OperationalError

from grade_api.core.db import get_db


class _UnavailableSession:
    def execute(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))


def test_root_lists_endpoints(client):
    res = client.get("/")
    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "Grade API Service"
    assert body["endpoints"]["grades"]["stats"] == "GET /api/grades/stats/:student_id"
    assert "summary" in body["endpoints"]["gradeInputs"]


def test_health_ok(client):
    res = client.get("/health")
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "OK"
    assert body["database"] == "connected"
    assert body["timestamp"].endswith("Z")


def test_health_reports_unavailable_store(app, client):
    app.dependency_overrides[get_db] = lambda: _UnavailableSession()
    try:
        res = client.get("/health")
    finally:
        app.dependency_overrides.clear()

    assert res.status_code == 503
    body = res.json()
    assert body["status"] == "DEGRADED"
    assert body["database"] == "unavailable"
    assert "connection refused" in body["error"]


def test_unknown_route(client):
    res = client.get("/api/unknown")
    assert res.status_code == 404
    assert res.json() == {
        "success": False,
        "message": "Route not found",
        "path": "/api/unknown",
        "method": "GET",
    }


def test_unsupported_method_is_route_not_found(client):
    res = client.patch("/api/grades/1", json={})
    assert res.status_code == 404
    assert res.json()["method"] == "PATCH"


def test_cors_headers(client):
    res = client.get("/health", headers={"Origin": "http://example.com"})
    assert res.headers["access-control-allow-origin"] in ("*", "http://example.com")


def test_openapi_contract_basics(app):
    spec = app.openapi()

    assert spec["info"]["title"] == "Grade API"
    paths = spec.get("paths", {})
    required = [
        "/health",
        "/api/grades",
        "/api/grades/{grade_id}",
        "/api/grades/stats/{student_id}",
        "/api/grade_inputs",
        "/api/grade_inputs/{grade_input_id}",
        "/api/grade_inputs/summary/{subject_grade_id}",
    ]
    missing = [path for path in required if path not in paths]
    assert not missing, f"Missing OpenAPI paths: {missing}"
