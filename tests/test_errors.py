import asyncio

from fastapi import FastAPI
from fastapi.testclient import TestClient

from eduvillage.core import error_handlers
from eduvillage.core.error_handlers import register_exception_handlers
from eduvillage.core.timeout_middleware import TimeoutMiddleware
from eduvillage.services import courses as course_service


def make_timed_app(timeout: float) -> FastAPI:
    app = FastAPI()
    app.add_middleware(TimeoutMiddleware, timeout=timeout)
    register_exception_handlers(app)

    @app.get("/slow")
    async def slow():
        await asyncio.sleep(2)
        return {"success": True}

    @app.get("/fast")
    async def fast():
        return {"success": True}

    return app


def explode(*args, **kwargs):
    raise RuntimeError("boom")


def test_slow_request_gets_504_envelope():
    with TestClient(make_timed_app(0.05)) as c:
        r = c.get("/slow")
    assert r.status_code == 504
    assert r.json() == {"success": False, "message": "Request timed out"}


def test_fast_request_passes_timeout():
    with TestClient(make_timed_app(5)) as c:
        r = c.get("/fast")
    assert r.status_code == 200
    assert r.json() == {"success": True}


def test_unexpected_error_hides_detail(lenient_client, monkeypatch):
    monkeypatch.setattr(error_handlers, "DEBUG", False)
    monkeypatch.setattr(course_service, "list_published", explode)

    r = lenient_client.get("/courses")
    assert r.status_code == 500
    assert r.json() == {"success": False, "message": "Server error"}


def test_unexpected_error_detail_in_debug(lenient_client, monkeypatch):
    monkeypatch.setattr(error_handlers, "DEBUG", True)
    monkeypatch.setattr(course_service, "list_published", explode)

    r = lenient_client.get("/courses")
    assert r.status_code == 500
    body = r.json()
    assert body["success"] is False
    assert body["message"] == "Server error"
    assert body["error"] == "RuntimeError('boom')"


def test_unknown_route_envelope(client):
    r = client.get("/no/such/route")
    assert r.status_code == 404
    assert r.json() == {"success": False, "message": "Route not found"}


def test_validation_errors_are_field_level(client):
    r = client.post("/auth/register", json={"email": "not-an-email"})
    assert r.status_code == 400
    body = r.json()
    assert body["message"] == "Validation failed"
    assert {"email", "password", "name"} <= {e["field"] for e in body["errors"]}
