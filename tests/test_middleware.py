"""
Readly Backend: Request Tracing Middleware Tests
=================================================

What:  Tests for RequestTracingMiddleware.
How:   An app from create_app() with an extra route that raises, driven by
       HTTPX over ASGITransport; log records captured with caplog.

What we test:
    ✅ Unhandled errors answer 500 with the request ID in body and header
    ✅ Unhandled errors still produce an ERROR access line
    ✅ 409 logs at WARNING, /health is not logged
"""

import logging

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from readly.main import create_app


@pytest_asyncio.fixture
async def failing_client(indexed_database):
    """Client for an app with a GET /explode route that raises RuntimeError."""
    app = create_app(database=indexed_database)

    async def explode():
        raise RuntimeError("secret driver detail")

    app.add_api_route("/explode", explode, methods=["GET"])
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


class TestUnhandledErrors:

    @pytest.mark.asyncio
    async def test_keeps_request_id(self, failing_client):
        response = await failing_client.get("/explode", headers={"X-Request-ID": "trace-500"})

        assert response.status_code == 500
        assert response.headers["X-Request-ID"] == "trace-500"
        body = response.json()
        assert body["error"] == "internal_server_error"
        assert body["request_id"] == "trace-500"
        assert "secret driver detail" not in body["message"]

    @pytest.mark.asyncio
    async def test_generated_id_matches_body(self, failing_client):
        response = await failing_client.get("/explode")

        assert response.status_code == 500
        assert response.json()["request_id"] == response.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_writes_access_line(self, failing_client, caplog):
        caplog.set_level(logging.INFO, logger="readly.access")

        await failing_client.get("/explode", headers={"X-Request-ID": "trace-500"})

        access = [r for r in caplog.records if getattr(r, "path", None) == "/explode"]
        assert len(access) == 1
        assert access[0].levelno == logging.ERROR
        assert access[0].status == 500
        assert access[0].request_id == "trace-500"


class TestAccessLog:

    @pytest.mark.asyncio
    async def test_conflict_logs_warning(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger="readly.access")
        wish = {"blogId": "b1", "email": "x@y.com"}

        await test_client.post("/wishlist", json=wish)
        await test_client.post("/wishlist", json=wish)

        statuses = [
            (r.status, r.levelno)
            for r in caplog.records
            if r.name == "readly.access" and r.path == "/wishlist"
        ]
        assert statuses == [(200, logging.INFO), (409, logging.WARNING)]

    @pytest.mark.asyncio
    async def test_health_not_logged(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger="readly.access")

        response = await test_client.get("/health")

        assert "X-Request-ID" in response.headers
        assert not [r for r in caplog.records if r.name == "readly.access"]
