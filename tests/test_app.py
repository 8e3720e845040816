"""
Application-level tests: health, request ids, error envelope and the
watermark endpoint.
"""
from io import BytesIO

import httpx
from PIL import Image

from lepinet.api import species as species_api
from lepinet.api import watermark as watermark_api
from lepinet.core.middleware import REQUEST_ID_HEADER
from lepinet.main import app
from lepinet.services.watermark import CACHE_CONTROL, WatermarkService


class TestHealth:
    """Liveness and root endpoints."""

    async def test_health(self, client):
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    async def test_root(self, client):
        body = (await client.get("/")).json()
        assert body["name"] == "LepiNet API"
        assert body["docs"] == "/docs"


class TestRequestId:
    """Every response is traceable."""

    async def test_generated(self, client):
        response = await client.get("/health")
        assert response.headers[REQUEST_ID_HEADER]

    async def test_reused_from_caller(self, client):
        response = await client.get("/api/records", headers={REQUEST_ID_HEADER: "trace-123"})
        assert response.headers[REQUEST_ID_HEADER] == "trace-123"
        assert response.status_code == 401
        assert response.json()["requestId"] == "trace-123"


class TestErrorEnvelope:
    """Uniform error body."""

    async def test_validation_error_shape(self, client):
        response = await client.post("/api/auth/login", json={"email": "a@example.com"})
        assert response.status_code == 422
        body = response.json()
        assert set(body) == {"requestId", "error"}
        assert body["error"]["code"] == "INVALID_ARGUMENT"
        fields = [e["field"] for e in body["error"]["details"]["validation_errors"]]
        assert "body.password" in fields

    async def test_uncaught_error_is_internal(self, monkeypatch):
        async def explode(db, search):
            raise RuntimeError("catalog exploded")

        monkeypatch.setattr(species_api.species_service, "list_species", explode)
        # The server error middleware re-raises after responding
        transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/api/species")

        assert response.status_code == 500
        body = response.json()
        assert body["error"]["code"] == "INTERNAL"
        assert body["error"]["message"] == "Internal server error"
        assert "details" not in body["error"]


class TestWatermarkEndpoint:
    """GET /api/watermark"""

    async def test_returns_jpeg_with_cache_headers(self, client, monkeypatch):
        buffer = BytesIO()
        Image.new("RGB", (640, 480), (30, 120, 60)).save(buffer, format="PNG")
        source = buffer.getvalue()
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            return httpx.Response(200, content=source, headers={"Content-Type": "image/png"})

        monkeypatch.setattr(
            watermark_api, "watermark_service", WatermarkService(transport=httpx.MockTransport(handler))
        )

        response = await client.get(
            "/api/watermark",
            params={"url": "https://images.example.com/a.png", "author": "Jane Doe"},
        )
        assert response.status_code == 200
        assert response.headers["content-type"] == "image/jpeg"
        assert response.headers["cache-control"] == CACHE_CONTROL
        assert seen["url"] == "https://images.example.com/a.png"
        with Image.open(BytesIO(response.content)) as image:
            assert image.size == (640, 480)

    async def test_missing_url(self, client):
        response = await client.get("/api/watermark")
        assert response.status_code == 422
        assert response.json()["error"]["code"] == "INVALID_ARGUMENT"

    async def test_unreachable_source(self, client, monkeypatch):
        def fail(request):
            raise httpx.ConnectError("down", request=request)

        monkeypatch.setattr(
            watermark_api, "watermark_service", WatermarkService(transport=httpx.MockTransport(fail))
        )
        response = await client.get("/api/watermark", params={"url": "https://images.example.com/a.png"})
        assert response.status_code == 502
