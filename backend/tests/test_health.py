"""Health endpoint smoke test."""

import pytest
from httpx import ASGITransport, AsyncClient

from booking_pricing.main import app


@pytest.mark.asyncio
async def test_healthcheck_returns_ok(reset_database) -> None:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/v1/health")
    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["database"] == "ok"
    assert payload["service"] == "City Venture Booking Pricing API"


@pytest.mark.asyncio
async def test_responses_carry_request_id(reset_database) -> None:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get(
            "/api/v1/health", headers={"X-Request-ID": "5b7c6f0e-3d2a-4c1b-9e8f-7a6b5c4d3e2f"}
        )
    assert response.headers["X-Request-ID"] == "5b7c6f0e-3d2a-4c1b-9e8f-7a6b5c4d3e2f"
