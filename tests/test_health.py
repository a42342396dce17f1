"""Health endpoint integration test."""

import pytest
from httpx import ASGITransport, AsyncClient

from code_quality.main import app


@pytest.mark.asyncio
async def test_health_returns_ok(container):
    """Health endpoint returns status; the LLM is not probed while deep analysis is off."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        resp = await client.get("/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ok"
    assert data["service"] == "code-quality"
    assert data["llm_enabled"] is False
    assert data["llm_available"] is False
