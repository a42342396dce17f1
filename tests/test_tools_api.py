"""Tool surface API integration tests."""

import json
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from code_quality.main import app


def _client() -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.mark.asyncio
async def test_list_tools(container):
    async with _client() as client:
        resp = await client.get("/tools")
    assert resp.status_code == 200
    names = {t["function"]["name"] for t in resp.json()["tools"]}
    assert {"check_quality", "get_trends", "get_quick_wins"} <= names


@pytest.mark.asyncio
async def test_call_check_quality(container, tmp_path: Path):
    project = tmp_path / "app"
    (project / "src").mkdir(parents=True)
    (project / "src" / "index.js").write_text('console.log("hi");\n', encoding="utf-8")

    async with _client() as client:
        resp = await client.post(
            "/tools/call",
            json={"name": "check_quality", "arguments": {"projectPath": str(project)}},
        )
    assert resp.status_code == 200
    body = resp.json()
    assert body["isError"] is False
    report = json.loads(body["content"][0]["text"])
    assert report["score"] == 95
    assert report["issues"][0]["rule"] == "no-console"


@pytest.mark.asyncio
async def test_call_failure_is_structured(container, tmp_path: Path):
    async with _client() as client:
        resp = await client.post(
            "/tools/call",
            json={"name": "get_trends", "arguments": {"projectPath": str(tmp_path / "missing")}},
        )
    assert resp.status_code == 200
    body = resp.json()
    assert body["isError"] is True
    assert body["content"][0]["text"].startswith("Error: Project path does not exist")


@pytest.mark.asyncio
async def test_trends_persist_under_configured_cache(container, tmp_path: Path):
    project = tmp_path / "app"
    project.mkdir()
    async with _client() as client:
        await client.post("/tools/call", json={"name": "get_trends", "arguments": {"projectPath": str(project)}})
    assert list((tmp_path / "cache").glob("analysis_*.json"))
