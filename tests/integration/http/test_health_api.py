from __future__ import annotations

import pytest


@pytest.mark.asyncio
async def test_health(client):
    resp = await client.get("/api/v1/health")

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_unknown_route_uses_error_shape(client):
    resp = await client.get("/api/v1/nothing-here")

    assert resp.status_code == 404
    assert resp.json() == {"code": "http_error", "message": "Not Found"}
