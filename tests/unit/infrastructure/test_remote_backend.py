from __future__ import annotations

import json

import httpx
import pytest

from pashuvision.application.sync.registration_sync import RegistrationSyncService
from pashuvision.infrastructure.sync.remote_backend import (
    HttpRemoteBackend,
    SimulatedRemoteBackend,
    build_remote_backend,
)


def make_backend(handler) -> HttpRemoteBackend:
    return HttpRemoteBackend(
        base_url="https://sync.example.org/api/", transport=httpx.MockTransport(handler)
    )


@pytest.mark.asyncio
async def test_successful_post_marks_registration_synced(memory_uow, registration_factory):
    await memory_uow.registrations.upsert(registration_factory("reg-1"))
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(201, json={"ok": True})

    service = RegistrationSyncService(lambda: memory_uow, make_backend(handler))
    result = await service.sync_unsynced()

    assert result.synced_ids == ["reg-1"]
    assert (await memory_uow.registrations.get("reg-1")).synced is True
    assert requests[0].method == "POST"
    assert str(requests[0].url) == "https://sync.example.org/api/registrations"
    body = json.loads(requests[0].content)
    assert body["id"] == "reg-1"
    assert body["owner"]["name"] == "Ramesh Patel"


@pytest.mark.asyncio
async def test_server_error_leaves_registration_unsynced(memory_uow, registration_factory):
    await memory_uow.registrations.upsert(registration_factory("reg-1"))
    await memory_uow.registrations.upsert(registration_factory("reg-2"))

    def handler(request: httpx.Request) -> httpx.Response:
        if json.loads(request.content)["id"] == "reg-2":
            return httpx.Response(500, text="boom")
        return httpx.Response(200)

    service = RegistrationSyncService(lambda: memory_uow, make_backend(handler))
    result = await service.sync_unsynced()

    assert result.synced_ids == ["reg-1"]
    assert result.failed_ids == ["reg-2"]
    assert (await memory_uow.registrations.get("reg-2")).synced is False


@pytest.mark.asyncio
async def test_connect_error_leaves_registration_unsynced(memory_uow, registration_factory):
    await memory_uow.registrations.upsert(registration_factory("reg-1"))

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    service = RegistrationSyncService(lambda: memory_uow, make_backend(handler))
    result = await service.sync_unsynced()

    assert result.synced_ids == []
    assert result.failed_ids == ["reg-1"]
    assert (await memory_uow.registrations.get("reg-1")).synced is False


@pytest.mark.asyncio
async def test_push_raises_http_errors(registration_factory):
    backend = make_backend(lambda request: httpx.Response(503))

    with pytest.raises(httpx.HTTPStatusError):
        await backend.push(registration_factory("reg-1"))


def test_build_remote_backend_picks_http_when_url_is_set():
    backend = build_remote_backend(
        remote_url="https://sync.example.org", timeout=3.0, simulated_latency=0.75
    )

    assert isinstance(backend, HttpRemoteBackend)
    assert backend.endpoint == "https://sync.example.org/registrations"
    assert backend.timeout == 3.0


def test_build_remote_backend_simulates_without_url():
    backend = build_remote_backend(remote_url=None, timeout=3.0, simulated_latency=0.25)

    assert isinstance(backend, SimulatedRemoteBackend)
    assert backend.latency_seconds == 0.25
