from __future__ import annotations

import asyncio
import logging

import httpx

from pashuvision.application.interfaces.remote_backend import RemoteBackend
from pashuvision.domain.models.registration import Registration

logger = logging.getLogger(__name__)


class SimulatedRemoteBackend(RemoteBackend):
    """Stands in for the remote service: waits out a round trip and accepts everything."""

    def __init__(self, latency_seconds: float = 0.75) -> None:
        self.latency_seconds = latency_seconds
        self.received: list[str] = []

    async def push(self, registration: Registration) -> None:
        if self.latency_seconds > 0:
            await asyncio.sleep(self.latency_seconds)
        self.received.append(registration.id)
        logger.debug("Simulated push of registration %s", registration.id)


class HttpRemoteBackend(RemoteBackend):
    def __init__(
        self,
        *,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.endpoint = f"{base_url.rstrip('/')}/registrations"
        self.timeout = timeout
        self.transport = transport

    async def push(self, registration: Registration) -> None:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(self.endpoint, json=registration.to_dict())
                response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.error("Remote push of %s failed: %s", registration.id, exc)
            raise
        logger.info("Pushed registration %s to %s", registration.id, self.endpoint)


def build_remote_backend(
    *, remote_url: str | None, timeout: float, simulated_latency: float
) -> RemoteBackend:
    if remote_url:
        return HttpRemoteBackend(base_url=remote_url, timeout=timeout)
    return SimulatedRemoteBackend(latency_seconds=simulated_latency)
