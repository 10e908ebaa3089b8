from __future__ import annotations

from typing import Protocol

from pashuvision.domain.models.registration import Registration


class RemoteBackend(Protocol):
    """Destination of the one-way registration sync."""

    async def push(self, registration: Registration) -> None: ...
