from __future__ import annotations

from typing import Protocol

from pashuvision.domain.models.registration import Registration


class RegistrationRepository(Protocol):
    async def list_all(self) -> list[Registration]: ...

    async def get(self, registration_id: str) -> Registration | None: ...

    async def upsert(self, registration: Registration) -> Registration: ...

    async def add_many(self, registrations: list[Registration]) -> None: ...

    async def count(self) -> int: ...
