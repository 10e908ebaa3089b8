from __future__ import annotations

from typing import Protocol

from pashuvision.application.interfaces.repositories.registrations import (
    RegistrationRepository,
)


class UnitOfWork(Protocol):
    registrations: RegistrationRepository

    async def __aenter__(self) -> UnitOfWork: ...

    async def __aexit__(self, exc_type, exc, tb) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...
