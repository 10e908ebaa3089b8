from __future__ import annotations

from pashuvision.application.errors import NotFound
from pashuvision.application.interfaces.unit_of_work import UnitOfWork
from pashuvision.domain.models.registration import Registration


async def execute(uow: UnitOfWork, registration_id: str) -> Registration:
    registration = await uow.registrations.get(registration_id)
    if registration is None:
        raise NotFound("Registration not found", details={"registration_id": registration_id})
    return registration
