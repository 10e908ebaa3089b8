from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime

from pashuvision.application.interfaces.unit_of_work import UnitOfWork
from pashuvision.application.use_cases.registrations import get_registration
from pashuvision.domain.models.registration import AnimalResult, OwnerData, Registration


@dataclass(slots=True)
class UpdateRegistrationInput:
    owner: OwnerData
    animals: list[AnimalResult]
    status: str
    timestamp: datetime | None = None


async def execute(
    uow: UnitOfWork, registration_id: str, payload: UpdateRegistrationInput
) -> Registration:
    """Replace an existing registration as a whole; sync and sample flags carry over."""
    existing = await get_registration.execute(uow, registration_id)
    updated = replace(
        existing,
        owner=payload.owner,
        animals=payload.animals,
        status=payload.status,
        timestamp=payload.timestamp or existing.timestamp,
    )
    saved = await uow.registrations.upsert(updated)
    await uow.commit()
    return saved
