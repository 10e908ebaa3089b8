from __future__ import annotations

from dataclasses import replace

from pashuvision.application.errors import NotFound
from pashuvision.application.interfaces.unit_of_work import UnitOfWork
from pashuvision.application.use_cases.registrations import get_registration
from pashuvision.domain.models.registration import Registration


async def execute(
    uow: UnitOfWork,
    registration_id: str,
    animal_id: str,
    vaccination_id: str,
) -> Registration:
    registration = await get_registration.execute(uow, registration_id)
    animal = registration.find_animal(animal_id)
    if animal is None:
        raise NotFound("Animal not found", details={"animal_id": animal_id})

    remaining = [v for v in animal.vaccinations or [] if v.id != vaccination_id]
    if len(remaining) == len(animal.vaccinations or []):
        raise NotFound("Vaccination record not found", details={"vaccination_id": vaccination_id})

    updated = registration.with_animal(replace(animal, vaccinations=remaining))
    saved = await uow.registrations.upsert(updated)
    await uow.commit()
    return saved
