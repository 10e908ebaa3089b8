from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date

from pashuvision.application.errors import NotFound, ValidationError
from pashuvision.application.interfaces.unit_of_work import UnitOfWork
from pashuvision.application.use_cases.registrations import get_registration
from pashuvision.domain.models.registration import Registration, VaccinationRecord


@dataclass(slots=True)
class AddVaccinationInput:
    vaccine_name: str | None
    administered_date: date | None
    due_date: date | None
    notes: str | None = None


@dataclass(slots=True)
class AddVaccinationOutput:
    registration: Registration
    vaccination: VaccinationRecord


def validate(payload: AddVaccinationInput) -> None:
    vaccine_name = (payload.vaccine_name or "").strip()
    if not vaccine_name or not payload.administered_date or not payload.due_date:
        raise ValidationError("Vaccine name, administered date and due date are required")
    if payload.due_date <= payload.administered_date:
        raise ValidationError(
            "Due date must be after the administered date",
            details={
                "administered_date": payload.administered_date.isoformat(),
                "due_date": payload.due_date.isoformat(),
            },
        )


async def execute(
    uow: UnitOfWork,
    registration_id: str,
    animal_id: str,
    payload: AddVaccinationInput,
) -> AddVaccinationOutput:
    validate(payload)
    registration = await get_registration.execute(uow, registration_id)
    animal = registration.find_animal(animal_id)
    if animal is None:
        raise NotFound("Animal not found", details={"animal_id": animal_id})

    record = VaccinationRecord.create(
        vaccine_name=payload.vaccine_name.strip(),
        administered_date=payload.administered_date,
        due_date=payload.due_date,
        notes=payload.notes,
    )
    vaccinations = list(animal.vaccinations or []) + [record]
    updated = registration.with_animal(replace(animal, vaccinations=vaccinations))

    saved = await uow.registrations.upsert(updated)
    await uow.commit()
    return AddVaccinationOutput(registration=saved, vaccination=record)
