from __future__ import annotations

from pashuvision.application.errors import NotFound, ValidationError
from pashuvision.application.interfaces.ai_gateway import AIGateway
from pashuvision.application.interfaces.unit_of_work import UnitOfWork
from pashuvision.application.use_cases.registrations import get_registration
from pashuvision.domain.models.breed_identification import VaccinationSchedule


async def execute(
    uow: UnitOfWork,
    gateway: AIGateway,
    registration_id: str,
    animal_id: str,
) -> VaccinationSchedule:
    registration = await get_registration.execute(uow, registration_id)
    animal = registration.find_animal(animal_id)
    if animal is None:
        raise NotFound("Animal not found", details={"animal_id": animal_id})
    if not animal.species:
        raise ValidationError(
            "Cannot get AI suggestions because the animal's species is not specified."
        )
    return await gateway.get_vaccination_schedule(animal.ai_result.breed_name, animal.species)
