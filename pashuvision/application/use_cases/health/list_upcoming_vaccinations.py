from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from pashuvision.application.errors import ValidationError
from pashuvision.domain.models.registration import Registration
from pashuvision.utils.datetime_tz import days_until, local_today


@dataclass(slots=True)
class UpcomingVaccination:
    registration_id: str
    owner_name: str
    animal_id: str
    animal_breed: str
    vaccine_name: str
    due_date: date
    days_until_due: int


def collect(
    registrations: list[Registration], *, days: int, today: date
) -> list[UpcomingVaccination]:
    """Vaccinations due within `days` days; overdue ones are included."""
    upcoming: list[UpcomingVaccination] = []
    for registration in registrations:
        for animal in registration.animals:
            for vaccination in animal.vaccinations or []:
                remaining = days_until(vaccination.due_date, today)
                if remaining <= days:
                    upcoming.append(
                        UpcomingVaccination(
                            registration_id=registration.id,
                            owner_name=registration.owner.name,
                            animal_id=animal.id,
                            animal_breed=animal.ai_result.breed_name,
                            vaccine_name=vaccination.vaccine_name,
                            due_date=vaccination.due_date,
                            days_until_due=remaining,
                        )
                    )
    return sorted(upcoming, key=lambda item: item.days_until_due)


def execute(
    registrations: list[Registration], *, days: int = 30, today: date | None = None
) -> list[UpcomingVaccination]:
    if days < 0 or days > 365:
        raise ValidationError("days must be between 0 and 365")
    return collect(registrations, days=days, today=today or local_today())
