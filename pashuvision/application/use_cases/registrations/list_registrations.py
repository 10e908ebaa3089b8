from __future__ import annotations

import logging

from pashuvision.application.errors import InfrastructureError
from pashuvision.application.interfaces.unit_of_work import UnitOfWork
from pashuvision.application.sample_data import SampleDataGenerator
from pashuvision.domain.models.registration import Registration

logger = logging.getLogger(__name__)


def _searchable_text(registration: Registration) -> str:
    owner = registration.owner
    parts = [
        registration.id,
        owner.name,
        owner.mobile,
        owner.id_number,
        owner.village,
        owner.district,
        owner.state,
    ]
    parts.extend(a.ai_result.breed_name for a in registration.animals if a.ai_result.succeeded)
    return " ".join(p for p in parts if p).lower()


def filter_registrations(registrations: list[Registration], search: str | None) -> list[Registration]:
    term = (search or "").strip().lower()
    if not term:
        return registrations
    return [r for r in registrations if term in _searchable_text(r)]


async def _seed(uow: UnitOfWork, generator: SampleDataGenerator) -> list[Registration]:
    sample = generator.registrations()
    if not sample:
        return []
    try:
        await uow.registrations.add_many(sample)
        await uow.commit()
    except Exception as exc:
        logger.error("Failed to populate store with sample data: %s", exc, exc_info=True)
        await uow.rollback()
        raise InfrastructureError("Error populating database") from exc
    logger.info("Seeded empty store with %d sample registrations", len(sample))
    return sample


async def execute(
    uow: UnitOfWork,
    *,
    search: str | None = None,
    seed_sample_data: bool = True,
    generator: SampleDataGenerator | None = None,
) -> list[Registration]:
    """Return every registration, seeding the store with samples on first run."""
    registrations = await uow.registrations.list_all()
    if not registrations and seed_sample_data:
        registrations = await _seed(uow, generator or SampleDataGenerator())
    return filter_registrations(registrations, search)
