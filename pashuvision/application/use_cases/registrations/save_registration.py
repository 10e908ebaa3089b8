from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from pashuvision.application.interfaces.unit_of_work import UnitOfWork
from pashuvision.domain.models.registration import AnimalResult, OwnerData, Registration
from pashuvision.domain.value_objects.registration_status import RegistrationStatus

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SaveRegistrationInput:
    owner: OwnerData
    animals: list[AnimalResult]
    status: str = RegistrationStatus.COMPLETED.value
    registration_id: str | None = None
    timestamp: datetime | None = None


async def execute(uow: UnitOfWork, payload: SaveRegistrationInput) -> Registration:
    """Store a wizard submission (completed or draft).

    A resubmission of an existing id keeps the stored sync flag; anything new
    starts unsynced so the sync loop picks it up once completed.
    """
    existing = None
    if payload.registration_id:
        existing = await uow.registrations.get(payload.registration_id)

    timestamp = payload.timestamp
    if timestamp is None and existing is not None:
        timestamp = existing.timestamp

    registration = Registration.create(
        owner=payload.owner,
        animals=payload.animals,
        status=payload.status,
        registration_id=payload.registration_id,
        timestamp=timestamp,
    )
    if existing is not None:
        registration.synced = existing.synced
        registration.is_sample = existing.is_sample

    saved = await uow.registrations.upsert(registration)
    await uow.commit()
    logger.info(
        "Saved registration %s (status=%s, animals=%d, update=%s)",
        saved.id,
        saved.status,
        len(saved.animals),
        existing is not None,
    )
    return saved
