from __future__ import annotations

from datetime import timezone

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from pashuvision.domain.models.registration import AnimalResult, OwnerData, Registration
from pashuvision.infrastructure.db.orm.registration import RegistrationORM


class RegistrationsSQLAlchemyRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: RegistrationORM) -> Registration:
        timestamp = orm.timestamp
        # SQLite drops tzinfo on the way back
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        return Registration(
            id=orm.id,
            timestamp=timestamp,
            owner=OwnerData.from_dict(orm.owner or {}),
            animals=[AnimalResult.from_dict(a) for a in orm.animals or []],
            is_sample=orm.is_sample,
            synced=orm.synced,
            status=orm.status,
        )

    def _to_orm(self, registration: Registration) -> RegistrationORM:
        return RegistrationORM(
            id=registration.id,
            timestamp=registration.timestamp.astimezone(timezone.utc),
            owner=registration.owner.to_dict(),
            animals=[a.to_dict() for a in registration.animals],
            is_sample=registration.is_sample,
            synced=registration.synced,
            status=registration.status,
        )

    async def list_all(self) -> list[Registration]:
        stmt = select(RegistrationORM).order_by(RegistrationORM.timestamp, RegistrationORM.id)
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def get(self, registration_id: str) -> Registration | None:
        orm = await self.session.get(RegistrationORM, registration_id)
        return self._to_domain(orm) if orm else None

    async def upsert(self, registration: Registration) -> Registration:
        """Insert or replace the whole record by id."""
        orm = await self.session.merge(self._to_orm(registration))
        await self.session.flush()
        return self._to_domain(orm)

    async def add_many(self, registrations: list[Registration]) -> None:
        self.session.add_all([self._to_orm(r) for r in registrations])
        await self.session.flush()

    async def count(self) -> int:
        stmt = select(func.count()).select_from(RegistrationORM)
        result = await self.session.execute(stmt)
        return int(result.scalar_one() or 0)
