from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from pashuvision.application.interfaces.remote_backend import RemoteBackend
from pashuvision.application.interfaces.unit_of_work import UnitOfWork
from pashuvision.domain.models.registration import Registration

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SyncResult:
    synced_ids: list[str] = field(default_factory=list)
    failed_ids: list[str] = field(default_factory=list)
    skipped_reason: str | None = None

    @property
    def skipped(self) -> bool:
        return self.skipped_reason is not None


class RegistrationSyncService:
    """One-way push of completed, unsynced registrations to a remote backend.

    A run is skipped while offline or while another run is in progress. Each
    record is pushed independently; a failed push leaves that record unsynced
    for the next run.
    """

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        remote: RemoteBackend,
        *,
        online: bool = True,
    ) -> None:
        self._uow_factory = uow_factory
        self._remote = remote
        self._online = online
        self._lock = asyncio.Lock()

    @property
    def online(self) -> bool:
        return self._online

    @property
    def is_syncing(self) -> bool:
        return self._lock.locked()

    async def set_online(self, online: bool) -> SyncResult | None:
        was_online = self._online
        self._online = online
        logger.info("Connectivity changed: online=%s", online)
        if online and not was_online:
            return await self.sync_unsynced()
        return None

    async def pending(self) -> list[Registration]:
        async with self._uow_factory() as uow:
            registrations = await uow.registrations.list_all()
        return [r for r in registrations if not r.synced and r.is_completed]

    async def sync_unsynced(self) -> SyncResult:
        if not self._online:
            return SyncResult(skipped_reason="offline")
        if self._lock.locked():
            return SyncResult(skipped_reason="already_syncing")

        async with self._lock:
            pending = await self.pending()
            if not pending:
                return SyncResult()

            logger.info("Syncing %d registrations", len(pending))
            outcomes = await asyncio.gather(
                *(self._remote.push(r) for r in pending), return_exceptions=True
            )

            result = SyncResult()
            for registration, outcome in zip(pending, outcomes):
                if isinstance(outcome, BaseException):
                    logger.error("Failed to sync registration %s: %s", registration.id, outcome)
                    result.failed_ids.append(registration.id)
                    continue
                try:
                    marked = await self._mark_synced(registration)
                except Exception as exc:
                    logger.error(
                        "Failed to store sync state for %s: %s", registration.id, exc, exc_info=True
                    )
                    result.failed_ids.append(registration.id)
                    continue
                if not marked:
                    logger.info(
                        "Registration %s changed during push; left for the next run",
                        registration.id,
                    )
                    continue
                result.synced_ids.append(registration.id)

            logger.info(
                "Sync finished: %d synced, %d failed",
                len(result.synced_ids),
                len(result.failed_ids),
            )
            return result

    async def _mark_synced(self, registration: Registration) -> bool:
        """Flag the pushed version as synced; a record edited since stays unsynced."""
        async with self._uow_factory() as uow:
            current = await uow.registrations.get(registration.id)
            if current != registration:
                return False
            await uow.registrations.upsert(current.mark_synced())
            await uow.commit()
        return True
