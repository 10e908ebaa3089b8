from __future__ import annotations

import asyncio
import logging

from pashuvision.application.sync.registration_sync import RegistrationSyncService

logger = logging.getLogger(__name__)


async def run_sync_once(service: RegistrationSyncService) -> None:
    """Run one sync pass; failures are logged and never escape."""
    try:
        result = await service.sync_unsynced()
        if result.skipped:
            logger.debug("Periodic sync skipped: %s", result.skipped_reason)
    except Exception as exc:
        logger.error("run_sync_once failed: %s", exc, exc_info=True)


async def run_sync_loop(
    service: RegistrationSyncService,
    interval_seconds: float,
    stop_event: asyncio.Event,
) -> None:
    logger.info("Background sync started (every %ss)", interval_seconds)
    while not stop_event.is_set():
        await run_sync_once(service)
        try:
            await asyncio.wait_for(stop_event.wait(), timeout=interval_seconds)
        except asyncio.TimeoutError:
            continue
    logger.info("Background sync stopped")
