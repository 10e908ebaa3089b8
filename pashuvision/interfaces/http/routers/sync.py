from __future__ import annotations

from fastapi import APIRouter, Depends

from pashuvision.application.sync.registration_sync import RegistrationSyncService, SyncResult
from pashuvision.interfaces.http.deps import get_sync_service
from pashuvision.interfaces.http.schemas.sync import (
    ConnectivityResponse,
    ConnectivityUpdate,
    SyncResultResponse,
    SyncStatusResponse,
)

router = APIRouter(prefix="/sync", tags=["sync"])


def _result(result: SyncResult) -> SyncResultResponse:
    return SyncResultResponse(
        synced_ids=result.synced_ids,
        failed_ids=result.failed_ids,
        skipped_reason=result.skipped_reason,
    )


@router.get("/status", response_model=SyncStatusResponse)
async def sync_status(service: RegistrationSyncService = Depends(get_sync_service)):
    pending = await service.pending()
    return SyncStatusResponse(
        online=service.online, is_syncing=service.is_syncing, pending_count=len(pending)
    )


@router.post("/trigger", response_model=SyncResultResponse)
async def trigger_sync(service: RegistrationSyncService = Depends(get_sync_service)):
    """Push every completed, unsynced registration now."""
    return _result(await service.sync_unsynced())


@router.put("/connectivity", response_model=ConnectivityResponse)
async def set_connectivity(
    payload: ConnectivityUpdate,
    service: RegistrationSyncService = Depends(get_sync_service),
):
    """Report connectivity; coming back online starts a sync."""
    result = await service.set_online(payload.online)
    return ConnectivityResponse(
        online=service.online, sync=_result(result) if result is not None else None
    )
