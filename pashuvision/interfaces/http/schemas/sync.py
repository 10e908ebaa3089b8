from __future__ import annotations

from pydantic import BaseModel


class SyncStatusResponse(BaseModel):
    online: bool
    is_syncing: bool
    pending_count: int


class SyncResultResponse(BaseModel):
    synced_ids: list[str]
    failed_ids: list[str]
    skipped_reason: str | None = None


class ConnectivityUpdate(BaseModel):
    online: bool


class ConnectivityResponse(BaseModel):
    online: bool
    sync: SyncResultResponse | None = None
