from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from pashuvision.application.use_cases.registrations import list_registrations
from pashuvision.config.settings import Settings
from pashuvision.infrastructure.reports.csv_exporter import CSV_FILENAME, export_registrations_csv
from pashuvision.interfaces.http.deps import get_app_settings, get_uow

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/registrations.csv")
async def export_registrations(
    uow=Depends(get_uow),
    settings: Settings = Depends(get_app_settings),
):
    """Every animal of every completed registration, one CSV row each."""
    registrations = await list_registrations.execute(
        uow, seed_sample_data=settings.seed_sample_data
    )
    ordered = sorted(registrations, key=lambda r: r.timestamp, reverse=True)
    return Response(
        content=export_registrations_csv(ordered),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{CSV_FILENAME}"'},
    )
