from __future__ import annotations

from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, Query

from pashuvision.application.use_cases.analytics import analytics_overview
from pashuvision.application.use_cases.registrations import list_registrations
from pashuvision.config.settings import Settings
from pashuvision.interfaces.http.deps import get_app_settings, get_uow
from pashuvision.interfaces.http.schemas.dashboard import (
    AnalyticsOverviewResponse,
    CountItemResponse,
    DailyCountResponse,
)

router = APIRouter(prefix="/analytics", tags=["analytics"])


def _counts(items) -> list[CountItemResponse]:
    return [CountItemResponse(label=i.label, count=i.count) for i in items]


@router.get("/overview", response_model=AnalyticsOverviewResponse)
async def analytics_overview_endpoint(
    days: int = Query(30, ge=1, le=365, description="Window for the daily registrations series"),
    uow=Depends(get_uow),
    settings: Settings = Depends(get_app_settings),
):
    registrations = await list_registrations.execute(
        uow, seed_sample_data=settings.seed_sample_data
    )
    overview = analytics_overview.execute(
        registrations, days=days, tz=ZoneInfo(settings.timezone)
    )
    return AnalyticsOverviewResponse(
        total_registrations=overview.total_registrations,
        total_animals=overview.total_animals,
        identified_animals=overview.identified_animals,
        average_confidence=overview.average_confidence,
        breed_distribution=_counts(overview.breed_distribution),
        species_split=_counts(overview.species_split),
        sex_split=_counts(overview.sex_split),
        registrations_by_state=_counts(overview.registrations_by_state),
        outcomes=_counts(overview.outcomes),
        daily_registrations=[
            DailyCountResponse(day=d.day, count=d.count) for d in overview.daily_registrations
        ],
    )
