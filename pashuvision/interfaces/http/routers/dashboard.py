from __future__ import annotations

from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, Query

from pashuvision.application.use_cases.analytics import dashboard_summary
from pashuvision.application.use_cases.health import list_upcoming_vaccinations
from pashuvision.application.use_cases.registrations import list_registrations
from pashuvision.config.settings import Settings
from pashuvision.interfaces.http.deps import get_app_settings, get_uow
from pashuvision.interfaces.http.schemas.dashboard import (
    ActivityStatsResponse,
    DashboardSummaryResponse,
    LatestRegistrationResponse,
    UpcomingVaccinationResponse,
    UpcomingVaccinationsResponse,
)
from pashuvision.interfaces.http.schemas.registrations import RegistrationResponse
from pashuvision.utils.datetime_tz import local_today

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/summary", response_model=DashboardSummaryResponse)
async def dashboard_summary_endpoint(
    uow=Depends(get_uow),
    settings: Settings = Depends(get_app_settings),
):
    registrations = await list_registrations.execute(
        uow, seed_sample_data=settings.seed_sample_data
    )
    summary = dashboard_summary.summarize(registrations, tz=ZoneInfo(settings.timezone))
    return DashboardSummaryResponse(
        total_animals=summary.total_animals,
        total_registered_owners=summary.total_registered_owners,
        most_common_breed=summary.most_common_breed,
        completed_count=summary.completed_count,
        unsynced_count=summary.unsynced_count,
        activity=ActivityStatsResponse(
            today=summary.activity.today,
            this_week=summary.activity.this_week,
            this_month=summary.activity.this_month,
        ),
        drafts=[RegistrationResponse.from_domain(r) for r in summary.drafts],
        latest=[
            LatestRegistrationResponse(
                id=d.registration.id,
                timestamp=d.registration.timestamp,
                owner_name=d.registration.owner.name,
                animal_count=len(d.registration.animals),
                outcome=d.outcome.value,
                breeds=d.breeds,
                synced=d.registration.synced,
            )
            for d in summary.latest
        ],
        recent_user_registrations=[
            RegistrationResponse.from_domain(r) for r in summary.recent_user_registrations
        ],
    )


@router.get("/upcoming-vaccinations", response_model=UpcomingVaccinationsResponse)
async def upcoming_vaccinations_endpoint(
    days: int = Query(30, ge=0, le=365),
    uow=Depends(get_uow),
    settings: Settings = Depends(get_app_settings),
):
    registrations = await list_registrations.execute(
        uow, seed_sample_data=settings.seed_sample_data
    )
    today = local_today(tz=ZoneInfo(settings.timezone))
    items = list_upcoming_vaccinations.execute(registrations, days=days, today=today)
    return UpcomingVaccinationsResponse(
        days=days,
        items=[
            UpcomingVaccinationResponse(
                registration_id=i.registration_id,
                owner_name=i.owner_name,
                animal_id=i.animal_id,
                animal_breed=i.animal_breed,
                vaccine_name=i.vaccine_name,
                due_date=i.due_date,
                days_until_due=i.days_until_due,
                overdue=i.days_until_due < 0,
            )
            for i in items
        ],
    )
