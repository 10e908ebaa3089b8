from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel

from pashuvision.interfaces.http.schemas.registrations import RegistrationResponse


class ActivityStatsResponse(BaseModel):
    today: int
    this_week: int
    this_month: int


class LatestRegistrationResponse(BaseModel):
    id: str
    timestamp: datetime
    owner_name: str
    animal_count: int
    outcome: str
    breeds: list[str]
    synced: bool


class DashboardSummaryResponse(BaseModel):
    total_animals: int
    total_registered_owners: int
    most_common_breed: str
    completed_count: int
    unsynced_count: int
    activity: ActivityStatsResponse
    drafts: list[RegistrationResponse]
    latest: list[LatestRegistrationResponse]
    recent_user_registrations: list[RegistrationResponse]


class UpcomingVaccinationResponse(BaseModel):
    registration_id: str
    owner_name: str
    animal_id: str
    animal_breed: str
    vaccine_name: str
    due_date: date
    days_until_due: int
    overdue: bool


class UpcomingVaccinationsResponse(BaseModel):
    days: int
    items: list[UpcomingVaccinationResponse]


class CountItemResponse(BaseModel):
    label: str
    count: int


class DailyCountResponse(BaseModel):
    day: date
    count: int


class AnalyticsOverviewResponse(BaseModel):
    total_registrations: int
    total_animals: int
    identified_animals: int
    average_confidence: float | None
    breed_distribution: list[CountItemResponse]
    species_split: list[CountItemResponse]
    sex_split: list[CountItemResponse]
    registrations_by_state: list[CountItemResponse]
    outcomes: list[CountItemResponse]
    daily_registrations: list[DailyCountResponse]
