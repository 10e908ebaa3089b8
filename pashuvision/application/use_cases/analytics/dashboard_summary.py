from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone

from zoneinfo import ZoneInfo

from pashuvision.domain.models.registration import Registration
from pashuvision.domain.value_objects.registration_status import AnalysisOutcome
from pashuvision.utils.datetime_tz import (
    DEFAULT_TZ,
    start_of_day,
    start_of_month,
    start_of_week,
)

LATEST_LIMIT = 5


@dataclass(slots=True)
class ActivityStats:
    today: int = 0
    this_week: int = 0
    this_month: int = 0


@dataclass(slots=True)
class RegistrationDigest:
    registration: Registration
    outcome: AnalysisOutcome
    breeds: list[str]


@dataclass(slots=True)
class DashboardSummary:
    total_animals: int
    total_registered_owners: int
    most_common_breed: str
    completed_count: int
    unsynced_count: int
    activity: ActivityStats
    drafts: list[Registration] = field(default_factory=list)
    latest: list[RegistrationDigest] = field(default_factory=list)
    recent_user_registrations: list[Registration] = field(default_factory=list)


def digest(registration: Registration) -> RegistrationDigest:
    return RegistrationDigest(
        registration=registration,
        outcome=registration.analysis_outcome,
        breeds=[a.ai_result.breed_name for a in registration.animals if a.ai_result.succeeded],
    )


def activity_stats(
    registrations: list[Registration], *, now: datetime, tz: ZoneInfo = DEFAULT_TZ
) -> ActivityStats:
    day, week, month = start_of_day(now, tz), start_of_week(now, tz), start_of_month(now, tz)
    stats = ActivityStats()
    for registration in registrations:
        if registration.timestamp >= day:
            stats.today += 1
        if registration.timestamp >= week:
            stats.this_week += 1
        if registration.timestamp >= month:
            stats.this_month += 1
    return stats


def summarize(
    registrations: list[Registration],
    *,
    now: datetime | None = None,
    tz: ZoneInfo = DEFAULT_TZ,
) -> DashboardSummary:
    now = now or datetime.now(timezone.utc)
    drafts = [r for r in registrations if r.is_draft]
    completed = [r for r in registrations if r.is_completed]

    breed_counts: Counter[str] = Counter()
    owner_ids: set[str] = set()
    total_animals = 0
    for registration in completed:
        total_animals += len(registration.animals)
        if registration.owner.id_number:
            owner_ids.add(registration.owner.id_number)
        for animal in registration.animals:
            if animal.ai_result.succeeded and animal.ai_result.breed_name:
                breed_counts[animal.ai_result.breed_name] += 1

    most_common = breed_counts.most_common(1)
    newest_first = sorted(completed, key=lambda r: r.timestamp, reverse=True)

    return DashboardSummary(
        total_animals=total_animals,
        total_registered_owners=len(owner_ids),
        most_common_breed=most_common[0][0] if most_common else "N/A",
        completed_count=len(completed),
        unsynced_count=sum(1 for r in completed if not r.synced),
        activity=activity_stats(completed, now=now, tz=tz),
        drafts=sorted(drafts, key=lambda r: r.timestamp, reverse=True),
        latest=[digest(r) for r in newest_first[:LATEST_LIMIT]],
        recent_user_registrations=[r for r in newest_first if not r.is_sample],
    )
