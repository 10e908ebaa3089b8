from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone

from zoneinfo import ZoneInfo

from pashuvision.application.errors import ValidationError
from pashuvision.domain.models.registration import Registration
from pashuvision.domain.value_objects.registration_status import AnalysisOutcome
from pashuvision.utils.datetime_tz import DEFAULT_TZ, to_local


@dataclass(slots=True)
class CountItem:
    label: str
    count: int


@dataclass(slots=True)
class DailyCount:
    day: date
    count: int


@dataclass(slots=True)
class AnalyticsOverview:
    total_registrations: int
    total_animals: int
    identified_animals: int
    average_confidence: float | None
    breed_distribution: list[CountItem]
    species_split: list[CountItem]
    sex_split: list[CountItem]
    registrations_by_state: list[CountItem]
    outcomes: list[CountItem]
    daily_registrations: list[DailyCount]


def _ranked(counter: Counter[str]) -> list[CountItem]:
    return [CountItem(label=label, count=count) for label, count in counter.most_common()]


def execute(
    registrations: list[Registration],
    *,
    days: int = 30,
    now: datetime | None = None,
    tz: ZoneInfo = DEFAULT_TZ,
) -> AnalyticsOverview:
    if days <= 0 or days > 365:
        raise ValidationError("days must be between 1 and 365")
    now = now or datetime.now(timezone.utc)
    completed = [r for r in registrations if r.is_completed]

    breeds: Counter[str] = Counter()
    species: Counter[str] = Counter()
    sexes: Counter[str] = Counter()
    states: Counter[str] = Counter()
    outcomes: Counter[str] = Counter({o.value: 0 for o in AnalysisOutcome})
    confidences: list[int] = []
    total_animals = 0

    for registration in completed:
        states[registration.owner.state or "Unknown"] += 1
        outcomes[registration.analysis_outcome.value] += 1
        for animal in registration.animals:
            total_animals += 1
            species[animal.species or "Unknown"] += 1
            sexes[animal.sex or "Unknown"] += 1
            if animal.ai_result.succeeded:
                breeds[animal.ai_result.breed_name] += 1
                confidences.append(animal.ai_result.confidence)

    today = to_local(now, tz).date()
    first_day = today - timedelta(days=days - 1)
    per_day: Counter[date] = Counter()
    for registration in completed:
        day = to_local(registration.timestamp, tz).date()
        if first_day <= day <= today:
            per_day[day] += 1

    return AnalyticsOverview(
        total_registrations=len(completed),
        total_animals=total_animals,
        identified_animals=len(confidences),
        average_confidence=(
            round(sum(confidences) / len(confidences), 1) if confidences else None
        ),
        breed_distribution=_ranked(breeds),
        species_split=_ranked(species),
        sex_split=_ranked(sexes),
        registrations_by_state=_ranked(states),
        outcomes=[CountItem(label=label, count=count) for label, count in outcomes.items()],
        daily_registrations=[
            DailyCount(day=first_day + timedelta(days=i), count=per_day[first_day + timedelta(days=i)])
            for i in range(days)
        ],
    )
