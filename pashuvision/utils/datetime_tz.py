from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone

from zoneinfo import ZoneInfo

# Field teams work in IST; day/week/month boundaries are computed there
DEFAULT_TIMEZONE_NAME = "Asia/Kolkata"
DEFAULT_TZ = ZoneInfo(DEFAULT_TIMEZONE_NAME)


def to_local(dt: datetime, tz: ZoneInfo = DEFAULT_TZ) -> datetime:
    """Convert to `tz`, assuming UTC for naive values."""
    if dt.tzinfo is None or dt.tzinfo.utcoffset(dt) is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(tz)


def local_today(now: datetime | None = None, tz: ZoneInfo = DEFAULT_TZ) -> date:
    return to_local(now or datetime.now(timezone.utc), tz).date()


def start_of_day(now: datetime, tz: ZoneInfo = DEFAULT_TZ) -> datetime:
    local = to_local(now, tz)
    return datetime.combine(local.date(), time(0, 0), tzinfo=tz)


def start_of_week(now: datetime, tz: ZoneInfo = DEFAULT_TZ) -> datetime:
    """Weeks start on Sunday."""
    day_start = start_of_day(now, tz)
    days_since_sunday = (day_start.weekday() + 1) % 7
    return day_start - timedelta(days=days_since_sunday)


def start_of_month(now: datetime, tz: ZoneInfo = DEFAULT_TZ) -> datetime:
    local = to_local(now, tz)
    return datetime(local.year, local.month, 1, tzinfo=tz)


def days_until(due: date, today: date) -> int:
    return (due - today).days


def format_date(d: date | datetime | None) -> str:
    """Return dd/mm/yyyy, empty for missing values."""
    if d is None:
        return ""
    if isinstance(d, datetime):
        d = to_local(d).date()
    return d.strftime("%d/%m/%Y")
