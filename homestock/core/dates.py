from datetime import date, datetime, timedelta, timezone
from typing import Callable, Optional

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def normalize_date(value):
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        value_text = value.strip()
        if not value_text:
            return None
        try:
            return date.fromisoformat(value_text[:10])
        except ValueError:
            return None
    return None


def today_string(clock: Clock = utc_now) -> str:
    return clock().date().isoformat()


def current_timestamp(clock: Clock = utc_now) -> str:
    now = clock()
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="seconds")


def add_days(value, days: int) -> Optional[str]:
    start = normalize_date(value)
    if start is None:
        return None
    try:
        return (start + timedelta(days=int(days))).isoformat()
    except OverflowError:
        return None
