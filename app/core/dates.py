from datetime import date, datetime, time, timedelta, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_today() -> date:
    return utc_now().date()


def start_of_day(value: date) -> datetime:
    return datetime.combine(value, time.min, tzinfo=timezone.utc)


def end_of_day_exclusive(value: date) -> datetime:
    """First instant of the following day, for inclusive whole-day ranges."""
    return start_of_day(value + timedelta(days=1))
