from datetime import date, datetime
from typing import Optional


def today_key(now: Optional[datetime] = None) -> str:
    current = now or datetime.now()
    return f"{current.year:04d}-{current.month:02d}-{current.day:02d}"


def parse_day_key(key: str) -> date:
    year, month, day = (int(part) for part in key.split("-"))
    return date(year, month, day)


def is_day_key(value: object) -> bool:
    if not isinstance(value, str):
        return False
    try:
        parse_day_key(value)
    except ValueError:
        return False
    return True


def days_between(start: str, end: str) -> int:
    # Ordinals count whole calendar days, so DST and time-of-day never leak in.
    return parse_day_key(end).toordinal() - parse_day_key(start).toordinal()
