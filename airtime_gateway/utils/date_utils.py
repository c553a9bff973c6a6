"""Date manipulation utilities"""

from datetime import date, datetime, timezone


def utc_now() -> datetime:
    """Current instant as a timezone-aware UTC datetime"""
    return datetime.now(timezone.utc)


def utc_today() -> date:
    return utc_now().date()


def is_on_day(moment: datetime, day: date) -> bool:
    """True when the instant falls on the given UTC calendar day"""
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.date() == day
