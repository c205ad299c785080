"""
Calendar Date/Time Advancer

Moves a calendar's current date and time forward with month/year
rollover over variable-length months and leap years. Pure computation:
the functions mutate the Calendar passed in and leave persistence to the
caller.
"""

import logging

from .models import Calendar
from .protocols import CalendarValidationError

logger = logging.getLogger(__name__)

DEFAULT_HOURS_PER_DAY = 24
DEFAULT_MINUTES_PER_HOUR = 60


def advance_date(calendar: Calendar, days: int) -> Calendar:
    """
    Advance the current date by a number of days.

    Walks a month at a time: the remainder of the current month is
    consumed in one step, and the leap-year length of each month is taken
    for the year it falls in. Produces the same result as stepping one
    day at a time.

    Args:
        calendar: Calendar with months loaded
        days: Days to advance (0 is a no-op)

    Returns:
        The same calendar, updated in place

    Raises:
        CalendarValidationError: negative days, no months, or the current
            month is outside the month list
    """
    if days < 0:
        raise CalendarValidationError("days cannot be negative", field="days")
    if days == 0:
        return calendar
    if not calendar.months:
        raise CalendarValidationError("calendar has no months configured")

    month_idx = calendar.current_month - 1
    if month_idx < 0 or month_idx >= len(calendar.months):
        raise CalendarValidationError(
            f"current month {calendar.current_month} is outside the calendar's "
            f"{len(calendar.months)} months",
            field="current_month",
        )

    year = calendar.current_year
    day = calendar.current_day
    remaining = days

    while remaining > 0:
        left_in_month = calendar.month_days(month_idx, year) - day
        if remaining <= left_in_month:
            day += remaining
            break

        # Roll to day 1 of the next month; a day already past the month
        # end (e.g. after the month was shortened) rolls over in one step.
        remaining -= max(left_in_month, 0) + 1
        day = 1
        month_idx += 1
        if month_idx >= len(calendar.months):
            month_idx = 0
            year += 1

    calendar.current_year = year
    calendar.current_month = month_idx + 1
    calendar.current_day = day
    logger.debug(f"Calendar {calendar.id} advanced {days} days to {year}-{month_idx + 1}-{day}")
    return calendar


def advance_time(calendar: Calendar, hours: int, minutes: int) -> Calendar:
    """
    Advance the current time, carrying into days (and months/years).

    Minutes carry into hours by minutes_per_hour, hours carry into days by
    hours_per_day; non-positive units fall back to 24h/60m.

    Raises:
        CalendarValidationError: negative amounts or nothing to advance
    """
    if hours < 0 or minutes < 0:
        raise CalendarValidationError("hours and minutes must be non-negative")
    if hours == 0 and minutes == 0:
        raise CalendarValidationError("must advance by at least 1 minute or 1 hour")

    hours_per_day = calendar.hours_per_day if calendar.hours_per_day > 0 else DEFAULT_HOURS_PER_DAY
    minutes_per_hour = (
        calendar.minutes_per_hour if calendar.minutes_per_hour > 0 else DEFAULT_MINUTES_PER_HOUR
    )

    extra_hours, new_minute = divmod(calendar.current_minute + minutes, minutes_per_hour)
    extra_days, new_hour = divmod(calendar.current_hour + hours + extra_hours, hours_per_day)

    # Date rollover first so a rejected date leaves the time untouched
    if extra_days > 0:
        advance_date(calendar, extra_days)

    calendar.current_hour = new_hour
    calendar.current_minute = new_minute
    return calendar


__all__ = ["advance_date", "advance_time"]
