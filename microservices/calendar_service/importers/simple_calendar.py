"""
Simple Calendar (Foundry VTT module) adapter.

Handles both export generations:
    - v2: {"exportVersion": 2, "calendars": [{...}], ...} (first calendar used)
    - v1: {"calendar": {...}, ...}

Older exports keep each section under a "*Settings" key
(monthSettings, yearSettings, ...); those are read when the modern key
is empty. Month and day indices are 0-based in the file.
"""

import logging
from typing import Any, List

from pydantic import Field, ValidationError, model_validator

from ..models import ImportFormat, ImportResult, Month, Moon, Season, Weekday
from ..protocols import CalendarImportError
from .helpers import (
    DEFAULT_CALENDAR_NAME,
    CamelModel,
    RawPayload,
    day_before,
    load_json_object,
    make_settings,
    normalize_color,
    strip_localization_key,
)

logger = logging.getLogger(__name__)

GREGORIAN_LEAP_INTERVAL = 4

# modern key -> legacy key, for list sections
_LEGACY_LISTS = (
    ("months", "monthSettings"),
    ("weekdays", "weekdaySettings"),
    ("seasons", "seasonSettings"),
    ("moons", "moonSettings"),
)

# modern key, the field that marks it as populated, legacy key
_LEGACY_OBJECTS = (
    ("year", "numericRepresentation", "yearSettings"),
    ("time", "hoursInDay", "timeSettings"),
    ("leapYear", "rule", "leapYearSettings"),
)


class _SCMonth(CamelModel):
    name: str = ""
    number_of_days: int = 0
    number_of_leap_year_days: int = 0  # total length in a leap year
    intercalary: bool = False


class _SCWeekday(CamelModel):
    name: str = ""


class _SCSeason(CamelModel):
    name: str = ""
    starting_month: int = 0
    starting_day: int = 0
    color: str = ""


class _SCMoon(CamelModel):
    name: str = ""
    cycle_length: float = 0.0
    cycle_day_adjust: float = 0.0
    color: str = ""


class _SCTime(CamelModel):
    hours_in_day: int = 0
    minutes_in_hour: int = 0
    seconds_in_minute: int = 0


class _SCYear(CamelModel):
    numeric_representation: int = 0
    prefix: str = ""
    postfix: str = ""


class _SCLeapYear(CamelModel):
    rule: str = ""
    custom_mod: int = 0


class _SCCalendar(CamelModel):
    name: str = ""
    months: List[_SCMonth] = Field(default_factory=list)
    weekdays: List[_SCWeekday] = Field(default_factory=list)
    seasons: List[_SCSeason] = Field(default_factory=list)
    moons: List[_SCMoon] = Field(default_factory=list)
    year: _SCYear = Field(default_factory=_SCYear)
    time: _SCTime = Field(default_factory=_SCTime)
    leap_year: _SCLeapYear = Field(default_factory=_SCLeapYear)

    @model_validator(mode="before")
    @classmethod
    def _use_legacy_settings(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for modern, legacy in _LEGACY_LISTS:
            if not data.get(modern) and data.get(legacy):
                data[modern] = data[legacy]
        for modern, marker, legacy in _LEGACY_OBJECTS:
            current = data.get(modern)
            populated = isinstance(current, dict) and current.get(marker)
            if not populated and isinstance(data.get(legacy), dict):
                data[modern] = data[legacy]
        return data


class _SCExportV2(CamelModel):
    export_version: int = 0
    calendars: List[_SCCalendar] = Field(default_factory=list)


class _SCExportV1(CamelModel):
    calendar: _SCCalendar = Field(default_factory=_SCCalendar)


def _decode_calendar(raw: dict) -> _SCCalendar:
    try:
        v2 = _SCExportV2.model_validate(raw)
        if v2.calendars:
            return v2.calendars[0]
    except ValidationError as e:
        logger.debug(f"Simple Calendar v2 layout rejected, falling back to v1: {e}")
    return _SCExportV1.model_validate(raw).calendar


def _leap_interval(leap_year: _SCLeapYear) -> int:
    if leap_year.rule == "gregorian":
        return GREGORIAN_LEAP_INTERVAL
    if leap_year.rule == "custom" and leap_year.custom_mod > 0:
        return leap_year.custom_mod
    return 0


def _convert_seasons(cal: _SCCalendar) -> List[Season]:
    """Seasons only have start dates; each ends the day before the next starts"""
    month_lengths = [m.number_of_days for m in cal.months]
    seasons = []
    for i, s in enumerate(cal.seasons):
        following = cal.seasons[(i + 1) % len(cal.seasons)]
        end_month, end_day = day_before(
            following.starting_month + 1, following.starting_day + 1, month_lengths
        )
        seasons.append(
            Season(
                name=strip_localization_key(s.name),
                start_month=s.starting_month + 1,
                start_day=s.starting_day + 1,
                end_month=end_month,
                end_day=end_day,
                color=normalize_color(s.color),
            )
        )
    return seasons


def parse_simple_calendar(data: RawPayload) -> ImportResult:
    """Convert a Simple Calendar export (v1 or v2) into an ImportResult"""
    raw = load_json_object(data, ImportFormat.SIMPLE_CALENDAR)
    try:
        cal = _decode_calendar(raw)
    except ValidationError as e:
        raise CalendarImportError(
            f"parse simple calendar JSON: {e}", format_name=ImportFormat.SIMPLE_CALENDAR.value
        ) from e

    months = [
        Month(
            name=strip_localization_key(m.name),
            days=m.number_of_days,
            sort_order=i,
            is_intercalary=m.intercalary,
            leap_year_days=max(0, m.number_of_leap_year_days - m.number_of_days),
        )
        for i, m in enumerate(cal.months)
    ]
    weekdays = [
        Weekday(name=strip_localization_key(w.name), sort_order=i)
        for i, w in enumerate(cal.weekdays)
    ]
    moons = [
        Moon(
            name=strip_localization_key(m.name),
            cycle_days=m.cycle_length,
            phase_offset=m.cycle_day_adjust,
            color=normalize_color(m.color),
        )
        for m in cal.moons
    ]

    epoch = cal.year.postfix.strip() or cal.year.prefix.strip()

    result = ImportResult(
        format=ImportFormat.SIMPLE_CALENDAR,
        calendar_name=strip_localization_key(cal.name) or DEFAULT_CALENDAR_NAME,
        months=months,
        weekdays=weekdays,
        moons=moons,
        seasons=_convert_seasons(cal),
        settings=make_settings(
            current_year=cal.year.numeric_representation,
            hours_per_day=cal.time.hours_in_day,
            minutes_per_hour=cal.time.minutes_in_hour,
            seconds_per_minute=cal.time.seconds_in_minute,
            epoch_name=epoch or None,
            leap_year_every=_leap_interval(cal.leap_year),
        ),
    )
    logger.debug(f"Parsed simple calendar '{result.calendar_name}': {result.summary()}")
    return result
