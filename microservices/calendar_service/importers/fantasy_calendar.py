"""
Fantasy-Calendar.com adapter.

Exports are snake_case: {"name", "static_data": {...}, "dynamic_data": {...}}.
The clock does not track seconds, and seasons carry no day ranges, so
they are spread evenly over the year.
"""

import logging
from typing import List, Optional, Union

from pydantic import Field, ValidationError

from ..models import DEFAULT_COLOR, Era, ImportFormat, ImportResult, Month, Moon, Season, Weekday
from ..protocols import CalendarImportError
from .helpers import (
    DEFAULT_CALENDAR_NAME,
    RawModel,
    RawPayload,
    day_of_year_to_month_day,
    load_json_object,
    make_settings,
    normalize_color,
)

logger = logging.getLogger(__name__)


class _FCTimespan(RawModel):
    name: str = ""
    type: str = "month"  # "month" or "intercalary"
    length: int = 0


class _FCLeapDay(RawModel):
    name: str = ""
    timespan: int = 0  # month index
    interval: Union[str, int] = ""  # e.g. "4" or "400,!100,4"
    offset: int = 0


class _FCYearData(RawModel):
    global_week: List[str] = Field(default_factory=list)
    timespans: List[_FCTimespan] = Field(default_factory=list)
    leap_days: List[_FCLeapDay] = Field(default_factory=list)


class _FCMoon(RawModel):
    name: str = ""
    cycle: float = 0.0
    shift: float = 0.0
    color: str = ""
    hidden: bool = False


class _FCClock(RawModel):
    hours: int = 0
    minutes: int = 0


class _FCSeason(RawModel):
    name: str = ""
    color: List[str] = Field(default_factory=list)  # [start colour, end colour]


class _FCSeasons(RawModel):
    data: List[_FCSeason] = Field(default_factory=list)


class _FCDate(RawModel):
    year: int = 0


class _FCEra(RawModel):
    name: str = ""
    description: str = ""
    date: _FCDate = Field(default_factory=_FCDate)


class _FCStaticData(RawModel):
    year_data: _FCYearData = Field(default_factory=_FCYearData)
    moons: List[_FCMoon] = Field(default_factory=list)
    clock: _FCClock = Field(default_factory=_FCClock)
    seasons: _FCSeasons = Field(default_factory=_FCSeasons)
    eras: List[_FCEra] = Field(default_factory=list)


class _FCDynamicData(RawModel):
    year: int = 0


class _FCFile(RawModel):
    name: str = ""
    static_data: _FCStaticData = Field(default_factory=_FCStaticData)
    dynamic_data: _FCDynamicData = Field(default_factory=_FCDynamicData)


def parse_leap_interval(interval: str) -> Optional[int]:
    """
    Smallest plain interval of a leap rule, or None.

    "400,!100,4" -> 4. Negated ("!100") parts are exceptions and skipped;
    a "+" prefix (offset-independent) is ignored.
    """
    candidates = []
    for part in interval.split(","):
        part = part.strip().lstrip("+")
        if part.isdecimal() and int(part) > 0:
            candidates.append(int(part))
    return min(candidates) if candidates else None


def _distribute_seasons(raw_seasons: List[_FCSeason], months: List[Month]) -> List[Season]:
    """Spread seasons evenly over the year; the first seasons absorb the remainder"""
    year_days = sum(m.days for m in months)
    if not raw_seasons or year_days <= 0:
        return []

    per_season, remainder = divmod(year_days, len(raw_seasons))
    seasons = []
    day_counter = 1
    for i, s in enumerate(raw_seasons):
        length = per_season + (1 if i < remainder else 0)
        start_month, start_day = day_of_year_to_month_day(day_counter, months)
        end_month, end_day = day_of_year_to_month_day(day_counter + length - 1, months)
        color = normalize_color(s.color[0]) if s.color and s.color[0] else DEFAULT_COLOR
        seasons.append(
            Season(
                name=s.name,
                start_month=start_month,
                start_day=start_day,
                end_month=end_month,
                end_day=end_day,
                color=color,
            )
        )
        day_counter += length
    return seasons


def parse_fantasy_calendar(data: RawPayload) -> ImportResult:
    """Convert a Fantasy-Calendar.com export into an ImportResult"""
    raw = load_json_object(data, ImportFormat.FANTASY_CALENDAR)
    try:
        fc = _FCFile.model_validate(raw)
    except ValidationError as e:
        raise CalendarImportError(
            f"parse fantasy-calendar JSON: {e}", format_name=ImportFormat.FANTASY_CALENDAR.value
        ) from e

    static = fc.static_data
    months = [
        Month(
            name=ts.name,
            days=ts.length,
            sort_order=i,
            is_intercalary=ts.type == "intercalary",
        )
        for i, ts in enumerate(static.year_data.timespans)
    ]

    leap_year_every = 0
    leap_year_offset = 0
    for leap_day in static.year_data.leap_days:
        if 0 <= leap_day.timespan < len(months):
            months[leap_day.timespan].leap_year_days += 1
        every = parse_leap_interval(str(leap_day.interval))
        if every and not leap_year_every:
            leap_year_every = every
            leap_year_offset = leap_day.offset

    weekdays = [
        Weekday(name=name, sort_order=i) for i, name in enumerate(static.year_data.global_week)
    ]

    moons = [
        Moon(
            name=m.name,
            cycle_days=m.cycle,
            phase_offset=m.shift,
            color=normalize_color(m.color),
        )
        for m in static.moons
        if not m.hidden
    ]

    eras = [
        Era(
            name=e.name,
            start_year=e.date.year,
            description=e.description or None,
            sort_order=i,
        )
        for i, e in enumerate(static.eras)
    ]

    result = ImportResult(
        format=ImportFormat.FANTASY_CALENDAR,
        calendar_name=fc.name or DEFAULT_CALENDAR_NAME,
        months=months,
        weekdays=weekdays,
        moons=moons,
        seasons=_distribute_seasons(static.seasons.data, months),
        eras=eras,
        settings=make_settings(
            current_year=fc.dynamic_data.year,
            hours_per_day=static.clock.hours,
            minutes_per_hour=static.clock.minutes,
            leap_year_every=leap_year_every,
            leap_year_offset=leap_year_offset,
        ),
    )
    logger.debug(f"Parsed fantasy-calendar '{result.calendar_name}': {result.summary()}")
    return result
