"""
Calendaria (Foundry VTT module) adapter.

Calendaria stores months, seasons, eras and moons as objects keyed by
id, either directly ({"jan": {...}}) or under a "values" wrapper
({"values": {"jan": {...}}}). Seasons are day-of-year ranges.
"""

import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import Field, TypeAdapter, ValidationError

from ..models import Era, ImportFormat, ImportResult, Month, Moon, Season, Weekday
from ..protocols import CalendarImportError
from .helpers import (
    DEFAULT_CALENDAR_NAME,
    CamelModel,
    RawPayload,
    day_of_year_to_month_day,
    load_json_object,
    make_settings,
    normalize_color,
    strip_localization_key,
)

logger = logging.getLogger(__name__)

GREGORIAN_LEAP_INTERVAL = 4

EntryT = TypeVar("EntryT", bound=CamelModel)


class _CalMonth(CamelModel):
    name: str = ""
    ordinal: int = 0
    days: int = 0
    leap_days: int = 0  # total length in a leap year


class _CalWeekday(CamelModel):
    name: str = ""
    ordinal: int = 0


class _CalSeason(CamelModel):
    name: str = ""
    color: str = ""
    day_start: int = 0
    day_end: int = 0


class _CalEra(CamelModel):
    name: str = ""
    abbreviation: str = ""
    start_year: int = 0
    end_year: Optional[int] = None


class _CalMoon(CamelModel):
    name: str = ""
    cycle_length: float = 0.0
    color: str = ""


class _CalDays(CamelModel):
    values: Dict[str, _CalWeekday] = Field(default_factory=dict)
    hours_per_day: int = 0
    minutes_per_hour: int = 0
    seconds_per_minute: int = 0


class _CalLeapInterval(CamelModel):
    leap_start: int = 0
    leap_interval: int = 0


class _CalYears(CamelModel):
    year_zero: int = 0
    leap_year: _CalLeapInterval = Field(default_factory=_CalLeapInterval)


class _CalLeapConfig(CamelModel):
    rule: str = ""
    start: int = 0


class _CalFile(CamelModel):
    """Top-level scalar sections; keyed maps are decoded separately"""
    name: str = ""
    years: _CalYears = Field(default_factory=_CalYears)
    leap_year_config: _CalLeapConfig = Field(default_factory=_CalLeapConfig)
    days: _CalDays = Field(default_factory=_CalDays)
    weeks: Dict[str, _CalWeekday] = Field(default_factory=dict)


def _is_values_wrapper(section: Dict[str, Any]) -> bool:
    inner = section.get("values")
    return isinstance(inner, dict) and all(
        isinstance(v, dict) for v in inner.values()
    )


def _decode_keyed(raw: Dict[str, Any], key: str, model: Type[EntryT]) -> List[EntryT]:
    """
    Decode a keyed section in document order.

    Direct {id: entry} shape first, then the {"values": {...}} wrapper.
    """
    section = raw.get(key)
    if not isinstance(section, dict):
        return []
    adapter = TypeAdapter(Dict[str, model])

    if not _is_values_wrapper(section):
        entries = adapter.validate_python(section)
        if entries:
            return list(entries.values())

    wrapped = section.get("values")
    if isinstance(wrapped, dict):
        return list(adapter.validate_python(wrapped).values())
    return []


def _leap_settings(cal: _CalFile) -> Dict[str, int]:
    rule = cal.leap_year_config.rule
    if rule == "gregorian":
        return {"leap_year_every": GREGORIAN_LEAP_INTERVAL, "leap_year_offset": 0}
    if rule == "custom" and cal.years.leap_year.leap_interval > 0:
        return {
            "leap_year_every": cal.years.leap_year.leap_interval,
            "leap_year_offset": cal.years.leap_year.leap_start,
        }
    return {"leap_year_every": 0, "leap_year_offset": 0}


def _convert(cal: _CalFile, raw: Dict[str, Any]) -> ImportResult:
    raw_months = sorted(_decode_keyed(raw, "months", _CalMonth), key=lambda m: m.ordinal)
    months = [
        Month(
            name=strip_localization_key(m.name),
            days=m.days,
            sort_order=i,
            leap_year_days=max(0, m.leap_days - m.days),
        )
        for i, m in enumerate(raw_months)
    ]

    raw_weekdays = cal.days.values or cal.weeks
    weekdays = [
        Weekday(name=strip_localization_key(w.name), sort_order=i)
        for i, w in enumerate(sorted(raw_weekdays.values(), key=lambda w: w.ordinal))
    ]

    seasons = []
    for s in sorted(_decode_keyed(raw, "seasons", _CalSeason), key=lambda s: s.day_start):
        start_month, start_day = day_of_year_to_month_day(s.day_start, months)
        end_month, end_day = day_of_year_to_month_day(s.day_end, months)
        seasons.append(
            Season(
                name=strip_localization_key(s.name),
                start_month=start_month,
                start_day=start_day,
                end_month=end_month,
                end_day=end_day,
                color=normalize_color(s.color),
            )
        )

    eras = [
        Era(
            name=strip_localization_key(e.name),
            start_year=e.start_year,
            end_year=e.end_year,
            description=strip_localization_key(e.abbreviation) or None,
            sort_order=i,
        )
        for i, e in enumerate(
            sorted(_decode_keyed(raw, "eras", _CalEra), key=lambda e: e.start_year)
        )
    ]

    moons = [
        Moon(
            name=strip_localization_key(m.name),
            cycle_days=m.cycle_length,
            color=normalize_color(m.color),
        )
        for m in _decode_keyed(raw, "moons", _CalMoon)
    ]

    return ImportResult(
        format=ImportFormat.CALENDARIA,
        calendar_name=strip_localization_key(cal.name) or DEFAULT_CALENDAR_NAME,
        months=months,
        weekdays=weekdays,
        moons=moons,
        seasons=seasons,
        eras=eras,
        settings=make_settings(
            current_year=cal.years.year_zero,
            hours_per_day=cal.days.hours_per_day,
            minutes_per_hour=cal.days.minutes_per_hour,
            seconds_per_minute=cal.days.seconds_per_minute,
            **_leap_settings(cal),
        ),
    )


def parse_calendaria(data: RawPayload) -> ImportResult:
    """Convert a Calendaria export into an ImportResult"""
    raw = load_json_object(data, ImportFormat.CALENDARIA)
    try:
        result = _convert(_CalFile.model_validate(raw), raw)
    except ValidationError as e:
        raise CalendarImportError(
            f"parse calendaria JSON: {e}", format_name=ImportFormat.CALENDARIA.value
        ) from e
    logger.debug(f"Parsed calendaria calendar '{result.calendar_name}': {result.summary()}")
    return result
