"""
Calendar Service Models

Campaign calendar data models. Covers fantasy calendars with arbitrary
months, weekdays, moons, seasons and eras, plus the date arithmetic that
works over them (leap years, month lengths, weekday cycling, moon phases).

Sub-resource models (Month, Weekday, Moon, Season, Era) double as the
input payloads for the wholesale-replace operations; ``id`` and
``calendar_id`` are only populated once the repository has stored them.
"""

import math
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_COLOR = "#808080"
DEFAULT_ERA_COLOR = "#6366f1"

# Campaign role that sees dm_only events (owner)
OWNER_ROLE = 3


class CalendarMode(str, Enum):
    """Calendar mode"""
    FANTASY = "fantasy"
    REAL_LIFE = "reallife"


class EventVisibility(str, Enum):
    """Who can see an event"""
    EVERYONE = "everyone"
    DM_ONLY = "dm_only"


class RecurrenceType(str, Enum):
    """Event recurrence"""
    MONTHLY = "monthly"
    YEARLY = "yearly"


class ImportFormat(str, Enum):
    """Calendar file formats recognized by the importer"""
    CHRONICLE = "chronicle"
    SIMPLE_CALENDAR = "simple-calendar"
    CALENDARIA = "calendaria"
    FANTASY_CALENDAR = "fantasy-calendar"
    UNKNOWN = "unknown"


MOON_PHASE_NAMES = [
    "New Moon",
    "Waxing Crescent",
    "First Quarter",
    "Waxing Gibbous",
    "Full Moon",
    "Waning Gibbous",
    "Last Quarter",
    "Waning Crescent",
]


# ============================================================================
# Sub-resources
# ============================================================================

class Month(BaseModel):
    """A named period of the calendar year"""
    id: Optional[int] = None
    calendar_id: Optional[str] = None
    name: str = Field(..., description="月份名称")
    days: int = Field(..., description="Base number of days")
    sort_order: int = 0
    is_intercalary: bool = False
    leap_year_days: int = Field(0, description="Extra days added in a leap year")

    model_config = ConfigDict(from_attributes=True)


class Weekday(BaseModel):
    """A named day of the repeating week"""
    id: Optional[int] = None
    calendar_id: Optional[str] = None
    name: str
    sort_order: int = 0

    model_config = ConfigDict(from_attributes=True)


class Moon(BaseModel):
    """A moon with a phase cycle"""
    id: Optional[int] = None
    calendar_id: Optional[str] = None
    name: str
    cycle_days: float = Field(..., description="Length of a full cycle in days")
    phase_offset: float = 0.0
    color: str = DEFAULT_COLOR

    model_config = ConfigDict(from_attributes=True)

    def moon_phase(self, absolute_day: int) -> float:
        """
        Phase in [0, 1) on the given absolute day.

        0 = new, 0.25 = first quarter, 0.5 = full, 0.75 = last quarter.
        """
        if self.cycle_days <= 0 or not math.isfinite(self.cycle_days + self.phase_offset):
            return 0.0
        raw = (absolute_day + self.phase_offset) / self.cycle_days
        phase = raw % 1.0
        # float modulo can round up to exactly 1.0 for tiny negative inputs
        return 0.0 if phase >= 1.0 else phase

    def moon_phase_name(self, absolute_day: int) -> str:
        """Human-readable phase name (eight 0.125-wide bands)"""
        band = int(self.moon_phase(absolute_day) / 0.125)
        return MOON_PHASE_NAMES[min(band, len(MOON_PHASE_NAMES) - 1)]


class Season(BaseModel):
    """A named span of the year from start month/day to end month/day"""
    id: Optional[int] = None
    calendar_id: Optional[str] = None
    name: str
    start_month: int
    start_day: int
    end_month: int
    end_day: int
    description: Optional[str] = None
    color: str = DEFAULT_COLOR
    weather_effect: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

    def contains_date(self, month: int, day: int) -> bool:
        """True if month/day falls in this season, including wrap-around seasons"""
        start = self.start_month * 100 + self.start_day
        end = self.end_month * 100 + self.end_day
        value = month * 100 + day

        if start <= end:
            return start <= value <= end
        # Wraps the year end, e.g. winter 11/1 -> 2/28
        return value >= start or value <= end


class Era(BaseModel):
    """A named span of years; no end year means ongoing"""
    id: Optional[int] = None
    calendar_id: Optional[str] = None
    name: str
    start_year: int
    end_year: Optional[int] = None
    description: Optional[str] = None
    color: str = DEFAULT_ERA_COLOR
    sort_order: int = 0

    model_config = ConfigDict(from_attributes=True)

    def contains_year(self, year: int) -> bool:
        if year < self.start_year:
            return False
        return self.end_year is None or year <= self.end_year


# ============================================================================
# Calendar
# ============================================================================

class Calendar(BaseModel):
    """
    Top-level calendar definition for a campaign.

    Sub-resources are only present when the calendar was loaded hydrated
    (see CalendarService.get_calendar). Months and weekdays are expected
    in sort_order.
    """
    id: str
    campaign_id: str
    mode: CalendarMode = CalendarMode.FANTASY
    name: str
    description: Optional[str] = None
    epoch_name: Optional[str] = None

    current_year: int = 1
    current_month: int = Field(1, description="1-based month index")
    current_day: int = 1
    current_hour: int = 0
    current_minute: int = 0

    hours_per_day: int = 24
    minutes_per_hour: int = 60
    seconds_per_minute: int = 60

    leap_year_every: int = Field(0, description="0 disables leap years")
    leap_year_offset: int = 0

    months: List[Month] = Field(default_factory=list)
    weekdays: List[Weekday] = Field(default_factory=list)
    moons: List[Moon] = Field(default_factory=list)
    seasons: List[Season] = Field(default_factory=list)
    eras: List[Era] = Field(default_factory=list)

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    def is_real_life(self) -> bool:
        return self.mode == CalendarMode.REAL_LIFE

    def is_leap_year(self, year: int) -> bool:
        """Leap test against leap_year_every/offset; negative years use floor modulo"""
        if self.leap_year_every <= 0:
            return False
        return (year - self.leap_year_offset) % self.leap_year_every == 0

    def year_length(self) -> int:
        """Days in a common year (leap days ignored)"""
        return sum(m.days for m in self.months)

    def year_length_for_year(self, year: int) -> int:
        """Days in the given year, leap days included"""
        if self.is_leap_year(year):
            return sum(m.days + m.leap_year_days for m in self.months)
        return self.year_length()

    def month_days(self, month_idx: int, year: int) -> int:
        """Days in a month (0-based index) for a year; 0 when out of range"""
        if month_idx < 0 or month_idx >= len(self.months):
            return 0
        month = self.months[month_idx]
        if self.is_leap_year(year):
            return month.days + month.leap_year_days
        return month.days

    def week_length(self) -> int:
        return len(self.weekdays)

    def absolute_day(self, year: int, month: int, day: int) -> int:
        """
        Day number counted from year 0 day 0, month 1-based.

        Uses the common year length for every elapsed year, so it drifts
        from the true count on calendars with leap years. Only used to
        cycle weekdays and moon phases.
        """
        total = year * self.year_length()
        total += sum(m.days for m in self.months[: max(month - 1, 0)])
        return total + day

    def weekday_index(self, absolute_day: int) -> int:
        """0-based weekday for an absolute day; 0 without weekdays"""
        week = self.week_length()
        if week == 0:
            return 0
        return absolute_day % week

    def weekday_for_date(self, year: int, month: int, day: int) -> Optional[Weekday]:
        if not self.weekdays:
            return None
        return self.weekdays[self.weekday_index(self.absolute_day(year, month, day))]

    def season_for_date(self, month: int, day: int) -> Optional[Season]:
        """First season containing month/day, or None"""
        for season in self.seasons:
            if season.contains_date(month, day):
                return season
        return None

    def current_season(self) -> Optional[Season]:
        return self.season_for_date(self.current_month, self.current_day)

    def era_for_year(self, year: int) -> Optional[Era]:
        for era in self.eras:
            if era.contains_year(year):
                return era
        return None

    def format_current_time(self) -> str:
        return f"{self.current_hour:02d}:{self.current_minute:02d}"


# ============================================================================
# Events
# ============================================================================

class Event(BaseModel):
    """A calendar entry on a specific date, optionally linked to an entity"""
    id: str
    calendar_id: str
    entity_id: Optional[str] = None
    name: str
    description: Optional[str] = None

    year: int
    month: int
    day: int
    start_hour: Optional[int] = None
    start_minute: Optional[int] = None

    end_year: Optional[int] = None
    end_month: Optional[int] = None
    end_day: Optional[int] = None
    end_hour: Optional[int] = None
    end_minute: Optional[int] = None

    is_recurring: bool = False
    recurrence_type: Optional[RecurrenceType] = None
    visibility: EventVisibility = EventVisibility.EVERYONE
    category: Optional[str] = None
    created_by: Optional[str] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    def has_time(self) -> bool:
        """True if the event has a start time (not all-day)"""
        return self.start_hour is not None and self.start_minute is not None

    def is_multi_day(self) -> bool:
        return (
            self.end_year is not None
            and self.end_month is not None
            and self.end_day is not None
        )

    def format_time(self) -> str:
        if not self.has_time():
            return ""
        return f"{self.start_hour:02d}:{self.start_minute:02d}"

    def format_end_time(self) -> str:
        if self.end_hour is None or self.end_minute is None:
            return ""
        return f"{self.end_hour:02d}:{self.end_minute:02d}"

    def format_time_range(self) -> str:
        """'HH:MM - HH:MM', 'HH:MM' without an end time, '' for all-day"""
        start = self.format_time()
        if not start:
            return ""
        end = self.format_end_time()
        if not end:
            return start
        return f"{start} - {end}"


# ============================================================================
# Request Models
# ============================================================================

class CreateCalendarRequest(BaseModel):
    """创建日历请求"""
    mode: Optional[str] = None
    name: str = ""
    description: Optional[str] = None
    epoch_name: Optional[str] = None
    current_year: int = 0
    hours_per_day: int = 0
    minutes_per_hour: int = 0
    seconds_per_minute: int = 0
    leap_year_every: int = 0
    leap_year_offset: int = 0


class UpdateCalendarRequest(BaseModel):
    """更新日历设置请求"""
    name: str
    description: Optional[str] = None
    epoch_name: Optional[str] = None
    current_year: int
    current_month: int
    current_day: int
    current_hour: int = 0
    current_minute: int = 0
    hours_per_day: int = 24
    minutes_per_hour: int = 60
    seconds_per_minute: int = 60
    leap_year_every: int = 0
    leap_year_offset: int = 0


class EventCreateRequest(BaseModel):
    """创建事件请求"""
    name: str = ""
    description: Optional[str] = None
    entity_id: Optional[str] = None
    year: int
    month: int
    day: int
    start_hour: Optional[int] = None
    start_minute: Optional[int] = None
    end_year: Optional[int] = None
    end_month: Optional[int] = None
    end_day: Optional[int] = None
    end_hour: Optional[int] = None
    end_minute: Optional[int] = None
    is_recurring: bool = False
    recurrence_type: Optional[RecurrenceType] = None
    visibility: Optional[str] = None
    category: Optional[str] = None
    created_by: Optional[str] = None


class EventUpdateRequest(BaseModel):
    """更新事件请求"""
    name: str = ""
    description: Optional[str] = None
    entity_id: Optional[str] = None
    year: int
    month: int
    day: int
    start_hour: Optional[int] = None
    start_minute: Optional[int] = None
    end_year: Optional[int] = None
    end_month: Optional[int] = None
    end_day: Optional[int] = None
    end_hour: Optional[int] = None
    end_minute: Optional[int] = None
    is_recurring: bool = False
    recurrence_type: Optional[RecurrenceType] = None
    visibility: Optional[str] = None
    category: Optional[str] = None


# ============================================================================
# Import Models
# ============================================================================

class ImportedSettings(BaseModel):
    """Calendar-level settings extracted from an imported file"""
    epoch_name: Optional[str] = None
    current_year: int = 0
    hours_per_day: int = 24
    minutes_per_hour: int = 60
    seconds_per_minute: int = 60
    leap_year_every: int = 0
    leap_year_offset: int = 0


class ImportResult(BaseModel):
    """Parsed calendar data in canonical form, ready to apply"""
    format: ImportFormat
    calendar_name: str = ""
    months: List[Month] = Field(default_factory=list)
    weekdays: List[Weekday] = Field(default_factory=list)
    moons: List[Moon] = Field(default_factory=list)
    seasons: List[Season] = Field(default_factory=list)
    eras: List[Era] = Field(default_factory=list)
    settings: ImportedSettings = Field(default_factory=ImportedSettings)

    def summary(self) -> dict:
        """Counts per sub-resource, for import responses and logs"""
        return {
            "format": self.format.value,
            "name": self.calendar_name,
            "months": len(self.months),
            "weekdays": len(self.weekdays),
            "moons": len(self.moons),
            "seasons": len(self.seasons),
            "eras": len(self.eras),
        }


__all__ = [
    "DEFAULT_COLOR",
    "DEFAULT_ERA_COLOR",
    "OWNER_ROLE",
    "CalendarMode",
    "EventVisibility",
    "RecurrenceType",
    "ImportFormat",
    "MOON_PHASE_NAMES",
    "Month",
    "Weekday",
    "Moon",
    "Season",
    "Era",
    "Calendar",
    "Event",
    "CreateCalendarRequest",
    "UpdateCalendarRequest",
    "EventCreateRequest",
    "EventUpdateRequest",
    "ImportedSettings",
    "ImportResult",
]
