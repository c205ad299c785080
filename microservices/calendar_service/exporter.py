"""
Chronicle Calendar Export

Serializes a calendar (and optionally its events) to the native
"chronicle-calendar-v1" JSON document. The same models decode the
document again on import, so an exported calendar can be re-imported
without loss of structure.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from .models import DEFAULT_COLOR, DEFAULT_ERA_COLOR, Calendar, Event

CHRONICLE_FORMAT = "chronicle-calendar-v1"
CHRONICLE_VERSION = 1


class ExportMonth(BaseModel):
    name: str = ""
    days: int = 0
    sort_order: int = 0
    is_intercalary: bool = False
    leap_year_days: int = 0


class ExportWeekday(BaseModel):
    name: str = ""
    sort_order: int = 0


class ExportMoon(BaseModel):
    name: str = ""
    cycle_days: float = 0.0
    phase_offset: float = 0.0
    color: str = DEFAULT_COLOR


class ExportSeason(BaseModel):
    name: str = ""
    start_month: int = 1
    start_day: int = 1
    end_month: int = 1
    end_day: int = 1
    description: Optional[str] = None
    color: str = DEFAULT_COLOR
    weather_effect: Optional[str] = None


class ExportEra(BaseModel):
    name: str = ""
    start_year: int = 0
    end_year: Optional[int] = None
    description: Optional[str] = None
    color: str = DEFAULT_ERA_COLOR
    sort_order: int = 0


class ExportCalendar(BaseModel):
    """Calendar settings plus all sub-resources"""
    mode: str = "fantasy"
    name: str = ""
    description: Optional[str] = None
    epoch_name: Optional[str] = None
    current_year: int = 0
    current_month: int = 1
    current_day: int = 1
    current_hour: int = 0
    current_minute: int = 0
    hours_per_day: int = 24
    minutes_per_hour: int = 60
    seconds_per_minute: int = 60
    leap_year_every: int = 0
    leap_year_offset: int = 0
    months: List[ExportMonth] = Field(default_factory=list)
    weekdays: List[ExportWeekday] = Field(default_factory=list)
    moons: List[ExportMoon] = Field(default_factory=list)
    seasons: List[ExportSeason] = Field(default_factory=list)
    eras: List[ExportEra] = Field(default_factory=list)


class ExportEvent(BaseModel):
    name: str = ""
    description: Optional[str] = None
    entity_id: Optional[str] = None
    year: int = 0
    month: int = 1
    day: int = 1
    start_hour: Optional[int] = None
    start_minute: Optional[int] = None
    end_year: Optional[int] = None
    end_month: Optional[int] = None
    end_day: Optional[int] = None
    end_hour: Optional[int] = None
    end_minute: Optional[int] = None
    is_recurring: bool = False
    recurrence_type: Optional[str] = None
    visibility: str = "everyone"
    category: Optional[str] = None


class ChronicleExport(BaseModel):
    """Top-level chronicle-calendar-v1 document"""
    format: str = CHRONICLE_FORMAT
    version: int = CHRONICLE_VERSION
    calendar: ExportCalendar = Field(default_factory=ExportCalendar)
    events: Optional[List[ExportEvent]] = None

    def to_dict(self) -> dict:
        """JSON-ready dict; absent optionals (and events, unless requested) are omitted"""
        return self.model_dump(mode="json", exclude_none=True)


def build_export(
    calendar: Calendar,
    events: Optional[List[Event]] = None,
    include_events: bool = False,
) -> ChronicleExport:
    """
    Build the export document for a hydrated calendar.

    Events are only included when requested; an empty list is still
    written in that case.
    """
    # mode="json" turns enums into their string values; extra keys
    # (ids, timestamps) are dropped by the export models
    export = ChronicleExport(
        calendar=ExportCalendar.model_validate(calendar.model_dump(mode="json"))
    )
    if include_events:
        export.events = [
            ExportEvent.model_validate(event.model_dump(mode="json"))
            for event in (events or [])
        ]
    return export


def export_calendar_json(
    calendar: Calendar,
    events: Optional[List[Event]] = None,
    include_events: bool = False,
    indent: Optional[int] = 2,
) -> str:
    """Serialize a calendar to chronicle-calendar-v1 JSON text"""
    export = build_export(calendar, events, include_events)
    return export.model_dump_json(exclude_none=True, indent=indent)


__all__ = [
    "CHRONICLE_FORMAT",
    "CHRONICLE_VERSION",
    "ChronicleExport",
    "ExportCalendar",
    "ExportEvent",
    "ExportMonth",
    "ExportWeekday",
    "ExportMoon",
    "ExportSeason",
    "ExportEra",
    "build_export",
    "export_calendar_json",
]
