"""
Calendar Service Microservice

战役日历微服务 - fantasy and real-life campaign calendars, date advancement,
calendar import (Chronicle, Simple Calendar, Calendaria, Fantasy-Calendar)
and export
"""

from .calendar_service import CalendarService
from .factory import create_calendar_service
from .models import (
    Calendar,
    CalendarMode,
    CreateCalendarRequest,
    Era,
    Event,
    EventCreateRequest,
    EventUpdateRequest,
    EventVisibility,
    ImportFormat,
    ImportResult,
    Month,
    Moon,
    RecurrenceType,
    Season,
    UpdateCalendarRequest,
    Weekday,
)

__version__ = "1.0.0"
__all__ = [
    "CalendarService",
    "create_calendar_service",
    "Calendar",
    "CalendarMode",
    "CreateCalendarRequest",
    "Era",
    "Event",
    "EventCreateRequest",
    "EventUpdateRequest",
    "EventVisibility",
    "ImportFormat",
    "ImportResult",
    "Month",
    "Moon",
    "RecurrenceType",
    "Season",
    "UpdateCalendarRequest",
    "Weekday",
]
