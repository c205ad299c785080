"""
Calendar Event Data Models

Event type definitions and payloads for calendar service events.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


# =============================================================================
# Event Type Definitions (Service-Specific)
# =============================================================================

class CalendarEventType(str, Enum):
    """
    Events published by calendar_service.

    Subjects: calendar.>
    """
    # Calendar lifecycle
    CREATED = "calendar.created"
    UPDATED = "calendar.updated"
    DELETED = "calendar.deleted"
    DATE_ADVANCED = "calendar.date.advanced"
    IMPORTED = "calendar.imported"

    # Calendar entries
    EVENT_CREATED = "calendar.event.created"
    EVENT_UPDATED = "calendar.event.updated"
    EVENT_DELETED = "calendar.event.deleted"


# =============================================================================
# Event Data Models - Published Events
# =============================================================================

class CalendarCreatedEventData(BaseModel):
    """calendar.created event data"""
    calendar_id: str = Field(..., description="Calendar ID")
    campaign_id: str = Field(..., description="Owning campaign")
    name: str
    mode: str = Field(..., description="fantasy or reallife")
    timestamp: Optional[datetime] = None


class CalendarUpdatedEventData(BaseModel):
    """calendar.updated event data"""
    calendar_id: str
    campaign_id: str
    changed: List[str] = Field(..., description="Changed parts, e.g. settings, months")
    timestamp: Optional[datetime] = None


class CalendarDeletedEventData(BaseModel):
    """calendar.deleted event data"""
    calendar_id: str
    campaign_id: str
    timestamp: Optional[datetime] = None


class CalendarDateAdvancedEventData(BaseModel):
    """calendar.date.advanced event data (the new current date/time)"""
    calendar_id: str
    campaign_id: str
    year: int
    month: int
    day: int
    hour: int
    minute: int
    timestamp: Optional[datetime] = None


class CalendarImportedEventData(BaseModel):
    """calendar.imported event data"""
    calendar_id: str
    campaign_id: str
    format: str = Field(..., description="Detected import format")
    calendar_name: str
    months: int = 0
    weekdays: int = 0
    moons: int = 0
    seasons: int = 0
    eras: int = 0
    timestamp: Optional[datetime] = None


class CalendarEntryEventData(BaseModel):
    """calendar.event.created / updated / deleted event data"""
    calendar_id: str
    event_id: str
    name: str
    year: int
    month: int
    day: int
    visibility: str
    timestamp: Optional[datetime] = None


__all__ = [
    "CalendarEventType",
    "CalendarCreatedEventData",
    "CalendarUpdatedEventData",
    "CalendarDeletedEventData",
    "CalendarDateAdvancedEventData",
    "CalendarImportedEventData",
    "CalendarEntryEventData",
]
