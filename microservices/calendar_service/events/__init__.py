"""
Calendar Service Events

Event types, payloads and the publisher for calendar service events.
"""

from .models import (
    CalendarEventType,
    CalendarCreatedEventData,
    CalendarUpdatedEventData,
    CalendarDeletedEventData,
    CalendarDateAdvancedEventData,
    CalendarImportedEventData,
    CalendarEntryEventData,
)
from .publishers import CalendarEventPublisher

__all__ = [
    # Event Types
    "CalendarEventType",
    # Event Data Models
    "CalendarCreatedEventData",
    "CalendarUpdatedEventData",
    "CalendarDeletedEventData",
    "CalendarDateAdvancedEventData",
    "CalendarImportedEventData",
    "CalendarEntryEventData",
    # Publisher
    "CalendarEventPublisher",
]
