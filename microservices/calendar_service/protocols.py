"""
Calendar Service Protocols (Interfaces)

These interfaces define contracts for dependency injection.
NO import-time I/O dependencies - safe to import anywhere.
"""
from typing import Any, List, Optional, Protocol, runtime_checkable

# Import only models (no I/O dependencies)
from .models import (
    Calendar,
    Era,
    Event,
    Month,
    Moon,
    Season,
    Weekday,
)


# Custom exceptions - defined here to avoid importing repository
class CalendarServiceError(Exception):
    """Base exception for calendar service errors"""
    pass


class CalendarValidationError(CalendarServiceError):
    """Input rejected by a business rule"""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class CalendarNotFoundError(CalendarServiceError):
    """Calendar not found"""
    pass


class CalendarEventNotFoundError(CalendarServiceError):
    """Calendar event not found"""
    pass


class UnrecognizedFormatError(CalendarServiceError):
    """Import payload matched none of the supported calendar formats"""
    pass


class CalendarImportError(CalendarServiceError):
    """A recognized import payload could not be decoded"""

    def __init__(self, message: str, format_name: Optional[str] = None):
        super().__init__(message)
        self.format = format_name


class CalendarRepositoryError(CalendarServiceError):
    """Persistence failure surfaced from the repository"""
    pass


@runtime_checkable
class CalendarRepositoryProtocol(Protocol):
    """
    Interface for Calendar Repository.

    Implementations must provide these methods.
    Every set_* call replaces the whole list in one transaction
    (delete + insert), and apply_import writes the calendar settings and
    all sub-resources in a single transaction.

    Event list queries take the caller's campaign role; dm_only events
    are only returned to the owner role.
    """

    # Calendar CRUD
    async def create_calendar(self, calendar: Calendar) -> Calendar:
        """Insert a new calendar (without sub-resources)"""
        ...

    async def get_calendar_by_campaign(self, campaign_id: str) -> Optional[Calendar]:
        """Get the calendar of a campaign (without sub-resources)"""
        ...

    async def get_calendar(self, calendar_id: str) -> Optional[Calendar]:
        """Get calendar by ID (without sub-resources)"""
        ...

    async def update_calendar(self, calendar: Calendar) -> None:
        """Persist calendar settings and current date/time"""
        ...

    async def delete_calendar(self, calendar_id: str) -> None:
        """Delete a calendar and everything under it"""
        ...

    # Sub-resources (wholesale replace)
    async def set_months(self, calendar_id: str, months: List[Month]) -> None:
        ...

    async def get_months(self, calendar_id: str) -> List[Month]:
        ...

    async def set_weekdays(self, calendar_id: str, weekdays: List[Weekday]) -> None:
        ...

    async def get_weekdays(self, calendar_id: str) -> List[Weekday]:
        ...

    async def set_moons(self, calendar_id: str, moons: List[Moon]) -> None:
        ...

    async def get_moons(self, calendar_id: str) -> List[Moon]:
        ...

    async def set_seasons(self, calendar_id: str, seasons: List[Season]) -> None:
        ...

    async def get_seasons(self, calendar_id: str) -> List[Season]:
        ...

    async def set_eras(self, calendar_id: str, eras: List[Era]) -> None:
        ...

    async def get_eras(self, calendar_id: str) -> List[Era]:
        ...

    async def apply_import(
        self,
        calendar: Calendar,
        months: Optional[List[Month]],
        weekdays: Optional[List[Weekday]],
        moons: List[Moon],
        seasons: List[Season],
        eras: List[Era],
    ) -> None:
        """
        Update calendar settings and replace sub-resources atomically.

        months/weekdays of None leave the existing lists untouched.
        """
        ...

    # Events
    async def create_event(self, event: Event) -> None:
        ...

    async def get_event(self, event_id: str) -> Optional[Event]:
        ...

    async def update_event(self, event: Event) -> None:
        ...

    async def delete_event(self, event_id: str) -> None:
        ...

    async def list_events_for_month(
        self, calendar_id: str, year: int, month: int, role: int
    ) -> List[Event]:
        """Events in a month, plus yearly recurring events of that month"""
        ...

    async def list_events_for_year(
        self, calendar_id: str, year: int, role: int
    ) -> List[Event]:
        """Events in a year, plus yearly recurring events"""
        ...

    async def list_events_for_entity(self, entity_id: str, role: int) -> List[Event]:
        ...

    async def list_upcoming_events(
        self,
        calendar_id: str,
        year: int,
        month: int,
        day: int,
        role: int,
        limit: int,
    ) -> List[Event]:
        """Next events on or after the given date"""
        ...


@runtime_checkable
class EventBusProtocol(Protocol):
    """Interface for Event Bus - no I/O imports"""

    async def publish(self, subject: str, event: Any) -> None:
        """Publish an event"""
        ...

    async def close(self) -> None:
        """Close the event bus connection"""
        ...


__all__ = [
    "CalendarServiceError",
    "CalendarValidationError",
    "CalendarNotFoundError",
    "CalendarEventNotFoundError",
    "UnrecognizedFormatError",
    "CalendarImportError",
    "CalendarRepositoryError",
    "CalendarRepositoryProtocol",
    "EventBusProtocol",
]
