"""Mock Calendar Repository for component testing"""
from typing import Dict, List, Optional

from microservices.calendar_service.models import (
    OWNER_ROLE,
    Calendar,
    Era,
    Event,
    EventVisibility,
    Month,
    Moon,
    RecurrenceType,
    Season,
    Weekday,
)


class MockCalendarRepository:
    """
    In-memory mock repository implementing CalendarRepositoryProtocol.

    Used for component tests - no real database needed. Stored objects are
    copies, so callers only see changes that went through the repository.
    """

    def __init__(self):
        self._calendars: Dict[str, Calendar] = {}
        self._months: Dict[str, List[Month]] = {}
        self._weekdays: Dict[str, List[Weekday]] = {}
        self._moons: Dict[str, List[Moon]] = {}
        self._seasons: Dict[str, List[Season]] = {}
        self._eras: Dict[str, List[Era]] = {}
        self._events: Dict[str, Event] = {}
        self._next_row_id = 1
        self._should_fail = False
        self._fail_message = ""
        self.apply_import_calls = 0

    def set_failure(self, message: str = "Mock failure"):
        """Configure mock to fail on next operation"""
        self._should_fail = True
        self._fail_message = message

    def _check_failure(self):
        if self._should_fail:
            self._should_fail = False
            raise Exception(self._fail_message)

    def _rows(self, calendar_id: str, items: list) -> list:
        rows = []
        for item in items:
            rows.append(item.model_copy(update={"id": self._next_row_id, "calendar_id": calendar_id}))
            self._next_row_id += 1
        return rows

    @staticmethod
    def _visible(event: Event, role: int) -> bool:
        return event.visibility != EventVisibility.DM_ONLY or role >= OWNER_ROLE

    @staticmethod
    def _recurs_yearly(event: Event) -> bool:
        return event.is_recurring and event.recurrence_type == RecurrenceType.YEARLY

    # Calendar CRUD

    async def create_calendar(self, calendar: Calendar) -> Calendar:
        self._check_failure()
        stored = calendar.model_copy(update={"months": [], "weekdays": [], "moons": [], "seasons": [], "eras": []})
        self._calendars[calendar.id] = stored
        return stored.model_copy()

    async def get_calendar_by_campaign(self, campaign_id: str) -> Optional[Calendar]:
        self._check_failure()
        for calendar in self._calendars.values():
            if calendar.campaign_id == campaign_id:
                return calendar.model_copy()
        return None

    async def get_calendar(self, calendar_id: str) -> Optional[Calendar]:
        self._check_failure()
        calendar = self._calendars.get(calendar_id)
        return calendar.model_copy() if calendar else None

    async def update_calendar(self, calendar: Calendar) -> None:
        self._check_failure()
        self._calendars[calendar.id] = calendar.model_copy(
            update={"months": [], "weekdays": [], "moons": [], "seasons": [], "eras": []}
        )

    async def delete_calendar(self, calendar_id: str) -> None:
        self._check_failure()
        self._calendars.pop(calendar_id, None)
        for store in (self._months, self._weekdays, self._moons, self._seasons, self._eras):
            store.pop(calendar_id, None)
        self._events = {k: e for k, e in self._events.items() if e.calendar_id != calendar_id}

    # Sub-resources

    async def set_months(self, calendar_id: str, months: List[Month]) -> None:
        self._check_failure()
        self._months[calendar_id] = self._rows(calendar_id, months)

    async def get_months(self, calendar_id: str) -> List[Month]:
        self._check_failure()
        return sorted(self._months.get(calendar_id, []), key=lambda m: m.sort_order)

    async def set_weekdays(self, calendar_id: str, weekdays: List[Weekday]) -> None:
        self._check_failure()
        self._weekdays[calendar_id] = self._rows(calendar_id, weekdays)

    async def get_weekdays(self, calendar_id: str) -> List[Weekday]:
        self._check_failure()
        return sorted(self._weekdays.get(calendar_id, []), key=lambda w: w.sort_order)

    async def set_moons(self, calendar_id: str, moons: List[Moon]) -> None:
        self._check_failure()
        self._moons[calendar_id] = self._rows(calendar_id, moons)

    async def get_moons(self, calendar_id: str) -> List[Moon]:
        self._check_failure()
        return list(self._moons.get(calendar_id, []))

    async def set_seasons(self, calendar_id: str, seasons: List[Season]) -> None:
        self._check_failure()
        self._seasons[calendar_id] = self._rows(calendar_id, seasons)

    async def get_seasons(self, calendar_id: str) -> List[Season]:
        self._check_failure()
        return list(self._seasons.get(calendar_id, []))

    async def set_eras(self, calendar_id: str, eras: List[Era]) -> None:
        self._check_failure()
        self._eras[calendar_id] = self._rows(calendar_id, eras)

    async def get_eras(self, calendar_id: str) -> List[Era]:
        self._check_failure()
        return sorted(self._eras.get(calendar_id, []), key=lambda e: e.sort_order)

    async def apply_import(
        self,
        calendar: Calendar,
        months: Optional[List[Month]],
        weekdays: Optional[List[Weekday]],
        moons: List[Moon],
        seasons: List[Season],
        eras: List[Era],
    ) -> None:
        self._check_failure()
        self.apply_import_calls += 1
        await self.update_calendar(calendar)
        if months is not None:
            self._months[calendar.id] = self._rows(calendar.id, months)
        if weekdays is not None:
            self._weekdays[calendar.id] = self._rows(calendar.id, weekdays)
        self._moons[calendar.id] = self._rows(calendar.id, moons)
        self._seasons[calendar.id] = self._rows(calendar.id, seasons)
        self._eras[calendar.id] = self._rows(calendar.id, eras)

    # Events

    async def create_event(self, event: Event) -> None:
        self._check_failure()
        self._events[event.id] = event.model_copy()

    async def get_event(self, event_id: str) -> Optional[Event]:
        self._check_failure()
        event = self._events.get(event_id)
        return event.model_copy() if event else None

    async def update_event(self, event: Event) -> None:
        self._check_failure()
        self._events[event.id] = event.model_copy()

    async def delete_event(self, event_id: str) -> None:
        self._check_failure()
        self._events.pop(event_id, None)

    async def list_events_for_month(
        self, calendar_id: str, year: int, month: int, role: int
    ) -> List[Event]:
        self._check_failure()
        return [
            e for e in self._events.values()
            if e.calendar_id == calendar_id
            and self._visible(e, role)
            and e.month == month
            and (e.year == year or self._recurs_yearly(e))
        ]

    async def list_events_for_year(self, calendar_id: str, year: int, role: int) -> List[Event]:
        self._check_failure()
        return [
            e for e in self._events.values()
            if e.calendar_id == calendar_id
            and self._visible(e, role)
            and (e.year == year or self._recurs_yearly(e))
        ]

    async def list_events_for_entity(self, entity_id: str, role: int) -> List[Event]:
        self._check_failure()
        return [
            e for e in self._events.values()
            if e.entity_id == entity_id and self._visible(e, role)
        ]

    async def list_upcoming_events(
        self,
        calendar_id: str,
        year: int,
        month: int,
        day: int,
        role: int,
        limit: int,
    ) -> List[Event]:
        self._check_failure()
        upcoming = [
            e for e in self._events.values()
            if e.calendar_id == calendar_id
            and self._visible(e, role)
            and (e.year, e.month, e.day) >= (year, month, day)
        ]
        upcoming.sort(key=lambda e: (e.year, e.month, e.day))
        return upcoming[:limit]
