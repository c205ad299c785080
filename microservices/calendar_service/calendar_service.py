"""
Calendar Service - Business Logic

Campaign calendar business logic: calendar lifecycle, sub-resource
replacement, events, date/time advancement, import and export.

Uses dependency injection for testability.
- Repository is injected, not created at import time
- Event bus is optional; publishing never fails an operation
"""

import logging
import math
import uuid
from datetime import datetime, timezone
from typing import Awaitable, List, Optional, TypeVar, Union

from core.config import CalendarServiceConfig, get_settings

from . import advancer
from .events.models import CalendarEventType
from .events.publishers import CalendarEventPublisher
from .exporter import ChronicleExport, build_export
from .importers import detect_and_parse
from .models import (
    OWNER_ROLE,
    Calendar,
    CalendarMode,
    CreateCalendarRequest,
    Era,
    Event,
    EventCreateRequest,
    EventUpdateRequest,
    EventVisibility,
    ImportResult,
    Month,
    Moon,
    Season,
    UpdateCalendarRequest,
    Weekday,
)
from .protocols import (
    CalendarEventNotFoundError,
    CalendarNotFoundError,
    CalendarRepositoryError,
    CalendarRepositoryProtocol,
    CalendarServiceError,
    CalendarValidationError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_CALENDAR_NAME = "Campaign Calendar"
REAL_LIFE_CALENDAR_NAME = "Session Calendar"
REAL_LIFE_EPOCH = "AD"
GREGORIAN_LEAP_INTERVAL = 4
MAX_MONTH_DAYS = 400

# (name, days, leap_year_days)
GREGORIAN_MONTHS = [
    ("January", 31, 0),
    ("February", 28, 1),
    ("March", 31, 0),
    ("April", 30, 0),
    ("May", 31, 0),
    ("June", 30, 0),
    ("July", 31, 0),
    ("August", 31, 0),
    ("September", 30, 0),
    ("October", 31, 0),
    ("November", 30, 0),
    ("December", 31, 0),
]
GREGORIAN_WEEKDAYS = [
    "Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday",
]
FANTASY_MONTH_COUNT = 12
FANTASY_MONTH_DAYS = 30
FANTASY_WEEK_LENGTH = 7


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CalendarService:
    """
    Calendar service business logic

    Handles all business operations while delegating
    data access to the repository layer.
    """

    def __init__(
        self,
        repository: Optional[CalendarRepositoryProtocol] = None,
        event_bus=None,
        config: Optional[CalendarServiceConfig] = None,
    ):
        """
        Initialize service with injected dependencies.

        Args:
            repository: Repository (inject mock for testing)
            event_bus: Event bus for publishing events
            config: Service limits (global settings if None)
        """
        self.repo = repository
        self.event_bus = event_bus
        self.config = config or get_settings()
        self.publisher = CalendarEventPublisher(event_bus, source=self.config.service_name)

    async def _repo_call(self, action: str, call: Awaitable[T]) -> T:
        """Await a repository call, wrapping unexpected failures"""
        try:
            return await call
        except CalendarServiceError:
            raise
        except Exception as e:
            logger.error(f"Failed to {action}: {e}")
            raise CalendarRepositoryError(f"failed to {action}: {e}") from e

    # ====================
    # Calendar Lifecycle
    # ====================

    async def create_calendar(
        self,
        campaign_id: str,
        request: CreateCalendarRequest,
        seed_defaults: bool = True,
    ) -> Calendar:
        """
        创建日历

        One calendar per campaign. With seed_defaults, real-life calendars
        get Gregorian months/weekdays set to today's date and fantasy
        calendars get twelve 30-day months and a 7-day week.
        """
        existing = await self._repo_call(
            "check existing calendar", self.repo.get_calendar_by_campaign(campaign_id)
        )
        if existing:
            logger.warning(f"Campaign {campaign_id} already has calendar {existing.id}")
            raise CalendarValidationError("campaign already has a calendar")

        mode = CalendarMode.REAL_LIFE if request.mode == CalendarMode.REAL_LIFE.value else CalendarMode.FANTASY
        name = request.name.strip() or DEFAULT_CALENDAR_NAME
        now = _utcnow()

        calendar = Calendar(
            id=str(uuid.uuid4()),
            campaign_id=campaign_id,
            mode=mode,
            name=name,
            description=request.description,
            epoch_name=request.epoch_name,
            current_year=request.current_year or 1,
            hours_per_day=request.hours_per_day if request.hours_per_day > 0 else 24,
            minutes_per_hour=request.minutes_per_hour if request.minutes_per_hour > 0 else 60,
            seconds_per_minute=request.seconds_per_minute if request.seconds_per_minute > 0 else 60,
            leap_year_every=request.leap_year_every,
            leap_year_offset=request.leap_year_offset,
            created_at=now,
            updated_at=now,
        )

        if seed_defaults and mode == CalendarMode.REAL_LIFE:
            calendar.leap_year_every = GREGORIAN_LEAP_INTERVAL
            calendar.leap_year_offset = 0
            calendar.epoch_name = REAL_LIFE_EPOCH
            if name == DEFAULT_CALENDAR_NAME:
                calendar.name = REAL_LIFE_CALENDAR_NAME
            # Real-life calendars track the wall clock
            calendar.current_year = now.year
            calendar.current_month = now.month
            calendar.current_day = now.day
            calendar.current_hour = now.hour
            calendar.current_minute = now.minute

        created = await self._repo_call("create calendar", self.repo.create_calendar(calendar))
        calendar = created or calendar

        if seed_defaults:
            months, weekdays = self._default_structure(mode)
            await self._repo_call("seed months", self.repo.set_months(calendar.id, months))
            await self._repo_call("seed weekdays", self.repo.set_weekdays(calendar.id, weekdays))
            calendar.months = months
            calendar.weekdays = weekdays

        logger.info(f"Created {mode.value} calendar {calendar.id} for campaign {campaign_id}")
        await self.publisher.publish_calendar_created(calendar)
        return calendar

    @staticmethod
    def _default_structure(mode: CalendarMode):
        if mode == CalendarMode.REAL_LIFE:
            months = [
                Month(name=name, days=days, sort_order=i, leap_year_days=leap)
                for i, (name, days, leap) in enumerate(GREGORIAN_MONTHS)
            ]
            weekdays = [Weekday(name=name, sort_order=i) for i, name in enumerate(GREGORIAN_WEEKDAYS)]
        else:
            months = [
                Month(name=f"Month {i + 1}", days=FANTASY_MONTH_DAYS, sort_order=i)
                for i in range(FANTASY_MONTH_COUNT)
            ]
            weekdays = [
                Weekday(name=f"Day {i + 1}", sort_order=i) for i in range(FANTASY_WEEK_LENGTH)
            ]
        return months, weekdays

    async def _hydrate(self, calendar: Calendar) -> Calendar:
        calendar.months = await self._repo_call("get months", self.repo.get_months(calendar.id))
        calendar.weekdays = await self._repo_call("get weekdays", self.repo.get_weekdays(calendar.id))
        calendar.moons = await self._repo_call("get moons", self.repo.get_moons(calendar.id))
        calendar.seasons = await self._repo_call("get seasons", self.repo.get_seasons(calendar.id))
        calendar.eras = await self._repo_call("get eras", self.repo.get_eras(calendar.id))
        return calendar

    async def get_calendar(self, campaign_id: str) -> Optional[Calendar]:
        """获取战役日历 (with all sub-resources), None if the campaign has none"""
        calendar = await self._repo_call(
            "get calendar", self.repo.get_calendar_by_campaign(campaign_id)
        )
        if not calendar:
            return None
        return await self._hydrate(calendar)

    async def get_calendar_by_id(self, calendar_id: str) -> Optional[Calendar]:
        calendar = await self._repo_call("get calendar", self.repo.get_calendar(calendar_id))
        if not calendar:
            return None
        return await self._hydrate(calendar)

    async def _require_calendar(self, calendar_id: str, hydrate: bool = False) -> Calendar:
        calendar = await self._repo_call("get calendar", self.repo.get_calendar(calendar_id))
        if not calendar:
            raise CalendarNotFoundError(f"calendar not found: {calendar_id}")
        if hydrate:
            return await self._hydrate(calendar)
        return calendar

    async def update_calendar(self, calendar_id: str, request: UpdateCalendarRequest) -> Calendar:
        """更新日历设置 and the current date/time"""
        calendar = await self._require_calendar(calendar_id)
        if not request.name.strip():
            raise CalendarValidationError("calendar name is required", field="name")

        for field, value in request.model_dump().items():
            setattr(calendar, field, value)
        calendar.updated_at = _utcnow()

        await self._repo_call("update calendar", self.repo.update_calendar(calendar))
        logger.info(f"Updated calendar {calendar_id}")
        await self.publisher.publish_calendar_updated(calendar, ["settings"])
        return calendar

    async def delete_calendar(self, calendar_id: str) -> None:
        """删除日历 and everything under it"""
        calendar = await self._require_calendar(calendar_id)
        await self._repo_call("delete calendar", self.repo.delete_calendar(calendar_id))
        logger.info(f"Deleted calendar {calendar_id}")
        await self.publisher.publish_calendar_deleted(calendar)

    # ====================
    # Sub-resources (validate, then replace wholesale)
    # ====================

    @staticmethod
    def _validate_months(months: List[Month]) -> List[Month]:
        if not months:
            raise CalendarValidationError("calendar must have at least one month", field="months")
        for i, m in enumerate(months):
            if not m.name.strip():
                raise CalendarValidationError(f"month {i + 1}: name is required", field="months")
            if m.days < 1 or m.days > MAX_MONTH_DAYS:
                raise CalendarValidationError(
                    f"month {m.name!r}: days must be between 1 and {MAX_MONTH_DAYS}", field="months"
                )
            if m.leap_year_days < 0:
                raise CalendarValidationError(
                    f"month {m.name!r}: leap_year_days cannot be negative", field="months"
                )
        return [m.model_copy(update={"sort_order": i}) for i, m in enumerate(months)]

    @staticmethod
    def _validate_weekdays(weekdays: List[Weekday]) -> List[Weekday]:
        if not weekdays:
            raise CalendarValidationError("calendar must have at least one weekday", field="weekdays")
        for i, w in enumerate(weekdays):
            if not w.name.strip():
                raise CalendarValidationError(f"weekday {i + 1}: name is required", field="weekdays")
        return [w.model_copy(update={"sort_order": i}) for i, w in enumerate(weekdays)]

    @staticmethod
    def _validate_moons(moons: List[Moon]) -> List[Moon]:
        for i, m in enumerate(moons):
            if not m.name.strip():
                raise CalendarValidationError(f"moon {i + 1}: name is required", field="moons")
            if not math.isfinite(m.cycle_days) or m.cycle_days <= 0:
                raise CalendarValidationError(
                    f"moon {m.name!r}: cycle_days must be a positive number", field="moons"
                )
            if not math.isfinite(m.phase_offset):
                raise CalendarValidationError(
                    f"moon {m.name!r}: phase_offset must be a finite number", field="moons"
                )
        return list(moons)

    @staticmethod
    def _validate_seasons(seasons: List[Season]) -> List[Season]:
        for i, s in enumerate(seasons):
            if not s.name.strip():
                raise CalendarValidationError(f"season {i + 1}: name is required", field="seasons")
        return list(seasons)

    def _validate_eras(self, eras: List[Era]) -> List[Era]:
        validated = []
        for i, e in enumerate(eras):
            if not e.name.strip():
                raise CalendarValidationError(f"era {i + 1}: name is required", field="eras")
            if e.end_year is not None and e.end_year < e.start_year:
                raise CalendarValidationError(
                    f"era {e.name!r}: end year cannot be before start year", field="eras"
                )
            validated.append(
                e.model_copy(
                    update={"sort_order": i, "color": e.color.strip() or self.config.default_era_color}
                )
            )
        return validated

    async def set_months(self, calendar_id: str, months: List[Month]) -> List[Month]:
        """Replace all months; sort_order follows list position"""
        months = self._validate_months(months)
        await self._repo_call("set months", self.repo.set_months(calendar_id, months))
        logger.info(f"Set {len(months)} months on calendar {calendar_id}")
        return months

    async def set_weekdays(self, calendar_id: str, weekdays: List[Weekday]) -> List[Weekday]:
        weekdays = self._validate_weekdays(weekdays)
        await self._repo_call("set weekdays", self.repo.set_weekdays(calendar_id, weekdays))
        return weekdays

    async def set_moons(self, calendar_id: str, moons: List[Moon]) -> List[Moon]:
        moons = self._validate_moons(moons)
        await self._repo_call("set moons", self.repo.set_moons(calendar_id, moons))
        return moons

    async def set_seasons(self, calendar_id: str, seasons: List[Season]) -> List[Season]:
        seasons = self._validate_seasons(seasons)
        await self._repo_call("set seasons", self.repo.set_seasons(calendar_id, seasons))
        return seasons

    async def set_eras(self, calendar_id: str, eras: List[Era]) -> List[Era]:
        """Replace all eras; a blank colour gets the default era colour"""
        eras = self._validate_eras(eras)
        await self._repo_call("set eras", self.repo.set_eras(calendar_id, eras))
        return eras

    # ====================
    # Events
    # ====================

    @staticmethod
    def _validate_event(name: str, visibility: Optional[str]) -> EventVisibility:
        if not name.strip():
            raise CalendarValidationError("event name is required", field="name")
        try:
            return EventVisibility(visibility or EventVisibility.EVERYONE.value)
        except ValueError:
            raise CalendarValidationError(
                "visibility must be 'everyone' or 'dm_only'", field="visibility"
            ) from None

    async def create_event(self, calendar_id: str, request: EventCreateRequest) -> Event:
        """创建日历事件"""
        visibility = self._validate_event(request.name, request.visibility)
        await self._require_calendar(calendar_id)

        now = _utcnow()
        event = Event(
            id=str(uuid.uuid4()),
            calendar_id=calendar_id,
            **request.model_dump(exclude={"visibility"}),
            visibility=visibility,
            created_at=now,
            updated_at=now,
        )
        await self._repo_call("create event", self.repo.create_event(event))
        logger.info(f"Created event {event.id} on calendar {calendar_id}")
        await self.publisher.publish_entry(CalendarEventType.EVENT_CREATED, event)
        return event

    async def get_event(self, event_id: str) -> Event:
        """获取事件详情"""
        event = await self._repo_call("get event", self.repo.get_event(event_id))
        if not event:
            raise CalendarEventNotFoundError(f"event not found: {event_id}")
        return event

    async def update_event(self, event_id: str, request: EventUpdateRequest) -> Event:
        """更新事件"""
        visibility = self._validate_event(request.name, request.visibility)
        event = await self.get_event(event_id)

        updated = event.model_copy(
            update={
                **request.model_dump(exclude={"visibility"}),
                "visibility": visibility,
                "updated_at": _utcnow(),
            }
        )
        await self._repo_call("update event", self.repo.update_event(updated))
        await self.publisher.publish_entry(CalendarEventType.EVENT_UPDATED, updated)
        return updated

    async def delete_event(self, event_id: str) -> None:
        """删除事件"""
        event = await self.get_event(event_id)
        await self._repo_call("delete event", self.repo.delete_event(event_id))
        logger.info(f"Deleted event {event_id}")
        await self.publisher.publish_entry(CalendarEventType.EVENT_DELETED, event)

    async def list_events_for_month(
        self, calendar_id: str, year: int, month: int, role: int
    ) -> List[Event]:
        return await self._repo_call(
            "list events for month",
            self.repo.list_events_for_month(calendar_id, year, month, role),
        )

    async def list_events_for_year(self, calendar_id: str, year: int, role: int) -> List[Event]:
        return await self._repo_call(
            "list events for year", self.repo.list_events_for_year(calendar_id, year, role)
        )

    async def list_events_for_entity(self, entity_id: str, role: int) -> List[Event]:
        return await self._repo_call(
            "list events for entity", self.repo.list_events_for_entity(entity_id, role)
        )

    async def list_upcoming_events(
        self, calendar_id: str, role: int, limit: Optional[int] = None
    ) -> List[Event]:
        """
        获取即将到来的事件 from the calendar's current date.

        A missing or non-positive limit uses the default; larger limits are
        capped. An unknown calendar has no upcoming events.
        """
        calendar = await self._repo_call("get calendar", self.repo.get_calendar(calendar_id))
        if not calendar:
            return []
        if limit is None or limit < 1:
            limit = self.config.upcoming_events_default
        limit = min(limit, self.config.upcoming_events_max)
        return await self._repo_call(
            "list upcoming events",
            self.repo.list_upcoming_events(
                calendar_id,
                calendar.current_year,
                calendar.current_month,
                calendar.current_day,
                role,
                limit,
            ),
        )

    async def list_all_events(self, calendar_id: str) -> List[Event]:
        """Every event of the current year, including dm_only ones"""
        calendar = await self._repo_call("get calendar", self.repo.get_calendar(calendar_id))
        if not calendar:
            return []
        return await self._repo_call(
            "list all events",
            self.repo.list_events_for_year(calendar_id, calendar.current_year, OWNER_ROLE),
        )

    # ====================
    # Date / Time Advancement
    # ====================

    async def _load_for_advance(self, calendar_id: str) -> Calendar:
        calendar = await self._require_calendar(calendar_id)
        calendar.months = await self._repo_call("get months", self.repo.get_months(calendar_id))
        if not calendar.months:
            raise CalendarValidationError("calendar has no months configured")
        return calendar

    async def _save_advanced(self, calendar: Calendar) -> Calendar:
        calendar.updated_at = _utcnow()
        await self._repo_call("update calendar", self.repo.update_calendar(calendar))
        logger.info(
            f"Calendar {calendar.id} now at {calendar.current_year}-"
            f"{calendar.current_month}-{calendar.current_day} {calendar.format_current_time()}"
        )
        await self.publisher.publish_date_advanced(calendar)
        return calendar

    async def advance_date(self, calendar_id: str, days: int) -> Calendar:
        """Move the current date forward, rolling over months and years"""
        if days < 1 or days > self.config.max_advance_days:
            raise CalendarValidationError(
                f"days must be between 1 and {self.config.max_advance_days}", field="days"
            )
        calendar = await self._load_for_advance(calendar_id)
        advancer.advance_date(calendar, days)
        return await self._save_advanced(calendar)

    async def advance_time(self, calendar_id: str, hours: int, minutes: int) -> Calendar:
        """Move the current time forward, carrying into days as needed"""
        if hours < 0 or minutes < 0:
            raise CalendarValidationError("hours and minutes must be non-negative")
        if hours == 0 and minutes == 0:
            raise CalendarValidationError("must advance by at least 1 minute or 1 hour")
        if hours > self.config.max_advance_hours:
            raise CalendarValidationError(
                f"hours cannot exceed {self.config.max_advance_hours}", field="hours"
            )
        calendar = await self._load_for_advance(calendar_id)
        advancer.advance_time(calendar, hours, minutes)
        return await self._save_advanced(calendar)

    # ====================
    # Import / Export
    # ====================

    def preview_import(self, data: Union[bytes, str]) -> ImportResult:
        """
        Detect and parse an import payload without writing anything.

        Raises:
            CalendarValidationError: payload larger than the import cap
            UnrecognizedFormatError: no supported format matched
            CalendarImportError: the payload could not be decoded
        """
        size = len(data.encode("utf-8")) if isinstance(data, str) else len(data)
        if size > self.config.max_import_bytes:
            raise CalendarValidationError(
                f"import file too large ({size} bytes, max {self.config.max_import_bytes})",
                field="file",
            )
        result = detect_and_parse(data)
        logger.info(f"Parsed {result.format.value} import: {result.summary()}")
        return result

    async def apply_import(self, calendar_id: str, result: ImportResult) -> Calendar:
        """
        Replace a calendar's configuration with imported data.

        Destructive: moons, seasons and eras are always replaced; months and
        weekdays only when the import has some. The current date resets to
        the first day of the (imported) year. Everything is validated before
        the single repository write.
        """
        calendar = await self._require_calendar(calendar_id)

        months = self._validate_months(result.months) if result.months else None
        weekdays = self._validate_weekdays(result.weekdays) if result.weekdays else None
        moons = self._validate_moons(result.moons)
        seasons = self._validate_seasons(result.seasons)
        eras = self._validate_eras(result.eras)

        settings = result.settings
        if result.calendar_name:
            calendar.name = result.calendar_name
        calendar.epoch_name = settings.epoch_name
        if settings.current_year != 0:
            calendar.current_year = settings.current_year
        calendar.current_month = 1
        calendar.current_day = 1
        calendar.hours_per_day = settings.hours_per_day
        calendar.minutes_per_hour = settings.minutes_per_hour
        calendar.seconds_per_minute = settings.seconds_per_minute
        calendar.leap_year_every = settings.leap_year_every
        calendar.leap_year_offset = settings.leap_year_offset
        calendar.updated_at = _utcnow()

        await self._repo_call(
            "apply import",
            self.repo.apply_import(calendar, months, weekdays, moons, seasons, eras),
        )
        logger.info(f"Applied {result.format.value} import to calendar {calendar_id}")
        await self.publisher.publish_calendar_imported(calendar, result)
        return await self._hydrate(calendar)

    async def import_calendar(self, calendar_id: str, data: Union[bytes, str]) -> ImportResult:
        """Parse an import payload and apply it to the calendar"""
        result = self.preview_import(data)
        await self.apply_import(calendar_id, result)
        return result

    async def export_calendar(
        self, calendar_id: str, include_events: bool = False
    ) -> ChronicleExport:
        """Build the chronicle-calendar-v1 export of a calendar"""
        calendar = await self._require_calendar(calendar_id, hydrate=True)
        events = await self.list_all_events(calendar_id) if include_events else None
        return build_export(calendar, events, include_events=include_events)


__all__ = ["CalendarService"]
