"""
Calendar Event Publishers

Publishes calendar events to the injected event bus.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

from ..models import Calendar, Event, ImportResult
from .models import (
    CalendarCreatedEventData,
    CalendarDateAdvancedEventData,
    CalendarDeletedEventData,
    CalendarEntryEventData,
    CalendarEventType,
    CalendarImportedEventData,
    CalendarUpdatedEventData,
)

logger = logging.getLogger(__name__)


class CalendarEventPublisher:
    """Publisher for calendar service events"""

    def __init__(self, event_bus=None, source: str = "calendar_service"):
        self.event_bus = event_bus
        self.source = source

    async def publish(
        self,
        event_type: CalendarEventType,
        data: Dict[str, Any],
    ) -> bool:
        """
        Publish an event to the bus.

        Args:
            event_type: The event type enum
            data: Event data payload

        Returns:
            True if published successfully, False otherwise
        """
        if not self.event_bus:
            logger.debug(f"Event bus not configured, skipping publish: {event_type.value}")
            return False

        try:
            event = {
                "event_type": event_type.value,
                "source": self.source,
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "data": data,
            }

            await self.event_bus.publish(event_type.value, event)
            logger.debug(f"Published event: {event_type.value}")
            return True

        except Exception as e:
            logger.error(f"Failed to publish event {event_type.value}: {e}")
            return False

    # ====================
    # Calendar Lifecycle Events
    # ====================

    async def publish_calendar_created(self, calendar: Calendar) -> bool:
        """Publish calendar.created event"""
        data = CalendarCreatedEventData(
            calendar_id=calendar.id,
            campaign_id=calendar.campaign_id,
            name=calendar.name,
            mode=calendar.mode.value,
            timestamp=datetime.now(timezone.utc),
        )
        return await self.publish(CalendarEventType.CREATED, data.model_dump(mode="json"))

    async def publish_calendar_updated(self, calendar: Calendar, changed: List[str]) -> bool:
        """Publish calendar.updated event"""
        data = CalendarUpdatedEventData(
            calendar_id=calendar.id,
            campaign_id=calendar.campaign_id,
            changed=changed,
            timestamp=datetime.now(timezone.utc),
        )
        return await self.publish(CalendarEventType.UPDATED, data.model_dump(mode="json"))

    async def publish_calendar_deleted(self, calendar: Calendar) -> bool:
        """Publish calendar.deleted event"""
        data = CalendarDeletedEventData(
            calendar_id=calendar.id,
            campaign_id=calendar.campaign_id,
            timestamp=datetime.now(timezone.utc),
        )
        return await self.publish(CalendarEventType.DELETED, data.model_dump(mode="json"))

    async def publish_date_advanced(self, calendar: Calendar) -> bool:
        """Publish calendar.date.advanced event"""
        data = CalendarDateAdvancedEventData(
            calendar_id=calendar.id,
            campaign_id=calendar.campaign_id,
            year=calendar.current_year,
            month=calendar.current_month,
            day=calendar.current_day,
            hour=calendar.current_hour,
            minute=calendar.current_minute,
            timestamp=datetime.now(timezone.utc),
        )
        return await self.publish(CalendarEventType.DATE_ADVANCED, data.model_dump(mode="json"))

    async def publish_calendar_imported(self, calendar: Calendar, result: ImportResult) -> bool:
        """Publish calendar.imported event"""
        data = CalendarImportedEventData(
            calendar_id=calendar.id,
            campaign_id=calendar.campaign_id,
            format=result.format.value,
            calendar_name=result.calendar_name,
            months=len(result.months),
            weekdays=len(result.weekdays),
            moons=len(result.moons),
            seasons=len(result.seasons),
            eras=len(result.eras),
            timestamp=datetime.now(timezone.utc),
        )
        return await self.publish(CalendarEventType.IMPORTED, data.model_dump(mode="json"))

    # ====================
    # Calendar Entry Events
    # ====================

    async def publish_entry(self, event_type: CalendarEventType, entry: Event) -> bool:
        """Publish calendar.event.created/updated/deleted for a calendar entry"""
        data = CalendarEntryEventData(
            calendar_id=entry.calendar_id,
            event_id=entry.id,
            name=entry.name,
            year=entry.year,
            month=entry.month,
            day=entry.day,
            visibility=entry.visibility.value,
            timestamp=datetime.now(timezone.utc),
        )
        return await self.publish(event_type, data.model_dump(mode="json"))


__all__ = ["CalendarEventPublisher"]
