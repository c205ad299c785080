"""
Calendar Service Factory

Factory functions for creating service instances with real dependencies.

Usage:
    from .factory import create_calendar_service
    service = create_calendar_service(repository, event_bus)
"""
from typing import Optional

from core.config import CalendarServiceConfig, get_settings
from core.logger import setup_service_logger

from .calendar_service import CalendarService
from .protocols import CalendarRepositoryProtocol


def create_calendar_service(
    repository: CalendarRepositoryProtocol,
    event_bus=None,
    config: Optional[CalendarServiceConfig] = None,
) -> CalendarService:
    """
    Create CalendarService with its logger configured.

    Args:
        repository: Storage backend implementing CalendarRepositoryProtocol
        event_bus: Event bus for publishing events (optional)
        config: Service settings (global settings if None)

    Returns:
        CalendarService instance
    """
    config = config or get_settings()
    setup_service_logger("microservices.calendar_service", config.logging)

    return CalendarService(
        repository=repository,
        event_bus=event_bus,
        config=config,
    )
