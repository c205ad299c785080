#!/usr/bin/env python3
"""Calendar service configuration

Operational limits for the calendar service. The advance and import
limits mirror what the HTTP layer accepts so the service rejects the same
inputs when it is driven directly.
"""
import os
from dataclasses import dataclass, field

from .logging_config import LoggingConfig


def _int(val: str, default: int) -> int:
    try:
        return int(val) if val else default
    except ValueError:
        return default


@dataclass
class CalendarServiceConfig:
    """Calendar service settings"""
    service_name: str = "calendar_service"

    # Date/time advancement bounds
    max_advance_days: int = 3650
    max_advance_hours: int = 87600  # ~10 years of 24-hour days

    # Import payload cap (bytes)
    max_import_bytes: int = 10 * 1024 * 1024

    # Upcoming events listing
    upcoming_events_default: int = 5
    upcoming_events_max: int = 20

    default_era_color: str = "#6366f1"

    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls) -> 'CalendarServiceConfig':
        """Load calendar service configuration from environment variables"""
        return cls(
            service_name=os.getenv("SERVICE_NAME", "calendar_service"),
            max_advance_days=_int(os.getenv("CALENDAR_MAX_ADVANCE_DAYS", ""), 3650),
            max_advance_hours=_int(os.getenv("CALENDAR_MAX_ADVANCE_HOURS", ""), 87600),
            max_import_bytes=_int(os.getenv("CALENDAR_MAX_IMPORT_BYTES", ""), 10 * 1024 * 1024),
            upcoming_events_default=_int(os.getenv("CALENDAR_UPCOMING_DEFAULT", ""), 5),
            upcoming_events_max=_int(os.getenv("CALENDAR_UPCOMING_MAX", ""), 20),
            default_era_color=os.getenv("CALENDAR_DEFAULT_ERA_COLOR", "#6366f1"),
            logging=LoggingConfig.from_env(),
        )
