#!/usr/bin/env python3
"""
Core Module for the Calendar Service

Shared infrastructure used by the calendar microservice.

COMPONENTS:
    - config/: Environment-driven configuration (dataclasses + .env files)
    - logger.py: Service logger setup

USAGE:
    from core.config import get_settings
    from core.logger import setup_service_logger

    settings = get_settings()
    logger = setup_service_logger("calendar_service")
"""

from .config import CalendarServiceConfig, LoggingConfig, get_settings
from .logger import setup_service_logger

__all__ = [
    "CalendarServiceConfig",
    "LoggingConfig",
    "get_settings",
    "setup_service_logger",
]

__version__ = "1.0.0"
