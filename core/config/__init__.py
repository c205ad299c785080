#!/usr/bin/env python3
"""Modular configuration system for the calendar service

Configuration hierarchy:
- calendar_config: Calendar service limits and defaults
- logging_config: Logging configuration
"""
import os
from dotenv import load_dotenv
from .logging_config import LoggingConfig
from .calendar_config import CalendarServiceConfig

# Load environment file based on ENV
env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
env_files = {
    "development": "deployment/environments/dev.env",
    "dev": "deployment/environments/dev.env",
    "testing": "deployment/environments/test.env",
    "test": "deployment/environments/test.env",
    "staging": "deployment/environments/staging.env",
    "production": "deployment/environments/production.env",
}
env_file = env_files.get(env, "deployment/environments/dev.env")
load_dotenv(env_file, override=False)

# Create global settings instance
settings = CalendarServiceConfig.from_env()

def get_settings() -> CalendarServiceConfig:
    """Get global settings instance"""
    return settings

def reload_settings() -> CalendarServiceConfig:
    """Reload settings from environment"""
    global settings
    settings = CalendarServiceConfig.from_env()
    return settings

__all__ = [
    'CalendarServiceConfig',
    'LoggingConfig',
    'get_settings',
    'reload_settings',
    'settings',
]
