"""
Component Test Layer Configuration

Structure:
    tests/component/
    ├── golden/calendar_service/   Service tests against the in-memory repository
    └── mocks/                     Shared mock implementations

Usage:
    pytest tests/component -v
    pytest tests/component/golden -v
"""
import os
import sys
from unittest.mock import AsyncMock

import pytest

# Set testing environment BEFORE any imports
os.environ["ENV"] = "testing"
os.environ["ENVIRONMENT"] = "testing"

# Add project root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from core.config import CalendarServiceConfig
from tests.component.mocks import MockEventBus
from tests.component.golden.calendar_service.mocks import MockCalendarRepository


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Configure custom markers"""
    config.addinivalue_line(
        "markers", "component: marks tests as component tests"
    )
    config.addinivalue_line(
        "markers", "golden: characterization tests"
    )


# =============================================================================
# Event Bus Mocks
# =============================================================================

@pytest.fixture
def mock_event_bus() -> MockEventBus:
    """Recording event bus"""
    return MockEventBus()


@pytest.fixture
def async_event_bus() -> AsyncMock:
    """Bare AsyncMock event bus for call assertions"""
    return AsyncMock()


# =============================================================================
# Calendar Repository Mock
# =============================================================================

@pytest.fixture
def mock_calendar_repository() -> MockCalendarRepository:
    """Mock Calendar Repository with protocol implementation"""
    return MockCalendarRepository()


@pytest.fixture
def calendar_config() -> CalendarServiceConfig:
    """Service config with default limits"""
    return CalendarServiceConfig()
