"""
Component Test Mocks

Shared mock implementations for component testing.

Service-specific mocks live in tests/component/golden/{service}/mocks.py
"""

from .event_bus_mock import MockEventBus

__all__ = [
    'MockEventBus',
]
