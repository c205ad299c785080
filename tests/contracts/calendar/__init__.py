"""
Calendar Service Contracts

Data contract for calendar_service: test data factory and raw import payloads.
"""

from .data_contract import CalendarTestDataFactory

__all__ = ["CalendarTestDataFactory"]
