"""
Calendar Service - Data Contract

Test data factory and request builders for the campaign calendar service,
plus raw import payloads for every supported calendar file format.

Usage:
    from tests.contracts.calendar.data_contract import CalendarTestDataFactory

    calendar = CalendarTestDataFactory.make_calendar(month_days=[30, 30])
    payload = CalendarTestDataFactory.make_simple_calendar_v2_payload()
"""

import json
import secrets
import uuid
from typing import Any, Dict, List, Optional

from microservices.calendar_service.models import (
    Calendar,
    CalendarMode,
    CreateCalendarRequest,
    Era,
    Event,
    EventCreateRequest,
    EventUpdateRequest,
    EventVisibility,
    Month,
    Moon,
    Season,
    Weekday,
)


class CalendarTestDataFactory:
    """
    Test data factory for calendar_service.

    Every method is static; ids are random so tests never collide.
    """

    # ========================================================================
    # IDs
    # ========================================================================

    @staticmethod
    def make_calendar_id() -> str:
        return str(uuid.uuid4())

    @staticmethod
    def make_campaign_id() -> str:
        return f"camp_{secrets.token_hex(6)}"

    @staticmethod
    def make_event_id() -> str:
        return str(uuid.uuid4())

    @staticmethod
    def make_entity_id() -> str:
        return f"ent_{secrets.token_hex(6)}"

    @staticmethod
    def make_user_id() -> str:
        return f"user_{secrets.token_hex(6)}"

    # ========================================================================
    # Sub-resources
    # ========================================================================

    @staticmethod
    def make_months(
        days: Optional[List[int]] = None,
        leap_days: Optional[List[int]] = None,
    ) -> List[Month]:
        """Months named 'Month N' with the given lengths (default 12 x 30)"""
        days = days or [30] * 12
        leap_days = leap_days or [0] * len(days)
        return [
            Month(name=f"Month {i + 1}", days=d, sort_order=i, leap_year_days=leap)
            for i, (d, leap) in enumerate(zip(days, leap_days))
        ]

    @staticmethod
    def make_gregorian_months() -> List[Month]:
        names = [
            "January", "February", "March", "April", "May", "June",
            "July", "August", "September", "October", "November", "December",
        ]
        days = [31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]
        return [
            Month(name=n, days=d, sort_order=i, leap_year_days=1 if n == "February" else 0)
            for i, (n, d) in enumerate(zip(names, days))
        ]

    @staticmethod
    def make_weekdays(count: int = 7) -> List[Weekday]:
        return [Weekday(name=f"Day {i + 1}", sort_order=i) for i in range(count)]

    @staticmethod
    def make_moon(cycle_days: float = 30.0, phase_offset: float = 0.0, name: str = "Selune") -> Moon:
        return Moon(name=name, cycle_days=cycle_days, phase_offset=phase_offset, color="#c0c0c0")

    @staticmethod
    def make_season(
        name: str = "Winter",
        start: tuple = (11, 1),
        end: tuple = (2, 28),
    ) -> Season:
        return Season(
            name=name,
            start_month=start[0],
            start_day=start[1],
            end_month=end[0],
            end_day=end[1],
        )

    @staticmethod
    def make_era(
        name: str = "Age of Humanity",
        start_year: int = 1,
        end_year: Optional[int] = None,
    ) -> Era:
        return Era(name=name, start_year=start_year, end_year=end_year)

    # ========================================================================
    # Calendars
    # ========================================================================

    @staticmethod
    def make_calendar(
        month_days: Optional[List[int]] = None,
        leap_days: Optional[List[int]] = None,
        weekday_count: int = 7,
        **overrides: Any,
    ) -> Calendar:
        """A hydrated fantasy calendar; overrides set any Calendar field"""
        fields: Dict[str, Any] = {
            "id": CalendarTestDataFactory.make_calendar_id(),
            "campaign_id": CalendarTestDataFactory.make_campaign_id(),
            "mode": CalendarMode.FANTASY,
            "name": "Calendar of Harptos",
            "months": CalendarTestDataFactory.make_months(month_days, leap_days),
            "weekdays": CalendarTestDataFactory.make_weekdays(weekday_count),
        }
        fields.update(overrides)
        return Calendar(**fields)

    @staticmethod
    def make_full_calendar() -> Calendar:
        """Calendar with every kind of sub-resource populated"""
        return CalendarTestDataFactory.make_calendar(
            description="Forgotten Realms reckoning",
            epoch_name="DR",
            current_year=1492,
            current_month=3,
            current_day=14,
            current_hour=9,
            current_minute=30,
            leap_year_every=4,
            moons=[CalendarTestDataFactory.make_moon(cycle_days=30.4375, phase_offset=2.5)],
            seasons=[
                CalendarTestDataFactory.make_season("Winter", (11, 1), (2, 30)),
                CalendarTestDataFactory.make_season("Summer", (3, 1), (10, 30)),
            ],
            eras=[
                CalendarTestDataFactory.make_era("Dawn Age", 1, 1000),
                CalendarTestDataFactory.make_era("Age of Humanity", 1001),
            ],
        )

    @staticmethod
    def make_create_request(mode: Optional[str] = None, **overrides: Any) -> CreateCalendarRequest:
        return CreateCalendarRequest(mode=mode, **overrides)

    # ========================================================================
    # Events
    # ========================================================================

    @staticmethod
    def make_event(calendar_id: str, **overrides: Any) -> Event:
        fields: Dict[str, Any] = {
            "id": CalendarTestDataFactory.make_event_id(),
            "calendar_id": calendar_id,
            "name": "Feast of the Moon",
            "year": 1,
            "month": 1,
            "day": 1,
            "visibility": EventVisibility.EVERYONE,
        }
        fields.update(overrides)
        return Event(**fields)

    @staticmethod
    def make_event_create_request(**overrides: Any) -> EventCreateRequest:
        fields: Dict[str, Any] = {
            "name": "Council of Waterdeep",
            "description": "The lords convene",
            "year": 1,
            "month": 2,
            "day": 10,
            "created_by": CalendarTestDataFactory.make_user_id(),
        }
        fields.update(overrides)
        return EventCreateRequest(**fields)

    @staticmethod
    def make_event_update_request(**overrides: Any) -> EventUpdateRequest:
        fields: Dict[str, Any] = {
            "name": "Council of Waterdeep (postponed)",
            "year": 1,
            "month": 3,
            "day": 1,
        }
        fields.update(overrides)
        return EventUpdateRequest(**fields)

    # ========================================================================
    # Raw import payloads
    # ========================================================================

    @staticmethod
    def to_bytes(payload: Dict[str, Any]) -> bytes:
        return json.dumps(payload).encode("utf-8")

    @staticmethod
    def make_simple_calendar_months() -> List[Dict[str, Any]]:
        return [
            {"name": "Hammer", "numberOfDays": 30, "numberOfLeapYearDays": 30},
            {"name": "Midwinter", "numberOfDays": 1, "numberOfLeapYearDays": 1, "intercalary": True},
            {"name": "Alturiak", "numberOfDays": 30, "numberOfLeapYearDays": 31},
            {"name": "Ches", "numberOfDays": 30, "numberOfLeapYearDays": 30},
        ]

    @staticmethod
    def make_simple_calendar_config() -> Dict[str, Any]:
        """A Simple Calendar calendar object in the modern layout"""
        return {
            "name": "Harptos",
            "currentDate": {"year": 1492, "month": 2, "day": 4},
            "leapYear": {"rule": "custom", "customMod": 4},
            "months": CalendarTestDataFactory.make_simple_calendar_months(),
            "weekdays": [
                {"name": "FSC-CORE.Weekday.First"},
                {"name": "Second"},
                {"name": "Third"},
            ],
            "seasons": [
                {"name": "Spring", "startingMonth": 2, "startingDay": 0, "color": "46b946"},
                {"name": "Winter", "startingMonth": 0, "startingDay": 0, "color": "#ffffff"},
            ],
            "moons": [
                {"name": "Selune", "cycleLength": 30.4375, "cycleDayAdjust": 0.5, "color": "#ffffff"},
            ],
            "time": {"hoursInDay": 24, "minutesInHour": 60, "secondsInMinute": 60},
            "year": {"numericRepresentation": 1492, "prefix": "", "postfix": " DR"},
        }

    @staticmethod
    def make_simple_calendar_v2_payload() -> Dict[str, Any]:
        return {
            "exportVersion": 2,
            "calendars": [CalendarTestDataFactory.make_simple_calendar_config()],
            "notes": {},
        }

    @staticmethod
    def make_simple_calendar_v1_payload() -> Dict[str, Any]:
        return {"calendar": CalendarTestDataFactory.make_simple_calendar_config()}

    @staticmethod
    def make_simple_calendar_legacy_payload() -> Dict[str, Any]:
        """v1 export using the older *Settings keys"""
        return {
            "calendar": {
                "monthSettings": [
                    {"name": "Abadius", "numberOfDays": 31, "numberOfLeapYearDays": 31},
                    {"name": "Calistril", "numberOfDays": 28, "numberOfLeapYearDays": 29},
                ],
                "weekdaySettings": [{"name": "Moonday"}, {"name": "Toilday"}],
                "yearSettings": {"numericRepresentation": 4720, "prefix": "AR ", "postfix": ""},
                "timeSettings": {"hoursInDay": 20, "minutesInHour": 50, "secondsInMinute": 40},
                "leapYearSettings": {"rule": "gregorian", "customMod": 0},
            }
        }

    @staticmethod
    def make_calendaria_payload(wrapped: bool = False) -> Dict[str, Any]:
        """Calendaria export; wrapped puts keyed sections under 'values'"""
        months = {
            "feb": {"name": "CALENDARIA.Month.February", "ordinal": 2, "days": 28, "leapDays": 29},
            "jan": {"name": "CALENDARIA.Month.January", "ordinal": 1, "days": 31},
            "mar": {"name": "March", "ordinal": 3, "days": 31},
        }
        seasons = {
            "summer": {"name": "Summer", "color": "ffcc00", "dayStart": 60, "dayEnd": 90},
            "winter": {"name": "Winter", "color": "", "dayStart": 1, "dayEnd": 59},
        }
        eras = {
            "later": {"name": "Second Age", "abbreviation": " SA ", "startYear": 500},
            "early": {"name": "First Age", "abbreviation": "", "startYear": 0, "endYear": 499},
        }
        moons = {"luna": {"name": "Luna", "cycleLength": 29.5, "color": "#dddddd"}}

        def section(entries: Dict[str, Any]) -> Dict[str, Any]:
            return {"values": entries} if wrapped else entries

        return {
            "name": "  Golarion  ",
            "years": {"yearZero": 4700, "leapYear": {"leapStart": 2, "leapInterval": 8}},
            "leapYearConfig": {"rule": "custom", "start": 0},
            "days": {
                "values": {
                    "tue": {"name": "Tuesday", "ordinal": 2},
                    "mon": {"name": "CALENDARIA.Weekday.Monday", "ordinal": 1},
                },
                "hoursPerDay": 24,
                "minutesPerHour": 60,
                "secondsPerMinute": 60,
            },
            "months": section(months),
            "seasons": section(seasons),
            "eras": section(eras),
            "moons": section(moons),
            "festivals": section({"yule": {"name": "Yule", "month": 1, "day": 1}}),
        }

    @staticmethod
    def make_fantasy_calendar_payload() -> Dict[str, Any]:
        return {
            "name": "Exandria",
            "static_data": {
                "year_data": {
                    "first_day": 1,
                    "global_week": ["Miresen", "Grissen", "Whelsen", "Conthsen", "Folsen"],
                    "timespans": [
                        {"name": "Horisal", "type": "month", "length": 29, "interval": 1, "offset": 0},
                        {"name": "Misuthar", "type": "month", "length": 30, "interval": 1, "offset": 0},
                        {"name": "Festival", "type": "intercalary", "length": 1, "interval": 1, "offset": 0},
                        {"name": "Dualahei", "type": "month", "length": 30, "interval": 1, "offset": 0},
                    ],
                    "leap_days": [
                        {"name": "Leap Day", "timespan": 1, "interval": "400,!100,4", "offset": 0},
                    ],
                },
                "moons": [
                    {"name": "Catha", "cycle": 33, "shift": 4, "color": "#ffffff", "hidden": False},
                    {"name": "Ruidus", "cycle": 328, "shift": 0, "color": "ff0000", "hidden": True},
                ],
                "clock": {"enabled": True, "hours": 24, "minutes": 60},
                "seasons": {
                    "data": [
                        {"name": "Spring", "color": ["#00ff00", "#00aa00"]},
                        {"name": "Summer", "color": ["", ""]},
                        {"name": "Autumn", "color": ["#ff8800", "#aa5500"]},
                    ]
                },
                "eras": [
                    {"name": "Age of Arcanum", "description": "", "date": {"year": -1500}},
                    {"name": "Post-Divergence", "description": "Current age", "date": {"year": 0}},
                ],
            },
            "dynamic_data": {"year": 836, "timespan": 2, "day": 10},
        }
