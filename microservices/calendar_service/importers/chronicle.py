"""
Chronicle native format adapter.

The document is already canonical, so this is a structural copy back
into the import models.
"""

import logging

from pydantic import ValidationError

from ..exporter import ChronicleExport
from ..models import Era, ImportFormat, ImportResult, Month, Moon, Season, Weekday
from ..protocols import CalendarImportError
from .helpers import DEFAULT_CALENDAR_NAME, RawPayload, load_json_object, make_settings

logger = logging.getLogger(__name__)


def parse_chronicle(data: RawPayload) -> ImportResult:
    """Convert a chronicle-calendar-v1 export back into an ImportResult"""
    raw = load_json_object(data, ImportFormat.CHRONICLE)
    try:
        doc = ChronicleExport.model_validate(raw)
    except ValidationError as e:
        raise CalendarImportError(
            f"parse chronicle JSON: {e}", format_name=ImportFormat.CHRONICLE.value
        ) from e

    cal = doc.calendar
    result = ImportResult(
        format=ImportFormat.CHRONICLE,
        calendar_name=cal.name or DEFAULT_CALENDAR_NAME,
        months=[Month.model_validate(m.model_dump()) for m in cal.months],
        weekdays=[Weekday.model_validate(w.model_dump()) for w in cal.weekdays],
        moons=[Moon.model_validate(m.model_dump()) for m in cal.moons],
        seasons=[Season.model_validate(s.model_dump()) for s in cal.seasons],
        eras=[Era.model_validate(e.model_dump()) for e in cal.eras],
        settings=make_settings(
            current_year=cal.current_year,
            hours_per_day=cal.hours_per_day,
            minutes_per_hour=cal.minutes_per_hour,
            seconds_per_minute=cal.seconds_per_minute,
            epoch_name=cal.epoch_name,
            leap_year_every=cal.leap_year_every,
            leap_year_offset=cal.leap_year_offset,
        ),
    )
    logger.debug(f"Parsed chronicle calendar '{result.calendar_name}': {result.summary()}")
    return result
