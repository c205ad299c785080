"""
Calendar format detection.

Identifies which supported format a JSON document is by top-level key
presence, checked in a fixed priority order (first match wins), and
dispatches to the matching adapter.
"""

import logging
from typing import Any, Callable, Dict, Optional

from ..exporter import CHRONICLE_FORMAT
from ..models import ImportFormat, ImportResult
from ..protocols import UnrecognizedFormatError
from .calendaria import parse_calendaria
from .chronicle import parse_chronicle
from .fantasy_calendar import parse_fantasy_calendar
from .helpers import RawPayload, decode_json
from .simple_calendar import parse_simple_calendar

logger = logging.getLogger(__name__)

UNRECOGNIZED_FORMAT_MESSAGE = (
    "unrecognized calendar format: could not detect Chronicle, Simple Calendar, "
    "Calendaria, or Fantasy-Calendar JSON"
)

PARSERS: Dict[ImportFormat, Callable[[RawPayload], ImportResult]] = {
    ImportFormat.CHRONICLE: parse_chronicle,
    ImportFormat.SIMPLE_CALENDAR: parse_simple_calendar,
    ImportFormat.CALENDARIA: parse_calendaria,
    ImportFormat.FANTASY_CALENDAR: parse_fantasy_calendar,
}


def _as_object(data: RawPayload) -> Optional[Dict[str, Any]]:
    if isinstance(data, dict):
        return data
    try:
        decoded = decode_json(data)
    except (TypeError, ValueError):
        return None
    return decoded if isinstance(decoded, dict) else None


def _detect_object(raw: Dict[str, Any]) -> ImportFormat:
    if raw.get("format") == CHRONICLE_FORMAT:
        return ImportFormat.CHRONICLE

    if "calendar" in raw:
        return ImportFormat.SIMPLE_CALENDAR
    if "exportVersion" in raw and "calendars" in raw:
        return ImportFormat.SIMPLE_CALENDAR

    if "static_data" in raw and "dynamic_data" in raw:
        return ImportFormat.FANTASY_CALENDAR

    days = raw.get("days")
    if isinstance(days, dict) and "hoursPerDay" in days:
        return ImportFormat.CALENDARIA
    if isinstance(raw.get("months"), dict):
        return ImportFormat.CALENDARIA

    return ImportFormat.UNKNOWN


def detect_format(data: RawPayload) -> ImportFormat:
    """
    Identify the format of a calendar document.

    Invalid JSON and non-object documents are UNKNOWN.
    """
    raw = _as_object(data)
    if raw is None:
        return ImportFormat.UNKNOWN
    return _detect_object(raw)


def detect_and_parse(data: RawPayload) -> ImportResult:
    """
    Detect the format and convert the document with the matching adapter.

    Raises:
        UnrecognizedFormatError: no supported format matched
        CalendarImportError: the detected adapter could not decode it
    """
    raw = _as_object(data)
    import_format = _detect_object(raw) if raw is not None else ImportFormat.UNKNOWN
    if import_format == ImportFormat.UNKNOWN:
        raise UnrecognizedFormatError(UNRECOGNIZED_FORMAT_MESSAGE)

    logger.debug(f"Detected calendar format: {import_format.value}")
    return PARSERS[import_format](raw)
