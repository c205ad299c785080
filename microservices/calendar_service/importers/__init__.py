"""
Calendar Importers

Format detection plus one adapter per supported external format, each
converting a JSON document into a canonical ImportResult.
"""

from .calendaria import parse_calendaria
from .chronicle import parse_chronicle
from .detector import PARSERS, detect_and_parse, detect_format
from .fantasy_calendar import parse_fantasy_calendar
from .helpers import normalize_color, strip_localization_key
from .simple_calendar import parse_simple_calendar

__all__ = [
    "PARSERS",
    "detect_format",
    "detect_and_parse",
    "parse_chronicle",
    "parse_simple_calendar",
    "parse_calendaria",
    "parse_fantasy_calendar",
    "normalize_color",
    "strip_localization_key",
]
