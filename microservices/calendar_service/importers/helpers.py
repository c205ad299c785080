"""
Shared helpers for calendar format adapters.

Raw-schema base models, JSON loading, name/colour cleanup and the date
conversions the adapters share.
"""

import json
from typing import Any, Dict, List, Mapping, Tuple, Union

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

from ..models import DEFAULT_COLOR, ImportFormat, ImportedSettings, Month
from ..protocols import CalendarImportError

DEFAULT_CALENDAR_NAME = "Imported Calendar"

RawPayload = Union[bytes, bytearray, str, Mapping[str, Any]]


class RawModel(BaseModel):
    """
    Base for external-schema models.

    Unknown keys are ignored and JSON nulls count as absent so the field
    default applies.
    """
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class CamelModel(RawModel):
    """External-schema model whose JSON keys are camelCase"""
    model_config = ConfigDict(alias_generator=to_camel)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-finite number {name} is not valid JSON")


def decode_json(data: Union[bytes, bytearray, str]) -> Any:
    """
    Strict JSON decode.

    NaN, Infinity and -Infinity are rejected with ValueError.
    """
    return json.loads(data, parse_constant=_reject_constant)


def load_json_object(data: RawPayload, import_format: ImportFormat) -> Dict[str, Any]:
    """
    Decode an import payload into a JSON object.

    Already-decoded mappings are passed through.

    Raises:
        CalendarImportError: invalid JSON or not a JSON object
    """
    if isinstance(data, Mapping):
        return dict(data)
    name = import_format.value
    try:
        decoded = decode_json(data)
    except (TypeError, ValueError) as e:
        raise CalendarImportError(f"parse {name} JSON: {e}", format_name=name) from e
    if not isinstance(decoded, dict):
        raise CalendarImportError(f"parse {name} JSON: expected a JSON object", format_name=name)
    return decoded


def strip_localization_key(value: str) -> str:
    """
    Drop Foundry VTT localization prefixes from a name.

    "CALENDARIA.Calendar.Gregorian.Month.January" -> "January".
    Strings without a dot are only trimmed.
    """
    value = value.strip()
    if "." not in value:
        return value
    return value.rsplit(".", 1)[-1]


def normalize_color(color: str) -> str:
    """Trimmed hex colour with a leading '#'; empty becomes the default grey"""
    color = color.strip()
    if not color:
        return DEFAULT_COLOR
    if not color.startswith("#"):
        color = "#" + color
    return color


def make_settings(
    current_year: int = 0,
    hours_per_day: int = 0,
    minutes_per_hour: int = 0,
    seconds_per_minute: int = 0,
    **kwargs: Any,
) -> ImportedSettings:
    """ImportedSettings with non-positive time units replaced by 24/60/60"""
    return ImportedSettings(
        current_year=current_year,
        hours_per_day=hours_per_day if hours_per_day > 0 else 24,
        minutes_per_hour=minutes_per_hour if minutes_per_hour > 0 else 60,
        seconds_per_minute=seconds_per_minute if seconds_per_minute > 0 else 60,
        **kwargs,
    )


def day_of_year_to_month_day(day_of_year: int, months: List[Month]) -> Tuple[int, int]:
    """
    Convert a 1-based day of the year to a 1-based (month, day).

    Uses base month lengths in the given (sorted) order. Days before the
    year start map to 1/1; days past the year end clamp to the last day
    of the last month.
    """
    if day_of_year <= 0 or not months:
        return 1, 1
    cumulative = 0
    for month in months:
        if day_of_year <= cumulative + month.days:
            return month.sort_order + 1, day_of_year - cumulative
        cumulative += month.days
    last = months[-1]
    return last.sort_order + 1, last.days


def day_before(month: int, day: int, month_lengths: List[int]) -> Tuple[int, int]:
    """
    The (month, day) one day before a 1-based month/day.

    Day 1 steps back to the last day of the previous month, wrapping from
    the first month to the last. Unknown month lengths count as 30 days.
    """
    if day > 1:
        return month, day - 1
    prev_month = month - 1
    if prev_month < 1:
        prev_month = max(len(month_lengths), 1)
    prev_days = 30
    if 0 <= prev_month - 1 < len(month_lengths):
        prev_days = month_lengths[prev_month - 1]
    return prev_month, prev_days


__all__ = [
    "DEFAULT_CALENDAR_NAME",
    "RawPayload",
    "RawModel",
    "CamelModel",
    "decode_json",
    "load_json_object",
    "strip_localization_key",
    "normalize_color",
    "make_settings",
    "day_of_year_to_month_day",
    "day_before",
]
