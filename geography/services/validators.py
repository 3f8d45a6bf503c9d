"""Parsing and bounds checking for the textual fields of the geography sources.

Every validator takes the raw text of one field and returns the normalized
value or raises ``ValidationError`` naming the field kind. Code validators drop
whitespace, uppercase letters and reject any character outside the class
allowed for that code. Numeric validators strip surrounding whitespace and
reject values outside the documented range instead of clamping them.

``partial`` accepts codes shorter than their full length (used for range
bounds), ``empty`` accepts an empty field (codes become ``""``, numbers ``0``
and flags ``False``).
"""

from __future__ import annotations

import math
import unicodedata
from typing import Callable

from geography.core.errors import ValidationError


MAX_RUNWAY_FT = 30000
MIN_ELEVATION_FT = -45000
MAX_ELEVATION_FT = 30000
MIN_FREQUENCY_MHZ = 118.0
MAX_FREQUENCY_MHZ = 137.0


def _is_letter(c: str) -> bool:
    return unicodedata.category(c).startswith("L")


def _is_alnum(c: str) -> bool:
    return _is_letter(c) or unicodedata.category(c) == "Nd"


def _is_code_char(c: str) -> bool:
    # letters, digits, dashes and connectors such as "_"
    return _is_alnum(c) or unicodedata.category(c) in ("Pc", "Pd")


def _normalize_code(value: str | None, kind: str, allowed: Callable[[str], bool]) -> str:
    result = []
    for c in value or "":
        if c.isspace():
            continue
        if not allowed(c):
            raise ValidationError(kind, value)
        result.append(c.upper())
    return "".join(result)


def _check_code_length(
    code: str,
    value: str | None,
    kind: str,
    min_length: int,
    max_length: int | None,
    partial: bool,
    empty: bool,
) -> str:
    if not code:
        if not empty:
            raise ValidationError(kind, value)
        return code
    if len(code) < min_length and not partial:
        raise ValidationError(kind, value)
    if max_length is not None and len(code) > max_length:
        raise ValidationError(kind, value)
    return code


def iso_country_code(value: str | None, partial: bool = False, empty: bool = False) -> str:
    """Two letters, e.g. ``"nl"`` -> ``"NL"``."""
    kind = "ISO Country Code"
    code = _normalize_code(value, kind, _is_letter)
    return _check_code_length(code, value, kind, 2, 2, partial, empty)


def iso_region_code(value: str | None, partial: bool = False, empty: bool = False) -> str:
    """Composite subdivision code such as ``"NL-NH"``; no known maximum length."""
    kind = "ISO Region Code"
    code = _normalize_code(value, kind, _is_code_char)
    return _check_code_length(code, value, kind, 1, None, partial, empty)


def icao_airport_code(value: str | None, partial: bool = False, empty: bool = False) -> str:
    kind = "ICAO Airport Code"
    code = _normalize_code(value, kind, _is_alnum)
    return _check_code_length(code, value, kind, 2, 4, partial, empty)


def iata_airport_code(value: str | None, partial: bool = False, empty: bool = False) -> str:
    kind = "IATA Airport Code"
    code = _normalize_code(value, kind, _is_letter)
    return _check_code_length(code, value, kind, 3, 3, partial, empty)


def runway_code(value: str | None, partial: bool = False, empty: bool = False) -> str:
    kind = "Runway Code"
    code = _normalize_code(value, kind, _is_code_char)
    return _check_code_length(code, value, kind, 1, None, partial, empty)


def _parse_number(value: str | None, kind: str, empty: bool) -> float | None:
    """Return the parsed number, or None for an accepted empty field."""
    text = (value or "").strip()
    if not text:
        if not empty:
            raise ValidationError(kind, value)
        return None
    if "_" in text:
        raise ValidationError(kind, value)
    try:
        number = float(text)
    except ValueError:
        raise ValidationError(kind, value) from None
    if not math.isfinite(number):
        raise ValidationError(kind, value)
    return number


def _bounded_float(value: str | None, kind: str, low: float, high: float, empty: bool) -> float:
    number = _parse_number(value, kind, empty)
    if number is None:
        return 0.0
    if number < low or number > high:
        raise ValidationError(kind, value)
    return number


def _bounded_int(value: str | None, kind: str, low: int, high: int, empty: bool) -> int:
    number = _parse_number(value, kind, empty)
    if number is None:
        return 0
    result = int(number)
    if result < low or result > high:
        raise ValidationError(kind, value)
    return result


def latitude(value: str | None, empty: bool = False) -> float:
    return _bounded_float(value, "Latitude", -90.0, 90.0, empty)


def longitude(value: str | None, empty: bool = False) -> float:
    return _bounded_float(value, "Longitude", -180.0, 180.0, empty)


def elevation(value: str | None, empty: bool = False) -> int:
    """Elevation in whole feet, -45000 (deep sea floor) up to 30000."""
    return _bounded_int(value, "Elevation", MIN_ELEVATION_FT, MAX_ELEVATION_FT, empty)


def runway_length(value: str | None, empty: bool = False) -> int:
    """Length in whole feet, 1..30000; a length of 0 only passes when ``empty``."""
    kind = "Runway Length"
    length = _bounded_int(value, kind, 0, MAX_RUNWAY_FT, empty)
    if length == 0 and not empty:
        raise ValidationError(kind, value)
    return length


def runway_width(value: str | None, empty: bool = False) -> int:
    return _bounded_int(value, "Runway Width", 0, MAX_RUNWAY_FT, empty)


def runway_heading(value: str | None, empty: bool = False) -> int:
    return _bounded_int(value, "Runway Heading", 0, 360, empty)


def runway_threshold(value: str | None, empty: bool = False) -> int:
    """Displaced threshold in whole feet."""
    return _bounded_int(value, "Runway Threshold", 0, MAX_RUNWAY_FT, empty)


def _flag(value: str | None, kind: str, empty: bool) -> bool:
    text = (value or "").strip()
    if not text:
        if not empty:
            raise ValidationError(kind, value)
        return False
    if text == "1":
        return True
    if text == "0":
        return False
    raise ValidationError(kind, value)


def runway_lighted(value: str | None, empty: bool = False) -> bool:
    return _flag(value, "Runway Lighted", empty)


def runway_closed(value: str | None, empty: bool = False) -> bool:
    return _flag(value, "Runway Closed", empty)


def frequency(value: str | None, empty: bool = False) -> float:
    """Civil aircraft communication band, 118.0..137.0 MHz."""
    return _bounded_float(value, "Frequency", MIN_FREQUENCY_MHZ, MAX_FREQUENCY_MHZ, empty)


__all__ = [
    "iso_country_code",
    "iso_region_code",
    "icao_airport_code",
    "iata_airport_code",
    "runway_code",
    "latitude",
    "longitude",
    "elevation",
    "runway_length",
    "runway_width",
    "runway_heading",
    "runway_threshold",
    "runway_lighted",
    "runway_closed",
    "frequency",
]
