"""
Field-level CSV value conversion.

Blank values and the source system's underscore placeholders parse to None.
Conversion failures raise FieldFormatError naming the field.
"""

import datetime
from decimal import Decimal, InvalidOperation
from typing import Optional

from .errors import ErrorType, FieldFormatError

_PLACEHOLDERS = frozenset({"_" * 10, "_" * 20})
DATE_FORMAT = "%Y-%m-%d"


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    stripped = value.strip()
    if not stripped or stripped in _PLACEHOLDERS:
        return None
    return stripped


def parse_str(value: Optional[str], field_name: str = "") -> Optional[str]:
    return _clean(value)


def parse_int(value: Optional[str], field_name: str = "") -> Optional[int]:
    cleaned = _clean(value)
    if cleaned is None:
        return None
    try:
        return int(cleaned)
    except ValueError as ex:
        raise FieldFormatError(ErrorType.INVALID_NUMBER_FORMAT, field_name, value) from ex


def parse_decimal(value: Optional[str], field_name: str = "") -> Optional[Decimal]:
    cleaned = _clean(value)
    if cleaned is None:
        return None
    try:
        parsed = Decimal(cleaned)
    except InvalidOperation as ex:
        raise FieldFormatError(ErrorType.INVALID_NUMBER_FORMAT, field_name, value) from ex
    if not parsed.is_finite():
        raise FieldFormatError(ErrorType.INVALID_NUMBER_FORMAT, field_name, value)
    return parsed


def parse_date(value: Optional[str], field_name: str = "") -> Optional[datetime.date]:
    """Parse an ISO `YYYY-MM-DD` date."""
    cleaned = _clean(value)
    if cleaned is None:
        return None
    try:
        return datetime.datetime.strptime(cleaned, DATE_FORMAT).date()
    except ValueError as ex:
        raise FieldFormatError(ErrorType.INVALID_DATE_FORMAT, field_name, value) from ex


def format_value(value) -> str:
    """Render a parsed value back to its CSV text (None -> empty)."""
    if value is None:
        return ""
    if isinstance(value, Decimal):
        return format(value, "f")
    if isinstance(value, datetime.date):
        return value.strftime(DATE_FORMAT)
    return str(value)


PARSERS = {
    "str": parse_str,
    "int": parse_int,
    "decimal": parse_decimal,
    "date": parse_date,
}


def split_line(line: str) -> list:
    """Split a journal or snapshot line. The source dialect has no quoting."""
    return line.rstrip("\r\n").split(",")


def is_header_line(line: str) -> bool:
    """Return True if the first field is the `LFDNR` column title or not an integer."""
    first = split_line(line)[0].strip()
    if not first:
        return False
    if first.upper() == "LFDNR":
        return True
    try:
        int(first)
    except ValueError:
        return True
    return False
