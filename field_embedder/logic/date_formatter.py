from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Union

from core.i18n.locale import date_locale

from ..exceptions.errors import InvalidFieldValueError

DateValue = Union[date, datetime, str]


def parse_date_value(value: DateValue) -> date:
    """
    Calendar date of *value*. ISO strings may carry a time and an offset
    (``2025-01-17T10:00:00Z``); the date part is used as written.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            pass
        # a time part the interpreter cannot parse may follow the date, nothing else
        head, rest = text[:10], text[10:]
        if rest and rest[0] not in "Tt ":
            raise InvalidFieldValueError(f"Unparseable date value: {value!r}")
        try:
            return date.fromisoformat(head)
        except ValueError as exc:
            raise InvalidFieldValueError(f"Unparseable date value: {value!r}") from exc
    raise InvalidFieldValueError(f"Unsupported date value type: {type(value).__name__}")


def format_long_date(value: DateValue, language: Optional[str] = None,
                     pattern: Optional[str] = None) -> str:
    """Long-form date: day, full month name and year, never numeric-only."""
    return date_locale.format_long(parse_date_value(value), lang=language, pattern=pattern)
