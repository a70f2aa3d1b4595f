#!/usr/bin/env python3
"""
Asana Date Codec

Asana sends calendar dates (due_on, start_on, ...) as plain 'YYYY-MM-DD'
strings, unlike timestamps (created_at, modified_at) which are full ISO-8601.
This module converts between that text form and datetime.date.
"""

import re
from datetime import date, datetime
from typing import Annotated, Any

from pydantic import PlainSerializer, PlainValidator

from .errors import AsanaDecodeError

DATE_FORMAT = "YYYY-MM-DD"

_DATE_RE = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")


def encode_date(value: date) -> str:
    """
    Format a calendar date as 'YYYY-MM-DD'.

    A datetime is truncated to its date; the time of day is dropped.

    Raises:
        TypeError: If value is not a date

    Example:
        encode_date(date(2012, 3, 26))  # '2012-03-26'
    """
    if isinstance(value, datetime):
        value = value.date()
    if not isinstance(value, date):
        raise TypeError(f"Expected a date, got {type(value).__name__}")

    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def decode_date(text: Any) -> date:
    """
    Parse an exact 'YYYY-MM-DD' string into a date.

    Raises:
        AsanaDecodeError: If text is not a string, does not match the pattern
            exactly (separators, zero-padding, no time component), or names a
            day that does not exist

    Example:
        decode_date('2012-03-26')  # date(2012, 3, 26)
    """
    if not isinstance(text, str):
        raise AsanaDecodeError(
            f"Expected a {DATE_FORMAT} string, got {type(text).__name__}"
        )

    match = _DATE_RE.fullmatch(text)
    if not match:
        raise AsanaDecodeError(f"Date {text!r} does not match {DATE_FORMAT}")

    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError as e:
        raise AsanaDecodeError(f"Invalid date {text!r}: {e}") from e


def _validate_date(value: Any) -> date:
    # Already-built dates pass through when models are constructed in Python
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    return decode_date(value)


# Model field type for calendar dates
Date = Annotated[
    date,
    PlainValidator(_validate_date),
    PlainSerializer(encode_date, return_type=str, when_used="json"),
]
