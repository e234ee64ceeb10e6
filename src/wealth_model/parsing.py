# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Coercion helpers for loosely-typed request payloads.

Clients send both snake_case and camelCase keys, numbers as strings and
dates in several ISO flavours. These helpers normalise all of that and
raise InvalidInput for anything that cannot be interpreted.
"""

import re
from datetime import date, datetime
from typing import Any, Dict, List, Optional

import pandas as pd

from .errors import InvalidInput

_MISSING = object()

# Calendar date prefix; rejects keywords such as "now" or "today"
_ISO_DATE_RE = re.compile(r"^\d{4}-\d{1,2}-\d{1,2}")


def nested_get(payload: Dict[str, Any], path: List[str], default: Any = None) -> Any:
    current: Any = payload
    for key in path:
        if not isinstance(current, dict):
            return default
        if key not in current:
            return default
        current = current[key]
    return current


def pick_first(payload: Dict[str, Any], paths: List[List[str]], default: Any = None) -> Any:
    for path in paths:
        value = nested_get(payload, path, None)
        if value is not None:
            return value
    return default


def to_float(value: Any, field: str, default: Any = _MISSING) -> float:
    """Convert a payload value to float.

    Args:
        value: Raw value from the payload (number, numeric string or None)
        field: Field name used in error messages
        default: Returned when value is None or blank. If omitted the field
                 is required.

    Raises:
        InvalidInput: If the value is missing (and required) or not numeric
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        if default is _MISSING:
            raise InvalidInput(f"{field} is required")
        return default
    if isinstance(value, bool):
        raise InvalidInput(f"{field} must be a number, got {value!r}")
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError as exc:
            raise InvalidInput(f"{field} must be a finite number") from exc
    if isinstance(value, str):
        try:
            return float(value.strip().replace(",", ""))
        except ValueError:
            pass
    raise InvalidInput(f"{field} must be a number, got {value!r}")


def to_date(value: Any, field: str) -> date:
    """Parse a calendar date from a date, datetime or ISO-8601 string."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidInput(f"{field} is required")
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidInput(f"{field} must be an ISO date string, got {value!r}")
    text = value.strip()
    if not _ISO_DATE_RE.match(text):
        raise InvalidInput(f"{field} is not a valid date: {value!r}")
    try:
        parsed = pd.Timestamp(text)
    except (ValueError, TypeError) as exc:
        raise InvalidInput(f"{field} is not a valid date: {value!r}") from exc
    if pd.isna(parsed):
        raise InvalidInput(f"{field} is not a valid date: {value!r}")
    return parsed.date()


def to_text(value: Any, default: str = "") -> str:
    if value is None:
        return default
    text = str(value).strip()
    return text or default

