#!/usr/bin/env python3
"""
Purpose:
    Date helpers shared by the date field type and its sort comparator:
    translation of date-fns/moment style format strings (`yyyy-MM-dd`,
    `YYYY-MM-DD HH:mm`, quoted literals like `'T'`) to strftime, and lenient
    parse/format of stored values.
"""
from __future__ import annotations

import re
from datetime import date, datetime, timezone
from functools import lru_cache
from typing import Any, Optional

from entryfields.core.constants import DATE_INPUT_FORMAT, DATETIME_INPUT_FORMAT


_TOKEN_RE = re.compile(
    r"'[^']*'|yyyy|YYYY|yy|YY|MMMM|MMM|MM|M|dd|DD|d|D|HH|H|hh|h|mm|m|ss|s|a|A|EEEE|EEE|.",
    re.DOTALL,
)

_TOKENS = {
    "yyyy": "%Y", "YYYY": "%Y",
    "yy": "%y", "YY": "%y",
    "MMMM": "%B", "MMM": "%b", "MM": "%m", "M": "%m",
    "dd": "%d", "DD": "%d", "d": "%d", "D": "%d",
    "HH": "%H", "H": "%H",
    "hh": "%I", "h": "%I",
    "mm": "%M", "m": "%M",
    "ss": "%S", "s": "%S",
    "a": "%p", "A": "%p",
    "EEEE": "%A", "EEE": "%a",
}


@lru_cache(maxsize=128)
def to_strftime(fmt: str) -> str:
    """
    Translate a date-fns/moment format string to a strftime format.

    Examples:
        "yyyy-MM-dd"          -> "%Y-%m-%d"
        "yyyy-MM-dd'T'HH:mm"  -> "%Y-%m-%dT%H:%M"
        "DD/MM/YYYY"          -> "%d/%m/%Y"
    """
    out = []
    for token in _TOKEN_RE.findall(fmt):
        if token in _TOKENS:
            out.append(_TOKENS[token])
        elif token.startswith("'") and token.endswith("'") and len(token) >= 2:
            literal = token[1:-1] or "'"
            out.append(literal.replace("%", "%%"))
        else:
            out.append(token.replace("%", "%%"))
    return "".join(out)


def input_format(with_time: bool) -> str:
    """Edit-form format: date, or date and time (`options.time`)."""
    return DATETIME_INPUT_FORMAT if with_time else DATE_INPUT_FORMAT


def to_naive_utc(value: datetime) -> datetime:
    """Aware datetimes converted to UTC without tzinfo; naive ones returned as-is."""
    if value.tzinfo is None or value.utcoffset() is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def parse_date(value: Any, fmt: str) -> Optional[datetime]:
    """
    Parse `value` against `fmt`; `date`/`datetime` objects pass through.
    Returns None for empty or unparseable values.

    Results are always naive: timezone-aware values (e.g. YAML timestamps
    ending in `Z`) are converted to UTC so any two results compare.
    """
    if isinstance(value, datetime):
        return to_naive_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return to_naive_utc(datetime.strptime(value.strip(), to_strftime(fmt)))
    except ValueError:
        return None


def parse_iso(value: Any) -> Optional[datetime]:
    """
    Parse ISO-8601 text (`2024-01-31`, `2024-01-31T10:30`, `2024-01-31T10:30Z`)
    or pass date objects through. Results are naive, as with `parse_date`.
    """
    if isinstance(value, (date, datetime)):
        return parse_date(value, DATE_INPUT_FORMAT)
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = f"{text[:-1]}+00:00"
    try:
        return to_naive_utc(datetime.fromisoformat(text))
    except ValueError:
        return None


def format_date(value: datetime, fmt: str) -> str:
    """Format a datetime with a date-fns/moment format string."""
    return value.strftime(to_strftime(fmt))
