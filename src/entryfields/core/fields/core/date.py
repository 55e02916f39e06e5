#!/usr/bin/env python3
"""
Date field: calendar date, or date and time with `options.time`.

Options:
    format: storage format (date-fns/moment tokens); defaults to the input format
    time:   edit as date and time (`yyyy-MM-dd'T'HH:mm`) instead of a date
    min/max: inclusive bounds, ISO-8601 text
"""

from datetime import datetime
from typing import Any, Optional

from loguru import logger
from pydantic import AfterValidator, BeforeValidator

from entryfields.core.dates import format_date, input_format, parse_date, parse_iso
from entryfields.core.entry.sorting import compare_dates
from entryfields.core.fields.constraints import annotate, fail
from entryfields.core.fields.module import FieldModule


def _formats(field) -> tuple[str, str]:
    """(edit format, storage format)"""
    edit_fmt = input_format(bool(field.option("time")))
    return edit_fmt, field.option("format") or edit_fmt


def read(value, field, config_object=None):
    """Stored value -> edit-form string; invalid or empty values become ''."""
    if not value:
        return ""
    edit_fmt, save_fmt = _formats(field)
    parsed = parse_date(value, save_fmt)
    if parsed is None:
        logger.warning(f"Invalid date for field {field.name}: {value!r} does not match format {save_fmt!r}")
        return ""
    return format_date(parsed, edit_fmt)


def write(value, field, config_object=None):
    """Edit-form string (or date/datetime) -> stored value; invalid values become ''."""
    if value is None or value == "":
        return ""
    edit_fmt, save_fmt = _formats(field)
    parsed = parse_date(value, edit_fmt) or parse_iso(value)
    if parsed is None:
        logger.warning(f"Invalid date for field {field.name}: {value!r}")
        return ""
    return format_date(parsed, save_fmt)


def _coerce(value: Any) -> Any:
    parsed = parse_iso(value)
    if parsed is None:
        raise fail("date_parsing", "Invalid date")
    return parsed


def _bound(field, key: str) -> Optional[datetime]:
    raw = field.option(key)
    if raw is None or raw == "":
        return None
    return parse_iso(raw)


def schema(field, config_object=None):
    validators = [BeforeValidator(_coerce)]
    lo, hi = _bound(field, "min"), _bound(field, "max")

    if lo is not None:
        def _min(value: datetime) -> datetime:
            if value < lo:
                raise fail("less_than_min", f"Minimum value is {field.option('min')}")
            return value
        validators.append(AfterValidator(_min))

    if hi is not None:
        def _max(value: datetime) -> datetime:
            if value > hi:
                raise fail("greater_than_max", f"Maximum value is {field.option('max')}")
            return value
        validators.append(AfterValidator(_max))

    return annotate(datetime, *validators)


FIELD = FieldModule(
    label="Date",
    schema=schema,
    read=read,
    write=write,
    sort=compare_dates,
    edit_component="date",
    view_component="date",
)
