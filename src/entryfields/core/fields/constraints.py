#!/usr/bin/env python3
"""
Purpose:
    Reusable pydantic validators for field schema builders: string length and
    pattern checks, numeric ranges, enumerations and coercions. Builders
    compose these into `Annotated[...]` types.
"""
from __future__ import annotations

import math
import re
from typing import Annotated, Any, Iterable, List, Optional

from loguru import logger
from pydantic import AfterValidator, BeforeValidator
from pydantic_core import PydanticCustomError

from entryfields.core.schema.field_declaration import FieldDeclaration, PatternSpec


DEFAULT_PATTERN_MESSAGE = "Invalid format"


# --- Composition --- #

def annotate(base: Any, *metadata: Any) -> Any:
    """`Annotated[base, *metadata]`, or `base` itself when there is no metadata."""
    if not metadata:
        return base
    return Annotated[(base, *metadata)]  # type: ignore[misc]


def fail(error_type: str, message: str) -> PydanticCustomError:
    """Build a custom error; the message is passed through context so braces stay literal."""
    return PydanticCustomError(error_type, "{message}", {"message": message})


# --- Options --- #

def numeric_option(field: FieldDeclaration, key: str) -> Optional[float | int]:
    """
    `options.<key>` as a number; numeric strings (`"5"`, `"0.5"`) are parsed.
    Non-numeric values are ignored with a warning.
    """
    raw = field.option(key)
    if raw is None or raw == "":
        return None
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return raw
    try:
        number = float(raw)
    except (TypeError, ValueError):
        number = math.nan
    if math.isnan(number) or isinstance(raw, bool):
        logger.warning(f"Field {field.name!r}: ignoring non-numeric option {key}={raw!r}")
        return None
    return int(number) if number.is_integer() else number


# --- Strings --- #

def pattern_validator(pattern: str | PatternSpec | None) -> Optional[AfterValidator]:
    """Regex check (search semantics) against the final string value."""
    if pattern is None:
        return None
    if isinstance(pattern, PatternSpec):
        regex, message = pattern.regex, pattern.message or "Invalid pattern format"
    else:
        regex, message = pattern, DEFAULT_PATTERN_MESSAGE
    compiled = re.compile(regex)

    def _check(value: str) -> str:
        if not compiled.search(value):
            raise fail("pattern_mismatch", message)
        return value

    return AfterValidator(_check)


def length_validators(field: FieldDeclaration) -> List[AfterValidator]:
    """`options.minlength` / `options.maxlength` checks."""
    validators: List[AfterValidator] = []
    minlength = numeric_option(field, "minlength")
    maxlength = numeric_option(field, "maxlength")

    if minlength:
        def _min(value: str) -> str:
            if len(value) < minlength:
                raise fail("string_too_short", f"Minimum length is {minlength} characters")
            return value
        validators.append(AfterValidator(_min))

    if maxlength:
        def _max(value: str) -> str:
            if len(value) > maxlength:
                raise fail("string_too_long", f"Maximum length is {maxlength} characters")
            return value
        validators.append(AfterValidator(_max))

    return validators


def string_validators(field: FieldDeclaration) -> List[AfterValidator]:
    """Pattern, then length checks, for string-like types."""
    pattern = pattern_validator(field.pattern)
    return ([pattern] if pattern else []) + length_validators(field)


def _to_str(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return value


# Coerce scalar inputs to their string form before str validation
COERCE_STR = BeforeValidator(_to_str)


# --- Numbers --- #

def range_validators(field: FieldDeclaration, *, key_min: str = "min", key_max: str = "max") -> List[AfterValidator]:
    """`options.min` / `options.max` checks (0 is a valid bound)."""
    validators: List[AfterValidator] = []
    lo = numeric_option(field, key_min)
    hi = numeric_option(field, key_max)

    if lo is not None:
        def _min(value: Any) -> Any:
            if value < lo:
                raise fail("less_than_min", f"Minimum value is {lo}")
            return value
        validators.append(AfterValidator(_min))

    if hi is not None:
        def _max(value: Any) -> Any:
            if value > hi:
                raise fail("greater_than_max", f"Maximum value is {hi}")
            return value
        validators.append(AfterValidator(_max))

    return validators


# --- Enumerations --- #

def normalize_values(values: Any) -> List[str]:
    """
    Allowed values from `options.values`; items may be plain values or
    `{value, label}` mappings.
    """
    if not isinstance(values, (list, tuple)):
        return []
    return [str(item.get("value")) if isinstance(item, dict) else str(item) for item in values]


def one_of(allowed: Iterable[str]) -> AfterValidator:
    """Membership check with a message listing the allowed values."""
    choices = list(allowed)
    listing = ", ".join(repr(c) for c in choices)

    def _check(value: str) -> str:
        if value not in choices:
            raise fail("enum", f"Value must be one of {listing}")
        return value

    return AfterValidator(_check)
