#!/usr/bin/env python3
"""
Purpose:
    Three-way comparators used to order field values in listing views, and a
    helper to sort entries by one field.

Every comparator returns -1, 0 or 1, treats None as greater than any present
value (nulls sort last), and is antisymmetric: sign(cmp(a, b)) == -sign(cmp(b, a)).
"""
from __future__ import annotations

import math
import unicodedata
from functools import cmp_to_key
from typing import Any, Callable, Dict, List, Optional, Sequence, TYPE_CHECKING

from entryfields.core.dates import parse_date
from entryfields.core.constants import DATE_INPUT_FORMAT
from entryfields.core.utils import safe_access

if TYPE_CHECKING:
    from entryfields.core.fields.registry import FieldRegistry
    from entryfields.core.schema.field_declaration import FieldDeclaration


def _sign(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def _nulls_last(a: Any, b: Any) -> Optional[int]:
    """Comparison result when either side is None, else None."""
    if a is None and b is None:
        return 0
    if a is None:
        return 1
    if b is None:
        return -1
    return None


def _invalid_last(a: Any, b: Any, compare: Callable[[Any, Any], int]) -> int:
    """Like `_nulls_last` for parsed values, then `compare` for two valid ones."""
    result = _nulls_last(a, b)
    return compare(a, b) if result is None else result


# --- Comparators --- #

def base_key(value: Any) -> str:
    """Accent- and case-insensitive collation key."""
    decomposed = unicodedata.normalize("NFKD", str(value))
    return "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()


def compare_strings(a: Any, b: Any, field: Optional["FieldDeclaration"] = None) -> int:
    """Locale-style comparison ignoring case and accents; exact text breaks ties."""
    result = _nulls_last(a, b)
    if result is not None:
        return result
    return _sign(base_key(a), base_key(b)) or _sign(str(a), str(b))


def _to_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(number) else number


def compare_numbers(a: Any, b: Any, field: Optional["FieldDeclaration"] = None) -> int:
    """Numeric comparison after float parsing; unparseable values sort after numbers, before nulls."""
    result = _nulls_last(a, b)
    if result is not None:
        return result
    return _invalid_last(_to_number(a), _to_number(b), _sign)


def compare_booleans(a: Any, b: Any, field: Optional["FieldDeclaration"] = None) -> int:
    """False before True; nulls last."""
    result = _nulls_last(a, b)
    if result is not None:
        return result
    return _sign(bool(a), bool(b))


def compare_dates(a: Any, b: Any, field: Optional["FieldDeclaration"] = None) -> int:
    """Chronological comparison using `options.format`; invalid dates sort after valid ones, before nulls."""
    result = _nulls_last(a, b)
    if result is not None:
        return result
    fmt = field.option("format", DATE_INPUT_FORMAT) if field is not None else DATE_INPUT_FORMAT
    return _invalid_last(parse_date(a, fmt), parse_date(b, fmt), _sign)


# --- Lookup & listing --- #

def get_sort_comparator(type_name: str, registry: Optional["FieldRegistry"] = None):
    """
    The comparator supplied by `type_name`, or None.

    Raises:
        UnknownFieldType: if the type is not registered
    """
    from entryfields.core.app import get_registry

    reg = registry or get_registry()
    reg.require_type(type_name)
    return reg.sort_fn(type_name)


def sort_entries(
    entries: Sequence[Dict[str, Any]],
    field: "FieldDeclaration",
    *,
    path: Optional[str] = None,
    reverse: bool = False,
    registry: Optional["FieldRegistry"] = None,
) -> List[Dict[str, Any]]:
    """
    Sort entry mappings by one field's value.

    The type's comparator is used, falling back to `compare_strings`.
    Entries without a value stay last in both directions.
    """
    comparator = get_sort_comparator(field.type, registry) or compare_strings
    key_path = path or field.name

    def _cmp(x: Dict[str, Any], y: Dict[str, Any]) -> int:
        a, b = safe_access(x, key_path), safe_access(y, key_path)
        nulls = _nulls_last(a, b)
        if nulls is not None:
            return nulls
        result = comparator(a, b, field)
        return -result if reverse else result

    return sorted(entries, key=cmp_to_key(_cmp))
