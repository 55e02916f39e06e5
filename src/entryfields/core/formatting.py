#!/usr/bin/env python3
"""
Formatting helpers for entryfields.

- Stable, minimal one-line formatting for Pydantic v2 `ValidationError`.
- Dotted error paths with index suffixes (`authors[1].name`).
"""
from __future__ import annotations

from typing import Any, Iterable, List, Sequence


# Pydantic error types whose default text reads poorly in an entry form
MESSAGE_OVERRIDES = {
    "missing": "This field is required",
}


# --- Public API --- #

def format_pydantic_errors_simple(exc: Exception) -> List[str]:
    """
    Return stable one-line messages from a Pydantic v2 ValidationError.

    Example:
        fields[1].name: Field required

    Falls back to the first line of str(exc) if `exc.errors()` isn't available.
    """
    errors: Sequence[dict[str, Any]] | None = None

    if hasattr(exc, "errors") and callable(getattr(exc, "errors")):
        try:
            errors = exc.errors()  # type: ignore[assignment]
        except (TypeError, ValueError):
            errors = None

    if not errors:
        return [str(exc).splitlines()[0]]

    return [f"{format_error_loc(err.get('loc', ()))}: {err.get('msg', 'Validation error')}" for err in errors]


def error_message(err: dict[str, Any]) -> str:
    """Human-readable message for one pydantic error dict."""
    return MESSAGE_OVERRIDES.get(err.get("type", ""), err.get("msg", "Validation error"))


def format_error_loc(loc: Iterable[Any]) -> str:
    """
    Convert a Pydantic error `loc` tuple into a dotted path with index suffixes.

    Examples:
        ('fields', 1, 'name') -> "fields[1].name"
        (0, 'items')          -> "[0].items"
        ()                    -> "<root>"
    """
    parts: List[str] = []
    for seg in loc:
        if isinstance(seg, int):
            if parts:
                parts[-1] = f"{parts[-1]}[{seg}]"
            else:
                parts.append(f"[{seg}]")
        else:
            parts.append(str(seg))
    return ".".join(parts) if parts else "<root>"
