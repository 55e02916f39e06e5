#!/usr/bin/env python3
"""
Purpose:
    Structured validation results: every field-level problem found in one
    pass, each tagged with its dotted path, returned as data for a form UI to
    render inline.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List

from pydantic import ValidationError

from entryfields.core.formatting import error_message, format_error_loc


@dataclass(frozen=True)
class FieldError:
    """One problem at one field path (e.g. `authors[1].name`)."""
    path: str
    message: str
    code: str = "invalid"

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


@dataclass
class ValidationResult:
    """
    Outcome of validating a value.

    - value:  the validated (coerced) value when valid, else the input
    - errors: all field errors, in the order pydantic reported them
    """
    value: Any = None
    errors: List[FieldError] = field(default_factory=list)

    @classmethod
    def from_validation_error(cls, value: Any, exc: ValidationError) -> "ValidationResult":
        errors = [
            FieldError(path=format_error_loc(err.get("loc", ())), message=error_message(err), code=err.get("type", "invalid"))
            for err in exc.errors()
        ]
        return cls(value=value, errors=errors)

    @property
    def valid(self) -> bool:
        return not self.errors

    def messages(self) -> List[str]:
        """`path: message` lines."""
        return [str(e) for e in self.errors]

    def by_path(self) -> Dict[str, List[str]]:
        """Messages grouped by field path."""
        grouped: Dict[str, List[str]] = {}
        for e in self.errors:
            grouped.setdefault(e.path, []).append(e.message)
        return grouped

    def __len__(self) -> int:
        return len(self.errors)

    def __iter__(self) -> Iterator[FieldError]:
        return iter(self.errors)

    def __repr__(self) -> str:
        return f"<ValidationResult valid={self.valid} errors={len(self.errors)}>"
