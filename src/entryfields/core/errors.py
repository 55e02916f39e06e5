#!/usr/bin/env python3
"""
Exception types raised by entryfields.

Validation problems in entry values are never raised; they are returned as a
`ValidationResult`. The exceptions below cover configuration and startup
problems, plus transform failures that the entry codec converts into
per-field failures.
"""

from __future__ import annotations


class EntryFieldsError(Exception):
    """Base class for entryfields errors."""


class UnknownFieldType(EntryFieldsError, LookupError):
    """A field declaration references a type absent from the registry."""

    def __init__(self, type_name: str, field_name: str | None = None):
        self.type_name = type_name
        self.field_name = field_name
        where = f" (field {field_name!r})" if field_name else ""
        super().__init__(f"Unknown field type {type_name!r}{where}")


class FieldRegistryError(EntryFieldsError):
    """A field module or type name is malformed; the registry cannot be built."""


class TransformError(EntryFieldsError):
    """A read/write transform failed on a stored or edited value."""

    def __init__(self, path: str, direction: str, cause: Exception):
        self.path = path
        self.direction = direction
        self.cause = cause
        super().__init__(f"{path}: could not {direction} value ({cause})")
