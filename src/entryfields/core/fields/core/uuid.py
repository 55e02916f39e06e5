#!/usr/bin/env python3
"""
UUID field: identifier generated for each new entry.

Options:
    editable: allow editing the generated value in the form (default false)
"""

import uuid

from pydantic import AfterValidator

from entryfields.core.entry.sorting import compare_strings
from entryfields.core.fields.constraints import COERCE_STR, annotate, fail
from entryfields.core.fields.module import FieldModule


def generate() -> str:
    """A fresh random (version 4) UUID string."""
    return str(uuid.uuid4())


def _check_uuid(value: str) -> str:
    """Only the canonical dashed form; braces, `urn:uuid:` and bare hex are rejected."""
    try:
        canonical = str(uuid.UUID(value))
    except ValueError:
        raise fail("uuid_parsing", "Invalid UUID") from None
    if canonical != value.lower():
        raise fail("uuid_parsing", "Invalid UUID")
    return value


def schema(field, config_object=None):
    return annotate(str, COERCE_STR, AfterValidator(_check_uuid))


FIELD = FieldModule(
    label="UUID",
    schema=schema,
    default_value=generate,
    sort=compare_strings,
    edit_component="uuid",
    view_component="string",
)
