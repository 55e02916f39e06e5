#!/usr/bin/env python3
"""Text field: multi-line text; scalar inputs are coerced to strings."""

from entryfields.core.entry.sorting import compare_strings
from entryfields.core.fields.constraints import COERCE_STR, annotate, string_validators
from entryfields.core.fields.module import FieldModule


def schema(field, config_object=None):
    return annotate(str, COERCE_STR, *string_validators(field))


FIELD = FieldModule(
    label="Text",
    schema=schema,
    sort=compare_strings,
    edit_component="text",
    view_component="text",
)
