#!/usr/bin/env python3
"""String field: single-line text with optional length and pattern constraints."""

from entryfields.core.entry.sorting import compare_strings
from entryfields.core.fields.constraints import annotate, string_validators
from entryfields.core.fields.module import FieldModule


def schema(field, config_object=None):
    return annotate(str, *string_validators(field))


FIELD = FieldModule(
    label="String",
    schema=schema,
    sort=compare_strings,
    edit_component="string",
    view_component="string",
)
