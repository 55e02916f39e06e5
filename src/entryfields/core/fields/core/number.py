#!/usr/bin/env python3
"""Number field: numeric input (strings are parsed), bounded by `options.min`/`options.max`."""

from entryfields.core.entry.sorting import compare_numbers
from entryfields.core.fields.constraints import annotate, range_validators
from entryfields.core.fields.module import FieldModule


def schema(field, config_object=None):
    return annotate(float, *range_validators(field))


FIELD = FieldModule(
    label="Number",
    schema=schema,
    sort=compare_numbers,
    edit_component="number",
    view_component="number",
)
