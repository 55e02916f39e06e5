#!/usr/bin/env python3
"""Number field edited with increment/decrement buttons (`options.step`)."""

from entryfields.core.entry.sorting import compare_numbers
from entryfields.core.fields.core.number import schema
from entryfields.core.fields.module import FieldModule


FIELD = FieldModule(
    label="Number (buttons)",
    schema=schema,
    sort=compare_numbers,
    edit_component="number-buttons",
    view_component="number",
)
