#!/usr/bin/env python3
"""Boolean field: checkbox; defaults to false."""

from entryfields.core.entry.sorting import compare_booleans
from entryfields.core.fields.module import FieldModule


def schema(field, config_object=None):
    return bool


FIELD = FieldModule(
    label="Boolean",
    schema=schema,
    default_value=False,
    sort=compare_booleans,
    edit_component="boolean",
    view_component="boolean",
)
