#!/usr/bin/env python3
"""Reference field: path(s) of entries in another collection (`options.collection`)."""

from typing import List

from entryfields.core.entry.sorting import compare_strings
from entryfields.core.fields.constraints import COERCE_STR, annotate
from entryfields.core.fields.module import FieldModule


def schema(field, config_object=None):
    item = annotate(str, COERCE_STR)
    return List[item] if field.option("multiple") else item


FIELD = FieldModule(
    label="Reference",
    schema=schema,
    sort=compare_strings,
    edit_component="reference",
    view_component="string",
)
