#!/usr/bin/env python3
"""
Select field: one value picked from `options.values`.

`options.values` items are plain values or `{value, label}` mappings; the
stored value is always the `value`.
"""

from entryfields.core.entry.sorting import compare_strings
from entryfields.core.fields.constraints import COERCE_STR, annotate, normalize_values, one_of, string_validators
from entryfields.core.fields.module import FieldModule


def schema(field, config_object=None):
    validators = [COERCE_STR, *string_validators(field)]
    values = normalize_values(field.option("values"))
    if values:
        validators.append(one_of(values))
    return annotate(str, *validators)


FIELD = FieldModule(
    label="Select",
    schema=schema,
    sort=compare_strings,
    edit_component="select",
    view_component="string",
)
