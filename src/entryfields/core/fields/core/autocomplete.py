#!/usr/bin/env python3
"""
Autocomplete field: free text with suggestions from `options.values`.

Unless `options.creatable` is set, the value must be one of the suggestions.
"""

from entryfields.core.entry.sorting import compare_strings
from entryfields.core.fields.constraints import annotate, normalize_values, one_of
from entryfields.core.fields.module import FieldModule


def schema(field, config_object=None):
    values = normalize_values(field.option("values"))
    if values and not field.option("creatable"):
        return annotate(str, one_of(values))
    return str


FIELD = FieldModule(
    label="Autocomplete",
    schema=schema,
    sort=compare_strings,
    edit_component="autocomplete",
    view_component="string",
    supports_list=True,
)
