#!/usr/bin/env python3
"""Code field: source text edited in a code editor (`options.language`)."""

from entryfields.core.entry.sorting import compare_strings
from entryfields.core.fields.constraints import annotate, string_validators
from entryfields.core.fields.module import FieldModule


def schema(field, config_object=None):
    return annotate(str, *string_validators(field))


FIELD = FieldModule(
    label="Code",
    schema=schema,
    sort=compare_strings,
    edit_component="code",
    view_component="code",
)
