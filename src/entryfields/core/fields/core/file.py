#!/usr/bin/env python3
"""
File field: path(s) of media files.

Stored values use the media `output` prefix (public path), the edit form
uses the `input` prefix (repository path). `options.multiple` stores a list.
"""

from typing import List

from entryfields.core.entry.sorting import compare_strings
from entryfields.core.fields.constraints import COERCE_STR, annotate
from entryfields.core.fields.module import FieldModule
from entryfields.core.media import media_prefixes, swap_prefix


def read(value, field, config_object=None):
    if not value:
        return None
    prefix_input, prefix_output = media_prefixes(field, config_object)
    if isinstance(value, list):
        return [swap_prefix(v, prefix_output, prefix_input, True) for v in value]
    return swap_prefix(value, prefix_output, prefix_input, True)


def write(value, field, config_object=None):
    if not value:
        return None
    prefix_input, prefix_output = media_prefixes(field, config_object)
    if isinstance(value, list):
        return [swap_prefix(v, prefix_input, prefix_output) for v in value]
    return swap_prefix(value, prefix_input, prefix_output)


def schema(field, config_object=None):
    item = annotate(str, COERCE_STR)
    return List[item] if field.option("multiple") else item


FIELD = FieldModule(
    label="File",
    schema=schema,
    read=read,
    write=write,
    sort=compare_strings,
    edit_component="file",
    view_component="file",
    supports_list=True,
)
