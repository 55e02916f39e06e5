#!/usr/bin/env python3
"""Image field: like `file`, restricted to images by the edit component; any value validates."""

from entryfields.core.fields.core.file import read, write
from entryfields.core.fields.module import FieldModule


FIELD = FieldModule(
    label="Image",
    read=read,
    write=write,
    edit_component="image",
    view_component="image",
    supports_list=True,
)
