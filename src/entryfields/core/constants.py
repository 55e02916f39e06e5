#!/usr/bin/env python3
"""
Core constants used across entryfields.

- Reserved identifiers: structural field types handled by the resolver itself.
- Defaults: block discriminator key, date input formats, text encoding.
- Regular expressions: compiled patterns used by validators and normalizers.
"""

import re
from typing import Final

# --- Field types --- #

# Structural types: never registered as field modules, resolved recursively
OBJECT_TYPE: Final[str] = "object"
BLOCK_TYPE: Final[str] = "block"
STRUCTURAL_TYPES: Final[frozenset[str]] = frozenset({OBJECT_TYPE, BLOCK_TYPE})

# Type assumed when a declaration omits `type`
DEFAULT_FIELD_TYPE: Final[str] = "string"

# Discriminator key used by block fields when `blockKey` is not set
DEFAULT_BLOCK_KEY: Final[str] = "_block"

# Capability slots a field module may supply
CAPABILITIES: Final[tuple[str, ...]] = (
    "label",
    "schema",
    "default_value",
    "read",
    "write",
    "sort",
    "edit_component",
    "view_component",
)

# --- Dates --- #

# Edit-form representations (HTML date / datetime-local inputs)
DATE_INPUT_FORMAT: Final[str] = "yyyy-MM-dd"
DATETIME_INPUT_FORMAT: Final[str] = "yyyy-MM-dd'T'HH:mm"

# --- Files --- #

SUPPORTED_SETTINGS_EXT: Final[frozenset[str]] = frozenset({".yml", ".yaml", ".json"})
SETTINGS_FILENAME: Final[str] = ".pages.yml"
DEFAULT_TEXT_ENCODING: Final[str] = "utf-8"


# --- Regular Expressions --- #

# Field names: letters, digits, dash and underscore
FIELDNAME_ALLOWED_RE: re.Pattern[str] = re.compile(r"^[a-zA-Z0-9-_]+$")

# Field type names: lowercase letters, digits, dash and underscore
TYPE_NAME_ALLOWED_RE: re.Pattern[str] = re.compile(r"^[a-z0-9][a-z0-9_-]*$")

# View/edit component names: template-like identifiers
COMPONENT_NAME_RE: re.Pattern[str] = re.compile(r"^[A-Za-z0-9_./-]+$")

# Front matter block at the top of a Markdown file
FRONT_MATTER_RE: re.Pattern[str] = re.compile(r"\A---\s*\n(.*?\n)?---\s*(?:\n|\Z)", re.DOTALL)
