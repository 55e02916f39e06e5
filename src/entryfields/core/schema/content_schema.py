#!/usr/bin/env python3
"""
Purpose:
    Defines the ContentSchema model, one `content` entry of the settings
    object (a collection or single file with its field declarations), and
    lookup helpers over the settings object.
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any, Dict, Iterable, List, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from entryfields.core.constants import SUPPORTED_SETTINGS_EXT
from entryfields.core.schema.field_declaration import FieldDeclaration, duplicate_details
from entryfields.core.utils import load_structured_file


# --- Model --- #

class ContentSchema(BaseModel):
    """
    Schema of one content entry (collection or file).

    Fields:
    -------
    name:
        identifier of the content entry in the settings file
    type:
        `collection` (a folder of entries) or `file` (a single entry)
    fields:
        ordered list of `FieldDeclaration` entries (nested via fields/blocks)

    Notes:
    ------
    Sibling names are unique at every level; nested levels are checked by
    `FieldDeclaration` itself, the top level is checked here.
    """

    model_config = ConfigDict(extra="allow")

    name: str = Field(..., min_length=1)
    label: Optional[str] = None
    description: Optional[str] = None
    type: Literal["collection", "file"] = "collection"
    path: str = ""
    format: Optional[str] = None
    fields: List[FieldDeclaration] = Field(default_factory=list)
    view: Optional[Dict[str, Any]] = None

    @model_validator(mode="after")
    def _check_no_duplicates(self) -> "ContentSchema":
        details = duplicate_details(f.name for f in self.fields)
        if details:
            raise ValueError(f"Duplicate field names at 'fields': {details}")
        return self

    # --- Convenience --- #

    @property
    def primary_field(self) -> Optional[str]:
        """Field used as the entry title: `view.primary`, else `title`, else the first field."""
        primary = (self.view or {}).get("primary")
        if primary:
            return primary
        if any(f.name == "title" for f in self.fields):
            return "title"
        return self.fields[0].name if self.fields else None

    def get_field(self, path: str) -> Optional[FieldDeclaration]:
        """Declaration at a dotted path (e.g. `author.name`), or None."""
        return get_field_by_path(self.fields, path)

    # --- Construction --- #

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any], name: str) -> "ContentSchema":
        """
        Build the schema of the content entry `name` from a settings object.

        Raises:
            LookupError: if no content entry has that name
            ValidationError: if the entry fails model validation
        """
        raw = get_schema_by_name(settings, name)
        if raw is None:
            raise LookupError(f"Content {name!r} not found in settings")
        return cls.model_validate(raw)


# --- Settings helpers --- #

def load_settings(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a settings object (`.pages.yml` or JSON).

    Raises:
        FileNotFoundError: if the file does not exist
        ValueError: if the extension is not supported or the payload is not a mapping
    """
    p = Path(path)
    if p.suffix.lower() not in SUPPORTED_SETTINGS_EXT:
        raise ValueError(
            f"Invalid settings file extension for {p.name!r}; expected one of {sorted(SUPPORTED_SETTINGS_EXT)}"
        )
    return load_structured_file(p)


def get_schema_by_name(
    settings: Optional[Mapping[str, Any]],
    name: str,
    kind: Literal["content", "media"] = "content",
) -> Optional[Dict[str, Any]]:
    """
    Deep copy of the named content (or media) entry, or None.

    A media section given as a single mapping is treated as one unnamed entry.
    """
    if not settings or not name:
        return None
    entries = settings.get(kind) or []
    if isinstance(entries, Mapping):
        entries = [entries]
    for item in entries:
        if isinstance(item, Mapping) and item.get("name") == name:
            return copy.deepcopy(dict(item))
    return None


def get_schema_by_path(settings: Optional[Mapping[str, Any]], path: str) -> Optional[Dict[str, Any]]:
    """
    Deep copy of the content entry whose `path` is the deepest prefix of `path`.
    """
    if not settings or not settings.get("content"):
        return None

    normalized = _normalize_path(path)
    matches = [
        item for item in settings["content"]
        if isinstance(item, Mapping) and normalized.startswith(_normalize_path(item.get("path", "")))
    ]
    if not matches:
        return None
    deepest = max(matches, key=lambda item: len(_normalize_path(item.get("path", ""))))
    return copy.deepcopy(dict(deepest))


def get_field_by_path(fields: Iterable[FieldDeclaration], path: str) -> Optional[FieldDeclaration]:
    """Resolve `a.b.c` through nested object declarations."""
    first, _, rest = path.partition(".")
    field = next((f for f in fields if f.name == first), None)
    if field is None or not rest:
        return field
    if field.is_object:
        return get_field_by_path(field.children, rest)
    return None


def _normalize_path(path: str) -> str:
    parts = [p for p in str(path).split("/") if p]
    return "/" + "/".join(parts) + "/" if parts else "/"
