#!/usr/bin/env python3
"""
Purpose:
    Implements the FieldDeclaration model: one field of a content schema as
    authored in the settings file, with normalization of the type name,
    list/pattern specs and structural checks for object and block fields.
"""
from __future__ import annotations

import re
from collections import Counter
from typing import Any, Dict, Iterable, List, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from entryfields.core import constants as C
from entryfields.core.utils import is_valid_fieldname_pattern


# --- Spec models --- #

class CollapsibleSpec(BaseModel):
    """Display hints for a collapsible list."""
    model_config = ConfigDict(extra="forbid")

    collapsed: Optional[bool] = None
    summary: Optional[str] = None


class ListSpec(BaseModel):
    """Cardinality and defaults for a repeating field (`list: {...}`)."""
    model_config = ConfigDict(extra="forbid")

    min: Optional[int] = Field(default=None, ge=0, description="Minimum number of items.")
    max: Optional[int] = Field(default=None, ge=1, description="Maximum number of items.")
    default: Any = Field(default=None, description="Default items, or a count of default items.")
    collapsible: Union[bool, CollapsibleSpec, None] = None

    @model_validator(mode="after")
    def _check_bounds(self) -> "ListSpec":
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError(f"'list.min' ({self.min}) must not exceed 'list.max' ({self.max})")
        return self


class PatternSpec(BaseModel):
    """Regex constraint with an optional custom message."""
    model_config = ConfigDict(extra="forbid")

    regex: str
    message: Optional[str] = None

    @field_validator("regex")
    @classmethod
    def _compiles(cls, v: str) -> str:
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"'pattern' is not a valid regex: {e}") from e
        return v


# --- Model --- #

class FieldDeclaration(BaseModel):
    """
    One field in a content schema.

    Common keys: name, label, description, type, default, list, hidden, required
    Constraint keys: pattern (string-like types), options (type-specific)
    Nested keys:
      - object: fields (list[FieldDeclaration])
      - block:  blocks (list of variants, each with `fields`), blockKey
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    name: str = Field(..., description="Name of the field (unique among siblings).")
    label: Union[str, Literal[False], None] = Field(default=None, description="Display name; false hides it.")
    description: Optional[str] = None
    type: str = Field(default=C.DEFAULT_FIELD_TYPE, description="Key into the field registry.")
    default: Any = Field(default=None, description="Literal default value.")
    list: Union[bool, ListSpec, None] = Field(default=None, description="Marks the field as repeating.")
    hidden: Optional[bool] = None
    required: Optional[bool] = None
    pattern: Union[str, PatternSpec, None] = None
    options: Optional[Dict[str, Any]] = None
    fields: Optional[List["FieldDeclaration"]] = None
    blocks: Optional[List["FieldDeclaration"]] = None
    block_key: Optional[str] = Field(default=None, alias="blockKey", min_length=1)

    # --- Validators --- #

    @field_validator("name", mode="before")
    @classmethod
    def _normalize_and_validate_name(cls, v: Any) -> str:
        """Strip whitespace and enforce FIELDNAME_ALLOWED_RE."""
        s = "" if v is None else str(v).strip()
        if not s:
            raise ValueError("'name' is required")
        if not is_valid_fieldname_pattern(s):
            raise ValueError(f"'name' must be alphanumeric with dashes and underscores, got {s!r}")
        return s

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, v: Any) -> str:
        s = C.DEFAULT_FIELD_TYPE if v is None else str(v).strip().lower()
        if not s:
            raise ValueError("'type' cannot be empty")
        return s

    @field_validator("pattern", mode="before")
    @classmethod
    def _check_pattern(cls, v: Any) -> Any:
        if isinstance(v, str):
            try:
                re.compile(v)
            except re.error as e:
                raise ValueError(f"'pattern' is not a valid regex: {e}") from e
        return v

    @model_validator(mode="after")
    def _post(self) -> "FieldDeclaration":
        """
        Structural checks:
        - object fields need `fields`, block fields need `blocks`
        - `blockKey` only on block fields; every block variant has `fields`
        - no duplicate names among nested siblings
        """
        if self.type == C.OBJECT_TYPE and self.fields is None:
            raise ValueError("Fields with type 'object' must have a 'fields' attribute")
        if self.type == C.BLOCK_TYPE:
            if not self.blocks:
                raise ValueError("Fields with type 'block' must have a 'blocks' attribute")
            missing = [b.name for b in self.blocks if b.fields is None]
            if missing:
                raise ValueError(f"Blocks must have a 'fields' attribute: {missing}")
        elif self.block_key is not None:
            raise ValueError("'blockKey' attribute is only valid when 'type' is 'block'")

        for label, children in (("fields", self.fields), ("blocks", self.blocks)):
            details = duplicate_details(c.name for c in children or [])
            if details:
                raise ValueError(f"Duplicate names in {label!r} of {self.name!r}: {details}")
        return self

    # --- Convenience --- #

    @property
    def is_list(self) -> bool:
        """True if the field repeats (`list: true` or a list spec)."""
        return bool(self.list)

    @property
    def list_spec(self) -> ListSpec:
        """The list spec, or an empty one for `list: true`/non-list fields."""
        return self.list if isinstance(self.list, ListSpec) else ListSpec()

    @property
    def is_object(self) -> bool:
        return self.type == C.OBJECT_TYPE

    @property
    def is_block(self) -> bool:
        return self.type == C.BLOCK_TYPE

    @property
    def discriminator(self) -> str:
        """Key used to select a block variant."""
        return self.block_key or C.DEFAULT_BLOCK_KEY

    @property
    def children(self) -> List["FieldDeclaration"]:
        """Nested declarations of an object field (empty otherwise)."""
        return list(self.fields or [])

    @property
    def display_label(self) -> Optional[str]:
        """Label to display; None when suppressed with `label: false`."""
        if self.label is False:
            return None
        return self.label or self.name

    def option(self, key: str, default: Any = None) -> Any:
        """Type-specific option lookup (`options.<key>`)."""
        return (self.options or {}).get(key, default)

    def get_block(self, name: Any) -> Optional["FieldDeclaration"]:
        """Block variant by name, or None."""
        for block in self.blocks or []:
            if block.name == name:
                return block
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Flat authoring shape (no unset keys, `blockKey` alias)."""
        return self.model_dump(by_alias=True, exclude_none=True)


# --- Helpers --- #

def duplicate_details(names: Iterable[str]) -> str | None:
    """Describe duplicated names as 'a ×2, b ×3', or None when unique."""
    counts = Counter(names)
    dups = [(n, c) for n, c in sorted(counts.items()) if c > 1]
    if not dups:
        return None
    return ", ".join(f"{n} ×{c}" for n, c in dups)


def walk(fields: Iterable[FieldDeclaration]) -> Iterable[FieldDeclaration]:
    """Depth-first walk over declarations, descending into objects and block variants."""
    for fd in fields:
        yield fd
        if fd.fields:
            yield from walk(fd.fields)
        if fd.blocks:
            yield from walk(fd.blocks)


FieldDeclaration.model_rebuild()
