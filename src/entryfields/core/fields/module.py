#!/usr/bin/env python3
"""
Purpose:
    Defines FieldModule, the bundle of optional capabilities supplied for one
    field type, and the callable signatures each capability slot expects.
"""
from __future__ import annotations

from dataclasses import dataclass, fields as dataclass_fields
from typing import Any, Callable, Mapping, Optional, TYPE_CHECKING

from entryfields.core.constants import COMPONENT_NAME_RE
from entryfields.core.errors import FieldRegistryError

if TYPE_CHECKING:
    from entryfields.core.schema.field_declaration import FieldDeclaration


ConfigObject = Mapping[str, Any]

# (field, config_object) -> type annotation understood by pydantic
SchemaBuilder = Callable[["FieldDeclaration", Optional[ConfigObject]], Any]
# (value, field, config_object) -> transformed value
Transform = Callable[[Any, "FieldDeclaration", Optional[ConfigObject]], Any]
# (a, b, field) -> -1 / 0 / 1
Comparator = Callable[[Any, Any, Optional["FieldDeclaration"]], int]


class _Missing:
    """Marker for an absent default value (None is a legitimate default)."""

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


@dataclass(frozen=True)
class FieldModule:
    """
    Capabilities of one field type. Every slot is optional.

    - label:          display name of the type
    - schema:         builder returning the value annotation for a declaration
    - default_value:  static value, or zero-argument callable invoked per use
    - read / write:   storage <-> edit-form transforms
    - sort:           three-way comparator for listing views
    - edit_component: name of the edit component (presentation layer)
    - view_component: name of the Jinja2 view template
    - supports_list:  read/write and the edit component take a list field's
                      whole list instead of one item at a time
    """

    label: Optional[str] = None
    schema: Optional[SchemaBuilder] = None
    default_value: Any = MISSING
    read: Optional[Transform] = None
    write: Optional[Transform] = None
    sort: Optional[Comparator] = None
    edit_component: Optional[str] = None
    view_component: Optional[str] = None
    supports_list: Optional[bool] = None

    def has(self, capability: str) -> bool:
        """True if the slot is supplied."""
        value = getattr(self, capability)
        return value is not MISSING and value is not None

    def capabilities(self) -> list[str]:
        """Names of the supplied capability slots, in declaration order."""
        return [f.name for f in dataclass_fields(self) if f.name != "supports_list" and self.has(f.name)]

    def validate(self, type_name: str) -> None:
        """
        Check the slot types.

        Raises:
            FieldRegistryError: on a non-callable callable slot or a malformed component name
        """
        for slot in ("schema", "read", "write", "sort"):
            value = getattr(self, slot)
            if value is not None and not callable(value):
                raise FieldRegistryError(f"Field type {type_name!r}: {slot!r} must be callable")
        if self.label is not None and not isinstance(self.label, str):
            raise FieldRegistryError(f"Field type {type_name!r}: 'label' must be a string")
        for slot in ("edit_component", "view_component"):
            value = getattr(self, slot)
            if value is not None and not (isinstance(value, str) and COMPONENT_NAME_RE.fullmatch(value)):
                raise FieldRegistryError(f"Field type {type_name!r}: invalid {slot} {value!r}")
