#!/usr/bin/env python3
"""
Purpose:
    Default values for new entries: per-type defaults from the field registry
    (static values or generators invoked on every call), explicit declaration
    defaults, list defaults, and the initial state of a whole entry.
"""
from __future__ import annotations

import copy
from typing import Any, Dict, Iterable, List, Optional, TYPE_CHECKING

from entryfields.core.entry.codec import deep_map

if TYPE_CHECKING:
    from entryfields.core.fields.registry import FieldRegistry
    from entryfields.core.schema.field_declaration import FieldDeclaration


def _registry(registry: Optional["FieldRegistry"]) -> "FieldRegistry":
    if registry is not None:
        return registry
    from entryfields.core.app import get_registry
    return get_registry()


def get_default(type_name: str, registry: Optional["FieldRegistry"] = None) -> Any:
    """
    Default supplied by the type module, or None.

    Generators (e.g. the uuid type's) run on every call; nothing is cached.

    Raises:
        UnknownFieldType: if the type is not registered
    """
    reg = _registry(registry)
    reg.require_type(type_name)
    return reg.default_value(type_name)


def get_default_value(field: "FieldDeclaration", registry: Optional["FieldRegistry"] = None) -> Any:
    """
    Default of one (non-list) value of `field`.

    Resolution order:
        1. the declaration's explicit `default` (deep-copied)
        2. `object`: the initial state of its nested fields
        3. `block`: None (no variant is chosen)
        4. the type module's default
        5. None
    """
    if field.default is not None:
        return copy.deepcopy(field.default)
    if field.is_object:
        return initialize_state(field.children, {}, registry)
    if field.is_block:
        return None
    return get_default(field.type, registry)


def get_list_default(field: "FieldDeclaration", registry: Optional["FieldRegistry"] = None) -> List[Any]:
    """
    Default items of a list field.

    - `list.default` sequence: copied as-is
    - `list.default` count: that many item defaults (e.g. fresh UUIDs)
    - otherwise: an empty list
    """
    default = field.list_spec.default
    if isinstance(default, (list, tuple)):
        return copy.deepcopy(list(default))
    if isinstance(default, int) and not isinstance(default, bool) and default > 0:
        return [get_default_value(field, registry) for _ in range(default)]
    return []


def initialize_state(
    fields: Optional[Iterable["FieldDeclaration"]],
    content: Optional[Dict[str, Any]] = None,
    registry: Optional["FieldRegistry"] = None,
) -> Dict[str, Any]:
    """
    Initial state of an entry: `content` with every missing value (absent or
    None) replaced by its default. Nested objects are filled recursively.

    Example:
        initialize_state([FieldDeclaration(name="id", type="uuid")])
        # {"id": "0b6c...-..."}
    """
    if not fields:
        return {}

    def _fill(value: Any, field: "FieldDeclaration") -> Any:
        if value is not None:
            return value
        return get_list_default(field, registry) if field.is_list else get_default_value(field, registry)

    return deep_map(content or {}, list(fields), _fill, fill_objects=True)
