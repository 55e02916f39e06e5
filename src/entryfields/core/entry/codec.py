#!/usr/bin/env python3
"""
Purpose:
    Entry codec: applies the per-type read/write transforms over whole
    entries (nested objects, lists and blocks included), and sanitizes
    entries before they are saved.

Direction:
    read:  stored value (parsed YAML/JSON/front matter) -> edit-form value
    write: edit-form value -> stored value
"""
from __future__ import annotations

from dataclasses import dataclass, field as dc_field
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, TYPE_CHECKING

from loguru import logger

from entryfields.core.errors import TransformError

if TYPE_CHECKING:
    from entryfields.core.fields.registry import FieldRegistry
    from entryfields.core.schema.field_declaration import FieldDeclaration


ConfigObject = Mapping[str, Any]
Apply = Callable[[Any, "FieldDeclaration"], Any]


@dataclass
class CodecResult:
    """
    Transformed entry plus the fields that could not be transformed.

    - values:   the transformed entry; failed fields keep their input value
    - failures: field path -> message
    """
    values: Dict[str, Any]
    failures: Dict[str, str] = dc_field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failures


# --- Traversal --- #

def _join(path: str, name: str) -> str:
    return f"{path}.{name}" if path else name


def _walk(
    data: Mapping[str, Any],
    fields: List["FieldDeclaration"],
    apply: Callable[[Any, "FieldDeclaration", str], Any],
    path: str,
    fill_objects: bool,
    whole_list: Optional[Callable[["FieldDeclaration"], bool]] = None,
) -> Dict[str, Any]:
    result = dict(data)
    for fd in fields:
        value = data.get(fd.name)
        fd_path = _join(path, fd.name)
        if fd.is_list:
            if value is None or (whole_list is not None and whole_list(fd)):
                result[fd.name] = apply(value, fd, fd_path)
            elif isinstance(value, list):
                result[fd.name] = [
                    item if item is None else _item(item, fd, apply, f"{fd_path}[{i}]", fill_objects, whole_list)
                    for i, item in enumerate(value)
                ]
            else:
                result[fd.name] = []
        else:
            result[fd.name] = _item(value, fd, apply, fd_path, fill_objects, whole_list)
    return result


def _item(
    value: Any,
    fd: "FieldDeclaration",
    apply: Callable[[Any, "FieldDeclaration", str], Any],
    path: str,
    fill_objects: bool,
    whole_list: Optional[Callable[["FieldDeclaration"], bool]] = None,
) -> Any:
    if fd.is_object:
        if isinstance(value, Mapping):
            return _walk(value, fd.children, apply, path, fill_objects, whole_list)
        return apply(value, fd, path) if fill_objects else value
    if fd.is_block:
        if isinstance(value, Mapping):
            variant = fd.get_block(value.get(fd.discriminator))
            if variant is None:
                return dict(value)
            return _walk(value, variant.children, apply, path, fill_objects, whole_list)
        return apply(value, fd, path) if fill_objects else value
    return apply(value, fd, path)


def deep_map(
    content: Mapping[str, Any],
    fields: Iterable["FieldDeclaration"],
    apply: Apply,
    *,
    fill_objects: bool = False,
) -> Dict[str, Any]:
    """
    Rebuild `content`, replacing each scalar value with `apply(value, field)`.

    - object fields are traversed into their nested fields
    - block values are traversed into the variant named by the discriminator
      key (unknown variants are copied unchanged)
    - list fields map item-wise; a missing list is passed to `apply` whole,
      a non-list value becomes `[]`
    - with `fill_objects`, missing object/block values are passed to `apply`
      instead of being left as-is

    Keys not declared in `fields` are kept.
    """
    return _walk(content, list(fields), lambda v, fd, _path: apply(v, fd), "", fill_objects)


# --- Transforms --- #

def _registry(registry: Optional["FieldRegistry"]) -> "FieldRegistry":
    if registry is not None:
        return registry
    from entryfields.core.app import get_registry
    return get_registry()


def _whole_list(registry: "FieldRegistry") -> Callable[["FieldDeclaration"], bool]:
    """Scalar list fields whose type transforms the whole list at once."""
    return lambda fd: not (fd.is_object or fd.is_block) and registry.supports_list(fd.type)


def _transform(
    direction: str,
    value: Any,
    fd: "FieldDeclaration",
    config_object: Optional[ConfigObject],
    registry: "FieldRegistry",
    path: str,
) -> Any:
    if fd.is_object or fd.is_block:
        return value
    registry.require_type(fd.type, fd.name)
    fn = registry.read_fn(fd.type) if direction == "read" else registry.write_fn(fd.type)
    if fn is None:
        return value
    try:
        return fn(value, fd, config_object)
    except Exception as e:
        raise TransformError(path, direction, e) from e


def _transform_value(
    direction: str,
    value: Any,
    fd: "FieldDeclaration",
    config_object: Optional[ConfigObject],
    registry: Optional["FieldRegistry"],
) -> Any:
    reg = _registry(registry)

    def _apply(v: Any, child: "FieldDeclaration", path: str) -> Any:
        return _transform(direction, v, child, config_object, reg, path)

    return _walk({fd.name: value}, [fd], _apply, "", False, _whole_list(reg))[fd.name]


def read(
    value: Any,
    field: "FieldDeclaration",
    config_object: Optional[ConfigObject] = None,
    registry: Optional["FieldRegistry"] = None,
) -> Any:
    """
    Stored value -> edit-form value. Identity for types without a read
    transform; nested and list values are transformed item by item.

    Raises:
        UnknownFieldType: if a scalar field's type is not registered
        TransformError: if a transform fails
    """
    return _transform_value("read", value, field, config_object, registry)


def write(
    value: Any,
    field: "FieldDeclaration",
    config_object: Optional[ConfigObject] = None,
    registry: Optional["FieldRegistry"] = None,
) -> Any:
    """
    Edit-form value -> stored value (inverse of `read`).

    Raises:
        UnknownFieldType: if a scalar field's type is not registered
        TransformError: if a transform fails
    """
    return _transform_value("write", value, field, config_object, registry)


def _transform_entry(
    direction: str,
    content: Mapping[str, Any],
    fields: Iterable["FieldDeclaration"],
    config_object: Optional[ConfigObject],
    registry: Optional["FieldRegistry"],
) -> CodecResult:
    reg = _registry(registry)
    failures: Dict[str, str] = {}

    def _apply(value: Any, fd: "FieldDeclaration", path: str) -> Any:
        try:
            return _transform(direction, value, fd, config_object, reg, path)
        except TransformError as e:
            logger.warning(str(e))
            failures[path] = f"Could not {direction} value: {e.cause}"
            return value

    values = _walk(content or {}, list(fields), _apply, "", False, _whole_list(reg))
    return CodecResult(values=values, failures=failures)


def read_entry(
    content: Mapping[str, Any],
    fields: Iterable["FieldDeclaration"],
    config_object: Optional[ConfigObject] = None,
    registry: Optional["FieldRegistry"] = None,
) -> CodecResult:
    """
    Apply read transforms over a stored entry.

    A failing transform does not abort the entry: the field keeps its stored
    value and the failure is reported under its path.

    Raises:
        UnknownFieldType: if any field's type is not registered
    """
    return _transform_entry("read", content, fields, config_object, registry)


def write_entry(
    content: Mapping[str, Any],
    fields: Iterable["FieldDeclaration"],
    config_object: Optional[ConfigObject] = None,
    registry: Optional["FieldRegistry"] = None,
) -> CodecResult:
    """Apply write transforms over an edited entry (see `read_entry`)."""
    return _transform_entry("write", content, fields, config_object, registry)


# --- Sanitizing --- #

def _is_empty(value: Any) -> bool:
    return value is None or value == ""


def _is_container(value: Any) -> bool:
    return isinstance(value, (list, dict))


def sanitize_object(obj: Any) -> Any:
    """
    Recursively drop empty values before saving.

    - None and "" are removed from mappings and lists
    - keys whose value becomes an empty mapping, or a list of only empty
      values, are removed
    - dates and non-empty scalars (including 0 and False) are kept

    Example:
        sanitize_object({"a": "", "b": {"c": None}, "d": [None, 1], "e": 0})
        # {"d": [1], "e": 0}
    """
    if isinstance(obj, list):
        cleaned = [sanitize_object(v) if _is_container(v) else v for v in obj]
        return [v for v in cleaned if not _is_empty(v)]

    if isinstance(obj, dict):
        result: Dict[str, Any] = {}
        for key, value in obj.items():
            if _is_container(value):
                value = sanitize_object(value)
            if isinstance(value, list) and all(_is_empty(v) for v in value):
                continue
            if isinstance(value, dict) and not value:
                continue
            if _is_empty(value):
                continue
            result[key] = value
        return result

    return obj
