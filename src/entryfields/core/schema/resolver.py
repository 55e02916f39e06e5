#!/usr/bin/env python3
"""
Purpose:
    Turns field declarations into runtime-generated Pydantic models and
    TypeAdapters that validate entry values, composing each type's schema
    builder with list cardinality, nested objects, block unions and a single
    required/optional rule.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, Iterable, List, Literal, Mapping, Optional, Union

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    TypeAdapter,
    ValidationError,
    WrapValidator,
    create_model,
)

from entryfields.core.fields.constraints import annotate, fail
from entryfields.core.fields.registry import FieldRegistry
from entryfields.core.schema.field_declaration import FieldDeclaration
from entryfields.core.schema.validation import ValidationResult


ConfigObject = Mapping[str, Any]

# Internal attribute name of the block discriminator in variant models
_TAG_ATTR = "block_tag"


# --- Validator --- #

class Validator:
    """
    Validates values against a generated model and reports every error.

    `validate()` never raises for invalid data; it returns a
    `ValidationResult` carrying all field errors with their paths.
    """

    def __init__(self, model: type[BaseModel], *, field_name: Optional[str] = None):
        self._adapter = TypeAdapter(model)
        self._field_name = field_name

    @property
    def field_name(self) -> Optional[str]:
        """Name of the single field validated, or None for whole entries."""
        return self._field_name

    def validate(self, value: Any) -> ValidationResult:
        payload = {self._field_name: value} if self._field_name is not None else value
        try:
            validated = self._adapter.validate_python(payload)
        except ValidationError as e:
            return ValidationResult.from_validation_error(value, e)
        dumped = self._adapter.dump_python(validated, by_alias=True)
        return ValidationResult(value=dumped[self._field_name] if self._field_name is not None else dumped)

    def is_valid(self, value: Any) -> bool:
        return self.validate(value).valid


# --- Public API --- #

def resolve_validator(
    field: FieldDeclaration,
    config_object: Optional[ConfigObject] = None,
    registry: Optional[FieldRegistry] = None,
) -> Validator:
    """
    Build a validator for one field's value.

    Errors are reported under the field's name (e.g. `title: This field is required`).
    A fresh validator is built on every call.

    Raises:
        UnknownFieldType: if the field (or a nested field) has an unregistered type

    Example:
        validator = resolve_validator(FieldDeclaration(name="title", required=True))
        validator.validate("").messages()  # ["title: This field is required"]
    """
    reg = _registry(registry)
    model = _model_for_fields([field], f"{_model_name(field.name)}Field", config_object, reg)
    return Validator(model, field_name=field.name)


def resolve_entry_validator(
    fields: Iterable[FieldDeclaration],
    config_object: Optional[ConfigObject] = None,
    registry: Optional[FieldRegistry] = None,
    *,
    ignore_hidden: bool = False,
) -> Validator:
    """
    Build a validator for a whole entry (mapping of field name to value).

    Keys not declared in `fields` are ignored. With `ignore_hidden`, hidden
    declarations are not validated.

    Raises:
        UnknownFieldType: if any field has an unregistered type
    """
    reg = _registry(registry)
    model = _model_for_fields(list(fields), "Entry", config_object, reg, ignore_hidden=ignore_hidden)
    return Validator(model)


def field_annotation(
    field: FieldDeclaration,
    config_object: Optional[ConfigObject] = None,
    registry: Optional[FieldRegistry] = None,
    *,
    ignore_hidden: bool = False,
) -> Any:
    """
    Map a declaration to a typing object (or generated model) describing its value.

    - scalar types: the registered schema builder (`Any` when the type has none)
    - `object`: a generated model of the nested fields
    - `block`: a union of variant models selected by the `blockKey` value
    - `list`: a list of the above with `list.min`/`list.max` bounds
    - required/optional: applied last, uniformly for every type; required
      list fields also reject empty items

    Raises:
        UnknownFieldType: if the type is not registered
    """
    reg = _registry(registry)

    if field.is_object:
        item = _model_for_fields(field.children, f"{_model_name(field.name)}Object", config_object, reg,
                                 ignore_hidden=ignore_hidden)
    elif field.is_block:
        item = _block_union(field, config_object, reg, ignore_hidden=ignore_hidden)
    else:
        reg.require_type(field.type, field.name)
        builder = reg.schema(field.type)
        item = builder(field, config_object) if builder is not None else Any

    if field.is_list:
        # required applies to every item as well as to the list
        if field.required:
            item = Annotated[item, WrapValidator(_required)]
        annotation = _list_of(item, field)
    else:
        annotation = item
    return _with_presence(annotation, field)


# --- Internals --- #

def _registry(registry: Optional[FieldRegistry]) -> FieldRegistry:
    if registry is not None:
        return registry
    from entryfields.core.app import get_registry
    return get_registry()


class _EntryModel(BaseModel):
    """Base model for generated models; undeclared keys are ignored."""
    model_config = ConfigDict(extra="ignore", populate_by_name=False)


def _model_for_fields(
    fields: List[FieldDeclaration],
    model_name: str,
    config_object: Optional[ConfigObject],
    registry: FieldRegistry,
    *,
    ignore_hidden: bool = False,
    extra: Optional[Dict[str, Any]] = None,
) -> type[_EntryModel]:
    """
    Create a Pydantic model class for an object with the given declarations.

    Attribute names are positional (`f0`, `f1`, ...) and the declared name is
    the alias, so any declared name (dashes, leading underscore) is accepted.
    """
    field_defs: Dict[str, Any] = dict(extra or {})
    for index, fd in enumerate(fields):
        if ignore_hidden and fd.hidden:
            continue
        annotation = field_annotation(fd, config_object, registry, ignore_hidden=ignore_hidden)
        default = ... if fd.required else None
        field_defs[f"f{index}"] = (annotation, Field(default, alias=fd.name))
    return create_model(model_name, __base__=_EntryModel, **field_defs)  # type: ignore[call-overload]


def _list_of(item: Any, field: FieldDeclaration) -> Any:
    """`list[item]` with cardinality checks from the list spec."""
    spec = field.list_spec
    validators = []

    if spec.min:
        def _min(values: list) -> list:
            if len(values) < spec.min:
                raise fail("too_short", f"Minimum {spec.min} items")
            return values
        validators.append(AfterValidator(_min))

    if spec.max:
        def _max(values: list) -> list:
            if len(values) > spec.max:
                raise fail("too_long", f"Maximum {spec.max} items")
            return values
        validators.append(AfterValidator(_max))

    return annotate(List[item], *validators)


def _block_union(
    field: FieldDeclaration,
    config_object: Optional[ConfigObject],
    registry: FieldRegistry,
    *,
    ignore_hidden: bool = False,
) -> Any:
    """
    Tagged union of block variants, selected by `field.discriminator`.

    Each variant validates only its own nested fields; an unknown or missing
    tag is reported as `unknown_block`.
    """
    key = field.discriminator
    blocks = field.blocks or []
    names = [b.name for b in blocks]
    expected = ", ".join(repr(n) for n in names)

    variants = []
    for block in blocks:
        tag_def = (Literal[block.name], Field(block.name, alias=key))  # type: ignore[valid-type]
        model = _model_for_fields(
            block.children,
            f"{_model_name(field.name)}{_model_name(block.name)}Block",
            config_object,
            registry,
            ignore_hidden=ignore_hidden,
            extra={_TAG_ATTR: tag_def},
        )
        variants.append((block.name, model))

    def _check_tag(value: Any) -> Any:
        if isinstance(value, Mapping):
            tag = value.get(key)
            if tag is None:
                raise fail("unknown_block", f"Missing block variant key {key!r}; expected one of {expected}")
            if tag not in names:
                raise fail("unknown_block", f"Unknown block variant {tag!r}; expected one of {expected}")
        return value

    def _tag_of(value: Any) -> Any:
        if isinstance(value, Mapping):
            return value.get(key)
        return getattr(value, _TAG_ATTR, None)

    if len(variants) == 1:
        return Annotated[variants[0][1], BeforeValidator(_check_tag)]

    union = Union[tuple(Annotated[model, Tag(name)] for name, model in variants)]  # type: ignore[misc]
    return Annotated[
        union,
        Discriminator(
            _tag_of,
            custom_error_type="unknown_block",
            custom_error_message=f"Expected a block with {key!r} set to one of {expected}",
        ),
        BeforeValidator(_check_tag),
    ]


def _is_empty(value: Any) -> bool:
    return value is None or value == ""


def _optional(value: Any, handler) -> Any:
    if _is_empty(value):
        return value
    return handler(value)


def _required(value: Any, handler) -> Any:
    if _is_empty(value):
        raise fail("required", "This field is required")
    return handler(value)


def _with_presence(annotation: Any, field: FieldDeclaration) -> Any:
    """
    Apply the required/optional rule around any annotation: optional fields
    accept the empty sentinels (None, "") as-is, required fields reject them.
    """
    return Annotated[annotation, WrapValidator(_required if field.required else _optional)]


def _model_name(name: str) -> str:
    return "".join(part.title() for part in name.replace("-", "_").split("_")) or "Field"
