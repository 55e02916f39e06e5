#!/usr/bin/env python3
import uuid
from datetime import datetime

import pytest

from entryfields.core.errors import UnknownFieldType
from entryfields.core.fields.module import FieldModule
from entryfields.core.fields.registry import build_registry
from entryfields.core.schema.field_declaration import FieldDeclaration
from entryfields.core.schema.resolver import field_annotation, resolve_entry_validator, resolve_validator


REGISTRY = build_registry()


# --- Helpers --- #

def _fd(**payload) -> FieldDeclaration:
    return FieldDeclaration.model_validate(payload)


def _validate(decl: dict, value, registry=REGISTRY):
    return resolve_validator(_fd(**decl), registry=registry).validate(value)


BLOCKS = {
    "name": "body",
    "type": "block",
    "list": True,
    "blockKey": "_type",
    "blocks": [
        {"name": "a", "fields": [{"name": "title", "required": True}]},
        {"name": "b", "fields": [{"name": "count", "type": "number"}]},
    ],
}


# --- Required string with maxlength --- #

TITLE = {"name": "title", "type": "string", "required": True, "options": {"maxlength": 5}}


@pytest.mark.parametrize("value", ["", None])
def test_required_string_rejects_empty_values(value):
    result = _validate(TITLE, value)
    assert not result.valid
    assert result.messages() == ["title: This field is required"]
    assert result.errors[0].code == "required"


def test_required_string_accepts_value_within_maxlength():
    result = _validate(TITLE, "abc")
    assert result.valid
    assert result.value == "abc"


def test_required_string_reports_maxlength():
    result = _validate(TITLE, "abcdef")
    assert result.messages() == ["title: Maximum length is 5 characters"]


def test_minlength_message():
    result = _validate({"name": "slug", "options": {"minlength": 3}}, "ab")
    assert result.messages() == ["slug: Minimum length is 3 characters"]


# --- Optional number with range --- #

COUNT = {"name": "count", "type": "number", "options": {"min": 1, "max": 10}}


@pytest.mark.parametrize("value", ["", None])
def test_optional_number_accepts_empty_values_unchanged(value):
    result = _validate(COUNT, value)
    assert result.valid
    assert result.value == value


@pytest.mark.parametrize("value,message", [
    (0, "count: Minimum value is 1"),
    (11, "count: Maximum value is 10"),
])
def test_optional_number_reports_range(value, message):
    assert _validate(COUNT, value).messages() == [message]


def test_number_parses_numeric_strings():
    result = _validate(COUNT, "5")
    assert result.valid
    assert result.value == 5.0


def test_number_rejects_non_numeric_text():
    result = _validate(COUNT, "abc")
    assert not result.valid
    assert result.errors[0].path == "count"


def test_zero_is_a_valid_bound():
    result = _validate({"name": "n", "type": "number", "options": {"min": 0}}, -1)
    assert result.messages() == ["n: Minimum value is 0"]


# --- Patterns --- #

def test_plain_pattern_uses_default_message():
    result = _validate({"name": "code", "pattern": "^[a-z]+$"}, "ABC")
    assert result.messages() == ["code: Invalid format"]


def test_pattern_spec_message_is_kept_verbatim():
    decl = {"name": "code", "pattern": {"regex": "^[a-z]+$", "message": "Use {lowercase} only"}}
    result = _validate(decl, "ABC")
    assert result.messages() == ["code: Use {lowercase} only"]


def test_pattern_uses_search_semantics():
    assert _validate({"name": "email", "pattern": "@"}, "someone@example.org").valid


def test_pattern_is_ignored_by_non_string_types():
    assert _validate({"name": "n", "type": "number", "pattern": "^x$"}, 3).valid


# --- Types --- #

def test_uuid_schema_accepts_uuid_and_rejects_garbage():
    assert _validate({"name": "id", "type": "uuid"}, str(uuid.uuid4())).valid
    assert _validate({"name": "id", "type": "uuid"}, "not-a-uuid").messages() == ["id: Invalid UUID"]


@pytest.mark.parametrize("value", [
    "{12345678-1234-5678-1234-567812345678}",
    "urn:uuid:12345678-1234-5678-1234-567812345678",
    "12345678123456781234567812345678",
])
def test_uuid_schema_requires_the_dashed_form(value):
    assert _validate({"name": "id", "type": "uuid"}, value).messages() == ["id: Invalid UUID"]


def test_uuid_schema_accepts_uppercase_dashed_form():
    assert _validate({"name": "id", "type": "uuid"}, "12345678-1234-5678-1234-56781234567A").valid


def test_numeric_options_given_as_strings():
    decl = {"name": "n", "type": "number", "options": {"min": "0", "max": "10.5"}}
    assert _validate(decl, 5).valid
    assert _validate(decl, -1).messages() == ["n: Minimum value is 0"]
    assert _validate(decl, 11).messages() == ["n: Maximum value is 10.5"]

    slug = {"name": "slug", "options": {"maxlength": "3"}}
    assert _validate(slug, "abcd").messages() == ["slug: Maximum length is 3 characters"]


def test_non_numeric_options_are_ignored():
    decl = {"name": "n", "type": "number", "options": {"min": "zero", "max": True}}
    assert _validate(decl, -100).valid
    assert _validate({"name": "s", "options": {"maxlength": "many"}}, "abcdef").valid


def test_select_accepts_values_and_value_label_pairs():
    decl = {"name": "status", "type": "select", "options": {"values": ["draft", {"value": "published", "label": "Published"}]}}
    assert _validate(decl, "published").valid
    result = _validate(decl, "other")
    assert result.messages() == ["status: Value must be one of 'draft', 'published'"]


def test_autocomplete_creatable_accepts_any_text():
    decl = {"name": "tag", "type": "autocomplete", "options": {"values": ["a"], "creatable": True}}
    assert _validate(decl, "anything").valid
    decl["options"]["creatable"] = False
    assert not _validate(decl, "anything").valid


def test_reference_multiple_expects_a_list():
    decl = {"name": "related", "type": "reference", "options": {"multiple": True}}
    assert _validate(decl, ["posts/a.md", "posts/b.md"]).valid
    assert not _validate(decl, 3).valid


def test_date_schema_parses_and_checks_bounds():
    decl = {"name": "published", "type": "date", "options": {"min": "2024-01-01"}}
    ok = _validate(decl, "2024-02-01")
    assert ok.valid
    assert ok.value == datetime(2024, 2, 1)
    assert _validate(decl, "2023-12-31").messages() == ["published: Minimum value is 2024-01-01"]
    assert _validate(decl, "someday").messages() == ["published: Invalid date"]


def test_date_schema_compares_offsets_with_naive_bounds():
    decl = {"name": "d", "type": "date", "options": {"min": "2024-01-01", "max": "2024-12-31T23:59"}}
    ok = _validate(decl, "2024-06-01T10:00:00+02:00")
    assert ok.valid
    assert ok.value == datetime(2024, 6, 1, 8, 0)
    assert _validate(decl, "2023-12-31T10:00:00+02:00").messages() == ["d: Minimum value is 2024-01-01"]
    assert _validate(decl, "2025-01-01T00:30:00Z").messages() == ["d: Maximum value is 2024-12-31T23:59"]


def test_date_schema_accepts_aware_bounds():
    decl = {"name": "d", "type": "date", "options": {"min": "2024-01-01T00:00:00+02:00"}}
    assert _validate(decl, "2023-12-31T23:00").valid
    assert not _validate(decl, "2023-12-31T21:00").valid


def test_type_without_schema_accepts_any_value():
    assert _validate({"name": "cover", "type": "image"}, {"src": 1}).valid


def test_unknown_type_raises():
    with pytest.raises(UnknownFieldType) as exc:
        resolve_validator(_fd(name="x", type="nope"), registry=REGISTRY)
    assert exc.value.type_name == "nope"
    assert exc.value.field_name == "x"


def test_unknown_nested_type_raises():
    decl = _fd(name="meta", type="object", fields=[{"name": "x", "type": "nope"}])
    with pytest.raises(UnknownFieldType):
        field_annotation(decl, registry=REGISTRY)


def test_overridden_schema_is_used():
    lenient = build_registry(extra=[("uuid", FieldModule(schema=lambda field, config_object=None: str))])
    assert _validate({"name": "id", "type": "uuid"}, "anything", registry=lenient).valid


# --- Lists --- #

TAGS = {"name": "tags", "list": {"min": 1, "max": 2}}


@pytest.mark.parametrize("value,message", [
    ([], "tags: Minimum 1 items"),
    (["a", "b", "c"], "tags: Maximum 2 items"),
])
def test_list_cardinality(value, message):
    assert _validate(TAGS, value).messages() == [message]


def test_list_item_errors_carry_their_index():
    result = _validate({"name": "tags", "list": True}, ["a", 3])
    assert [e.path for e in result.errors] == ["tags[1]"]


def test_list_of_numbers_validates_each_item():
    result = _validate({"name": "scores", "type": "number", "list": True, "options": {"max": 5}}, [1, 9])
    assert result.messages() == ["scores[1]: Maximum value is 5"]


@pytest.mark.parametrize("empty", ["", None])
def test_required_list_rejects_empty_items(empty):
    result = _validate({"name": "tags", "type": "string", "list": True, "required": True}, ["a", empty])
    assert result.messages() == ["tags[1]: This field is required"]
    assert result.errors[0].code == "required"


def test_required_list_of_numbers_rejects_empty_items():
    result = _validate({"name": "scores", "type": "number", "list": True, "required": True}, [1, ""])
    assert result.messages() == ["scores[1]: This field is required"]


def test_optional_list_keeps_empty_string_items():
    result = _validate({"name": "tags", "type": "string", "list": True}, ["a", ""])
    assert result.valid
    assert result.value == ["a", ""]


# --- Objects --- #

AUTHOR = {
    "name": "author",
    "type": "object",
    "fields": [
        {"name": "name", "required": True},
        {"name": "email", "pattern": {"regex": "@", "message": "Must contain @"}},
    ],
}


def test_object_reports_every_nested_error():
    result = _validate(AUTHOR, {"name": "", "email": "nope"})
    assert result.by_path() == {
        "author.name": ["This field is required"],
        "author.email": ["Must contain @"],
    }


def test_optional_object_accepts_none():
    assert _validate(AUTHOR, None).valid


def test_object_value_is_returned_with_declared_names():
    result = _validate(AUTHOR, {"name": "Ada", "email": "ada@example.org", "unknown": 1})
    assert result.valid
    assert result.value == {"name": "Ada", "email": "ada@example.org"}


def test_list_of_objects():
    decl = dict(AUTHOR, list=True)
    result = _validate(decl, [{"name": "Ada"}, {"name": ""}])
    assert result.messages() == ["author[1].name: This field is required"]


# --- Blocks --- #

def test_blocks_accept_each_variant():
    result = _validate(BLOCKS, [{"_type": "a", "title": "Hi"}, {"_type": "b", "count": 3}])
    assert result.valid
    assert result.value == [{"_type": "a", "title": "Hi"}, {"_type": "b", "count": 3.0}]


def test_blocks_reject_unknown_variant():
    result = _validate(BLOCKS, [{"_type": "c"}])
    assert len(result.errors) == 1
    error = result.errors[0]
    assert error.code == "unknown_block"
    assert error.path == "body[0]"
    assert "'c'" in error.message


def test_blocks_reject_missing_discriminator():
    result = _validate(BLOCKS, [{"title": "Hi"}])
    assert result.errors[0].code == "unknown_block"
    assert "'_type'" in result.errors[0].message


def test_blocks_validate_only_the_selected_variant():
    result = _validate(BLOCKS, [{"_type": "a", "title": ""}])
    assert len(result.errors) == 1
    assert result.errors[0].code == "required"
    assert result.errors[0].path.startswith("body[0]")
    assert result.errors[0].path.endswith("title")


def test_single_variant_block_checks_discriminator():
    decl = {"name": "hero", "type": "block", "blocks": [{"name": "banner", "fields": [{"name": "text"}]}]}
    assert _validate(decl, {"_block": "banner", "text": "Hello"}).valid
    result = _validate(decl, {"_block": "other"})
    assert result.errors[0].code == "unknown_block"


# --- Whole entries --- #

ENTRY_FIELDS = [
    _fd(name="title", required=True),
    _fd(name="count", type="number"),
    _fd(name="secret", required=True, hidden=True),
]


def test_entry_validator_reports_missing_required_keys():
    result = resolve_entry_validator(ENTRY_FIELDS, registry=REGISTRY).validate({"count": 2})
    assert result.by_path() == {
        "title": ["This field is required"],
        "secret": ["This field is required"],
    }


def test_entry_validator_can_ignore_hidden_fields():
    validator = resolve_entry_validator(ENTRY_FIELDS, registry=REGISTRY, ignore_hidden=True)
    result = validator.validate({"title": "Hello", "extra": "ignored"})
    assert result.valid
    assert result.value == {"title": "Hello", "count": None}


def test_entry_validator_rejects_non_mapping():
    result = resolve_entry_validator(ENTRY_FIELDS, registry=REGISTRY).validate(["nope"])
    assert not result.valid
    assert result.errors[0].path == "<root>"


def test_validators_are_independent():
    v1 = resolve_validator(_fd(**TITLE), registry=REGISTRY)
    v2 = resolve_validator(_fd(**TITLE), registry=REGISTRY)
    assert v1 is not v2
    assert v1.validate("ok").valid and v2.validate("").messages() == ["title: This field is required"]
