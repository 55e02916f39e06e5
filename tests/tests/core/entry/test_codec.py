#!/usr/bin/env python3
from datetime import date

import pytest

from entryfields.core.entry.codec import deep_map, read, read_entry, sanitize_object, write, write_entry
from entryfields.core.errors import TransformError, UnknownFieldType
from entryfields.core.fields.module import FieldModule
from entryfields.core.fields.registry import build_registry
from entryfields.core.schema.field_declaration import FieldDeclaration


REGISTRY = build_registry()
MEDIA = {"media": {"input": "media", "output": "/media"}}


# --- Helpers --- #

def _fd(**payload) -> FieldDeclaration:
    return FieldDeclaration.model_validate(payload)


def _boom(value, field, config_object=None):
    raise ValueError("boom")


FIELDS = [
    _fd(name="title"),
    _fd(name="meta", type="object", fields=[
        {"name": "published", "type": "date", "options": {"format": "dd/MM/yyyy"}},
    ]),
    _fd(name="gallery", type="image", list=True),
    _fd(name="body", type="block", list=True, blocks=[
        {"name": "event", "fields": [{"name": "when", "type": "date", "options": {"format": "dd/MM/yyyy"}}]},
        {"name": "quote", "fields": [{"name": "text"}]},
    ]),
]

STORED = {
    "title": "Hello",
    "meta": {"published": "31/01/2024"},
    "gallery": ["/media/a.png", "/media/b.png"],
    "body": [
        {"_block": "event", "when": "01/02/2024"},
        {"_block": "quote", "text": "Hi"},
        {"_block": "unknown", "when": "01/02/2024"},
    ],
    "layout": "post",
}


# --- Single values --- #

def test_read_and_write_single_values():
    field = _fd(name="d", type="date", options={"format": "dd/MM/yyyy"})
    assert read("31/01/2024", field, registry=REGISTRY) == "2024-01-31"
    assert write("2024-01-31", field, registry=REGISTRY) == "31/01/2024"


def test_types_without_transforms_are_identity():
    field = _fd(name="title")
    assert read({"odd": 1}, field, registry=REGISTRY) == {"odd": 1}
    assert write(None, field, registry=REGISTRY) is None


def test_scalar_lists_map_item_wise():
    field = _fd(name="days", type="date", list=True, options={"format": "dd/MM/yyyy"})
    assert read(["31/01/2024", "01/02/2024"], field, registry=REGISTRY) == ["2024-01-31", "2024-02-01"]


def test_list_aware_types_receive_the_whole_list():
    seen = []

    def _read(value, field, config_object=None):
        seen.append(value)
        return value

    reg = build_registry(extra=[("file", FieldModule(read=_read))])
    read(["a", "b"], _fd(name="f", type="file", list=True), registry=reg)
    assert seen == [["a", "b"]]


def test_read_raises_transform_error():
    reg = build_registry(extra=[("broken", FieldModule(read=_boom))])
    with pytest.raises(TransformError) as exc:
        read("x", _fd(name="x", type="broken"), registry=reg)
    assert exc.value.path == "x"
    assert isinstance(exc.value.cause, ValueError)


def test_unknown_type_raises():
    with pytest.raises(UnknownFieldType):
        read("x", _fd(name="x", type="nope"), registry=REGISTRY)


# --- Whole entries --- #

def test_read_entry_transforms_nested_values():
    result = read_entry(STORED, FIELDS, MEDIA, REGISTRY)
    assert result.ok
    values = result.values
    assert values["meta"] == {"published": "2024-01-31"}
    assert values["gallery"] == ["media/a.png", "media/b.png"]
    assert values["body"][0] == {"_block": "event", "when": "2024-02-01"}
    assert values["body"][1] == {"_block": "quote", "text": "Hi"}
    # unknown block variants are kept unchanged
    assert values["body"][2] == {"_block": "unknown", "when": "01/02/2024"}
    # undeclared keys are kept
    assert values["layout"] == "post"


def test_write_entry_inverts_read_entry():
    edited = read_entry(STORED, FIELDS, MEDIA, REGISTRY).values
    written = write_entry(edited, FIELDS, MEDIA, REGISTRY).values
    assert written == STORED


def test_transform_failures_are_reported_per_field():
    reg = build_registry(extra=[("broken", FieldModule(read=_boom))])
    fields = [_fd(name="ok"), _fd(name="meta", type="object", fields=[{"name": "bad", "type": "broken"}])]
    result = read_entry({"ok": "fine", "meta": {"bad": "raw"}}, fields, registry=reg)
    assert not result.ok
    assert result.values == {"ok": "fine", "meta": {"bad": "raw"}}
    assert result.failures == {"meta.bad": "Could not read value: boom"}


def test_missing_values_are_passed_to_transforms():
    result = read_entry({}, [_fd(name="d", type="date"), _fd(name="title")], registry=REGISTRY)
    assert result.values == {"d": "", "title": None}


def test_non_list_value_for_list_field_becomes_empty():
    result = read_entry({"tags": "a"}, [_fd(name="tags", list=True)], registry=REGISTRY)
    assert result.values == {"tags": []}


# --- deep_map --- #

def test_deep_map_applies_to_scalars_only():
    fields = [
        _fd(name="title"),
        _fd(name="authors", type="object", list=True, fields=[{"name": "name"}]),
    ]
    content = {"title": "a", "authors": [{"name": "b"}, {"name": "c"}]}
    upper = deep_map(content, fields, lambda value, field: value.upper() if isinstance(value, str) else value)
    assert upper == {"title": "A", "authors": [{"name": "B"}, {"name": "C"}]}


def test_deep_map_leaves_none_items_and_missing_objects():
    fields = [_fd(name="tags", list=True), _fd(name="meta", type="object", fields=[{"name": "x"}])]
    out = deep_map({"tags": ["a", None]}, fields, lambda value, field: f"<{value}>")
    assert out == {"tags": ["<a>", None], "meta": None}


# --- Sanitizing --- #

def test_sanitize_object_drops_empty_values():
    obj = {
        "a": "",
        "b": {"c": None},
        "d": [None, 1, ""],
        "e": 0,
        "f": False,
        "g": [],
        "h": {"i": {"j": ""}},
        "k": [{"l": ""}, {"m": "x"}],
        "when": date(2024, 1, 31),
    }
    assert sanitize_object(obj) == {
        "d": [1],
        "e": 0,
        "f": False,
        "k": [{}, {"m": "x"}],
        "when": date(2024, 1, 31),
    }


def test_sanitize_object_scalars_pass_through():
    assert sanitize_object("x") == "x"
    assert sanitize_object([None, "", "y"]) == ["y"]
