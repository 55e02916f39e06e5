#!/usr/bin/env python3
import pytest

from entryfields.core.errors import FieldRegistryError
from entryfields.core.fields.module import MISSING, FieldModule


def test_empty_module_has_no_capabilities():
    module = FieldModule()
    assert module.capabilities() == []
    assert module.default_value is MISSING
    assert not module.has("default_value")


def test_capabilities_in_declaration_order():
    module = FieldModule(label="X", default_value=None, sort=lambda a, b, field=None: 0, view_component="x")
    assert module.capabilities() == ["label", "sort", "view_component"]


def test_falsy_static_default_is_a_capability():
    assert FieldModule(default_value=False).has("default_value")
    assert FieldModule(default_value=0).capabilities() == ["default_value"]


@pytest.mark.parametrize("kwargs,match", [
    ({"read": 1}, "'read' must be callable"),
    ({"label": 3}, "'label' must be a string"),
    ({"edit_component": "has space"}, "invalid edit_component"),
])
def test_validate_rejects_malformed_slots(kwargs, match):
    with pytest.raises(FieldRegistryError, match=match):
        FieldModule(**kwargs).validate("thing")


def test_modules_are_frozen():
    module = FieldModule(label="X")
    with pytest.raises(AttributeError):
        module.label = "Y"
