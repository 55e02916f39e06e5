#!/usr/bin/env python3
from typing import List

import pytest
from pydantic import BaseModel, ValidationError

from entryfields.core.formatting import error_message, format_error_loc, format_pydantic_errors_simple


class _Item(BaseModel):
    name: str


class _Doc(BaseModel):
    items: List[_Item]


@pytest.mark.parametrize("loc,expected", [
    (("fields", 1, "name"), "fields[1].name"),
    ((0, "items"), "[0].items"),
    (("matrix", 0, 1), "matrix[0][1]"),
    ((), "<root>"),
])
def test_format_error_loc(loc, expected):
    assert format_error_loc(loc) == expected


def test_format_pydantic_errors_simple():
    with pytest.raises(ValidationError) as exc:
        _Doc.model_validate({"items": [{"name": "ok"}, {}]})
    assert format_pydantic_errors_simple(exc.value) == ["items[1].name: Field required"]


def test_format_non_pydantic_errors_uses_first_line():
    assert format_pydantic_errors_simple(ValueError("first\nsecond")) == ["first"]


def test_error_message_overrides():
    assert error_message({"type": "missing", "msg": "Field required"}) == "This field is required"
    assert error_message({"type": "string_type", "msg": "Input should be a valid string"}) == (
        "Input should be a valid string"
    )
    assert error_message({}) == "Validation error"
