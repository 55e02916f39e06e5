#!/usr/bin/env python3

import entryfields.core.constants as const


# --- Basic sanity checks on constants --- #

def test_structural_types_and_defaults():
    assert const.STRUCTURAL_TYPES == {const.OBJECT_TYPE, const.BLOCK_TYPE}
    assert const.DEFAULT_FIELD_TYPE not in const.STRUCTURAL_TYPES
    assert const.DEFAULT_BLOCK_KEY == "_block"
    assert all(x.startswith(".") for x in const.SUPPORTED_SETTINGS_EXT)


def test_capability_slots():
    assert len(set(const.CAPABILITIES)) == len(const.CAPABILITIES)
    assert {"schema", "default_value", "read", "write", "sort"} <= set(const.CAPABILITIES)


def test_regex_patterns_match_expected_inputs():
    assert const.FIELDNAME_ALLOWED_RE.fullmatch("meta-title_2")
    assert not const.FIELDNAME_ALLOWED_RE.fullmatch("meta title")

    assert const.TYPE_NAME_ALLOWED_RE.fullmatch("number-buttons")
    assert not const.TYPE_NAME_ALLOWED_RE.fullmatch("Number")

    assert const.COMPONENT_NAME_RE.fullmatch("fields/date-picker")
    assert not const.COMPONENT_NAME_RE.fullmatch("bad component")

    assert const.FRONT_MATTER_RE.match("---\ntitle: x\n---\nbody")
    assert not const.FRONT_MATTER_RE.match("title: x\n")
