#!/usr/bin/env python3
"""
Purpose:
    Provides common utility functions such as name validation, dictionary
    merge, dotted-path access and file I/O utilities for entryfields.
"""

import json
import re
from pathlib import Path
from typing import Any, Dict, Mapping

import yaml

from entryfields.core.constants import (
    FIELDNAME_ALLOWED_RE, TYPE_NAME_ALLOWED_RE, DEFAULT_TEXT_ENCODING, FRONT_MATTER_RE
)


# --- Validation Helpers --- #

def is_valid_fieldname_pattern(name: str) -> bool:
    """Return True if the field name fully matches the allowed pattern."""
    return bool(FIELDNAME_ALLOWED_RE.fullmatch(name))


def is_valid_type_name(name: str) -> bool:
    """Return True if the field type name fully matches the allowed pattern."""
    return bool(TYPE_NAME_ALLOWED_RE.fullmatch(name))


# --- Generic Utilities --- #

def merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge two dictionaries (values from 'override' take precedence).
    Non-dict values are overwritten; dict values are merged depth-first.
    """
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = merge_dicts(result[k], v)
        else:
            result[k] = v
    return result


_INDEX_SEGMENT_RE = re.compile(r"^(?P<key>[^\[]*)\[(?P<index>\d+)\]$")


def safe_access(data: Any, path: str) -> Any:
    """
    Resolve a dotted path with optional list indexes against nested data.

    Examples:
        safe_access({"a": {"b": 1}}, "a.b")          -> 1
        safe_access({"a": [{"b": 1}]}, "a[0].b")     -> 1
        safe_access({"a": {}}, "a.b.c")              -> None
    """
    current = data
    for part in path.split("."):
        if current is None:
            return None
        m = _INDEX_SEGMENT_RE.match(part)
        if m:
            seq = current.get(m.group("key")) if isinstance(current, Mapping) else None
            index = int(m.group("index"))
            if not isinstance(seq, list) or index >= len(seq):
                return None
            current = seq[index]
        elif isinstance(current, Mapping):
            current = current.get(part)
        else:
            return None
    return current


# --- File I/O Helpers --- #

def load_json_file(path: Path) -> Dict[str, Any]:
    """
    Load a JSON file from 'path'. Returns an empty dict if the file is missing.

    Raises:
        ValueError: if the file exists but contains invalid JSON.
    """
    if not path.exists():
        return {}
    try:
        with path.open("r", encoding=DEFAULT_TEXT_ENCODING) as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(
            f"Invalid JSON in {str(path)!r}: {e.msg} (line {e.lineno}, col {e.colno})"
        ) from e


def load_structured_file(path: Path) -> Dict[str, Any]:
    """
    Load a YAML or JSON mapping from 'path' (by extension).

    Raises:
        FileNotFoundError: if the file does not exist
        ValueError: if the payload is not a mapping or cannot be parsed
    """
    if not path.exists():
        raise FileNotFoundError(f"The file {str(path)!r} does not exist")
    text = path.read_text(encoding=DEFAULT_TEXT_ENCODING)
    try:
        data = json.loads(text) if path.suffix.lower() == ".json" else yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ValueError(f"Failed to parse {str(path)!r}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the top of {str(path)!r}, got {type(data).__name__}")
    return data


def split_front_matter(text: str) -> tuple[Dict[str, Any], str]:
    """
    Split a Markdown document into (front matter mapping, body).

    Documents without a leading '---' block return ({}, text).
    """
    m = FRONT_MATTER_RE.match(text)
    if not m:
        return {}, text
    data = yaml.safe_load(m.group(1) or "") or {}
    if not isinstance(data, dict):
        raise ValueError("Front matter must be a YAML mapping")
    return data, text[m.end():]
