#!/usr/bin/env python3
"""
Purpose:
    Edit/view component lookup by field type, and HTML rendering of field
    values for listing views using the Jinja2 templates packaged with
    entryfields (`core/fields/templates/<view_component>.html.j2`).
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path, PurePosixPath
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateNotFound, select_autoescape
from loguru import logger
from markupsafe import Markup

from entryfields.core.constants import STRUCTURAL_TYPES
from entryfields.core.dates import format_date, input_format, parse_date
from entryfields.core.fields.core.rich_text import render_markdown

if TYPE_CHECKING:
    from entryfields.core.fields.registry import FieldRegistry
    from entryfields.core.schema.field_declaration import FieldDeclaration


TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "fields" / "templates"
TEMPLATE_SUFFIX = ".html.j2"
FALLBACK_VIEW = "string"


def _registry(registry: Optional["FieldRegistry"]) -> "FieldRegistry":
    if registry is not None:
        return registry
    from entryfields.core.app import get_registry
    return get_registry()


# --- Component lookup --- #

def get_edit_component(type_name: str, registry: Optional["FieldRegistry"] = None) -> Optional[str]:
    """
    Name of the edit component of `type_name`, or None when the type supplies none.
    Structural types (`object`, `block`) have no component.

    Raises:
        UnknownFieldType: if the type is not registered
    """
    if type_name in STRUCTURAL_TYPES:
        return None
    reg = _registry(registry)
    reg.require_type(type_name)
    return reg.edit_component(type_name)


def get_view_component(type_name: str, registry: Optional["FieldRegistry"] = None) -> Optional[str]:
    """
    Name of the view component of `type_name`, or None when the type supplies none.

    Raises:
        UnknownFieldType: if the type is not registered
    """
    if type_name in STRUCTURAL_TYPES:
        return None
    reg = _registry(registry)
    reg.require_type(type_name)
    return reg.view_component(type_name)


# --- Filters --- #

def date_display(value: Any, field: "FieldDeclaration") -> str:
    """Stored date in the field's storage format; unparseable values as-is."""
    fmt = field.option("format") or input_format(bool(field.option("time")))
    parsed = parse_date(value, fmt)
    if parsed is None:
        return "" if value is None else str(value)
    return format_date(parsed, fmt)


def basename(value: Any) -> str:
    return PurePosixPath(str(value)).name


def rich_text(value: Any, field: "FieldDeclaration") -> Markup:
    """Stored Markdown rendered to HTML; `format: html` values are trusted as-is."""
    html = str(value) if field.option("format") == "html" else render_markdown(value)
    return Markup(html.strip())


# --- Rendering --- #

@lru_cache(maxsize=1)
def _env() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(enabled_extensions=("html", "j2"), default_for_string=True),
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=StrictUndefined,
    )
    env.filters.update({"date_display": date_display, "basename": basename, "rich_text": rich_text})
    return env


def _as_values(value: Any) -> List[Any]:
    if value is None or value == "":
        return []
    if isinstance(value, (list, tuple)):
        return [v for v in value if v is not None and v != ""]
    return [value]


def render_view(
    value: Any,
    field: "FieldDeclaration",
    registry: Optional["FieldRegistry"] = None,
) -> str:
    """
    Render a stored value as an HTML fragment with the type's view template.

    Types without a view component (or whose template does not exist) use
    the `string` view. Values are autoescaped; list values are rendered item
    by item.

    Raises:
        UnknownFieldType: if the type is not registered
    """
    component = get_view_component(field.type, registry) or FALLBACK_VIEW
    env = _env()
    try:
        template = env.get_template(f"{component}{TEMPLATE_SUFFIX}")
    except TemplateNotFound:
        logger.debug(f"No view template for component {component!r}; using {FALLBACK_VIEW!r}")
        template = env.get_template(f"{FALLBACK_VIEW}{TEMPLATE_SUFFIX}")

    context: Dict[str, Any] = {
        "values": _as_values(value),
        "field": field,
        "options": field.options or {},
    }
    return template.render(**context).strip()
