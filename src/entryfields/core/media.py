#!/usr/bin/env python3
"""
Purpose:
    Media path helpers for file/image transforms: normalization of the
    settings `media` section and prefix swapping between the repository path
    of a media file (`input`) and the path written into content (`output`).
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Tuple, TYPE_CHECKING

from bs4 import BeautifulSoup

if TYPE_CHECKING:
    from entryfields.core.schema.field_declaration import FieldDeclaration


_EXTERNAL_PREFIXES = ("//", "http://", "https://", "data:image/")


def swap_prefix(path: Any, from_: Optional[str], to: Optional[str], relative: bool = False) -> Any:
    """
    Replace the `from_` prefix of `path` with `to`.

    Paths that are None, external (`http(s)://`, `//`, `data:image/`) or do
    not start with `from_` are returned unchanged, as is everything when
    `from_ == to`. With `relative=True` a leading `/` is dropped.

    Examples:
        swap_prefix("/images/a.png", "/images", "media")        -> "media/a.png"
        swap_prefix("media/a.png", "media", "/images")           -> "/images/a.png"
        swap_prefix("/images/a.png", "/images", "media", True)   -> "media/a.png"
        swap_prefix("a.png", "", "/")                            -> "/a.png"
    """
    if (
        path is None
        or from_ is None
        or to is None
        or from_ == to
        or not isinstance(path, str)
        or path.startswith(_EXTERNAL_PREFIXES)
        or not path.startswith(from_)
    ):
        return path

    if from_ == "":
        new_path = f"/{path}" if to == "/" else f"{to}/{path}"
    else:
        remaining = path[len(from_):]
        remaining = remaining[1:] if remaining.startswith("/") else remaining
        new_path = f"/{remaining}" if to == "/" else f"{to}/{remaining}"

    if relative and new_path.startswith("/"):
        new_path = new_path[1:]
    return new_path


def normalize_media(config_object: Optional[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    """
    The settings `media` section as a list of named configurations.

    - a string `images` becomes `{name: default, input: images, output: /images}`
    - a single mapping becomes a one-item list named `default`
    - `input` loses leading/trailing slashes, `output` its trailing slash
    """
    media = (config_object or {}).get("media")
    if not media:
        return []
    if isinstance(media, str):
        relative = media.strip("/")
        media = [{"name": "default", "label": "Media", "input": relative, "output": f"/{relative}"}]
    elif isinstance(media, Mapping):
        media = [{"name": "default", "label": "Media", **media}]

    normalized = []
    for item in media:
        if not isinstance(item, Mapping):
            continue
        entry = dict(item)
        if isinstance(entry.get("input"), str):
            entry["input"] = entry["input"].strip("/")
        if isinstance(entry.get("output"), str) and entry["output"] != "/":
            entry["output"] = entry["output"].rstrip("/")
        normalized.append(entry)
    return normalized


def media_config(field: "FieldDeclaration", config_object: Optional[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
    """
    Media configuration used by a field.

    `options.media: false` disables media handling, a string selects a named
    configuration, otherwise the first configuration applies.
    """
    choice = field.option("media")
    if choice is False:
        return None
    configs = normalize_media(config_object)
    if isinstance(choice, str):
        return next((c for c in configs if c.get("name") == choice), None)
    return configs[0] if configs else None


def media_prefixes(
    field: "FieldDeclaration", config_object: Optional[Mapping[str, Any]]
) -> Tuple[Optional[str], Optional[str]]:
    """(input, output) prefixes; `options.input`/`options.output` override the media configuration."""
    config = media_config(field, config_object) or {}
    return (
        field.option("input", config.get("input")),
        field.option("output", config.get("output")),
    )


def html_swap_prefix(html: Any, from_: Optional[str], to: Optional[str], relative: bool = False) -> Any:
    """
    `swap_prefix` applied to the `src` of every `<img>` in an HTML fragment.

    The fragment is returned untouched when no image source changes.
    """
    if not isinstance(html, str) or from_ is None or to is None or from_ == to or "<img" not in html:
        return html
    soup = BeautifulSoup(html, "html.parser")
    changed = False
    for img in soup.find_all("img", src=True):
        swapped = swap_prefix(img["src"], from_, to, relative)
        if swapped != img["src"]:
            img["src"] = swapped
            changed = True
    return str(soup) if changed else html
