#!/usr/bin/env python3
"""
Rich-text field: Markdown stored, HTML edited.

`read` renders stored Markdown to HTML for the editor and `write` converts
the edited HTML back to Markdown. Image sources are swapped between the
media `output` prefix (stored) and `input` prefix (edited), as for `file`.

Options:
    format: "html" stores HTML as-is, skipping the Markdown conversion
    media / input / output: media prefixes (see `entryfields.core.media`)
"""

import re
from typing import Callable, Optional

from bs4 import BeautifulSoup, Tag
from markdown_it import MarkdownIt
from markdownify import ATX, MarkdownConverter

from entryfields.core.entry.sorting import compare_strings
from entryfields.core.fields.module import FieldModule
from entryfields.core.media import html_swap_prefix, media_prefixes


_MARKDOWN = MarkdownIt("commonmark", {"html": True})

# Kept elements are swapped for these tokens before conversion
_PLACEHOLDER = "entryfieldsraw{}x"
_PLACEHOLDER_RE = re.compile(r"entryfieldsraw(\d+)x")
_BLANK_LINES_RE = re.compile(r"\n{3,}")


def render_markdown(text) -> str:
    """Markdown (CommonMark, inline HTML allowed) to HTML."""
    return _MARKDOWN.render(str(text))


def is_sized_image(el: Tag) -> bool:
    """Images with an explicit width or height cannot be expressed in Markdown."""
    return el.name == "img" and (el.has_attr("width") or el.has_attr("height"))


def to_markdown(
    html,
    keep: Callable[[Tag], bool] = is_sized_image,
    converter: type[MarkdownConverter] = MarkdownConverter,
) -> str:
    """
    HTML to Markdown with ATX headings and fenced code blocks.

    Elements matched by `keep` are written as raw HTML. Runs of blank lines
    are collapsed and the result is stripped.
    """
    soup = BeautifulSoup(str(html), "html.parser")
    kept = []
    for el in soup.find_all(True):
        if not keep(el) or any(keep(parent) for parent in el.parents if parent.name != "[document]"):
            continue
        el.replace_with(_PLACEHOLDER.format(len(kept)))
        kept.append(_raw_html(el))

    text = converter(heading_style=ATX, code_language="").convert_soup(soup)
    text = _PLACEHOLDER_RE.sub(lambda m: kept[int(m.group(1))], text)
    return _BLANK_LINES_RE.sub("\n\n", text).strip()


def _raw_html(el: Tag) -> str:
    if el.name == "br":
        return "<br />"
    return str(el)


def _is_html(field) -> bool:
    return field.option("format") == "html"


def read(value, field, config_object=None) -> Optional[str]:
    if not value:
        return value
    html = str(value) if _is_html(field) else render_markdown(value)
    prefix_input, prefix_output = media_prefixes(field, config_object)
    return html_swap_prefix(html, prefix_output, prefix_input, True)


def write(value, field, config_object=None) -> str:
    prefix_input, prefix_output = media_prefixes(field, config_object)
    content = html_swap_prefix(str(value or ""), prefix_input, prefix_output)
    if _is_html(field):
        return content
    return to_markdown(content)


FIELD = FieldModule(
    label="Rich text",
    read=read,
    write=write,
    sort=compare_strings,
    edit_component="rich-text",
    view_component="rich-text",
)
