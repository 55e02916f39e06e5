#!/usr/bin/env python3
"""
Rich-text override: richer HTML to Markdown conversion on write.

Only `write` is supplied; reading and the components stay with the core
`rich-text` type. On top of the core conversion:

- `<br>`, tables and iframes are kept as HTML (table `style` attributes removed)
- `<p>`, `<div>` and headings carrying `style` or `class` are kept as HTML
- `<del>`/`<s>` become `~~strikethrough~~`
- `<colgroup>` is dropped
"""

from bs4 import BeautifulSoup
from markdownify import MarkdownConverter

from entryfields.core.fields.core.rich_text import is_sized_image, to_markdown
from entryfields.core.fields.module import FieldModule
from entryfields.core.media import html_swap_prefix, media_prefixes


_ALWAYS_HTML = {"br", "table", "iframe"}
_STYLED_BLOCKS = {"p", "div", "h1", "h2", "h3", "h4", "h5", "h6"}


class StrikethroughConverter(MarkdownConverter):
    def convert_del(self, el, text, *args, **kwargs):
        if not text.strip():
            return text
        return f"~~{text.strip()}~~"

    convert_s = convert_del
    convert_strike = convert_del


def keep_as_html(el) -> bool:
    if el.name in _ALWAYS_HTML or is_sized_image(el):
        return True
    return el.name in _STYLED_BLOCKS and (el.has_attr("style") or el.has_attr("class"))


def _clean(html: str) -> str:
    soup = BeautifulSoup(html, "html.parser")
    for colgroup in soup.find_all("colgroup"):
        colgroup.decompose()
    for table in soup.find_all("table"):
        for tag in [table, *table.find_all(style=True)]:
            del tag["style"]
    return str(soup)


def write(value, field, config_object=None) -> str:
    prefix_input, prefix_output = media_prefixes(field, config_object)
    content = html_swap_prefix(str(value or ""), prefix_input, prefix_output)
    if field.option("format") == "html":
        return content
    return to_markdown(_clean(content), keep=keep_as_html, converter=StrikethroughConverter)


FIELD = FieldModule(write=write)
