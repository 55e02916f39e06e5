#!/usr/bin/env python3
from entryfields.core.fields.custom import rich_text
from entryfields.core.schema.field_declaration import FieldDeclaration


RICH = FieldDeclaration.model_validate({"name": "body", "type": "rich-text"})
MEDIA = {"media": {"input": "media", "output": "/media"}}


# --- Rich text --- #

def test_rich_text_write_uses_strikethrough():
    assert rich_text.write("<p>Was <del>old</del> <s>gone</s> new</p>", RICH) == "Was ~~old~~ ~~gone~~ new"


def test_rich_text_write_keeps_line_breaks():
    assert rich_text.write("<p>One<br>Two</p>", RICH) == "One<br />Two"


def test_rich_text_write_keeps_tables_without_styles():
    html = '<table style="width: 100%"><colgroup><col/></colgroup><tr><td style="color: red">A</td></tr></table>'
    assert rich_text.write(html, RICH) == "<table><tr><td>A</td></tr></table>"


def test_rich_text_write_keeps_styled_blocks():
    html = '<h2>Plain</h2><p style="text-align: center">Centered</p>'
    markdown = rich_text.write(html, RICH)
    assert markdown.startswith("## Plain")
    assert '<p style="text-align: center">Centered</p>' in markdown


def test_rich_text_write_swaps_media_prefixes():
    markdown = rich_text.write('<p><img src="media/a.png" alt="A"/></p>', RICH, MEDIA)
    assert markdown == "![A](/media/a.png)"


def test_rich_text_html_format_skips_conversion():
    field = FieldDeclaration.model_validate({"name": "body", "type": "rich-text", "options": {"format": "html"}})
    assert rich_text.write("<p><del>x</del></p>", field) == "<p><del>x</del></p>"
