"""
Render Markdown documents into annotated HTML for a live preview.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import datetime
import logging
import re
from typing import Any, NamedTuple

import yaml

from .elements import HTML, ElementType, element_to_string

LOGGER = logging.getLogger(__name__)


class Frontmatter(NamedTuple):
    """
    Result of splitting a document into front-matter and content.

    :param html: Collapsible table that displays the front-matter, or an empty string.
    :param content: Markdown text that follows the front-matter block.
    :param line_count: Number of lines removed from the beginning of the document.
    """

    html: str
    content: str
    line_count: int


_FRONT_MATTER_REGEXP = re.compile(r"\A---[ \t]*\n(.*?)^---[ \t]*(?:\n|\Z)(?:[ \t]*\n)*", flags=re.DOTALL | re.MULTILINE)

# characters that lxml rejects in text and attribute values
_XML_INCOMPATIBLE_REGEXP = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def _text(value: str) -> str:
    return _XML_INCOMPATIBLE_REGEXP.sub("", value)


def _key_text(key: Any) -> str:
    if isinstance(key, (list, tuple)):
        return ", ".join(_key_text(item) for item in key)
    elif isinstance(key, dict):
        return "[object]"
    elif key is None:
        return "null"
    elif isinstance(key, bool):
        return "true" if key else "false"
    else:
        return _text(str(key))


def _rows(data: dict[Any, Any]) -> list[ElementType]:
    return [HTML.tr(HTML.th(_key_text(key)), HTML.td(_value_node(value))) for key, value in data.items()]


def _value_node(value: Any) -> ElementType | str:
    "Renders a YAML value as an HTML element (or plain text) to be placed in a table cell."

    if value is None:
        return HTML.span({"class": "yaml-null"}, "null")
    elif isinstance(value, bool):
        return HTML.span({"class": "yaml-bool"}, "true" if value else "false")
    elif isinstance(value, (int, float)):
        return HTML.span({"class": "yaml-number"}, str(value))
    elif isinstance(value, (datetime.date, datetime.datetime)):
        return _text(value.isoformat())
    elif isinstance(value, list):
        if not value:
            return HTML.span({"class": "yaml-empty"}, "[]")
        return HTML.ul({"class": "yaml-list"}, *(HTML.li(_value_node(item)) for item in value))
    elif isinstance(value, dict):
        if not value:
            return HTML.span({"class": "yaml-empty"}, "{}")
        return HTML.table({"class": "yaml-nested-table"}, HTML.tbody(*_rows(value)))
    else:
        return _text(str(value))


def frontmatter_to_html(data: dict[Any, Any]) -> str:
    "Renders top-level front-matter properties as a collapsible table."

    details = HTML.details(
        {"class": "frontmatter"},
        HTML.summary({"class": "frontmatter-summary"}, "Frontmatter"),
        HTML.table({"class": "frontmatter-table"}, HTML.tbody(*_rows(data))),
    )
    return element_to_string(details)


def extract_frontmatter(text: str) -> Frontmatter:
    """
    Splits a YAML front-matter block delimited with `---` from the beginning of a Markdown document.

    Documents without a front-matter block, or whose front-matter is not valid YAML, are returned unchanged. A block
    that parses but is not a mapping (e.g. a bare scalar or a list) is removed without producing a table.

    :param text: Markdown document with line endings normalized to `\\n`.
    :returns: Front-matter table, remaining content, and the number of lines removed.
    """

    match = _FRONT_MATTER_REGEXP.match(text)
    if match is None:
        return Frontmatter("", text, 0)

    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError as ex:
        LOGGER.warning("Invalid front-matter, rendering as content: %s", ex)
        return Frontmatter("", text, 0)

    line_count = match.group(0).count("\n")
    content = text[match.end() :]

    if not isinstance(data, dict):
        if data is not None:
            LOGGER.debug("Front-matter is not a mapping, omitting table")
        return Frontmatter("", content, line_count)

    html = ""
    if data:
        try:
            html = frontmatter_to_html(data)
        except ValueError as ex:
            LOGGER.warning("Unable to display front-matter: %s", ex)
    return Frontmatter(html, content, line_count)
