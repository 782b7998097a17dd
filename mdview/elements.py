"""
Render Markdown documents into annotated HTML for a live preview.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import html

import lxml.etree as ET
import lxml.html
from lxml.builder import ElementMaker

HTML = ElementMaker()

ElementType = ET._Element


class ParseError(RuntimeError):
    pass


def elements_from_string(content: str) -> ElementType:
    """
    Creates an HTML element tree from an HTML fragment string.

    A `<div>` root element is created to hold several top-level elements and any leading text.

    :param content: HTML fragment to parse.
    :returns: The synthesized root element.
    """

    try:
        return lxml.html.fragment_fromstring(content, create_parent="div")
    except (ET.ParserError, ET.ParseError) as ex:
        raise ParseError() from ex


def elements_to_string(root: ElementType) -> str:
    """
    Converts the children of a synthesized root element back into an HTML fragment string.

    :param root: Root element returned by `elements_from_string`.
    :returns: HTML without the enclosing root element.
    """

    items: list[str] = []
    if root.text:
        items.append(html.escape(root.text, quote=False))
    for child in root:
        items.append(lxml.html.tostring(child, encoding="unicode"))
    return "".join(items)


def element_to_string(element: ElementType) -> str:
    "Serializes a single element (without its tail) as HTML."

    return ET.tostring(element, method="html", encoding="unicode", with_tail=False)


def has_class(element: ElementType, name: str) -> bool:
    return name in (element.get("class") or "").split()


def has_ancestor_with_class(element: ElementType, tag: str, name: str) -> bool:
    "True if any ancestor of the element is a `tag` element with the given class."

    return any(has_class(ancestor, name) for ancestor in element.iterancestors(tag))
