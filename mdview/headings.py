"""
Render Markdown documents into annotated HTML for a live preview.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import re
from dataclasses import dataclass
from typing import Any, Iterable

from markdown_it.token import Token

from .document import prepare_document
from .markdown import parse_markdown


@dataclass(frozen=True)
class HeadingInfo:
    """
    A section heading in a rendered document.

    :param level: Heading level between 1 and 6.
    :param text: Heading text with inline formatting removed.
    :param id: Identifier unique within the document, to be used as a fragment in URLs.
    """

    level: int
    text: str
    id: str


_SEPARATOR_REGEXP = re.compile(r"[\s\-_.]+")
_DISALLOWED_REGEXP = re.compile(r"[^a-z0-9\-]")
_HYPHENS_REGEXP = re.compile(r"-{2,}")


def slugify(text: str) -> str:
    """
    Converts heading text into a URL-safe identifier.

    Letters are converted to lowercase, whitespace and punctuation such as `-`, `_` and `.` become a hyphen, and any
    other character not in the ASCII alphanumeric range is dropped. Text that leaves nothing behind (e.g. only
    punctuation) yields `section`.
    """

    slug = _SEPARATOR_REGEXP.sub("-", text.lower())
    slug = _DISALLOWED_REGEXP.sub("", slug)
    slug = _HYPHENS_REGEXP.sub("-", slug).strip("-")
    return slug or "section"


class SlugRegistry:
    "Keeps track of identifiers assigned to headings in a single document."

    _counts: dict[str, int]
    _used: set[str]

    def __init__(self) -> None:
        self._counts = {}
        self._used = set()

    def unique(self, base: str) -> str:
        """
        Returns an identifier derived from a slug that no other heading uses.

        The first occurrence of a slug is returned as is; the N-th repetition receives the suffix `-N`.
        """

        count = self._counts.get(base, 0)
        candidate = base if count == 0 else f"{base}-{count}"
        while candidate in self._used:
            count += 1
            candidate = f"{base}-{count}"
        self._counts[base] = count + 1
        self._used.add(candidate)
        return candidate


def _inline_text(token: Token) -> str:
    parts: list[str] = []
    for child in token.children or []:
        if child.type in ("text", "code_inline", "image", "math_inline", "math_inline_double"):
            parts.append(child.content)
        elif child.type in ("softbreak", "hardbreak"):
            parts.append(" ")
    return "".join(parts)


def headings_from_tokens(tokens: Iterable[Token], slugs: SlugRegistry) -> list[HeadingInfo]:
    "Collects headings from a token stream in document order."

    result: list[HeadingInfo] = []
    level: int | None = None
    parts: list[str] = []
    for token in tokens:
        if token.type == "heading_open":
            level = int(token.tag[1:])
            parts = []
        elif token.type == "heading_close" and level is not None:
            text = "".join(parts).strip()
            result.append(HeadingInfo(level, text, slugs.unique(slugify(text))))
            level = None
        elif token.type == "inline" and level is not None:
            parts.append(_inline_text(token))
    return result


def collect_headings(text: str, slugs: SlugRegistry) -> list[HeadingInfo]:
    "Parses (alert-rewritten) Markdown text and collects its headings."

    return headings_from_tokens(parse_markdown(text, {}), slugs)


def extract_headings(markdown: str, slugs: SlugRegistry | None = None) -> list[HeadingInfo]:
    """
    Extracts the headings of a Markdown document with unique identifiers.

    Front-matter and alerts are processed the same way as when rendering, thus identifiers match those assigned to
    heading elements in the rendered HTML.
    """

    document = prepare_document(markdown)
    return collect_headings(document.text, slugs or SlugRegistry())



def heading_tree(headings: Iterable[HeadingInfo]) -> list[dict[str, Any]]:
    """
    Nests each heading under the closest preceding heading of a lower level.

    Levels may be skipped, e.g. a level 4 heading directly follows a level 2 heading.

    :returns: JSON-serializable nodes with the keys `level`, `text`, `id` and `children`.
    """

    roots: list[dict[str, Any]] = []
    stack: list[tuple[int, list[dict[str, Any]]]] = [(0, roots)]
    for heading in headings:
        while stack[-1][0] >= heading.level:
            stack.pop()

        node: dict[str, Any] = {"level": heading.level, "text": heading.text, "id": heading.id, "children": []}
        stack[-1][1].append(node)
        stack.append((heading.level, node["children"]))
    return roots


def document_title(headings: Iterable[HeadingInfo]) -> str | None:
    "Text of the outermost heading if and only if no other heading shares the outermost position."

    roots = heading_tree(headings)
    if len(roots) == 1:
        return roots[0]["text"]
    else:
        return None
