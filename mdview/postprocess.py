"""
Render Markdown documents into annotated HTML for a live preview.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterator, Optional, Sequence

from .elements import HTML, ElementType, ParseError, elements_from_string, elements_to_string, has_ancestor_with_class
from .extra import override
from .headings import HeadingInfo
from .options import RenderOptions
from .source_lines import TableSourceRange
from .uri import has_scheme, image_mime_type, is_embeddable_url, is_web_url, to_base64_data_uri, url_suffix, url_to_path

LOGGER = logging.getLogger(__name__)

_HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")


class NodeVisitor(ABC):
    def visit(self, node: ElementType) -> None:
        "Recursively visits all descendants of this node."

        if len(node) < 1:
            return

        for index in range(len(node)):
            source = node[index]
            if not isinstance(source.tag, str):
                # comments and processing instructions
                continue

            target = self.transform(source)
            if target is not None:
                # chain sibling text node that immediately follows original element
                target.tail = source.tail
                source.tail = None

                # replace original element with transformed element
                node[index] = target
            else:
                self.visit(source)

    @abstractmethod
    def transform(self, child: ElementType) -> Optional[ElementType]: ...


class PostProcessor(NodeVisitor):
    """
    Annotates and rewrites elements of a rendered HTML fragment in document order.

    * Tables receive the source line range recorded before serialization.
    * Headings receive their unique identifier.
    * Local images are embedded as data URIs.
    * Links to local files are replaced with elements that forward clicks to the host application.
    """

    base_dir: Path
    options: RenderOptions
    _tables: Iterator[TableSourceRange]
    _headings: Iterator[HeadingInfo]

    def __init__(
        self,
        base_dir: Path,
        table_ranges: Sequence[TableSourceRange],
        headings: Optional[Sequence[HeadingInfo]],
        options: RenderOptions,
    ) -> None:
        self.base_dir = base_dir
        self.options = options
        self._tables = iter(table_ranges)
        self._headings = iter(headings or [])

    @override
    def transform(self, child: ElementType) -> Optional[ElementType]:
        if child.tag == "table":
            self._transform_table(child)
        elif child.tag in _HEADING_TAGS:
            self._transform_heading(child)
        elif child.tag == "img":
            if self.options.embed_images:
                self._transform_image(child)
        elif child.tag == "a":
            return self._transform_link(child)

        return None

    def _in_alert(self, element: ElementType) -> bool:
        # alert bodies are annotated when the alert is expanded
        return has_ancestor_with_class(element, "div", "markdown-alert")

    def _transform_table(self, table: ElementType) -> None:
        if self._in_alert(table):
            return

        source = next(self._tables, None)
        if source is None:
            LOGGER.debug("No source range recorded for table")
            return

        table.set("data-source-line", str(source.start_line))
        table.set("data-source-line-end", str(source.end_line))

    def _transform_heading(self, heading: ElementType) -> None:
        if self._in_alert(heading):
            return

        info = next(self._headings, None)
        if info is None:
            return

        heading.set("id", info.id)

    def _transform_image(self, image: ElementType) -> None:
        src = image.get("src")
        if not src or is_embeddable_url(src):
            return

        try:
            if has_scheme(src):
                return
            relative_path = url_to_path(src)
        except ValueError as ex:
            LOGGER.warning("Invalid image URL %s: %s", src, ex)
            return

        try:
            path = (self.base_dir / relative_path).resolve(strict=True)
            data = path.read_bytes()
        except (OSError, RuntimeError, ValueError) as ex:
            LOGGER.warning("Unable to embed image %s: %s", src, ex)
            return

        LOGGER.debug("Embedding image: %s", path)
        image.set("data-original-src", str(path))
        image.set("src", to_base64_data_uri(image_mime_type(path.suffix), data))

    def _transform_link(self, anchor: ElementType) -> Optional[ElementType]:
        href = anchor.get("href")
        if not href or href.startswith(("#", "//")) or is_web_url(href):
            return None

        try:
            if has_scheme(href):
                return None
            suffix = url_suffix(href)
        except ValueError as ex:
            LOGGER.warning("Invalid link URL %s: %s", href, ex)
            return None

        if not suffix:
            return None

        # process images and other elements wrapped in the link
        self.visit(anchor)

        css_class = "md-link" if self.options.is_markdown_suffix(suffix) else "md-link md-link-invalid"
        handler = f"window.{self.options.link_handler}({json.dumps(href)}, event.button)"
        LOGGER.debug("Rewriting link to local file: %s", href)

        span = HTML.span(
            {
                "class": css_class,
                "onmousedown": f"if (event.button === 0 || event.button === 1) {{ event.preventDefault(); {handler}; }}",
            }
        )
        for name, value in anchor.attrib.items():
            if name not in ("href", "class", "onmousedown"):
                span.set(name, value)
        span.text = anchor.text
        span.extend(list(anchor))
        return span


def post_process_html(
    html: str,
    base_dir: Path,
    table_ranges: Sequence[TableSourceRange],
    headings: Optional[Sequence[HeadingInfo]] = None,
    options: Optional[RenderOptions] = None,
) -> str:
    """
    Rewrites a rendered HTML fragment in a single pass.

    Tables and headings receive recorded entries in document order. Elements in excess of the recorded entries are
    left unchanged.

    :param html: HTML fragment produced by the Markdown renderer.
    :param base_dir: Directory relative to which local image paths are resolved.
    :param table_ranges: Source line ranges of tables, in document order.
    :param headings: Headings whose identifiers to assign, in document order.
    :param options: Rendering options.
    :returns: Rewritten HTML, or the input unchanged if it cannot be parsed.
    """

    if not html.strip():
        return html

    try:
        root = elements_from_string(html)
    except ParseError:
        LOGGER.warning("Unable to parse rendered HTML, skipping post-processing")
        return html

    PostProcessor(base_dir, table_ranges, headings, options or RenderOptions()).visit(root)
    return elements_to_string(root)
