"""
Render Markdown documents into annotated HTML for a live preview.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import html
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from .document import prepare_document
from .events import convert_math, extend_table_ranges, extract_code_blocks, token_events
from .headings import HeadingInfo, SlugRegistry, headings_from_tokens
from .markdown import render_tokens
from .options import RenderOptions
from .postprocess import post_process_html
from .source_lines import extract_table_source_ranges, inject_source_lines

LOGGER = logging.getLogger(__name__)


class DocumentError(RuntimeError):
    "Raised when a document cannot be read."


@dataclass(frozen=True)
class RenderResult:
    "Rendered HTML and the headings it contains, in document order."

    html: str
    headings: list[HeadingInfo] = field(default_factory=list)


def _render(markdown: str, base_dir: Path, options: RenderOptions, with_headings: bool) -> RenderResult:
    document = prepare_document(markdown)
    env: dict[str, Any] = {}
    tokens = document.parse(env)

    # identifiers are assigned before the token stream is rewritten
    headings = headings_from_tokens(tokens, SlugRegistry()) if with_headings else []

    events = extend_table_ranges(token_events(tokens, document.mapper.index))
    for language in options.code_languages:
        events = extract_code_blocks(events, language)
    items = list(convert_math(events))

    table_ranges = extract_table_source_ranges(items, document.mapper)
    body = render_tokens(inject_source_lines(items, document.mapper), env)
    body = post_process_html(body, base_dir, table_ranges, headings if with_headings else None, options)

    if document.frontmatter.html:
        body = f"{document.frontmatter.html}\n{body}"
    return RenderResult(body, headings)


def render_to_html_with_toc(markdown: str, base_dir: Path, options: Optional[RenderOptions] = None) -> RenderResult:
    """
    Renders a Markdown document into annotated HTML, assigning an identifier to each heading.

    :param markdown: Markdown document text.
    :param base_dir: Directory relative to which local images are resolved.
    :param options: Rendering options.
    :returns: HTML fragment and the document headings.
    """

    return _render(markdown, base_dir, options or RenderOptions(), with_headings=True)


def render_to_html(markdown: str, base_dir: Path, options: Optional[RenderOptions] = None) -> str:
    "Renders a Markdown document into annotated HTML without heading identifiers."

    return _render(markdown, base_dir, options or RenderOptions(), with_headings=False).html


def is_markdown_file(path: Path, options: Optional[RenderOptions] = None) -> bool:
    return (options or RenderOptions()).is_markdown_suffix(path.suffix)


def render_file(path: Path, options: Optional[RenderOptions] = None) -> RenderResult:
    """
    Renders a file for display.

    Markdown documents are rendered with local resources resolved relative to the directory of the file. Any other
    text file is shown verbatim.

    :raises DocumentError: The file cannot be read or is not valid UTF-8 text.
    """

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as ex:
        raise DocumentError(f"unable to read file: {path}") from ex

    if is_markdown_file(path, options):
        LOGGER.info("Rendering Markdown document: %s", path)
        return render_to_html_with_toc(text, path.parent, options)
    else:
        LOGGER.info("Rendering plain text file: %s", path)
        return RenderResult(f'<pre class="plain-text-viewer">{html.escape(text)}</pre>')
