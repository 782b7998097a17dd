"""
Render Markdown documents into annotated HTML for a live preview.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import logging
import re
from typing import NamedTuple

from .events import LineIndex, token_events
from .markdown import parse_markdown, render_tokens
from .source_lines import LineMapper, inject_source_lines

LOGGER = logging.getLogger(__name__)

ALERT_TYPES = ("note", "tip", "important", "warning", "caution")

_FENCED_CODE_REGEXP = re.compile(r"^\s*(?:`{3,}|~{3,})")
_ALERT_REGEXP = re.compile(r"^ {0,3}> ?\[!(" + "|".join(ALERT_TYPES) + r")\][ \t]*(.*)$", re.IGNORECASE)
_QUOTE_REGEXP = re.compile(r"^ {0,3}> ?(.*)$")


class RewrittenText(NamedTuple):
    """
    Text with alerts expanded into HTML.

    :param text: Intermediate text to pass to the Markdown parser.
    :param origins: For each 0-based line in `text`, the 0-based line in the input it originates from.
    """

    text: str
    origins: list[int]


def _render_body(body_lines: list[str], body_origins: list[int], frontmatter_lines: int) -> str:
    """
    Renders the body of an alert into HTML.

    Elements in the body carry the source line of the quoted line they come from. Blank lines are replaced with an
    empty comment such that the output forms a single HTML block when placed back into Markdown.
    """

    body = "\n".join(body_lines)
    env: dict = {}
    tokens = parse_markdown(body, env)
    mapper = LineMapper(body, body_origins, frontmatter_lines)
    html = render_tokens(inject_source_lines(token_events(tokens, LineIndex(body)), mapper, tag_tables=True), env)
    return "\n".join(line if line.strip() else "<!-- -->" for line in html.rstrip("\n").split("\n"))


def rewrite_alerts(content: str, frontmatter_lines: int = 0) -> RewrittenText:
    """
    Expands GitHub-style alerts into HTML, keeping track of where each output line originates from.

    Original:
    ```
    > [!NOTE]
    > Useful information.
    ```

    Transformed:
    ```
    <div class="markdown-alert markdown-alert-note" data-source-line="1" dir="auto">
    <p class="markdown-alert-title" dir="auto"><span class="alert-icon" data-alert-type="note"></span>NOTE</p>
    <p data-source-line="2">Useful information.</p>
    </div>
    ```

    Lines inside fenced code blocks are never treated as alerts.

    :param content: Markdown text without front-matter.
    :param frontmatter_lines: Number of lines that precede `content` in the original document.
    :returns: Rewritten text and a line-origin table.
    """

    lines = content.split("\n")
    output: list[str] = []
    origins: list[int] = []

    fence_marker: str | None = None
    index = 0
    while index < len(lines):
        line = lines[index]

        fence_match = _FENCED_CODE_REGEXP.match(line)
        if fence_match:
            marker = fence_match.group().strip()
            if fence_marker is None:
                fence_marker = marker
            elif marker.startswith(fence_marker):
                fence_marker = None

        alert = _ALERT_REGEXP.match(line) if fence_marker is None else None
        if alert is None:
            output.append(line)
            origins.append(index)
            index += 1
            continue

        start = index
        alert_type = alert.group(1).lower()
        LOGGER.debug("Found %s alert at line %d", alert_type, start + 1 + frontmatter_lines)

        body_lines: list[str] = []
        body_origins: list[int] = []
        first = alert.group(2).strip()
        if first:
            body_lines.append(first)
            body_origins.append(start)
        index += 1
        while index < len(lines):
            quote = _QUOTE_REGEXP.match(lines[index])
            if quote is None:
                break
            body_lines.append(quote.group(1))
            body_origins.append(index)
            index += 1

        emitted = [
            f'<div class="markdown-alert markdown-alert-{alert_type}" data-source-line="{start + 1 + frontmatter_lines}" dir="auto">',
            f'<p class="markdown-alert-title" dir="auto"><span class="alert-icon" data-alert-type="{alert_type}"></span>{alert_type.upper()}</p>',
        ]
        if body_lines:
            emitted.extend(_render_body(body_lines, body_origins, frontmatter_lines).split("\n"))
        emitted.append("</div>")

        # an HTML block extends up to the next blank line
        if index < len(lines) and lines[index].strip():
            emitted.append("")

        output.extend(emitted)
        origins.extend(start for _ in emitted)

    return RewrittenText("\n".join(output), origins)
