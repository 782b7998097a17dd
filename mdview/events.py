"""
Render Markdown documents into annotated HTML for a live preview.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import bisect
import logging
from typing import Iterable, Iterator, NamedTuple

from markdown_it.common.utils import escapeHtml
from markdown_it.token import Token

LOGGER = logging.getLogger(__name__)

# marks a synthetic HTML token whose opening tag accepts spliced attributes
PREPROCESSED = "preprocessed"


class SourceRange(NamedTuple):
    "A half-open range of character offsets into the text the parser was given."

    start: int
    end: int


Event = tuple[Token, SourceRange]


class LineIndex:
    """
    Converts between character offsets and 0-based line numbers of a text.

    Lines are terminated by a linefeed. Offsets past the end of the text belong to the last line.
    """

    length: int
    _line_starts: list[int]

    def __init__(self, text: str) -> None:
        self.length = len(text)
        self._line_starts = [0]
        pos = text.find("\n")
        while pos >= 0:
            self._line_starts.append(pos + 1)
            pos = text.find("\n", pos + 1)

    def line_of(self, offset: int) -> int:
        "Returns the 0-based line that contains the character at the given offset."

        offset = max(0, min(offset, self.length))
        return bisect.bisect_right(self._line_starts, offset) - 1

    def offset_of(self, line: int) -> int:
        "Returns the offset at which a 0-based line starts, or the text length for lines past the end."

        if line < len(self._line_starts):
            return self._line_starts[line]
        else:
            return self.length

    def range_of(self, line_map: list[int]) -> SourceRange:
        "Converts a parser line map `[begin, end)` into a character range."

        begin, end = line_map
        return SourceRange(self.offset_of(begin), self.offset_of(max(begin, end)))


def token_events(tokens: Iterable[Token], index: LineIndex) -> Iterator[Event]:
    """
    Pairs each token with the source range it originates from.

    Tokens with a line map use that map. A closing token shares the range of its opening token. Any other token
    inherits the range of the innermost enclosing block.
    """

    stack: list[SourceRange] = []
    for token in tokens:
        if token.nesting < 0:
            source = stack.pop() if stack else SourceRange(index.length, index.length)
        elif token.map is not None:
            source = index.range_of(token.map)
        elif stack:
            source = stack[-1]
        else:
            source = SourceRange(0, 0)

        if token.nesting > 0:
            stack.append(source)

        yield token, source


def html_block(html: str, origin: Token) -> Token:
    "Creates a synthetic block-level HTML token that replaces the original token."

    token = Token("html_block", "", 0, map=origin.map, content=html, block=True)
    token.meta[PREPROCESSED] = True
    return token


def html_inline(html: str) -> Token:
    "Creates a synthetic inline HTML token."

    token = Token("html_inline", "", 0, content=html)
    token.meta[PREPROCESSED] = True
    return token


def is_preprocessed(token: Token) -> bool:
    return bool(token.meta.get(PREPROCESSED))


def fence_language(token: Token) -> str:
    "The language tag of a fenced code block, i.e. the first word of its info string."

    info = token.info.strip()
    return info.split(maxsplit=1)[0] if info else ""


def extend_table_ranges(events: Iterable[Event]) -> Iterator[Event]:
    """
    Widens the range of each table opening token to cover the entire table.

    Events between the opening and the closing token of a table are buffered, and re-emitted unchanged once the
    table ends, such that native cell rendering (e.g. column alignment) is preserved.
    """

    buffered: list[Event] = []
    for token, source in events:
        if token.type == "table_open":
            yield from buffered
            buffered = [(token, source)]
        elif buffered:
            buffered.append((token, source))
            if token.type == "table_close":
                table_token, table_source = buffered[0]
                end = max(item_source.end for _, item_source in buffered)
                buffered[0] = table_token, SourceRange(table_source.start, end)
                yield from buffered
                buffered = []
        else:
            yield token, source

    # table left unterminated by the parser
    yield from buffered


def extract_code_blocks(events: Iterable[Event], language: str) -> Iterator[Event]:
    """
    Replaces fenced code blocks of the given language with a placeholder for client-side rendering.

    The placeholder is a `<pre>` element whose class names the language, and whose data attribute holds the original
    content. The placeholder event spans the full range of the fenced block, fence to fence.

    Original:
    ```
    ```mermaid
    graph LR
    ```
    ```

    Transformed:
    ```
    <pre class="preprocessed-mermaid" data-original-content="graph LR
    ">graph LR
    </pre>
    ```
    """

    for token, source in events:
        if token.type == "fence" and fence_language(token) == language:
            LOGGER.debug("Found %s code block at offset %d", language, source.start)
            content = escapeHtml(token.content)
            placeholder = f'<pre class="preprocessed-{escapeHtml(language)}" data-original-content="{content}">{content}</pre>\n'
            yield html_block(placeholder, token), source
        else:
            yield token, source


def _math_inline(token: Token) -> Token:
    content = escapeHtml(token.content)
    if token.type == "math_inline":
        return html_inline(f'<span class="preprocessed-math-inline" data-original-content="{content}">{content}</span>')
    elif token.type == "math_inline_double":
        return html_inline(f'<div class="preprocessed-math-display" data-original-content="{content}">{content}</div>')
    else:
        return token


def convert_math(events: Iterable[Event]) -> Iterator[Event]:
    """
    Converts inline and display math into elements that carry the original expression for client-side typesetting.

    * Inline math `$...$` becomes `<span class="preprocessed-math-inline">`.
    * Display math `$$...$$` becomes `<div class="preprocessed-math-display">`.
    """

    for token, source in events:
        if token.type in ("math_block", "math_block_label"):
            content = escapeHtml(token.content.strip())
            display = f'<div class="preprocessed-math-display" data-original-content="{content}">{content}</div>\n'
            yield html_block(display, token), source
        elif token.type == "inline" and token.children and any(child.type.startswith("math_inline") for child in token.children):
            yield token.copy(children=[_math_inline(child) for child in token.children]), source
        else:
            yield token, source
