"""
Render Markdown documents into annotated HTML for a live preview.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

from typing import Callable, Iterable, NamedTuple, Sequence

from markdown_it.common.utils import escapeHtml, unescapeAll
from markdown_it.token import Token

from .events import Event, LineIndex, SourceRange, is_preprocessed

LineFunction = Callable[[int], int]
"Maps a character offset in the parsed text to a 1-based line number in the original document."


class TableSourceRange(NamedTuple):
    "First and last 1-based source line of a table."

    start_line: int
    end_line: int


class LineMapper:
    """
    Maps character offsets in an intermediate (rewritten) text back to 1-based lines in the original document.

    The mapping is a composition of two steps:

    1. the line-origin table maps a 0-based line in the intermediate text to a 0-based line in the content that the
       text was derived from (lines beyond the end of the table saturate to the last entry),
    2. the front-matter offset accounts for the lines removed before the content.
    """

    index: LineIndex
    origins: Sequence[int]
    offset: int

    def __init__(self, text: str, origins: Sequence[int], offset: int = 0) -> None:
        self.index = LineIndex(text)
        self.origins = origins
        self.offset = offset

    def original_line(self, position: int) -> int:
        "Returns the 1-based original line for a character offset in the intermediate text."

        line = self.index.line_of(position)
        if self.origins:
            line = self.origins[min(line, len(self.origins) - 1)]
        return line + 1 + self.offset

    __call__ = original_line


def start_line(line_fn: LineFunction, source: SourceRange) -> int:
    return line_fn(source.start)


def end_line(line_fn: LineFunction, source: SourceRange) -> int:
    "The line of the last character in a range (which excludes its end offset)."

    return line_fn(max(source.end - 1, source.start))


def _splice_attributes(html: str, attributes: str) -> str:
    "Inserts attributes right after the tag name of the first opening tag."

    tag_end = html.find(" ")
    close = html.find(">")
    if tag_end < 0 or (0 <= close < tag_end):
        tag_end = close
    if not html.startswith("<") or tag_end < 0:
        return html
    return f"{html[:tag_end]} {attributes}{html[tag_end:]}"


def _range_attributes(line_fn: LineFunction, source: SourceRange) -> str:
    return f'data-source-line="{start_line(line_fn, source)}" data-source-line-end="{end_line(line_fn, source)}"'


def _is_display_placeholder(token: Token) -> bool:
    "True for display math embedded in a paragraph (e.g. `$$x$$` between text)."

    return token.type == "html_inline" and is_preprocessed(token) and token.content.startswith("<div ")


def _code_block(token: Token, line: int) -> Token:
    """
    Emits a code block with an explicit opening tag.

    The attribute `data-source-line-start` identifies the line of the first line of code: the line after the opening
    fence for fenced blocks, or the first line for indented blocks.
    """

    if token.type == "fence":
        content_line = line + 1
        info = unescapeAll(token.info).strip()
        language = info.split(maxsplit=1)[0] if info else ""
    else:
        content_line = line
        language = ""

    lang_class = f' class="language-{escapeHtml(language)}"' if language else ""
    html = (
        f'<pre data-source-line="{line}" data-source-line-start="{content_line}">'
        f"<code{lang_class}>{escapeHtml(token.content)}</code></pre>\n"
    )
    return Token("html_block", "", 0, map=token.map, content=html, block=True)


_TAGGED_OPENINGS = {
    "paragraph_open",
    "heading_open",
    "blockquote_open",
    "bullet_list_open",
    "ordered_list_open",
    "list_item_open",
    "tr_open",
}


def inject_source_lines(events: Iterable[Event], line_fn: LineFunction, *, tag_tables: bool = False) -> list[Token]:
    """
    Annotates block-level elements with the source line they originate from.

    Opening tokens of paragraphs, headings, block quotes, lists, list items and table rows receive the attribute
    `data-source-line`, as do horizontal rules. Code blocks are replaced with an explicit `<pre>` element.
    Pre-processed HTML placeholders (e.g. diagrams and display math) receive both `data-source-line` and
    `data-source-line-end`. Display math inside a paragraph takes the lines of the paragraph. All other tokens pass through unchanged.

    Tables themselves are annotated only if `tag_tables` is set; otherwise their source ranges are applied after
    HTML serialization (see `extract_table_source_ranges`).

    :param events: Stream of tokens paired with their source range.
    :param line_fn: Maps a character offset to a 1-based original line.
    :param tag_tables: Whether to annotate `<table>` elements directly.
    :returns: Token stream to pass to the HTML renderer.
    """

    tokens: list[Token] = []
    for token, source in events:
        if token.type in _TAGGED_OPENINGS or token.type == "hr":
            # paragraphs in tight lists are not rendered
            if not token.hidden:
                token.attrSet("data-source-line", str(start_line(line_fn, source)))
        elif token.type in ("fence", "code_block"):
            token = _code_block(token, start_line(line_fn, source))
        elif token.type == "table_open" and tag_tables:
            token.attrSet("data-source-line", str(start_line(line_fn, source)))
            token.attrSet("data-source-line-end", str(end_line(line_fn, source)))
        elif token.type == "html_block" and is_preprocessed(token):
            token = token.copy(content=_splice_attributes(token.content, _range_attributes(line_fn, source)))
        elif token.type == "inline" and token.children and any(_is_display_placeholder(child) for child in token.children):
            attributes = _range_attributes(line_fn, source)
            children = [
                child.copy(content=_splice_attributes(child.content, attributes)) if _is_display_placeholder(child) else child
                for child in token.children
            ]
            token = token.copy(children=children)
        tokens.append(token)
    return tokens


def extract_table_source_ranges(events: Iterable[Event], line_fn: LineFunction) -> list[TableSourceRange]:
    """
    Captures the source lines of each table in document order.

    Source ranges are no longer available once the token stream is serialized into HTML, and are thus collected
    from the token stream in advance.
    """

    return [
        TableSourceRange(start_line(line_fn, source), end_line(line_fn, source))
        for token, source in events
        if token.type == "table_open"
    ]

