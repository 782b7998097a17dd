"""
Render Markdown documents into annotated HTML for a live preview.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import logging
import unittest

from mdview.events import (
    Event,
    LineIndex,
    SourceRange,
    convert_math,
    extend_table_ranges,
    extract_code_blocks,
    is_preprocessed,
    token_events,
)
from mdview.markdown import parse_markdown, render_tokens
from tests.utility import TypedTestCase

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(funcName)s [%(lineno)d] - %(message)s",
)


def events_of(text: str) -> list[Event]:
    return list(token_events(parse_markdown(text, {}), LineIndex(text)))


class TestLineIndex(TypedTestCase):
    def test_lines(self) -> None:
        index = LineIndex("ab\ncd\n\nef")
        self.assertEqual([index.line_of(offset) for offset in range(10)], [0, 0, 0, 1, 1, 1, 2, 3, 3, 3])
        self.assertEqual(index.offset_of(1), 3)
        self.assertEqual(index.offset_of(3), 7)
        self.assertEqual(index.offset_of(10), 9)
        self.assertEqual(index.range_of([1, 3]), SourceRange(3, 7))


class TestEvents(TypedTestCase):
    def test_ranges(self) -> None:
        text = "# Title\n\nParagraph\n"
        events = events_of(text)
        ranges = {token.type: source for token, source in events}
        self.assertEqual(ranges["heading_open"], SourceRange(0, 8))
        self.assertEqual(ranges["heading_close"], SourceRange(0, 8))
        self.assertEqual(ranges["paragraph_open"], SourceRange(9, 19))

    def test_table_ranges(self) -> None:
        text = "| a | b |\n|---|---|\n| 1 | 2 |\n| 3 | 4 |\n\nafter\n"
        events = list(extend_table_ranges(events_of(text)))
        (table,) = [source for token, source in events if token.type == "table_open"]
        self.assertEqual(table, SourceRange(0, text.index("\n\n") + 1))
        self.assertEqual([token.type for token, _ in events], [token.type for token, _ in events_of(text)])

    def test_code_blocks(self) -> None:
        text = "```mermaid\ngraph LR\n  A --> B\n```\n\n```python\nprint()\n```\n"
        events = list(extract_code_blocks(events_of(text), "mermaid"))
        self.assertEqual(events[0][1], SourceRange(0, text.index("\n\n") + 1))
        self.assertTrue(is_preprocessed(events[0][0]))
        self.assertEqual(
            events[0][0].content,
            '<pre class="preprocessed-mermaid" data-original-content="graph LR\n  A --&gt; B\n">graph LR\n  A --&gt; B\n</pre>\n',
        )
        self.assertEqual(events[1][0].type, "fence")
        self.assertEqual(events[1][0].info, "python")

    def test_code_block_language_match(self) -> None:
        events = list(extract_code_blocks(events_of("```mermaidx\ngraph\n```\n"), "mermaid"))
        self.assertEqual(events[0][0].type, "fence")

    def test_inline_math(self) -> None:
        text = "Mass-energy $E=mc^2$ relation, costs $5 and $10."
        html = render_tokens([token for token, _ in convert_math(events_of(text))], {})
        self.assertIn('<span class="preprocessed-math-inline" data-original-content="E=mc^2">E=mc^2</span>', html)
        self.assertIn("costs $5 and $10.", html)

    def test_display_math(self) -> None:
        text = "$$\na < b\n$$\n"
        events = list(convert_math(events_of(text)))
        self.assertEqual(len(events), 1)
        token, source = events[0]
        self.assertEqual(source, SourceRange(0, len(text)))
        self.assertEqual(
            token.content,
            '<div class="preprocessed-math-display" data-original-content="a &lt; b">a &lt; b</div>\n',
        )


if __name__ == "__main__":
    unittest.main()
