"""
Render Markdown documents into annotated HTML for a live preview.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import logging
import unittest

from mdview.frontmatter import extract_frontmatter
from tests.utility import TypedTestCase

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(funcName)s [%(lineno)d] - %(message)s",
)


class TestFrontmatter(TypedTestCase):
    def test_simple(self) -> None:
        html, content, line_count = extract_frontmatter("---\ntitle: Test\n---\n\n# Content")
        self.assertEqual(content, "# Content")
        self.assertEqual(line_count, 4)
        self.assertStartsWith(html, '<details class="frontmatter"><summary class="frontmatter-summary">Frontmatter</summary>')
        self.assertIn('<table class="frontmatter-table"><tbody><tr><th>title</th><td>Test</td></tr></tbody></table>', html)

    def test_missing(self) -> None:
        text = "# Content\n\n---\ntitle: Test\n---\n"
        self.assertEqual(tuple(extract_frontmatter(text)), ("", text, 0))

    def test_unterminated(self) -> None:
        text = "---\ntitle: Test\n\n# Content"
        self.assertEqual(tuple(extract_frontmatter(text)), ("", text, 0))

    def test_invalid_yaml(self) -> None:
        text = "---\ntitle: [unclosed\n---\n# Content"
        with self.assertLogs("mdview.frontmatter", level=logging.WARNING):
            self.assertEqual(tuple(extract_frontmatter(text)), ("", text, 0))

    def test_not_a_mapping(self) -> None:
        self.assertEqual(tuple(extract_frontmatter("---\n- a\n- b\n---\n# Content")), ("", "# Content", 4))
        self.assertEqual(tuple(extract_frontmatter("---\nJust a title\n---\n\n# H\n")), ("", "# H\n", 4))

    def test_control_characters(self) -> None:
        html, content, line_count = extract_frontmatter('---\ntitle: "a\\x01b"\n"c\\x02": d\n---\n\n# H\n')
        self.assertIn("<tr><th>title</th><td>ab</td></tr>", html)
        self.assertIn("<tr><th>c</th><td>d</td></tr>", html)
        self.assertEqual(content, "# H\n")
        self.assertEqual(line_count, 5)

    def test_empty(self) -> None:
        html, content, line_count = extract_frontmatter("---\n---\n# Content")
        self.assertEqual(html, "")
        self.assertEqual(content, "# Content")
        self.assertEqual(line_count, 2)

    def test_value_types(self) -> None:
        text = "\n".join(
            [
                "---",
                "tags: [alpha, beta]",
                "draft: false",
                "count: 3",
                "missing: null",
                "none: []",
                "nothing: {}",
                "created: 2024-01-15",
                "author:",
                "  name: Ada",
                "---",
                "",
            ]
        )
        html, content, _ = extract_frontmatter(text)
        self.assertEqual(content, "")
        self.assertIn('<ul class="yaml-list"><li>alpha</li><li>beta</li></ul>', html)
        self.assertIn('<span class="yaml-bool">false</span>', html)
        self.assertIn('<span class="yaml-number">3</span>', html)
        self.assertIn('<span class="yaml-null">null</span>', html)
        self.assertIn('<span class="yaml-empty">[]</span>', html)
        self.assertIn('<span class="yaml-empty">{}</span>', html)
        self.assertIn("<td>2024-01-15</td>", html)
        self.assertIn('<table class="yaml-nested-table"><tbody><tr><th>name</th><td>Ada</td></tr></tbody></table>', html)

    def test_escaping(self) -> None:
        html, _, _ = extract_frontmatter('---\ntitle: "<b>bold</b> & more"\n---\n')
        self.assertIn("<td>&lt;b&gt;bold&lt;/b&gt; &amp; more</td>", html)


if __name__ == "__main__":
    unittest.main()
