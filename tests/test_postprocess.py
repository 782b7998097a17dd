"""
Render Markdown documents into annotated HTML for a live preview.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import base64
import logging
import unittest
from pathlib import Path
from tempfile import TemporaryDirectory

from mdview.extra import override
from mdview.headings import HeadingInfo
from mdview.options import RenderOptions
from mdview.postprocess import post_process_html
from mdview.source_lines import TableSourceRange
from tests.utility import TypedTestCase, select

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(funcName)s [%(lineno)d] - %(message)s",
)

PNG_IMAGE = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="
)


class TestPostProcess(TypedTestCase):
    base_dir: Path

    @override
    def setUp(self) -> None:
        self._temp_dir = TemporaryDirectory()
        self.base_dir = Path(self._temp_dir.name)

    @override
    def tearDown(self) -> None:
        self._temp_dir.cleanup()

    def test_empty(self) -> None:
        self.assertEqual(post_process_html("", self.base_dir, []), "")
        self.assertEqual(post_process_html("\n", self.base_dir, []), "\n")

    def test_heading_ids(self) -> None:
        html = post_process_html(
            "<h1>A</h1>\n<p>text</p>\n<h2>B</h2>\n",
            self.base_dir,
            [],
            [HeadingInfo(1, "A", "a"), HeadingInfo(2, "B", "b")],
        )
        self.assertEqual([h.get("id") for h in select(html, "//h1|//h2")], ["a", "b"])
        self.assertIn("<p>text</p>", html)

    def test_surplus_headings(self) -> None:
        html = post_process_html("<h1>A</h1><h2>B</h2><h3>C</h3>", self.base_dir, [], [HeadingInfo(1, "A", "a")])
        self.assertEqual([h.get("id") for h in select(html, "//h1|//h2|//h3")], ["a", None, None])

    def test_surplus_tables(self) -> None:
        html = post_process_html(
            "<table><tr><td>1</td></tr></table><table><tr><td>2</td></tr></table>",
            self.base_dir,
            [TableSourceRange(3, 5)],
        )
        first, second = select(html, "//table")
        self.assertEqual(first.get("data-source-line"), "3")
        self.assertEqual(first.get("data-source-line-end"), "5")
        self.assertIsNone(second.get("data-source-line"))

    def test_alert_contents_skipped(self) -> None:
        html = post_process_html(
            '<div class="markdown-alert markdown-alert-note"><h2>Inner</h2><table data-source-line="2"></table></div>'
            "<h2>Outer</h2><table></table>",
            self.base_dir,
            [TableSourceRange(7, 9)],
            [HeadingInfo(2, "Outer", "outer")],
        )
        inner, outer = select(html, "//h2")
        self.assertIsNone(inner.get("id"))
        self.assertEqual(outer.get("id"), "outer")
        inner_table, outer_table = select(html, "//table")
        self.assertEqual(inner_table.get("data-source-line"), "2")
        self.assertEqual(outer_table.get("data-source-line"), "7")

    def test_embed_image(self) -> None:
        (self.base_dir / "images").mkdir()
        image_path = self.base_dir / "images" / "my image.png"
        image_path.write_bytes(PNG_IMAGE)

        html = post_process_html('<p><img src="images/my%20image.png" alt="pixel"></p>', self.base_dir, [])
        (img,) = select(html, "//img")
        self.assertEqual(img.get("data-original-src"), str(image_path.resolve()))
        self.assertEqual(img.get("src"), "data:image/png;base64," + base64.b64encode(PNG_IMAGE).decode("ascii"))
        self.assertEqual(img.get("alt"), "pixel")

    def test_image_mime_type(self) -> None:
        (self.base_dir / "icon.SVG").write_text("<svg/>", encoding="utf-8")
        html = post_process_html('<img src="icon.SVG">', self.base_dir, [])
        self.assertStartsWith(select(html, "//img")[0].get("src"), "data:image/svg+xml;base64,")

    def test_missing_image(self) -> None:
        with self.assertLogs("mdview.postprocess", level=logging.WARNING):
            html = post_process_html('<img src="missing.png">', self.base_dir, [])
        (img,) = select(html, "//img")
        self.assertEqual(img.get("src"), "missing.png")
        self.assertIsNone(img.get("data-original-src"))

    def test_remote_images(self) -> None:
        for src in ("https://example.com/a.png", "http://example.com/a.png", "data:image/png;base64,AAAA"):
            with self.subTest(src=src):
                html = post_process_html(f'<img src="{src}">', self.base_dir, [])
                self.assertEqual(select(html, "//img")[0].get("src"), src)

    def test_embedding_disabled(self) -> None:
        (self.base_dir / "a.png").write_bytes(PNG_IMAGE)
        html = post_process_html('<img src="a.png">', self.base_dir, [], options=RenderOptions(embed_images=False))
        self.assertEqual(select(html, "//img")[0].get("src"), "a.png")

    def test_markdown_link(self) -> None:
        html = post_process_html('<p>See <a href="docs/guide.md#setup">the guide</a>.</p>', self.base_dir, [])
        self.assertEqual(select(html, "//a"), [])
        (span,) = select(html, "//span")
        self.assertEqual(span.get("class"), "md-link")
        self.assertIsNone(span.get("href"))
        self.assertEqual(span.text, "the guide")
        self.assertEqual(span.tail, ".")
        handler = span.get("onmousedown")
        self.assertIn('window.handleMarkdownLinkClick("docs/guide.md#setup", event.button)', handler)
        self.assertIn("event.button === 0 || event.button === 1", handler)

    def test_markdown_extension_case(self) -> None:
        html = post_process_html('<a href="README.MARKDOWN">readme</a>', self.base_dir, [])
        self.assertEqual(select(html, "//span")[0].get("class"), "md-link")

    def test_invalid_link(self) -> None:
        html = post_process_html('<a href="notes.txt">notes</a>', self.base_dir, [])
        self.assertEqual(select(html, "//span")[0].get("class"), "md-link md-link-invalid")

    def test_untouched_links(self) -> None:
        for href in ("https://example.com/page.md", "http://example.com", "mailto:someone@example.com", "#section", "folder/page"):
            with self.subTest(href=href):
                html = post_process_html(f'<a href="{href}">link</a>', self.base_dir, [])
                (anchor,) = select(html, "//a")
                self.assertEqual(anchor.get("href"), href)

    def test_malformed_urls(self) -> None:
        for href in ("//[x.md", "http://[x/a.md", "file://[x/a.md"):
            with self.subTest(href=href):
                html = post_process_html(f'<a href="{href}">link</a>', self.base_dir, [])
                self.assertEqual(select(html, "//a")[0].get("href"), href)
        for src in ("http://[x/a.png", "file://[x/a.png"):
            with self.subTest(src=src):
                html = post_process_html(f'<img src="{src}">', self.base_dir, [])
                (img,) = select(html, "//img")
                self.assertEqual(img.get("src"), src)
                self.assertIsNone(img.get("data-original-src"))

    def test_custom_link_handler(self) -> None:
        html = post_process_html('<a href="a.md">a</a>', self.base_dir, [], options=RenderOptions(link_handler="openDocument"))
        self.assertIn("window.openDocument(", select(html, "//span")[0].get("onmousedown"))

    def test_linked_image(self) -> None:
        (self.base_dir / "a.png").write_bytes(PNG_IMAGE)
        html = post_process_html('<a href="a.md"><img src="a.png"></a>', self.base_dir, [])
        (img,) = select(html, "//span/img")
        self.assertStartsWith(img.get("src"), "data:image/png;base64,")


if __name__ == "__main__":
    unittest.main()
