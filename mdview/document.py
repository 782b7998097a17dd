"""
Render Markdown documents into annotated HTML for a live preview.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

from dataclasses import dataclass
from typing import Any

from markdown_it.token import Token

from .alerts import rewrite_alerts
from .frontmatter import Frontmatter, extract_frontmatter
from .markdown import parse_markdown
from .source_lines import LineMapper


def normalize_line_endings(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


@dataclass
class PreparedDocument:
    """
    A Markdown document after front-matter extraction and alert expansion.

    :param frontmatter: Front-matter table and the number of lines it occupies.
    :param text: Intermediate text to pass to the Markdown parser.
    :param origins: Line-origin table of the intermediate text.
    :param mapper: Maps character offsets in the intermediate text to 1-based lines in the original document.
    """

    frontmatter: Frontmatter
    text: str
    origins: list[int]
    mapper: LineMapper

    def parse(self, env: dict[str, Any]) -> list[Token]:
        return parse_markdown(self.text, env)


def prepare_document(markdown: str) -> PreparedDocument:
    "Runs the text-level passes that precede Markdown parsing."

    frontmatter = extract_frontmatter(normalize_line_endings(markdown))
    text, origins = rewrite_alerts(frontmatter.content, frontmatter.line_count)
    return PreparedDocument(frontmatter, text, origins, LineMapper(text, origins, frontmatter.line_count))
