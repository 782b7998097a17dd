"""
Render Markdown documents into annotated HTML for a live preview.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

from typing import Any

from markdown_it import MarkdownIt
from markdown_it.token import Token
from mdit_py_plugins.dollarmath import dollarmath_plugin
from mdit_py_plugins.footnote import footnote_plugin
from mdit_py_plugins.tasklists import tasklists_plugin

_PARSER = (
    MarkdownIt("commonmark", {"html": True, "linkify": True})
    .enable(["table", "strikethrough", "linkify"])
    .use(footnote_plugin)
    .use(tasklists_plugin)
    # `allow_digits=False` keeps currency such as `$5 and $10` out of math mode
    .use(dollarmath_plugin, allow_digits=False, double_inline=True)
)


def parse_markdown(content: str, env: dict[str, Any]) -> list[Token]:
    """
    Parses a Markdown document into a flat stream of block-level tokens.

    Inline content is attached to `inline` tokens as children. Block tokens carry a line map `[begin, end)` with
    0-based line indices into `content`.

    :param content: Markdown input as a string.
    :param env: Environment shared between parsing and rendering (e.g. link references, footnotes).
    :returns: Token stream.
    :see: https://markdown-it-py.readthedocs.io/
    """

    return _PARSER.parse(content, env)


def render_tokens(tokens: list[Token], env: dict[str, Any]) -> str:
    "Serializes a token stream into HTML."

    return _PARSER.renderer.render(tokens, _PARSER.options, env)
