"""
Render Markdown documents into annotated HTML for a live preview.

Parses a Markdown file, converts Markdown content into HTML annotated with source lines, and writes either an HTML
fragment or a standalone HTML document.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import argparse
import html
import json
import logging
import os.path
import sys
from io import StringIO
from pathlib import Path
from typing import Optional

from . import __version__
from .headings import document_title, heading_tree
from .options import RenderOptions
from .render import DocumentError, RenderResult, render_file


class Arguments(argparse.Namespace):
    mdpath: Path
    output: Optional[str]
    toc: Optional[str]
    fragment: bool
    embed_images: bool
    code_languages: Optional[list[str]]
    loglevel: str


def get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser()
    parser.prog = os.path.basename(os.path.dirname(__file__))
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument("mdpath", help="Path to Markdown (or plain text) file to render.")
    parser.add_argument("-o", "--output", help="Path to HTML file to write. If omitted, writes to standard output.")
    parser.add_argument("--toc", help="Path to JSON file to write the table of contents to.")
    parser.add_argument(
        "--fragment",
        action="store_true",
        default=False,
        help="Write the document body only instead of a standalone HTML document.",
    )
    parser.add_argument(
        "--no-embed-images",
        dest="embed_images",
        action="store_false",
        default=True,
        help="Keep references to local images instead of embedding them as data URIs.",
    )
    parser.add_argument(
        "--code-language",
        dest="code_languages",
        action="append",
        metavar="LANGUAGE",
        help="Language of fenced code blocks to pass on for client-side rendering (default: 'mermaid' and 'math').",
    )
    parser.add_argument(
        "-l",
        "--loglevel",
        choices=[
            logging.getLevelName(level).lower()
            for level in (
                logging.DEBUG,
                logging.INFO,
                logging.WARN,
                logging.ERROR,
                logging.CRITICAL,
            )
        ],
        default=logging.getLevelName(logging.INFO),
        help="Use this option to set the log verbosity.",
    )
    return parser


def get_help() -> str:
    parser = get_parser()
    with StringIO() as buf:
        parser.print_help(file=buf)
        return buf.getvalue()


def to_document(result: RenderResult) -> str:
    "Wraps rendered HTML in a standalone document titled after its unique top-level heading."

    title = document_title(result.headings) or ""
    return "\n".join(
        [
            "<!DOCTYPE html>",
            "<html>",
            "<head>",
            '<meta charset="utf-8">',
            f"<title>{html.escape(title)}</title>",
            "</head>",
            "<body>",
            result.html,
            "</body>",
            "</html>",
            "",
        ]
    )


def main(argv: Optional[list[str]] = None) -> None:
    parser = get_parser()
    args = Arguments()
    parser.parse_args(argv, namespace=args)

    args.mdpath = Path(args.mdpath)

    logging.basicConfig(
        level=getattr(logging, args.loglevel.upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(funcName)s [%(lineno)d] - %(message)s",
    )

    options = RenderOptions(embed_images=args.embed_images)
    if args.code_languages:
        options.code_languages = tuple(args.code_languages)

    try:
        result = render_file(args.mdpath, options)
    except DocumentError as err:
        logging.error(err)
        sys.exit(1)

    content = result.html if args.fragment else to_document(result)
    if args.output is not None:
        Path(args.output).write_text(content, encoding="utf-8")
    else:
        sys.stdout.write(content)

    if args.toc is not None:
        tree = heading_tree(result.headings)
        Path(args.toc).write_text(json.dumps(tree, ensure_ascii=False, indent=4), encoding="utf-8")


if __name__ == "__main__":
    main()
