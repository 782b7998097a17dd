"""
Render Markdown documents into annotated HTML for a live preview.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

from dataclasses import dataclass


@dataclass
class RenderOptions:
    """
    Options that control the generated HTML.

    :param code_languages: Languages of fenced code blocks to replace with a placeholder for client-side rendering
        (e.g. Mermaid diagrams or LaTeX formulas).
    :param embed_images: Whether to inline local images as base64-encoded data URIs.
    :param link_handler: Name of the global JavaScript function that receives clicks on links to local files.
    :param markdown_extensions: File extensions that identify Markdown documents.
    """

    code_languages: tuple[str, ...] = ("mermaid", "math")
    embed_images: bool = True
    link_handler: str = "handleMarkdownLinkClick"
    markdown_extensions: tuple[str, ...] = (".md", ".markdown")

    def is_markdown_suffix(self, suffix: str) -> bool:
        return suffix.lower() in self.markdown_extensions
