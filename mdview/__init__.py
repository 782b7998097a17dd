"""
Render Markdown documents into annotated HTML for a live preview.

Parses Markdown files, converts Markdown content into HTML whose block elements carry the source line they originate
from, embeds local images and rewrites links to local documents such that a host application can intercept them.
"""

from ._version import __version__

__all__ = ["__version__"]

__author__ = "Levente Hunyadi"
__copyright__ = "Copyright 2022-2026, Levente Hunyadi"
__license__ = "MIT"
__maintainer__ = "Levente Hunyadi"
__status__ = "Production"
