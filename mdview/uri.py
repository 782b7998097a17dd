"""
Render Markdown documents into annotated HTML for a live preview.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import base64
from pathlib import PurePosixPath
from urllib.parse import unquote, urlparse

_IMAGE_MIME_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".svg": "image/svg+xml",
    ".webp": "image/webp",
    ".bmp": "image/bmp",
    ".ico": "image/x-icon",
}


def to_base64_data_uri(mime: str, data: bytes) -> str:
    "Generates a base64-encoded data URI with the specified MIME type."

    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime};base64,{encoded}"


def image_mime_type(suffix: str) -> str:
    "Infers the MIME type of an image from its file extension, defaulting to PNG."

    return _IMAGE_MIME_TYPES.get(suffix.lower(), "image/png")


def is_web_url(url: str) -> bool:
    return url.startswith(("http://", "https://"))


def is_embeddable_url(url: str) -> bool:
    "True if an image URL refers to content that the browser can load without help."

    return is_web_url(url) or url.startswith("data:")


def has_scheme(url: str) -> bool:
    """
    True if a URL carries a scheme such as `https:` or `mailto:`.

    Single-letter schemes are taken as Windows drive letters (e.g. `C:/docs/index.md`).
    """

    return len(urlparse(url).scheme) > 1


def url_suffix(url: str) -> str:
    "The file extension of the path component of a URL, excluding query and fragment."

    return PurePosixPath(unquote(urlparse(url).path)).suffix


def url_to_path(url: str) -> str:
    "The percent-decoded path component of a relative URL."

    return unquote(urlparse(url).path)
