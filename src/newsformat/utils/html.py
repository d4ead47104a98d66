#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/newsformat/utils/html.py
"""BeautifulSoup helpers shared by component matchers and builders."""

from __future__ import annotations

import html as _html
import re
from pathlib import PurePosixPath
from typing import Any, Optional
from urllib.parse import urlparse

from bs4 import BeautifulSoup, FeatureNotFound
from bs4.element import NavigableString, Tag

from newsformat.constants import DEFAULT_HTML_PARSER
from newsformat.exceptions import DependencyError

# src="..." attributes first, then CSS background images
_SRC_PATTERN = re.compile(r"""src=['"]([^'"]+)['"]""", re.IGNORECASE)
_BACKGROUND_PATTERN = re.compile(r"background-image:\s*url\((.*?)\)", re.IGNORECASE)

_PARSER_PACKAGES = {"lxml": "lxml", "html5lib": "html5lib"}


def parse_fragment(markup: str, parser: str = DEFAULT_HTML_PARSER) -> BeautifulSoup:
    """Parse a markup fragment, tolerating malformed input.

    Raises
    ------
    DependencyError
        If the requested parser backend is not installed

    """
    try:
        return BeautifulSoup(markup or "", parser)
    except FeatureNotFound as e:
        package = _PARSER_PACKAGES.get(parser, parser)
        raise DependencyError(
            f"HTML parser '{parser}' is not available; install '{package}'",
            missing_packages=[(package, "")],
            original_error=e,
        ) from e


def first_element(markup: str, parser: str = DEFAULT_HTML_PARSER) -> Optional[Tag]:
    """Return the first element of a fragment, skipping html/body wrappers."""
    soup = parse_fragment(markup, parser)
    root = soup.body if soup.body is not None else soup
    for child in root.children:
        if isinstance(child, Tag):
            return child
    return None


def is_text(node: Any) -> bool:
    """Return True for plain text nodes with visible content."""
    return type(node) is NavigableString and bool(str(node).strip())


def node_has_class(node: Any, classname: str) -> bool:
    """Return True if ``node`` is an element carrying CSS class ``classname``."""
    if not classname or not isinstance(node, Tag):
        return False
    classes = node.get("class") or []
    if isinstance(classes, str):
        classes = classes.split()
    return classname in classes


def get_iframe_from_node(node: Any) -> Optional[Tag]:
    """Return ``node`` if it is an iframe, else the first iframe inside it."""
    if not isinstance(node, Tag):
        return None
    if node.name == "iframe":
        return node
    return node.find("iframe")


def inner_html(node: Tag) -> str:
    """Serialize the children of ``node``."""
    return "".join(str(child) for child in node.contents)


def outer_html(node: Any) -> str:
    """Serialize ``node`` including its own tag."""
    return str(node)


def format_src_url(url: str) -> str:
    """Normalize a source URL; returns an empty string when it is unusable.

    Entities are decoded, surrounding quotes removed and protocol-relative
    URLs given an https scheme. Only http(s) URLs are accepted.
    """
    url = _html.unescape(url or "").strip().strip("'\"")
    if url.startswith("//"):
        url = f"https:{url}"
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return ""
    return url


def url_from_src(markup: str) -> str:
    """Return the first usable ``src`` URL in ``markup``.

    ``src`` attributes are preferred over CSS ``background-image`` URLs.
    """
    for pattern in (_SRC_PATTERN, _BACKGROUND_PATTERN):
        for match in pattern.finditer(markup or ""):
            url = format_src_url(match.group(1))
            if url:
                return url
    return ""


def get_filename(url: str) -> str:
    """Return the last path segment of ``url`` without its query string."""
    path = urlparse(url).path
    return PurePosixPath(path).name


__all__ = [
    "first_element",
    "format_src_url",
    "get_filename",
    "get_iframe_from_node",
    "inner_html",
    "is_text",
    "node_has_class",
    "outer_html",
    "parse_fragment",
    "url_from_src",
]
