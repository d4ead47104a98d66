#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/newsformat/utils/text_format.py
"""Formatting of component text as HTML or lightweight markup.

With HTML support enabled, text keeps a small set of inline and block tags
(``ALLOWED_HTML``); every other tag is unwrapped so its text survives, and
attributes outside the allowlist are dropped. Without HTML support, text is
converted to the markdown dialect the publishing platform understands.
"""

from __future__ import annotations

import re
from typing import Mapping

from bs4.element import Comment, NavigableString, Tag

from newsformat.constants import ALLOWED_HTML, DEFAULT_HTML_PARSER, TextFormat
from newsformat.utils.html import parse_fragment

_BLANK_LINES = re.compile(r"\n{3,}")
_INLINE_SPACE = re.compile(r"[ \t\r\f\v]+")
_MARKDOWN_SPECIAL = re.compile(r"([\\*_`\[\]])")
_NESTED_LIST_LINE = re.compile(r"^(?: {4})+(?:-|\d+\.) ")


def filter_allowed_html(
    markup: str,
    allowed: Mapping[str, frozenset[str]] = ALLOWED_HTML,
    parser: str = DEFAULT_HTML_PARSER,
) -> str:
    """Keep only allowlisted tags and attributes.

    Parameters
    ----------
    markup : str
        HTML fragment
    allowed : Mapping[str, frozenset[str]]
        Tag name to permitted attribute names

    Returns
    -------
    str
        The filtered fragment

    Examples
    --------
        >>> filter_allowed_html('<p class="x">Hi <span>there</span></p>')
        '<p>Hi there</p>'

    """
    soup = parse_fragment(markup, parser)
    for comment in soup.find_all(string=lambda s: isinstance(s, Comment)):
        comment.extract()

    for tag in soup.find_all(True):
        if tag.name not in allowed:
            tag.unwrap()
            continue
        permitted = allowed[tag.name]
        for attribute in list(tag.attrs):
            if attribute not in permitted:
                del tag.attrs[attribute]

    root = soup.body if soup.body is not None else soup
    return "".join(str(child) for child in root.contents).strip()


def _escape_markdown(text: str) -> str:
    return _MARKDOWN_SPECIAL.sub(r"\\\1", text)


def _render_children(node: Tag, list_depth: int = 0) -> str:
    return "".join(_render_node(child, list_depth) for child in node.children)


def _render_list(node: Tag, list_depth: int) -> str:
    ordered = node.name == "ol"
    indent = "    " * list_depth
    lines = []
    index = 1
    for item in node.find_all("li", recursive=False):
        marker = f"{index}." if ordered else "-"
        body = _render_children(item, list_depth + 1).strip()
        lines.append(f"{indent}{marker} {body}")
        index += 1
    return "\n".join(lines) + "\n\n"


def _render_node(node: object, list_depth: int = 0) -> str:
    if isinstance(node, Comment):
        return ""
    if isinstance(node, NavigableString):
        return _escape_markdown(_INLINE_SPACE.sub(" ", str(node)))
    if not isinstance(node, Tag):
        return ""

    name = node.name
    if name in ("script", "style"):
        return ""
    if name == "br":
        return "\n"
    if name in ("strong", "b"):
        inner = _render_children(node, list_depth).strip()
        return f"**{inner}**" if inner else ""
    if name in ("em", "i"):
        inner = _render_children(node, list_depth).strip()
        return f"_{inner}_" if inner else ""
    if name == "a":
        inner = _render_children(node, list_depth).strip()
        href = node.get("href")
        return f"[{inner}]({href})" if href else inner
    if name in ("ul", "ol"):
        return _render_list(node, list_depth)
    if name == "pre":
        return f"```\n{node.get_text()}\n```\n\n"
    if name == "code":
        return f"`{node.get_text()}`"
    if len(name) == 2 and name[0] == "h" and name[1].isdigit():
        inner = _render_children(node, list_depth).strip()
        return f"{'#' * int(name[1])} {inner}\n\n"
    if name in ("p", "div", "blockquote", "aside", "footer", "figcaption"):
        inner = _render_children(node, list_depth).strip()
        return f"{inner}\n\n" if inner else ""
    return _render_children(node, list_depth)


def html_to_markdown(markup: str, parser: str = DEFAULT_HTML_PARSER) -> str:
    """Convert an HTML fragment to markdown.

    Examples
    --------
        >>> html_to_markdown('<p>Read <a href="https://example.com">this</a> <strong>now</strong></p>')
        'Read [this](https://example.com) **now**'

    """
    soup = parse_fragment(markup, parser)
    root = soup.body if soup.body is not None else soup
    text = _render_children(root)
    lines = [line.rstrip() if _NESTED_LIST_LINE.match(line) else line.strip() for line in text.split("\n")]
    text = "\n".join(lines)
    return _BLANK_LINES.sub("\n\n", text).strip()


def format_text(markup: str, text_format: TextFormat, parser: str = DEFAULT_HTML_PARSER) -> str:
    """Render component text in ``text_format``."""
    if text_format == "html":
        return filter_allowed_html(markup, parser=parser)
    return html_to_markdown(markup, parser=parser)


__all__ = ["filter_allowed_html", "format_text", "html_to_markdown"]
