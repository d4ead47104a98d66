#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/newsformat/components/body.py
"""Body text: paragraphs, lists and preformatted blocks."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from bs4.element import Tag

from newsformat.components.base import Component, MatchedFragment, MatchResult

if TYPE_CHECKING:
    from newsformat.context import CompileContext

logger = logging.getLogger(__name__)

BODY_TAGS = ("p", "ol", "ul", "pre")

# Elements that cannot live inside text and become their own components
SPLIT_ELEMENTS = {"img": "img", "figure": "img", "video": "video", "audio": "audio", "iframe": "iframe"}


def _media_kind(node: object) -> Optional[str]:
    if not isinstance(node, Tag):
        return None
    if node.name in SPLIT_ELEMENTS:
        return SPLIT_ELEMENTS[node.name]
    # Linked images: <a href="..."><img></a>
    if node.name == "a" and node.find("img") is not None and not node.get_text(strip=True):
        return "img"
    return None


def split_unsupported_elements(node: Tag, wrapper: str, name: str) -> MatchResult:
    """Split a text element around media it contains.

    Runs of text are rewrapped in ``<wrapper>`` and named ``name``; each media
    element becomes a fragment of its own kind, in document order.

    Returns
    -------
    MatchResult
        ``node`` itself when it holds no media, else the fragment list

    """
    if not any(_media_kind(child) for child in node.children):
        return node

    fragments: list[MatchedFragment] = []
    buffer: list[str] = []

    def flush() -> None:
        text = "".join(buffer)
        buffer.clear()
        if text.strip():
            fragments.append(MatchedFragment(name, f"<{wrapper}>{text.strip()}</{wrapper}>"))

    for child in node.children:
        kind = _media_kind(child)
        if kind is None:
            buffer.append(str(child))
            continue
        flush()
        fragments.append(MatchedFragment(kind, str(child)))
    flush()

    logger.debug(f"Split <{node.name}> into {len(fragments)} fragments")
    return fragments


class Body(Component):
    """Body text. Other components may anchor to it."""

    name = "body"
    label = "Body"
    anchor_target_capable = True
    html_capable = True
    needs_layout_if_anchored = False

    @classmethod
    def node_matches(cls, node: Tag, context: CompileContext) -> MatchResult:
        """Claim non-empty p, ol, ul and pre elements, splitting out media."""
        if node.name not in BODY_TAGS:
            return None
        # Paragraphs holding only media fall through to their children
        if not node.get_text(strip=True):
            return None
        if node.name == "p":
            return split_unsupported_elements(node, "p", "p")
        return node

    def register_specs(self) -> None:
        """Register body JSON, layout and text style specs."""
        self.register_spec(
            "json",
            "JSON",
            {
                "role": "body",
                "text": "#text#",
                "format": "#format#",
            },
        )

        self.register_spec(
            "body-layout",
            "Layout",
            {
                "columnStart": "#body_offset#",
                "columnSpan": "#body_column_span#",
                "margin": {
                    "top": 12,
                    "bottom": 12,
                },
            },
        )

        self.register_spec(
            "default-body",
            "Default Style",
            self.text_style_spec(
                "body",
                linkStyle={"textColor": "#body_link_color#"},
                paragraphSpacingBefore=18,
                paragraphSpacingAfter=18,
            ),
        )

    def build(self, html: str) -> None:
        """Emit the text and register the shared body layout and style."""
        self.register_json(
            "json",
            {
                "text": self.format_text(html),
                "format": self.text_format,
            },
        )

        self.register_layout(
            "body-layout",
            "body-layout",
            {
                "body_offset": self.theme.body_column_start(),
                "body_column_span": self.theme.body_column_span,
            },
            "layout",
        )

        self.register_style(
            "default-body",
            "default-body",
            self.text_style_values("body", "body_link_color"),
            "textStyle",
        )


__all__ = ["BODY_TAGS", "Body", "split_unsupported_elements"]
