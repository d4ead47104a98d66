#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/newsformat/components/heading.py
"""Headings h1 through h6."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from bs4.element import Tag

from newsformat.components.base import Component, MatchResult
from newsformat.components.body import split_unsupported_elements
from newsformat.utils.html import first_element

if TYPE_CHECKING:
    from newsformat.context import CompileContext

HEADING_LEVELS = range(1, 7)
_HEADING_TAG = re.compile(r"^h([1-6])$")


class Heading(Component):
    """A heading; images inside it are split into their own components."""

    name = "heading"
    label = "Heading"
    html_capable = True

    @classmethod
    def node_matches(cls, node: Tag, context: CompileContext) -> MatchResult:
        """Claim h1-h6 elements."""
        match = _HEADING_TAG.match(node.name or "")
        if match is None:
            return None
        return split_unsupported_elements(node, node.name, "heading")

    def register_specs(self) -> None:
        """Register heading JSON, layout and one text style per level."""
        self.register_spec(
            "json",
            "JSON",
            {
                "role": "#heading_level#",
                "text": "#text#",
                "format": "#format#",
            },
        )

        self.register_spec(
            "heading-layout",
            "Layout",
            {
                "columnStart": "#body_offset#",
                "columnSpan": "#body_column_span#",
                "margin": {
                    "bottom": 15,
                    "top": 15,
                },
            },
        )

        for level in HEADING_LEVELS:
            self.register_spec(
                f"default-heading-{level}",
                f"Level {level}",
                self.text_style_spec(f"header{level}", lineHeight="#header_line_height#"),
            )

    def build(self, html: str) -> None:
        """Emit the heading with the role and style of its level."""
        element = first_element(html, self.settings.html_parser)
        match = _HEADING_TAG.match(element.name if element is not None else "")
        level = int(match.group(1)) if match else 2
        text = "".join(str(child) for child in element.contents) if element is not None else html

        self.register_json(
            "json",
            {
                "heading_level": f"heading{level}",
                "text": self.format_text(text),
                "format": self.text_format,
            },
        )

        self.register_layout(
            "heading-layout",
            "heading-layout",
            {
                "body_offset": self.theme.body_column_start(),
                "body_column_span": self.theme.body_column_span,
            },
            "layout",
        )

        values = self.text_style_values(f"header{level}")
        values["header_line_height"] = self.theme_int("header_line_height")
        self.register_style(f"default-heading-{level}", f"default-heading-{level}", values, "textStyle")


__all__ = ["Heading"]
