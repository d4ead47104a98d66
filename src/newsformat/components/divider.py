#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/newsformat/components/divider.py
"""Horizontal rules."""

from __future__ import annotations

from typing import TYPE_CHECKING

from bs4.element import Tag

from newsformat.components.base import Component, MatchResult

if TYPE_CHECKING:
    from newsformat.context import CompileContext


class Divider(Component):
    """A divider drawn with the theme's stroke."""

    name = "divider"
    label = "Divider"

    @classmethod
    def node_matches(cls, node: Tag, context: CompileContext) -> MatchResult:
        if node.name == "hr":
            return node
        return None

    def register_specs(self) -> None:
        self.register_spec(
            "json",
            "JSON",
            {
                "role": "divider",
                "layout": "#layout#",
                "stroke": {
                    "color": "#divider_color#",
                    "style": "solid",
                    "width": "#divider_width#",
                },
            },
        )

        self.register_spec(
            "divider-layout",
            "Layout",
            {
                "columnStart": "#body_offset#",
                "columnSpan": "#body_column_span#",
                "margin": {"bottom": 25, "top": 25},
            },
        )

    def build(self, html: str) -> None:
        layout = self.register_layout(
            "divider-layout",
            "divider-layout",
            {
                "body_offset": self.theme.body_column_start(),
                "body_column_span": self.theme.body_column_span,
            },
        )
        self.register_json(
            "json",
            {
                "divider_color": self.theme_value("divider_color"),
                "divider_width": self.theme_int("divider_width"),
                "layout": layout,
            },
        )


__all__ = ["Divider"]
