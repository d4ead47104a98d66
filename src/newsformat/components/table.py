#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/newsformat/components/table.py
"""HTML tables."""

from __future__ import annotations

from typing import TYPE_CHECKING

from bs4.element import Tag

from newsformat.components.base import Component, MatchResult
from newsformat.utils.html import first_element, node_has_class, outer_html
from newsformat.utils.text_format import filter_allowed_html

if TYPE_CHECKING:
    from newsformat.context import CompileContext

TABLE_ALLOWED_HTML: dict[str, frozenset[str]] = {
    "table": frozenset(),
    "thead": frozenset(),
    "tbody": frozenset(),
    "tfoot": frozenset(),
    "tr": frozenset(),
    "th": frozenset({"colspan", "rowspan"}),
    "td": frozenset({"colspan", "rowspan"}),
    "caption": frozenset(),
    "a": frozenset({"href"}),
    "b": frozenset(),
    "strong": frozenset(),
    "em": frozenset(),
    "i": frozenset(),
    "br": frozenset(),
}


class Table(Component):
    """A table, emitted as an ``htmltable``.

    Tables are only claimed when HTML support is enabled; otherwise their
    text falls through to the body components.
    """

    name = "table"
    label = "Table"

    @classmethod
    def node_matches(cls, node: Tag, context: CompileContext) -> MatchResult:
        """Claim tables and table blocks when HTML support is on."""
        if not context.settings.html_support:
            return None
        if node.name == "table":
            return node
        if node_has_class(node, "wp-block-table"):
            table = node.find("table")
            if table is not None:
                return table
        return None

    def register_specs(self) -> None:
        self.register_spec(
            "json",
            "JSON",
            {
                "role": "htmltable",
                "html": "#html#",
                "layout": "#layout#",
                "style": "#style#",
            },
        )

        self.register_spec(
            "table-layout",
            "Layout",
            {
                "columnStart": "#body_offset#",
                "columnSpan": "#body_column_span#",
                "margin": {"bottom": 20, "top": 20},
            },
        )

        self.register_spec(
            "default-table",
            "Style",
            {
                "border": {
                    "all": {
                        "color": "#table_border_color#",
                        "width": "#table_border_width#",
                    },
                },
                "tableStyle": {
                    "cells": {
                        "backgroundColor": "#table_body_background_color#",
                        "padding": 5,
                        "textStyle": {
                            "fontName": "#table_body_font#",
                            "fontSize": "#table_body_size#",
                            "textColor": "#table_body_color#",
                        },
                    },
                    "headerCells": {
                        "backgroundColor": "#table_header_background_color#",
                        "padding": 5,
                        "textStyle": {
                            "fontName": "#table_header_font#",
                            "fontSize": "#table_body_size#",
                            "textColor": "#table_header_color#",
                        },
                    },
                },
            },
        )

    def build(self, html: str) -> None:
        table = first_element(html, self.settings.html_parser)
        if table is None or table.name != "table":
            return

        layout = self.register_layout(
            "table-layout",
            "table-layout",
            {
                "body_offset": self.theme.body_column_start(),
                "body_column_span": self.theme.body_column_span,
            },
        )

        style_keys = (
            "table_border_color",
            "table_body_background_color",
            "table_body_font",
            "table_body_color",
            "table_header_background_color",
            "table_header_font",
            "table_header_color",
        )
        values = {key: self.theme_value(key) for key in style_keys}
        values["table_border_width"] = self.theme_int("table_border_width")
        values["table_body_size"] = self.theme_int("table_body_size")
        style = self.register_component_style("default-table", "default-table", values)

        self.register_json(
            "json",
            {
                "html": filter_allowed_html(outer_html(table), TABLE_ALLOWED_HTML, self.settings.html_parser),
                "layout": layout,
                "style": style,
            },
        )


__all__ = ["Table"]
