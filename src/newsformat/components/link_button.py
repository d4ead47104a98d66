#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/newsformat/components/link_button.py
"""Link buttons."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from bs4.element import Tag

from newsformat.components.base import Component, MatchResult
from newsformat.utils.html import first_element, format_src_url, node_has_class

if TYPE_CHECKING:
    from newsformat.context import CompileContext

logger = logging.getLogger(__name__)


class LinkButton(Component):
    """A tappable button linking to a URL."""

    name = "link_button"
    label = "Button"

    @classmethod
    def node_matches(cls, node: Tag, context: CompileContext) -> MatchResult:
        """Claim button links, or a button block holding one."""
        if node.name == "a" and node_has_class(node, "wp-block-button__link"):
            return node
        if node_has_class(node, "wp-block-button"):
            link = node.find("a", href=True)
            if link is not None:
                return link
        return None

    def register_specs(self) -> None:
        self.register_spec(
            "json",
            "JSON",
            {
                "role": "link_button",
                "text": "#text#",
                "URL": "#url#",
                "style": "#style#",
                "layout": "#layout#",
                "textStyle": "#text_style#",
            },
        )

        self.register_spec(
            "link-button-layout",
            "Layout",
            {
                "columnStart": "#body_offset#",
                "columnSpan": "#body_column_span#",
                "margin": {"bottom": 20, "top": 20},
                "padding": {"bottom": 15, "left": 15, "right": 15, "top": 15},
            },
        )

        self.register_spec(
            "default-link-button-style",
            "Style",
            {
                "backgroundColor": "#button_background_color#",
                "border": {
                    "all": {
                        "width": "#button_border_width#",
                        "color": "#button_border_color#",
                    },
                },
                "mask": {
                    "type": "corners",
                    "radius": "#button_border_radius#",
                },
                **self.dark_mode(backgroundColor="button_background_color_dark"),
            },
        )

        self.register_spec(
            "default-link-button-text-style",
            "Text Style",
            {
                "fontName": "#button_font_face#",
                "fontSize": "#button_font_size#",
                "hyphenation": False,
                "textAlignment": "center",
                "textColor": "#button_color#",
                **self.dark_mode(textColor="button_color_dark"),
            },
        )

    def build(self, html: str) -> None:
        link = first_element(html, self.settings.html_parser)
        if link is None:
            return
        url = format_src_url(link.get("href", ""))
        text = link.get_text(" ", strip=True)
        if not url or not text:
            logger.debug("Button needs both a URL and text; skipping")
            return

        layout = self.register_layout(
            "link-button-layout",
            "link-button-layout",
            {
                "body_offset": self.theme.body_column_start(),
                "body_column_span": self.theme.body_column_span,
            },
        )

        style = self.register_component_style(
            "default-link-button",
            "default-link-button-style",
            {
                "button_background_color": self.theme_value("button_background_color"),
                "button_background_color_dark": self.theme_value("button_background_color_dark"),
                "button_border_color": self.theme_value("button_border_color"),
                "button_border_width": self.theme_int("button_border_width"),
                "button_border_radius": self.theme_int("button_border_radius"),
            },
        )

        text_style = self.register_style(
            "default-link-button",
            "default-link-button-text-style",
            {
                "button_font_face": self.theme_value("button_font_face"),
                "button_font_size": self.theme_int("button_font_size"),
                "button_color": self.theme_value("button_color"),
                "button_color_dark": self.theme_value("button_color_dark"),
            },
        )

        self.register_json(
            "json",
            {"text": text, "url": url, "layout": layout, "style": style, "text_style": text_style},
        )


__all__ = ["LinkButton"]
