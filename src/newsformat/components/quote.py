#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/newsformat/components/quote.py
"""Blockquotes and pull quotes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from bs4.element import Tag

from newsformat.components.base import AnchorPosition, Component, MatchResult
from newsformat.utils.html import first_element, inner_html, node_has_class

if TYPE_CHECKING:
    from newsformat.context import CompileContext

PULLQUOTE_CLASSES = ("pull-quote", "wp-block-pullquote")


class Quote(Component):
    """A blockquote, or a pull quote when marked as one.

    Pull quotes float left or right when aligned, anchoring to neighbouring
    body text.
    """

    name = "quote"
    label = "Quote"
    html_capable = True

    @classmethod
    def node_matches(cls, node: Tag, context: CompileContext) -> MatchResult:
        """Claim blockquotes and figure-wrapped pull quotes."""
        if node.name == "blockquote":
            return node
        if node.name == "figure" and any(node_has_class(node, c) for c in PULLQUOTE_CLASSES):
            return node
        return None

    def register_specs(self) -> None:
        """Register blockquote and pull quote specs."""
        self.register_spec(
            "blockquote-without-border-json",
            "Blockquote JSON",
            {
                "role": "container",
                "layout": {
                    "columnStart": "#body_offset#",
                    "columnSpan": "#body_column_span#",
                    "margin": {"bottom": 25, "top": 25},
                    "contentInset": {"left": True},
                },
                "style": {
                    "backgroundColor": "#blockquote_background_color#",
                    **self.dark_mode(backgroundColor="blockquote_background_color_dark"),
                },
                "components": [
                    {
                        "role": "quote",
                        "text": "#text#",
                        "format": "#format#",
                        "layout": "#quote_layout#",
                        "textStyle": "#quote_text_style#",
                    }
                ],
            },
        )

        self.register_spec(
            "blockquote-with-border-json",
            "Blockquote With Border JSON",
            {
                "role": "container",
                "layout": {
                    "columnStart": "#body_offset#",
                    "columnSpan": "#body_column_span#",
                    "margin": {"bottom": 25, "top": 25},
                    "contentInset": {"left": True},
                },
                "style": {
                    "backgroundColor": "#blockquote_background_color#",
                    "border": {
                        "all": {
                            "width": "#blockquote_border_width#",
                            "style": "#blockquote_border_style#",
                            "color": "#blockquote_border_color#",
                        },
                        "bottom": False,
                        "right": False,
                        "top": False,
                    },
                    **self.dark_mode(backgroundColor="blockquote_background_color_dark"),
                },
                "components": [
                    {
                        "role": "quote",
                        "text": "#text#",
                        "format": "#format#",
                        "layout": "#quote_layout#",
                        "textStyle": "#quote_text_style#",
                    }
                ],
            },
        )

        self.register_spec(
            "blockquote-layout",
            "Blockquote Layout",
            {
                "contentInset": {"left": True, "right": True, "top": True, "bottom": True},
            },
        )

        self.register_spec(
            "default-blockquote",
            "Blockquote Style",
            self.text_style_spec("blockquote"),
        )

        self.register_spec(
            "pullquote-json",
            "Pull quote JSON",
            {
                "role": "container",
                "layout": "#pullquote_layout#",
                "components": [
                    {
                        "role": "quote",
                        "text": "#text#",
                        "format": "#format#",
                        "layout": "#pullquote_layout#",
                        "textStyle": "#pullquote_text_style#",
                    }
                ],
            },
        )

        self.register_spec(
            "pullquote-layout",
            "Pull quote Layout",
            {
                "margin": {"bottom": 15, "top": 15},
            },
        )

        self.register_spec(
            "default-pullquote",
            "Pull quote Style",
            self.text_style_spec("pullquote", textTransform="#pullquote_transform#"),
        )

    def build(self, html: str) -> None:
        """Pick the pull quote or blockquote branch."""
        element = first_element(html, self.settings.html_parser)
        if element is None:
            return

        if element.name == "figure" or any(node_has_class(element, c) for c in PULLQUOTE_CLASSES):
            self.build_pullquote(element)
        else:
            self.build_blockquote(element)

    def text_values(self, element: Tag) -> dict[str, Any]:
        """Text and format of the quote body."""
        quote = element.find("blockquote") if element.name != "blockquote" else element
        markup = inner_html(quote if quote is not None else element)
        return {"text": self.format_text(markup), "format": self.text_format}

    def build_blockquote(self, element: Tag) -> None:
        """A boxed quote spanning the body column."""
        values = self.text_values(element)
        values.update(
            {
                "body_offset": self.theme.body_column_start(),
                "body_column_span": self.theme.body_column_span,
                "blockquote_background_color": self.theme_value("blockquote_background_color"),
                "blockquote_background_color_dark": self.theme_value("blockquote_background_color_dark"),
            }
        )

        border_style = self.theme_value("blockquote_border_style")
        if border_style and border_style != "none":
            spec_name = "blockquote-with-border-json"
            values.update(
                {
                    "blockquote_border_style": border_style,
                    "blockquote_border_color": self.theme_value("blockquote_border_color"),
                    "blockquote_border_width": self.theme_int("blockquote_border_width"),
                }
            )
        else:
            spec_name = "blockquote-without-border-json"

        values["quote_layout"] = self.register_layout("blockquote-layout", "blockquote-layout")
        values["quote_text_style"] = self.register_style(
            "default-blockquote", "default-blockquote", self.text_style_values("blockquote")
        )
        self.register_json(spec_name, values)

    def build_pullquote(self, element: Tag) -> None:
        """A large quote, floated when aligned left or right."""
        classes = element.get("class") or []
        if "alignleft" in classes:
            self.set_anchor_position(AnchorPosition.LEFT)
        elif "alignright" in classes:
            self.set_anchor_position(AnchorPosition.RIGHT)

        values = self.text_values(element)
        values["pullquote_layout"] = self.register_layout("pullquote-layout", "pullquote-layout")
        values["pullquote_text_style"] = self.register_style(
            "default-pullquote",
            "default-pullquote",
            self.text_style_values("pullquote", "pullquote_transform"),
        )
        self.register_json("pullquote-json", values)


__all__ = ["Quote"]
