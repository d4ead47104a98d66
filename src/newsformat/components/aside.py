#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/newsformat/components/aside.py
"""Asides: boxed side content built from its own subcomponents."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from bs4.element import Tag

from newsformat.components.base import AnchorPosition, Component, MatchResult
from newsformat.utils.html import first_element, node_has_class

if TYPE_CHECKING:
    from newsformat.context import CompileContext

logger = logging.getLogger(__name__)


class Aside(Component):
    """Content marked with the configured aside class.

    Every child of the aside element is built as a subcomponent, so its
    layouts and styles are registered under ``aside-subcomponent-*`` keys.
    The aside floats right, or left when the element carries ``alignleft``.
    """

    name = "aside"
    label = "Aside"
    parent_capable = True

    @classmethod
    def node_matches(cls, node: Tag, context: CompileContext) -> MatchResult:
        """Claim elements with the aside class from the settings."""
        classname = context.settings.aside_component_class
        if classname and node_has_class(node, classname):
            return node
        return None

    def register_specs(self) -> None:
        self.register_spec(
            "json",
            "JSON",
            {
                "role": "aside",
                "components": "#components#",
            },
        )

        self.register_spec(
            "aside-layout",
            "Layout",
            {
                "columnStart": "#body_offset#",
                "columnSpan": "#body_column_span#",
                "contentInset": True,
                "margin": {"bottom": 20, "top": 20},
            },
        )

        self.register_spec(
            "default-aside",
            "Style",
            {
                "backgroundColor": "#aside_background_color#",
                "border": {
                    "all": {
                        "width": "#aside_border_width#",
                        "color": "#aside_border_color#",
                    },
                },
                **self.dark_mode(backgroundColor="aside_background_color_dark"),
            },
        )

    def build(self, html: str) -> None:
        """Build the children, then wrap them in the aside container."""
        element = first_element(html, self.settings.html_parser)
        if element is None:
            return

        components = self.build_subcomponents(element)
        if not components:
            logger.debug("Aside produced no subcomponents; skipping")
            return

        self.set_anchor_position(AnchorPosition.LEFT if node_has_class(element, "alignleft") else AnchorPosition.RIGHT)

        self.register_json("json", {"components": components})

        self.register_layout(
            "aside-layout",
            "aside-layout",
            {
                "body_offset": self.theme.body_column_start(),
                "body_column_span": self.theme.body_column_span,
            },
            "layout",
        )

        self.register_component_style(
            "default-aside",
            "default-aside",
            {
                "aside_background_color": self.theme_value("aside_background_color"),
                "aside_background_color_dark": self.theme_value("aside_background_color_dark"),
                "aside_border_color": self.theme_value("aside_border_color"),
                "aside_border_width": self.theme_int("aside_border_width"),
            },
            "style",
        )

    def build_subcomponents(self, element: Tag) -> list[dict[str, Any]]:
        """Return the JSON of every subcomponent built from ``element``'s children."""
        assert self.context is not None and self.context.factory is not None
        outputs: list[dict[str, Any]] = []
        for child in list(element.children):
            for component in self.context.factory.get_components_from_node(child, self):
                output = component.to_output()
                if output is not None:
                    outputs.append(output)
        return outputs


__all__ = ["Aside"]
