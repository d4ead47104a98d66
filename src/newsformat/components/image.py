#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/newsformat/components/image.py
"""Images, with optional captions and left/right floating."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any, Optional

from bs4.element import Tag

from newsformat.components.base import AnchorPosition, Component, MatchResult
from newsformat.hooks import IMAGE_SRC
from newsformat.utils.html import first_element, get_filename, inner_html, node_has_class, url_from_src

if TYPE_CHECKING:
    from newsformat.context import CompileContext

logger = logging.getLogger(__name__)

_ALIGN_LEFT = re.compile(r"""align=["']left["']|class=["'][^"']*\balignleft\b""", re.IGNORECASE)
_ALIGN_RIGHT = re.compile(r"""align=["']right["']|class=["'][^"']*\balignright\b""", re.IGNORECASE)


def alignment_anchor(html: str) -> AnchorPosition:
    """Map left/right alignment markup to an anchor position."""
    if _ALIGN_LEFT.search(html):
        return AnchorPosition.LEFT
    if _ALIGN_RIGHT.search(html):
        return AnchorPosition.RIGHT
    return AnchorPosition.NONE


def find_caption(element: Optional[Tag]) -> Optional[str]:
    """Return the caption markup of a figure or cover block, if any."""
    if element is None:
        return None
    caption = element.find("figcaption")
    if caption is None and node_has_class(element, "wp-block-cover"):
        caption = element.find("div")
    if caption is None:
        return None
    text = inner_html(caption).strip()
    return text or None


class Image(Component):
    """A photo or image, grouped with its caption when it has one."""

    name = "image"
    label = "Image"

    @classmethod
    def node_matches(cls, node: Tag, context: CompileContext) -> MatchResult:
        """Claim img elements, cover blocks and figures holding an image."""
        if node.name == "img" or node_has_class(node, "wp-block-cover"):
            return node
        if node.name == "figure" and (node_has_class(node, "wp-caption") or node.find("img") is not None):
            return node
        return None

    def register_specs(self) -> None:
        """Register JSON for both caption branches and the four layout families."""
        self.register_spec(
            "json-without-caption",
            "JSON without caption",
            {
                "role": "#role#",
                "URL": "#url#",
                "layout": "#layout#",
            },
        )

        caption_style = {
            "textAlignment": "#text_alignment#",
            "fontName": "#caption_font#",
            "fontSize": "#caption_size#",
            "tracking": "#caption_tracking#",
            "lineHeight": "#caption_line_height#",
            "textColor": "#caption_color#",
        }
        caption_style.update(self.dark_mode(textColor="caption_color_dark"))

        self.register_spec(
            "json-with-caption",
            "JSON with caption",
            {
                "role": "container",
                "components": [
                    {
                        "role": "#role#",
                        "URL": "#url#",
                        "layout": "#layout#",
                        "caption": {
                            "format": "html",
                            "text": "#caption#",
                            "textStyle": {"fontName": "#caption_font#"},
                        },
                    },
                    {
                        "role": "caption",
                        "text": "#caption_text#",
                        "format": "html",
                        "textStyle": caption_style,
                        "layout": {
                            "ignoreDocumentMargin": "#full_bleed_images#",
                            "margin": {"bottom": "#caption_margin_bottom#"},
                        },
                    },
                ],
                "layout": {"ignoreDocumentMargin": "#full_bleed_images#"},
            },
        )

        self.register_spec(
            "anchored-image",
            "Anchored Layout (Without Caption)",
            {"margin": {"bottom": 25, "top": 25}},
        )
        self.register_spec(
            "anchored-image-with-caption",
            "Anchored Layout (With Caption)",
            {"margin": {"bottom": 10, "top": 25}},
        )
        self.register_spec(
            "non-anchored-image",
            "Non Anchored Layout (Without Caption)",
            {
                "margin": {"bottom": 25, "top": 25},
                "columnSpan": "#layout_columns_minus_4#",
                "columnStart": 2,
            },
        )
        self.register_spec(
            "non-anchored-image-with-caption",
            "Non Anchored Layout (With Caption)",
            {
                "margin": {"bottom": 10, "top": 25},
                "columnSpan": "#layout_columns_minus_4#",
                "columnStart": 2,
            },
        )
        self.register_spec(
            "non-anchored-full-bleed-image",
            "Non Anchored with Full Bleed Images Layout (Without Caption)",
            {"margin": {"bottom": 25, "top": 25}, "ignoreDocumentMargin": True},
        )
        self.register_spec(
            "non-anchored-full-bleed-image-with-caption",
            "Non Anchored with Full Bleed Images Layout (With Caption)",
            {"margin": {"bottom": 10, "top": 25}, "ignoreDocumentMargin": True},
        )

    def build(self, html: str) -> None:
        """Resolve the source, alignment and caption, then emit the JSON."""
        url = url_from_src(html)
        if self.context is not None:
            hook_context = self.context.hook_context(self.name, html=html)
            url = self.context.hooks.execute_hooks(IMAGE_SRC, url, hook_context)
        if not url:
            logger.debug("Image has no usable source; skipping")
            return

        filename = get_filename(url)
        values: dict[str, Any] = {
            "url": self.maybe_bundle_source(url, filename),
            "role": "image" if self.context is not None and self.context.metadata.use_image_component else "photo",
        }

        self.set_anchor_position(alignment_anchor(html))

        caption = find_caption(first_element(html, self.settings.html_parser))
        if caption is not None:
            values.update(self.caption_values(caption))
            spec_name = "json-with-caption"
        else:
            spec_name = "json-without-caption"

        if self.anchor_position == AnchorPosition.NONE:
            values["layout"] = self.register_non_anchor_layout(caption is not None)
        else:
            values["layout"] = self.register_anchor_layout(caption is not None)

        self.register_json(spec_name, values)

    def register_anchor_layout(self, has_caption: bool) -> str:
        """Register the anchored layout for the caption branch."""
        layout_name = "anchored-image-with-caption" if has_caption else "anchored-image"
        return self.register_layout(layout_name, layout_name)

    def register_non_anchor_layout(self, has_caption: bool) -> str:
        """Register the full-width layout for the caption branch."""
        layout_values: dict[str, Any] = {}
        if self.settings.full_bleed_images:
            spec_name = "non-anchored-full-bleed-image"
        else:
            layout_values["layout_columns_minus_4"] = self.theme.layout_columns - 4
            spec_name = "non-anchored-image"

        layout_name = "full-width-image"
        if has_caption:
            layout_name += "-with-caption"
            spec_name += "-with-caption"

        return self.register_full_width_layout(layout_name, spec_name, layout_values)

    def find_caption_alignment(self) -> str:
        """Align captions away from the body when auto-anchored."""
        if self.anchor_position == AnchorPosition.AUTO and self.theme.body_orientation == "left":
            return "right"
        return "left"

    def caption_values(self, caption: str) -> dict[str, Any]:
        """Values for the captioned container spec."""
        return {
            "caption": caption,
            "caption_text": caption,
            "text_alignment": self.find_caption_alignment(),
            "caption_font": self.theme_value("caption_font"),
            "caption_size": self.theme_int("caption_size"),
            "caption_tracking": self.theme_tracking("caption_tracking"),
            "caption_line_height": self.theme_int("caption_line_height"),
            "caption_color": self.theme_value("caption_color"),
            "caption_color_dark": self.theme_value("caption_color_dark"),
            "caption_margin_bottom": self.theme_int("caption_margin_bottom"),
            "full_bleed_images": self.settings.full_bleed_images,
        }


__all__ = ["Image", "alignment_anchor", "find_caption"]
