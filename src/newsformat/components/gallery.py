#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/newsformat/components/gallery.py
"""Image galleries, rendered as a gallery or a mosaic."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from bs4.element import Tag

from newsformat.components.base import Component, MatchResult
from newsformat.utils.html import first_element, format_src_url, get_filename, inner_html, node_has_class

if TYPE_CHECKING:
    from newsformat.context import CompileContext

logger = logging.getLogger(__name__)

GALLERY_CLASSES = ("wp-block-gallery", "gallery")


class Gallery(Component):
    """A set of images; the theme's ``gallery_type`` picks the role."""

    name = "gallery"
    label = "Gallery"

    @classmethod
    def node_matches(cls, node: Tag, context: CompileContext) -> MatchResult:
        """Claim block and classic gallery containers."""
        if any(node_has_class(node, classname) for classname in GALLERY_CLASSES):
            return node
        return None

    def register_specs(self) -> None:
        """Register gallery JSON and layout specs."""
        self.register_spec(
            "json",
            "JSON",
            {
                "role": "#gallery_type#",
                "items": "#items#",
                "layout": "#layout#",
            },
        )

        self.register_spec(
            "gallery-layout",
            "Layout",
            {
                "margin": {
                    "bottom": 25,
                    "top": 25,
                },
            },
        )

    def build(self, html: str) -> None:
        """Collect every image with its caption."""
        element = first_element(html, self.settings.html_parser)
        if element is None:
            return

        items: list[dict[str, Any]] = []
        for image in element.find_all("img"):
            url = format_src_url(image.get("src", ""))
            if not url:
                continue
            item: dict[str, Any] = {"URL": self.maybe_bundle_source(url, get_filename(url))}

            figure = image.find_parent("figure")
            caption = figure.find("figcaption") if figure is not None else None
            if caption is not None and inner_html(caption).strip():
                item["caption"] = {"format": "html", "text": inner_html(caption).strip()}
            elif image.get("alt"):
                item["accessibilityCaption"] = image["alt"]
            items.append(item)

        if not items:
            logger.debug("Gallery contains no usable images; skipping")
            return

        gallery_type = self.theme_value("gallery_type", "gallery")
        if gallery_type not in ("gallery", "mosaic"):
            logger.warning(f"Unknown gallery_type '{gallery_type}'; using 'gallery'")
            gallery_type = "gallery"

        layout = self.register_full_width_layout("gallery-layout", "gallery-layout", {})
        self.register_json("json", {"gallery_type": gallery_type, "items": items, "layout": layout})


__all__ = ["GALLERY_CLASSES", "Gallery"]
