#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/newsformat/components/media.py
"""Native video and audio players."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, ClassVar, Optional

from bs4.element import Tag

from newsformat.components.base import Component, MatchResult
from newsformat.components.image import find_caption
from newsformat.utils.html import first_element, format_src_url, get_filename

if TYPE_CHECKING:
    from newsformat.context import CompileContext

logger = logging.getLogger(__name__)


def media_source(element: Tag, tag_name: str) -> Optional[str]:
    """Return the source URL of the first ``tag_name`` element, or None.

    The element's own ``src`` wins over nested ``<source>`` elements.
    """
    player = element if element.name == tag_name else element.find(tag_name)
    if player is None:
        return None
    url = format_src_url(player.get("src", ""))
    if url:
        return url
    for source in player.find_all("source"):
        url = format_src_url(source.get("src", ""))
        if url:
            return url
    return None


class MediaComponent(Component):
    """Shared build for a player with an optional caption."""

    tag_name: ClassVar[str] = ""

    @classmethod
    def node_matches(cls, node: Tag, context: CompileContext) -> MatchResult:
        """Claim the player element, or a figure wrapping one."""
        if node.name == cls.tag_name:
            return node
        if node.name == "figure" and node.find(cls.tag_name) is not None:
            return node
        return None

    def register_specs(self) -> None:
        self.register_spec(
            "json",
            "JSON",
            {
                "role": self.tag_name,
                "URL": "#url#",
            },
        )

        self.register_spec(
            "json-with-caption",
            "JSON With Caption",
            {
                "role": "container",
                "components": [
                    {
                        "role": self.tag_name,
                        "URL": "#url#",
                    },
                    {
                        "role": "caption",
                        "text": "#caption#",
                        "format": "html",
                        "textStyle": self.text_style_spec("caption"),
                    },
                ],
            },
        )

        self.register_spec(
            f"{self.tag_name}-layout",
            "Layout",
            {
                "columnStart": "#body_offset#",
                "columnSpan": "#body_column_span#",
                "margin": {"bottom": 25, "top": 25},
            },
        )

    def build(self, html: str) -> None:
        element = first_element(html, self.settings.html_parser)
        url = media_source(element, self.tag_name) if element is not None else None
        if not url:
            logger.debug(f"{self.label} has no usable source; skipping")
            return

        values: dict[str, Any] = {"url": self.maybe_bundle_source(url, get_filename(url))}
        caption = find_caption(element)
        if caption is not None:
            values["caption"] = caption
            values.update(self.text_style_values("caption"))
            self.register_json("json-with-caption", values)
        else:
            self.register_json("json", values)

        self.register_layout(
            f"{self.tag_name}-layout",
            f"{self.tag_name}-layout",
            {
                "body_offset": self.theme.body_column_start(),
                "body_column_span": self.theme.body_column_span,
            },
            "layout",
        )

        self.add_player_properties(element)

    def player_json(self) -> Optional[dict[str, Any]]:
        """The player object: the JSON itself, or the first child of a caption container."""
        if self.json is None:
            return None
        if self.json.get("role") == "container":
            components = self.json.get("components") or []
            return components[0] if components else None
        return self.json

    def add_player_properties(self, element: Tag) -> None:
        """Hook for kind-specific player properties."""


class Video(MediaComponent):
    """A video; the poster frame becomes the still image."""

    name = "video"
    label = "Video"
    tag_name = "video"

    def add_player_properties(self, element: Tag) -> None:
        video = element if element.name == "video" else element.find("video")
        poster = format_src_url(video.get("poster", "")) if video is not None else ""
        player = self.player_json()
        if poster and player is not None:
            player["stillURL"] = self.maybe_bundle_source(poster, get_filename(poster))


class Audio(MediaComponent):
    """An audio clip."""

    name = "audio"
    label = "Audio"
    tag_name = "audio"


__all__ = ["Audio", "MediaComponent", "Video", "media_source"]
