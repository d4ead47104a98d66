#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/newsformat/components/embed.py
"""Embedded web video and generic link-out embeds."""

from __future__ import annotations

import html as _html
import logging
import re
from typing import TYPE_CHECKING, Any, Optional
from urllib.parse import urlparse

from bs4.element import Tag

from newsformat.components.base import Component, MatchResult
from newsformat.components.image import find_caption
from newsformat.utils.html import first_element, format_src_url, get_iframe_from_node, node_has_class

if TYPE_CHECKING:
    from newsformat.context import CompileContext

logger = logging.getLogger(__name__)

# Players accepted by the embedwebvideo role, keyed by provider
WEB_VIDEO_PATTERNS: dict[str, re.Pattern[str]] = {
    "youtube": re.compile(r"^https?://(?:www\.)?(?:youtube(?:-nocookie)?\.com/embed/|youtu\.be/)([\w-]+)", re.I),
    "youtube_watch": re.compile(r"^https?://(?:www\.|m\.)?youtube\.com/watch\?(?:.*&)?v=([\w-]+)", re.I),
    "vimeo": re.compile(r"^https?://(?:player\.)?vimeo\.com/(?:video/)?(\d+)", re.I),
    "dailymotion": re.compile(r"^https?://(?:www\.)?dailymotion\.com/(?:embed/)?video/(\w+)", re.I),
}

DEFAULT_ASPECT_RATIO = 1.777


def web_video_url(url: str) -> Optional[str]:
    """Return the canonical player URL for a supported video, or None.

    Examples
    --------
        >>> web_video_url("https://youtu.be/abc123")
        'https://www.youtube.com/embed/abc123'
        >>> web_video_url("https://example.com/video.mp4") is None
        True

    """
    url = format_src_url(url)
    if not url:
        return None
    for provider, pattern in WEB_VIDEO_PATTERNS.items():
        match = pattern.match(url)
        if match is None:
            continue
        video_id = match.group(1)
        if provider.startswith("youtube"):
            return f"https://www.youtube.com/embed/{video_id}"
        if provider == "vimeo":
            return f"https://player.vimeo.com/video/{video_id}"
        return f"https://www.dailymotion.com/embed/video/{video_id}"
    return None


def aspect_ratio(iframe: Tag) -> float:
    """Width over height from the iframe attributes, rounded to 3 places."""
    try:
        width = float(iframe.get("width", 0))
        height = float(iframe.get("height", 0))
    except (TypeError, ValueError):
        return DEFAULT_ASPECT_RATIO
    if width <= 0 or height <= 0:
        return DEFAULT_ASPECT_RATIO
    return round(width / height, 3)


class EmbedWebVideo(Component):
    """A YouTube, Vimeo or Dailymotion player."""

    name = "embed_web_video"
    label = "Embed Web Video"

    @classmethod
    def node_matches(cls, node: Tag, context: CompileContext) -> MatchResult:
        """Claim iframes, or embed blocks holding one, with a supported player."""
        iframe = get_iframe_from_node(node)
        if iframe is None or web_video_url(iframe.get("src", "")) is None:
            return None
        if node.name in ("iframe", "figure") or node_has_class(node, "wp-block-embed"):
            return node
        return None

    def register_specs(self) -> None:
        self.register_spec(
            "json",
            "JSON",
            {
                "role": "embedwebvideo",
                "URL": "#url#",
                "aspectRatio": "#aspect_ratio#",
                "layout": "#layout#",
            },
        )

        self.register_spec(
            "json-with-caption",
            "JSON With Caption",
            {
                "role": "container",
                "components": [
                    {
                        "role": "embedwebvideo",
                        "URL": "#url#",
                        "aspectRatio": "#aspect_ratio#",
                    },
                    {
                        "role": "caption",
                        "text": "#caption#",
                        "format": "html",
                        "textStyle": self.text_style_spec("caption"),
                    },
                ],
                "layout": "#layout#",
            },
        )

        self.register_spec(
            "embed-web-video-layout",
            "Layout",
            {
                "columnStart": "#body_offset#",
                "columnSpan": "#body_column_span#",
                "margin": {"bottom": 25, "top": 25},
            },
        )

    def build(self, html: str) -> None:
        element = first_element(html, self.settings.html_parser)
        iframe = get_iframe_from_node(element)
        if iframe is None:
            return
        url = web_video_url(iframe.get("src", ""))
        if url is None:
            logger.debug(f"Unsupported video player: {iframe.get('src')}")
            return

        layout = self.register_layout(
            "embed-web-video-layout",
            "embed-web-video-layout",
            {
                "body_offset": self.theme.body_column_start(),
                "body_column_span": self.theme.body_column_span,
            },
        )

        values: dict[str, Any] = {"url": url, "aspect_ratio": aspect_ratio(iframe), "layout": layout}
        caption = find_caption(element) if element is not iframe else None
        if caption is not None:
            values["caption"] = caption
            values.update(self.text_style_values("caption"))
            self.register_json("json-with-caption", values)
        else:
            self.register_json("json", values)


class EmbedGeneric(Component):
    """Embeds with no native role, rendered as a link to the original."""

    name = "embed_generic"
    label = "Embed"
    html_capable = True

    @classmethod
    def node_matches(cls, node: Tag, context: CompileContext) -> MatchResult:
        """Claim embed blocks not taken by a more specific kind."""
        if node_has_class(node, "wp-block-embed") or node.name == "embed":
            return node
        return None

    def register_specs(self) -> None:
        link_text = {
            "role": "body",
            "text": "#text#",
            "format": "#format#",
            "layout": "#embed_layout#",
            "textStyle": "#embed_text_style#",
        }
        self.register_spec("json", "JSON", link_text)

        self.register_spec(
            "json-with-caption",
            "JSON With Caption",
            {
                "role": "container",
                "components": [
                    link_text,
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
            "embed-layout",
            "Layout",
            {
                "columnStart": "#body_offset#",
                "columnSpan": "#body_column_span#",
                "margin": {"bottom": 15, "top": 15},
            },
        )

        self.register_spec("default-embed", "Text Style", self.text_style_spec("body"))

    def build(self, html: str) -> None:
        element = first_element(html, self.settings.html_parser)
        if element is None:
            return

        url = self.embed_url(element)
        if not url:
            logger.debug("Embed has no usable URL; skipping")
            return

        layout = self.register_layout(
            "embed-layout",
            "embed-layout",
            {
                "body_offset": self.theme.body_column_start(),
                "body_column_span": self.theme.body_column_span,
            },
        )
        text_style = self.register_style("default-embed", "default-embed", self.text_style_values("body"))

        provider = self.provider_name(element, url)
        markup = f'<a href="{_html.escape(url)}">{_html.escape(f"View on {provider}.")}</a>'
        values: dict[str, Any] = {
            "text": self.format_text(markup),
            "format": self.text_format,
            "embed_layout": layout,
            "embed_text_style": text_style,
        }

        caption = find_caption(element)
        if caption is not None:
            values["caption"] = caption
            values.update(self.text_style_values("caption"))
            self.register_json("json-with-caption", values)
        else:
            self.register_json("json", values)

    @staticmethod
    def embed_url(element: Tag) -> str:
        """URL of the embedded resource: wrapper text, then src, then the first link."""
        wrapper = element.find(class_="wp-block-embed__wrapper")
        if wrapper is not None:
            url = format_src_url(wrapper.get_text(strip=True))
            if url:
                return url
        for candidate in (element, *element.find_all(["iframe", "embed"])):
            url = format_src_url(candidate.get("src", ""))
            if url:
                return url
        link = element.find("a", href=True)
        return format_src_url(link["href"]) if link is not None else ""

    @staticmethod
    def provider_name(element: Tag, url: str) -> str:
        """Provider from the ``is-provider-*`` class, else the URL's host."""
        for classname in element.get("class") or []:
            if classname.startswith("is-provider-"):
                return classname[len("is-provider-") :].replace("-", " ").title()
        host = urlparse(url).netloc
        return host[4:] if host.startswith("www.") else host


__all__ = ["EmbedGeneric", "EmbedWebVideo", "aspect_ratio", "web_video_url"]
