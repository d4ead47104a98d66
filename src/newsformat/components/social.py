#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/newsformat/components/social.py
"""Social media embeds: tweets, Facebook posts, Instagram and TikTok."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, ClassVar, Optional

from bs4.element import Tag

from newsformat.components.base import Component, MatchResult
from newsformat.utils.html import first_element, format_src_url, node_has_class

if TYPE_CHECKING:
    from newsformat.context import CompileContext

logger = logging.getLogger(__name__)


class SocialEmbed(Component):
    """Base for embeds that map a post URL onto a native role.

    Subclasses name the role, the classes that mark their embed markup and
    the pattern a post URL must match. The URL is looked up in the
    ``data-href``/``cite``/``data-instgrm-permalink`` attributes, the embed
    wrapper text, and finally the links inside the element.
    """

    role: ClassVar[str] = ""
    classes: ClassVar[tuple[str, ...]] = ()
    url_pattern: ClassVar[re.Pattern[str]]

    @classmethod
    def node_matches(cls, node: Tag, context: CompileContext) -> MatchResult:
        if any(node_has_class(node, classname) for classname in cls.classes):
            return node
        return None

    @classmethod
    def find_url(cls, element: Tag) -> Optional[str]:
        """Return the first post URL inside ``element`` matching ``url_pattern``."""
        candidates: list[str] = []
        for attribute in ("data-href", "cite", "data-instgrm-permalink"):
            candidates.extend(str(tag[attribute]) for tag in element.find_all(attrs={attribute: True}))
            if element.get(attribute):
                candidates.insert(0, str(element[attribute]))
        wrapper = element.find(class_="wp-block-embed__wrapper")
        if wrapper is not None:
            candidates.append(wrapper.get_text(strip=True))
        # Post links come last in embed markup; earlier ones are mentions
        candidates.extend(str(link["href"]) for link in reversed(element.find_all("a", href=True)))

        for candidate in candidates:
            url = format_src_url(candidate)
            if url and cls.url_pattern.match(url):
                return url
        return None

    def register_specs(self) -> None:
        self.register_spec(
            "json",
            "JSON",
            {
                "role": self.role,
                "URL": "#url#",
                "layout": "#layout#",
            },
        )

        self.register_spec(
            "social-embed-layout",
            "Layout",
            {
                "columnStart": "#body_offset#",
                "columnSpan": "#body_column_span#",
                "margin": {"bottom": 25, "top": 25},
            },
        )

    def build(self, html: str) -> None:
        element = first_element(html, self.settings.html_parser)
        url = self.find_url(element) if element is not None else None
        if not url:
            logger.debug(f"No {self.label} URL found in embed; skipping")
            return

        layout = self.register_layout(
            "social-embed-layout",
            "social-embed-layout",
            {
                "body_offset": self.theme.body_column_start(),
                "body_column_span": self.theme.body_column_span,
            },
        )
        self.register_json("json", {"url": url, "layout": layout})


class Tweet(SocialEmbed):
    """An embedded tweet."""

    name = "tweet"
    label = "Tweet"
    role = "tweet"
    classes = ("twitter-tweet", "wp-block-embed-twitter", "is-provider-twitter")
    url_pattern = re.compile(r"^https?://(?:www\.|mobile\.)?(?:twitter|x)\.com/\w+/status(?:es)?/\d+", re.I)


class FacebookPost(SocialEmbed):
    """An embedded Facebook post."""

    name = "facebook"
    label = "Facebook Post"
    role = "facebook_post"
    classes = ("fb-post", "wp-block-embed-facebook", "is-provider-facebook")
    url_pattern = re.compile(r"^https?://(?:www\.)?facebook\.com/[^\s]+/(?:posts|videos|photos)/", re.I)


class Instagram(SocialEmbed):
    """An embedded Instagram post."""

    name = "instagram"
    label = "Instagram"
    role = "instagram"
    classes = ("instagram-media", "wp-block-embed-instagram", "is-provider-instagram")
    url_pattern = re.compile(r"^https?://(?:www\.)?(?:instagram\.com|instagr\.am)/(?:p|reel|tv)/[\w-]+", re.I)


class TikTok(SocialEmbed):
    """An embedded TikTok video."""

    name = "tiktok"
    label = "TikTok"
    role = "tiktok"
    classes = ("tiktok-embed", "wp-block-embed-tiktok", "is-provider-tiktok")
    url_pattern = re.compile(r"^https?://(?:www\.)?tiktok\.com/@[\w.-]+/video/\d+", re.I)


__all__ = ["FacebookPost", "Instagram", "SocialEmbed", "TikTok", "Tweet"]
