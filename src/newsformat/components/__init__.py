#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Component kinds.

Each module defines one family of components; the factory's matcher table
decides which kind claims which markup.
"""

from newsformat.components.aside import Aside
from newsformat.components.base import AnchorPosition, Component, MatchedFragment, MatchResult
from newsformat.components.body import Body
from newsformat.components.divider import Divider
from newsformat.components.embed import EmbedGeneric, EmbedWebVideo
from newsformat.components.gallery import Gallery
from newsformat.components.heading import Heading
from newsformat.components.image import Image
from newsformat.components.link_button import LinkButton
from newsformat.components.media import Audio, Video
from newsformat.components.meta import Byline, Intro, Title
from newsformat.components.quote import Quote
from newsformat.components.recipe import Recipe
from newsformat.components.social import FacebookPost, Instagram, TikTok, Tweet
from newsformat.components.table import Table

__all__ = [
    "AnchorPosition",
    "Aside",
    "Audio",
    "Body",
    "Byline",
    "Component",
    "Divider",
    "EmbedGeneric",
    "EmbedWebVideo",
    "FacebookPost",
    "Gallery",
    "Heading",
    "Image",
    "Instagram",
    "Intro",
    "LinkButton",
    "MatchResult",
    "MatchedFragment",
    "Quote",
    "Recipe",
    "Table",
    "TikTok",
    "Title",
    "Tweet",
    "Video",
]
