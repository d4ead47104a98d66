#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/newsformat/components/meta.py
"""Components built from article metadata rather than markup.

The exporter creates these through the factory before walking the article
body; their matchers never claim a node.
"""

from __future__ import annotations

import html as _html
import logging
from typing import Any, Optional

from newsformat.components.base import Component
from newsformat.metadata import ArticleMetadata

logger = logging.getLogger(__name__)


class MetaComponent(Component):
    """A single text component styled from ``<name>_*`` theme values."""

    markup_based = False
    role = ""

    def register_specs(self) -> None:
        self.register_spec(
            "json",
            "JSON",
            {
                "role": self.role,
                "text": "#text#",
                "format": "#format#",
            },
        )

        self.register_spec(
            f"{self.name}-layout",
            "Layout",
            {
                "columnStart": "#body_offset#",
                "columnSpan": "#body_column_span#",
                "margin": {"bottom": "#margin_bottom#", "top": "#margin_top#"},
            },
        )

        self.register_spec(
            f"default-{self.name}",
            "Style",
            self.text_style_spec(self.name),
        )

    @property
    def metadata(self) -> ArticleMetadata:
        assert self.context is not None
        return self.context.metadata

    def text_from_metadata(self) -> Optional[str]:
        """Return the escaped text to display, or None to emit nothing."""
        raise NotImplementedError

    def margins(self) -> tuple[int, int]:
        """Top and bottom layout margin."""
        return 0, 10

    def build(self, html: str) -> None:
        """Emit the metadata text; ``html`` is unused."""
        text = self.text_from_metadata()
        if not text:
            logger.debug(f"No {self.name} in article metadata")
            return

        self.register_json("json", {"text": self.format_text(text), "format": self.text_format})

        top, bottom = self.margins()
        values: dict[str, Any] = {
            "body_offset": self.theme.body_column_start(),
            "body_column_span": self.theme.body_column_span,
            "margin_top": top,
            "margin_bottom": bottom,
        }
        self.register_layout(f"{self.name}-layout", f"{self.name}-layout", values, "layout")
        self.register_style(f"default-{self.name}", f"default-{self.name}", self.text_style_values(self.name), "textStyle")


class Title(MetaComponent):
    """The article title."""

    name = "title"
    label = "Title"
    role = "title"

    def text_from_metadata(self) -> Optional[str]:
        title = (self.metadata.title or "").strip()
        return _html.escape(title) if title else None

    def margins(self) -> tuple[int, int]:
        return 30, 0


class Byline(MetaComponent):
    """Author and date, composed with the theme's ``byline_format``.

    A pre-composed byline in the metadata takes precedence. Without an
    author or a date, the separators surrounding the missing part are
    dropped.
    """

    name = "byline"
    label = "Byline"
    role = "byline"

    def text_from_metadata(self) -> Optional[str]:
        if self.metadata.byline:
            return _html.escape(self.metadata.byline.strip()) or None
        return compose_byline(
            self.metadata,
            self.theme_value("byline_format", "by {author} | {date}"),
            self.theme_value("byline_date_format", "%b %d, %Y"),
        )

    def margins(self) -> tuple[int, int]:
        return 10, 10


class Intro(MetaComponent):
    """The article excerpt."""

    name = "intro"
    label = "Intro"
    role = "intro"

    def text_from_metadata(self) -> Optional[str]:
        intro = (self.metadata.intro or "").strip()
        return _html.escape(intro) if intro else None

    def margins(self) -> tuple[int, int]:
        return 15, 15


def compose_byline(metadata: ArticleMetadata, byline_format: str, date_format: str) -> Optional[str]:
    """Fill ``byline_format`` from the metadata author and date.

    Parameters
    ----------
    metadata : ArticleMetadata
        Source of ``author`` and ``date``
    byline_format : str
        Format string with ``{author}`` and ``{date}`` fields
    date_format : str
        strftime format for the date

    Returns
    -------
    str or None
        Escaped byline, or None when there is neither author nor date

    Examples
    --------
        >>> from datetime import datetime
        >>> meta = ArticleMetadata(author="Ann", date=datetime(2024, 3, 1))
        >>> compose_byline(meta, "by {author} | {date}", "%b %d, %Y")
        'by Ann | Mar 01, 2024'

    """
    author = (metadata.author or "").strip()
    date = metadata.date.strftime(date_format) if metadata.date is not None else ""
    if not author and not date:
        return None
    if not author:
        return _html.escape(date)

    text = byline_format.format(author=author, date=date)
    if not date:
        text = text.rstrip().rstrip("|-,·").rstrip()
    return _html.escape(text)


__all__ = ["Byline", "Intro", "MetaComponent", "Title", "compose_byline"]
