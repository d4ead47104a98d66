#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Per-article metadata supplied by the host application."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Optional


@dataclass
class ArticleMetadata:
    """Metadata for the article being compiled.

    Parameters
    ----------
    content_id : int or str, default 0
        Opaque article identifier threaded through spec substitution,
        customization scoping and error logging
    title : str or None
        Article title, rendered as the title component
    author : str or None
        Author name used to compose the byline
    date : datetime or None
        Publication date used to compose the byline
    byline : str or None
        Pre-composed byline; takes precedence over author/date
    intro : str or None
        Excerpt rendered as the intro component
    permalink : str or None
        Public URL of the article; recipe schema discovery fetches it
    use_image_component : bool, default False
        Emit images with the ``image`` role instead of ``photo``
    custom : dict
        Additional host-specific values

    """

    content_id: int | str = 0
    title: Optional[str] = None
    author: Optional[str] = None
    date: Optional[datetime] = None
    byline: Optional[str] = None
    intro: Optional[str] = None
    permalink: Optional[str] = None
    use_image_component: bool = False
    custom: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ArticleMetadata:
        """Build metadata from a mapping, parsing ISO dates."""
        values = dict(data)
        raw_date = values.get("date")
        if isinstance(raw_date, str) and raw_date:
            values["date"] = datetime.fromisoformat(raw_date)
        known = {k: v for k, v in values.items() if k in cls.__dataclass_fields__}
        extra = {k: v for k, v in values.items() if k not in cls.__dataclass_fields__}
        known["custom"] = {**known.get("custom", {}), **extra}
        return cls(**known)


__all__ = ["ArticleMetadata"]
