#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/newsformat/registries.py
"""Deduplicated registries of layouts, text styles and component styles.

Components register a style object under a key and write only the key into
their JSON. The document carries each object once, in the matching top-level
section (``componentLayouts``, ``componentTextStyles``, ``componentStyles``).
Registering an existing key overwrites it.
"""

from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING, Any, Iterator

from newsformat.constants import ANCHOR_LAYOUT_PREFIX

if TYPE_CHECKING:
    from newsformat.components.base import Component
    from newsformat.theme import Theme

logger = logging.getLogger(__name__)


class StyleRegistry:
    """Ordered mapping from key to a finalized JSON object."""

    section = "styles"

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._objects: dict[str, Any] = {}

    def __contains__(self, key: object) -> bool:
        return key in self._objects

    def __len__(self) -> int:
        return len(self._objects)

    def __iter__(self) -> Iterator[str]:
        return iter(self._objects)

    def register(self, key: str, value: Any) -> str:
        """Store ``value`` under ``key`` and return the key."""
        if key in self._objects and self._objects[key] != value:
            logger.debug(f"Overwriting {self.section} entry '{key}'")
        self._objects[key] = copy.deepcopy(value)
        return key

    def get(self, key: str) -> Any:
        """Return a copy of the object stored under ``key``, or None."""
        return copy.deepcopy(self._objects.get(key))

    def to_dict(self) -> dict[str, Any]:
        """Return every registered object keyed by its key."""
        return copy.deepcopy(self._objects)


class ComponentLayouts(StyleRegistry):
    """Registry of component layouts, also responsible for anchor layouts."""

    section = "componentLayouts"

    def set_anchor_layout_for(self, component: Component, theme: Theme) -> None:
        """Give an anchored component the narrow layout for its side.

        The layout is shared by every component anchored to the same side.
        It spans the columns beside the body text plus the theme's alignment
        offset, clamped to the layout width.
        """
        side = component.resolved_anchor_side(theme)
        if side is None:
            return

        layout_name = f"{ANCHOR_LAYOUT_PREFIX}{side}"
        if layout_name not in self:
            columns = theme.layout_columns
            span = theme.body_column_span
            offset = theme.alignment_offset

            if theme.body_orientation == "center":
                col_span = (columns - span) // 2 + offset
            else:
                col_span = columns - span + offset
            col_span = max(1, min(columns, col_span))

            if side == "left":
                col_start = 0
            elif theme.body_orientation == "left":
                col_start = max(0, span - offset)
            else:
                col_start = columns - col_span

            self.register(layout_name, {"columnStart": col_start, "columnSpan": col_span})

        component.set_json("layout", layout_name)


class ComponentTextStyles(StyleRegistry):
    """Registry of named text styles."""

    section = "componentTextStyles"


class ComponentStyles(StyleRegistry):
    """Registry of component styles (backgrounds, borders)."""

    section = "componentStyles"


__all__ = ["ComponentLayouts", "ComponentStyles", "ComponentTextStyles", "StyleRegistry"]
