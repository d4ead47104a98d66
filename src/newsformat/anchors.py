#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/newsformat/anchors.py
"""Pairing floated components with the body text they sit beside.

After every component of an article is built, each one that wants to float
(anchor position other than NONE) is attached to a neighbouring component
that accepts anchors. The previous component is preferred; otherwise the
following components are searched in order. A target accepts at most one
anchored component.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from newsformat.components.base import AnchorPosition, Component

logger = logging.getLogger(__name__)


def find_anchor_target(components: Sequence[Component], index: int) -> Optional[Component]:
    """Return the component that ``components[index]`` should anchor to, or None."""
    candidates: list[Component] = []
    if index > 0:
        candidates.append(components[index - 1])
    candidates.extend(components[index + 1 :])
    for candidate in candidates:
        if candidate.json is not None and candidate.can_be_anchor_target():
            return candidate
    return None


def opposite_position(component: Component) -> AnchorPosition:
    """Position of the target relative to a component anchored beside it."""
    side = component.resolved_anchor_side(component.theme)
    return AnchorPosition.LEFT if side == "right" else AnchorPosition.RIGHT


def anchor_together(component: Component, target: Component) -> None:
    """Attach ``component`` to ``target`` and apply both anchor layouts."""
    component.set_json(
        "anchor",
        {
            "targetComponentIdentifier": target.uid(),
            "targetAnchorPosition": "top",
            "rangeStart": 0,
            "rangeLength": 1,
        },
    )
    target.set_anchor_position(opposite_position(component))

    target.anchor()
    component.anchor()


def resolve_anchors(components: Sequence[Component]) -> int:
    """Anchor every floating component to a neighbour.

    Parameters
    ----------
    components : sequence of Component
        Top-level components in document order

    Returns
    -------
    int
        Number of components anchored

    """
    anchored = 0
    for index, component in enumerate(components):
        if component.anchor_position == AnchorPosition.NONE or component.is_anchor_target():
            continue
        # Nothing to anchor when the build produced no JSON
        if component.json is None:
            continue

        target = find_anchor_target(components, index)
        if target is None:
            logger.debug(f"No anchor target for {component.name} component at position {index}")
            continue

        anchor_together(component, target)
        anchored += 1

    if anchored:
        logger.debug(f"Anchored {anchored} component(s)")
    return anchored


__all__ = ["anchor_together", "find_anchor_target", "opposite_position", "resolve_anchors"]
