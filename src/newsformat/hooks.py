#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/newsformat/hooks.py
"""Extension points for the component compiler.

Hosts customize output without subclassing by registering hooks on a
HookManager that is handed to the compile context. Each hook receives the
current value and a HookContext and returns the (possibly replaced) value.

Hook targets
------------
- ``"initialize_components"``: the ordered list of matcher entries
- ``"<kind>_spec"``: JSON produced by substituting any spec owned by ``kind``
- ``"<kind>_json"``: final JSON of a component of ``kind``
- ``"<kind>_html_enabled"``: whether ``kind`` emits HTML text
- ``"image_src"``: the source URL extracted for an image
- ``"recipe_schema_permalink"``: URL fetched to discover recipe schema

Examples
--------
Force every divider to be red:

    >>> manager = HookManager()
    >>> def red_divider(json, context):
    ...     json["stroke"]["color"] = "#ff0000"
    ...     return json
    >>> manager.register_hook(json_hook("divider"), red_divider)

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

# Pipeline-level targets; per-kind targets are built with spec_hook/json_hook
INITIALIZE_COMPONENTS = "initialize_components"
IMAGE_SRC = "image_src"
RECIPE_SCHEMA_PERMALINK = "recipe_schema_permalink"

# Hooks: (value, HookContext) -> value
HookCallable = Callable[[Any, "HookContext"], Any]


def spec_hook(kind: str) -> str:
    """Target run on every spec substitution result of ``kind``."""
    return f"{kind}_spec"


def json_hook(kind: str) -> str:
    """Target run on the final output JSON of ``kind``."""
    return f"{kind}_json"


def html_enabled_hook(kind: str) -> str:
    """Target deciding whether ``kind`` emits HTML text."""
    return f"{kind}_html_enabled"


@dataclass
class HookContext:
    """Context passed to hook functions.

    Parameters
    ----------
    content_id : int or str, default 0
        Identifier of the article being compiled
    component : str or None
        Kind of the component that triggered the hook
    spec_name : str or None
        Spec being substituted, for spec hooks
    theme : str or None
        Name of the active theme
    shared : dict
        Mutable dictionary for passing data between hooks

    """

    content_id: int | str = 0
    component: Optional[str] = None
    spec_name: Optional[str] = None
    theme: Optional[str] = None
    shared: dict[str, Any] = field(default_factory=dict)

    def get_shared(self, key: str, default: Any = None) -> Any:
        """Get a value from shared state."""
        return self.shared.get(key, default)

    def set_shared(self, key: str, value: Any) -> None:
        """Set a value in shared state."""
        self.shared[key] = value


class HookManager:
    """Registry and executor for hooks.

    Parameters
    ----------
    strict : bool, default False
        If True, hook exceptions are re-raised. If False, they are logged and
        the value produced by the previous hook is kept.

    Notes
    -----
    HookManager instances are not thread-safe. Each compile should use its
    own manager or share one that is no longer being registered into.

    """

    def __init__(self, strict: bool = False) -> None:
        """Initialize the hook manager."""
        self._hooks: dict[str, list[tuple[int, HookCallable]]] = {}
        self.strict = strict

    def register_hook(self, target: str, hook: HookCallable, priority: int = 100) -> None:
        """Register a hook for a target.

        Hooks for the same target run in priority order (lower first), then
        in registration order.
        """
        self._hooks.setdefault(target, []).append((priority, hook))
        logger.debug(f"Registered hook for '{target}' with priority {priority}")

    def unregister_hook(self, target: str, hook: HookCallable) -> bool:
        """Unregister a hook, returning True if it was registered."""
        if target not in self._hooks:
            return False

        initial_len = len(self._hooks[target])
        self._hooks[target] = [(p, h) for p, h in self._hooks[target] if h != hook]
        return len(self._hooks[target]) < initial_len

    def execute_hooks(self, target: str, obj: Any, context: HookContext) -> Any:
        """Run every hook for ``target`` over ``obj``.

        Each hook receives the result of the previous one. A hook returning
        None ends the chain and None is returned.

        Raises
        ------
        Exception
            Any exception from a hook when strict mode is enabled

        """
        if not self.has_hooks(target):
            return obj

        result = obj
        for priority, hook in sorted(self._hooks[target], key=lambda x: x[0]):
            try:
                result = hook(result, context)
            except Exception as e:
                logger.error(f"Hook failed at '{target}' with priority {priority}: {e}", exc_info=True)
                if self.strict:
                    raise
                continue

            if result is None:
                logger.debug(f"Hook removed value at '{target}'")
                return None

        return result

    def has_hooks(self, target: str) -> bool:
        """Check if any hooks are registered for a target."""
        return bool(self._hooks.get(target))

    def clear(self) -> None:
        """Remove all registered hooks."""
        self._hooks.clear()


__all__ = [
    "HookCallable",
    "HookContext",
    "HookManager",
    "INITIALIZE_COMPONENTS",
    "IMAGE_SRC",
    "RECIPE_SCHEMA_PERMALINK",
    "html_enabled_hook",
    "json_hook",
    "spec_hook",
]
