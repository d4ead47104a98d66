#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/newsformat/specs/store.py
"""Storage of per-theme spec customizations.

Persistence belongs to the host application. The compiler only needs the
small SpecCustomizationStore protocol, keyed by component key (the kind,
namespaced for subcomponents), spec key and theme name. InMemorySpecStore is
the default implementation and can be seeded from theme files.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Iterable, Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class SpecCustomizationStore(Protocol):
    """Get, set and delete raw spec overrides."""

    def get(self, component: str, spec_key: str, theme: str) -> Optional[Any]:
        """Return the override, or None when the spec is not customized."""
        ...

    def set(self, component: str, spec_key: str, theme: str, value: Any) -> None:
        """Store an override."""
        ...

    def delete(self, component: str, spec_key: str, theme: str) -> bool:
        """Remove an override, returning True if one existed."""
        ...


class InMemorySpecStore:
    """Dictionary-backed SpecCustomizationStore.

    Examples
    --------
        >>> store = InMemorySpecStore()
        >>> store.set("image", "json_without_caption", "Default", {"role": "photo"})
        >>> store.get("image", "json_without_caption", "Default")
        {'role': 'photo'}

    """

    def __init__(self) -> None:
        """Initialize an empty store."""
        self._data: dict[tuple[str, str, str], Any] = {}

    def get(self, component: str, spec_key: str, theme: str) -> Optional[Any]:
        """Return a copy of the override, or None."""
        value = self._data.get((component, spec_key, theme))
        return copy.deepcopy(value)

    def set(self, component: str, spec_key: str, theme: str, value: Any) -> None:
        """Store a copy of the override."""
        self._data[(component, spec_key, theme)] = copy.deepcopy(value)
        logger.debug(f"Stored custom spec {component}/{spec_key} for theme '{theme}'")

    def delete(self, component: str, spec_key: str, theme: str) -> bool:
        """Remove an override."""
        return self._data.pop((component, spec_key, theme), None) is not None

    def customized(self, theme: str | None = None) -> list[tuple[str, str, str]]:
        """List ``(component, spec_key, theme)`` keys with overrides."""
        return [key for key in self._data if theme is None or key[2] == theme]

    def load_theme_templates(self, theme: str, json_templates: dict[str, dict[str, Any]]) -> None:
        """Seed overrides from a theme's ``json_templates`` section."""
        for component, specs in json_templates.items():
            for spec_key, value in specs.items():
                self.set(component, spec_key, theme, value)

    @classmethod
    def from_themes(cls, themes: Iterable[Any]) -> InMemorySpecStore:
        """Build a store seeded from every theme's ``json_templates``."""
        store = cls()
        for theme in themes:
            store.load_theme_templates(theme.name, dict(theme.json_templates))
        return store


__all__ = ["InMemorySpecStore", "SpecCustomizationStore"]
