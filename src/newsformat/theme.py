#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Themes and the theme registry.

A Theme is a named, immutable bundle of style parameters (fonts, sizes,
colors) and layout geometry. Exactly one theme is active during a compile.
Values a theme does not define fall back to ``DEFAULT_THEME_VALUES``; values a
theme defines as empty are treated as absent, which is how optional branches
such as dark-mode colors are switched off.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from newsformat.constants import DEFAULT_THEME_NAME, DEFAULT_THEME_VALUES
from newsformat.exceptions import InvalidSettingsError, ThemeError
from newsformat.settings import load_config_file

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Theme:
    """Named style and layout parameters applied uniformly across a compile.

    Parameters
    ----------
    name : str
        Theme name, also used to scope spec customizations
    values : Mapping[str, Any]
        Style values overriding ``DEFAULT_THEME_VALUES``
    json_templates : Mapping[str, Mapping[str, Any]]
        Spec customizations carried by the theme, keyed by component key and
        then by spec key

    Examples
    --------
        >>> theme = Theme("Dark", {"body_color_dark": "#ffffff"})
        >>> theme.has_value("body_color_dark")
        True
        >>> theme.layout_columns
        7

    """

    name: str = DEFAULT_THEME_NAME
    values: Mapping[str, Any] = field(default_factory=dict)
    json_templates: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Freeze the value mappings."""
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))
        object.__setattr__(self, "json_templates", MappingProxyType(dict(self.json_templates)))

    def get_value(self, key: str, default: Any = None) -> Any:
        """Return a theme value, falling back to the library default."""
        if key in self.values:
            return self.values[key]
        return DEFAULT_THEME_VALUES.get(key, default)

    def has_value(self, key: str) -> bool:
        """Return True when the theme resolves ``key`` to a non-empty value."""
        value = self.get_value(key)
        return value is not None and value != ""

    def get_int(self, key: str, default: int = 0) -> int:
        """Return a theme value coerced to int, or ``default`` when not numeric."""
        try:
            return int(self.get_value(key, default))
        except (TypeError, ValueError):
            logger.warning(f"Theme '{self.name}' value '{key}' is not numeric; using {default}")
            return default

    def get_tracking(self, key: str) -> float:
        """Return a tracking value; themes store tracking as a percentage."""
        return self.get_int(key) / 100

    @property
    def layout_columns(self) -> int:
        """Total number of layout columns."""
        return self.get_int("layout_columns", 7)

    @property
    def body_column_span(self) -> int:
        """Number of columns spanned by body text."""
        return self.get_int("body_column_span", 7)

    @property
    def body_orientation(self) -> str:
        """Body placement: left, center or right."""
        return str(self.get_value("body_orientation", "left"))

    @property
    def alignment_offset(self) -> int:
        """Columns body text gives up to anchored components."""
        return self.get_int("alignment_offset", 2)

    def body_column_start(self) -> int:
        """First column of the body text for the theme's orientation."""
        if self.body_orientation == "center":
            return (self.layout_columns - self.body_column_span) // 2
        if self.body_orientation == "right":
            return self.layout_columns - self.body_column_span
        return 0

    def full_width_columns(self) -> tuple[int, int]:
        """Return ``(columnStart, columnSpan)`` for a full-width layout.

        Full width spans every column, except for centered bodies where it
        spans the same columns as the body.
        """
        if self.body_orientation == "center":
            return (self.layout_columns - self.body_column_span) // 2, self.body_column_span
        return 0, self.layout_columns

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], name: str | None = None) -> Theme:
        """Build a theme from a mapping as stored in a theme file.

        The mapping may hold values at the top level or under ``values``;
        ``name`` and ``json_templates`` keys are read when present.
        """
        raw = dict(data)
        theme_name = name or str(raw.pop("name", DEFAULT_THEME_NAME))
        templates = raw.pop("json_templates", {}) or {}
        values = raw.pop("values", None)
        if values is None:
            values = raw
        if not isinstance(values, Mapping) or not isinstance(templates, Mapping):
            raise ThemeError(f"Theme '{theme_name}' must map names to values", theme_name=theme_name)
        return cls(name=theme_name, values=values, json_templates=templates)


class ThemeRegistry:
    """Lookup of every known theme plus the active one (the Theme Provider).

    Parameters
    ----------
    themes : iterable of Theme, optional
        Themes to register up front. The first one becomes active unless
        ``active`` names another.
    active : str, optional
        Name of the active theme

    """

    def __init__(self, themes: list[Theme] | None = None, active: str | None = None) -> None:
        """Initialize the registry."""
        self._themes: dict[str, Theme] = {}
        self._active: str | None = None
        for theme in themes or []:
            self.register(theme)
        if active is not None:
            self.set_active(active)

    def register(self, theme: Theme) -> None:
        """Register (or replace) a theme by name."""
        self._themes[theme.name] = theme
        if self._active is None:
            self._active = theme.name
        logger.debug(f"Registered theme '{theme.name}'")

    def get(self, name: str) -> Theme:
        """Return the theme registered under ``name``.

        Raises
        ------
        ThemeError
            If no theme has that name

        """
        try:
            return self._themes[name]
        except KeyError:
            raise ThemeError(f"Unknown theme '{name}'", theme_name=name) from None

    def has_theme(self, name: str) -> bool:
        """Return True when a theme with this name is registered."""
        return name in self._themes

    def list_themes(self) -> list[str]:
        """Return registered theme names in registration order."""
        return list(self._themes)

    def set_active(self, name: str) -> None:
        """Make the named theme active."""
        self.get(name)
        self._active = name

    @property
    def active(self) -> Theme:
        """The active theme; a default theme when none is registered."""
        if self._active is None:
            return Theme()
        return self._themes[self._active]

    def load_file(self, path: Path | str, activate: bool = False) -> Theme:
        """Load a theme from a JSON, TOML or YAML file and register it.

        Parameters
        ----------
        path : Path or str
            Theme file path. The theme name defaults to the file stem.
        activate : bool, default False
            Make the loaded theme active

        Returns
        -------
        Theme
            The loaded theme

        """
        try:
            data = load_config_file(path)
        except InvalidSettingsError as e:
            raise ThemeError(f"Could not load theme file {path}: {e.message}", original_error=e) from e

        theme = Theme.from_mapping(data, name=data.get("name") or Path(path).stem)
        self.register(theme)
        if activate:
            self.set_active(theme.name)
        return theme


__all__ = ["Theme", "ThemeRegistry"]
