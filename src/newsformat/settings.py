#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Export settings supplied by the host application.

Settings are an immutable snapshot taken at the start of a compile. They can
be built directly, from the loosely typed mapping a content-management system
stores (where booleans are ``"yes"``/``"no"`` strings), or from a JSON, TOML or
YAML configuration file.
"""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Mapping

if sys.version_info >= (3, 11):
    import tomllib
    from typing import Self
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
    from typing_extensions import Self

import yaml

from newsformat.constants import (
    COMPONENT_ALERT_MODES,
    DEFAULT_ASIDE_COMPONENT_CLASS,
    DEFAULT_COMPONENT_ALERTS,
    DEFAULT_FULL_BLEED_IMAGES,
    DEFAULT_HTML_PARSER,
    DEFAULT_HTML_SUPPORT,
    DEFAULT_MAX_DEPTH,
    DEFAULT_RECIPE_COMPONENT_CLASS,
    DEFAULT_RECIPE_COMPONENT_USE_SCHEMA,
    DEFAULT_STRICT,
    DEFAULT_USE_REMOTE_IMAGES,
    HTML_PARSERS,
    ComponentAlerts,
    HtmlParser,
)
from newsformat.exceptions import InvalidSettingsError

logger = logging.getLogger(__name__)

_TRUE_STRINGS = frozenset({"yes", "true", "1", "on"})
_FALSE_STRINGS = frozenset({"no", "false", "0", "off", ""})


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class ExportSettings(CloneFrozenMixin):
    """Site-wide settings that influence how markup becomes components.

    Parameters
    ----------
    use_remote_images : bool, default True
        Reference media by its remote URL. When False, media is bundled and
        referenced through ``bundle://`` URLs.
    full_bleed_images : bool, default False
        Let non-anchored images ignore the document margin.
    html_support : bool, default True
        Emit component text as HTML. When False, lightweight markup is used.
    aside_component_class : str, default ""
        CSS class identifying aside elements. Empty disables asides.
    recipe_component_class : str, default ""
        CSS class identifying recipe elements. Empty disables recipes.
    recipe_component_use_schema : bool, default True
        Build recipes from JSON-LD schema. When False the recipe element's
        own markup is converted into subcomponents.
    excluded_selectors : tuple[str, ...], default ()
        CSS selectors whose matches are removed before component matching.
    component_alerts : {"none", "warn", "fail"}, default "none"
        What to do when elements could not be converted.
    html_parser : {"html.parser", "lxml", "html5lib"}, default "html.parser"
        BeautifulSoup parser backend.
    max_depth : int, default 256
        Maximum markup nesting depth walked by the component factory.
    strict : bool, default False
        Raise instead of dropping a component whose build fails.

    """

    use_remote_images: bool = field(
        default=DEFAULT_USE_REMOTE_IMAGES,
        metadata={"help": "Reference media by remote URL instead of bundling it"},
    )
    full_bleed_images: bool = field(
        default=DEFAULT_FULL_BLEED_IMAGES,
        metadata={"help": "Let non-anchored images span the full document width"},
    )
    html_support: bool = field(
        default=DEFAULT_HTML_SUPPORT,
        metadata={"help": "Emit component text as HTML rather than lightweight markup"},
    )
    aside_component_class: str = field(
        default=DEFAULT_ASIDE_COMPONENT_CLASS,
        metadata={"help": "CSS class marking aside elements"},
    )
    recipe_component_class: str = field(
        default=DEFAULT_RECIPE_COMPONENT_CLASS,
        metadata={"help": "CSS class marking recipe elements"},
    )
    recipe_component_use_schema: bool = field(
        default=DEFAULT_RECIPE_COMPONENT_USE_SCHEMA,
        metadata={"help": "Build recipes from JSON-LD Recipe schema"},
    )
    excluded_selectors: tuple[str, ...] = field(
        default=(),
        metadata={"help": "CSS selectors removed from the markup before matching"},
    )
    component_alerts: ComponentAlerts = field(
        default=DEFAULT_COMPONENT_ALERTS,
        metadata={"help": "Reaction to unconvertible elements: none, warn or fail"},
    )
    html_parser: HtmlParser = field(
        default=DEFAULT_HTML_PARSER,
        metadata={"help": "BeautifulSoup parser backend"},
    )
    max_depth: int = field(
        default=DEFAULT_MAX_DEPTH,
        metadata={"help": "Maximum markup nesting depth", "type": int},
    )
    strict: bool = field(
        default=DEFAULT_STRICT,
        metadata={"help": "Raise when a component fails to build instead of dropping it"},
    )

    def __post_init__(self) -> None:
        """Validate literal and numeric settings.

        Raises
        ------
        InvalidSettingsError
            If any field value is outside its valid range.

        """
        if self.component_alerts not in COMPONENT_ALERT_MODES:
            raise InvalidSettingsError(
                f"component_alerts must be one of {COMPONENT_ALERT_MODES}, got {self.component_alerts!r}",
                parameter_name="component_alerts",
                parameter_value=self.component_alerts,
            )
        if self.html_parser not in HTML_PARSERS:
            raise InvalidSettingsError(
                f"html_parser must be one of {HTML_PARSERS}, got {self.html_parser!r}",
                parameter_name="html_parser",
                parameter_value=self.html_parser,
            )
        if self.max_depth <= 0:
            raise InvalidSettingsError(
                f"max_depth must be positive, got {self.max_depth}",
                parameter_name="max_depth",
                parameter_value=self.max_depth,
            )
        # Selectors may arrive as a list from configuration files
        if not isinstance(self.excluded_selectors, tuple):
            object.__setattr__(self, "excluded_selectors", _coerce_selectors(self.excluded_selectors))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ExportSettings:
        """Build settings from a loosely typed mapping.

        Unknown keys are ignored with a debug message. Boolean fields accept
        ``"yes"``/``"no"`` strings as stored by the host CMS.

        Parameters
        ----------
        data : Mapping[str, Any]
            Raw settings values

        Returns
        -------
        ExportSettings
            The parsed settings

        Raises
        ------
        InvalidSettingsError
            If a value cannot be coerced to the field's type

        """
        known = {f.name: f for f in fields(cls)}
        kwargs: dict[str, Any] = {}

        for key, value in data.items():
            settings_field = known.get(key)
            if settings_field is None:
                logger.debug(f"Ignoring unknown setting '{key}'")
                continue

            default = settings_field.default
            if isinstance(default, bool):
                kwargs[key] = _coerce_bool(key, value)
            elif isinstance(default, int):
                try:
                    kwargs[key] = int(value)
                except (TypeError, ValueError) as e:
                    raise InvalidSettingsError(
                        f"Setting '{key}' must be an integer, got {value!r}",
                        parameter_name=key,
                        parameter_value=value,
                        original_error=e,
                    ) from e
            elif key == "excluded_selectors":
                kwargs[key] = _coerce_selectors(value)
            else:
                kwargs[key] = "" if value is None else str(value)

        return cls(**kwargs)


def _coerce_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    normalized = str(value).strip().lower()
    if normalized in _TRUE_STRINGS:
        return True
    if normalized in _FALSE_STRINGS:
        return False
    raise InvalidSettingsError(
        f"Setting '{key}' must be a boolean or yes/no, got {value!r}",
        parameter_name=key,
        parameter_value=value,
    )


def _coerce_selectors(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        # Stored as a comma separated list by the host CMS
        return tuple(s.strip() for s in value.split(",") if s.strip())
    return tuple(str(s).strip() for s in value if str(s).strip())


def load_config_file(config_path: Path | str, section: str = "newsformat") -> dict[str, Any]:
    """Load a configuration mapping from JSON, TOML, YAML or pyproject.toml.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file
    section : str, default "newsformat"
        Table read from ``[tool.<section>]`` when the file is pyproject.toml

    Returns
    -------
    dict
        Configuration dictionary loaded from file

    Raises
    ------
    InvalidSettingsError
        If the file is missing, unreadable or not a mapping

    """
    path = Path(config_path)
    if not path.is_file():
        raise InvalidSettingsError(f"Configuration file not found: {path}", parameter_name="config_path")

    suffix = path.suffix.lower()
    try:
        if suffix == ".toml":
            with open(path, "rb") as f:
                data = tomllib.load(f)
            if path.name == "pyproject.toml":
                data = data.get("tool", {}).get(section, {})
        elif suffix in (".yaml", ".yml"):
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        elif suffix == ".json":
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        else:
            raise InvalidSettingsError(
                f"Unsupported configuration format '{suffix}' (expected .json, .toml, .yaml or .yml)",
                parameter_name="config_path",
                parameter_value=str(path),
            )
    except (OSError, json.JSONDecodeError, tomllib.TOMLDecodeError, yaml.YAMLError) as e:
        raise InvalidSettingsError(
            f"Could not read configuration file {path}: {e}",
            parameter_name="config_path",
            parameter_value=str(path),
            original_error=e,
        ) from e

    if not isinstance(data, dict):
        raise InvalidSettingsError(
            f"Configuration in {path} must be a mapping, got {type(data).__name__}",
            parameter_name="config_path",
            parameter_value=str(path),
        )
    return data


def load_settings(config_path: Path | str) -> ExportSettings:
    """Load ExportSettings from a configuration file.

    A ``settings`` table is used when present, otherwise the whole file.
    """
    data = load_config_file(config_path)
    if isinstance(data.get("settings"), dict):
        data = data["settings"]
    return ExportSettings.from_mapping(data)


__all__ = ["CloneFrozenMixin", "ExportSettings", "load_config_file", "load_settings"]
