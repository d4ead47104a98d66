#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/newsformat/components/base.py
"""Abstract base class for document components.

A component is one typed node of the output document. Each kind declares
its named specs in ``register_specs`` and produces its JSON in ``build``,
which runs exactly once, from the constructor, when a CompileContext is
supplied. Constructed without a context, a component only registers its
specs, which is how the customization API inspects them.

Subcomponents (components built inside a parent such as an aside or a
recipe) namespace every key they register as
``"<parent>-subcomponent-<key>"`` and read parent-prefixed theme values when
the theme defines them.
"""

from __future__ import annotations

import copy
import hashlib
import logging
import uuid
import weakref
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING, Any, ClassVar, Literal, Mapping, Optional, Union

from bs4.element import Tag

from newsformat.constants import (
    BUNDLE_URL_SCHEME,
    COMPONENT_UID_PREFIX,
    DARK_MODE_CONDITIONS,
    SUBCOMPONENT_KEY_FORMAT,
    TextFormat,
)
from newsformat.exceptions import SpecNotRegisteredError
from newsformat.hooks import HookManager, html_enabled_hook, json_hook
from newsformat.specs.component_spec import ComponentSpec
from newsformat.specs.store import SpecCustomizationStore
from newsformat.theme import Theme
from newsformat.utils.html import get_filename
from newsformat.utils.text_format import filter_allowed_html, format_text

if TYPE_CHECKING:
    from newsformat.context import CompileContext
    from newsformat.settings import ExportSettings

logger = logging.getLogger(__name__)

AnchorSide = Literal["left", "right"]


class AnchorPosition(IntEnum):
    """Where a component floats relative to its anchor target."""

    NONE = 0
    AUTO = 1
    LEFT = 2
    RIGHT = 3


@dataclass(frozen=True)
class MatchedFragment:
    """One component to build when a matcher splits a node.

    Parameters
    ----------
    name : str
        Matcher table name of the kind to build, e.g. ``"img"`` or ``"p"``
    html : str
        Markup the component is built from

    """

    name: str
    html: str


# What a matcher returns: no match, the node (or a descendant) to build from,
# or a list of fragments each becoming its own component
MatchResult = Union[None, Tag, list[MatchedFragment]]


class Component(ABC):
    """Base class for every component kind.

    Parameters
    ----------
    html : str, optional
        Markup the component is built from
    context : CompileContext, optional
        Compile state. Without it only specs are registered.
    parent : Component, optional
        Owning component when this instance is a subcomponent
    theme : Theme, optional
        Theme for specs-only instances; ignored when ``context`` is given
    store : SpecCustomizationStore, optional
        Customization store for specs-only instances

    """

    #: Kind name, used for hooks and storage keys
    name: ClassVar[str] = "component"
    #: Human-readable kind name
    label: ClassVar[str] = "Component"
    #: Other components may anchor to this kind
    anchor_target_capable: ClassVar[bool] = False
    #: This kind builds subcomponents from its children
    parent_capable: ClassVar[bool] = False
    #: False for kinds created from metadata rather than markup
    markup_based: ClassVar[bool] = True
    #: Whether this kind emits HTML text when HTML support is on
    html_capable: ClassVar[bool] = False
    #: Components that flow around anchors (body text) set this False
    needs_layout_if_anchored: bool = True

    def __init__(
        self,
        html: Optional[str] = None,
        context: Optional[CompileContext] = None,
        parent: Optional[Component] = None,
        *,
        theme: Optional[Theme] = None,
        store: Optional[SpecCustomizationStore] = None,
    ) -> None:
        """Register specs and, given a context, build the component."""
        self.html = html
        self.context = context
        self._parent = weakref.ref(parent) if parent is not None else None
        self.parent_name: Optional[str] = parent.name if parent is not None else None
        self.json: Optional[dict[str, Any]] = None
        self.anchor_position = AnchorPosition.NONE
        self.specs: dict[str, ComponentSpec] = {}
        self._uid = ""

        if context is not None:
            self.theme = context.theme
            self.spec_store: Optional[SpecCustomizationStore] = context.spec_store
            self.hooks: Optional[HookManager] = context.hooks
        else:
            self.theme = theme or (parent.theme if parent is not None else Theme())
            self.spec_store = store
            self.hooks = None

        self.register_specs()

        if context is None:
            return

        self.text_format: TextFormat = "html" if self.html_enabled() else "markdown"
        self.build(html or "")
        logger.debug(f"Built {self.component_object_key(self.name)} component")

    def __repr__(self) -> str:
        """Return a debugging representation."""
        return f"{type(self).__name__}(parent={self.parent_name!r}, anchor={self.anchor_position.name})"

    @classmethod
    def specs_only(
        cls,
        parent: Optional[Component] = None,
        store: Optional[SpecCustomizationStore] = None,
        theme: Optional[Theme] = None,
        theme_name: Optional[str] = None,
    ) -> Component:
        """Create an instance that only registers specs."""
        if theme is None and theme_name is not None:
            theme = Theme(name=theme_name)
        return cls(parent=parent, theme=theme, store=store)

    @classmethod
    def node_matches(cls, node: Tag, context: CompileContext) -> MatchResult:
        """Decide whether this kind claims ``node``; the default claims nothing."""
        return None

    @abstractmethod
    def register_specs(self) -> None:
        """Declare every spec this kind may use."""

    @abstractmethod
    def build(self, html: str) -> None:
        """Inspect ``html``, register styles and layouts, and produce JSON."""

    # ------------------------------------------------------------------
    # Context access
    # ------------------------------------------------------------------

    @property
    def parent(self) -> Optional[Component]:
        """The owning component, while it is alive."""
        return self._parent() if self._parent is not None else None

    @property
    def settings(self) -> ExportSettings:
        """Settings of the current compile."""
        assert self.context is not None
        return self.context.settings

    @property
    def content_id(self) -> int | str:
        """Identifier of the article being compiled."""
        return self.context.content_id if self.context is not None else 0

    def theme_value(self, key: str, default: Any = None) -> Any:
        """Return a theme value, preferring the parent-prefixed variant.

        A recipe subcomponent asking for ``body_font`` gets ``recipe_body_font``
        when the theme defines it.
        """
        if self.parent_name:
            prefixed = f"{self.parent_name}_{key}"
            if self.theme.has_value(prefixed):
                return self.theme.get_value(prefixed)
        return self.theme.get_value(key, default)

    def has_theme_value(self, key: str) -> bool:
        """Return True when ``theme_value(key)`` is non-empty."""
        value = self.theme_value(key)
        return value is not None and value != ""

    def theme_int(self, key: str) -> int:
        """Return ``theme_value(key)`` as an int, or 0 when not numeric."""
        try:
            return int(self.theme_value(key, 0))
        except (TypeError, ValueError):
            return 0

    def theme_tracking(self, key: str) -> float:
        """Return a tracking percentage from the theme as a fraction."""
        return self.theme_int(key) / 100

    def dark_mode(self, **values: Any) -> dict[str, Any]:
        """Return a ``conditional`` block for the dark color scheme.

        Keyword values whose theme key is empty are left out; an empty dict is
        returned when nothing remains, so the branch disappears entirely.
        Pass theme keys as values, e.g. ``dark_mode(textColor="body_color_dark")``.
        """
        branch = {prop: f"#{key}#" for prop, key in values.items() if self.has_theme_value(key)}
        if not branch:
            return {}
        return {"conditional": {**branch, "conditions": dict(DARK_MODE_CONDITIONS)}}

    def text_style_spec(self, prefix: str, **extra: Any) -> dict[str, Any]:
        """Return a text style template for the ``<prefix>_*`` theme values.

        Extra keyword arguments are added as template properties. A dark-mode
        text color branch is included only when the theme defines one.
        """
        spec: dict[str, Any] = {
            "textAlignment": "left",
            "fontName": f"#{prefix}_font#",
            "fontSize": f"#{prefix}_size#",
            "tracking": f"#{prefix}_tracking#",
            "lineHeight": f"#{prefix}_line_height#",
            "textColor": f"#{prefix}_color#",
        }
        spec.update(extra)
        spec.update(self.dark_mode(textColor=f"{prefix}_color_dark"))
        return spec

    def text_style_values(self, prefix: str, *extra_keys: str) -> dict[str, Any]:
        """Return substitution values for ``text_style_spec(prefix)``."""
        values = {
            f"{prefix}_font": self.theme_value(f"{prefix}_font"),
            f"{prefix}_size": self.theme_int(f"{prefix}_size"),
            f"{prefix}_tracking": self.theme_tracking(f"{prefix}_tracking"),
            f"{prefix}_line_height": self.theme_int(f"{prefix}_line_height"),
            f"{prefix}_color": self.theme_value(f"{prefix}_color"),
            f"{prefix}_color_dark": self.theme_value(f"{prefix}_color_dark"),
        }
        for key in extra_keys:
            values[key] = self.theme_value(key)
        return values

    def html_enabled(self) -> bool:
        """Return True if this component emits HTML text."""
        if self.context is None or not self.settings.html_support:
            return False
        assert self.hooks is not None
        enabled = self.hooks.execute_hooks(
            html_enabled_hook(self.name),
            self.html_capable,
            self.context.hook_context(self.name),
        )
        return bool(enabled)

    def format_text(self, markup: str) -> str:
        """Format ``markup`` as HTML or markdown for this component."""
        parser = self.settings.html_parser if self.context is not None else "html.parser"
        return format_text(markup, self.text_format, parser)

    # ------------------------------------------------------------------
    # Specs
    # ------------------------------------------------------------------

    def register_spec(self, name: str, label: str, spec: Any, prunable: bool = False) -> None:
        """Register a named template owned by this component."""
        self.specs[name] = ComponentSpec(
            self.name,
            name,
            label,
            spec,
            parent=self.parent_name,
            store=self.spec_store,
            theme=self.theme.name,
            hooks=self.hooks,
            prunable=prunable,
        )

    def get_spec(self, name: str) -> Optional[ComponentSpec]:
        """Return the spec registered as ``name``, or None."""
        return self.specs.get(name)

    def require_spec(self, name: str) -> ComponentSpec:
        """Return the spec registered as ``name``.

        Raises
        ------
        SpecNotRegisteredError
            If this kind never registered the spec

        """
        spec = self.specs.get(name)
        if spec is None:
            raise SpecNotRegisteredError(self.name, name)
        return spec

    def get_specs(self) -> dict[str, ComponentSpec]:
        """Return every registered spec by name."""
        return dict(self.specs)

    def is_subcomponent(self) -> bool:
        """Return True if this component was built inside a parent."""
        return self.parent_name is not None

    def component_object_key(self, name: str) -> str:
        """Return the registry key for ``name``, namespaced for subcomponents."""
        if self.parent_name:
            return SUBCOMPONENT_KEY_FORMAT.format(parent=self.parent_name, name=name)
        return name

    def substitute(self, spec_name: str, values: Optional[Mapping[str, Any]] = None) -> Any:
        """Substitute ``values`` into a registered spec."""
        return self.require_spec(spec_name).substitute(values, self.content_id)

    # ------------------------------------------------------------------
    # JSON, layouts and styles
    # ------------------------------------------------------------------

    def register_json(self, spec_name: str, values: Optional[Mapping[str, Any]] = None) -> None:
        """Set this component's JSON from a spec."""
        self.json = self.substitute(spec_name, values)

    def register_style(
        self,
        name: str,
        spec_name: str,
        values: Optional[Mapping[str, Any]] = None,
        json_property: Optional[str] = None,
    ) -> str:
        """Register a text style and reference it from ``json_property``."""
        assert self.context is not None
        key = self.component_object_key(name)
        self.context.text_styles.register(key, self.substitute(spec_name, values))
        self.set_json(json_property, key)
        return key

    def register_component_style(
        self,
        name: str,
        spec_name: str,
        values: Optional[Mapping[str, Any]] = None,
        json_property: Optional[str] = None,
    ) -> str:
        """Register a component style and reference it from ``json_property``."""
        assert self.context is not None
        key = self.component_object_key(name)
        self.context.component_styles.register(key, self.substitute(spec_name, values))
        self.set_json(json_property, key)
        return key

    def register_layout(
        self,
        name: str,
        spec_name: str,
        values: Optional[Mapping[str, Any]] = None,
        json_property: Optional[str] = None,
    ) -> str:
        """Register a layout and reference it from ``json_property``."""
        assert self.context is not None
        key = self.component_object_key(name)
        self.context.layouts.register(key, self.substitute(spec_name, values))
        self.set_json(json_property, key)
        return key

    def register_full_width_layout(
        self,
        name: str,
        spec_name: str,
        values: Optional[Mapping[str, Any]] = None,
        json_property: Optional[str] = None,
    ) -> str:
        """Register a layout spanning the full width available to content.

        ``columnStart`` and ``columnSpan`` come from the theme and replace
        whatever the spec declares before substitution.
        """
        assert self.context is not None
        col_start, col_span = self.theme.full_width_columns()
        spec = self.require_spec(spec_name).with_overrides({"columnStart": col_start, "columnSpan": col_span})
        key = self.component_object_key(name)
        self.context.layouts.register(key, spec.substitute(values, self.content_id))
        self.set_json(json_property, key)
        return key

    def set_json(self, name: Optional[str], value: Any) -> None:
        """Set one top-level JSON property; ignored when ``name`` is empty."""
        if not name:
            return
        if self.json is None:
            self.json = {}
        self.json[name] = value

    def get_json(self, name: str) -> Any:
        """Return one top-level JSON property, or None."""
        if self.json is None:
            return None
        return self.json.get(name)

    def to_output(self) -> Optional[dict[str, Any]]:
        """Return the finalized JSON, or None when the component produced none.

        HTML text is filtered to the allowed tags, then the ``"<kind>_json"``
        hooks run.
        """
        if self.json is None:
            return None
        output = copy.deepcopy(self.json)
        if output.get("text") and isinstance(output["text"], str) and self.html_enabled():
            output["text"] = filter_allowed_html(output["text"], parser=self.settings.html_parser)
        if self.context is not None:
            output = self.context.hooks.execute_hooks(
                json_hook(self.name), output, self.context.hook_context(self.name)
            )
        return output

    # ------------------------------------------------------------------
    # Anchoring
    # ------------------------------------------------------------------

    def set_anchor_position(self, position: AnchorPosition) -> None:
        """Set where this component floats."""
        self.anchor_position = AnchorPosition(position)

    def resolved_anchor_side(self, theme: Theme) -> Optional[AnchorSide]:
        """Return the side this component floats on; AUTO opposes the body."""
        if self.anchor_position == AnchorPosition.LEFT:
            return "left"
        if self.anchor_position == AnchorPosition.RIGHT:
            return "right"
        if self.anchor_position == AnchorPosition.AUTO:
            return "right" if theme.body_orientation == "left" else "left"
        return None

    def anchor(self) -> None:
        """Apply the anchor layout once this component has been anchored."""
        if not self.needs_layout_if_anchored or self.context is None:
            return
        self.context.layouts.set_anchor_layout_for(self, self.theme)

    def uid(self) -> str:
        """Return this component's identifier, assigning it on first use."""
        if not self._uid:
            seed = f"{uuid.uuid4().hex}{self.html or ''}"
            self._uid = COMPONENT_UID_PREFIX + hashlib.md5(seed.encode("utf-8")).hexdigest()
            self.set_json("identifier", self._uid)
        return self._uid

    def is_anchor_target(self) -> bool:
        """Return True once another component anchors to this one."""
        return bool(self._uid)

    def can_be_anchor_target(self) -> bool:
        """Return True if another component may still anchor to this one."""
        return self.anchor_target_capable and not self._uid

    def can_be_parent(self) -> bool:
        """Return True if this kind hosts subcomponents."""
        return self.parent_capable

    # ------------------------------------------------------------------
    # Media
    # ------------------------------------------------------------------

    def maybe_bundle_source(self, source: str, filename: Optional[str] = None) -> str:
        """Return the URL to reference ``source`` by.

        With remote media enabled this is ``source`` itself. Otherwise the
        source is handed to the asset bundle and a ``bundle://`` URL returned.
        """
        if self.context is None or self.settings.use_remote_images:
            return source
        if not filename:
            filename = get_filename(source)
        self.context.assets.bundle_source(filename, source)
        return f"{BUNDLE_URL_SCHEME}{filename}"


__all__ = ["AnchorPosition", "AnchorSide", "Component", "MatchResult", "MatchedFragment"]
