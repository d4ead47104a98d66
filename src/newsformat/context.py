#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/newsformat/context.py
"""Compile-scoped state threaded through the factory and every component.

A CompileContext replaces what would otherwise be process-wide state: the
settings and theme in effect, the style registries components write into,
the spec customization store, hooks, and the diagnostics and asset
collaborators. Build a fresh context for every compile with
``CompileContext.create`` so that unrelated documents never share registry
keys.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

from newsformat.hooks import HookContext, HookManager
from newsformat.metadata import ArticleMetadata
from newsformat.registries import ComponentLayouts, ComponentStyles, ComponentTextStyles
from newsformat.settings import ExportSettings
from newsformat.specs.store import InMemorySpecStore, SpecCustomizationStore
from newsformat.theme import Theme, ThemeRegistry
from newsformat.utils.recipe_schema import RecipeSchemaProvider

if TYPE_CHECKING:
    from newsformat.factory import ComponentFactory

logger = logging.getLogger(__name__)


class ErrorLog:
    """Diagnostics sink collecting ``(category, identifier)`` pairs.

    Examples
    --------
        >>> log = ErrorLog()
        >>> log.log_error("component_errors", "marquee")
        >>> log.errors
        {'component_errors': ['marquee']}

    """

    def __init__(self) -> None:
        """Initialize an empty log."""
        self._errors: dict[str, list[str]] = {}

    def log_error(self, category: str, identifier: str) -> None:
        """Record one diagnostic."""
        self._errors.setdefault(category, []).append(identifier)
        logger.warning(f"{category}: {identifier}")

    @property
    def errors(self) -> dict[str, list[str]]:
        """Recorded diagnostics by category, in the order they occurred."""
        return {category: list(identifiers) for category, identifiers in self._errors.items()}

    def has_errors(self, category: Optional[str] = None) -> bool:
        """Return True if anything (in ``category``, when given) was recorded."""
        if category is None:
            return any(self._errors.values())
        return bool(self._errors.get(category))

    def clear(self) -> None:
        """Forget every recorded diagnostic."""
        self._errors.clear()


class AssetBundle:
    """Media resolver target collecting sources that must ship with the document.

    Components call ``bundle_source`` when remote media is disabled and then
    reference the file through a ``bundle://`` URL. Fetching and packaging
    the files belongs to the publishing client.
    """

    def __init__(self) -> None:
        """Initialize an empty bundle."""
        self._sources: dict[str, str] = {}

    def bundle_source(self, filename: str, source: str) -> None:
        """Record that ``source`` must be bundled as ``filename``."""
        previous = self._sources.get(filename)
        if previous is not None and previous != source:
            logger.warning(f"Bundle filename '{filename}' reused for a different source: {source}")
        self._sources[filename] = source

    @property
    def sources(self) -> dict[str, str]:
        """Bundled filenames mapped to their source URLs."""
        return dict(self._sources)


@dataclass
class CompileContext:
    """Everything a compile needs, passed explicitly to every component.

    Parameters
    ----------
    settings : ExportSettings
        Site-wide export settings
    theme : Theme
        Active theme
    metadata : ArticleMetadata
        Article being compiled; ``metadata.content_id`` scopes hooks and logs
    layouts, text_styles, component_styles : registries
        Compile-scoped style registries
    spec_store : SpecCustomizationStore
        Source of spec customizations
    hooks : HookManager
        Extension points
    diagnostics : ErrorLog
        Sink for structural mismatches and swallowed build failures
    assets : AssetBundle
        Media resolver for bundled sources
    schema_provider : RecipeSchemaProvider or None
        Recipe schema discovery; None disables schema-based recipes
    article_html : str
        Full article markup, searched for recipe schema
    factory : ComponentFactory or None
        Set by the factory when it is constructed over this context

    """

    settings: ExportSettings = field(default_factory=ExportSettings)
    theme: Theme = field(default_factory=Theme)
    metadata: ArticleMetadata = field(default_factory=ArticleMetadata)
    layouts: ComponentLayouts = field(default_factory=ComponentLayouts)
    text_styles: ComponentTextStyles = field(default_factory=ComponentTextStyles)
    component_styles: ComponentStyles = field(default_factory=ComponentStyles)
    spec_store: SpecCustomizationStore = field(default_factory=InMemorySpecStore)
    hooks: HookManager = field(default_factory=HookManager)
    diagnostics: ErrorLog = field(default_factory=ErrorLog)
    assets: AssetBundle = field(default_factory=AssetBundle)
    schema_provider: Optional[RecipeSchemaProvider] = None
    article_html: str = ""
    factory: Optional[ComponentFactory] = field(default=None, repr=False)

    @classmethod
    def create(
        cls,
        settings: Optional[ExportSettings] = None,
        theme: Optional[Theme] = None,
        metadata: Optional[ArticleMetadata] = None,
        themes: Optional[ThemeRegistry] = None,
        spec_store: Optional[SpecCustomizationStore] = None,
        hooks: Optional[HookManager] = None,
        schema_provider: Optional[RecipeSchemaProvider] = None,
    ) -> CompileContext:
        """Build a context with fresh registries, diagnostics and assets.

        Parameters
        ----------
        settings : ExportSettings, optional
            Defaults to ``ExportSettings()``
        theme : Theme, optional
            Active theme. Defaults to the registry's active theme, or the
            default theme.
        metadata : ArticleMetadata, optional
            Defaults to an empty ArticleMetadata
        themes : ThemeRegistry, optional
            Theme Provider consulted when ``theme`` is omitted
        spec_store : SpecCustomizationStore, optional
            Defaults to an in-memory store seeded from the theme's templates
        hooks : HookManager, optional
            Defaults to a manager whose strictness follows ``settings.strict``
        schema_provider : RecipeSchemaProvider, optional
            Defaults to a provider fetching pages with httpx

        Returns
        -------
        CompileContext
            The new context

        """
        settings = settings or ExportSettings()
        if theme is None:
            theme = themes.active if themes is not None else Theme()
        if spec_store is None:
            spec_store = InMemorySpecStore.from_themes([theme])
        if schema_provider is None:
            schema_provider = RecipeSchemaProvider(parser=settings.html_parser)

        return cls(
            settings=settings,
            theme=theme,
            metadata=metadata or ArticleMetadata(),
            spec_store=spec_store,
            hooks=hooks if hooks is not None else HookManager(strict=settings.strict),
            schema_provider=schema_provider,
        )

    @property
    def content_id(self) -> int | str:
        """Identifier of the article being compiled."""
        return self.metadata.content_id

    def hook_context(self, component: Optional[str] = None, **shared: Any) -> HookContext:
        """Return a HookContext for this compile."""
        return HookContext(
            content_id=self.content_id,
            component=component,
            theme=self.theme.name,
            shared=dict(shared),
        )


__all__ = ["AssetBundle", "CompileContext", "ErrorLog"]
