#  Copyright (c) 2025 Tom Villani, Ph.D.
"""newsformat - compile article markup into component-based news documents.

newsformat walks an article's HTML, matches each node against an ordered
table of component kinds (body text, headings, images, galleries, quotes,
embeds, recipes and more), and emits a document of typed components together
with the layouts, text styles and component styles they reference.

Every piece of emitted JSON comes from a named, themeable template. Themes
supply the style values substituted into the templates, and per-theme
customizations can replace a template entirely.

Examples
--------
Compile an article with the default theme:

    >>> from newsformat import ArticleMetadata, export_article
    >>> document = export_article("<p>Hello.</p>", ArticleMetadata(title="News"))
    >>> print(document.to_json(indent=2))

Use a theme file and custom settings:

    >>> from newsformat import ArticleExporter, CompileContext, ExportSettings, ThemeRegistry
    >>> themes = ThemeRegistry()
    >>> themes.load_file("themes/dark.yaml", activate=True)
    >>> context = CompileContext.create(settings=ExportSettings(html_support=False), themes=themes)
    >>> document = ArticleExporter(context).export(html)

"""

__version__ = "0.4.0"

from newsformat.anchors import resolve_anchors
from newsformat.components import AnchorPosition, Component, MatchedFragment
from newsformat.context import AssetBundle, CompileContext, ErrorLog
from newsformat.exceptions import (
    ComponentAlertError,
    ComponentBuildError,
    ConfigurationError,
    DependencyError,
    InvalidSettingsError,
    MarkupDepthError,
    MatcherTableError,
    NewsFormatError,
    ParsingError,
    SpecNotRegisteredError,
    SpecValidationError,
    ThemeError,
    UnknownComponentError,
    ValidationError,
)
from newsformat.exporter import ArticleExporter, CompiledDocument, export_article
from newsformat.factory import ComponentFactory, MatcherEntry, MatcherTable, default_matcher_table
from newsformat.hooks import HookContext, HookManager
from newsformat.logging_utils import configure_logging
from newsformat.metadata import ArticleMetadata
from newsformat.settings import ExportSettings, load_settings
from newsformat.specs import ComponentSpec, InMemorySpecStore, SpecCustomizationStore
from newsformat.theme import Theme, ThemeRegistry

__all__ = [
    "__version__",
    # Compile pipeline
    "ArticleExporter",
    "CompiledDocument",
    "export_article",
    "CompileContext",
    "ComponentFactory",
    "MatcherEntry",
    "MatcherTable",
    "default_matcher_table",
    "resolve_anchors",
    # Components and specs
    "AnchorPosition",
    "Component",
    "ComponentSpec",
    "MatchedFragment",
    "InMemorySpecStore",
    "SpecCustomizationStore",
    # Configuration
    "ArticleMetadata",
    "ExportSettings",
    "load_settings",
    "Theme",
    "ThemeRegistry",
    "HookContext",
    "HookManager",
    "AssetBundle",
    "ErrorLog",
    "configure_logging",
    # Exceptions
    "NewsFormatError",
    "ValidationError",
    "InvalidSettingsError",
    "SpecValidationError",
    "ConfigurationError",
    "SpecNotRegisteredError",
    "MatcherTableError",
    "UnknownComponentError",
    "ThemeError",
    "ParsingError",
    "MarkupDepthError",
    "ComponentBuildError",
    "ComponentAlertError",
    "DependencyError",
]
