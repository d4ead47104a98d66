#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/newsformat/exporter.py
"""Compile an article's markup into a component document.

The exporter owns the compile pipeline: parse the markup, drop excluded
nodes, create the metadata components, build body components through the
factory, anchor floating components, and serialize the components together
with every layout and style they registered.
"""

from __future__ import annotations

import html as _html
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from newsformat.anchors import resolve_anchors
from newsformat.components.base import Component
from newsformat.constants import DEFAULT_TEXT_WRAPPER_TAG
from newsformat.context import CompileContext
from newsformat.exceptions import ComponentAlertError
from newsformat.factory import ComponentFactory, MatcherTable
from newsformat.metadata import ArticleMetadata
from newsformat.utils.html import is_text, parse_fragment

logger = logging.getLogger(__name__)

# Components created from metadata, in the order they open the document
METADATA_COMPONENTS = ("title", "byline", "intro")


@dataclass
class CompiledDocument:
    """The output of one compile.

    Parameters
    ----------
    components : list of dict
        Component JSON in document order
    component_layouts : dict
        Layouts by key
    component_text_styles : dict
        Text styles by key
    component_styles : dict
        Component styles by key
    errors : dict
        Diagnostics recorded during the compile, by category

    """

    components: list[dict[str, Any]] = field(default_factory=list)
    component_layouts: dict[str, Any] = field(default_factory=dict)
    component_text_styles: dict[str, Any] = field(default_factory=dict)
    component_styles: dict[str, Any] = field(default_factory=dict)
    errors: dict[str, list[str]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Return the document sections keyed as the output format names them."""
        return {
            "components": self.components,
            "componentLayouts": self.component_layouts,
            "componentTextStyles": self.component_text_styles,
            "componentStyles": self.component_styles,
        }

    def to_json(self, indent: Optional[int] = None) -> str:
        """Serialize ``to_dict()`` as JSON."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


class ArticleExporter:
    """Runs compiles over a CompileContext.

    Parameters
    ----------
    context : CompileContext
        Compile state. Its registries and diagnostics are filled by
        ``export``; create a new context for each article.
    table : MatcherTable, optional
        Matcher table for the factory; the default table when omitted

    Examples
    --------
        >>> from newsformat import ArticleExporter, ArticleMetadata, CompileContext
        >>> context = CompileContext.create(metadata=ArticleMetadata(title="Hello"))
        >>> document = ArticleExporter(context).export("<p>Hi there.</p>")
        >>> [c["role"] for c in document.components]
        ['title', 'body']

    """

    def __init__(self, context: CompileContext, table: Optional[MatcherTable] = None) -> None:
        """Initialize the exporter and its factory."""
        self.context = context
        self.factory = ComponentFactory(context, table)

    def export(self, html: str, metadata: Optional[ArticleMetadata] = None) -> CompiledDocument:
        """Compile ``html`` into a CompiledDocument.

        Parameters
        ----------
        html : str
            Article body markup
        metadata : ArticleMetadata, optional
            Replaces the context's metadata for this compile

        Returns
        -------
        CompiledDocument
            Components with their layouts and styles

        Raises
        ------
        ComponentAlertError
            If ``component_alerts`` is ``"fail"`` and markup went unmatched
        ComponentBuildError
            If a component failed to build in strict mode
        MarkupDepthError
            If the markup nests deeper than ``max_depth``

        """
        if metadata is not None:
            self.context.metadata = metadata
        self.context.article_html = html or ""

        components = self.metadata_components()
        components.extend(self.body_components(html or ""))

        resolve_anchors(components)

        outputs = [output for output in (c.to_output() for c in components) if output is not None]
        logger.info(f"Compiled {len(outputs)} component(s) for content {self.context.content_id}")

        self.raise_alerts()

        return CompiledDocument(
            components=outputs,
            component_layouts=self.context.layouts.to_dict(),
            component_text_styles=self.context.text_styles.to_dict(),
            component_styles=self.context.component_styles.to_dict(),
            errors=self.context.diagnostics.errors,
        )

    def metadata_components(self) -> list[Component]:
        """Build the title, byline and intro components present in the table."""
        components: list[Component] = []
        for name in METADATA_COMPONENTS:
            if name not in self.factory.table:
                continue
            component = self.factory.get_component(name, "")
            if component is not None:
                components.append(component)
        return components

    def body_components(self, html: str) -> list[Component]:
        """Build components from the top-level nodes of ``html``.

        Bare text between top-level elements is wrapped in a paragraph.
        """
        soup = parse_fragment(html, self.context.settings.html_parser)
        for selector in self.context.settings.excluded_selectors:
            for node in soup.select(selector):
                node.decompose()

        root = soup.body if soup.body is not None else soup
        components: list[Component] = []
        for node in list(root.children):
            if is_text(node):
                paragraph = self.factory.get_component(
                    DEFAULT_TEXT_WRAPPER_TAG, f"<p>{_html.escape(str(node).strip())}</p>"
                )
                if paragraph is not None:
                    components.append(paragraph)
                continue
            components.extend(self.factory.get_components_from_node(node))
        return components

    def raise_alerts(self) -> None:
        """Report unmatched markup according to ``component_alerts``."""
        mode = self.context.settings.component_alerts
        diagnostics = self.context.diagnostics
        if mode == "none" or not diagnostics.has_errors():
            return

        errors = diagnostics.errors
        if mode == "fail":
            raise ComponentAlertError(errors)

        for category, identifiers in errors.items():
            logger.warning(f"{category}: {', '.join(sorted(set(identifiers)))}")


def export_article(
    html: str,
    metadata: Optional[ArticleMetadata] = None,
    context: Optional[CompileContext] = None,
    **create_kwargs: Any,
) -> CompiledDocument:
    """Compile one article with a fresh context.

    Parameters
    ----------
    html : str
        Article body markup
    metadata : ArticleMetadata, optional
        Article metadata
    context : CompileContext, optional
        Context to compile in; created with ``CompileContext.create`` from
        ``create_kwargs`` when omitted

    """
    if context is None:
        context = CompileContext.create(metadata=metadata, **create_kwargs)
    return ArticleExporter(context).export(html, metadata)


__all__ = ["ArticleExporter", "CompiledDocument", "METADATA_COMPONENTS", "export_article"]
