#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/newsformat/factory.py
"""Matcher table and the tree builder that turns markup into components.

The matcher table is an ordered list of ``(name, matcher, builder)``
entries. For each markup node the factory asks every matcher in order; the
first to claim the node decides what gets built:

- a list of MatchedFragment objects builds one component per fragment,
  each through the entry named by the fragment
- a node builds the entry's component from that node's markup
- no claim at all makes the node transparent: its children are walked in
  turn and their components concatenated

A node that yields nothing, unless it is a paragraph, is reported to the
diagnostics sink under ``"component_errors"``. Text nodes never match;
their content reaches the document through the element that holds it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Iterable, Iterator, Optional

from bs4.element import Tag

from newsformat.components import (
    Aside,
    Audio,
    Body,
    Byline,
    Divider,
    EmbedGeneric,
    EmbedWebVideo,
    FacebookPost,
    Gallery,
    Heading,
    Image,
    Instagram,
    Intro,
    LinkButton,
    Quote,
    Recipe,
    Table,
    TikTok,
    Title,
    Tweet,
    Video,
)
from newsformat.components.base import Component, MatchedFragment, MatchResult
from newsformat.constants import COMPONENT_BUILD_ERRORS, COMPONENT_ERRORS, DEFAULT_TEXT_WRAPPER_TAG
from newsformat.exceptions import (
    ComponentBuildError,
    ConfigurationError,
    MarkupDepthError,
    MatcherTableError,
    UnknownComponentError,
)
from newsformat.hooks import INITIALIZE_COMPONENTS
from newsformat.utils.html import parse_fragment

if TYPE_CHECKING:
    from newsformat.context import CompileContext

logger = logging.getLogger(__name__)

Matcher = Callable[[Tag, "CompileContext"], MatchResult]


@dataclass(frozen=True)
class MatcherEntry:
    """One row of the matcher table.

    Parameters
    ----------
    name : str
        Short name, also used by matchers that split nodes into fragments
    matcher : callable
        ``matcher(node, context)`` returning a MatchResult
    builder : type[Component]
        Component class built for claimed markup

    """

    name: str
    matcher: Matcher
    builder: type[Component]


def _tag_matcher(tag_name: str, builder: type[Component]) -> Matcher:
    """Restrict ``builder.node_matches`` to elements named ``tag_name``."""

    def matcher(node: Tag, context: CompileContext) -> MatchResult:
        if node.name != tag_name:
            return None
        return builder.node_matches(node, context)

    matcher.__name__ = f"match_{tag_name}"
    return matcher


class MatcherTable:
    """Ordered, validated collection of matcher entries.

    Parameters
    ----------
    entries : iterable of MatcherEntry, optional
        Initial entries, in match order

    Raises
    ------
    MatcherTableError
        If names repeat, or an entry has a non-callable matcher or a builder
        that is not a Component subclass

    """

    def __init__(self, entries: Iterable[MatcherEntry] = ()) -> None:
        """Initialize the table."""
        self._entries: list[MatcherEntry] = []
        for entry in entries:
            self._append(entry)

    def __contains__(self, name: object) -> bool:
        return any(entry.name == name for entry in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[MatcherEntry]:
        return iter(list(self._entries))

    @property
    def entries(self) -> list[MatcherEntry]:
        """A copy of the entries in match order."""
        return list(self._entries)

    @property
    def names(self) -> list[str]:
        return [entry.name for entry in self._entries]

    def get(self, name: str) -> Optional[MatcherEntry]:
        """Return the entry named ``name``, or None."""
        for entry in self._entries:
            if entry.name == name:
                return entry
        return None

    @staticmethod
    def _validate(entry: MatcherEntry) -> None:
        if not isinstance(entry, MatcherEntry):
            raise MatcherTableError(f"Matcher table entries must be MatcherEntry objects, got {type(entry).__name__}")
        if not callable(entry.matcher):
            raise MatcherTableError(f"Matcher for '{entry.name}' is not callable")
        if not (isinstance(entry.builder, type) and issubclass(entry.builder, Component)):
            raise MatcherTableError(f"Builder for '{entry.name}' is not a Component subclass")

    def _append(self, entry: MatcherEntry, before: Optional[str] = None) -> None:
        self._validate(entry)
        if entry.name in self:
            raise MatcherTableError(f"Duplicate matcher name '{entry.name}'")
        if before is None:
            self._entries.append(entry)
            return
        for index, existing in enumerate(self._entries):
            if existing.name == before:
                self._entries.insert(index, entry)
                return
        raise MatcherTableError(f"Cannot insert before unknown matcher '{before}'")

    def register(
        self,
        name: str,
        builder: type[Component],
        matcher: Optional[Matcher] = None,
        *,
        before: Optional[str] = None,
    ) -> None:
        """Add an entry, by default at the end of the table.

        Parameters
        ----------
        name : str
            Unique entry name
        builder : type[Component]
            Component class to build
        matcher : callable, optional
            Defaults to ``builder.node_matches``
        before : str, optional
            Insert ahead of this existing entry

        Raises
        ------
        MatcherTableError
            If the name is taken or the entry is invalid

        """
        self._append(MatcherEntry(name, matcher or builder.node_matches, builder), before)
        logger.debug(f"Registered matcher: {name}")

    def replace(self, name: str, builder: type[Component], matcher: Optional[Matcher] = None) -> None:
        """Swap the builder (and matcher) of an existing entry, keeping its position."""
        entry = MatcherEntry(name, matcher or builder.node_matches, builder)
        self._validate(entry)
        for index, existing in enumerate(self._entries):
            if existing.name == name:
                self._entries[index] = entry
                logger.debug(f"Replaced matcher: {name}")
                return
        raise MatcherTableError(f"Cannot replace unknown matcher '{name}'")

    def remove(self, name: str) -> bool:
        """Remove an entry; returns False when there was none."""
        before = len(self._entries)
        self._entries = [entry for entry in self._entries if entry.name != name]
        removed = len(self._entries) < before
        if removed:
            logger.debug(f"Removed matcher: {name}")
        return removed


def default_matcher_table() -> MatcherTable:
    """Return a new table with every built-in kind in match order."""
    entries = [
        MatcherEntry("aside", Aside.node_matches, Aside),
        MatcherEntry("gallery", Gallery.node_matches, Gallery),
        MatcherEntry("tweet", Tweet.node_matches, Tweet),
        MatcherEntry("facebook", FacebookPost.node_matches, FacebookPost),
        MatcherEntry("instagram", Instagram.node_matches, Instagram),
        MatcherEntry("tiktok", TikTok.node_matches, TikTok),
        MatcherEntry("table", Table.node_matches, Table),
        MatcherEntry("iframe", EmbedWebVideo.node_matches, EmbedWebVideo),
        MatcherEntry("embed", EmbedGeneric.node_matches, EmbedGeneric),
        MatcherEntry("img", Image.node_matches, Image),
        MatcherEntry("video", Video.node_matches, Video),
        MatcherEntry("audio", Audio.node_matches, Audio),
        MatcherEntry("heading", Heading.node_matches, Heading),
        MatcherEntry("blockquote", Quote.node_matches, Quote),
        MatcherEntry("p", _tag_matcher("p", Body), Body),
        MatcherEntry("ol", _tag_matcher("ol", Body), Body),
        MatcherEntry("ul", _tag_matcher("ul", Body), Body),
        MatcherEntry("pre", _tag_matcher("pre", Body), Body),
        MatcherEntry("hr", Divider.node_matches, Divider),
        MatcherEntry("button", LinkButton.node_matches, LinkButton),
        MatcherEntry("title", Title.node_matches, Title),
        MatcherEntry("byline", Byline.node_matches, Byline),
        MatcherEntry("intro", Intro.node_matches, Intro),
        MatcherEntry("recipe", Recipe.node_matches, Recipe),
    ]
    return MatcherTable(entries)


class ComponentFactory:
    """Builds components from markup for one compile.

    Parameters
    ----------
    context : CompileContext
        Compile state; the factory installs itself as ``context.factory``
    table : MatcherTable, optional
        Matcher table; the default table when omitted. The
        ``"initialize_components"`` hooks receive its entries and may return
        a modified list.

    """

    def __init__(self, context: CompileContext, table: Optional[MatcherTable] = None) -> None:
        """Initialize the factory."""
        self.context = context
        base = table if table is not None else default_matcher_table()
        entries = context.hooks.execute_hooks(INITIALIZE_COMPONENTS, base.entries, context.hook_context())
        if entries is None:
            raise MatcherTableError("An initialize_components hook removed the matcher table")
        self.table = MatcherTable(entries)
        self._depth = 0
        context.factory = self

    def get_component(self, name: str, html: str, parent: Optional[Component] = None) -> Optional[Component]:
        """Build the component registered as ``name`` from ``html``.

        Returns
        -------
        Component or None
            The component, or None when its build failed outside strict mode

        Raises
        ------
        UnknownComponentError
            If no entry is named ``name``
        ComponentBuildError
            If the build failed and ``settings.strict`` is set

        """
        entry = self.table.get(name)
        if entry is None:
            raise UnknownComponentError(name)

        try:
            return entry.builder(html, self.context, parent)
        except (ConfigurationError, MarkupDepthError):
            raise
        except Exception as e:
            if self.context.settings.strict:
                raise ComponentBuildError(name, original_error=e) from e
            logger.error(f"Failed to build {name} component: {e}", exc_info=True)
            self.context.diagnostics.log_error(COMPONENT_BUILD_ERRORS, name)
            return None

    def get_components_from_node(self, node: object, parent: Optional[Component] = None) -> list[Component]:
        """Return the components for ``node``, in document order.

        Raises
        ------
        MarkupDepthError
            If element nesting exceeds ``settings.max_depth``

        """
        # Text, comments, doctypes and other non-element nodes
        if not isinstance(node, Tag):
            return []

        limit = self.context.settings.max_depth
        if self._depth >= limit:
            raise MarkupDepthError(self._depth + 1, limit)

        self._depth += 1
        try:
            return self._components_for_element(node, parent)
        finally:
            self._depth -= 1

    def _components_for_element(self, node: Tag, parent: Optional[Component]) -> list[Component]:
        for entry in self.table:
            matched = entry.matcher(node, self.context)
            if not matched:
                continue

            if isinstance(matched, list):
                built = [self.get_component(fragment.name, fragment.html, parent) for fragment in matched]
                return [component for component in built if component is not None]

            component = self.get_component(entry.name, str(matched), parent)
            return [component] if component is not None else []

        result: list[Component] = []
        for child in list(node.children):
            result.extend(self.get_components_from_node(child, parent))

        if not result and node.name != DEFAULT_TEXT_WRAPPER_TAG:
            self.context.diagnostics.log_error(COMPONENT_ERRORS, node.name)

        return result

    def get_components_from_html(self, markup: str, parent: Optional[Component] = None) -> list[Component]:
        """Parse ``markup`` and build components from its top-level nodes."""
        soup = parse_fragment(markup, self.context.settings.html_parser)
        root = soup.body if soup.body is not None else soup
        components: list[Component] = []
        for node in list(root.children):
            components.extend(self.get_components_from_node(node, parent))
        return components


__all__ = [
    "ComponentFactory",
    "MatchedFragment",
    "Matcher",
    "MatcherEntry",
    "MatcherTable",
    "default_matcher_table",
]
