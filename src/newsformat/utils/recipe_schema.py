#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/newsformat/utils/recipe_schema.py
"""Discovery of JSON-LD Recipe items for recipe components.

A recipe element in the article is paired with the schema.org Recipe whose
``name`` occurs in the element's markup. The article markup itself is
searched first; failing that, the article's public page is fetched and its
``<head>`` searched. Fetching goes through an injectable page fetcher so
hosts can supply their own HTTP stack or disable network access entirely.
Fetch failures mean "no schema", never an exception.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Iterator, Optional

from bs4.element import Tag

from newsformat.constants import DEFAULT_FETCH_TIMEOUT, DEFAULT_HTML_PARSER, MAX_JSON_LD_SIZE_BYTES
from newsformat.utils.html import parse_fragment

logger = logging.getLogger(__name__)

JSON_LD_TYPE = "application/ld+json"

# (url) -> page markup, or None when the page could not be fetched
PageFetcher = Callable[[str], Optional[str]]


def fetch_page(url: str, timeout: float = DEFAULT_FETCH_TIMEOUT) -> Optional[str]:
    """Fetch ``url`` with httpx, returning the body of a 2xx response.

    Parameters
    ----------
    url : str
        Page to fetch
    timeout : float, default 10.0
        Request timeout in seconds

    Returns
    -------
    str or None
        Response text, or None for network errors and non-2xx statuses

    """
    import httpx

    try:
        response = httpx.get(url, timeout=timeout, follow_redirects=True)
    except httpx.HTTPError as e:
        logger.warning(f"Could not fetch {url} for recipe schema: {e}")
        return None

    if not 200 <= response.status_code < 300:
        logger.debug(f"Fetching {url} for recipe schema returned HTTP {response.status_code}")
        return None
    return response.text


def _iter_candidates(data: Any) -> Iterator[dict[str, Any]]:
    if isinstance(data, list):
        for item in data:
            yield from _iter_candidates(item)
    elif isinstance(data, dict):
        yield data
        if isinstance(data.get("@graph"), list):
            yield from _iter_candidates(data["@graph"])


def _is_recipe(item: dict[str, Any]) -> bool:
    item_type = item.get("@type")
    if isinstance(item_type, list):
        return "Recipe" in item_type
    return item_type == "Recipe"


def recipe_items(document: str, scope: str = "body", parser: str = DEFAULT_HTML_PARSER) -> list[dict[str, Any]]:
    """Return every JSON-LD Recipe item in ``document``.

    Parameters
    ----------
    document : str
        Markup to search
    scope : {"body", "head"}, default "body"
        Element to search within. Fragments without the element are searched
        whole when ``scope`` is ``"body"``.
    parser : str
        BeautifulSoup parser backend

    Returns
    -------
    list of dict
        Recipe items in document order

    """
    # Cheap checks before parsing
    if not document or JSON_LD_TYPE not in document or '"Recipe"' not in document:
        return []

    soup = parse_fragment(document, parser)
    root = soup.find(scope)
    if root is None:
        if scope != "body":
            return []
        root = soup

    items: list[dict[str, Any]] = []
    for script in root.find_all("script", attrs={"type": JSON_LD_TYPE}):
        if not isinstance(script, Tag):
            continue
        raw = script.string or script.get_text()
        if len(raw.encode("utf-8")) > MAX_JSON_LD_SIZE_BYTES:
            logger.warning("Skipping oversized JSON-LD script")
            continue
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.debug(f"Skipping invalid JSON-LD script: {e}")
            continue
        items.extend(item for item in _iter_candidates(data) if _is_recipe(item))
    return items


def is_recipe_item_for_html(item: dict[str, Any], markup: str) -> bool:
    """Best guess whether a Recipe item describes the recipe in ``markup``."""
    name = item.get("name")
    return isinstance(name, str) and len(name) > 0 and name in markup


class RecipeSchemaProvider:
    """Finds the Recipe schema matching a recipe element.

    Parameters
    ----------
    fetcher : callable or None, default fetch_page
        Used to fetch the article's public page. None disables fetching.
    parser : str
        BeautifulSoup parser backend

    """

    def __init__(self, fetcher: Optional[PageFetcher] = fetch_page, parser: str = DEFAULT_HTML_PARSER) -> None:
        """Initialize the provider."""
        self.fetcher = fetcher
        self.parser = parser
        self._pages: dict[str, Optional[str]] = {}

    def find(self, recipe_html: str, article_html: str = "", permalink: Optional[str] = None) -> Optional[dict[str, Any]]:
        """Return the Recipe item for ``recipe_html``, or None.

        Parameters
        ----------
        recipe_html : str
            Markup of the recipe element
        article_html : str
            Full article markup, searched first
        permalink : str, optional
            Public URL whose ``<head>`` is searched when the article has no
            matching item

        """
        for item in recipe_items(article_html, "body", self.parser):
            if is_recipe_item_for_html(item, recipe_html):
                return item

        if not permalink or self.fetcher is None:
            return None

        page = self._fetch(permalink)
        for item in recipe_items(page or "", "head", self.parser):
            if is_recipe_item_for_html(item, recipe_html):
                return item
        return None

    def _fetch(self, url: str) -> Optional[str]:
        # One fetch per page per compile, however many recipes it holds
        if url not in self._pages:
            assert self.fetcher is not None
            self._pages[url] = self.fetcher(url)
        return self._pages[url]


__all__ = ["PageFetcher", "RecipeSchemaProvider", "fetch_page", "is_recipe_item_for_html", "recipe_items"]
