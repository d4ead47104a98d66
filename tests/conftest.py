"""Pytest configuration and shared fixtures for the newsformat test suite.

This module provides the settings, theme and compile context fixtures used
across the unit and integration tests. Contexts built here never touch the
network: recipe schema is only looked up in the article markup unless a
test supplies its own fetcher.
"""

import os
from typing import Any, Callable, Optional

import pytest
from hypothesis import Phase, Verbosity
from hypothesis import settings as hypothesis_settings

from newsformat.context import CompileContext
from newsformat.factory import ComponentFactory
from newsformat.metadata import ArticleMetadata
from newsformat.settings import ExportSettings
from newsformat.theme import Theme
from newsformat.utils.recipe_schema import RecipeSchemaProvider

# Register custom Hypothesis profiles
hypothesis_settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
hypothesis_settings.register_profile("dev", max_examples=20)
hypothesis_settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
hypothesis_settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def settings() -> ExportSettings:
    """Default export settings."""
    return ExportSettings()


@pytest.fixture
def theme() -> Theme:
    """The default theme."""
    return Theme()


@pytest.fixture
def build_context() -> Callable[..., CompileContext]:
    """Factory for compile contexts with a factory attached and no network access.

    Keyword arguments are ``ExportSettings`` fields; ``theme``, ``metadata``,
    ``hooks``, ``spec_store`` and ``fetcher`` are passed through.
    """

    def _build(
        theme: Optional[Theme] = None,
        metadata: Optional[ArticleMetadata] = None,
        fetcher: Optional[Callable[[str], Optional[str]]] = None,
        hooks: Any = None,
        spec_store: Any = None,
        table: Any = None,
        **settings_kwargs: Any,
    ) -> CompileContext:
        context = CompileContext.create(
            settings=ExportSettings(**settings_kwargs),
            theme=theme,
            metadata=metadata,
            hooks=hooks,
            spec_store=spec_store,
            schema_provider=RecipeSchemaProvider(fetcher=fetcher),
        )
        ComponentFactory(context, table)
        return context

    return _build


@pytest.fixture
def context(build_context) -> CompileContext:
    """A compile context with default settings and theme."""
    return build_context()
