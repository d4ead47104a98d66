#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Component spec engine: templates, substitution, pruning and customization."""

from newsformat.specs.component_spec import ComponentSpec
from newsformat.specs.pruning import contains_unresolved, prune_unresolved
from newsformat.specs.store import InMemorySpecStore, SpecCustomizationStore
from newsformat.specs.template import (
    ListValue,
    MapValue,
    Scalar,
    TemplateValue,
    Token,
    compile_template,
    is_token,
    substitute,
    template_tokens,
)

__all__ = [
    "ComponentSpec",
    "InMemorySpecStore",
    "ListValue",
    "MapValue",
    "Scalar",
    "SpecCustomizationStore",
    "TemplateValue",
    "Token",
    "compile_template",
    "contains_unresolved",
    "is_token",
    "prune_unresolved",
    "substitute",
    "template_tokens",
]
