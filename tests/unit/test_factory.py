#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the matcher table and the component factory."""

import pytest

from newsformat.components import Body, Component, Divider, MatchedFragment
from newsformat.exceptions import (
    ComponentBuildError,
    MarkupDepthError,
    MatcherTableError,
    SpecNotRegisteredError,
    UnknownComponentError,
)
from newsformat.factory import ComponentFactory, MatcherEntry, MatcherTable, default_matcher_table
from newsformat.hooks import INITIALIZE_COMPONENTS, HookManager

DEFAULT_NAMES = [
    "aside",
    "gallery",
    "tweet",
    "facebook",
    "instagram",
    "tiktok",
    "table",
    "iframe",
    "embed",
    "img",
    "video",
    "audio",
    "heading",
    "blockquote",
    "p",
    "ol",
    "ul",
    "pre",
    "hr",
    "button",
    "title",
    "byline",
    "intro",
    "recipe",
]


class ExplodingComponent(Component):
    """Component whose build always fails."""

    name = "exploding"

    def register_specs(self):
        pass

    def build(self, html):
        raise RuntimeError("boom")


class MisconfiguredComponent(Component):
    """Component that asks for a spec it never registered."""

    name = "misconfigured"

    def register_specs(self):
        pass

    def build(self, html):
        self.register_json("json")


def match_marquee(node, context):
    return node if node.name == "marquee" else None


@pytest.mark.unit
class TestMatcherTable:
    """Tests for MatcherTable."""

    def test_default_order(self):
        """Test the built-in kinds are matched in a fixed order."""
        assert default_matcher_table().names == DEFAULT_NAMES

    def test_default_tables_are_independent(self):
        """Test each call returns a new table."""
        first = default_matcher_table()
        first.remove("aside")

        assert "aside" in default_matcher_table()

    def test_duplicate_names_rejected(self):
        """Test names must be unique."""
        entry = MatcherEntry("hr", Divider.node_matches, Divider)
        with pytest.raises(MatcherTableError, match="Duplicate"):
            MatcherTable([entry, entry])

    def test_non_callable_matcher_rejected(self):
        """Test matchers must be callable."""
        with pytest.raises(MatcherTableError, match="not callable"):
            MatcherTable([MatcherEntry("hr", "hr", Divider)])

    def test_builder_must_be_component(self):
        """Test builders must be Component subclasses."""
        with pytest.raises(MatcherTableError, match="Component subclass"):
            MatcherTable([MatcherEntry("hr", Divider.node_matches, dict)])

    def test_register_appends(self):
        """Test registering without a position appends."""
        table = default_matcher_table()
        table.register("marquee", ExplodingComponent, match_marquee)

        assert table.names[-1] == "marquee"
        assert table.get("marquee").builder is ExplodingComponent

    def test_register_defaults_to_node_matches(self):
        """Test the builder's own matcher is used when none is given."""
        table = MatcherTable()
        table.register("hr", Divider)

        assert table.get("hr").matcher == Divider.node_matches

    def test_register_before(self):
        """Test inserting ahead of an existing entry."""
        table = default_matcher_table()
        table.register("marquee", ExplodingComponent, match_marquee, before="p")

        names = table.names
        assert names.index("marquee") == names.index("p") - 1

    def test_register_before_unknown(self):
        """Test inserting before a missing entry fails."""
        table = default_matcher_table()
        with pytest.raises(MatcherTableError, match="unknown"):
            table.register("marquee", ExplodingComponent, match_marquee, before="blink")

    def test_replace_keeps_position(self):
        """Test replacing swaps the builder in place."""
        table = default_matcher_table()
        position = table.names.index("hr")
        table.replace("hr", ExplodingComponent)

        assert table.names.index("hr") == position
        assert table.get("hr").builder is ExplodingComponent

    def test_replace_unknown(self):
        """Test replacing a missing entry fails."""
        with pytest.raises(MatcherTableError):
            MatcherTable().replace("hr", Divider)

    def test_remove(self):
        """Test removing entries."""
        table = default_matcher_table()

        assert table.remove("hr") is True
        assert "hr" not in table
        assert table.remove("hr") is False
        assert len(table) == len(DEFAULT_NAMES) - 1


@pytest.mark.unit
class TestInitializeComponentsHook:
    """Tests for the matcher table hook."""

    def test_hook_extends_table(self, build_context):
        """Test hooks may add entries."""
        hooks = HookManager()

        def add_marquee(entries, hook_context):
            return [*entries, MatcherEntry("marquee", match_marquee, ExplodingComponent)]

        hooks.register_hook(INITIALIZE_COMPONENTS, add_marquee)
        context = build_context(hooks=hooks)

        assert context.factory.table.names[-1] == "marquee"

    def test_hook_removing_table_fails(self, build_context):
        """Test a hook returning None is a configuration error."""
        hooks = HookManager()
        hooks.register_hook(INITIALIZE_COMPONENTS, lambda entries, ctx: None)

        with pytest.raises(MatcherTableError):
            build_context(hooks=hooks)

    def test_hook_entries_are_validated(self, build_context):
        """Test invalid entries from hooks are rejected."""
        hooks = HookManager()
        hooks.register_hook(INITIALIZE_COMPONENTS, lambda entries, ctx: [*entries, "not an entry"])

        with pytest.raises(MatcherTableError):
            build_context(hooks=hooks)

    def test_factory_installs_itself(self, build_context):
        """Test the factory becomes the context's factory."""
        context = build_context()
        factory = ComponentFactory(context)

        assert context.factory is factory


@pytest.mark.unit
class TestComponentWalk:
    """Tests for walking markup into components."""

    def test_unmatched_element_is_reported(self, context):
        """Test an element nothing claims yields nothing and is logged."""
        components = context.factory.get_components_from_html("<marquee>hi</marquee>")

        assert components == []
        assert context.diagnostics.errors == {"component_errors": ["marquee"]}

    def test_unmatched_container_walks_children(self, context):
        """Test unclaimed containers are transparent."""
        components = context.factory.get_components_from_html("<div><p>Hello</p><marquee>x</marquee></div>")

        assert [c.name for c in components] == ["body"]
        assert context.diagnostics.errors == {"component_errors": ["marquee"]}

    def test_empty_paragraph_is_not_reported(self, context):
        """Test an empty paragraph yields nothing without an error."""
        assert context.factory.get_components_from_html("<p></p>") == []
        assert context.diagnostics.errors == {}

    def test_text_nodes_yield_nothing(self, context):
        """Test bare text is never matched by the factory."""
        assert context.factory.get_components_from_html("just text") == []
        assert context.diagnostics.errors == {}

    def test_document_order(self, context):
        """Test components are returned in document order."""
        components = context.factory.get_components_from_html("<h2>Title</h2><p>Text</p><hr>")

        assert [c.name for c in components] == ["heading", "body", "divider"]

    def test_fragments_are_built_separately(self, context):
        """Test a paragraph holding an image is split around it."""
        components = context.factory.get_components_from_html(
            '<p>Before<img src="https://example.com/a.jpg">After</p>'
        )

        assert [c.name for c in components] == ["body", "image", "body"]
        assert components[0].json["text"] == "<p>Before</p>"
        assert components[2].json["text"] == "<p>After</p>"

    def test_media_only_paragraph_falls_through(self, context):
        """Test a paragraph with no text is walked into its children."""
        components = context.factory.get_components_from_html('<p><img src="https://example.com/a.jpg"></p>')

        assert [c.name for c in components] == ["image"]
        assert context.diagnostics.errors == {}

    def test_matcher_may_return_descendant(self, context):
        """Test a matcher returning a nested node builds from that node."""
        components = context.factory.get_components_from_html(
            '<figure class="wp-block-table"><table><tr><td>1</td></tr></table><figcaption>x</figcaption></figure>'
        )

        assert [c.name for c in components] == ["table"]
        assert components[0].json["html"] == "<table><tr><td>1</td></tr></table>"

    def test_first_matcher_wins(self, build_context):
        """Test earlier table entries take precedence."""
        table = default_matcher_table()
        table.register("rule", Divider, lambda node, ctx: node if node.name == "p" else None, before="aside")
        context = build_context(table=table)

        components = context.factory.get_components_from_html("<p>Text</p>")

        assert [c.name for c in components] == ["divider"]

    def test_depth_limit(self, build_context):
        """Test nesting beyond max_depth raises."""
        context = build_context(max_depth=3)
        markup = "<div><div><div><div><p>deep</p></div></div></div></div>"

        with pytest.raises(MarkupDepthError) as exc_info:
            context.factory.get_components_from_html(markup)

        assert exc_info.value.depth == 4
        assert exc_info.value.limit == 3

    def test_depth_within_limit(self, build_context):
        """Test nesting up to max_depth is accepted."""
        context = build_context(max_depth=5)
        markup = "<div><div><div><div><p>deep</p></div></div></div></div>"

        assert [c.name for c in context.factory.get_components_from_html(markup)] == ["body"]

    def test_depth_counter_resets(self, build_context):
        """Test sibling subtrees do not accumulate depth."""
        context = build_context(max_depth=3)
        markup = "<div><div><p>a</p></div></div>" * 5

        assert len(context.factory.get_components_from_html(markup)) == 5


@pytest.mark.unit
class TestGetComponent:
    """Tests for building a single component."""

    def test_unknown_name(self, context):
        """Test names missing from the table raise."""
        with pytest.raises(UnknownComponentError) as exc_info:
            context.factory.get_component("blink", "<blink>x</blink>")

        assert exc_info.value.name == "blink"

    def test_builds_by_entry_name(self, context):
        """Test entry names map to their builders."""
        component = context.factory.get_component("ol", "<ol><li>one</li></ol>")

        assert isinstance(component, Body)
        assert component.json["text"] == "<ol><li>one</li></ol>"

    def test_failed_build_is_dropped(self, build_context):
        """Test failures are logged and recorded outside strict mode."""
        table = default_matcher_table()
        table.register("marquee", ExplodingComponent, match_marquee, before="aside")
        context = build_context(table=table)

        components = context.factory.get_components_from_html("<p>ok</p><marquee>x</marquee>")

        assert [c.name for c in components] == ["body"]
        assert context.diagnostics.errors == {"component_build_errors": ["marquee"]}

    def test_failed_build_raises_in_strict_mode(self, build_context):
        """Test strict mode turns failures into ComponentBuildError."""
        table = default_matcher_table()
        table.register("marquee", ExplodingComponent, match_marquee, before="aside")
        context = build_context(table=table, strict=True)

        with pytest.raises(ComponentBuildError) as exc_info:
            context.factory.get_components_from_html("<marquee>x</marquee>")

        assert exc_info.value.component == "marquee"
        assert isinstance(exc_info.value.original_error, RuntimeError)

    def test_configuration_errors_propagate(self, build_context):
        """Test missing specs are never swallowed."""
        table = default_matcher_table()
        table.register("marquee", MisconfiguredComponent, match_marquee)
        context = build_context(table=table)

        with pytest.raises(SpecNotRegisteredError):
            context.factory.get_components_from_html("<marquee>x</marquee>")

    def test_fragment_names_resolve_through_table(self, build_context):
        """Test fragments are built by the entry they name."""
        table = default_matcher_table()

        def split(node, ctx):
            if node.name != "marquee":
                return None
            return [MatchedFragment("hr", "<hr>"), MatchedFragment("p", "<p>x</p>")]

        table.register("marquee", ExplodingComponent, split, before="aside")
        context = build_context(table=table)

        components = context.factory.get_components_from_html("<marquee>x</marquee>")

        assert [c.name for c in components] == ["divider", "body"]
