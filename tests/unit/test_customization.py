#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for bulk spec customization."""

import pytest

from newsformat.exceptions import SpecValidationError, UnknownComponentError
from newsformat.specs.customization import (
    get_component_specs,
    list_components,
    reset_component_specs,
    save_component_specs,
)
from newsformat.specs.store import InMemorySpecStore


@pytest.mark.unit
class TestListComponents:
    """Tests for list_components."""

    def test_kinds_in_table_order(self):
        """Test every kind is listed once, in table order."""
        names = [listing.name for listing in list_components()]

        assert names[:3] == ["aside", "gallery", "tweet"]
        assert names.count("body") == 1
        assert names[-1] == "recipe"

    def test_parents_list_subcomponents(self):
        """Test parents host markup kinds that are not parents themselves."""
        listings = {listing.name: listing for listing in list_components()}

        aside_children = listings["aside"].subcomponents
        assert "body" in aside_children
        assert "image" in aside_children
        assert "aside" not in aside_children
        assert "recipe" not in aside_children
        assert "title" not in aside_children
        assert listings["recipe"].subcomponents == aside_children
        assert listings["image"].subcomponents == ()


@pytest.mark.unit
class TestGetComponentSpecs:
    """Tests for get_component_specs."""

    def test_image_specs(self):
        """Test the image kind exposes both caption branches and its layouts."""
        specs = get_component_specs("image")

        assert "json-without-caption" in specs
        assert "json-with-caption" in specs
        assert "non-anchored-full-bleed-image-with-caption" in specs

    def test_subcomponent_specs_are_namespaced(self):
        """Test specs of a subcomponent use the parent-qualified key."""
        specs = get_component_specs("body", parent="aside")

        assert specs["json"].component_key == "aside-subcomponent-body"

    def test_unknown_kind(self):
        """Test unknown kinds and parents raise UnknownComponentError."""
        with pytest.raises(UnknownComponentError):
            get_component_specs("marquee")
        with pytest.raises(UnknownComponentError):
            get_component_specs("body", parent="marquee")


@pytest.mark.unit
class TestSaveAndReset:
    """Tests for save_component_specs and reset_component_specs."""

    def test_save_returns_changed_labels(self):
        """Test only changed specs are reported."""
        store = InMemorySpecStore()
        custom = {"role": "divider", "stroke": {"color": "#divider_color#", "width": "#divider_width#"}}

        updated = save_component_specs("divider", {"json": custom, "unknown-spec": {}}, store)

        assert updated == ["JSON"]
        assert store.get("divider", "json", "Default") == custom
        assert save_component_specs("divider", {"json": custom}, store) == []

    def test_save_by_spec_key(self):
        """Test specs may be addressed by storage key."""
        store = InMemorySpecStore()

        updated = save_component_specs("divider", {"divider_layout": {"margin": {"top": 5}}}, store)

        assert updated == ["Layout"]

    def test_save_rejects_unknown_tokens(self):
        """Test a bad customization raises SpecValidationError."""
        with pytest.raises(SpecValidationError):
            save_component_specs("divider", {"json": {"role": "#nope#"}}, InMemorySpecStore())

    def test_reset(self):
        """Test reset deletes every customization of the kind for the theme."""
        store = InMemorySpecStore()
        save_component_specs("divider", {"json": {"role": "divider"}}, store, theme="Dark")

        assert reset_component_specs("divider", store, theme="Default") == []
        assert reset_component_specs("divider", store, theme="Dark") == ["JSON"]
        assert store.get("divider", "json", "Dark") is None
