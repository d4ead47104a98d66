#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for schema-driven recipe components."""

import json

import pytest

from newsformat.components.recipe import detail_paragraph, schema_image_url
from newsformat.hooks import RECIPE_SCHEMA_PERMALINK, HookManager
from newsformat.metadata import ArticleMetadata
from newsformat.utils.recipe_schema import RecipeSchemaProvider, recipe_items

RECIPE_HTML = '<div class="recipe"><h2>Pancakes</h2><p>Fluffy and quick.</p></div>'
PERMALINK = "https://example.com/pancakes"


def make_schema(**overrides):
    schema = {
        "@context": "https://schema.org",
        "@type": "Recipe",
        "name": "Pancakes",
        "url": "https://example.com/recipes/pancakes",
        "image": {"@type": "ImageObject", "url": "https://example.com/pancakes.jpg", "caption": "Stacked high"},
        "recipeYield": "4",
        "prepTime": "PT10M",
        "cookTime": "PT20M",
        "nutrition": {"@type": "NutritionInformation", "calories": "250 kcal"},
        "recipeIngredient": ["1 cup flour", "2 eggs"],
        "recipeInstructions": [
            {"@type": "HowToStep", "name": "Mix", "text": "Mix everything."},
            {"@type": "HowToStep", "name": "Cook", "text": "Cook"},
        ],
    }
    schema.update(overrides)
    return {key: value for key, value in schema.items() if value is not None}


def schema_script(schema):
    return f'<script type="application/ld+json">{json.dumps(schema)}</script>'


def find_role(json_value, role):
    """Return every object with ``role`` anywhere in ``json_value``."""
    found = []
    if isinstance(json_value, dict):
        if json_value.get("role") == role:
            found.append(json_value)
        for value in json_value.values():
            found.extend(find_role(value, role))
    elif isinstance(json_value, list):
        for value in json_value:
            found.extend(find_role(value, role))
    return found


@pytest.fixture
def recipe_context(build_context):
    """Build a context whose article carries the given schema."""

    def _build(schema=None, **kwargs):
        kwargs.setdefault("recipe_component_class", "recipe")
        context = build_context(**kwargs)
        article = (schema_script(schema) if schema is not None else "") + RECIPE_HTML
        context.article_html = article
        return context

    return _build


def build_recipe(context):
    return context.factory.get_component("recipe", RECIPE_HTML)


@pytest.mark.unit
class TestSchemaHelpers:
    """Tests for schema lookup helpers."""

    @pytest.mark.parametrize(
        "image,expected",
        [
            ({"url": "https://x.test/a.jpg"}, "https://x.test/a.jpg"),
            ({"contentUrl": "https://x.test/c.jpg", "url": "https://x.test/a.jpg"}, "https://x.test/c.jpg"),
            (["https://x.test/b.jpg", "https://x.test/c.jpg"], "https://x.test/b.jpg"),
            ([{"url": "https://x.test/d.jpg"}], "https://x.test/d.jpg"),
            ("https://x.test/e.jpg", "https://x.test/e.jpg"),
            ([], None),
            (None, None),
        ],
    )
    def test_schema_image_url(self, image, expected):
        """Test the accepted image shapes."""
        assert schema_image_url(image) == expected

    def test_detail_paragraph_escapes(self):
        """Test detail values are escaped."""
        assert detail_paragraph("Yields:", "4 <b>") == "<p><strong>Yields:</strong> 4 &lt;b&gt;</p>"

    def test_recipe_items_in_graph(self):
        """Test Recipe items nested in a JSON-LD graph are found."""
        document = schema_script({"@graph": [{"@type": "WebPage"}, {"@type": ["Recipe"], "name": "Soup"}]})

        assert [item["name"] for item in recipe_items(document)] == ["Soup"]

    def test_recipe_items_skip_invalid_json(self):
        """Test broken scripts are ignored."""
        document = '<script type="application/ld+json">{"@type": "Recipe",</script>'

        assert recipe_items(document) == []

    def test_provider_requires_name_match(self):
        """Test schema is only used for the recipe it names."""
        provider = RecipeSchemaProvider(fetcher=None)
        article = schema_script(make_schema(name="Waffles"))

        assert provider.find(RECIPE_HTML, article) is None


@pytest.mark.unit
class TestRecipeComponent:
    """Tests for the Recipe component."""

    def test_full_recipe(self, recipe_context):
        """Test every schema field reaches the card."""
        context = recipe_context(make_schema())

        recipe = build_recipe(context)

        assert recipe.json["role"] == "recipe"
        assert recipe.json["URL"] == "https://example.com/recipes/pancakes"

        photo = recipe.json["components"][0]
        assert photo["role"] == "photo"
        assert photo["URL"] == "https://example.com/pancakes.jpg"
        assert photo["caption"]["text"] == "Stacked high"

        assert find_role(recipe.json, "title")[0]["text"] == "Pancakes"

        details = [body["text"] for body in find_role(recipe.json, "body") if body["layout"] == "recipe-details-layout"]
        assert details == [
            "<p><strong>Yields:</strong> 4</p>",
            "<p><strong>Prep Time:</strong> 10 mins</p>",
            "<p><strong>Cook Time:</strong> 20 mins</p>",
            "<p><strong>Calories/Serving:</strong> 250</p>",
        ]

        ingredients = [body["text"] for body in find_role(recipe.json, "body") if body["text"].startswith("<ul>")]
        assert ingredients == ["<ul><li>1 cup flour</li><li>2 eggs</li></ul>"]

    def test_steps(self, recipe_context):
        """Test step headings are dropped when they repeat the text."""
        recipe = build_recipe(recipe_context(make_schema()))

        headings = [h["text"] for h in find_role(recipe.json, "heading3")]
        step_texts = [
            body["text"] for body in find_role(recipe.json, "body") if body.get("textStyle") == "recipe-body-style"
        ]
        assert headings == ["Mix"]
        assert "Mix everything." in step_texts
        assert "Cook" in step_texts

    def test_text_instructions(self, recipe_context):
        """Test plain-text instructions become standalone steps."""
        schema = make_schema(recipeInstructions=["Stir & serve.", "Eat."])

        recipe = build_recipe(recipe_context(schema))

        step_texts = [
            body["text"] for body in find_role(recipe.json, "body") if body.get("textStyle") == "recipe-body-style"
        ]
        assert "Stir &amp; serve." in step_texts
        assert "Eat." in step_texts
        assert find_role(recipe.json, "heading3") == []

    def test_sections(self, recipe_context):
        """Test HowToSections nest their steps under a heading."""
        schema = make_schema(
            recipeInstructions=[
                {
                    "@type": "HowToSection",
                    "name": "Batter",
                    "itemListElement": [{"@type": "HowToStep", "name": "Whisk", "text": "Whisk eggs."}],
                }
            ]
        )

        recipe = build_recipe(recipe_context(schema))

        assert [h["text"] for h in find_role(recipe.json, "heading3")] == ["Batter"]
        assert [h["text"] for h in find_role(recipe.json, "heading4")] == ["Whisk"]

    def test_missing_fields_are_pruned(self, recipe_context):
        """Test absent schema fields remove what would display them."""
        schema = make_schema(image=None, nutrition=None, cookTime="soon", recipeYield=None)

        recipe = build_recipe(recipe_context(schema))

        assert find_role(recipe.json, "photo") == []
        details = [body["text"] for body in find_role(recipe.json, "body") if body["layout"] == "recipe-details-layout"]
        assert details == ["<p><strong>Prep Time:</strong> 10 mins</p>"]

    def test_unusable_instructions_are_pruned(self, recipe_context):
        """Test instructions with no renderable step leave no empty container."""
        schema = make_schema(recipeInstructions=[{"@type": "Unknown", "text": "?"}])

        recipe = build_recipe(recipe_context(schema))

        containers = find_role(recipe.json, "container")
        assert all(container.get("components") != [] for container in containers)
        directions = [
            container
            for container in containers
            if any(child.get("text") == "Directions" for child in container.get("components", []))
        ]
        assert [child["role"] for child in directions[0]["components"]] == ["heading2"]

    def test_url_falls_back_to_permalink(self, recipe_context):
        """Test the article permalink is used when the schema has no URL."""
        context = recipe_context(make_schema(url=None), metadata=ArticleMetadata(permalink=PERMALINK))

        assert build_recipe(context).json["URL"] == PERMALINK

    def test_registers_styles(self, recipe_context):
        """Test recipe layouts and text styles are registered."""
        context = recipe_context(make_schema())

        build_recipe(context)

        for key in ("recipe-header2-layout", "recipe-header3-layout", "recipe-body-layout", "recipe-details-layout"):
            assert key in context.layouts
        for key in ("recipe-body-style", "recipe-header2-style", "recipe-details-style"):
            assert key in context.text_styles
        assert context.text_styles.get("recipe-body-style")["fontSize"] == 16

    def test_bundled_photo(self, recipe_context):
        """Test the recipe photo is bundled when remote images are off."""
        context = recipe_context(make_schema(), use_remote_images=False)

        recipe = build_recipe(context)

        assert recipe.json["components"][0]["URL"] == "bundle://pancakes.jpg"
        assert "pancakes.jpg" in context.assets.sources

    def test_no_schema(self, recipe_context):
        """Test recipes without schema produce nothing."""
        assert build_recipe(recipe_context()).json is None

    def test_wrapper_only(self, recipe_context):
        """Test children are wrapped when schema output is off."""
        context = recipe_context(make_schema(), recipe_component_use_schema=False)

        recipe = build_recipe(context)

        assert recipe.json["role"] == "recipe"
        assert recipe.json["URL"] == "https://example.com/recipes/pancakes"
        assert [c["role"] for c in recipe.json["components"]] == ["heading2", "body"]
        assert "recipe-subcomponent-body-layout" in context.layouts
        assert "recipe-subcomponent-heading-layout" in context.layouts

    def test_wrapper_requires_schema(self, recipe_context):
        """Test the wrapper is not built without matching schema."""
        context = recipe_context(recipe_component_use_schema=False)

        assert build_recipe(context).json is None


@pytest.mark.unit
class TestRecipeSchemaFetching:
    """Tests for schema discovery through the article's public page."""

    @pytest.fixture
    def fetched(self):
        return []

    @pytest.fixture
    def fetcher(self, fetched):
        page = f"<html><head>{schema_script(make_schema())}</head><body></body></html>"

        def _fetch(url):
            fetched.append(url)
            return page

        return _fetch

    def test_fetches_permalink_once(self, build_context, fetcher, fetched):
        """Test the page is fetched once per compile."""
        context = build_context(
            fetcher=fetcher,
            metadata=ArticleMetadata(permalink=PERMALINK),
            recipe_component_class="recipe",
        )
        context.article_html = RECIPE_HTML

        first = build_recipe(context)
        second = build_recipe(context)

        assert first.json["role"] == "recipe"
        assert second.json["role"] == "recipe"
        assert fetched == [PERMALINK]

    def test_article_schema_skips_fetch(self, build_context, fetcher, fetched):
        """Test schema in the article avoids the network."""
        context = build_context(
            fetcher=fetcher,
            metadata=ArticleMetadata(permalink=PERMALINK),
            recipe_component_class="recipe",
        )
        context.article_html = schema_script(make_schema()) + RECIPE_HTML

        build_recipe(context)

        assert fetched == []

    def test_permalink_hook(self, build_context, fetcher, fetched):
        """Test hooks can redirect the fetched URL."""
        hooks = HookManager()
        hooks.register_hook(RECIPE_SCHEMA_PERMALINK, lambda url, ctx: url + "?amp=0")
        context = build_context(
            fetcher=fetcher,
            hooks=hooks,
            metadata=ArticleMetadata(permalink=PERMALINK),
            recipe_component_class="recipe",
        )
        context.article_html = RECIPE_HTML

        build_recipe(context)

        assert fetched == [PERMALINK + "?amp=0"]

    def test_failed_fetch_means_no_schema(self, build_context):
        """Test a fetcher returning None yields no recipe."""
        context = build_context(
            fetcher=lambda url: None,
            metadata=ArticleMetadata(permalink=PERMALINK),
            recipe_component_class="recipe",
        )
        context.article_html = RECIPE_HTML

        assert build_recipe(context).json is None

    def test_no_permalink_no_fetch(self, build_context, fetcher, fetched):
        """Test nothing is fetched without a permalink."""
        context = build_context(fetcher=fetcher, recipe_component_class="recipe")
        context.article_html = RECIPE_HTML

        assert build_recipe(context).json is None
        assert fetched == []
