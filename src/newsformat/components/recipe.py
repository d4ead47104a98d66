#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/newsformat/components/recipe.py
"""Recipes built from JSON-LD Recipe schema.

A recipe element (marked with the configured recipe class) is matched to a
schema.org ``Recipe`` item, first among the JSON-LD scripts in the article
itself and then in the ``<head>`` of the article's public page. The item's
fields fill a prunable template, so any field the schema lacks removes the
objects that would have displayed it.

When schema output is disabled, the recipe element's children are built as
ordinary subcomponents inside a bare recipe wrapper instead.
"""

from __future__ import annotations

import html as _html
import logging
import re
from typing import TYPE_CHECKING, Any, Optional

from bs4.element import Tag

from newsformat.components.base import Component, MatchResult
from newsformat.constants import DARK_MODE_CONDITIONS
from newsformat.hooks import RECIPE_SCHEMA_PERMALINK
from newsformat.utils.durations import readable_duration
from newsformat.utils.html import first_element, node_has_class

if TYPE_CHECKING:
    from newsformat.context import CompileContext

logger = logging.getLogger(__name__)

_NON_DIGIT = re.compile(r"\D")

# Text style families registered by every schema-built recipe
RECIPE_TEXT_STYLES = ("body", "header2", "header3", "header4", "details")


def schema_image_url(image: Any) -> Optional[str]:
    """Return the URL of a schema ``image`` value.

    ``image`` may be an ImageObject, a list of URLs or ImageObjects, or a
    plain URL.

    Examples
    --------
        >>> schema_image_url({"@type": "ImageObject", "url": "https://x.test/a.jpg"})
        'https://x.test/a.jpg'
        >>> schema_image_url(["https://x.test/b.jpg"])
        'https://x.test/b.jpg'

    """
    if isinstance(image, dict):
        url = image.get("contentUrl") or image.get("url")
    elif isinstance(image, list) and image:
        url = image[0]
        if isinstance(url, dict):
            url = url.get("contentUrl") or url.get("url")
    else:
        url = image
    return url if isinstance(url, str) and url else None


def detail_paragraph(label: str, value: str) -> str:
    """A labelled line of the recipe details collection."""
    return f"<p><strong>{_html.escape(label)}</strong> {_html.escape(value)}</p>"


class Recipe(Component):
    """A recipe card: photo, title, details, ingredients and directions."""

    name = "recipe"
    label = "Recipe"
    parent_capable = True
    style_keys: dict[str, str]

    @classmethod
    def node_matches(cls, node: Tag, context: CompileContext) -> MatchResult:
        """Claim elements with the recipe class from the settings."""
        classname = context.settings.recipe_component_class
        if classname and node_has_class(node, classname):
            return node
        return None

    # ------------------------------------------------------------------
    # Specs
    # ------------------------------------------------------------------

    def recipe_text_style(self, prefix: str, *, link: bool = False, background: bool = False) -> dict[str, Any]:
        """Text style template for ``recipe_<prefix>_*`` theme values."""
        key = f"recipe_{prefix}"
        style: dict[str, Any] = {
            "textAlignment": "left",
            "fontName": f"#{key}_font#",
            "fontSize": f"#{key}_size#",
            "tracking": f"#{key}_tracking#",
            "lineHeight": f"#{key}_line_height#",
            "textColor": f"#{key}_color#",
        }
        if background:
            style["backgroundColor"] = f"#{key}_background_color#"
        if link:
            style["linkStyle"] = {"textColor": f"#{key}_link_color#"}

        conditional: dict[str, Any] = {}
        if self.theme.has_value(f"{key}_color_dark"):
            conditional["textColor"] = f"#{key}_color_dark#"
        if background and self.theme.has_value(f"{key}_background_color_dark"):
            conditional["backgroundColor"] = f"#{key}_background_color_dark#"
        if link and self.theme.has_value(f"{key}_link_color_dark"):
            conditional["linkStyle"] = {"textColor": f"#{key}_link_color_dark#"}
        if conditional:
            style["conditional"] = {**conditional, "conditions": dict(DARK_MODE_CONDITIONS)}
        return style

    def register_specs(self) -> None:
        """Register the recipe template, its sub-templates and styles."""
        component_style: dict[str, Any] = {"backgroundColor": "#recipe_background_color#"}
        component_style.update(self.dark_mode(backgroundColor="recipe_background_color_dark"))

        def details_body(token: str) -> dict[str, Any]:
            return {
                "role": "body",
                "layout": "#recipe_details_layout#",
                "textStyle": "#recipe_details_style#",
                "text": token,
                "format": "html",
            }

        def heading2(text: str) -> dict[str, Any]:
            return {
                "role": "heading2",
                "layout": "#recipe_header2_layout#",
                "textStyle": "#recipe_header2_style#",
                "text": text,
                "format": "html",
            }

        self.register_spec(
            "json",
            "JSON",
            {
                "role": "recipe",
                "URL": "#url#",
                "layout": {"margin": {"top": 5, "bottom": 5}},
                "style": component_style,
                "components": [
                    {
                        "role": "photo",
                        "layout": {"margin": {"top": 0, "bottom": 12}},
                        "URL": "#recipe_photo_url#",
                        "caption": {
                            "text": "#recipe_photo_caption#",
                            "format": "html",
                            "textStyle": self.recipe_text_style("caption", link=True),
                        },
                    },
                    {
                        "role": "container",
                        "layout": {"padding": {"left": 12, "right": 12}},
                        "components": [
                            {
                                "role": "title",
                                "layout": {"margin": {"top": 8, "bottom": 12}},
                                "textStyle": self.recipe_text_style("title"),
                                "text": "#recipe_title#",
                                "format": "html",
                            },
                            heading2("Recipe Information"),
                            {
                                "role": "container",
                                "layout": {
                                    "columnSpan": 4,
                                    "columnStart": 0,
                                    "margin": {"bottom": 10, "top": 24},
                                    "padding": {"left": 0, "right": 0, "top": 10, "bottom": 0},
                                },
                                "contentDisplay": {
                                    "type": "collection",
                                    "gutter": "20",
                                    "rowSpacing": "10",
                                    "alignment": "left",
                                    "minimumWidth": 200,
                                },
                                "components": [
                                    details_body("#recipe_yield#"),
                                    details_body("#recipe_prep_time#"),
                                    details_body("#recipe_cook_time#"),
                                    details_body("#recipe_total_time#"),
                                    details_body("#recipe_calories_per_serving#"),
                                ],
                            },
                            {
                                "role": "divider",
                                "layout": {"margin": {"top": 10, "bottom": 30}},
                                "stroke": {"width": 1, "style": "solid", "color": "#000"},
                            },
                            {
                                "role": "section",
                                "components": [
                                    {
                                        "role": "container",
                                        "components": [
                                            {
                                                "role": "container",
                                                "layout": {"margin": {"bottom": 20, "top": 20}},
                                                "components": [
                                                    heading2("Ingredients"),
                                                    {
                                                        "role": "body",
                                                        "layout": "#recipe_body_layout#",
                                                        "textStyle": "#recipe_body_style#",
                                                        "text": "#recipe_ingredients#",
                                                        "format": "html",
                                                    },
                                                ],
                                            },
                                            {
                                                "role": "container",
                                                "components": [
                                                    heading2("Directions"),
                                                    {
                                                        "role": "container",
                                                        "components": "#recipe_instructions#",
                                                    },
                                                ],
                                            },
                                        ],
                                    },
                                ],
                            },
                        ],
                    },
                ],
            },
            prunable=True,
        )

        self.register_spec("recipe-body-layout", "Recipe Body Layout", {"margin": {"bottom": 10}})
        self.register_spec(
            "recipe-body-style",
            "Recipe Body Text Style",
            self.recipe_text_style("body", link=True, background=True),
        )

        for level in (2, 3, 4):
            self.register_spec(
                f"recipe-header{level}-layout",
                f"Recipe Header {level} Layout",
                {"margin": {"top": 6, "bottom": 6}},
            )
            self.register_spec(
                f"recipe-header{level}-style",
                f"Recipe Header {level} Text Style",
                self.recipe_text_style(f"header{level}"),
            )

        self.register_spec("recipe-details-layout", "Recipe Details Layout", {"margin": {"bottom": 10}})
        self.register_spec(
            "recipe-details-style",
            "Recipe Details Text Style",
            self.recipe_text_style("details", link=True, background=True),
        )

        self.register_spec(
            "recipe-section-json",
            "JSON for a Section of Recipe Instructions",
            {
                "role": "container",
                "components": [
                    {
                        "role": "heading3",
                        "layout": "#recipe_header3_layout#",
                        "textStyle": "#recipe_header3_style#",
                        "text": "#recipe_section_name#",
                        "format": "html",
                    },
                    {
                        "role": "container",
                        "components": "#components#",
                    },
                ],
            },
            prunable=True,
        )

        for spec_name, label, heading_role, level in (
            ("recipe-section-step-json", "JSON for a Step Within a Section of Recipe Instructions", "heading4", 4),
            ("recipe-step-json", "JSON for a Standalone Step in Recipe Instructions", "heading3", 3),
        ):
            self.register_spec(
                spec_name,
                label,
                {
                    "role": "container",
                    "components": [
                        {
                            "role": heading_role,
                            "layout": f"#recipe_header{level}_layout#",
                            "textStyle": f"#recipe_header{level}_style#",
                            "text": "#recipe_step_name#",
                            "format": "html",
                        },
                        {
                            "role": "photo",
                            "layout": {"margin": {"top": 6, "bottom": 12}},
                            "URL": "#recipe_step_photo_url#",
                        },
                        {
                            "role": "body",
                            "layout": "#recipe_body_layout#",
                            "textStyle": "#recipe_body_style#",
                            "text": "#recipe_step_text#",
                            "format": "html",
                        },
                    ],
                },
                prunable=True,
            )

        self.register_spec(
            "wrapper-only-json",
            "JSON for a Wrapper Only",
            {
                "role": "recipe",
                "URL": "#url#",
                "components": "#components#",
            },
        )

    # ------------------------------------------------------------------
    # Build
    # ------------------------------------------------------------------

    def build(self, html: str) -> None:
        """Match the schema, then emit either the full card or a bare wrapper."""
        schema = self.matching_schema(html)
        if schema is None:
            logger.debug("No JSON-LD Recipe matches this recipe; skipping")
            return

        if not self.settings.recipe_component_use_schema:
            self.build_wrapper(html, schema)
            return

        self.style_keys = self.register_recipe_styles()

        photo_url = self.value_for("recipe_photo_url", schema)
        if photo_url:
            photo_url = self.maybe_bundle_source(photo_url)

        values = {
            token: self.value_for(token, schema)
            for token in (
                "url",
                "recipe_photo_caption",
                "recipe_title",
                "recipe_yield",
                "recipe_prep_time",
                "recipe_cook_time",
                "recipe_total_time",
                "recipe_calories_per_serving",
                "recipe_ingredients",
                "recipe_instructions",
            )
        }
        values["recipe_photo_url"] = photo_url
        values["recipe_background_color"] = self.theme.get_value("recipe_background_color")
        values["recipe_background_color_dark"] = self.theme.get_value("recipe_background_color_dark")
        values.update(self.recipe_style_values("caption"))
        values.update(self.recipe_style_values("title"))
        values.update(self.style_keys)
        self.register_json("json", values)

    def register_recipe_styles(self) -> dict[str, str]:
        """Register every recipe layout and text style; returns their keys by token name."""
        keys: dict[str, str] = {}
        for prefix in RECIPE_TEXT_STYLES:
            layout = f"recipe-{prefix}-layout"
            style = f"recipe-{prefix}-style"
            keys[f"recipe_{prefix}_layout"] = self.register_layout(layout, layout)
            keys[f"recipe_{prefix}_style"] = self.register_style(style, style, self.recipe_style_values(prefix))
        return keys

    def build_wrapper(self, html: str, schema: dict[str, Any]) -> None:
        """Wrap the recipe element's children, built as subcomponents."""
        assert self.context is not None and self.context.factory is not None
        element = first_element(html, self.settings.html_parser)
        components: list[dict[str, Any]] = []
        if element is not None:
            for child in list(element.children):
                for component in self.context.factory.get_components_from_node(child, self):
                    output = component.to_output()
                    if output is not None:
                        components.append(output)

        self.register_json("wrapper-only-json", {"url": self.value_for("url", schema), "components": components})

    def recipe_style_values(self, prefix: str) -> dict[str, Any]:
        """Theme values for one recipe text style family."""
        key = f"recipe_{prefix}"
        values: dict[str, Any] = {
            f"{key}_font": self.theme.get_value(f"{key}_font"),
            f"{key}_size": self.theme.get_int(f"{key}_size"),
            f"{key}_line_height": self.theme.get_int(f"{key}_line_height"),
            f"{key}_tracking": self.theme.get_tracking(f"{key}_tracking"),
        }
        for suffix in (
            "color",
            "color_dark",
            "link_color",
            "link_color_dark",
            "background_color",
            "background_color_dark",
        ):
            values[f"{key}_{suffix}"] = self.theme.get_value(f"{key}_{suffix}")
        return values

    # ------------------------------------------------------------------
    # Schema
    # ------------------------------------------------------------------

    def matching_schema(self, recipe_html: str) -> Optional[dict[str, Any]]:
        """Return the Recipe item describing ``recipe_html``, or None."""
        assert self.context is not None
        provider = self.context.schema_provider
        if provider is None:
            return None

        permalink = self.context.hooks.execute_hooks(
            RECIPE_SCHEMA_PERMALINK,
            self.context.metadata.permalink,
            self.context.hook_context(self.name),
        )
        return provider.find(recipe_html, self.context.article_html, permalink)

    def value_for(self, token: str, schema: dict[str, Any]) -> Any:
        """Value of ``token`` from a Recipe item; None when the item lacks it."""
        if token == "url":
            url = schema.get("url")
            if isinstance(url, str) and url:
                return url
            if self.context is None:
                return ""
            return self.context.metadata.permalink or ""

        if token == "recipe_photo_url":
            return schema_image_url(schema.get("image"))

        if token == "recipe_photo_caption":
            image = schema.get("image")
            caption = image.get("caption") if isinstance(image, dict) else None
            return caption if isinstance(caption, str) and caption else None

        if token == "recipe_title":
            name = schema.get("name")
            return _html.escape(name) if isinstance(name, str) and name else None

        if token == "recipe_yield":
            value = schema.get("recipeYield")
            if isinstance(value, list) and value:
                value = value[0]
            if isinstance(value, (int, float)):
                value = str(value)
            return detail_paragraph("Yields:", value) if isinstance(value, str) and value else None

        if token in ("recipe_prep_time", "recipe_cook_time", "recipe_total_time"):
            field, label = {
                "recipe_prep_time": ("prepTime", "Prep Time:"),
                "recipe_cook_time": ("cookTime", "Cook Time:"),
                "recipe_total_time": ("totalTime", "Total Time:"),
            }[token]
            raw = schema.get(field)
            duration = readable_duration(raw) if isinstance(raw, str) else None
            return detail_paragraph(label, duration) if duration else None

        if token == "recipe_calories_per_serving":
            nutrition = schema.get("nutrition")
            calories = nutrition.get("calories") if isinstance(nutrition, dict) else None
            if not isinstance(calories, str):
                return None
            # Energy values read "<number> <unit>"
            return detail_paragraph("Calories/Serving:", _NON_DIGIT.sub("", calories))

        if token == "recipe_ingredients":
            ingredients = schema.get("recipeIngredient")
            if ingredients is None:
                return None
            if not isinstance(ingredients, list):
                ingredients = [ingredients]
            items = "".join(f"<li>{_html.escape(str(item))}</li>" for item in ingredients)
            return f"<ul>{items}</ul>"

        if token == "recipe_instructions":
            return self.instructions(schema.get("recipeInstructions"))

        return None

    def instructions(self, instructions: Any) -> Optional[list[dict[str, Any]]]:
        """Step and section JSON for ``recipeInstructions``.

        Instructions may be text, a list of text, or a list of HowToStep and
        HowToSection objects.
        """
        if isinstance(instructions, str):
            instructions = [instructions]
        if not isinstance(instructions, list) or not instructions:
            return None

        if isinstance(instructions[0], str):
            steps = [
                self.substitute("recipe-step-json", {**self.style_keys, "recipe_step_text": _html.escape(text)})
                for text in instructions
                if isinstance(text, str)
            ]
            return [step for step in steps if step is not None] or None

        if isinstance(instructions[0], dict):
            return self.how_to_steps(instructions, "recipe-step-json") or None

        return None

    def how_to_steps(self, items: list[Any], step_spec: str) -> list[dict[str, Any]]:
        """Recursively render HowToStep items, descending into HowToSections."""
        steps: list[dict[str, Any]] = []
        for item in items:
            if not isinstance(item, dict):
                continue
            item_type = item.get("@type")

            if item_type == "HowToSection":
                elements = item.get("itemListElement")
                if not isinstance(elements, list):
                    continue
                section = self.substitute(
                    "recipe-section-json",
                    {
                        **self.style_keys,
                        "recipe_section_name": item.get("name"),
                        "components": self.how_to_steps(elements, "recipe-section-step-json") or None,
                    },
                )
                if section is not None:
                    steps.append(section)

            elif item_type == "HowToStep":
                name = item.get("name")
                text = item.get("text")
                # Some plugins repeat the text as the name; show it only once
                if name == text:
                    name = None
                image = schema_image_url(item.get("image"))
                step = self.substitute(
                    step_spec,
                    {
                        **self.style_keys,
                        "recipe_step_name": name,
                        "recipe_step_photo_url": self.maybe_bundle_source(image) if image else None,
                        "recipe_step_text": text,
                    },
                )
                if step is not None:
                    steps.append(step)

        return steps


__all__ = ["Recipe", "detail_paragraph", "schema_image_url"]
