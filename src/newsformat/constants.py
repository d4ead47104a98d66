#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the newsformat library.

This module centralizes hardcoded values used across the compiler:

1. Type Definitions - Literal types and type aliases
2. Spec Tokens - token delimiters and detection pattern
3. Settings Defaults - defaults for ExportSettings
4. Theme Defaults - style parameters used when a theme omits a value
5. Diagnostics - categories reported to the error sink
"""

from __future__ import annotations

import re
from typing import Any, Literal

# =============================================================================
# Type Definitions
# =============================================================================

ComponentAlerts = Literal["none", "warn", "fail"]
HtmlParser = Literal["html.parser", "lxml", "html5lib"]
BodyOrientation = Literal["left", "center", "right"]
TextFormat = Literal["html", "markdown"]
GalleryType = Literal["gallery", "mosaic"]

COMPONENT_ALERT_MODES: tuple[str, ...] = ("none", "warn", "fail")
HTML_PARSERS: tuple[str, ...] = ("html.parser", "lxml", "html5lib")

# =============================================================================
# Spec Tokens
# =============================================================================

TOKEN_DELIMITER = "#"
TOKEN_PATTERN = re.compile(r"^#[A-Za-z0-9_]+#$")

# Key fragment used when a subcomponent namespaces its layouts, styles and specs
SUBCOMPONENT_KEY_FORMAT = "{parent}-subcomponent-{name}"

DARK_MODE_CONDITIONS: dict[str, Any] = {
    "minSpecVersion": "1.14",
    "preferredColorScheme": "dark",
}

# Layout keys assigned to anchored components, suffixed with "left" or "right"
ANCHOR_LAYOUT_PREFIX = "anchor-layout-"

# Prefix of the identifiers given to anchor targets
COMPONENT_UID_PREFIX = "component-"

# =============================================================================
# Settings Defaults
# =============================================================================

DEFAULT_USE_REMOTE_IMAGES = True
DEFAULT_FULL_BLEED_IMAGES = False
DEFAULT_HTML_SUPPORT = True
DEFAULT_ASIDE_COMPONENT_CLASS = ""
DEFAULT_RECIPE_COMPONENT_CLASS = ""
DEFAULT_RECIPE_COMPONENT_USE_SCHEMA = True
DEFAULT_COMPONENT_ALERTS: ComponentAlerts = "none"
DEFAULT_HTML_PARSER: HtmlParser = "html.parser"
DEFAULT_MAX_DEPTH = 256
DEFAULT_STRICT = False
DEFAULT_FETCH_TIMEOUT = 10.0

# Bundled assets are referenced through this scheme in component JSON
BUNDLE_URL_SCHEME = "bundle://"

# Size guard for JSON-LD scripts scanned during recipe schema discovery
MAX_JSON_LD_SIZE_BYTES = 1024 * 1024

# Tag wrapping plain text; an unmatched one is never reported as an error
DEFAULT_TEXT_WRAPPER_TAG = "p"

# Tags and attributes preserved in HTML-formatted component text
ALLOWED_HTML: dict[str, frozenset[str]] = {
    "a": frozenset({"href", "id"}),
    "aside": frozenset({"id"}),
    "b": frozenset({"id"}),
    "blockquote": frozenset({"id"}),
    "br": frozenset({"id"}),
    "code": frozenset({"id"}),
    "del": frozenset({"id"}),
    "em": frozenset({"id"}),
    "footer": frozenset({"id"}),
    "i": frozenset({"id"}),
    "li": frozenset({"id"}),
    "ol": frozenset({"id"}),
    "p": frozenset({"id"}),
    "pre": frozenset({"id"}),
    "s": frozenset({"id"}),
    "samp": frozenset({"id"}),
    "strong": frozenset({"id"}),
    "sub": frozenset({"id"}),
    "sup": frozenset({"id"}),
    "ul": frozenset({"id"}),
}

# =============================================================================
# Theme Defaults
# =============================================================================

DEFAULT_THEME_NAME = "Default"

DEFAULT_THEME_VALUES: dict[str, Any] = {
    # Layout geometry
    "layout_columns": 7,
    "body_column_span": 7,
    "body_orientation": "left",
    "alignment_offset": 2,
    "layout_margin": 100,
    "layout_gutter": 20,
    "layout_width": 1024,
    # Body
    "body_font": "AvenirNext-Regular",
    "body_size": 18,
    "body_line_height": 24,
    "body_tracking": 0,
    "body_color": "#4f4f4f",
    "body_color_dark": "",
    "body_link_color": "#428bca",
    "body_link_color_dark": "",
    "body_background_color": "#fafafa",
    # Headings
    "header1_font": "AvenirNext-Bold",
    "header2_font": "AvenirNext-Bold",
    "header3_font": "AvenirNext-Bold",
    "header4_font": "AvenirNext-Bold",
    "header5_font": "AvenirNext-Bold",
    "header6_font": "AvenirNext-Bold",
    "header1_size": 48,
    "header2_size": 32,
    "header3_size": 24,
    "header4_size": 21,
    "header5_size": 18,
    "header6_size": 16,
    "header_line_height": 28,
    "header1_tracking": 0,
    "header2_tracking": 0,
    "header3_tracking": 0,
    "header4_tracking": 0,
    "header5_tracking": 0,
    "header6_tracking": 0,
    "header1_color": "#333333",
    "header2_color": "#333333",
    "header3_color": "#333333",
    "header4_color": "#333333",
    "header5_color": "#333333",
    "header6_color": "#333333",
    "header1_color_dark": "",
    "header2_color_dark": "",
    "header3_color_dark": "",
    "header4_color_dark": "",
    "header5_color_dark": "",
    "header6_color_dark": "",
    # Captions
    "caption_font": "AvenirNext-Italic",
    "caption_size": 16,
    "caption_line_height": 24,
    "caption_tracking": 0,
    "caption_color": "#4f4f4f",
    "caption_color_dark": "",
    "caption_margin_bottom": 25,
    # Title, byline and intro
    "title_font": "AvenirNext-Bold",
    "title_size": 48,
    "title_line_height": 52,
    "title_tracking": 0,
    "title_color": "#333333",
    "title_color_dark": "",
    "byline_font": "AvenirNext-Medium",
    "byline_size": 13,
    "byline_line_height": 24,
    "byline_tracking": 0,
    "byline_color": "#7c7c7c",
    "byline_color_dark": "",
    "byline_format": "by {author} | {date}",
    "byline_date_format": "%b %d, %Y",
    "intro_font": "AvenirNext-Medium",
    "intro_size": 18,
    "intro_line_height": 24,
    "intro_tracking": 0,
    "intro_color": "#333333",
    "intro_color_dark": "",
    # Quotes
    "blockquote_font": "AvenirNext-Regular",
    "blockquote_size": 18,
    "blockquote_line_height": 24,
    "blockquote_tracking": 0,
    "blockquote_color": "#4f4f4f",
    "blockquote_color_dark": "",
    "blockquote_background_color": "#e1e1e1",
    "blockquote_background_color_dark": "",
    "blockquote_border_style": "solid",
    "blockquote_border_color": "#4f4f4f",
    "blockquote_border_width": 3,
    "pullquote_font": "AvenirNext-Bold",
    "pullquote_size": 48,
    "pullquote_line_height": 48,
    "pullquote_tracking": 0,
    "pullquote_color": "#53585f",
    "pullquote_color_dark": "",
    "pullquote_transform": "uppercase",
    # Divider
    "divider_color": "#e1e1e1",
    "divider_width": 1,
    # Aside
    "aside_background_color": "#e1e1e1",
    "aside_background_color_dark": "",
    "aside_border_color": "#4f4f4f",
    "aside_border_width": 1,
    # Tables
    "table_border_color": "#4f4f4f",
    "table_border_width": 1,
    "table_body_font": "AvenirNext-Regular",
    "table_body_size": 16,
    "table_body_color": "#4f4f4f",
    "table_body_background_color": "#fafafa",
    "table_header_font": "AvenirNext-Bold",
    "table_header_color": "#333333",
    "table_header_background_color": "#e1e1e1",
    # Link buttons
    "button_font_face": "AvenirNext-DemiBold",
    "button_font_size": 16,
    "button_color": "#ffffff",
    "button_color_dark": "",
    "button_background_color": "#0073aa",
    "button_background_color_dark": "",
    "button_border_color": "#0073aa",
    "button_border_width": 1,
    "button_border_radius": 25,
    # Galleries
    "gallery_type": "gallery",
    # Recipes
    "recipe_background_color": "#ffffff",
    "recipe_background_color_dark": "",
    "recipe_caption_font": "AvenirNext-Italic",
    "recipe_caption_size": 14,
    "recipe_caption_line_height": 20,
    "recipe_caption_tracking": 0,
    "recipe_caption_color": "#4f4f4f",
    "recipe_caption_color_dark": "",
    "recipe_caption_link_color": "#428bca",
    "recipe_caption_link_color_dark": "",
    "recipe_title_font": "AvenirNext-Bold",
    "recipe_title_size": 32,
    "recipe_title_line_height": 36,
    "recipe_title_tracking": 0,
    "recipe_title_color": "#333333",
    "recipe_title_color_dark": "",
    "recipe_body_font": "AvenirNext-Regular",
    "recipe_body_size": 16,
    "recipe_body_line_height": 22,
    "recipe_body_tracking": 0,
    "recipe_body_color": "#4f4f4f",
    "recipe_body_color_dark": "",
    "recipe_body_link_color": "#428bca",
    "recipe_body_link_color_dark": "",
    "recipe_body_background_color": "#ffffff",
    "recipe_body_background_color_dark": "",
    "recipe_header2_font": "AvenirNext-Bold",
    "recipe_header2_size": 24,
    "recipe_header2_line_height": 28,
    "recipe_header2_tracking": 0,
    "recipe_header2_color": "#333333",
    "recipe_header2_color_dark": "",
    "recipe_header3_font": "AvenirNext-Bold",
    "recipe_header3_size": 20,
    "recipe_header3_line_height": 24,
    "recipe_header3_tracking": 0,
    "recipe_header3_color": "#333333",
    "recipe_header3_color_dark": "",
    "recipe_header4_font": "AvenirNext-DemiBold",
    "recipe_header4_size": 18,
    "recipe_header4_line_height": 22,
    "recipe_header4_tracking": 0,
    "recipe_header4_color": "#333333",
    "recipe_header4_color_dark": "",
    "recipe_details_font": "AvenirNext-Regular",
    "recipe_details_size": 14,
    "recipe_details_line_height": 20,
    "recipe_details_tracking": 0,
    "recipe_details_color": "#4f4f4f",
    "recipe_details_color_dark": "",
    "recipe_details_link_color": "#428bca",
    "recipe_details_link_color_dark": "",
    "recipe_details_background_color": "#ffffff",
    "recipe_details_background_color_dark": "",
}

# =============================================================================
# Diagnostics
# =============================================================================

COMPONENT_ERRORS = "component_errors"
COMPONENT_BUILD_ERRORS = "component_build_errors"
