#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the BeautifulSoup helpers."""

import pytest

from newsformat.exceptions import DependencyError
from newsformat.utils import html as html_utils
from newsformat.utils.html import (
    first_element,
    format_src_url,
    get_filename,
    get_iframe_from_node,
    is_text,
    node_has_class,
    parse_fragment,
    url_from_src,
)


@pytest.mark.unit
class TestHtmlHelpers:
    """Tests for newsformat.utils.html."""

    def test_exports_resolve(self):
        """Test every exported name is defined in the module."""
        for name in html_utils.__all__:
            assert callable(getattr(html_utils, name)), name

    def test_first_element_skips_text(self):
        """Test leading text is skipped when looking for the first element."""
        element = first_element("  text <p class='a b'>x</p>")

        assert element.name == "p"
        assert node_has_class(element, "b")
        assert not node_has_class(element, "c")
        assert not node_has_class(element, "")

    def test_is_text(self):
        """Test only non-blank text nodes count as text."""
        soup = parse_fragment("<div>Loose<p>x</p>   </div>")
        text, _, blank = soup.div.contents

        assert is_text(text)
        assert not is_text(blank)
        assert not is_text(soup.p)

    def test_iframe_from_node(self):
        """Test the iframe is found on or below the node."""
        wrapper = first_element('<figure><iframe src="https://example.com/v"></iframe></figure>')

        assert get_iframe_from_node(wrapper).name == "iframe"
        assert get_iframe_from_node(first_element("<p>x</p>")) is None
        assert get_iframe_from_node("text") is None

    @pytest.mark.parametrize(
        "url,expected",
        [
            ("//cdn.example.com/a.jpg", "https://cdn.example.com/a.jpg"),
            ("'https://example.com/a.jpg?w=1&amp;h=2'", "https://example.com/a.jpg?w=1&h=2"),
            ("javascript:alert(1)", ""),
            ("/relative.jpg", ""),
        ],
    )
    def test_format_src_url(self, url, expected):
        """Test source URLs are normalized or rejected."""
        assert format_src_url(url) == expected

    def test_url_from_src_prefers_src(self):
        """Test src attributes win over background images."""
        markup = '<div style="background-image: url(https://example.com/bg.jpg)"><img src="https://example.com/a.jpg"></div>'

        assert url_from_src(markup) == "https://example.com/a.jpg"
        assert url_from_src('<div style="background-image: url(https://example.com/bg.jpg)"></div>') == (
            "https://example.com/bg.jpg"
        )

    def test_get_filename(self):
        """Test the filename drops the query string."""
        assert get_filename("https://example.com/img/photo.jpg?w=300") == "photo.jpg"

    def test_unknown_parser(self):
        """Test a missing parser backend raises DependencyError."""
        with pytest.raises(DependencyError):
            parse_fragment("<p>x</p>", parser="no-such-parser")
