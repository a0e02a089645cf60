"""
Tests for HTML escaping of interpolated callback values.
"""

import html
import itertools
import re

import pytest

from callback_server.utils.html import escape_html

# "&" not starting one of the five entities we emit
_BARE_AMPERSAND = re.compile(r"&(?!amp;|lt;|gt;|quot;|#039;)")


def test_escapes_each_special_character():
    assert escape_html("&") == "&amp;"
    assert escape_html("<") == "&lt;"
    assert escape_html(">") == "&gt;"
    assert escape_html('"') == "&quot;"
    assert escape_html("'") == "&#039;"


def test_ampersand_is_escaped_first():
    """Existing entities are escaped again, not passed through."""
    assert escape_html("&lt;") == "&amp;lt;"
    assert escape_html("<&>") == "&lt;&amp;&gt;"


def test_script_tag_is_neutralised():
    escaped = escape_html("<script>alert(1)</script>")

    assert escaped == "&lt;script&gt;alert(1)&lt;/script&gt;"
    assert "<script>" not in escaped


@pytest.mark.parametrize(
    "value",
    ["ABC123", "4/0AfJohXk-abc_DEF", "", "plain text with spaces", "ünïcødé ✓"],
)
def test_safe_values_pass_through_unchanged(value):
    assert escape_html(value) == value


def test_none_escapes_to_empty_string():
    assert escape_html(None) == ""


def test_non_string_values_are_stringified():
    assert escape_html(42) == "42"
    assert escape_html(["<a>", "b"]) == "[&#039;&lt;a&gt;&#039;, &#039;b&#039;]"


def test_round_trip_over_escape_set():
    """Escaped text never contains raw special characters and unescapes exactly."""
    alphabet = "&<>\"'x"
    for length in range(1, 4):
        for chars in itertools.product(alphabet, repeat=length):
            value = "".join(chars)
            escaped = escape_html(value)

            assert not set("<>\"'") & set(escaped), value
            assert not _BARE_AMPERSAND.search(escaped), value
            assert html.unescape(escaped) == value
