import pytest

from headstack import escapeCss, escapeHtmlAttr


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("foo", "foo"),
        ("a,b.c-d_e", "a,b.c-d_e"),
        ("", ""),
        ("/styles.css", "&#x2F;styles.css"),
        ("foo bar", "foo&#x20;bar"),
        ("<b>bar</b>", "&lt;b&gt;bar&lt;&#x2F;b&gt;"),
        ('"&', "&quot;&amp;"),
        ("bar=baz", "bar&#x3D;baz"),
        ("\t", "&#x09;"),
        ("abc\n", "abc&#x0A;"),
        ("a,b.c\n", "a,b.c&#x0A;"),
        ("\x00", "&#xFFFD;"),
        ("\x7f", "&#xFFFD;"),
        ("\xe9", "&#xE9;"),
        ("€", "&#x20AC;"),
    ],
)
def test_escape_html_attr(raw, expected):
    assert escapeHtmlAttr(raw) == expected


def test_escape_html_attr_stringifies():
    assert escapeHtmlAttr(12) == "12"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("", ""),
        ("123", "123"),
        ("abc", "abc"),
        ("<b>bar</b>", r"\3C b\3E bar\3C \2F b\3E "),
        ("a b", r"a\20 b"),
        ("\xe9", r"\E9 "),
        ("12px", r"12px"),
    ],
)
def test_escape_css(raw, expected):
    assert escapeCss(raw) == expected


def test_escape_css_non_ascii_digits_are_escaped():
    assert escapeCss("²") == r"\B2 "
