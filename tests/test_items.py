import dataclasses

import pytest

from headstack import Item, ItemKind
from headstack import items as itemsMod
from headstack.items import isErr, isOk


def test_stylesheet_defaults():
    item = itemsMod.stylesheet("/a.css").unwrap()
    assert item.kind is ItemKind.Stylesheet
    assert dict(item.attributes) == {"rel": "stylesheet", "href": "/a.css", "type": "text/css", "media": "screen"}
    assert item.conditional is False


def test_stylesheet_media_list_is_joined():
    item = itemsMod.stylesheet("/a.css", ["screen", "print"]).unwrap()
    assert item.get("media") == "screen,print"


def test_stylesheet_rejects_non_string_href():
    res = itemsMod.stylesheet(12)
    assert isErr(res)
    assert "must be a string, got int" in res.err()


def test_link_drops_unknown_attributes_but_keeps_extras():
    item = itemsMod.link(
        {"rel": "icon", "href": "/favicon.ico", "bogus": "unused", "sizes": "16x16"},
        extras={"data-x": "y"},
    ).unwrap()
    assert "bogus" not in item.attributes
    assert item.get("sizes") == "16x16"
    assert dict(item.extras) == {"data-x": "y"}
    assert item.kind is ItemKind.GenericLink


@pytest.mark.parametrize(
    ("rel", "kind"),
    [
        ("stylesheet", ItemKind.Stylesheet),
        ("alternate", ItemKind.Alternate),
        ("prev", ItemKind.Prev),
        ("Next", ItemKind.Next),
        ("canonical", ItemKind.GenericLink),
        (None, ItemKind.GenericLink),
    ],
)
def test_link_kind_follows_rel(rel, kind):
    assert itemsMod.link({"rel": rel, "href": "/x"}).unwrap().kind is kind


def test_link_requires_href():
    res = itemsMod.link({"rel": "stylesheet"})
    assert isErr(res)
    assert res.err() == "link tags require an href"


def test_link_record_can_carry_conditional_and_extras():
    item = itemsMod.link(
        {"href": "/a.css", "conditionalStylesheet": "lt IE 7", "extras": {"id": "main"}},
        defaults=itemsMod.STYLESHEET_DEFAULTS,
    ).unwrap()
    assert item.conditional == "lt IE 7"
    assert item.get("id") == "main"
    assert item.kind is ItemKind.Stylesheet


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(None, False), (False, False), (True, True), ("", False), ("  ", False), ("ie6", "ie6")],
)
def test_normalize_conditional(raw, expected):
    assert itemsMod.normalizeConditional(raw).unwrap() == expected


def test_normalize_conditional_rejects_other_types():
    assert isErr(itemsMod.normalizeConditional(7))


def test_meta_keeps_only_known_modifiers():
    item = itemsMod.meta(
        "name",
        "keywords",
        "foo bar",
        {"lang": "us_en", "scheme": "foo", "bogus": "unused", "conditional": "lt IE 7"},
    ).unwrap()
    assert item.kind is ItemKind.MetaName
    assert item.metaType == "name"
    assert item.content == "foo bar"
    assert item.modifiers == {"lang": "us_en", "scheme": "foo"}
    assert item.conditional == "lt IE 7"
    assert "bogus" not in item.attributes


def test_meta_rejects_unknown_type():
    res = itemsMod.meta("bogus", "x", "y")
    assert isErr(res)
    assert res.err() == 'Invalid type "bogus" provided for meta'


def test_meta_requires_content():
    assert isErr(itemsMod.meta("name", "keywords", None))


def test_meta_from_record():
    item = itemsMod.metaFromRecord({"http-equiv": "Content-Type", "content": "text/html"}).unwrap()
    assert item.kind is ItemKind.MetaHttpEquiv
    assert item.get("http-equiv") == "Content-Type"


def test_meta_from_record_needs_exactly_one_type():
    assert isErr(itemsMod.metaFromRecord({"name": "a", "property": "b", "content": "c"}))
    assert isErr(itemsMod.metaFromRecord({"content": "c"}))


def test_meta_from_record_charset():
    item = itemsMod.metaFromRecord({"charset": "utf-8"}).unwrap()
    assert item.kind is ItemKind.MetaCharset
    assert item.metaType == "charset"


def test_coerce():
    link = itemsMod.stylesheet("/a.css").unwrap()
    assert itemsMod.coerce("link", link).unwrap() is link
    assert isErr(itemsMod.coerce("meta", link))
    assert isOk(itemsMod.coerce("link", {"href": "/b.css"}))
    res = itemsMod.coerce("link", "foo")
    assert isErr(res)
    assert "got str" in res.err()


def test_items_are_immutable():
    item = itemsMod.stylesheet("/a.css").unwrap()
    with pytest.raises(dataclasses.FrozenInstanceError):
        item.kind = ItemKind.Next  # type: ignore[misc]
    with pytest.raises(TypeError):
        item.attributes["href"] = "/b.css"  # type: ignore[index]


def test_identity():
    assert itemsMod.stylesheet("/a.css").unwrap().identity() == ("link", "stylesheet")
    assert itemsMod.meta("name", "keywords", "x").unwrap().identity() == ("meta", "name", "keywords")
    assert itemsMod.charset("utf-8").unwrap().identity() == ("meta", "charset")


def test_describe():
    assert itemsMod.meta("property", "og:title", "x").unwrap().describe() == 'meta property="og:title"'
    assert itemsMod.relLink("prev", "/1").unwrap().describe() == 'link rel="prev" href="/1"'


def test_check_doctype(doctypes):
    prop = itemsMod.meta("property", "og:title", "x").unwrap()
    assert isErr(itemsMod.checkDoctype(prop, doctypes.currentMode()))
    assert isOk(itemsMod.checkDoctype(prop, doctypes.set("XHTML1_RDFA")))
    assert isinstance(itemsMod.checkDoctype(prop, doctypes.currentMode()).unwrap(), Item)
