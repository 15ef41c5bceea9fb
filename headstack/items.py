from __future__ import annotations

import collections.abc
import dataclasses
import enum
from types import MappingProxyType

from result import Err, Ok, Result

from . import t

if t.TYPE_CHECKING:
    from .doctypes import Doctype


class ItemKind(enum.Enum):
    Stylesheet = "Stylesheet"
    Alternate = "Alternate"
    Prev = "Prev"
    Next = "Next"
    GenericLink = "GenericLink"
    MetaName = "MetaName"
    MetaHttpEquiv = "MetaHttpEquiv"
    MetaProperty = "MetaProperty"
    MetaItemprop = "MetaItemprop"
    MetaCharset = "MetaCharset"

    @property
    def family(self) -> str:
        return "meta" if self.value.startswith("Meta") else "link"


# Allowed <link> attributes, in the order they're rendered.
LINK_ATTRS = (
    "rel",
    "href",
    "type",
    "media",
    "title",
    "hreflang",
    "sizes",
    "as",
    "crossorigin",
    "integrity",
    "charset",
    "rev",
    "id",
    "itemprop",
)

# The attribute that says what a <meta> is about; exactly one per item.
META_TYPES = ("name", "http-equiv", "property", "itemprop")
META_MODIFIERS = ("lang", "scheme")

KIND_FOR_REL = {
    "stylesheet": ItemKind.Stylesheet,
    "alternate": ItemKind.Alternate,
    "prev": ItemKind.Prev,
    "next": ItemKind.Next,
}

KIND_FOR_META_TYPE = {
    "name": ItemKind.MetaName,
    "http-equiv": ItemKind.MetaHttpEquiv,
    "property": ItemKind.MetaProperty,
    "itemprop": ItemKind.MetaItemprop,
    "charset": ItemKind.MetaCharset,
}

STYLESHEET_DEFAULTS = {"rel": "stylesheet", "type": "text/css", "media": "screen"}


def isOk(x: t.Any) -> t.TypeGuard[Ok]:
    return isinstance(x, Ok)


def isErr(x: t.Any) -> t.TypeGuard[Err]:
    return isinstance(x, Err)


@dataclasses.dataclass(frozen=True)
class Item:
    """
    One queued <link> or <meta>.

    `attributes` only ever holds allow-listed names for the item's family;
    `extras` holds caller-chosen link attributes that are passed through as-is.
    `conditional` is False/True (never wraps) or an IE conditional-comment trigger.
    """

    kind: ItemKind
    attributes: t.AttrsT
    conditional: t.ConditionalT = False
    extras: t.AttrsT = dataclasses.field(default_factory=dict)

    def __post_init__(self) -> None:
        # Frozen, so the maps get swapped for read-only views.
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))
        object.__setattr__(self, "extras", MappingProxyType(dict(self.extras)))

    @property
    def family(self) -> str:
        return self.kind.family

    @property
    def metaType(self) -> str | None:
        if self.family != "meta":
            return None
        if self.kind is ItemKind.MetaCharset:
            return "charset"
        for type in META_TYPES:
            if type in self.attributes:
                return type
        return None

    @property
    def content(self) -> str | None:
        return self.attributes.get("content")

    @property
    def modifiers(self) -> dict[str, str]:
        return {k: self.attributes[k] for k in META_MODIFIERS if k in self.attributes}

    def get(self, name: str, default: str | None = None) -> str | None:
        if name in self.attributes:
            return self.attributes[name]
        return self.extras.get(name, default)

    def identity(self) -> tuple[str, ...]:
        # Items sharing an identity replace each other on set().
        if self.family == "link":
            return ("link", (self.get("rel") or "").lower())
        if self.kind is ItemKind.MetaCharset:
            return ("meta", "charset")
        metaType = t.cast(str, self.metaType)
        return ("meta", metaType, self.attributes[metaType])

    def describe(self) -> str:
        if self.family == "link":
            return f'link rel="{self.get("rel", "")}" href="{self.get("href", "")}"'
        metaType = t.cast(str, self.metaType)
        return f'meta {metaType}="{self.attributes[metaType]}"'


def attrValue(value: t.Any) -> str:
    if isinstance(value, (list, tuple)):
        return ",".join(str(x) for x in value)
    return str(value)


def normalizeConditional(value: t.Any) -> Result[t.ConditionalT, str]:
    if value is None:
        return Ok(False)
    if isinstance(value, bool):
        return Ok(value)
    if isinstance(value, str):
        if value.strip() == "":
            return Ok(False)
        return Ok(value)
    return Err(f"a conditional must be a boolean or a string, got {type(value).__name__}")


def link(
    attrs: t.RawAttrsT,
    defaults: t.RawAttrsT | None = None,
    conditional: t.Any = False,
    extras: t.Any = None,
) -> Result[Item, str]:
    merged = dict(defaults or {})
    merged.update(attrs)
    # Record form can carry these alongside the attributes
    conditional = merged.pop("conditionalStylesheet", conditional)
    extras = merged.pop("extras", extras)

    attributes = {name: attrValue(merged[name]) for name in LINK_ATTRS if merged.get(name) is not None}
    if not attributes.get("href"):
        return Err("link tags require an href")
    if extras is None:
        extras = {}
    if not isinstance(extras, collections.abc.Mapping):
        return Err(f"link extras must be a mapping, got {type(extras).__name__}")
    cond = normalizeConditional(conditional)
    if isErr(cond):
        return cond
    kind = KIND_FOR_REL.get(attributes.get("rel", "").lower(), ItemKind.GenericLink)
    return Ok(
        Item(
            kind,
            attributes,
            conditional=cond.ok(),
            extras={str(k): attrValue(v) for k, v in extras.items() if v is not None},
        ),
    )


def stylesheet(
    href: t.Any,
    media: t.Any = None,
    conditionalStylesheet: t.Any = False,
    extras: t.Any = None,
) -> Result[Item, str]:
    if not isinstance(href, str):
        return Err(f"a stylesheet href must be a string, got {type(href).__name__}")
    attrs = {"href": href}
    if media is not None:
        attrs["media"] = media
    return link(attrs, defaults=STYLESHEET_DEFAULTS, conditional=conditionalStylesheet, extras=extras)


def alternate(href: t.Any, type: t.Any, title: t.Any, extras: t.Any = None) -> Result[Item, str]:
    if not isinstance(href, str):
        return Err(f"an alternate href must be a string, got {href.__class__.__name__}")
    return link({"rel": "alternate", "href": href, "type": type, "title": title}, extras=extras)


def relLink(rel: str, href: t.Any, extras: t.Any = None) -> Result[Item, str]:
    if not isinstance(href, str):
        return Err(f"a {rel} href must be a string, got {href.__class__.__name__}")
    return link({"rel": rel, "href": href}, extras=extras)


def meta(type: str, key: t.Any, content: t.Any, modifiers: t.Any = None) -> Result[Item, str]:
    if type not in META_TYPES:
        return Err(f'Invalid type "{type}" provided for meta')
    if not isinstance(key, str) or key == "":
        return Err(f"meta {type} requires a non-empty string value")
    if content is None:
        return Err(f'meta {type}="{key}" requires content')
    if modifiers is None:
        modifiers = {}
    if not isinstance(modifiers, collections.abc.Mapping):
        return Err(f"meta modifiers must be a mapping, got {modifiers.__class__.__name__}")
    cond = normalizeConditional(modifiers.get("conditional"))
    if isErr(cond):
        return cond
    attributes = {type: key, "content": attrValue(content)}
    for name in META_MODIFIERS:
        if modifiers.get(name) is not None:
            attributes[name] = attrValue(modifiers[name])
    return Ok(Item(KIND_FOR_META_TYPE[type], attributes, conditional=cond.ok()))


def charset(value: t.Any) -> Result[Item, str]:
    if not isinstance(value, str) or value.strip() == "":
        return Err("a charset must be a non-empty string")
    return Ok(Item(ItemKind.MetaCharset, {"charset": value}))


def metaFromRecord(record: t.RawAttrsT) -> Result[Item, str]:
    present = [type for type in META_TYPES if record.get(type) is not None]
    if not present and record.get("charset") is not None:
        return charset(record["charset"])
    if len(present) != 1:
        return Err("meta records need exactly one of name, http-equiv, property, or itemprop")
    type = present[0]
    modifiers = {k: record[k] for k in (*META_MODIFIERS, "conditional") if k in record}
    return meta(type, record[type], record.get("content"), modifiers)


def coerce(family: str, value: t.Any) -> Result[Item, str]:
    """
    Shapes a value into an Item of the given family.
    Items pass through (if they're the right family);
    mappings are treated as attribute records;
    anything else is rejected.
    """
    if isinstance(value, Item):
        if value.family != family:
            return Err(f"expected a {family} item, got a {value.family} item")
        return Ok(value)
    if isinstance(value, collections.abc.Mapping):
        if family == "link":
            return link(value)
        return metaFromRecord(value)
    return Err(f"expected a {family} item or attribute mapping, got {type(value).__name__}")


def checkDoctype(item: Item, doctype: Doctype) -> Result[Item, str]:
    metaType = item.metaType
    if metaType is not None and not doctype.allowsMetaType(metaType):
        return Err(f"meta {metaType} is not supported by the {doctype.name} doctype")
    return Ok(item)
