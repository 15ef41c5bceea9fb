from __future__ import annotations

import dataclasses

from result import Err, Ok, Result

from . import config, escape, t
from . import messages as m
from .conditional import wrapConditional
from .items import LINK_ATTRS, META_MODIFIERS, Item, ItemKind, isErr

if t.TYPE_CHECKING:
    from .doctypes import Doctype


@dataclasses.dataclass(frozen=True)
class RenderContext:
    """
    Everything render() reads besides the items themselves.
    Nothing here is owned by the stack; build a fresh one per render.
    """

    doctype: Doctype
    escapeAttr: t.EscaperT = escape.escapeHtmlAttr
    escapeCss: t.EscaperT = escape.escapeCss
    indent: str = config.DEFAULT_INDENT
    autoEscape: bool = True
    separator: str = config.DEFAULT_SEPARATOR
    warn: t.WarnFnT = m.warn

    def attrValue(self, value: str) -> str:
        if not self.autoEscape:
            return value
        return self.escapeAttr(value)


def render(stack: t.Iterable[Item], context: RenderContext) -> str:
    """
    Renders the items, in iteration order, into markup.

    An item that can't be rendered under the context's doctype
    produces a warning and no output;
    the rest of the items still render.
    Repeated warnings are only collapsed within a single render.
    Charset metas are always emitted first.
    """
    charsetLines: list[str] = []
    lines: list[str] = []
    with m.messageRun():
        for item in stack:
            res = renderItem(item, context)
            if isErr(res):
                context.warn(res.err(), item)
                continue
            text = res.ok()
            if not text:
                continue
            if item.kind is ItemKind.MetaCharset:
                charsetLines.append(context.indent + text)
            else:
                lines.append(context.indent + text)
    return context.separator.join(charsetLines + lines)


def renderItem(item: Item, context: RenderContext) -> Result[str, str]:
    if item.family == "link":
        tag = linkTag(item, context)
    else:
        res = metaTag(item, context)
        if isErr(res):
            return res
        tag = res.ok()
    return Ok(wrapConditional(tag, item.conditional))


def linkTag(item: Item, context: RenderContext) -> str:
    strs = ["<link"]
    for name in LINK_ATTRS:
        if name in item.attributes:
            strs.append(f' {name}="{context.attrValue(item.attributes[name])}"')
    for name, value in item.extras.items():
        if name in item.attributes:
            continue
        strs.append(f' {name}="{context.attrValue(value)}"')
    strs.append(context.doctype.tagEnd())
    return "".join(strs)


def metaTag(item: Item, context: RenderContext) -> Result[str, str]:
    doctype = context.doctype
    metaType = item.metaType
    if metaType is None or not doctype.allowsMetaType(metaType):
        return Err(f'Invalid type "{metaType}" provided for meta')

    if item.kind is ItemKind.MetaCharset:
        return Ok(doctype.charsetTag(context.attrValue(item.attributes["charset"])))

    if doctype.isHtml5() and "scheme" in item.attributes:
        return Err('Invalid modifier "scheme" provided; not supported by HTML5')

    strs = [f'<meta {metaType}="{context.attrValue(item.attributes[metaType])}"']
    strs.append(f' content="{context.attrValue(item.attributes.get("content", ""))}"')
    for name in META_MODIFIERS:
        if name in item.attributes:
            strs.append(f' {name}="{context.attrValue(item.attributes[name])}"')
    strs.append(doctype.tagEnd())
    return Ok("".join(strs))
