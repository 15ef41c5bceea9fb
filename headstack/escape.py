from __future__ import annotations

import re

# Characters that never need escaping inside an attribute value.
safeAttrRe = re.compile(r"[a-zA-Z0-9,.\-_]+")
unsafeAttrCharRe = re.compile(r"[^a-zA-Z0-9,.\-_]")
unsafeCssCharRe = re.compile(r"[^a-zA-Z0-9]")

namedEntities = {
    0x22: "quot",
    0x26: "amp",
    0x3C: "lt",
    0x3E: "gt",
}


def escapeHtmlAttr(text: str) -> str:
    """
    Escapes text for use as a quoted (or unquoted) HTML attribute value.
    Anything outside of [a-zA-Z0-9,.-_] becomes a character reference;
    control characters that can't appear in HTML become U+FFFD.
    """
    text = str(text)
    if text == "" or safeAttrRe.fullmatch(text):
        return text
    return unsafeAttrCharRe.sub(_attrReplacer, text)


def _attrReplacer(match: re.Match) -> str:
    code = ord(match.group(0))
    if (code <= 0x1F and code not in (0x09, 0x0A, 0x0D)) or 0x7F <= code <= 0x9F:
        return "&#xFFFD;"
    if code in namedEntities:
        return f"&{namedEntities[code]};"
    if code > 0xFF:
        return f"&#x{code:04X};"
    return f"&#x{code:02X};"


def escapeCss(text: str) -> str:
    """
    Escapes text for use inside a CSS value:
    every non-alphanumeric character becomes a hex escape followed by a space.
    """
    text = str(text)
    if text == "" or (text.isascii() and text.isdigit()):
        return text
    return unsafeCssCharRe.sub(lambda match: rf"\{ord(match.group(0)):X} ", text)
