from __future__ import annotations

import collections.abc
import dataclasses
import functools
import re

from result import Err, Ok, Result

from . import config, items, t
from .doctypes import DoctypeRegistry, defaultRegistry
from .errors import ArityError, HeadError, InvalidItem, UnknownOperation
from .items import Item, isErr
from .render import RenderContext, render
from .stack import ItemStack

VERBS = ("append", "prepend", "set", "offsetSet")
PLACEMENTS = {"APPEND": "append", "PREPEND": "prepend", "SET": "set"}

operationNameRe = re.compile(r"^(offsetSet|append|prepend|set)([A-Z][A-Za-z]*)$")


@dataclasses.dataclass(frozen=True)
class Operation:
    """
    How one type suffix (the "Stylesheet" in appendStylesheet())
    turns positional arguments into an Item.
    """

    typeName: str
    required: int
    maximum: int
    build: t.Callable[..., Result[Item, str]]
    # Whether a lone mapping argument is accepted as an attribute record
    fromRecord: t.Callable[[t.RawAttrsT], Result[Item, str]] | None = None

    def makeItem(self, verb: str, args: t.Sequence[t.Any]) -> Result[Item, HeadError]:
        if len(args) == 1 and isinstance(args[0], collections.abc.Mapping) and self.fromRecord is not None:
            res = self.fromRecord(args[0])
        elif len(args) < self.required:
            return Err(ArityError.tooFew(self.typeName, self.required, len(args)))
        elif len(args) > self.maximum:
            return Err(ArityError.tooMany(self.typeName, self.maximum, len(args)))
        else:
            res = self.build(*args)
        if isErr(res):
            return Err(InvalidItem(f"Invalid value passed to {verb}{self.typeName}; {res.err()}"))
        return Ok(res.ok())


class HeadHelper:
    """
    Shared machinery for HeadLink and HeadMeta.

    Operations are called as {verb}{TypeSuffix}(...),
    like appendStylesheet("/a.css") or offsetSetName(10, "keywords", "x").
    The names are looked up in the class's `operations` table;
    anything not in it raises UnknownOperation.
    """

    family: str = ""
    operations: t.Mapping[str, Operation] = {}

    def __init__(self, doctypes: DoctypeRegistry | None = None, warn: t.WarnFnT | None = None) -> None:
        self.doctypes = doctypes if doctypes is not None else defaultRegistry()
        self.container = ItemStack(self.family, self.doctypes)
        self.indent = config.DEFAULT_INDENT
        self.separator = config.DEFAULT_SEPARATOR
        self.autoEscape = True
        self.warn = warn

    def __getattr__(self, name: str) -> t.Callable[..., t.Self]:
        match = operationNameRe.match(name)
        if not match or match.group(2) not in self.operations:
            msg = f"Method '{name}' does not exist on {type(self).__name__}."
            raise UnknownOperation(msg)
        verb, typeName = match.groups()
        return functools.partial(self.dispatch, verb, typeName)

    def __len__(self) -> int:
        return len(self.container)

    def __iter__(self) -> t.Iterator[Item]:
        return iter(self.container)

    def __str__(self) -> str:
        return self.toString()

    def tryDispatch(self, verb: str, typeName: str, *args: t.Any) -> Result[int, HeadError]:
        if verb not in VERBS:
            known = config.englishFromList(VERBS)
            return Err(UnknownOperation(f"Unknown verb '{verb}'; expected {known}."))
        op = self.operations.get(typeName)
        if op is None:
            known = config.englishFromList(self.operations)
            return Err(UnknownOperation(f"Unknown {self.family} type '{typeName}'; expected {known}."))
        key = None
        if verb == "offsetSet":
            if not args:
                return Err(ArityError(f"offsetSet{typeName} requires an offset and {op.typeName} arguments"))
            key, *args = args  # type: ignore[assignment]
        res = op.makeItem(verb, args)
        if isErr(res):
            return res
        item = res.ok()
        try:
            if verb == "offsetSet":
                return Ok(self.container.offsetSet(t.cast(int, key), item))
            return Ok(getattr(self.container, verb)(item))
        except HeadError as e:
            return Err(e)

    def dispatch(self, verb: str, typeName: str, *args: t.Any) -> t.Self:
        res = self.tryDispatch(verb, typeName, *args)
        if isErr(res):
            raise res.err()
        return self

    def getContainer(self) -> ItemStack:
        return self.container

    def append(self, value: Item | t.RawAttrsT) -> t.Self:
        self.container.append(value)
        return self

    def prepend(self, value: Item | t.RawAttrsT) -> t.Self:
        self.container.prepend(value)
        return self

    def set(self, value: Item | t.RawAttrsT) -> t.Self:
        self.container.set(value)
        return self

    def offsetSet(self, key: int, value: Item | t.RawAttrsT) -> t.Self:
        self.container.offsetSet(key, value)
        return self

    def place(self, value: Item | t.RawAttrsT, placement: str) -> t.Self:
        verb = PLACEMENTS.get(placement.upper())
        if verb is None:
            known = config.englishFromList(PLACEMENTS)
            msg = f"Unknown placement '{placement}'; expected {known}."
            raise UnknownOperation(msg)
        getattr(self.container, verb)(value)
        return self

    def setIndent(self, unit: int | str) -> t.Self:
        self.indent = config.indentString(unit)
        return self

    def getIndent(self) -> str:
        return self.indent

    def setSeparator(self, separator: str) -> t.Self:
        self.separator = separator
        return self

    def getSeparator(self) -> str:
        return self.separator

    def setAutoEscape(self, autoEscape: bool = True) -> t.Self:
        self.autoEscape = bool(autoEscape)
        return self

    def getAutoEscape(self) -> bool:
        return self.autoEscape

    def renderContext(self) -> RenderContext:
        kwargs: dict[str, t.Any] = {}
        if self.warn is not None:
            kwargs["warn"] = self.warn
        return RenderContext(
            doctype=self.doctypes.currentMode(),
            indent=self.indent,
            separator=self.separator,
            autoEscape=self.autoEscape,
            **kwargs,
        )

    def toString(self, indent: int | str | None = None) -> str:
        context = self.renderContext()
        if indent is not None:
            context = dataclasses.replace(context, indent=config.indentString(indent))
        return render(self.container, context)


class HeadLink(HeadHelper):
    family = "link"
    operations = {
        "Stylesheet": Operation(
            "Stylesheet",
            required=1,
            maximum=4,
            build=items.stylesheet,
            fromRecord=lambda record: items.link(record, defaults=items.STYLESHEET_DEFAULTS),
        ),
        "Alternate": Operation(
            "Alternate",
            required=3,
            maximum=4,
            build=items.alternate,
            fromRecord=lambda record: items.link(record, defaults={"rel": "alternate"}),
        ),
        "Prev": Operation(
            "Prev",
            required=1,
            maximum=2,
            build=functools.partial(items.relLink, "prev"),
            fromRecord=lambda record: items.link(record, defaults={"rel": "prev"}),
        ),
        "Next": Operation(
            "Next",
            required=1,
            maximum=2,
            build=functools.partial(items.relLink, "next"),
            fromRecord=lambda record: items.link(record, defaults={"rel": "next"}),
        ),
    }

    def __call__(self, attributes: t.RawAttrsT | None = None, placement: str = "APPEND") -> HeadLink:
        if attributes is not None:
            self.place(attributes, placement)
        return self


def _metaOperation(typeName: str, metaType: str) -> Operation:
    return Operation(
        typeName,
        required=2,
        maximum=3,
        build=functools.partial(items.meta, metaType),
    )


class HeadMeta(HeadHelper):
    family = "meta"
    operations = {
        "Name": _metaOperation("Name", "name"),
        "HttpEquiv": _metaOperation("HttpEquiv", "http-equiv"),
        "Property": _metaOperation("Property", "property"),
        "Itemprop": _metaOperation("Itemprop", "itemprop"),
    }

    def __call__(
        self,
        content: t.Any = None,
        keyValue: str | None = None,
        keyType: str = "name",
        modifiers: t.RawAttrsT | None = None,
        placement: str = "APPEND",
    ) -> HeadMeta:
        if content is not None and keyValue is not None:
            res = items.meta(keyType, keyValue, content, modifiers)
            if isErr(res):
                verb = PLACEMENTS.get(placement.upper(), placement)
                msg = f"Invalid value passed to {verb}; {res.err()}"
                raise InvalidItem(msg)
            self.place(res.ok(), placement)
        return self

    def setCharset(self, charset: str) -> HeadMeta:
        doctype = self.doctypes.currentMode()
        if not doctype.allowsMetaType("charset"):
            prefix = "XHTML*" if doctype.isXhtml() else doctype.name
            msg = f"{prefix} doctype has no attribute charset; please use appendHttpEquiv()"
            raise InvalidItem(msg)
        res = items.charset(charset)
        if isErr(res):
            msg = f"Invalid value passed to setCharset; {res.err()}"
            raise InvalidItem(msg)
        self.container.set(res.ok())
        return self
