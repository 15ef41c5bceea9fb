from __future__ import annotations

import dataclasses
import functools

import kdl

from .. import config, t
from ..errors import InvalidDoctype

KNOWN_FEATURES = frozenset(["xhtml", "html5", "rdfa"])

# Legal everywhere; the rest depend on the doctype's features.
BASE_META_TYPES = frozenset(["name", "http-equiv"])


@dataclasses.dataclass(frozen=True)
class Doctype:
    name: str
    declaration: str
    features: frozenset[str] = frozenset()

    def __str__(self) -> str:
        return f"Doctype<{self.name}>"

    def isXhtml(self) -> bool:
        return "xhtml" in self.features

    def isHtml5(self) -> bool:
        return "html5" in self.features

    def isRdfa(self) -> bool:
        return self.isHtml5() or "rdfa" in self.features

    @property
    def metaTypes(self) -> frozenset[str]:
        types = set(BASE_META_TYPES)
        if self.isRdfa():
            types.add("property")
        if self.isHtml5():
            types.update(["itemprop", "charset"])
        return frozenset(types)

    def allowsMetaType(self, type: str) -> bool:
        return type in self.metaTypes

    def tagEnd(self) -> str:
        return " />" if self.isXhtml() else ">"

    def charsetTag(self, charset: str) -> str:
        if self.isXhtml():
            return f'<meta charset="{charset}"/>'
        return f'<meta charset="{charset}">'

    @staticmethod
    def fromKdlNode(node: kdl.Node) -> Doctype:
        name = t.cast(str, node.args[0]).upper()
        declarations = list(node.getAll("declaration"))
        if not declarations:
            msg = f"Doctype '{name}' is missing its declaration."
            raise InvalidDoctype(msg)
        declaration = t.cast(str, declarations[0].args[0])
        features: set[str] = set()
        for n in node.getAll("features"):
            features.update(str(x).lower() for x in n.args)
        unknown = features - KNOWN_FEATURES
        if unknown:
            msg = f"Doctype '{name}' declares unknown features: {config.englishFromList(sorted(unknown), 'and')}."
            raise InvalidDoctype(msg)
        return Doctype(name, declaration, frozenset(features))


@dataclasses.dataclass
class DoctypeManager:
    doctypes: dict[str, Doctype] = dataclasses.field(default_factory=dict)

    @staticmethod
    def fromKdlStr(data: str) -> DoctypeManager:
        self = DoctypeManager()
        kdlDoc = kdl.parse(data)
        for node in kdlDoc.getAll("doctype"):
            doctype = Doctype.fromKdlNode(node)
            self.doctypes[doctype.name] = doctype
        return self

    def getDoctype(self, name: str) -> Doctype | None:
        return self.doctypes.get(name.upper())

    def names(self) -> list[str]:
        return list(self.doctypes)


@functools.cache
def defaultManager() -> DoctypeManager:
    with open(config.scriptPath("doctypes", "doctypes.kdl"), encoding="utf-8") as fh:
        return DoctypeManager.fromKdlStr(fh.read())


@dataclasses.dataclass
class DoctypeRegistry:
    """
    Holds the doctype mode that a rendering session is using.
    It's set once per session and reset between independent sessions;
    nothing resets it implicitly.
    """

    manager: DoctypeManager = dataclasses.field(default_factory=defaultManager)
    defaultName: str = config.DEFAULT_DOCTYPE
    current: Doctype | None = None

    def set(self, name: str) -> Doctype:
        doctype = self.manager.getDoctype(name)
        if doctype is None:
            known = config.englishFromList(self.manager.names())
            msg = f"Unknown doctype '{name}'. Expected {known}."
            raise InvalidDoctype(msg)
        self.current = doctype
        return doctype

    def reset(self) -> None:
        self.current = None

    def isSet(self) -> bool:
        return self.current is not None

    def currentMode(self) -> Doctype:
        if self.current is not None:
            return self.current
        doctype = self.manager.getDoctype(self.defaultName)
        if doctype is None:
            msg = f"The default doctype '{self.defaultName}' isn't a known doctype."
            raise InvalidDoctype(msg)
        return doctype


_defaultRegistry: DoctypeRegistry | None = None


def defaultRegistry() -> DoctypeRegistry:
    global _defaultRegistry
    if _defaultRegistry is None:
        _defaultRegistry = DoctypeRegistry()
    return _defaultRegistry


def resetDefaultRegistry() -> None:
    if _defaultRegistry is not None:
        _defaultRegistry.reset()
