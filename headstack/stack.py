from __future__ import annotations

from . import items, t
from .doctypes import DoctypeRegistry, defaultRegistry
from .errors import InvalidItem
from .items import Item, ItemKind, isErr


class ItemStack:
    """
    Holds the Items of one family (links or metas) under integer keys,
    and always iterates them in ascending key order.

    append() and prepend() each keep a high-water mark,
    so their keys are never reused, even after removals;
    offsetSet() writes to an explicit key and leaves the marks alone.
    """

    def __init__(self, family: str, doctypes: DoctypeRegistry | None = None) -> None:
        if family not in ("link", "meta"):
            msg = f"Unknown item family '{family}'."
            raise ValueError(msg)
        self.family = family
        self.doctypes = doctypes if doctypes is not None else defaultRegistry()
        self._items: dict[int, Item] = {}
        self._maxAppend: int | None = None
        self._minPrepend: int | None = None

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __getitem__(self, key: int) -> Item:
        return self._items[key]

    def __iter__(self) -> t.Iterator[Item]:
        for key in sorted(self._items):
            yield self._items[key]

    def __repr__(self) -> str:
        return f"ItemStack({self.family!r}, {self.getArrayCopy()!r})"

    def keys(self) -> list[int]:
        return sorted(self._items)

    def items(self) -> list[tuple[int, Item]]:
        return [(key, self._items[key]) for key in sorted(self._items)]

    def getArrayCopy(self) -> dict[int, Item]:
        return dict(self.items())

    def getValue(self) -> Item | list[Item] | None:
        # A single item comes back bare, which is handy after set().
        values = list(self)
        if not values:
            return None
        if len(values) == 1:
            return values[0]
        return values

    def append(self, value: Item | t.RawAttrsT) -> int:
        item = self._validate(value, "append")
        return self._append(item)

    def prepend(self, value: Item | t.RawAttrsT) -> int:
        item = self._validate(value, "prepend")
        existing = self._duplicateOf(item)
        if existing is not None:
            return existing
        candidates = list(self._items)
        if self._minPrepend is not None:
            candidates.append(self._minPrepend)
        key = min(candidates) - 1 if candidates else 0
        self._minPrepend = key
        self._items[key] = item
        return key

    def set(self, value: Item | t.RawAttrsT) -> int:
        item = self._validate(value, "set")
        identity = item.identity()
        for key in [k for k, v in self._items.items() if v.identity() == identity]:
            del self._items[key]
        return self._append(item)

    def offsetSet(self, key: int, value: Item | t.RawAttrsT) -> int:
        if isinstance(key, bool) or not isinstance(key, int):
            msg = f"Invalid offset passed to offsetSet; expected an integer key, got {key!r}"
            raise InvalidItem(msg)
        item = self._validate(value, "offsetSet")
        existing = self._duplicateOf(item)
        if existing is not None:
            return existing
        self._items[key] = item
        return key

    def remove(self, key: int) -> Item:
        return self._items.pop(key)

    def clear(self) -> None:
        self._items.clear()
        self._maxAppend = None
        self._minPrepend = None

    def _append(self, item: Item) -> int:
        existing = self._duplicateOf(item)
        if existing is not None:
            return existing
        candidates = list(self._items)
        if self._maxAppend is not None:
            candidates.append(self._maxAppend)
        key = max(candidates) + 1 if candidates else 0
        self._maxAppend = key
        self._items[key] = item
        return key

    def _validate(self, value: t.Any, verb: str) -> Item:
        res = items.coerce(self.family, value)
        if not isErr(res):
            res = items.checkDoctype(res.ok(), self.doctypes.currentMode())
        if isErr(res):
            msg = f"Invalid value passed to {verb}; {res.err()}"
            raise InvalidItem(msg)
        return t.cast(Item, res.ok())

    def _duplicateOf(self, item: Item) -> int | None:
        # Only stylesheets are deduplicated, by href.
        if item.kind is not ItemKind.Stylesheet:
            return None
        href = item.get("href")
        for key, existing in self._items.items():
            if existing.kind is ItemKind.Stylesheet and existing.get("href") == href:
                return key
        return None
