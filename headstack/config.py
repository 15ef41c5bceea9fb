from __future__ import annotations

import os

from . import t

DEFAULT_DOCTYPE = "HTML4_LOOSE"
DEFAULT_SEPARATOR = "\n"
DEFAULT_INDENT = ""


def scriptPath(*pathSegs: str) -> str:
    startPath = os.path.dirname(os.path.realpath(__file__))
    path = os.path.join(startPath, *pathSegs)
    return path


def englishFromList(items: t.Iterable[str], conjunction: str = "or") -> str:
    # Format a list of strings into an English list.
    items = list(items)
    assert len(items) > 0
    if len(items) == 1:
        return items[0]
    if len(items) == 2:
        return "{0} {2} {1}".format(items[0], items[1], conjunction)
    return "{0}, {2} {1}".format(", ".join(items[:-1]), items[-1], conjunction)


def indentString(unit: int | str) -> str:
    # An int is a count of spaces; a string is used as-is.
    if isinstance(unit, bool):
        msg = f"Indentation must be a number of spaces or a string, got {unit!r}."
        raise TypeError(msg)
    if isinstance(unit, int):
        return " " * max(unit, 0)
    return str(unit)
