# pylint: skip-file
# Module for holding types, for easy importing into the rest of the codebase
from __future__ import annotations

import sys

# The only things that should be available during runtime.
from typing import TYPE_CHECKING, cast

# Only available in 3.11, so stub them out for earlier versions
if sys.version_info >= (3, 11):
    from typing import assert_never, assert_type
else:
    from typing_extensions import assert_never, assert_type


if TYPE_CHECKING:
    from typing import (
        Any,
        Callable,
        Generator,
        Iterable,
        Iterator,
        Mapping,
        Sequence,
        TextIO,
        TypeAlias,
        TypeGuard,
    )

    from typing_extensions import Self

    # Attribute maps, as handed to and stored on items
    AttrsT: TypeAlias = Mapping[str, str]

    # What callers may hand in before coercion
    RawAttrsT: TypeAlias = Mapping[str, Any]

    # False/True never wrap; a string is an IE conditional-comment trigger
    ConditionalT: TypeAlias = bool | str

    EscaperT: TypeAlias = Callable[[str], str]
    # Called with the message and, for render-time skips, the dropped item
    WarnFnT: TypeAlias = Callable[[str, "Item | None"], Any]

    from .doctypes import Doctype, DoctypeManager, DoctypeRegistry
    from .items import Item, ItemKind
    from .render import RenderContext
    from .stack import ItemStack
