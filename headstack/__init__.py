from __future__ import annotations

from . import config, messages
from .conditional import isRevealCondition, wrapConditional
from .doctypes import Doctype, DoctypeManager, DoctypeRegistry, defaultRegistry, resetDefaultRegistry
from .errors import ArityError, HeadError, InvalidDoctype, InvalidItem, UnknownOperation
from .escape import escapeCss, escapeHtmlAttr
from .helpers import HeadLink, HeadMeta
from .items import Item, ItemKind
from .render import RenderContext, render, renderItem
from .stack import ItemStack
