from __future__ import annotations

import re

from . import t

# IE conditional comments.
# A condition is a string like "lt IE 7" or "!IE".
# Normal conditions hide the tag from everything but matching IEs:
#   <!--[if lt IE 7]><link ...><![endif]-->
# Negated ("reveal") conditions start with "!",
# and have to stay visible to non-IE browsers,
# so the tag itself sits outside of the comments:
#   <!--[if !IE]><!--><link ...><!--<![endif]-->
# Boolean conditions (True or False) never wrap anything.

revealRe = re.compile(r"^\s*!")


def isRevealCondition(condition: str) -> bool:
    return bool(revealRe.match(condition))


def wrapConditional(tag: str, condition: t.ConditionalT) -> str:
    if isinstance(condition, bool) or not condition:
        return tag
    if isRevealCondition(condition):
        return f"<!--[if {condition}]><!-->{tag}<!--<![endif]-->"
    return f"<!--[if {condition}]>{tag}<![endif]-->"
