from .manager import (
    KNOWN_FEATURES,
    Doctype,
    DoctypeManager,
    DoctypeRegistry,
    defaultManager,
    defaultRegistry,
    resetDefaultRegistry,
)
