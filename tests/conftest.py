"""Shared fixtures: a fresh doctype registry per test, and helpers that report warnings into a list."""

import pytest

from headstack import DoctypeRegistry, HeadLink, HeadMeta, resetDefaultRegistry


class WarningCollector(list):
    # Holds the messages; the dropped items sit alongside in .items
    def __init__(self):
        super().__init__()
        self.items = []

    def __call__(self, msg, item=None):
        self.append(msg)
        self.items.append(item)


@pytest.fixture(autouse=True)
def _reset_default_doctype():
    resetDefaultRegistry()
    yield
    resetDefaultRegistry()


@pytest.fixture
def doctypes():
    return DoctypeRegistry()


@pytest.fixture
def warned():
    return WarningCollector()


@pytest.fixture
def head_link(doctypes, warned):
    return HeadLink(doctypes, warn=warned)


@pytest.fixture
def head_meta(doctypes, warned):
    doctypes.set("XHTML1_STRICT")
    return HeadMeta(doctypes, warn=warned)
