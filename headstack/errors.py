from __future__ import annotations


class HeadError(Exception):
    """
    Base for every error raised while building head tags.
    Render-time problems are never raised;
    they go to the warning channel instead.
    """


class InvalidItem(HeadError, ValueError):
    pass


class ArityError(HeadError, TypeError):
    @classmethod
    def tooFew(cls, typeName: str, required: int, provided: int) -> ArityError:
        return cls(f"{typeName} tags require {plural(required, 'argument')}; {provided} provided")

    @classmethod
    def tooMany(cls, typeName: str, maximum: int, provided: int) -> ArityError:
        return cls(f"{typeName} tags accept at most {plural(maximum, 'argument')}; {provided} provided")


class UnknownOperation(HeadError, AttributeError):
    # Also an AttributeError, so hasattr() works on the helpers.
    pass


class InvalidDoctype(HeadError, ValueError):
    pass


def plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"
