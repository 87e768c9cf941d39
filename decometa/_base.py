from __future__ import annotations

import annotated_types
import builtins
import dataclasses
import enum
import typing


type Name = typing.Annotated[str, annotated_types.Predicate(str.isidentifier)]  # noqa
type Key = typing.Hashable


class Exception(builtins.Exception):  # noqa
    ...


class AlreadyPublishedError(Exception, RuntimeError):
    """Raised when a class already has metadata published for it."""

    def __init__(self, cls: type, /) -> None:
        super().__init__(f'Metadata for {cls.__module__}.{cls.__qualname__} is already published.')
        self.cls = cls


class DecorationFinishedError(Exception, RuntimeError):
    """Raised when `add_initializer` is called after its decorator returned."""


class Kind(enum.StrEnum):
    CLASS = 'class'
    METHOD = 'method'
    ACCESSOR = 'accessor'
    FIELD = 'field'
    AUTO_ACCESSOR = 'auto-accessor'


@dataclasses.dataclass(frozen=True, eq=False)
class Symbol:
    """An opaque metadata key that only equals itself.

    Two symbols with the same description are still distinct keys, so libraries can keep their entries apart without
    agreeing on string names.
    """
    description: str = ''

    def __repr__(self) -> str:
        return f'Symbol({self.description!r})'
