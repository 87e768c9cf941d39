"""Markers that declare decoration sites inside a class body.

Decorators written inside a class body run before the class exists, so there is no container to hand them yet.
`Decorate` defers them instead: it wraps the member in a `Decorated` marker and the pipeline applies the decorators
once the class is created.

    class Foo(decometa.Base):

        @decometa.Decorate(logged, tagged)    # Same as stacking @logged over @tagged: `tagged` applies first.
        def bar(self): ...

        baz = decometa.Decorate(required)(0)  # A field.

        qux = decometa.Accessor(0)            # An auto-accessor, decorated or not.
"""
from __future__ import annotations

import dataclasses
import typing

from . import _context


@dataclasses.dataclass(frozen=True)
class Accessor[Value]:
    """Declares an auto-accessor: a property backed by per-instance storage that reads `default` until set."""
    default: Value = None


@dataclasses.dataclass(frozen=True, kw_only=True)
class AccessorValue[Value]:
    """What auto-accessor decorators receive and may return.

    `init` transforms the declared default. Replace any subset via `dataclasses.replace`.
    """
    get: typing.Callable[[object], Value]
    set: typing.Callable[[object, Value], None]
    init: typing.Callable[[Value], Value] | None = None


@dataclasses.dataclass(frozen=True, kw_only=True)
class Decorated[Value]:
    decorators: tuple[_context.Decorator, ...]
    value: Value


# Override __init__ so that decorators can be given positionally.
@dataclasses.dataclass(frozen=True, init=False)
class Decorate:
    decorators: tuple[_context.Decorator, ...]

    def __init__(self, *decorators: _context.Decorator) -> None:
        for decorator in decorators:
            if not callable(decorator):
                raise TypeError(f'{decorator=!r} is not callable.')
        object.__setattr__(self, 'decorators', decorators)

    def __call__[Value](self, value: Value | Decorated[Value], /) -> Decorated[Value]:
        match value:
            case Decorated(decorators=decorators, value=value):
                # Stacked markers. The outer one was written first, so its decorators apply last.
                return Decorated(decorators=(*self.decorators, *decorators), value=value)
            case _:
                return Decorated(decorators=self.decorators, value=value)
