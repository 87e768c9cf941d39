from __future__ import annotations

import dataclasses
import typing

from . import _base, _metadata


type Initializer[Target] = typing.Callable[[Target], object]


@dataclasses.dataclass(frozen=True)
class Access[Value]:
    """Reads and writes a decorated member on a given object.

    `name` is the attribute as stored on the class, so private members use their mangled name here.
    """
    name: _base.Name
    writable: bool = True

    def get(self, obj: object, /) -> Value:
        return getattr(obj, self.name)

    def set(self, obj: object, value: Value, /) -> None:
        if not self.writable:
            raise AttributeError(f'{self.name!r} is read-only through its decoration access.')
        setattr(obj, self.name, value)

    def has(self, obj: object, /) -> bool:
        return hasattr(obj, self.name)


@dataclasses.dataclass(frozen=True, kw_only=True)
class Context:
    """Passed to a decorator alongside the value it decorates.

    `metadata` is the container of the class being defined, not a copy. Every context created while defining one class
    carries the same container.
    """
    kind: _base.Kind
    name: _base.Name
    access: Access | None = None
    is_private: bool = False
    is_static: bool = False
    metadata: _metadata.Metadata
    _initializers: list[Initializer] = dataclasses.field(default_factory=list, repr=False)
    _finished: bool = dataclasses.field(default=False, repr=False)

    def add_initializer(self, initializer: Initializer, /) -> None:
        """Registers `initializer` to run once the decorated target exists.

        Class initializers receive the defined class, static member initializers receive the class, and instance member
        initializers receive each new instance before its `__init__` body runs.
        """
        if self._finished:
            raise _base.DecorationFinishedError(f'Decoration of {self.kind} {self.name!r} has already finished.')
        if not callable(initializer):
            raise TypeError(f'{initializer=!r} is not callable.')
        self._initializers.append(initializer)

    def _finish(self) -> None:
        object.__setattr__(self, '_finished', True)


type Decorator[Value] = typing.Callable[[Value, Context], Value | None]
