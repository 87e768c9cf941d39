from __future__ import annotations

import dataclasses
import typing
import weakref

from . import _metadata


@dataclasses.dataclass(eq=False, frozen=True, kw_only=True)
class Private[Value]:
    """A side table keyed by metadata container identity.

    Lets a library keep per-class data that other code reading `__metadata__` cannot see. Lookups walk the
    container's ancestors the same way `Metadata` lookups do, so a subclass inherits, and may shadow, what was stored
    for its superclass.

        _validators = decometa.Private[list]()

        def validated(value, context):
            _validators[context.metadata] = [*_validators.get(context.metadata, []), value]
    """
    values: weakref.WeakKeyDictionary[_metadata.Metadata, Value] = dataclasses.field(
        default_factory=weakref.WeakKeyDictionary
    )

    def __contains__(self, metadata: _metadata.Metadata, /) -> bool:
        return any(each in self.values for each in (metadata, *metadata.ancestors()))

    def __getitem__(self, metadata: _metadata.Metadata, /) -> Value:
        for each in (metadata, *metadata.ancestors()):
            if each in self.values:
                return self.values[each]
        raise KeyError(metadata)

    def __setitem__(self, metadata: _metadata.Metadata, value: Value, /) -> None:
        self.values[metadata] = value

    def __delitem__(self, metadata: _metadata.Metadata, /) -> None:
        del self.values[metadata]

    @typing.overload
    def get(self, metadata: _metadata.Metadata, /) -> Value | None: ...

    @typing.overload
    def get[Default](self, metadata: _metadata.Metadata, default: Default, /) -> Value | Default: ...

    def get(self, metadata, default=None, /):
        try:
            return self[metadata]
        except KeyError:
            return default
