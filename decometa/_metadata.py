"""Per-class metadata containers.

A `Metadata` holds its own entries and an optional parent. Reads fall through to the parent chain, writes never leave
the container they were made on:

    base = Metadata()
    base['tags'] = ('a',)

    child = base.new_child()
    child['tags']                  # ('a',), delegated to `base`
    child['tags'] = ('a', 'b')     # shadows, `base['tags']` is still ('a',)

The parent's entries are shared, not copied. Anything written to `base` later is visible through `child` unless
`child` shadows it.
"""
from __future__ import annotations

import collections
import collections.abc
import logging
import types
import typing

from . import _base

logger = logging.getLogger(__name__)


class Metadata(collections.abc.MutableMapping):
    __slots__ = ('_chain', '_parent', '__weakref__')

    def __init__(self, parent: Metadata | None = None, /) -> None:
        assert parent is None or isinstance(parent, Metadata), f'{parent=!r} is not a Metadata.'

        self._parent = parent
        self._chain = collections.ChainMap() if parent is None else parent._chain.new_child()

        logger.debug('Created %r.', self)

    # Containers are identities, not values. Side tables key on them.
    __eq__ = object.__eq__
    __hash__ = object.__hash__

    def __getitem__(self, key: _base.Key, /) -> object:
        return self._chain[key]

    def __setitem__(self, key: _base.Key, value: object, /) -> None:
        self._chain[key] = value

    def __delitem__(self, key: _base.Key, /) -> None:
        # ChainMap only deletes from the first map, which is ours.
        del self._chain[key]

    def __contains__(self, key: object, /) -> bool:
        return key in self._chain

    def __iter__(self) -> typing.Iterator[_base.Key]:
        return iter(self._chain)

    def __len__(self) -> int:
        return len(self._chain)

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self._own!r}, depth={len(self._chain.maps) - 1})'

    @property
    def _own(self) -> dict[_base.Key, object]:
        return self._chain.maps[0]

    @property
    def parent(self) -> Metadata | None:
        return self._parent

    def ancestors(self) -> typing.Iterator[Metadata]:
        """Yields parent, grandparent, and so on up to the root container."""
        metadata = self._parent
        while metadata is not None:
            yield metadata
            metadata = metadata._parent

    def new_child(self) -> Metadata:
        return type(self)(self)

    def own(self) -> types.MappingProxyType[_base.Key, object]:
        """Returns a live read-only view of entries set directly on this container."""
        return types.MappingProxyType(self._own)

    def own_keys(self) -> collections.abc.KeysView[_base.Key]:
        return self._own.keys()
