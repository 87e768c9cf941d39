from __future__ import annotations

import dataclasses
import logging
import threading
import weakref

from . import _base, _metadata

logger = logging.getLogger(__name__)


@dataclasses.dataclass(eq=False, frozen=True)
class Attribute:
    """The `__metadata__` class attribute.

    Resolves through the register on every access, keyed by the class it is read from. A plain subclass that inherits
    this descriptor without going through a pipeline reads `None` rather than its parent's container.
    """
    register: Register

    def __get__(self, instance: object, owner: type) -> _metadata.Metadata | None:
        return self.register.lookup(owner)


@dataclasses.dataclass(eq=False, frozen=True, kw_only=True)
class Register:
    metadatas: weakref.WeakKeyDictionary[type, _metadata.Metadata] = dataclasses.field(
        default_factory=weakref.WeakKeyDictionary
    )
    lock: threading.Lock = dataclasses.field(default_factory=threading.Lock)
    pending: weakref.WeakKeyDictionary[type, _metadata.Metadata] = dataclasses.field(
        default_factory=weakref.WeakKeyDictionary
    )

    def __contains__(self, cls: type, /) -> bool:
        return cls in self.metadatas

    def lookup(self, cls: type, /, *, pending: bool = False) -> _metadata.Metadata | None:
        """Returns the metadata published for exactly `cls`, or None if it never went through a pipeline.

        With `pending`, a class still being decorated resolves to its unpublished container. Pipelines use this to
        parent a subclass that a class decorator creates before its own class is published.
        """
        if (metadata := self.metadatas.get(cls)) is None and pending:
            metadata = self.pending.get(cls)
        return metadata

    def publish(self, cls: type, metadata: _metadata.Metadata, /) -> None:
        assert isinstance(metadata, _metadata.Metadata), f'{metadata=!r} is not a Metadata.'

        with self.lock:
            if cls in self.metadatas:
                raise _base.AlreadyPublishedError(cls)
            self.metadatas[cls] = metadata

        if not isinstance(vars(cls).get('__metadata__'), Attribute):
            setattr(cls, '__metadata__', Attribute(self))

        logger.debug('Published %r for %s.%s.', metadata, cls.__module__, cls.__qualname__)


global_register = Register()


def metadata_of(cls: type, /) -> _metadata.Metadata | None:
    return global_register.lookup(cls)
