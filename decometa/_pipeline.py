"""Provides the class-definition pipeline that applies decorators and publishes per-class metadata.

Every class that goes through a `Pipeline` gets exactly one `Metadata`, created before any of its decorators run and
parented to its superclass's published container. Member decorators run first, then class decorators, all with the
same container. The container is published only once every decorator returned.

Two entry points run the pipeline:

    class Foo(decometa.Base, decorators=(tagged,)):  # Every subclass of `Base` goes through the pipeline.
        ...

    @decometa.define(tagged)  # A plain class, with an explicit register if desired.
    class Bar:
        ...
"""
from __future__ import annotations

import dataclasses
import functools
import inspect
import logging
import typing

from . import _base, _context, _decorate, _metadata, _register

logger = logging.getLogger(__name__)


_order = {
    _base.Kind.METHOD: 0,
    _base.Kind.ACCESSOR: 1,
    _base.Kind.AUTO_ACCESSOR: 1,
    _base.Kind.FIELD: 2,
}


@dataclasses.dataclass(frozen=True, kw_only=True)
class _Site:
    attr: str
    decorators: tuple[_context.Decorator, ...]
    is_private: bool
    is_static: bool
    kind: _base.Kind
    name: str
    value: object
    wrapper: type[staticmethod | classmethod] | None = None

    @staticmethod
    def of(cls: type, attr: str, value: object, decorators: tuple[_context.Decorator, ...], /) -> _Site:
        name, is_private = attr, False
        prefix = f'_{cls.__name__.lstrip('_')}'
        if attr.startswith(f'{prefix}__') and not attr.endswith('__'):
            name, is_private = attr.removeprefix(prefix), True

        wrapper = None
        match value:
            case staticmethod() | classmethod():
                kind, wrapper, value = _base.Kind.METHOD, type(value), value.__func__
            case property():
                kind = _base.Kind.ACCESSOR
            case _decorate.Accessor():
                kind = _base.Kind.AUTO_ACCESSOR
            case _ if inspect.isfunction(value):
                kind = _base.Kind.METHOD
            case _:
                kind = _base.Kind.FIELD

        return _Site(
            attr=attr,
            decorators=decorators,
            is_private=is_private,
            is_static=wrapper is not None,
            kind=kind,
            name=name,
            value=value,
            wrapper=wrapper,
        )

    def __str__(self) -> str:
        return f'{self.kind} {self.name!r}'


@dataclasses.dataclass(kw_only=True)
class _Storage[Value]:
    key: str
    default: Value

    def get(self, obj: object, /) -> Value:
        return vars(obj).get(self.key, self.default)

    def set(self, obj: object, value: Value, /) -> None:
        vars(obj)[self.key] = value


@dataclasses.dataclass(frozen=True, kw_only=True)
class _Initializers:
    cls: list[_context.Initializer] = dataclasses.field(default_factory=list)
    instance: list[_context.Initializer] = dataclasses.field(default_factory=list)
    static: list[_context.Initializer] = dataclasses.field(default_factory=list)


def _check(kind: _base.Kind, replacement: object, /) -> None:
    match kind:
        case _base.Kind.CLASS:
            ok = isinstance(replacement, type)
        case _base.Kind.METHOD | _base.Kind.FIELD:
            ok = callable(replacement)
        case _base.Kind.ACCESSOR:
            ok = hasattr(type(replacement), '__get__')
        case _base.Kind.AUTO_ACCESSOR:
            ok = isinstance(replacement, _decorate.AccessorValue)
        case _: assert False, 'Unreachable'  # pragma: no cover

    if not ok:
        raise TypeError(f'A {kind} decorator returned {replacement!r}, which cannot replace a {kind}.')


@dataclasses.dataclass(frozen=True, kw_only=True)
class Pipeline:
    """Defines a class: applies its member and class decorators, then publishes its metadata.

    Args (Keyword):
        decorators: Class decorators, in written order. The last one applies first, as if stacked.
        register: Where the container is published and where the superclass's container is looked up.
        publish_empty: If False, a class with no decorators anywhere gets no register entry.
    """
    decorators: tuple[_context.Decorator[type], ...] = ()
    register: _register.Register = _register.global_register
    publish_empty: bool = True

    def __call__[Cls: type](self, cls: Cls, /) -> Cls:
        # A class decorator may build a subclass that runs its own pipeline before `cls` is published.
        parent = self.register.lookup(cls.__bases__[0], pending=True) if cls.__bases__ else None
        metadata = _metadata.Metadata(parent)
        self.register.pending[cls] = metadata
        try:
            return self._define(cls, metadata)
        finally:
            self.register.pending.pop(cls, None)

    def _define[Cls: type](self, cls: Cls, metadata: _metadata.Metadata, /) -> Cls:
        initializers = _Initializers()

        sites = []
        for attr, member in vars(cls).items():
            match member:
                case _decorate.Decorated(decorators=decorators, value=value):
                    sites.append(_Site.of(cls, attr, value, decorators))
                case _decorate.Accessor():
                    sites.append(_Site.of(cls, attr, member, ()))
        sites.sort(key=lambda site: _order[site.kind])

        # Nothing is installed until every member decorator has returned.
        installs = {site.attr: self._decorate_site(cls, site, metadata, initializers) for site in sites}
        for attr, value in installs.items():
            setattr(cls, attr, value)

        if initializers.instance:
            self._add_instance_initializers(cls, initializers.instance)

        decorated = cls
        for decorator in reversed(self.decorators):
            context = _context.Context(
                kind=_base.Kind.CLASS,
                name=cls.__name__,
                metadata=metadata,
                _initializers=initializers.cls,
            )
            replacement = self._call(decorator, decorated, context, cls=cls, site='the class')
            if replacement is not None:
                _check(_base.Kind.CLASS, replacement)
                decorated = replacement

        for initializer in initializers.static:
            initializer(cls)

        if self.publish_empty or self.decorators or any(site.decorators for site in sites):
            self.register.publish(cls, metadata)
            # A class decorator may hand back a different class. It is the one the definer ends up naming.
            if decorated is not cls and decorated not in self.register:
                self.register.publish(decorated, metadata)

        for initializer in initializers.cls:
            initializer(decorated)

        return decorated

    @staticmethod
    def _call[Value](
        decorator: _context.Decorator[Value], value: Value, context: _context.Context, /, *, cls: type, site: str
    ) -> Value | None:
        try:
            replacement = decorator(value, context)
        except Exception as e:
            e.add_note(f'Raised by {decorator!r} while decorating {site} of {cls.__module__}.{cls.__qualname__}.')
            raise
        finally:
            context._finish()

        logger.debug('Applied %r to %s of %s.', decorator, site, cls.__qualname__)

        return replacement

    def _decorate_site(
        self, cls: type, site: _Site, metadata: _metadata.Metadata, initializers: _Initializers, /
    ) -> object:
        value = site.value
        inits = []

        if site.kind is _base.Kind.AUTO_ACCESSOR:
            storage = _Storage(key=f'{site.attr}.value', default=site.value.default)
            value = _decorate.AccessorValue(get=storage.get, set=storage.set)

        for decorator in reversed(site.decorators):
            context = _context.Context(
                kind=site.kind,
                name=site.name,
                access=_context.Access(site.attr, writable=site.kind is not _base.Kind.METHOD),
                is_private=site.is_private,
                is_static=site.is_static,
                metadata=metadata,
                _initializers=initializers.static if site.is_static else initializers.instance,
            )
            replacement = self._call(
                decorator, None if site.kind is _base.Kind.FIELD else value, context, cls=cls, site=str(site)
            )
            if replacement is None:
                continue
            _check(site.kind, replacement)

            match site.kind:
                case _base.Kind.FIELD:
                    inits.append(replacement)
                case _base.Kind.AUTO_ACCESSOR if replacement.init is not None:
                    inits.append(replacement.init)
                    value = dataclasses.replace(replacement, init=None)
                case _:
                    value = replacement

        match site.kind:
            case _base.Kind.METHOD if site.wrapper is not None:
                return site.wrapper(value)
            case _base.Kind.FIELD:
                return functools.reduce(lambda default, init: init(default), inits, site.value)
            case _base.Kind.AUTO_ACCESSOR:
                storage.default = functools.reduce(lambda default, init: init(default), inits, storage.default)
                return property(value.get, value.set)
            case _:
                return value

    @staticmethod
    def _add_instance_initializers(cls: type, initializers: list[_context.Initializer], /) -> None:
        init = cls.__init__

        @functools.wraps(init)
        def __init__(self, *args, **kwargs) -> None:
            for initializer in initializers:
                initializer(self)
            init(self, *args, **kwargs)

        cls.__init__ = __init__


def define(
    *decorators: _context.Decorator[type],
    register: _register.Register = _register.global_register,
    publish_empty: bool = True,
) -> Pipeline:
    """Returns a class decorator that runs the pipeline on a plain class with the given class decorators."""
    return Pipeline(decorators=decorators, register=register, publish_empty=publish_empty)


class Meta(type):
    """Runs the pipeline for every class it creates.

    Class decorators are given as the `decorators` class keyword.
    """

    def __new__(
        mcs,
        name: str,
        bases: tuple[type, ...],
        namespace: dict[str, typing.Any],
        /,
        *,
        decorators: typing.Iterable[_context.Decorator[type]] = (),
        **kwargs,
    ) -> type:
        cls = super().__new__(mcs, name, bases, namespace, **kwargs)

        return Pipeline(decorators=tuple(decorators))(cls)

    def __init__(
        cls,
        name: str,
        bases: tuple[type, ...],
        namespace: dict[str, typing.Any],
        /,
        *,
        decorators: typing.Iterable[_context.Decorator[type]] = (),
        **kwargs,
    ) -> None:
        super().__init__(name, bases, namespace, **kwargs)


class Base(metaclass=Meta):
    ...
