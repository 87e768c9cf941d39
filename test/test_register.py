import gc

import pytest

import decometa


def test_lookup_absent() -> None:
    class Foo:
        ...

    register = decometa.Register()

    assert register.lookup(Foo) is None
    assert Foo not in register
    assert decometa.metadata_of(Foo) is None


def test_publish() -> None:
    class Foo:
        ...

    register = decometa.Register()
    metadata = decometa.Metadata()
    register.publish(Foo, metadata)

    assert register.lookup(Foo) is metadata
    assert Foo in register
    assert Foo.__metadata__ is metadata
    assert Foo().__metadata__ is metadata


def test_publish_twice_fails() -> None:
    class Foo:
        ...

    register = decometa.Register()
    register.publish(Foo, decometa.Metadata())

    with pytest.raises(decometa.AlreadyPublishedError) as e:
        register.publish(Foo, decometa.Metadata())

    assert isinstance(e.value, decometa.Exception)
    assert isinstance(e.value, RuntimeError)
    assert e.value.cls is Foo


def test_registers_are_independent() -> None:
    class Foo:
        ...

    register_0, register_1 = decometa.Register(), decometa.Register()
    register_0.publish(Foo, decometa.Metadata())

    assert register_1.lookup(Foo) is None


def test_unpublished_subclass_reads_none() -> None:
    class Foo:
        ...

    register = decometa.Register()
    register.publish(Foo, decometa.Metadata())

    class Bar(Foo):
        ...

    assert Bar.__metadata__ is None


def test_entry_lives_as_long_as_class() -> None:
    class Foo:
        ...

    register = decometa.Register()
    register.publish(Foo, decometa.Metadata())
    assert len(register.metadatas) == 1

    del Foo
    gc.collect()

    assert len(register.metadatas) == 0
