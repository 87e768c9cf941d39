import pytest

import decometa


def test_last_write_wins() -> None:
    metadata = decometa.Metadata()
    metadata['a'] = 1
    metadata['a'] = 2

    assert metadata['a'] == 2
    assert metadata.own() == {'a': 2}


def test_child_delegates_to_parent() -> None:
    parent = decometa.Metadata()
    parent['a'] = 'x'
    child = decometa.Metadata(parent)

    assert child['a'] == 'x'
    assert 'a' in child
    assert 'a' not in child.own_keys()


def test_child_write_shadows_without_touching_parent() -> None:
    parent = decometa.Metadata()
    parent['a'] = 'x'
    child = parent.new_child()

    child['a'] = 'z'

    assert child['a'] == 'z'
    assert parent['a'] == 'x'
    assert set(child.own_keys()) == {'a'}


def test_later_parent_writes_are_visible_unless_shadowed() -> None:
    parent = decometa.Metadata()
    child = parent.new_child()
    child['shadowed'] = 'child'

    parent['late'] = 'parent'
    parent['shadowed'] = 'parent'

    assert child['late'] == 'parent'
    assert child['shadowed'] == 'child'


def test_absent_key() -> None:
    metadata = decometa.Metadata(decometa.Metadata())

    assert metadata.get('a') is None
    assert metadata.get('a', ...) is ...
    assert 'a' not in metadata
    with pytest.raises(KeyError):
        metadata['a']  # noqa


def test_none_value_is_present() -> None:
    metadata = decometa.Metadata()
    metadata['a'] = None

    assert 'a' in metadata
    assert metadata.get('a', 'absent') is None


def test_delete_only_touches_own_entries() -> None:
    parent = decometa.Metadata()
    parent['a'] = 'x'
    child = parent.new_child()

    with pytest.raises(KeyError):
        del child['a']

    child['a'] = 'z'
    del child['a']

    assert child['a'] == 'x'
    assert parent['a'] == 'x'


def test_iteration_covers_inherited_keys_once() -> None:
    parent = decometa.Metadata()
    parent['a'] = 1
    parent['b'] = 2
    child = parent.new_child()
    child['b'] = 3
    child['c'] = 4

    assert sorted(child) == ['a', 'b', 'c']
    assert len(child) == 3
    assert dict(child) == {'a': 1, 'b': 3, 'c': 4}
    assert set(child.own_keys()) == {'b', 'c'}


def test_own_is_read_only() -> None:
    metadata = decometa.Metadata()

    with pytest.raises(TypeError):
        metadata.own()['a'] = 1  # noqa


def test_ancestors() -> None:
    root = decometa.Metadata()
    middle = root.new_child()
    leaf = middle.new_child()

    assert leaf.parent is middle
    assert list(leaf.ancestors()) == [middle, root]
    assert root.parent is None
    assert list(root.ancestors()) == []


def test_identity_equality() -> None:
    a, b = decometa.Metadata(), decometa.Metadata()

    assert a != b
    assert a == a
    assert len({a: 'a', b: 'b'}) == 2


def test_symbol_keys_are_distinct() -> None:
    a, b = decometa.Symbol('key'), decometa.Symbol('key')
    metadata = decometa.Metadata()
    metadata[a] = 'a'

    assert a != b
    assert metadata[a] == 'a'
    assert b not in metadata
    assert repr(a) == "Symbol('key')"


def test_parent_must_be_metadata() -> None:
    with pytest.raises(AssertionError):
        decometa.Metadata({'a': 1})  # noqa
