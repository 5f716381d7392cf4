import pytest

from kformat.structs.dicts import remove


def test_existing_key():
    d = {'abc': {'def': {'hij': 'val', 'hello': 'world'}}}
    remove(d, ['abc', 'def', 'hij'])
    assert d == {'abc': {'def': {'hello': 'world'}}}


def test_toplevel_key():
    d = {'abc': {'def': 'val'}, 'hello': 'world'}
    remove(d, 'abc')
    assert d == {'hello': 'world'}


def test_unexisting_key_in_existing_dict():
    d = {'abc': {'def': {'hello': 'world'}}}
    remove(d, ['abc', 'def', 'hij'])
    assert d == {'abc': {'def': {'hello': 'world'}}}


def test_unexisting_key_in_unexisting_dict():
    d = {}
    remove(d, ['abc', 'def', 'hij'])
    assert d == {}


def test_empty_parents_are_kept():
    d = {'abc': {'def': {'hij': 'val'}}}
    remove(d, ['abc', 'def', 'hij'])
    assert d == {'abc': {'def': {}}}


def test_nonmapping_key_is_ignored():
    d = {'key': 'val'}
    remove(d, ['key', 'sub'])
    assert d == {'key': 'val'}


@pytest.mark.parametrize('field', [None, '', [], ()])
def test_empty_path_is_ignored(field):
    d = {'key': 'val'}
    remove(d, field)
    assert d == {'key': 'val'}
