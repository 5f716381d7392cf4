"""
Some basic dicts and field-in-a-dict manipulation helpers.

All functions here operate on the raw tree-shaped bodies as decoded from JSON:
nested mappings with scalars or lists as the leaves. Lists are never entered:
a path segment can address only a key of a mapping.
"""
import collections.abc
import enum
from typing import Any, Generic, Iterable, Iterator, List, Mapping, MutableMapping, \
                   Optional, Tuple, TypeVar, Union

FieldPath = Tuple[str, ...]
FieldSpec = Union[None, str, FieldPath, List[str]]

_T = TypeVar('_T')
_K = TypeVar('_K')
_V = TypeVar('_V')


class _UNSET(enum.Enum):
    token = enum.auto()


def parse_field(
        field: FieldSpec,
) -> FieldPath:
    """
    Convert any field into a tuple of nested sub-fields.

    Supported notations:

    * ``None`` (for root of a dict).
    * ``"field.subfield"``
    * ``("field", "subfield")``
    * ``["field", "subfield"]``
    """
    if field is None:
        return tuple()
    elif isinstance(field, str):
        return tuple(field.split('.')) if field else tuple()
    elif isinstance(field, (list, tuple)):
        return tuple(field)
    else:
        raise ValueError(f"Field must be either a str, or a list/tuple. Got {field!r}")


def parse_fields(
        fields: Optional[Iterable[FieldSpec]],
) -> List[FieldPath]:
    """ Parse several fields at once, skipping the empty ones (the roots). """
    paths = [parse_field(field) for field in (fields if fields is not None else [])]
    return [path for path in paths if path]


def resolve(
        d: Optional[Mapping[Any, Any]],
        field: FieldSpec,
        default: Union[_T, _UNSET] = _UNSET.token,
) -> Union[Any, _T]:
    """
    Retrieve a nested sub-field from a dict.

    If ``default`` is provided, then all non-existent and non-mapping values
    are assumed to be empty dictionaries, and ``default`` is returned.

    Otherwise (with no default), attempts to get the inexistent keys will
    raise either a ``TypeError`` or ``KeyError``:

    * ``KeyError`` for actual absence of keys while the structures are correct.
    * ``TypeError`` for attempting to get a key for a non-dictionary:
      e.g. ``None['key']``, ``"string"['key']``, ``123['key']``, etc.
    """
    path = parse_field(field)
    try:
        result = d
        for key in path:
            if isinstance(result, collections.abc.Mapping):
                result = result[key]
            elif not isinstance(default, _UNSET):
                return default
            else:
                raise TypeError(f"The structure is not a dict with field {key!r}: {result!r}")
        return result
    except KeyError:
        if not isinstance(default, _UNSET):
            return default
        raise


def ensure(
        d: MutableMapping[Any, Any],
        field: FieldSpec,
        value: Any,
) -> None:
    """
    Force-set a nested sub-field in a dict.

    If some levels of parents are missing, they are created as empty dicts
    (this what makes it "ensuring", not just "setting").
    """
    result = d
    path = parse_field(field)
    if not path:
        raise ValueError("Setting a root of a dict is impossible. Provide the specific fields.")
    for key in path[:-1]:
        try:
            result = result[key]
        except KeyError:
            result = result.setdefault(key, {})
    result[path[-1]] = value


def locate(
        d: Mapping[Any, Any],
        field: FieldSpec,
) -> Tuple[MutableMapping[Any, Any], Any]:
    """
    Find the direct parent of a nested sub-field and the sub-field's own key.

    The parent and all the intermediate values must be mappings, and the key
    must exist in the parent. Otherwise, a ``KeyError`` or a ``TypeError``
    is raised the same way as in `resolve`.
    """
    path = parse_field(field)
    if not path:
        raise ValueError("Locating a root of a dict is impossible. Provide a specific field.")
    parent = resolve(d, path[:-1])
    if not isinstance(parent, collections.abc.MutableMapping):
        raise TypeError(f"The structure is not a dict with field {path[-1]!r}: {parent!r}")
    if path[-1] not in parent:
        raise KeyError(path[-1])
    return parent, path[-1]


def remove(
        d: MutableMapping[Any, Any],
        field: FieldSpec,
) -> None:
    """
    Remove a nested sub-field from a dict, keeping its parents as they are.

    If the target key is absent already, or any of the intermediate parents
    is absent or is not a mapping, nothing happens: the goal of deletion
    is achieved anyway. Parents that become empty are not removed.
    The root (an empty path) is never removed.
    """
    if not parse_field(field):
        return
    try:
        parent, key = locate(d, field)
    except (KeyError, TypeError):
        pass
    else:
        del parent[key]


def cherrypick(
        src: Mapping[Any, Any],
        dst: MutableMapping[Any, Any],
        fields: Optional[Iterable[FieldSpec]],
) -> None:
    """
    Copy all specified fields between dicts (from src to dst).

    The fields that are absent in the source, or that cannot be reached
    through non-mapping intermediate values, are silently skipped.
    """
    fields = fields if fields is not None else []
    for field in fields:
        try:
            value = resolve(src, field)
        except (KeyError, TypeError):
            pass  # absent in the source, nothing to merge
        else:
            ensure(dst, field, value)


class MappingView(Mapping[_K, _V], Generic[_K, _V]):
    """
    A lazy resolver for the "on-demand" dict keys.

    This is needed to have e.g. ``metadata`` to be *assumed* as a dict,
    even if it is actually not present or is not a dict at all.
    And to prevent its implicit creation with ``.setdefault('metadata', {})``,
    which produces unwanted side-effects (actually adds this field).

    >>> body = {}
    >>> meta = MappingView(body, 'metadata')
    >>> meta.get('name', 'default')
    ... 'default'
    >>> body['metadata'] = {'name': 'value'}
    >>> meta.get('name', 'default')
    ... 'value'
    """
    _src: Mapping[_K, _V]

    def __init__(self, __src: Mapping[Any, Any], __path: FieldSpec = None) -> None:
        super().__init__()
        self._src = __src
        self._path = parse_field(__path)

    def __repr__(self) -> str:
        return repr(dict(self))

    def __len__(self) -> int:
        return len(self._resolved())

    def __iter__(self) -> Iterator[Any]:
        return iter(self._resolved())

    def __getitem__(self, item: _K) -> _V:
        return self._resolved()[item]

    def _resolved(self) -> Mapping[Any, Any]:
        value = resolve(self._src, self._path, {})
        return value if isinstance(value, collections.abc.Mapping) else {}
