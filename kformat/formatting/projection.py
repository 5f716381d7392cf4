"""
Projection of the object's fields as requested by the callers.

There are three directives, applied in this order:

* ``include``: keep only the specified fields (with their ancestors).
* ``exclude``: remove the specified fields.
* ``excludeValues``: keep the specified fields, but blank their values.

All fields are dot-separated paths, e.g. ``metadata.annotations``.
The paths that do not resolve in the tree (absent keys, or non-mapping values
in the middle) are ignored: the invalid paths never cause errors.
"""
import collections.abc
from typing import Any, Iterable, Mapping, MutableMapping, Optional

from kformat.structs import bodies, dicts, requests


def include(
        fields: Iterable[dicts.FieldSpec],
        tree: Mapping[str, Any],
) -> MutableMapping[str, Any]:
    """
    Build a new tree with only the specified fields of the original tree.

    If none of the fields is present in the tree, the result is empty.
    The values are not copied: the new tree shares them with the original.
    """
    result: MutableMapping[str, Any] = {}
    dicts.cherrypick(tree, result, dicts.parse_fields(fields))
    return result


def exclude(
        fields: Iterable[dicts.FieldSpec],
        tree: MutableMapping[str, Any],
) -> None:
    """
    Remove the specified fields from the tree, in place.
    """
    for path in dicts.parse_fields(fields):
        dicts.remove(tree, path)


def exclude_values(
        fields: Iterable[dicts.FieldSpec],
        tree: MutableMapping[str, Any],
) -> None:
    """
    Blank the values of the specified fields in the tree, in place.

    The scalars and lists become empty strings. For mappings, the keys and
    the nested structure are preserved, while all their values are blanked.
    """
    for path in dicts.parse_fields(fields):
        try:
            parent, key = dicts.locate(tree, path)
        except (KeyError, TypeError):
            continue
        parent[key] = _blank(parent[key])


def project(
        directives: requests.Directives,
        tree: MutableMapping[str, Any],
) -> None:
    """
    Apply all projection directives to the tree, in place.
    """
    if directives.include:
        bodies.replace_tree(tree, include(directives.include, tree))
    if directives.exclude:
        exclude(directives.exclude, tree)
    if directives.exclude_values:
        exclude_values(directives.exclude_values, tree)


def project_object(
        directives: requests.Directives,
        adapter: bodies.ObjectAdapter,
) -> bool:
    """
    Project the object if it is tree-convertible; skip it otherwise.
    """
    tree: Optional[MutableMapping[str, Any]] = adapter.tree
    if tree is None or not directives.projects:
        return False
    project(directives, tree)
    return True


def _blank(value: Any) -> Any:
    if isinstance(value, collections.abc.Mapping):
        return {key: _blank(val) for key, val in value.items()}
    else:
        return ''
